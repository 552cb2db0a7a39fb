"""Module: preferences.py

Date: 2026-10-19

Stored per-column display preferences and the per-table preference bundle.
"""

import math
from dataclasses import asdict, dataclass, field
from typing import Any

from formgrid.config import DEFAULT_COLUMN_WIDTH, MAX_COLUMN_WIDTH, MIN_COLUMN_WIDTH

# Keys a partial preference update may carry
PREFERENCE_FIELDS = ("visible", "pinned", "wrapped", "order")


def clamp_column_width(size: float) -> int:
    """Clamp a pixel width to the allowed column range (non-finite widths use the default)."""
    if not math.isfinite(size):
        return DEFAULT_COLUMN_WIDTH
    return int(round(min(max(size, MIN_COLUMN_WIDTH), MAX_COLUMN_WIDTH)))


@dataclass(slots=True)
class PreferenceRecord:
    """Display preferences of one column. ``None`` means "not set"."""

    visible: bool | None = None
    pinned: str | None = None
    wrapped: bool | None = None
    order: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "PreferenceRecord":
        """Build a record from stored JSON, ignoring unknown keys."""
        if not isinstance(data, dict):
            return cls()
        pinned = data.get("pinned")
        return cls(
            visible=data.get("visible"),
            pinned=pinned if pinned == "left" else None,
            wrapped=data.get("wrapped"),
            order=data.get("order"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize only the fields that are set."""
        return {key: value for key, value in asdict(self).items() if value is not None}

    def is_empty(self) -> bool:
        return not self.to_dict()


@dataclass
class TablePreferences:
    """All stored preferences of one table."""

    columns: dict[str, PreferenceRecord] = field(default_factory=dict)
    global_sizing: dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "TablePreferences":
        if not isinstance(data, dict):
            return cls()
        raw_columns = data.get("columns") or {}
        raw_sizing = data.get("globalSizing") or {}
        columns = (
            {key: PreferenceRecord.from_dict(value) for key, value in raw_columns.items()}
            if isinstance(raw_columns, dict)
            else {}
        )
        sizing = (
            {
                key: clamp_column_width(value)
                for key, value in raw_sizing.items()
                if isinstance(value, int | float)
            }
            if isinstance(raw_sizing, dict)
            else {}
        )
        return cls(columns=columns, global_sizing=sizing)

    def to_dict(self) -> dict[str, Any]:
        return {
            "columns": {
                key: record.to_dict()
                for key, record in self.columns.items()
                if not record.is_empty()
            },
            "globalSizing": dict(self.global_sizing),
        }

    def get(self, column_id: str) -> PreferenceRecord:
        """Stored record for a column, or an empty one."""
        return self.columns.get(column_id) or PreferenceRecord()
