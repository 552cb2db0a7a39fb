"""Module: column_definition.py

Date: 2026-10-19

Column definitions handed to the table widget. They are derived fresh from
the form definition on every read and carry no identity of their own.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from formgrid.config import DATA_COLUMN_MAX_SIZE, DATA_COLUMN_MIN_SIZE


class ColumnType(str, Enum):
    """Type tags with special handling. Other field types pass through as strings."""

    TEXT = "text"
    DATE = "date"
    STATUS = "status"
    MATRIX = "matrix"
    ACTION = "action"


@dataclass(slots=True)
class ColumnDefinition:
    """A single table column.

    ``extra`` holds every attribute of the originating form field that has no
    dedicated slot here (placeholder, options, ...), untouched.
    """

    id: str
    header: str
    type: str
    removed: bool = False
    enable_resizing: bool = True
    min_size: int = DATA_COLUMN_MIN_SIZE
    max_size: int = DATA_COLUMN_MAX_SIZE
    size: int | None = None
    matrix_columns: list[Any] | None = None
    enable_column_filter: bool = False
    filter_fn: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def accessor_key(self) -> str:
        """Key used to read the cell value from a submission row."""
        return self.id

    @property
    def is_matrix(self) -> bool:
        return self.type == ColumnType.MATRIX.value

    def to_dict(self) -> dict[str, Any]:
        """Flatten into the mapping shape consumed by table widgets."""
        data = dict(self.extra)
        data.update(
            {
                "id": self.id,
                "accessor_key": self.accessor_key,
                "header": self.header,
                "type": self.type,
                "removed": self.removed,
                "enable_resizing": self.enable_resizing,
                "min_size": self.min_size,
                "max_size": self.max_size,
            }
        )
        if self.size is not None:
            data["size"] = self.size
        if self.matrix_columns is not None:
            data["matrix_columns"] = list(self.matrix_columns)
        if self.enable_column_filter:
            data["enable_column_filter"] = True
            data["filter_fn"] = self.filter_fn
        if self.meta:
            data["meta"] = dict(self.meta)
        return data
