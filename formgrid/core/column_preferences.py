"""Module: column_preferences.py

Date: 2026-10-19

Per-table column preference storage.

One ColumnPreferenceStore exists per table key (form id or slug). Records are
kept in memory and mirrored into the ``table_preferences`` category of the
JSON configuration manager, which persists them with a debounced auto-save.
"""

import contextlib
import copy
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from formgrid.config import USER_PIN_SIDES
from formgrid.core.pyqt_imports import QObject, pyqtSignal
from formgrid.models.preferences import (
    PREFERENCE_FIELDS,
    PreferenceRecord,
    TablePreferences,
    clamp_column_width,
)
from formgrid.utils.logging.logger_factory import get_cached_logger
from formgrid.utils.shared.json_config_manager import (
    JSONConfigManager,
    TablePreferencesConfig,
    get_app_config_manager,
)

logger = get_cached_logger(__name__)


def _normalize_preference_value(key: str, value: Any) -> Any:
    if value is None:
        return None
    if key == "pinned":
        if value is False:
            return None
        if value not in USER_PIN_SIDES:
            raise ValueError(f"Invalid pin side {value!r}; only 'left' can be chosen")
        return value
    if key == "order":
        return int(value)
    return bool(value)


class ColumnPreferenceStore(QObject):
    """Column preferences of a single table.

    Signals:
        preferences_changed: Emitted with the table key after every mutation
            (once per batch when mutations are grouped with batch_update()).
    """

    preferences_changed = pyqtSignal(str)

    def __init__(
        self,
        table_key: str,
        config_manager: JSONConfigManager | None = None,
        parent: QObject | None = None,
    ):
        """Load stored preferences for ``table_key``.

        Args:
            table_key: Identity of the table (form id or slug)
            config_manager: Persistence backend (global manager when None)
            parent: Optional Qt parent
        """
        super().__init__(parent)
        self._table_key = str(table_key)
        self._config_manager = config_manager or get_app_config_manager()
        self._category = self._config_manager.get_category("table_preferences")
        if self._category is None:
            self._category = TablePreferencesConfig()
            self._config_manager.register_category(self._category)

        self._preferences = TablePreferences.from_dict(self._category.get(self._table_key))
        self._batch_depth = 0
        self._batch_dirty = False
        self._disposed = False

        logger.debug(
            "[ColumnPreferenceStore] Opened '%s' with %d stored columns",
            self._table_key,
            len(self._preferences.columns),
            extra={"dev_only": True},
        )

    @property
    def table_key(self) -> str:
        return self._table_key

    @property
    def preferences(self) -> TablePreferences:
        """Snapshot of all stored preferences (a copy)."""
        return copy.deepcopy(self._preferences)

    def get_column_preference(self, column_id: str) -> PreferenceRecord:
        """Stored preference of a column (empty record when nothing is stored)."""
        return copy.copy(self._preferences.get(column_id))

    def set_column_preference(self, column_id: str, partial: Mapping[str, Any]) -> None:
        """Merge ``partial`` into the column's record, leaving other fields untouched.

        Raises:
            ValueError: on unknown keys or a pin side other than 'left'
        """
        unknown = set(partial) - set(PREFERENCE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown preference fields: {sorted(unknown)}")

        normalized = {key: _normalize_preference_value(key, value) for key, value in partial.items()}
        record = self._preferences.columns.get(column_id) or PreferenceRecord()
        for key, value in normalized.items():
            setattr(record, key, value)
        self._preferences.columns[column_id] = record
        self._commit()

    def set_column_sizing(self, sizing: Mapping[str, float]) -> None:
        """Replace the table-wide sizing mapping (widths are clamped)."""
        self._preferences.global_sizing = {
            column_id: clamp_column_width(width) for column_id, width in sizing.items()
        }
        self._commit()

    def set_columns_order(self, column_ids: Iterable[str]) -> None:
        """Give each listed column its position as order rank."""
        with self.batch_update():
            for index, column_id in enumerate(column_ids):
                self.set_column_preference(column_id, {"order": index})

    def toggle_column_wrap(self, column_id: str) -> None:
        wrapped = bool(self._preferences.get(column_id).wrapped)
        self.set_column_preference(column_id, {"wrapped": not wrapped})

    def reset_column(self, column_id: str) -> None:
        """Forget everything stored for one column, including its width."""
        self._preferences.columns.pop(column_id, None)
        self._preferences.global_sizing.pop(column_id, None)
        self._commit()

    def reset_preferences(self) -> None:
        """Forget every stored preference of this table."""
        self._preferences = TablePreferences()
        self._commit()
        logger.info("[ColumnPreferenceStore] Reset preferences for '%s'", self._table_key)

    @contextlib.contextmanager
    def batch_update(self) -> Iterator["ColumnPreferenceStore"]:
        """Group several mutations into one persisted update and one signal."""
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0 and self._batch_dirty:
                self._batch_dirty = False
                self._commit()

    def _commit(self) -> None:
        if self._batch_depth:
            self._batch_dirty = True
            return

        data = self._preferences.to_dict()
        if data["columns"] or data["globalSizing"]:
            self._category.set(self._table_key, data)
        else:
            self._category.remove(self._table_key)
        self._config_manager.mark_dirty()
        self.preferences_changed.emit(self._table_key)

    def dispose(self) -> None:
        """Persist pending changes; called when the table goes away."""
        if self._disposed:
            return
        self._disposed = True
        self._config_manager.save_immediate(force=False)
        logger.debug(
            "[ColumnPreferenceStore] Disposed '%s'", self._table_key, extra={"dev_only": True}
        )
