"""Module: table_state.py

Date: 2026-10-19

Table state for a form's submissions table.

TableStateManager merges the columns derived from a form definition with
the user's stored column preferences and exposes the views a table widget
needs: ordered columns, visibility, pinning, sizing and wrapping. Every
mutation goes through the preference store; the form definition itself is
never modified.

Views are recomputed on every read. The only state the manager holds is the
in-memory sizing produced by an interactive resize, kept until the
debounced write reaches the store.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from formgrid.config import (
    ACTIONS_COLUMN_ID,
    ACTIONS_COLUMN_WIDTH,
    COLUMN_RESIZE_SAVE_DELAY,
    DEFAULT_COLUMN_WIDTH,
    STATUS_COLUMN_ID,
    UNORDERED_COLUMN_RANK,
)
from formgrid.core.column_config import build_synthetic_column, derive_column_configurations
from formgrid.core.column_preferences import ColumnPreferenceStore, clamp_column_width
from formgrid.core.pyqt_imports import QCoreApplication, QObject, pyqtSignal
from formgrid.models.column_definition import ColumnDefinition
from formgrid.models.form_definition import FormDefinition
from formgrid.models.preferences import PreferenceRecord
from formgrid.utils.logging.logger_factory import get_cached_logger
from formgrid.utils.shared.timer_manager import cancel_timer, schedule_resize_save

logger = get_cached_logger(__name__)


def _resolve_visible(record: PreferenceRecord, column: ColumnDefinition | None) -> bool:
    """Stored visibility, else visible unless the field was removed from the form."""
    if record.visible is not None:
        return record.visible
    return not (column is not None and column.removed)


def _order_rank(record: PreferenceRecord) -> int:
    return record.order if record.order is not None else UNORDERED_COLUMN_RANK


def _rank_by_position(column_ids: Sequence[str]) -> dict[str, int]:
    ranks: dict[str, int] = {}
    for index, column_id in enumerate(column_ids):
        ranks.setdefault(column_id, index)
    return ranks


class TableStateManager(QObject):
    """Column layout state of one submissions table.

    Created when the table is shown and disposed when it goes away. When no
    store is supplied the manager opens (and later disposes) one for the
    form's table key.

    Signals:
        sizing_changed: Emitted with the full sizing mapping on every resize
        columns_changed: Emitted whenever stored preferences change
    """

    sizing_changed = pyqtSignal(dict)
    columns_changed = pyqtSignal()

    def __init__(
        self,
        form: FormDefinition,
        store: ColumnPreferenceStore | None = None,
        with_actions: bool = False,
        interactive: bool | None = None,
        parent: QObject | None = None,
    ):
        """Initialize the table state.

        Args:
            form: Form whose submissions the table shows
            store: Preference store for the table (opened from form.table_key when None)
            with_actions: Append the row actions column (interactive contexts only)
            interactive: Force interactivity; None means "a Qt application is running"
            parent: Optional Qt parent
        """
        super().__init__(parent)
        self._form = form
        self._owns_store = store is None
        self._store = store if store is not None else ColumnPreferenceStore(form.table_key)
        self._with_actions = with_actions
        self._interactive = interactive

        self._pending_sizing: dict[str, int] | None = None
        self._resize_timer_id = f"column_sizing_{form.table_key}_{id(self)}"
        self._disposed = False

        self._store.preferences_changed.connect(self._on_preferences_changed)

    # -------------------------------------------------------------------------
    # Inputs
    # -------------------------------------------------------------------------

    @property
    def form(self) -> FormDefinition:
        return self._form

    @form.setter
    def form(self, form: FormDefinition) -> None:
        """Swap in an updated definition of the same form."""
        if form.table_key != self._form.table_key:
            raise ValueError(
                f"Table state for '{self._form.table_key}' cannot show form '{form.table_key}'"
            )
        self._form = form
        self.columns_changed.emit()

    @property
    def store(self) -> ColumnPreferenceStore:
        return self._store

    @property
    def is_interactive(self) -> bool:
        if self._interactive is not None:
            return self._interactive
        return QCoreApplication.instance() is not None

    # -------------------------------------------------------------------------
    # Column configuration
    # -------------------------------------------------------------------------

    @property
    def column_configurations(self) -> list[ColumnDefinition]:
        """Base columns of the form, before preferences are applied."""
        return derive_column_configurations(self._form)

    # -------------------------------------------------------------------------
    # Visibility
    # -------------------------------------------------------------------------

    @property
    def column_visibility(self) -> dict[str, bool]:
        prefs = self._store.preferences
        return {
            column.id: _resolve_visible(prefs.get(column.id), column)
            for column in self.column_configurations
        }

    @column_visibility.setter
    def column_visibility(self, visibility: Mapping[str, bool]) -> None:
        """Store the entries of ``visibility`` that differ from the current state."""
        configs = {column.id: column for column in self.column_configurations}
        with self._store.batch_update():
            for column_id, visible in visibility.items():
                current = _resolve_visible(
                    self._store.get_column_preference(column_id), configs.get(column_id)
                )
                if current != visible:
                    self._store.set_column_preference(column_id, {"visible": visible})

    def toggle_column_visibility(self, column_id: str) -> None:
        visibility = self.column_visibility
        self.column_visibility = {**visibility, column_id: not visibility.get(column_id)}

    # -------------------------------------------------------------------------
    # Pinning
    # -------------------------------------------------------------------------

    @property
    def column_pinning(self) -> dict[str, list[str]]:
        """Left-pinned columns in derivation order; the actions column is always pinned right."""
        prefs = self._store.preferences
        left = [
            column.id
            for column in self.column_configurations
            if prefs.get(column.id).pinned == "left"
        ]
        return {"left": left, "right": [ACTIONS_COLUMN_ID]}

    @column_pinning.setter
    def column_pinning(self, pinning: Mapping[str, Sequence[str]] | None) -> None:
        left = (pinning or {}).get("left") or []
        with self._store.batch_update():
            for column in self.column_configurations:
                if column.id != ACTIONS_COLUMN_ID:
                    self._store.set_column_preference(column.id, {"pinned": None})
            for column_id in left:
                if column_id != ACTIONS_COLUMN_ID:
                    self._store.set_column_preference(column_id, {"pinned": "left"})

    def toggle_column_pin(self, column_id: str) -> None:
        """Pin a column to the left edge, or unpin it if it is pinned.

        Only one column is pinned at a time; pinning also makes the column visible.
        """
        if column_id == ACTIONS_COLUMN_ID:
            logger.debug("[TableState] Ignoring pin toggle for the actions column")
            return

        if self._store.get_column_preference(column_id).pinned == "left":
            self._store.set_column_preference(column_id, {"pinned": None})
            return

        with self._store.batch_update():
            for column in self.column_configurations:
                if column.id not in (ACTIONS_COLUMN_ID, column_id):
                    self._store.set_column_preference(column.id, {"pinned": None})
            self._store.set_column_preference(column_id, {"pinned": "left", "visible": True})

    # -------------------------------------------------------------------------
    # Wrapping
    # -------------------------------------------------------------------------

    @property
    def column_wrapping(self) -> dict[str, bool]:
        prefs = self._store.preferences
        return {
            column.id: bool(prefs.get(column.id).wrapped) for column in self.column_configurations
        }

    def toggle_column_wrapping(self, column_id: str) -> None:
        wrapped = self.column_wrapping.get(column_id, False)
        self._store.set_column_preference(column_id, {"wrapped": not wrapped})

    # -------------------------------------------------------------------------
    # Ordering
    # -------------------------------------------------------------------------

    @property
    def ordered_columns(self) -> list[ColumnDefinition]:
        """Base columns sorted by stored order rank.

        Columns without a rank sort last; equal ranks keep derivation order.
        """
        try:
            prefs = self._store.preferences
            return sorted(
                self.column_configurations,
                key=lambda column: _order_rank(prefs.get(column.id)),
            )
        except Exception as e:
            logger.error("[TableState] Error ordering columns: %s", e)
            return []

    @ordered_columns.setter
    def ordered_columns(self, columns: Sequence[ColumnDefinition | str]) -> None:
        """Rank every column by its position in ``columns``; absent columns go last."""
        ids = [column if isinstance(column, str) else column.id for column in columns]
        self._apply_ranks(_rank_by_position(ids))

    def set_column_order(self, column_id: str, new_index: int) -> None:
        """Move a column to ``new_index`` among the visible columns.

        Visible columns are re-ranked by their new position; hidden columns
        get the unordered rank, so they reappear at the end once shown.
        """
        try:
            visibility = self.column_visibility
            visible_ids = [
                column.id
                for column in self.ordered_columns
                if visibility.get(column.id) is not False
            ]
            if column_id in visible_ids:
                visible_ids.remove(column_id)
            visible_ids.insert(new_index, column_id)

            self._apply_ranks(_rank_by_position(visible_ids))
        except Exception as e:
            logger.error("[TableState] Error in set_column_order(%s, %s): %s", column_id, new_index, e)

    def _apply_ranks(self, ranks: Mapping[str, int]) -> None:
        with self._store.batch_update():
            for column in self.column_configurations:
                rank = ranks.get(column.id, UNORDERED_COLUMN_RANK)
                self._store.set_column_preference(column.id, {"order": rank})

    # -------------------------------------------------------------------------
    # Table columns
    # -------------------------------------------------------------------------

    @property
    def table_columns(self) -> list[ColumnDefinition]:
        """Final column list for the table widget, synthetic columns included."""
        try:
            columns = list(self.ordered_columns)
            synthetic_ids = []
            if self._form.is_pro and self._form.enable_partial_submissions:
                synthetic_ids.append(STATUS_COLUMN_ID)
            if self.is_interactive and self._with_actions:
                synthetic_ids.append(ACTIONS_COLUMN_ID)

            for column_id in synthetic_ids:
                if any(column.id == column_id for column in columns):
                    # a form field already owns the id; it keeps its place
                    logger.warning(
                        "[TableState] Form %s has a field with reserved id '%s'",
                        self._form.table_key,
                        column_id,
                    )
                    continue
                columns.append(build_synthetic_column(column_id))

            return columns
        except Exception as e:
            logger.error("[TableState] Error building table columns: %s", e)
            return []

    # -------------------------------------------------------------------------
    # Sizing
    # -------------------------------------------------------------------------

    @property
    def column_sizing(self) -> dict[str, int]:
        """Width of every table column in pixels."""
        if self._pending_sizing is not None:
            return dict(self._pending_sizing)

        saved = self._store.preferences.global_sizing
        columns = self.table_columns
        if saved:
            return {column.id: saved.get(column.id, DEFAULT_COLUMN_WIDTH) for column in columns}

        return {
            column.id: ACTIONS_COLUMN_WIDTH if column.id == ACTIONS_COLUMN_ID else DEFAULT_COLUMN_WIDTH
            for column in columns
        }

    @column_sizing.setter
    def column_sizing(self, sizing: Mapping[str, float]) -> None:
        """Persist a full sizing mapping right away, dropping any pending resize."""
        self._cancel_pending_sizing()
        self._store.set_column_sizing(sizing)

    @property
    def has_pending_sizing(self) -> bool:
        return self._pending_sizing is not None

    def handle_column_resize(self, column_id: str, size: float) -> None:
        """Apply an interactive resize.

        The new width is visible through column_sizing immediately; the store
        receives the whole mapping once resizing pauses for the debounce delay.
        """
        new_sizing = {**self.column_sizing, column_id: clamp_column_width(size)}
        self._pending_sizing = new_sizing
        self.sizing_changed.emit(dict(new_sizing))

        schedule_resize_save(
            self._persist_pending_sizing,
            delay=COLUMN_RESIZE_SAVE_DELAY,
            timer_id=self._resize_timer_id,
        )

    def flush_pending_sizing(self) -> None:
        """Write a pending resize to the store without waiting for the timer."""
        cancel_timer(self._resize_timer_id)
        self._persist_pending_sizing()

    def _persist_pending_sizing(self) -> None:
        if self._pending_sizing is None:
            return
        sizing = self._pending_sizing
        self._store.set_column_sizing(sizing)
        self._pending_sizing = None
        logger.debug(
            "[TableState] Saved sizing for %d columns of '%s'",
            len(sizing),
            self._form.table_key,
            extra={"dev_only": True},
        )

    def _cancel_pending_sizing(self) -> None:
        cancel_timer(self._resize_timer_id)
        self._pending_sizing = None

    # -------------------------------------------------------------------------
    # Store pass-through
    # -------------------------------------------------------------------------

    def get_column_preference(self, column_id: str) -> PreferenceRecord:
        return self._store.get_column_preference(column_id)

    def set_column_preference(self, column_id: str, partial: Mapping[str, Any]) -> None:
        self._store.set_column_preference(column_id, partial)

    def toggle_column_wrap(self, column_id: str) -> None:
        self._store.toggle_column_wrap(column_id)

    def set_columns_order(self, column_ids: Sequence[str]) -> None:
        self._store.set_columns_order(column_ids)

    def reset_column(self, column_id: str) -> None:
        self._store.reset_column(column_id)

    def reset_preferences(self) -> None:
        self._cancel_pending_sizing()
        self._store.reset_preferences()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _on_preferences_changed(self, _table_key: str) -> None:
        self.columns_changed.emit()

    def dispose(self) -> None:
        """Flush pending work and release the store."""
        if self._disposed:
            return
        self._disposed = True

        self.flush_pending_sizing()
        self._store.preferences_changed.disconnect(self._on_preferences_changed)
        if self._owns_store:
            self._store.dispose()

        logger.debug("[TableState] Disposed '%s'", self._form.table_key, extra={"dev_only": True})
