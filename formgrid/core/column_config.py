"""Module: column_config.py

Date: 2026-10-19

Derives the base column list of a submissions table from a form definition.

The derivation never raises: a malformed form (missing or non-list
``properties``, fields that are not mappings, fields without an id) is
logged and yields an empty list, so the table renders empty instead of
breaking.
"""

from typing import Any

from formgrid.config import (
    CREATED_AT_COLUMN_ID,
    NON_DATA_FIELD_TYPES,
    SYNTHETIC_COLUMN_CONFIG,
)
from formgrid.models.column_definition import ColumnDefinition, ColumnType
from formgrid.models.form_definition import FormDefinition
from formgrid.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

# Field attributes mapped onto dedicated ColumnDefinition slots
_RESERVED_FIELD_KEYS = frozenset({"id", "name", "type", "columns"})


def build_synthetic_column(column_id: str) -> ColumnDefinition:
    """Create one of the synthetic columns (created_at, status, actions)."""
    cfg = SYNTHETIC_COLUMN_CONFIG[column_id]
    column = ColumnDefinition(
        id=column_id,
        header=cfg["header"],
        type=cfg["type"],
        enable_resizing=cfg.get("enable_resizing", True),
        size=cfg.get("size"),
        enable_column_filter=cfg.get("enable_column_filter", False),
        filter_fn=cfg.get("filter_fn"),
        meta=dict(cfg.get("meta", {})),
    )
    return column


def field_to_column(field: dict[str, Any], removed: bool = False) -> ColumnDefinition:
    """Convert one form field into a column.

    A matrix field's ``columns`` attribute becomes ``matrix_columns`` so it
    cannot be mistaken for table column metadata; other field types drop it.

    Raises:
        TypeError: if the field is not a mapping
        KeyError: if the field has no id
    """
    if not isinstance(field, dict):
        raise TypeError(f"Form field must be a mapping, got {type(field).__name__}")

    column_id = field["id"]
    field_type = field.get("type") or ColumnType.TEXT.value
    extra = {key: value for key, value in field.items() if key not in _RESERVED_FIELD_KEYS}

    return ColumnDefinition(
        id=column_id,
        header=field.get("name") or column_id,
        type=field_type,
        removed=removed,
        matrix_columns=field.get("columns") if field_type == ColumnType.MATRIX.value else None,
        extra=extra,
    )


def _drop_duplicate_ids(
    columns: list[ColumnDefinition], table_key: str
) -> list[ColumnDefinition]:
    """Keep the first column for each id."""
    seen: set[str] = set()
    unique = []
    for column in columns:
        if column.id in seen:
            logger.warning(
                "[ColumnConfig] Skipping duplicate column '%s' in form %s", column.id, table_key
            )
            continue
        seen.add(column.id)
        unique.append(column)
    return unique


def derive_column_configurations(form: FormDefinition | None) -> list[ColumnDefinition]:
    """Build the base column list for a form.

    Order: data fields as they appear in the form, then removed fields
    (flagged ``removed``), then ``created_at`` unless a field already uses
    that id. Layout-only blocks are skipped, and a field reusing an id seen
    earlier is dropped.

    Returns:
        The derived columns, or an empty list for malformed input.
    """
    if form is None:
        return []

    try:
        properties = form.properties
        if not isinstance(properties, list):
            if properties is not None:
                logger.warning(
                    "[ColumnConfig] Ignoring non-list properties for form %s",
                    form.table_key,
                )
            return []

        columns = [
            field_to_column(field)
            for field in properties
            if not (isinstance(field, dict) and field.get("type") in NON_DATA_FIELD_TYPES)
        ]

        removed_properties = form.removed_properties or []
        if not isinstance(removed_properties, list):
            raise TypeError(
                f"removed_properties must be a list, got {type(removed_properties).__name__}"
            )
        columns.extend(field_to_column(field, removed=True) for field in removed_properties)
        columns = _drop_duplicate_ids(columns, form.table_key)

        if not any(column.id == CREATED_AT_COLUMN_ID for column in columns):
            columns.append(build_synthetic_column(CREATED_AT_COLUMN_ID))

        return columns

    except Exception as e:
        logger.error(
            "[ColumnConfig] Error deriving columns for form %s: %s",
            form.table_key,
            e,
        )
        return []
