"""Domain models: column definitions, preference records and form definitions."""

from formgrid.models.column_definition import ColumnDefinition, ColumnType
from formgrid.models.form_definition import FormDefinition
from formgrid.models.preferences import PreferenceRecord, TablePreferences

__all__: list[str] = [
    "ColumnDefinition",
    "ColumnType",
    "FormDefinition",
    "PreferenceRecord",
    "TablePreferences",
]
