"""formgrid: column layout state for form submission tables.

Derives the columns of a form's submissions table and merges them with the
user's stored visibility, pinning, wrapping, sizing and ordering preferences.
"""

from formgrid.config import APP_VERSION as __version__
from formgrid.core.column_preferences import ColumnPreferenceStore
from formgrid.core.table_state import TableStateManager
from formgrid.models import ColumnDefinition, FormDefinition, PreferenceRecord, TablePreferences

__all__ = [
    "ColumnDefinition",
    "ColumnPreferenceStore",
    "FormDefinition",
    "PreferenceRecord",
    "TablePreferences",
    "TableStateManager",
    "__version__",
]
