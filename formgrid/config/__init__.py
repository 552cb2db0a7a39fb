"""Module: formgrid.config

Date: 2026-10-19

Configuration package for formgrid.

This package organizes configuration into logical modules:
- app: Application info, debug flags, logging, config saving
- columns: Column defaults, width bounds, synthetic column templates

All settings are re-exported from this module:
    from formgrid.config import APP_NAME, DEFAULT_COLUMN_WIDTH
"""

from formgrid.config.app import *  # noqa: F401, F403
from formgrid.config.columns import *  # noqa: F401, F403
