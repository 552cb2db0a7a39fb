"""Module: formgrid.config.app

Date: 2026-10-19

Application-level configuration: app info, debug flags, logging settings.
"""

# =====================================
# DEBUG SETTINGS
# =====================================

# Config reset - if True, deletes config.json on load
DEBUG_RESET_CONFIG = False

# =====================================
# APPLICATION INFORMATION
# =====================================

APP_NAME = "formgrid"
APP_VERSION = "0.4"

# =====================================
# LOGGING CONFIGURATION
# =====================================

# Console logging
LOG_TO_CONSOLE = True
LOG_CONSOLE_LEVEL = "WARNING"

# File logging
LOG_TO_FILE = True
LOG_FILE_LEVEL = "INFO"
LOG_FILE_MAX_BYTES = 5_000_000  # 5MB per file
LOG_FILE_BACKUP_COUNT = 3

# Debug file logging
LOG_DEBUG_FILE_ENABLED = False
LOG_DEBUG_FILE_LEVEL = "DEBUG"
LOG_DEBUG_FILE_MAX_BYTES = 10_000_000
LOG_DEBUG_FILE_BACKUP_COUNT = 2

# Development logging settings
SHOW_DEV_ONLY_IN_CONSOLE = False

# =====================================
# CONFIG SAVE OPTIMIZATION
# =====================================

CONFIG_AUTO_SAVE_ENABLED = True
CONFIG_AUTO_SAVE_DELAY = 5  # seconds
CONFIG_FILE_NAME = "config.json"
