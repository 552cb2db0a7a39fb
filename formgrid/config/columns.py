"""Module: formgrid.config.columns

Date: 2026-10-19

Column configuration for form submission tables: width bounds, ordering
sentinel, excluded field types and the templates of synthetic columns.
"""

# =====================================
# FIELD FILTERING
# =====================================

# Layout-only blocks that never hold submission data
NON_DATA_FIELD_TYPES = frozenset(
    {
        "nf-text",
        "nf-code",
        "nf-page-break",
        "nf-divider",
        "nf-image",
    }
)

# =====================================
# COLUMN SIZING
# =====================================

MIN_COLUMN_WIDTH = 80
MAX_COLUMN_WIDTH = 700
DEFAULT_COLUMN_WIDTH = 200
ACTIONS_COLUMN_WIDTH = 80

# Resize bounds advertised to the table widget for data columns
DATA_COLUMN_MIN_SIZE = 100
DATA_COLUMN_MAX_SIZE = 500

# Debounce window for persisting resize changes (milliseconds)
COLUMN_RESIZE_SAVE_DELAY = 50

# =====================================
# COLUMN ORDERING
# =====================================

# Rank given to columns without an order preference (and to hidden columns
# after a reorder)
UNORDERED_COLUMN_RANK = 9999

# =====================================
# SYNTHETIC COLUMNS
# =====================================

CREATED_AT_COLUMN_ID = "created_at"
STATUS_COLUMN_ID = "status"
ACTIONS_COLUMN_ID = "actions"

SYNTHETIC_COLUMN_CONFIG = {
    CREATED_AT_COLUMN_ID: {
        "header": "Created at",
        "type": "date",
        "enable_resizing": True,
    },
    STATUS_COLUMN_ID: {
        "header": "Status",
        "type": "status",
        "enable_resizing": True,
        "enable_column_filter": True,
        "filter_fn": "equals",
    },
    ACTIONS_COLUMN_ID: {
        "header": "",
        "type": "action",
        "enable_resizing": False,
        "size": ACTIONS_COLUMN_WIDTH,
        "meta": {
            "class": {
                "th": "bg-transparent",
                "td": "backdrop-blur-xs bg-white/70",
            }
        },
    },
}

# Pin sides a user may choose; the right edge belongs to the actions column
USER_PIN_SIDES = ("left",)
