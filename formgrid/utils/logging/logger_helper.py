"""Module: logger_helper.py

Date: 2026-10-19

Helpers for retrieving named loggers in a consistent way.

Functions:
    get_logger(name): Returns a logger that propagates to the root handlers.
    safe_text(text): Replaces problematic Unicode characters with ASCII equivalents.

DevOnlyFilter:
    A logging filter that hides dev-only debug messages from the console,
    while still allowing them to be stored in file logs.
"""

import logging
import re

from formgrid.config import SHOW_DEV_ONLY_IN_CONSOLE

_REPLACEMENTS = {
    "→": "->",  # right arrow
    "—": "--",  # em dash
    "–": "-",  # en dash
    "…": "...",  # ellipsis
}
_REPLACEMENT_PATTERN = re.compile("|".join(map(re.escape, _REPLACEMENTS.keys())))


def safe_text(text: str) -> str:
    """Replace unsupported Unicode characters with ASCII-safe alternatives.

    Args:
        text (str): The original text containing Unicode symbols.

    Returns:
        str: A version of the text with replacements for problematic characters.
    """
    return _REPLACEMENT_PATTERN.sub(lambda m: _REPLACEMENTS[m.group(0)], text)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger with the given name, delegating output to the root logger.

    Args:
        name (str): Optional name for the logger (defaults to this module)

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name or __name__)

    # The root logger handles all output (console + files)
    logger.propagate = True
    if logger.handlers:
        logger.handlers.clear()

    return logger


class DevOnlyFilter(logging.Filter):
    """Drop records flagged with ``extra={"dev_only": True}`` unless enabled."""

    def filter(self, record: logging.LogRecord) -> bool:
        if SHOW_DEV_ONLY_IN_CONSOLE:
            return True
        return not getattr(record, "dev_only", False)
