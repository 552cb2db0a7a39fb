"""Module: logger_setup.py

Date: 2026-10-19

This module provides the ConfigureLogger class for setting up logging in the application.
The root logger is configured to log console_level and higher to the console,
file_level and higher to formgrid.log, and DEBUG+ to formgrid_debug.log (optional).
"""

import contextlib
import logging
import os
import sys

from formgrid.config import (
    LOG_CONSOLE_LEVEL,
    LOG_DEBUG_FILE_BACKUP_COUNT,
    LOG_DEBUG_FILE_ENABLED,
    LOG_DEBUG_FILE_LEVEL,
    LOG_DEBUG_FILE_MAX_BYTES,
    LOG_FILE_BACKUP_COUNT,
    LOG_FILE_LEVEL,
    LOG_FILE_MAX_BYTES,
    LOG_TO_CONSOLE,
    LOG_TO_FILE,
)
from formgrid.utils.logging.logger_file_helper import add_file_handler
from formgrid.utils.logging.logger_helper import DevOnlyFilter


class ConfigureLogger:
    """Configures application-wide logging on the root logger."""

    def __init__(
        self,
        log_name: str = "formgrid",
        log_dir: str = "logs",
        console_level: int | None = None,
    ):
        """Initialize and configure the root logger.

        Args:
            log_name (str): Base name for the log files.
            log_dir (str): Directory to store log files.
            console_level (int): Overrides LOG_CONSOLE_LEVEL when given.
        """
        if console_level is None:
            console_level = getattr(logging, LOG_CONSOLE_LEVEL, logging.WARNING)
        file_level = getattr(logging, LOG_FILE_LEVEL, logging.INFO)

        self.logger = logging.getLogger()
        self.logger.setLevel(logging.DEBUG)  # Accept everything; handlers filter levels

        if self.logger.handlers:
            return

        if LOG_TO_CONSOLE:
            self._setup_console_handler(console_level)

        if LOG_TO_FILE:
            add_file_handler(
                logger=self.logger,
                log_path=os.path.join(log_dir, f"{log_name}.log"),
                level=file_level,
                max_bytes=LOG_FILE_MAX_BYTES,
                backup_count=LOG_FILE_BACKUP_COUNT,
            )

        if LOG_DEBUG_FILE_ENABLED:
            add_file_handler(
                logger=self.logger,
                log_path=os.path.join(log_dir, f"{log_name}_debug.log"),
                level=getattr(logging, LOG_DEBUG_FILE_LEVEL, logging.DEBUG),
                max_bytes=LOG_DEBUG_FILE_MAX_BYTES,
                backup_count=LOG_DEBUG_FILE_BACKUP_COUNT,
            )

    def _setup_console_handler(self, level: int) -> None:
        """Set up a stderr handler with UTF-8 output and DevOnlyFilter."""
        console_handler = logging.StreamHandler(sys.stderr)

        with contextlib.suppress(Exception):
            console_handler.stream.reconfigure(encoding="utf-8")

        console_handler.setLevel(level)
        console_handler.addFilter(DevOnlyFilter())
        console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))

        self.logger.addHandler(console_handler)
