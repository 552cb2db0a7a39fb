"""Module: init_logging.py

Date: 2026-10-19

Single entry point to initialize the logging system with app-specific log files.
"""

import logging

from formgrid.utils.logging.logger_factory import LoggerFactory
from formgrid.utils.logging.logger_setup import ConfigureLogger
from formgrid.utils.paths import AppPaths


def init_logging(app_name: str = "formgrid", verbose: bool = False) -> logging.Logger:
    """Initialize logging for the application.

    Log files go to the ``logs`` folder of the user data directory.

    Args:
        app_name (str): The base name for log files.
        verbose (bool): Show INFO messages on the console.

    Returns:
        logging.Logger: The root logger.
    """
    console_level = logging.INFO if verbose else None
    configured = ConfigureLogger(
        log_name=app_name,
        log_dir=str(AppPaths.get_logs_dir()),
        console_level=console_level,
    )
    if verbose:
        LoggerFactory.set_global_level(logging.DEBUG)
    return configured.logger
