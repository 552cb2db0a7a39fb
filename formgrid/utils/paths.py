"""Module: paths.py

Date: 2026-10-19

Centralized path management for formgrid.

Platform-specific behavior:
- Windows: %LOCALAPPDATA%/formgrid/
- Linux: $XDG_DATA_HOME/formgrid/ or ~/.local/share/formgrid/
- macOS: ~/Library/Application Support/formgrid/

Usage:
    from formgrid.utils.paths import AppPaths

    config_path = AppPaths.get_config_path()
    logs_dir = AppPaths.get_logs_dir()
"""

import os
import platform
from pathlib import Path

from formgrid.config import APP_NAME, CONFIG_FILE_NAME


class AppPaths:
    """Centralized path management for the application.

    Directory Structure:
        <user_data_dir>/
        ├── config.json          # Table preferences and app settings
        └── logs/                # Log files
    """

    _user_data_dir: Path | None = None

    @classmethod
    def _get_platform_data_dir(cls) -> Path:
        """Get platform-specific user data directory."""
        system = platform.system()

        if system == "Windows":
            base = os.environ.get("LOCALAPPDATA")
            if not base:
                base = str(Path(os.environ.get("USERPROFILE", "")) / "AppData" / "Local")
            return Path(base) / APP_NAME

        if system == "Darwin":
            return Path.home() / "Library" / "Application Support" / APP_NAME

        xdg_data = os.environ.get("XDG_DATA_HOME")
        if xdg_data:
            return Path(xdg_data) / APP_NAME
        return Path.home() / ".local" / "share" / APP_NAME

    @classmethod
    def set_user_data_dir(cls, path: str | Path | None) -> None:
        """Override the user data directory (None restores the platform default)."""
        cls._user_data_dir = Path(path) if path is not None else None

    @classmethod
    def get_user_data_dir(cls) -> Path:
        """Get the user data directory, creating it if necessary."""
        if cls._user_data_dir is None:
            cls._user_data_dir = cls._get_platform_data_dir()

        cls._user_data_dir.mkdir(parents=True, exist_ok=True)
        return cls._user_data_dir

    @classmethod
    def get_config_path(cls) -> Path:
        """Get path to the JSON configuration file."""
        return cls.get_user_data_dir() / CONFIG_FILE_NAME

    @classmethod
    def get_logs_dir(cls) -> Path:
        """Get the logs directory, creating it if necessary."""
        logs_dir = cls.get_user_data_dir() / "logs"
        logs_dir.mkdir(parents=True, exist_ok=True)
        return logs_dir
