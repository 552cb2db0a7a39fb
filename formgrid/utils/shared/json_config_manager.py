"""Module: json_config_manager.py

Date: 2026-10-19

JSON-based configuration manager.
Handles JSON serialization, deserialization, and management with support for
multiple configuration categories, automatic backups, debounced auto-save
and thread-safe file operations.
"""

import copy
import json
import shutil
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Generic, TypeVar

from formgrid.config import (
    APP_NAME,
    APP_VERSION,
    CONFIG_AUTO_SAVE_DELAY,
    CONFIG_AUTO_SAVE_ENABLED,
    CONFIG_FILE_NAME,
    DEBUG_RESET_CONFIG,
)
from formgrid.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

T = TypeVar("T")


class ConfigCategory(Generic[T]):
    """Named section of config.json holding key/value entries over defaults."""

    def __init__(self, name: str, defaults: dict[str, T]):
        self.name = name
        self.defaults = defaults
        self._data: dict[str, T] = copy.deepcopy(defaults)

    def get(self, key: str, default: Any = None) -> Any:
        """Stored value, else ``default``, else the category default."""
        return self._data.get(key, default if default is not None else self.defaults.get(key))

    def set(self, key: str, value: T) -> None:
        """Store a value (persisted on the next save)."""
        self._data[key] = value

    def remove(self, key: str) -> bool:
        """Remove a key, returning whether it was present."""
        return self._data.pop(key, None) is not None

    def to_dict(self) -> dict[str, T]:
        """Deep copy of the stored entries for json.dump."""
        return copy.deepcopy(self._data)

    def from_dict(self, data: dict[str, T]) -> None:
        """Replace the entries with ``data`` layered over the defaults."""
        self._data = copy.deepcopy(self.defaults)
        self._data.update(data)


class TablePreferencesConfig(ConfigCategory[dict[str, Any]]):
    """Per-table column preferences, keyed by table key (form id or slug).

    Each value has the shape ``{"columns": {column_id: record}, "globalSizing": {column_id: px}}``.
    """

    def __init__(self) -> None:
        super().__init__("table_preferences", {})


class JSONConfigManager:
    """JSON-based configuration manager with debounced auto-save."""

    def __init__(self, app_name: str = "app", config_dir: str | None = None):
        """Bind the manager to ``config_dir``/config.json (user data dir when None)."""
        self.app_name = app_name
        self.config_dir = Path(config_dir or self._get_default_config_dir())
        self.config_file = self.config_dir / CONFIG_FILE_NAME
        self.backup_file = self.config_dir / f"{CONFIG_FILE_NAME}.bak"

        self._lock = threading.RLock()
        self._categories: dict[str, ConfigCategory[Any]] = {}

        # Set by mark_dirty, cleared by a successful save
        self._dirty = False
        self._auto_save_timer_id: str | None = None

        self.config_dir.mkdir(parents=True, exist_ok=True)

        logger.info(
            "[JSONConfigManager] Initialized for '%s' with dir: %s",
            app_name,
            self.config_dir,
            extra={"dev_only": True},
        )

    def _get_default_config_dir(self) -> str:
        from formgrid.utils.paths import AppPaths

        return str(AppPaths.get_user_data_dir())

    @property
    def is_dirty(self) -> bool:
        """Whether there are unsaved changes."""
        return self._dirty

    def register_category(self, category: ConfigCategory[Any]) -> None:
        """Attach a category so load() fills it and save() writes it."""
        with self._lock:
            self._categories[category.name] = category

    def get_category(self, category_name: str) -> ConfigCategory[Any] | None:
        """Registered category named ``category_name``, or None."""
        return self._categories.get(category_name)

    def load(self) -> bool:
        """Load configuration from JSON file."""
        with self._lock:
            try:
                if DEBUG_RESET_CONFIG and self.config_file.exists():
                    logger.info("[DEBUG] Deleting config file for fresh start: %s", self.config_file)
                    self.config_file.unlink()
                    if self.backup_file.exists():
                        self.backup_file.unlink()

                if not self.config_file.exists():
                    logger.info(
                        "[JSONConfigManager] No config file found, using defaults",
                        extra={"dev_only": True},
                    )
                    return True

                with open(self.config_file, encoding="utf-8") as f:
                    data = json.load(f)

                for category_name, category in self._categories.items():
                    if category_name in data:
                        category.from_dict(data[category_name])

                logger.info(
                    "[JSONConfigManager] Configuration loaded successfully",
                    extra={"dev_only": True},
                )
                return True

            except (OSError, ValueError) as e:
                logger.error("[JSONConfigManager] Failed to load configuration: %s", e)
                return False

    def save(self, create_backup: bool = True) -> bool:
        """Save configuration to JSON file."""
        with self._lock:
            try:
                if create_backup and self.config_file.exists():
                    shutil.copy2(self.config_file, self.backup_file)

                data: dict[str, Any] = {
                    name: category.to_dict() for name, category in self._categories.items()
                }
                data["_metadata"] = {
                    "last_saved": datetime.now().isoformat(),
                    "version": f"v{APP_VERSION}",
                    "app_name": self.app_name,
                }

                with open(self.config_file, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)

                self._dirty = False
                logger.debug("[JSONConfigManager] Configuration saved successfully")
                return True

            except (OSError, TypeError, ValueError) as e:
                logger.error("[JSONConfigManager] Failed to save configuration: %s", e)
                return False

    def _schedule_auto_save(self) -> None:
        """Schedule auto-save through the timer manager (debounced)."""
        if not CONFIG_AUTO_SAVE_ENABLED:
            return

        from formgrid.utils.shared.timer_manager import schedule_config_save

        self._auto_save_timer_id = schedule_config_save(
            self._auto_save,
            delay=int(CONFIG_AUTO_SAVE_DELAY * 1000),
            timer_id=f"config_auto_save_{id(self)}",
        )
        logger.debug(
            "[JSONConfigManager] Auto-save scheduled in %ss",
            CONFIG_AUTO_SAVE_DELAY,
            extra={"dev_only": True},
        )

    def _auto_save(self) -> None:
        """Auto-save if dirty (called by timer)."""
        self._auto_save_timer_id = None
        if self._dirty:
            logger.info("[JSONConfigManager] Auto-save triggered (timer)")
            self.save()

    def _cancel_auto_save(self) -> None:
        if self._auto_save_timer_id:
            from formgrid.utils.shared.timer_manager import cancel_timer

            cancel_timer(self._auto_save_timer_id)
            self._auto_save_timer_id = None

    def save_immediate(self, force: bool = True) -> bool:
        """Force immediate save (used on shutdown or table close).

        Args:
            force: If True, always save. If False, only save if dirty.

        Returns:
            True if save successful, False otherwise
        """
        with self._lock:
            self._cancel_auto_save()

            if force or self._dirty:
                logger.info("[JSONConfigManager] Immediate save requested")
                return self.save()

            logger.debug("[JSONConfigManager] Immediate save skipped (not dirty)")
            return True

    def mark_dirty(self) -> None:
        """Mark config as dirty and schedule auto-save."""
        self._dirty = True
        self._schedule_auto_save()


def create_app_config_manager(
    app_name: str = APP_NAME, config_dir: str | None = None
) -> JSONConfigManager:
    """Create a JSONConfigManager with the application categories and load it."""
    manager = JSONConfigManager(app_name=app_name, config_dir=config_dir)
    manager.register_category(TablePreferencesConfig())
    manager.load()
    return manager


_global_manager: JSONConfigManager | None = None


def get_app_config_manager() -> JSONConfigManager:
    """Get the global application configuration manager."""
    global _global_manager
    if _global_manager is None:
        _global_manager = create_app_config_manager()
    return _global_manager


def set_app_config_manager(manager: JSONConfigManager | None) -> None:
    """Replace the global configuration manager (None drops it)."""
    global _global_manager
    _global_manager = manager
