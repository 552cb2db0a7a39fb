"""Module: timer_manager.py

Date: 2026-10-19

Centralized timer management.
Schedules single-shot callbacks on the Qt event loop. Re-scheduling under an
existing timer id restarts the countdown, which is what debounced writes
(column resize persistence, config auto-save) build on.
"""

import threading
from collections.abc import Callable
from enum import Enum
from typing import Any

from formgrid.core.pyqt_imports import QObject, QTimer, pyqtSignal
from formgrid.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class TimerType(Enum):
    """Kinds of delayed work, used for generated ids and log output."""

    RESIZE_SAVE = "resize_save"
    CONFIG_SAVE = "config_save"


class TimerManager(QObject):
    """Single-shot timers keyed by id.

    Callback failures are logged, never raised into the event loop.
    """

    timer_finished = pyqtSignal(str)  # timer_id

    def __init__(self, parent: QObject | None = None):
        super().__init__(parent)

        self._lock = threading.RLock()
        self._active_timers: dict[str, QTimer] = {}
        self._timer_callbacks: dict[str, Callable[[], Any]] = {}
        self._timer_types: dict[str, TimerType] = {}
        self._timer_count = 0

    def schedule(
        self,
        callback: Callable[[], Any],
        delay: int,
        timer_type: TimerType,
        timer_id: str | None = None,
    ) -> str:
        """Run ``callback`` once after ``delay`` milliseconds.

        An active timer with the same ``timer_id`` is cancelled and replaced,
        so a burst of calls under one id runs only the last callback.

        Returns:
            str: Timer ID for cancellation
        """
        with self._lock:
            if timer_id is None:
                timer_id = f"{timer_type.value}_{self._timer_count}"
            self._timer_count += 1

            if timer_id in self._active_timers:
                self.cancel(timer_id)

            timer = QTimer(self)
            timer.setSingleShot(True)
            timer.timeout.connect(lambda: self._on_timer_finished(timer_id))

            self._active_timers[timer_id] = timer
            self._timer_callbacks[timer_id] = callback
            self._timer_types[timer_id] = timer_type

            timer.start(delay)

        logger.debug(
            "[TimerManager] Scheduled %s timer '%s' with %dms delay",
            timer_type.value,
            timer_id,
            delay,
            extra={"dev_only": True},
        )
        return timer_id

    def cancel(self, timer_id: str) -> bool:
        """Cancel a scheduled timer.

        Returns:
            bool: True if timer was cancelled, False if not found
        """
        with self._lock:
            timer = self._active_timers.pop(timer_id, None)
            if timer is None:
                return False

            timer.stop()
            timer.deleteLater()
            self._timer_callbacks.pop(timer_id, None)
            self._timer_types.pop(timer_id, None)

        logger.debug("[TimerManager] Cancelled timer '%s'", timer_id, extra={"dev_only": True})
        return True

    def _on_timer_finished(self, timer_id: str) -> None:
        with self._lock:
            timer = self._active_timers.pop(timer_id, None)
            if timer is None:
                return
            callback = self._timer_callbacks.pop(timer_id)
            timer_type = self._timer_types.pop(timer_id)
            timer.deleteLater()

        try:
            callback()
        except Exception as e:
            logger.error(
                "[TimerManager] Error executing %s timer '%s': %s", timer_type.value, timer_id, e
            )

        self.timer_finished.emit(timer_id)

    def cleanup_all(self) -> int:
        """Cancel all active timers."""
        with self._lock:
            cancelled_count = len(self._active_timers)
            for timer in self._active_timers.values():
                timer.stop()
                timer.deleteLater()

            self._active_timers.clear()
            self._timer_callbacks.clear()
            self._timer_types.clear()

        if cancelled_count > 0:
            logger.debug(
                "[TimerManager] Cleaned up %d active timers",
                cancelled_count,
                extra={"dev_only": True},
            )
        return cancelled_count


_timer_manager: TimerManager | None = None


def get_timer_manager() -> TimerManager:
    """Get the global timer manager instance."""
    global _timer_manager
    if _timer_manager is None:
        _timer_manager = TimerManager()
    return _timer_manager


def schedule_resize_save(
    callback: Callable[[], Any], delay: int = 50, timer_id: str | None = None
) -> str:
    """Schedule (or restart) a debounced column-size save."""
    return get_timer_manager().schedule(callback, delay, TimerType.RESIZE_SAVE, timer_id)


def schedule_config_save(
    callback: Callable[[], Any], delay: int, timer_id: str | None = None
) -> str:
    """Schedule (or restart) a debounced configuration save."""
    return get_timer_manager().schedule(callback, delay, TimerType.CONFIG_SAVE, timer_id)


def cancel_timer(timer_id: str) -> bool:
    """Cancel a specific timer."""
    return get_timer_manager().cancel(timer_id)


def cleanup_all_timers() -> int:
    """Cancel all active timers."""
    return get_timer_manager().cleanup_all()
