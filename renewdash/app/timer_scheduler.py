"""Scheduler helper that owns one-shot UI timers.

The runtime passes ``schedule`` and ``cancel`` callables (NiceGUI timers in
the web runtime, a manual clock in tests) into this class so timer state is
tracked in one place and canceled safely when a screen unmounts.
"""

from __future__ import annotations


import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional


ScheduleFn = Callable[[int, Callable[[], None]], Any]
CancelFn = Callable[[Any], None]

LOGGER = logging.getLogger(__name__)


@dataclass
class TimerHandle:
    """Timer token associated with a single named channel.

    Attributes:
        key: Channel key such as ``session-expiry`` or ``list-refresh``.
        token: Scheduler token returned by the UI scheduler implementation.
    """
    key: str
    token: Any


class TimerScheduler:
    """Manage named one-shot timers on top of a UI scheduler."""

    def __init__(self, schedule: ScheduleFn, cancel: CancelFn) -> None:
        """Store schedule/cancel functions and initialize handle registry.

        Args:
            schedule: Function compatible with ``after(delay_ms, callback)``.
            cancel: Function compatible with ``after_cancel(token)``.
        """
        self._schedule = schedule
        self._cancel = cancel
        self._handles: Dict[str, TimerHandle] = {}

    def schedule(self, key: str, delay_ms: int, callback: Callable[[], None]) -> None:
        """Schedule ``callback`` once, replacing any pending timer on ``key``.

        Args:
            key: Timer channel key.
            delay_ms: Delay in milliseconds before callback execution.
            callback: Callback to execute.
        """
        delay = max(1, int(delay_ms))
        self.cancel(key)
        handle = TimerHandle(key=key, token=None)

        def _fire() -> None:
            # Only the current handle for the key may run.
            if self._handles.get(key) is not handle:
                return
            del self._handles[key]
            callback()

        handle.token = self._schedule(delay, _fire)
        self._handles[key] = handle

    def cancel(self, key: str) -> None:
        """Cancel a pending timer for a key."""
        handle = self._handles.pop(key, None)
        if not handle:
            return
        try:
            self._cancel(handle.token)
        except Exception:
            LOGGER.debug("Timer %s already finished", key, exc_info=True)

    def cancel_all(self) -> None:
        """Cancel all pending timers across all keys."""
        for key in list(self._handles.keys()):
            self.cancel(key)

    def handle_for(self, key: str) -> Optional[TimerHandle]:
        """Return the current handle for a key, if scheduled."""
        return self._handles.get(key)

    def pending(self) -> int:
        return len(self._handles)


__all__ = ["CancelFn", "ScheduleFn", "TimerHandle", "TimerScheduler"]
