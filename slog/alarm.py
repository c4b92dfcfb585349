"""Per-level alarm callbacks, invoked synchronously on the logging thread."""

import logging
import threading
from typing import Callable

from slog.levels import rank

logger = logging.getLogger(__name__)

AlarmCallback = Callable[[bytes], None]


class AlarmDispatcher:
    def __init__(self):
        self._callbacks: dict[str, AlarmCallback] = {}
        self._lock = threading.Lock()

    def register(self, level: str, callback: AlarmCallback):
        """Install *callback* for *level*, replacing any previous one."""
        rank(level)
        with self._lock:
            self._callbacks[level] = callback

    def unregister(self, level: str):
        with self._lock:
            self._callbacks.pop(level, None)

    def has_callback(self, level: str) -> bool:
        with self._lock:
            return level in self._callbacks

    def dispatch(self, level: str, payload: bytes) -> bool:
        """Run the callback for *level* once. Returns True if one ran.

        The lock only covers the lookup, so a callback may log or register
        other alarms. Callback exceptions are reported and swallowed.
        """
        with self._lock:
            callback = self._callbacks.get(level)
        if callback is None:
            return False
        try:
            callback(payload)
        except Exception:
            logger.exception("Alarm callback for level %s failed", level)
        return True
