"""Logger — the public entry points and the object that owns all logger state."""

import atexit
import logging
from datetime import datetime
from typing import Any, Callable, Optional

from slog.alarm import AlarmCallback, AlarmDispatcher
from slog.config import Config
from slog.daemon import FlushDaemon
from slog.event import EventBuilder
from slog.levels import (
    ALERT, CRITICAL, DEBUG, EMERGENCY, ERROR, INFO, NOTICE, WARNING, is_level,
)
from slog.sink import RotatingSink
from slog.state import ProcessState

logger = logging.getLogger(__name__)

# Frames between EventBuilder.build and application code:
# Logger._log, the public entry point, then the caller.
_STACKLEVEL = 3

Metadata = Optional[dict[str, Any]]


class Logger:
    """Structured JSON-lines logger writing to one file per day.

    Create one per process at startup and share it. Entry points never
    raise; failures are reported through the ``slog.*`` stdlib loggers.
    """

    def __init__(self, config: Config | None = None,
                 time_func: Optional[Callable[[], datetime]] = None,
                 start: bool = True):
        self._config = config or Config()
        self.state = ProcessState(self._config)
        self.alarms = AlarmDispatcher()
        self._builder = EventBuilder(self.state, self.alarms, time_func)
        self._sink = RotatingSink(self.state, self._config.buffer_size, time_func)
        self._daemon = FlushDaemon(self._sink, self._config.flush_interval)
        self._closed = False

        if start:
            self._daemon.start()
        if self._config.flush_on_exit:
            atexit.register(self.close)
        logger.info("slog writing to %s (min level %s)", self._sink.path, self.state.level)

    @property
    def sink(self) -> RotatingSink:
        return self._sink

    @property
    def daemon(self) -> FlushDaemon:
        return self._daemon

    # --- settings ---

    def set_level(self, level: str) -> bool:
        return self.state.set_level(level)

    def set_identity(self, idc: str, ip: str, version: str):
        self.state.set_identity(idc, ip, version)

    def set_log_dir(self, log_dir: str):
        self.state.set_log_dir(log_dir)

    def set_alarm(self, level: str, callback: AlarmCallback):
        self.alarms.register(level, callback)

    def clear_alarm(self, level: str):
        self.alarms.unregister(level)

    # --- entry points ---

    def _log(self, level: str, category: str, message: str, metadata: Metadata):
        try:
            event = self._builder.build(level, category, message, metadata,
                                        stacklevel=_STACKLEVEL)
            self._sink.write(event)
        except Exception:
            logger.exception("Dropped %s event in category %r", level, category)

    def log(self, level: str, category: str, message: str, metadata: Metadata = None):
        if not is_level(level):
            logger.warning("Dropped event with unknown level %r", level)
            return
        self._log(level, category, message, metadata)

    def debug(self, category: str, message: str, metadata: Metadata = None):
        self._log(DEBUG, category, message, metadata)

    def info(self, category: str, message: str, metadata: Metadata = None):
        self._log(INFO, category, message, metadata)

    def notice(self, category: str, message: str, metadata: Metadata = None):
        self._log(NOTICE, category, message, metadata)

    def warning(self, category: str, message: str, metadata: Metadata = None):
        self._log(WARNING, category, message, metadata)

    def error(self, category: str, message: str, metadata: Metadata = None):
        """A runtime error the program recovered from."""
        self._log(ERROR, category, message, metadata)

    def critical(self, category: str, message: str, metadata: Metadata = None):
        """A component is unavailable or failed unexpectedly."""
        self._log(CRITICAL, category, message, metadata)

    def alert(self, category: str, message: str, metadata: Metadata = None):
        self._log(ALERT, category, message, metadata)

    def emergency(self, category: str, message: str, metadata: Metadata = None):
        """The whole system is unusable."""
        self._log(EMERGENCY, category, message, metadata)

    # --- draining ---

    def flush(self):
        """Push buffered lines to disk now instead of waiting for the daemon."""
        self._sink.flush()

    def close(self):
        """Stop the flush daemon, flush, and close the file. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._daemon.stop()
        self._sink.close()
        if self._config.flush_on_exit:
            atexit.unregister(self.close)
