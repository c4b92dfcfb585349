"""Background thread that rotates and flushes the sink on a fixed interval."""

import logging
import threading

from slog.sink import RotatingSink

logger = logging.getLogger(__name__)

FLUSH_INTERVAL = 3.0


class FlushDaemon(threading.Thread):
    def __init__(self, sink: RotatingSink, interval: float = FLUSH_INTERVAL):
        super().__init__(name="slog-flush", daemon=True)
        self._sink = sink
        self._interval = interval
        self._stop_event = threading.Event()

    def tick(self):
        """One cycle: rotate if the date changed, then flush."""
        self._sink.rotate_if_needed()
        self._sink.flush()

    def run(self):
        while not self._stop_event.wait(timeout=self._interval):
            try:
                self.tick()
            except Exception:
                logger.exception("Flush daemon tick failed")

    def stop(self, timeout: float | None = 5.0):
        self._stop_event.set()
        if self.is_alive() and threading.current_thread() is not self:
            self.join(timeout=timeout)
