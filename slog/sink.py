"""Buffered, date-partitioned log sink."""

import logging
import os
import threading
from datetime import datetime
from typing import BinaryIO, Callable, Optional

from slog.errors import SerializationFailure, SinkUnavailable
from slog.event import LogEvent, serialize
from slog.levels import rank
from slog.state import ProcessState

logger = logging.getLogger(__name__)

# Recorded date of the open file; compared on every daemon tick.
DATE_KEY_FORMAT = "%Y%m%d"
FILE_DATE_FORMAT = "%Y-%m-%d"

DEFAULT_BUFFER_SIZE = 10 * 1024 * 1024  # 10 MB


def log_path(log_dir: str, prefix: str, when: datetime) -> str:
    return os.path.join(log_dir, prefix + when.strftime(FILE_DATE_FORMAT))


def open_log_file(path: str, buffer_size: int = DEFAULT_BUFFER_SIZE) -> BinaryIO:
    """Append-open *path*, creating it (owner read/write) if it does not exist.

    Raises SinkUnavailable when neither works. The directory is not created.
    """
    try:
        fd = os.open(path, os.O_WRONLY | os.O_APPEND)
    except FileNotFoundError:
        try:
            fd = os.open(path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, 0o600)
        except OSError as e:
            raise SinkUnavailable(f"cannot create log {path}: {e}") from e
    except OSError as e:
        raise SinkUnavailable(f"cannot open log {path}: {e}") from e
    return open(fd, "ab", buffering=buffer_size)


class RotatingSink:
    """Owns the open log file and its buffer.

    The file handle, its path and the recorded date are swapped together
    under ``_lock``; writers only ever append to the current buffer.
    Rotation is driven from outside (see FlushDaemon), never from write().
    """

    def __init__(self, state: ProcessState, buffer_size: int = DEFAULT_BUFFER_SIZE,
                 time_func: Optional[Callable[[], datetime]] = None):
        self._state = state
        self._buffer_size = buffer_size
        self._time_func = time_func or datetime.now
        self._lock = threading.Lock()
        self._file: BinaryIO | None = None
        self._path: str | None = None
        self._date: str | None = None
        self._closed = False

        now = self._time_func()
        path = log_path(state.log_dir, state.file_prefix, now)
        try:
            self._file = open_log_file(path, buffer_size)
        except SinkUnavailable as e:
            # Date stays unset so the next rotation check retries.
            logger.error("Log sink unavailable at startup: %s", e)
        else:
            self._path = path
            self._date = now.strftime(DATE_KEY_FORMAT)

    @property
    def path(self) -> str | None:
        with self._lock:
            return self._path

    @property
    def date(self) -> str | None:
        with self._lock:
            return self._date

    def write(self, event: LogEvent) -> bool:
        """Append *event* to the buffer. Returns False if it was dropped."""
        if rank(event.level) < self._state.min_rank:
            return False

        try:
            data = serialize(event)
        except SerializationFailure as e:
            logger.warning("Dropping event from %s: %s", event.file, e)
            return False

        with self._lock:
            if self._file is None:
                return False
            try:
                self._file.write(data)
            except (OSError, ValueError) as e:
                logger.error("Write to %s failed: %s", self._path, e)
                return False
        return True

    def rotate_if_needed(self) -> bool:
        """Switch to a new file when the calendar date has changed.

        Buffered bytes for the old file are flushed to it before it is closed.
        On failure the old file stays active and the next call retries.
        """
        now = self._time_func()
        today = now.strftime(DATE_KEY_FORMAT)

        with self._lock:
            if self._closed or today == self._date:
                return False
            path = log_path(self._state.log_dir, self._state.file_prefix, now)
            try:
                new_file = open_log_file(path, self._buffer_size)
            except SinkUnavailable as e:
                logger.error("Rotation to %s failed, keeping current file: %s", today, e)
                return False
            old_file, old_path = self._file, self._path
            self._file, self._path, self._date = new_file, path, today

        if old_file is not None:
            self._close_file(old_file, old_path)
        logger.info("Rotated log file to %s", path)
        return True

    def flush(self):
        """Write buffered bytes to the current file."""
        with self._lock:
            if self._file is None:
                return
            try:
                self._file.flush()
            except OSError as e:
                logger.error("Flush of %s failed: %s", self._path, e)

    def close(self):
        """Flush and close the current file. Later writes are dropped."""
        with self._lock:
            old_file, old_path = self._file, self._path
            self._file = None
            self._closed = True
        if old_file is not None:
            self._close_file(old_file, old_path)

    @staticmethod
    def _close_file(f: BinaryIO, path: str | None):
        try:
            f.close()
        except OSError as e:
            logger.error("Closing %s lost buffered data: %s", path, e)
