"""Tests for the flush daemon."""

import json
import logging
import os
import time

import pytest

from slog.daemon import FLUSH_INTERVAL, FlushDaemon
from slog.event import LogEvent
from slog.sink import RotatingSink
from slog.state import Identity


def _event(msg: str) -> LogEvent:
    return LogEvent(
        time="2025-01-15 23:59:58",
        level="error",
        msg=msg,
        cate="db",
        sys=Identity(),
        meta={"cate": "db"},
        file="app.py:1",
    )


def _messages(path) -> list[str]:
    with open(path, encoding="utf-8") as f:
        return [json.loads(line)["msg"] for line in f]


@pytest.fixture
def sink(state, clock):
    s = RotatingSink(state, time_func=clock)
    yield s
    s.close()


class TestTick:
    def test_default_interval(self, sink):
        assert FLUSH_INTERVAL == 3.0

    def test_tick_flushes(self, sink):
        daemon = FlushDaemon(sink)
        sink.write(_event("one"))
        assert os.path.getsize(sink.path) == 0
        daemon.tick()
        assert _messages(sink.path) == ["one"]

    def test_tick_rotates_after_midnight(self, sink, clock, tmp_path):
        daemon = FlushDaemon(sink)
        sink.write(_event("yesterday"))
        daemon.tick()

        clock.advance(seconds=3)
        daemon.tick()
        sink.write(_event("today"))
        daemon.tick()

        assert _messages(tmp_path / "slog.2025-01-15") == ["yesterday"]
        assert _messages(tmp_path / "slog.2025-01-16") == ["today"]


class _FlakySink:
    def __init__(self):
        self.flushes = 0
        self.failed = False

    def rotate_if_needed(self):
        if not self.failed:
            self.failed = True
            raise OSError("disk hiccup")
        return False

    def flush(self):
        self.flushes += 1


class TestThread:
    def test_flushes_periodically(self, sink):
        daemon = FlushDaemon(sink, interval=0.05)
        daemon.start()
        try:
            sink.write(_event("periodic"))
            deadline = time.monotonic() + 2
            while os.path.getsize(sink.path) == 0 and time.monotonic() < deadline:
                time.sleep(0.02)
            assert _messages(sink.path) == ["periodic"]
        finally:
            daemon.stop()
        assert not daemon.is_alive()

    def test_is_daemon_thread(self, sink):
        assert FlushDaemon(sink).daemon is True

    def test_failed_tick_does_not_stop_loop(self, caplog):
        flaky = _FlakySink()
        daemon = FlushDaemon(flaky, interval=0.02)
        with caplog.at_level(logging.ERROR, logger="slog.daemon"):
            daemon.start()
            deadline = time.monotonic() + 2
            while flaky.flushes == 0 and time.monotonic() < deadline:
                time.sleep(0.02)
            daemon.stop()
        assert flaky.flushes >= 1
        assert "tick failed" in caplog.text

    def test_stop_before_start(self, sink):
        daemon = FlushDaemon(sink)
        daemon.stop()
        assert not daemon.is_alive()
