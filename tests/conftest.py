from datetime import datetime, timedelta

import pytest

from slog.alarm import AlarmDispatcher
from slog.config import Config
from slog.logger import Logger
from slog.state import ProcessState


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 1, 15, 23, 59, 58))


@pytest.fixture
def config(tmp_path):
    return Config(log_dir=str(tmp_path), idc="dc1", ip="10.0.0.1", version="1.2.0")


@pytest.fixture
def state(config):
    return ProcessState(config)


@pytest.fixture
def alarms():
    return AlarmDispatcher()


@pytest.fixture
def make_logger(config, clock):
    """Factory for Loggers without a running daemon; all are closed on teardown."""
    created = []

    def _make(cfg=None, start=False):
        lg = Logger(cfg or config, time_func=clock, start=start)
        created.append(lg)
        return lg

    yield _make
    for lg in created:
        lg.close()
