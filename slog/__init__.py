"""slog — structured JSON-lines logging to daily files with level alarms."""

from slog.config import Config, load_config
from slog.errors import (
    CallSiteUnresolved, SerializationFailure, SinkUnavailable, SlogError, UnknownLevel,
)
from slog.event import LogEvent
from slog.levels import (
    ALERT, CRITICAL, DEBUG, EMERGENCY, ERROR, INFO, LEVELS, NOTICE, WARNING, is_level, rank,
)
from slog.logger import Logger
from slog.state import Identity

__all__ = [
    "Config", "load_config",
    "SlogError", "UnknownLevel", "SinkUnavailable", "SerializationFailure", "CallSiteUnresolved",
    "LogEvent", "Identity", "Logger",
    "DEBUG", "INFO", "NOTICE", "WARNING", "ERROR", "CRITICAL", "ALERT", "EMERGENCY",
    "LEVELS", "is_level", "rank",
]
