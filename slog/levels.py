"""Level registry — severity names and their ranks."""

from slog.errors import UnknownLevel

DEBUG = "debug"
INFO = "info"
NOTICE = "notice"
WARNING = "warning"
ERROR = "error"
CRITICAL = "critical"
ALERT = "alert"
EMERGENCY = "emergency"

# Ascending severity; rank is position + 1.
LEVELS = (DEBUG, INFO, NOTICE, WARNING, ERROR, CRITICAL, ALERT, EMERGENCY)

_RANKS = {name: i + 1 for i, name in enumerate(LEVELS)}

DEFAULT_LEVEL = ERROR


def is_level(name: str) -> bool:
    return name in _RANKS


def rank(level: str) -> int:
    """Return the severity rank (1..8) of *level*. Raises UnknownLevel."""
    try:
        return _RANKS[level]
    except KeyError:
        raise UnknownLevel(level) from None
