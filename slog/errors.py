"""Exception types raised inside slog. Only UnknownLevel from alarm registration reaches callers."""


class SlogError(Exception):
    """Base class for slog errors."""


class UnknownLevel(SlogError, KeyError):
    """Level name is not one of the eight registered levels."""


class SinkUnavailable(SlogError):
    """Today's log file could neither be append-opened nor created."""


class SerializationFailure(SlogError):
    """An event could not be encoded as JSON."""


class CallSiteUnresolved(SlogError):
    """Stack inspection did not reach the requested caller frame."""
