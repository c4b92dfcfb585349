"""Log event model, JSON line encoding, and the event builder."""

import json
import os
import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional

from slog.alarm import AlarmDispatcher
from slog.errors import CallSiteUnresolved, SerializationFailure
from slog.state import Identity, ProcessState

# Metadata key that always carries the event category.
CATEGORY_KEY = "cate"

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

UNKNOWN_FILE = "???"


@dataclass(frozen=True)
class LogEvent:
    time: str
    level: str
    msg: str
    cate: str
    sys: Identity
    meta: dict[str, Any] = field(default_factory=dict)
    file: str = f"{UNKNOWN_FILE}:0"

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "level": self.level,
            "msg": self.msg,
            "cate": self.cate,
            "sys": self.sys.to_dict(),
            "meta": self.meta,
            "file": self.file,
        }

    def alarm_payload(self) -> bytes:
        return f"[{self.level}-{self.cate}]-{self.msg}".encode("utf-8")


def serialize(event: LogEvent) -> bytes:
    """Encode *event* as one compact JSON object terminated by a line feed."""
    try:
        line = json.dumps(
            event.to_dict(), ensure_ascii=False, allow_nan=False, separators=(",", ":")
        )
    except (TypeError, ValueError) as e:
        raise SerializationFailure(f"cannot encode {event.level} event: {e}") from e
    return line.encode("utf-8") + b"\n"


def call_site(depth: int) -> str:
    """Return ``basename:line`` for the frame *depth* levels above our caller."""
    try:
        frame = sys._getframe(depth + 1)
    except ValueError:
        raise CallSiteUnresolved(f"stack is shallower than {depth} frames") from None
    return f"{os.path.basename(frame.f_code.co_filename)}:{frame.f_lineno}"


class EventBuilder:
    def __init__(self, state: ProcessState, alarms: AlarmDispatcher,
                 time_func: Optional[Callable[[], datetime]] = None):
        self._state = state
        self._alarms = alarms
        self._time_func = time_func or datetime.now

    def build(self, level: str, category: str, message: str,
              metadata: Optional[dict] = None, stacklevel: int = 1) -> LogEvent:
        """Build a fully populated event and fire the alarm for *level*.

        *stacklevel* counts frames above this call: 1 is the direct caller,
        so a public entry point that goes through one helper passes 3.
        The caller's *metadata* mapping is copied, never mutated.
        """
        meta = dict(metadata) if metadata else {}
        meta[CATEGORY_KEY] = category

        try:
            location = call_site(stacklevel)
        except CallSiteUnresolved:
            location = f"{UNKNOWN_FILE}:0"

        event = LogEvent(
            time=self._time_func().strftime(TIME_FORMAT),
            level=level,
            msg=message,
            cate=category,
            sys=self._state.identity,
            meta=meta,
            file=location,
        )
        self._alarms.dispatch(level, event.alarm_payload())
        return event
