"""Process identity and mutable logger settings shared by every component."""

import logging
from dataclasses import dataclass

from slog.config import DEFAULT_DIR, Config
from slog.levels import DEFAULT_LEVEL, is_level, rank

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    idc: str = ""
    ip: str = ""
    version: str = ""

    def to_dict(self) -> dict:
        return {"idc": self.idc, "IP": self.ip, "ver": self.version}


class ProcessState:
    """Context object owned by a Logger and shared by reference.

    Events hold a reference to the ``identity`` current at build time.
    ``min_rank`` is read by the sink on every write.
    """

    def __init__(self, config: Config | None = None):
        config = config or Config()
        self.identity = Identity(config.idc, config.ip, config.version)
        self.file_prefix = config.file_prefix
        self.log_dir = config.log_dir or DEFAULT_DIR
        self.level = DEFAULT_LEVEL
        self.min_rank = rank(DEFAULT_LEVEL)
        self.set_level(config.min_level)

    def set_level(self, level: str) -> bool:
        """Change the minimum level. Unknown names leave it untouched."""
        if not is_level(level):
            logger.debug("Ignoring unknown log level %r", level)
            return False
        self.level = level
        self.min_rank = rank(level)
        return True

    def set_identity(self, idc: str, ip: str, version: str):
        # Swap the whole record so a concurrent build never sees half an update.
        self.identity = Identity(idc, ip, version)

    def set_log_dir(self, log_dir: str):
        """Takes effect the next time a log file is opened."""
        self.log_dir = log_dir or DEFAULT_DIR
