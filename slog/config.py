"""Configuration loading from an optional YAML file and environment variables."""

import logging
import os
from dataclasses import dataclass, fields

import yaml

from slog.levels import DEFAULT_LEVEL, is_level

logger = logging.getLogger(__name__)

DEFAULT_DIR = "/data/logs/"

# Environment variable -> Config field
ENV_VARS = {
    "SLOG_DIR": "log_dir",
    "SLOG_FILE_PREFIX": "file_prefix",
    "SLOG_LEVEL": "min_level",
    "SLOG_IDC": "idc",
    "SLOG_IP": "ip",
    "SLOG_VERSION": "version",
    "SLOG_FLUSH_INTERVAL": "flush_interval",
    "SLOG_BUFFER_SIZE": "buffer_size",
    "SLOG_FLUSH_ON_EXIT": "flush_on_exit",
}


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    log_dir: str = DEFAULT_DIR
    file_prefix: str = "slog."
    min_level: str = DEFAULT_LEVEL
    idc: str = ""
    ip: str = ""
    version: str = ""
    flush_interval: float = 3.0
    buffer_size: int = 10 * 1024 * 1024  # 10 MB
    flush_on_exit: bool = False


def load_yaml_config(path: str | None) -> dict:
    """Load the ``slog`` section (or the whole document) from a YAML file."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, ignoring it", path)
        return {}
    logger.info("Loaded YAML config from %s", path)
    section = data.get("slog", data)
    return section if isinstance(section, dict) else {}


def _coerce(name: str, value):
    if name == "flush_interval":
        return float(value)
    if name == "buffer_size":
        return int(value)
    if name == "flush_on_exit":
        return _parse_bool(value)
    return "" if value is None else str(value)


def load_config(path: str | None = None) -> Config:
    """Build Config from defaults, then the YAML file, then env vars."""
    known = {f.name for f in fields(Config)}
    values = {}

    for key, value in load_yaml_config(path).items():
        if key in known:
            values[key] = _coerce(key, value)
        else:
            logger.warning("Ignoring unknown config key %r", key)

    for env, name in ENV_VARS.items():
        raw = os.environ.get(env)
        if raw is not None:
            values[name] = _coerce(name, raw)

    if not values.get("log_dir", DEFAULT_DIR):
        values["log_dir"] = DEFAULT_DIR

    level = values.get("min_level", DEFAULT_LEVEL)
    if not is_level(level):
        logger.warning("Unknown log level %r, falling back to %s", level, DEFAULT_LEVEL)
        values["min_level"] = DEFAULT_LEVEL

    return Config(**values)
