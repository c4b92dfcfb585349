"""slog demo — emits random structured events into daily JSON-lines files."""

import argparse
import logging
import os
import random
import signal
import sys
import time
import uuid

from slog import CRITICAL, EMERGENCY, Logger, load_config

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [slog] %(levelname)s %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

_running = True


def _signal_handler(sig, _frame):
    global _running
    logger.info("Shutdown signal received (signal %d), stopping...", sig)
    _running = False


LEVELS = ["debug", "info", "info", "info", "notice", "warning", "error", "critical", "emergency"]
CATEGORIES = ["db", "http", "cache", "auth", "queue"]
MESSAGES = {
    "db": ["conn lost", "slow query", "replica lag high"],
    "http": ["request served", "upstream timeout", "bad gateway"],
    "cache": ["miss", "eviction storm"],
    "auth": ["token expired", "login ok"],
    "queue": ["consumer stalled", "backlog growing"],
}


def console_alarm(payload: bytes):
    print(f"ALARM {payload.decode('utf-8', errors='replace')}", file=sys.stderr)


def build_cli_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="slog demo event generator")
    parser.add_argument("--config", default=None, help="Path to YAML config file")
    parser.add_argument("--rate", type=float, default=20.0, help="Events per second")
    return parser


def main():
    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    args = build_cli_parser().parse_args()
    config = load_config(args.config)
    os.makedirs(config.log_dir, exist_ok=True)
    logger.info(
        "Config: log_dir=%s, min_level=%s, flush_interval=%.1fs, buffer=%d bytes",
        config.log_dir, config.min_level, config.flush_interval, config.buffer_size,
    )

    log = Logger(config)
    log.set_alarm(CRITICAL, console_alarm)
    log.set_alarm(EMERGENCY, console_alarm)

    emitted = 0
    try:
        while _running:
            category = random.choice(CATEGORIES)
            log.log(
                random.choice(LEVELS),
                category,
                random.choice(MESSAGES[category]),
                {"req_id": uuid.uuid4().hex[:8], "latency_ms": random.randint(1, 900)},
            )
            emitted += 1
            time.sleep(1.0 / args.rate)
    except KeyboardInterrupt:
        pass

    log.close()
    logger.info("Shut down cleanly. Total events emitted: %d", emitted)


if __name__ == "__main__":
    main()
