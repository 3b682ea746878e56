"""Logging setup utilities."""

from __future__ import annotations

import logging

NOISY_LOGGERS = ("httpx", "uvicorn.access")


def configure_logging(log_level: str = "INFO", quiet_loggers: tuple[str, ...] = NOISY_LOGGERS) -> int:
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    # Request-level chatter stays at WARNING unless the app itself runs at DEBUG.
    if level > logging.DEBUG:
        for name in quiet_loggers:
            logging.getLogger(name).setLevel(logging.WARNING)
    return level
