"""Logging setup for reqbuilder.

Every module logs through a child of the ``reqbuilder`` logger, which gets a
single stderr handler on first use. The starting level comes from
``REQBUILDER_LOG_LEVEL``; ``set_log_level`` overrides it from the settings
file or the ``--log-level`` flag.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Any

LOG_LEVEL_ENV = "REQBUILDER_LOG_LEVEL"
LOG_FORMAT_ENV = "REQBUILDER_LOG_FORMAT"  # "json" | "text" (default)
ROOT_LOGGER_NAME = "reqbuilder"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_level(name: str) -> int:
    """Level name (any case) to its logging constant. Raises ValueError if unknown."""
    level = name.strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {name!r}, expected one of {', '.join(LOG_LEVELS)}")
    return getattr(logging, level)


def get_logger(name: str) -> logging.Logger:
    """Return the ``reqbuilder.<name>`` logger, configuring the tree on first use."""
    _configure_logging()
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def set_log_level(name: str | None) -> None:
    """Set the level of every reqbuilder logger. None keeps the current level."""
    if name is None:
        return
    _configure_logging()
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(parse_level(name))


def _configure_logging() -> None:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if root.handlers:
        return
    try:
        level = parse_level(os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL)
    except ValueError:
        level = parse_level(DEFAULT_LOG_LEVEL)
    root.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    if (os.environ.get(LOG_FORMAT_ENV) or "text").lower() == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        )
    root.addHandler(handler)


class _JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        obj: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt or "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            obj["exception"] = self.formatException(record.exc_info)
        return json.dumps(obj, ensure_ascii=False)
