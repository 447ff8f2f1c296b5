from __future__ import annotations

import logging
import os
import sys

from contact_dedupe.config import LOG_LEVEL_ENV

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: str | None = None) -> int:
    """Pick the log level from the argument, then the environment, then WARNING."""
    name = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level: {name}")
    return resolved


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a single stdout handler to the package logger.

    Library modules only create loggers; handlers are installed here, from the CLI.
    """
    logger = logging.getLogger("contact_dedupe")
    logger.setLevel(resolve_level(level))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
