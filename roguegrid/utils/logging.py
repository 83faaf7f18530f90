"""Logging configuration for the game and its CLI."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from roguegrid.simulation.errors import ConfigurationError

_PACKAGE = "roguegrid"


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> logging.Logger:
    """Send roguegrid log records to ``stream`` at ``level``.

    Only the package logger is configured, so records from pygame or
    other libraries keep their own handling.  Calling this again
    replaces the previous handler.

    Args:
        level: Level name such as ``"DEBUG"``; case-insensitive.
        stream: Destination, stdout by default.

    Returns:
        The configured ``roguegrid`` logger.

    Raises:
        ConfigurationError: If ``level`` is not a logging level name.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        msg = f"unknown log level {level!r}"
        raise ConfigurationError(msg)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5s] %(name)-30s | %(message)s",
            datefmt="%H:%M:%S",
        ),
    )

    package_logger = logging.getLogger(_PACKAGE)
    package_logger.setLevel(numeric_level)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.propagate = False
    return package_logger
