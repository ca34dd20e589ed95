"""Loguru sink configuration for command-line use."""

from __future__ import annotations

import sys
from typing import Any

from loguru import logger

LOG_FORMAT = "{time:HH:mm:ss} {level: <8} {name}: {message}"


def configure_logging(level: str = "WARNING", sink: Any = None) -> None:
    """Replace loguru's default handler with one at *level*."""
    logger.remove()
    logger.add(sink or sys.stderr, level=level.upper(), format=LOG_FORMAT)
