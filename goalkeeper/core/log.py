"""Logging configuration using loguru.

Command output goes to stdout; diagnostics go to a single loguru sink on
stderr so they never mix with what a command prints.  Store mutations are
traced at DEBUG, fresh storage bootstrapping at INFO and inconsistent state
at WARNING.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger

LOG_FORMAT = "<level>{level: <8}</level> | <level>{message}</level>"

# DEBUG runs are for tracing store calls, so add timing and call-site.
DEBUG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(level: str = "INFO", sink: TextIO | None = None) -> None:
    """Configure loguru as the sole logging sink.

    *sink* defaults to the ``sys.stderr`` current at call time, so callers that
    swap stderr (tests, ``CliRunner``) get the output.  Safe to call more than
    once; each call replaces the previous sink.
    """
    level = level.upper()

    logger.remove()
    logger.add(
        sink if sink is not None else sys.stderr,
        level=level,
        format=DEBUG_FORMAT if level in {"TRACE", "DEBUG"} else LOG_FORMAT,
    )
