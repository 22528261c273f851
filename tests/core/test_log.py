"""Unit tests for logging setup."""

from __future__ import annotations

import io

from loguru import logger

from goalkeeper.core.log import setup_logging
from goalkeeper.core.managers import GoalStore


def test_compact_format_above_debug() -> None:
    sink = io.StringIO()
    setup_logging("info", sink=sink)
    try:
        logger.info("hello {}", "world")
        logger.debug("hidden")
    finally:
        logger.remove()

    assert sink.getvalue() == "INFO     | hello world\n"


async def test_debug_traces_store_mutations(tmp_path) -> None:
    sink = io.StringIO()
    setup_logging("DEBUG", sink=sink)
    try:
        store = GoalStore(tmp_path)
        await store.init()
        await store.create_goal("ship")
    finally:
        logger.remove()

    output = sink.getvalue()
    assert "Goals: created goal ship" in output
    # Call-site is included at DEBUG.
    assert "goalkeeper.core.managers.goals:create_goal" in output
