"""Unit tests for learnings stored through the goal store."""

from __future__ import annotations

from pathlib import Path

import pytest

from goalkeeper.core.errors import (
    GoalNotFoundError,
    InvalidTimestampError,
    LearningExistsError,
    LearningNotFoundError,
)
from goalkeeper.core.managers import GoalStore
from goalkeeper.core.models import Learning

JAN = "2024-01-01T00:00:00.000Z"
JUN = "2024-06-01T00:00:00.000Z"


def _learning(timestamp: str, title: str = "Note") -> Learning:
    return Learning(timestamp=timestamp, title=title, context="ctx", details="details")


async def test_workspace_scope_newest_first(store: GoalStore, workspace_path: Path) -> None:
    await store.add_learning(_learning(JAN, "January"))
    await store.add_learning(_learning(JUN, "June"))

    entries = await store.get_learnings()
    assert [e.timestamp for e in entries] == [JUN, JAN]
    assert entries[0].content.startswith("## June")
    assert (workspace_path / ".goals" / "learnings" / "2024-06-01T00_00_00_000Z.md").is_file()


async def test_goal_scope_is_separate(store: GoalStore, workspace_path: Path) -> None:
    await store.create_goal("ship")
    await store.add_learning(_learning(JAN, "Goal note"), goal="ship")

    assert await store.get_learnings() == []
    entries = await store.get_learnings(goal="ship")
    assert [e.timestamp for e in entries] == [JAN]
    assert (workspace_path / ".goals" / "goals" / "ship" / "learnings" / "2024-01-01T00_00_00_000Z.md").is_file()


async def test_same_timestamp_in_different_scopes(store: GoalStore) -> None:
    await store.create_goal("ship")
    await store.add_learning(_learning(JAN))
    await store.add_learning(_learning(JAN), goal="ship")

    assert len(await store.get_learnings()) == 1
    assert len(await store.get_learnings(goal="ship")) == 1


async def test_duplicate_timestamp(store: GoalStore) -> None:
    await store.add_learning(_learning(JAN, "First"))
    with pytest.raises(LearningExistsError):
        await store.add_learning(_learning(JAN, "Second"))

    assert (await store.get_learning(JAN)).startswith("## First")


async def test_add_learning_missing_goal(store: GoalStore, workspace_path: Path) -> None:
    with pytest.raises(GoalNotFoundError):
        await store.add_learning(_learning(JAN), goal="nope")
    assert not (workspace_path / ".goals" / "goals" / "nope").exists()


async def test_add_learning_non_canonical_timestamp(store: GoalStore) -> None:
    with pytest.raises(InvalidTimestampError):
        await store.add_learning(_learning("2024-01-01T00:00:00Z"))


async def test_add_learning_recreates_scope_directory(store: GoalStore, workspace_path: Path) -> None:
    (workspace_path / ".goals" / "learnings").rmdir()
    await store.add_learning(_learning(JAN))
    assert [e.timestamp for e in await store.get_learnings()] == [JAN]


async def test_get_learnings_missing_directory(store: GoalStore, workspace_path: Path) -> None:
    (workspace_path / ".goals" / "learnings").rmdir()
    assert await store.get_learnings() == []


async def test_get_learnings_ignores_other_files(store: GoalStore, workspace_path: Path) -> None:
    await store.add_learning(_learning(JAN))
    (workspace_path / ".goals" / "learnings" / "README.md").write_text("not a learning")
    (workspace_path / ".goals" / "learnings" / "scratch.txt").write_text("x")

    assert [e.timestamp for e in await store.get_learnings()] == [JAN]


async def test_get_learning(store: GoalStore) -> None:
    await store.create_goal("ship")
    await store.add_learning(_learning(JUN, "Shipped"), goal="ship")

    content = await store.get_learning(JUN, goal="ship")
    assert content.startswith("## Shipped\n")
    assert "### Context\nctx\n" in content


async def test_get_learning_missing(store: GoalStore) -> None:
    with pytest.raises(LearningNotFoundError):
        await store.get_learning(JAN)
