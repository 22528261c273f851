"""Unit tests for JsonDocument and the filesystem helpers.

No network or Docker required -- uses a temporary directory.
"""

from __future__ import annotations

import pytest

from goalkeeper.core.errors import MalformedStateError
from goalkeeper.core.models import GoalState
from goalkeeper.core.store.local import JsonDocument, exclusive_write, list_files, list_subdirs


async def test_save_and_load(tmp_path) -> None:
    doc = JsonDocument(tmp_path / "nested" / "state.json", GoalState)
    await doc.save(GoalState(active_goal="g"))

    result = await doc.load()
    assert result.active_goal == "g"
    # Pretty-printed, no temp files left behind.
    assert (tmp_path / "nested" / "state.json").read_text().startswith("{\n  ")
    assert list_files(tmp_path / "nested") == ["state.json"]


async def test_load_missing(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        await JsonDocument(tmp_path / "state.json", GoalState).load()


async def test_load_malformed(tmp_path) -> None:
    path = tmp_path / "state.json"
    path.write_text("{not json")
    with pytest.raises(MalformedStateError):
        await JsonDocument(path, GoalState).load()


async def test_load_wrong_shape(tmp_path) -> None:
    path = tmp_path / "state.json"
    path.write_text('{"active_goal": 42}')
    with pytest.raises(MalformedStateError):
        await JsonDocument(path, GoalState).load()


async def test_load_invalid_utf8(tmp_path) -> None:
    path = tmp_path / "workspaces.json"
    path.write_bytes(b"\xff\xfe{}")
    with pytest.raises(MalformedStateError):
        await JsonDocument(path, GoalState).load()


def test_exclusive_write_refuses_existing(tmp_path) -> None:
    path = tmp_path / "a.md"
    exclusive_write(path, "first")
    with pytest.raises(FileExistsError):
        exclusive_write(path, "second")
    assert path.read_text() == "first"


def test_listing_helpers(tmp_path) -> None:
    (tmp_path / "dir").mkdir()
    (tmp_path / "file.txt").write_text("x")

    assert list_subdirs(tmp_path) == ["dir"]
    assert list_files(tmp_path) == ["file.txt"]
    assert list_subdirs(tmp_path / "missing") == []
    assert list_files(tmp_path / "missing") == []
