"""Shared test fixtures.

Every test gets isolated directories under ``tmp_path``: one for the
workspace registry and one per workspace.  No test touches ``~/.goals``.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from goalkeeper.core.managers import GoalStore, WorkspaceRegistry
from goalkeeper.core.settings import _get_settings_cached


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point GOALS_DATA_ROOT at a temp directory and reset the settings cache."""
    monkeypatch.setenv("GOALS_DATA_ROOT", str(tmp_path / "registry"))
    _get_settings_cached.cache_clear()
    yield
    _get_settings_cached.cache_clear()


@pytest.fixture
def registry_dir(tmp_path: Path) -> Path:
    return tmp_path / "registry"


@pytest.fixture
def workspace_path(tmp_path: Path) -> Path:
    path = tmp_path / "workspace"
    path.mkdir()
    return path


@pytest.fixture
async def registry(registry_dir: Path) -> WorkspaceRegistry:
    registry = WorkspaceRegistry(registry_dir)
    await registry.init()
    return registry


@pytest.fixture
async def store(workspace_path: Path) -> GoalStore:
    store = GoalStore(workspace_path)
    await store.init()
    return store
