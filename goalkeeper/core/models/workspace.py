"""Workspace registry data model.

A workspace is a named root directory that holds one ``.goals`` hierarchy.
The registry persists all of them in a single ``workspaces.json``::

    {"workspaces": [{"name": ..., "path": ..., "last_active": ...}]}
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from goalkeeper.core.models.common import Timestamp, utcnow


class Workspace(BaseModel):
    """A registered workspace.  ``name`` is unique within the registry."""

    name: str
    path: str = Field(description="Absolute filesystem path; existence is not checked")
    last_active: Timestamp = Field(default_factory=utcnow)


class WorkspaceRegistryState(BaseModel):
    """Whole-file document backing the registry."""

    workspaces: list[Workspace] = Field(default_factory=list)
