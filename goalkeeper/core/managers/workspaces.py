"""Workspace registry.

Tracks named workspaces in a single ``workspaces.json`` under the
application data directory.  Every mutation rewrites the whole file; two
processes mutating concurrently lose the earlier write.

The registry also remembers which workspace was last created or touched by
this process.  That pointer is ephemeral -- empty on process restart.
"""

from __future__ import annotations

from pathlib import Path

from anyio import to_thread
from loguru import logger

from goalkeeper.core.errors import DuplicateWorkspaceError, WorkspaceNotFoundError
from goalkeeper.core.models.common import utcnow
from goalkeeper.core.models.workspace import Workspace, WorkspaceRegistryState
from goalkeeper.core.store.local import JsonDocument

WORKSPACES_FILENAME = "workspaces.json"


class WorkspaceRegistry:
    """Named workspaces and their filesystem paths.

    Call ``init()`` once before any other method.
    """

    def __init__(self, store_dir: str | Path) -> None:
        self.store_dir = Path(store_dir).expanduser()
        self._document = JsonDocument(self.store_dir / WORKSPACES_FILENAME, WorkspaceRegistryState)
        self._workspaces: list[Workspace] = []
        self._active: str | None = None

    # -- Lifecycle -------------------------------------------------------------

    async def init(self) -> None:
        """Create the store directory and load persisted workspaces.

        A missing file is initialized to an empty registry.  Any other failure
        (malformed JSON, permissions) propagates.
        """
        await to_thread.run_sync(lambda: self.store_dir.mkdir(parents=True, exist_ok=True))
        try:
            state = await self._document.load()
        except FileNotFoundError:
            logger.info("Registry: no {} in {}, starting empty", WORKSPACES_FILENAME, self.store_dir)
            state = WorkspaceRegistryState()
            await self._document.save(state)
        self._workspaces = state.workspaces

    # -- Query -----------------------------------------------------------------

    def list(self) -> list[Workspace]:
        """All workspaces, most recently active first.  Ties keep insertion order."""
        return sorted(self._workspaces, key=lambda w: w.last_active, reverse=True)

    def get(self, name: str) -> Workspace:
        """Get a workspace by name.  Raises ``WorkspaceNotFoundError`` if missing."""
        workspace = self._find(name)
        if workspace is None:
            raise WorkspaceNotFoundError(name)
        return workspace

    def get_active_workspace(self) -> Workspace | None:
        """The workspace last created or touched by this process, if any."""
        if self._active is None:
            return None
        return self._find(self._active)

    # -- Mutation --------------------------------------------------------------

    async def create(self, name: str, path: str | Path) -> Workspace:
        """Register a workspace.  Raises ``DuplicateWorkspaceError`` if the name is taken.

        *path* is made absolute but not checked for existence.
        """
        if self._find(name) is not None:
            raise DuplicateWorkspaceError(name)

        workspace = Workspace(name=name, path=str(Path(path).expanduser().absolute()), last_active=utcnow())
        workspaces = [*self._workspaces, workspace]
        await self._save(workspaces)

        self._active = name
        logger.debug("Registry: created workspace {} at {}", name, workspace.path)
        return workspace

    async def touch(self, name: str) -> Workspace:
        """Mark a workspace as active now.  Raises ``WorkspaceNotFoundError`` if missing."""
        current = self.get(name)
        workspace = current.model_copy(update={"last_active": utcnow()})
        workspaces = [workspace if w.name == name else w for w in self._workspaces]
        await self._save(workspaces)

        self._active = name
        logger.debug("Registry: touched workspace {}", name)
        return workspace

    # -- Internals -------------------------------------------------------------

    def _find(self, name: str) -> Workspace | None:
        for workspace in self._workspaces:
            if workspace.name == name:
                return workspace
        return None

    async def _save(self, workspaces: list[Workspace]) -> None:
        # In-memory state only changes once the file is written.
        await self._document.save(WorkspaceRegistryState(workspaces=workspaces))
        self._workspaces = workspaces
