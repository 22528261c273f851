"""Local filesystem primitives shared by the registry and the goal store.

JSON documents are whole-file rewrites::

    {root}/workspaces.json
    {workspace}/.goals/state.json

Uses ``anyio.to_thread.run_sync`` for non-blocking file I/O.

Writes of JSON documents are atomic: data is written to a temporary file in
the same directory, then renamed to the target path.  Markdown documents that
must not already exist (new goals, learnings) are created exclusively so a
concurrent writer surfaces as ``FileExistsError`` rather than an overwrite.

There is no locking across processes: the last writer of a JSON document wins.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from functools import partial
from pathlib import Path
from typing import Generic, TypeVar

from anyio import to_thread
from pydantic import BaseModel, ValidationError

from goalkeeper.core.errors import MalformedStateError

ModelT = TypeVar("ModelT", bound=BaseModel)


class JsonDocument(Generic[ModelT]):
    """A pydantic model persisted as a single pretty-printed JSON file."""

    def __init__(self, path: str | Path, model: type[ModelT]) -> None:
        self.path = Path(path)
        self._model = model

    async def load(self) -> ModelT:
        """Read and validate the document.

        Raises ``FileNotFoundError`` if the file is missing and
        ``MalformedStateError`` if it does not parse into the model.
        """
        try:
            raw = await to_thread.run_sync(partial(read_file, self.path))
            return self._model.model_validate_json(raw)
        except (UnicodeDecodeError, ValidationError) as exc:
            msg = f"Malformed state in {self.path}: {exc}"
            raise MalformedStateError(msg) from exc

    async def save(self, document: ModelT) -> None:
        data = document.model_dump_json(indent=2)
        await to_thread.run_sync(partial(atomic_write, self.path, data))


# -- Sync helpers (run in thread pool) -----------------------------------------


def atomic_write(path: Path, data: str) -> None:
    """Write data atomically: temp file + rename.

    Ensures readers never see a partially-written file.  The temp file is
    created in the same directory so ``os.replace`` is atomic on POSIX.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        # Clean up temp file on any failure.
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def exclusive_write(path: Path, data: str) -> None:
    """Create *path* with *data*.  Raises ``FileExistsError`` if it exists."""
    with path.open("x", encoding="utf-8") as f:
        f.write(data)


def read_file(path: Path) -> str:
    """Read file contents.  Raises ``FileNotFoundError`` if missing."""
    return path.read_text(encoding="utf-8")


def list_subdirs(path: Path) -> list[str]:
    """Names of immediate subdirectories, in enumeration order.  Empty if *path* is missing."""
    if not path.is_dir():
        return []
    return [entry.name for entry in path.iterdir() if entry.is_dir()]


def list_files(path: Path) -> list[str]:
    """Names of regular files directly inside *path*.  Empty if *path* is missing."""
    if not path.is_dir():
        return []
    return [entry.name for entry in path.iterdir() if entry.is_file()]
