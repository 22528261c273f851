"""Per-workspace goal store.

Owns the ``.goals`` hierarchy under one workspace::

    {workspace}/.goals/state.json
    {workspace}/.goals/goals/{goal}/plan.md
    {workspace}/.goals/goals/{goal}/learnings/{encoded-timestamp}.md
    {workspace}/.goals/learnings/{encoded-timestamp}.md

A store is constructed per workspace path and never consults the workspace
registry.  Learnings are scoped either to the workspace (``goal=None``) or to
a single goal.

Creating a goal is not atomic: a crash between creating the directory and
writing ``plan.md`` leaves a goal with no plan, which ``get_plan`` reports
as absent.
"""

from __future__ import annotations

import re
from functools import partial
from pathlib import Path

from anyio import to_thread
from loguru import logger

from goalkeeper.core.errors import (
    GoalExistsError,
    GoalNotFoundError,
    InvalidNameError,
    LearningExistsError,
    LearningNotFoundError,
)
from goalkeeper.core.learnings import (
    decode_filename,
    encode_filename,
    format_learning,
    is_learning_filename,
    validate_timestamp,
)
from goalkeeper.core.markdown import extract_description
from goalkeeper.core.models.common import utcnow
from goalkeeper.core.models.goal import Goal, GoalState, GoalSummary, Learning, LearningEntry
from goalkeeper.core.store.local import (
    JsonDocument,
    atomic_write,
    exclusive_write,
    list_files,
    list_subdirs,
    read_file,
)

GOALS_ROOT = ".goals"
GOALS_DIR = "goals"
LEARNINGS_DIR = "learnings"
PLAN_FILENAME = "plan.md"
STATE_FILENAME = "state.json"

# Path separators and NUL.
_SEPARATOR = re.compile(r"[/\\\x00]")
# Separators plus any control character.
_UNSAFE_NAME = re.compile(r"[/\\\x00-\x1f\x7f]")


def check_path_segment(name: str) -> None:
    """Raise ``InvalidNameError`` if *name* would address anything but one entry of the goals directory."""
    if not name or name in {".", ".."} or _SEPARATOR.search(name):
        raise InvalidNameError(repr(name))


def validate_goal_name(name: str) -> None:
    """Stricter check for names of new goals: also no control characters or surrounding whitespace."""
    check_path_segment(name)
    if name.strip() != name or _UNSAFE_NAME.search(name):
        raise InvalidNameError(repr(name))


class GoalStore:
    """Goals, plans, learnings and the active-goal pointer of one workspace.

    Call ``init()`` once before any other method.
    """

    def __init__(self, workspace_path: str | Path) -> None:
        self.root = Path(workspace_path) / GOALS_ROOT
        self._document = JsonDocument(self.root / STATE_FILENAME, GoalState)
        self._state = GoalState()

    # -- Paths -----------------------------------------------------------------

    @property
    def goals_dir(self) -> Path:
        return self.root / GOALS_DIR

    def _goal_dir(self, name: str) -> Path:
        # Existing directories may predate name validation; only refuse path escapes here.
        check_path_segment(name)
        return self.goals_dir / name

    def _learnings_dir(self, goal: str | None) -> Path:
        if goal is None:
            return self.root / LEARNINGS_DIR
        return self._goal_dir(goal) / LEARNINGS_DIR

    # -- Lifecycle -------------------------------------------------------------

    async def init(self) -> None:
        """Bootstrap the goals root if absent, then load ``state.json``.

        An existing root is left untouched.  A missing state file is written
        with defaults; any other load failure propagates.
        """
        created = await to_thread.run_sync(partial(_bootstrap_root, self.root))
        if created:
            logger.info("Goals: initialized {}", self.root)

        try:
            self._state = await self._document.load()
        except FileNotFoundError:
            self._state = GoalState()
            await self._document.save(self._state)

        active = self._state.active_goal
        if active is not None and not await to_thread.run_sync((self.goals_dir / active).is_dir):
            logger.warning("Goals: active goal {} in {} has no goal directory", active, self._document.path)

    # -- Goals -----------------------------------------------------------------

    async def create_goal(self, name: str, plan_content: str = "") -> Goal:
        """Create a goal with its plan.  Raises ``GoalExistsError`` if the directory exists."""
        validate_goal_name(name)
        goal_dir = self._goal_dir(name)
        try:
            await to_thread.run_sync(partial(_create_goal_dirs, goal_dir))
        except FileExistsError:
            raise GoalExistsError(name) from None
        await to_thread.run_sync(partial(atomic_write, goal_dir / PLAN_FILENAME, plan_content))

        now = utcnow()
        logger.debug("Goals: created goal {} in {}", name, self.root)
        return Goal(name=name, created_at=now, last_updated=now)

    async def list_goals(self) -> list[str]:
        """Names of all goal directories, in directory enumeration order."""
        return await to_thread.run_sync(partial(list_subdirs, self.goals_dir))

    async def goal_exists(self, name: str) -> bool:
        goal_dir = self._goal_dir(name)
        return await to_thread.run_sync(goal_dir.is_dir)

    async def get_plan(self, name: str) -> str | None:
        """Plan content, or ``None`` if the goal or its plan does not exist."""
        path = self._goal_dir(name) / PLAN_FILENAME
        try:
            return await to_thread.run_sync(partial(read_file, path))
        except FileNotFoundError:
            return None

    async def update_plan(self, name: str, content: str) -> None:
        """Overwrite a goal's plan.  Raises ``GoalNotFoundError`` if the goal is missing."""
        if not await self.goal_exists(name):
            raise GoalNotFoundError(name)
        await to_thread.run_sync(partial(atomic_write, self._goal_dir(name) / PLAN_FILENAME, content))
        logger.debug("Goals: updated plan of {}", name)

    async def get_goal_description(self, name: str) -> str | None:
        plan = await self.get_plan(name)
        if plan is None:
            return None
        return extract_description(plan)

    async def get_goal_summaries(self) -> list[GoalSummary]:
        """One summary per goal; goals without a derivable description are kept."""
        return [
            GoalSummary(name=name, description=await self.get_goal_description(name))
            for name in await self.list_goals()
        ]

    # -- Active goal -----------------------------------------------------------

    async def set_active_goal(self, name: str) -> None:
        """Persist *name* as the active goal.  Raises ``GoalNotFoundError`` if missing.

        On any failure the previous active goal stays in effect.
        """
        if not await self.goal_exists(name):
            raise GoalNotFoundError(name)
        state = GoalState(active_goal=name, last_updated=utcnow())
        await self._document.save(state)
        self._state = state
        logger.debug("Goals: active goal is now {}", name)

    def get_active_goal(self) -> str | None:
        """Active goal as of the last ``init``/``set_active_goal`` (no disk read)."""
        return self._state.active_goal

    # -- Learnings -------------------------------------------------------------

    async def add_learning(self, learning: Learning, goal: str | None = None) -> None:
        """Write a learning to the workspace scope or to *goal*'s scope.

        Raises ``GoalNotFoundError`` for a missing goal, ``LearningExistsError``
        if the scope already has a learning with this timestamp and
        ``InvalidTimestampError`` for a non-canonical timestamp.
        """
        validate_timestamp(learning.timestamp)
        if goal is not None and not await self.goal_exists(goal):
            raise GoalNotFoundError(goal)

        learnings_dir = self._learnings_dir(goal)
        path = learnings_dir / encode_filename(learning.timestamp)
        try:
            await to_thread.run_sync(partial(_write_learning, path, format_learning(learning)))
        except FileExistsError:
            raise LearningExistsError(learning.timestamp) from None
        logger.debug("Goals: recorded learning {} (goal={})", learning.timestamp, goal)

    async def get_learnings(self, goal: str | None = None) -> list[LearningEntry]:
        """All learnings in a scope, newest first.  Empty if the scope has none."""
        learnings_dir = self._learnings_dir(goal)
        entries = await to_thread.run_sync(partial(_read_learnings, learnings_dir))
        # Canonical timestamps are fixed-width UTC, so string order is time order.
        return sorted(entries, key=lambda e: e.timestamp, reverse=True)

    async def get_learning(self, timestamp: str, goal: str | None = None) -> str:
        """Content of one learning.  Raises ``LearningNotFoundError`` if missing."""
        path = self._learnings_dir(goal) / encode_filename(timestamp)
        try:
            return await to_thread.run_sync(partial(read_file, path))
        except FileNotFoundError:
            raise LearningNotFoundError(timestamp) from None


# -- Sync helpers (run in thread pool) -----------------------------------------


def _bootstrap_root(root: Path) -> bool:
    """Create the goals root with its subdirectories.  Returns ``False`` if it already existed."""
    if root.exists():
        return False
    root.mkdir(parents=True)
    (root / GOALS_DIR).mkdir()
    (root / LEARNINGS_DIR).mkdir()
    return True


def _create_goal_dirs(goal_dir: Path) -> None:
    """Create a goal directory exclusively.  Raises ``FileExistsError`` if present."""
    goal_dir.parent.mkdir(parents=True, exist_ok=True)
    goal_dir.mkdir()
    (goal_dir / LEARNINGS_DIR).mkdir(exist_ok=True)


def _write_learning(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    exclusive_write(path, content)


def _read_learnings(learnings_dir: Path) -> list[LearningEntry]:
    return [
        LearningEntry(timestamp=decode_filename(filename), content=read_file(learnings_dir / filename))
        for filename in list_files(learnings_dir)
        if is_learning_filename(filename)
    ]
