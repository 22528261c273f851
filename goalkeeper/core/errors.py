"""Domain exceptions raised by the goal store and workspace registry.

Managers raise these, never CLI errors -- translating them into user-facing
output is the caller's responsibility.  Storage ``OSError``s are not wrapped.
"""

from __future__ import annotations


class GoalkeeperError(Exception):
    """Base class for all typed failures of the persistence core."""


# -- Lookup ------------------------------------------------------------------


class NotFoundError(GoalkeeperError, LookupError):
    """A referenced workspace, goal or learning does not exist."""


class WorkspaceNotFoundError(NotFoundError):
    """Raised when no registered workspace has the given name."""


class GoalNotFoundError(NotFoundError):
    """Raised when no goal directory exists for the given name."""


class LearningNotFoundError(NotFoundError):
    """Raised when no learning file matches the given timestamp."""


# -- Identity ----------------------------------------------------------------


class AlreadyExistsError(GoalkeeperError, ValueError):
    """An entity with the same identity is already stored."""


class DuplicateWorkspaceError(AlreadyExistsError):
    """Raised when a workspace with the given name is already registered."""


class GoalExistsError(AlreadyExistsError):
    """Raised when a goal directory with the given name already exists."""


class LearningExistsError(AlreadyExistsError):
    """Raised when a learning with the same timestamp exists in the scope."""


# -- Input / state -----------------------------------------------------------


class MalformedStateError(GoalkeeperError, ValueError):
    """A persisted JSON document could not be parsed.  Never recovered."""


class InvalidNameError(GoalkeeperError, ValueError):
    """Raised when a goal name is not usable as a single directory name."""


class InvalidTimestampError(GoalkeeperError, ValueError):
    """Raised when a learning timestamp is not canonical ``YYYY-MM-DDTHH:MM:SS.sssZ``."""
