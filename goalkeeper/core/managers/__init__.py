"""Data access managers for the persistence core.

Each manager encapsulates reads and writes of one on-disk hierarchy and
raises domain exceptions from ``goalkeeper.core.errors``, never CLI errors
-- that translation is the command layer's responsibility.
"""

from goalkeeper.core.managers.goals import GoalStore
from goalkeeper.core.managers.workspaces import WorkspaceRegistry

__all__ = ["GoalStore", "WorkspaceRegistry"]
