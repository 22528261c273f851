"""Data models for the persistence core."""

from goalkeeper.core.models.common import Timestamp, format_timestamp, now_timestamp, utcnow
from goalkeeper.core.models.goal import Goal, GoalState, GoalSummary, Learning, LearningEntry
from goalkeeper.core.models.workspace import Workspace, WorkspaceRegistryState

__all__ = [
    # Goal
    "Goal",
    "GoalState",
    "GoalSummary",
    # Learning
    "Learning",
    "LearningEntry",
    # Common
    "Timestamp",
    # Workspace
    "Workspace",
    "WorkspaceRegistryState",
    "format_timestamp",
    "now_timestamp",
    "utcnow",
]
