"""Goal, goal state and learning data models.

``GoalState`` is the only JSON document inside a workspace's goals root;
goals and learnings are plain directories and markdown files.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from goalkeeper.core.models.common import Timestamp, utcnow

# -- Goal --------------------------------------------------------------------


class GoalState(BaseModel):
    """Contents of ``.goals/state.json``."""

    active_goal: str | None = None
    last_updated: Timestamp = Field(default_factory=utcnow)


class Goal(BaseModel):
    """Metadata returned when a goal is created."""

    name: str
    created_at: Timestamp = Field(default_factory=utcnow)
    last_updated: Timestamp = Field(default_factory=utcnow)


class GoalSummary(BaseModel):
    """A goal name paired with the description derived from its plan."""

    name: str
    description: str | None = None


# -- Learning ----------------------------------------------------------------


class Learning(BaseModel):
    """A structured note, identified by its timestamp within one scope."""

    timestamp: str = Field(description="Canonical UTC instant, e.g. 2024-01-01T00:00:00.000Z")
    title: str
    context: str = ""
    details: str = ""
    rationale: str = ""
    alternatives: str = ""
    references: str = ""


class LearningEntry(BaseModel):
    """A stored learning as read back from disk."""

    timestamp: str
    content: str

