"""Issue-side models loaded from a project payload.

All models are read-only snapshots of what the API returned; the only write
path is issue creation (see :mod:`linearview.intake`).
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from linearview.models.enums import Priority, StateType


class Label(BaseModel):
    """A tag attached to an issue."""

    name: str
    color: str = ""

    model_config = {"frozen": True}


class IssueState(BaseModel):
    """Workflow state of an issue.

    ``type`` is a :class:`StateType` for the categories Linear documents and the
    raw string for any category it adds later.
    """

    name: str
    type: StateType | str = Field(union_mode="left_to_right")
    color: str = ""

    model_config = {"frozen": True}


class Milestone(BaseModel):
    """A named, optionally dated checkpoint within a project."""

    id: str
    name: str
    description: str | None = None
    target_date: date | None = None

    model_config = {"frozen": True}


class Issue(BaseModel):
    """One unit of tracked work.

    ``labels`` may contain the same name twice; filters treat labels as a set
    of names, so duplicates collapse.
    """

    id: str
    title: str
    description: str | None = None
    priority: Priority = Priority.NO_PRIORITY
    state: IssueState
    labels: list[Label] = Field(default_factory=list)
    milestone: Milestone | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"frozen": True}

    @property
    def label_names(self) -> frozenset[str]:
        return frozenset(label.name for label in self.labels)
