"""Project and team models."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from linearview.models.issue import Issue, Milestone


class Project(BaseModel):
    """A project as listed across all visible teams."""

    id: str
    name: str
    description: str | None = None
    state: str = "backlog"
    start_date: date | None = None
    target_date: date | None = None

    model_config = {"frozen": True}


class ProjectDetail(Project):
    """A project together with its full issue set and milestones."""

    issues: list[Issue] = Field(default_factory=list)
    milestones: list[Milestone] = Field(default_factory=list)


class TeamLabel(BaseModel):
    """A label as defined in a team's vocabulary."""

    id: str
    name: str

    model_config = {"frozen": True}


class Team(BaseModel):
    """A team owning a project, with the labels it defines."""

    id: str
    labels: list[TeamLabel] = Field(default_factory=list)

    model_config = {"frozen": True}

    def find_label(self, name: str) -> TeamLabel | None:
        """Return the label with exactly ``name`` (case-sensitive), if any."""
        for label in self.labels:
            if label.name == name:
                return label
        return None
