"""In-memory issue filtering.

Filtering is a pure, synchronous reduction of an already-loaded issue list.
Dimensions combine with AND; selections within the label and state
dimensions combine with OR. Callers decide when to re-run it (for example
after debouncing keystrokes); nothing here keeps state between calls.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, Field

from linearview.models.issue import Issue
from linearview.models.project import Project

ALL_MILESTONES = "all"


class FilterCriteria(BaseModel):
    """Active filter selections; every field is empty (or ``"all"``) by default."""

    query: str = ""
    labels: frozenset[str] = Field(default_factory=frozenset)
    states: frozenset[str] = Field(default_factory=frozenset)
    milestone: str = ALL_MILESTONES

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        return not self.query and not self.labels and not self.states and self.milestone == ALL_MILESTONES


def matches(issue: Issue, criteria: FilterCriteria) -> bool:
    """Whether ``issue`` satisfies every dimension of ``criteria``."""
    if criteria.query and criteria.query.casefold() not in issue.title.casefold():
        return False
    if criteria.labels and criteria.labels.isdisjoint(issue.label_names):
        return False
    if criteria.states and issue.state.name not in criteria.states:
        return False
    if criteria.milestone != ALL_MILESTONES:
        if issue.milestone is None or issue.milestone.id != criteria.milestone:
            return False
    return True


def apply(issues: Iterable[Issue], criteria: FilterCriteria) -> list[Issue]:
    """Return the issues matching ``criteria`` as a new list, in input order."""
    return [issue for issue in issues if matches(issue, criteria)]


def distinct_label_names(issues: Iterable[Issue]) -> set[str]:
    """Label names present on the loaded issues."""
    return {label.name for issue in issues for label in issue.labels}


def distinct_state_names(issues: Iterable[Issue]) -> set[str]:
    """State names present on the loaded issues."""
    return {issue.state.name for issue in issues}


def filter_projects(projects: Iterable[Project], query: str) -> list[Project]:
    """Keep projects whose name or description contains ``query``, ignoring case."""
    needle = query.casefold()
    if not needle:
        return list(projects)
    return [
        project
        for project in projects
        if needle in project.name.casefold() or needle in (project.description or "").casefold()
    ]
