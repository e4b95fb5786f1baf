"""Domain models for linear-view."""

from linearview.models.enums import Priority, StateType
from linearview.models.issue import Issue, IssueState, Label, Milestone
from linearview.models.project import Project, ProjectDetail, Team, TeamLabel
from linearview.models.request import CreatedIssueRef, IssueCreationRequest

__all__ = [
    "CreatedIssueRef",
    "Issue",
    "IssueCreationRequest",
    "IssueState",
    "Label",
    "Milestone",
    "Priority",
    "Project",
    "ProjectDetail",
    "StateType",
    "Team",
    "TeamLabel",
]
