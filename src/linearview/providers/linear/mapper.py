"""Mapping from Linear GraphQL payloads to linear-view models."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from linearview.exceptions import ProviderError
from linearview.models.enums import Priority
from linearview.models.issue import Issue, IssueState, Label, Milestone
from linearview.models.project import Project, ProjectDetail, Team, TeamLabel


def nodes(container: dict[str, Any] | None, key: str) -> list[dict[str, Any]]:
    """Return the ``nodes`` of the connection at ``container[key]``; missing connections are empty."""
    if container is None:
        return []
    connection = container.get(key)
    if connection is None:
        return []
    if not isinstance(connection, dict) or not isinstance(connection.get("nodes", []), list):
        raise ProviderError(f"Missing/invalid connection at key '{key}'")
    return [node for node in connection.get("nodes", []) if isinstance(node, dict)]


def _project_fields(node: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": node.get("id"),
        "name": node.get("name"),
        "description": node.get("description"),
        "state": node.get("state") or "backlog",
        "start_date": node.get("startDate"),
        "target_date": node.get("targetDate"),
    }


def milestone_from_node(node: dict[str, Any]) -> Milestone:
    try:
        return Milestone(
            id=node.get("id"),
            name=node.get("name"),
            description=node.get("description"),
            target_date=node.get("targetDate"),
        )
    except ValidationError as exc:
        raise ProviderError(f"invalid milestone payload: {exc}") from exc


def issue_from_node(node: dict[str, Any]) -> Issue:
    try:
        priority = Priority.from_wire(node.get("priority") or 0)
    except (TypeError, ValueError) as exc:
        raise ProviderError(f"invalid issue priority: {node.get('priority')!r}") from exc

    milestone_node = node.get("projectMilestone")
    try:
        return Issue(
            id=node.get("id"),
            title=node.get("title"),
            description=node.get("description"),
            priority=priority,
            state=IssueState.model_validate(node.get("state")),
            labels=[Label.model_validate(label) for label in nodes(node, "labels")],
            milestone=milestone_from_node(milestone_node) if isinstance(milestone_node, dict) else None,
            created_at=node.get("createdAt"),
            updated_at=node.get("updatedAt"),
        )
    except ValidationError as exc:
        raise ProviderError(f"invalid issue payload: {exc}") from exc


def project_from_node(node: dict[str, Any]) -> Project:
    try:
        return Project.model_validate(_project_fields(node))
    except ValidationError as exc:
        raise ProviderError(f"invalid project payload: {exc}") from exc


def project_detail_from_node(node: dict[str, Any]) -> ProjectDetail:
    issues = [issue_from_node(issue) for issue in nodes(node, "issues")]
    milestones = [milestone_from_node(milestone) for milestone in nodes(node, "projectMilestones")]
    try:
        return ProjectDetail.model_validate({**_project_fields(node), "issues": issues, "milestones": milestones})
    except ValidationError as exc:
        raise ProviderError(f"invalid project payload: {exc}") from exc


def team_from_node(node: dict[str, Any]) -> Team:
    try:
        return Team(
            id=node.get("id"),
            labels=[TeamLabel.model_validate(label) for label in nodes(node, "labels")],
        )
    except ValidationError as exc:
        raise ProviderError(f"invalid team payload: {exc}") from exc
