"""Async client for the Linear GraphQL API."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any

import httpx

from linearview.config import DEFAULT_API_URL
from linearview.exceptions import AuthenticationError, ProviderError
from linearview.models.enums import Priority
from linearview.models.project import Project, ProjectDetail, Team
from linearview.models.request import CreatedIssueRef
from linearview.providers.linear import queries
from linearview.providers.linear._retrying_transport import RetryingTransport
from linearview.providers.linear.mapper import (
    nodes,
    project_detail_from_node,
    project_from_node,
    team_from_node,
)

logger = logging.getLogger(__name__)


class LinearClient:
    """Thin async wrapper over the handful of Linear queries and mutations linear-view uses.

    Use as an async context manager so the underlying HTTP client is closed::

        async with LinearClient(api_key=key) as client:
            projects = await client.get_projects()

    Every call is a single request/response round-trip. Failures surface as
    :class:`ProviderError` (or :class:`AuthenticationError` for rejected keys);
    a project that does not exist is reported as ``None`` / ``False`` instead.
    """

    def __init__(
        self,
        *,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        max_retries: int = 0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._api_url = api_url
        self._timeout = timeout
        self._max_retries = max_retries
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> LinearClient:
        transport = self._transport
        if self._max_retries > 0:
            transport = RetryingTransport(transport=transport, max_retries=self._max_retries)
        self._client = httpx.AsyncClient(
            headers={"Authorization": self._api_key, "Content-Type": "application/json"},
            timeout=httpx.Timeout(self._timeout),
            transport=transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_projects(self) -> list[Project]:
        """Return every project visible across all teams, flattened in team order."""
        data = await self._execute("Projects", queries.GET_PROJECTS)
        if not isinstance(data.get("teams"), dict):
            raise ProviderError("No teams found")
        projects: list[Project] = []
        for team in nodes(data, "teams"):
            projects.extend(project_from_node(project) for project in nodes(team, "projects"))
        return projects

    async def get_project(self, project_id: str) -> ProjectDetail | None:
        """Load a project with its issues and milestones, or None if it does not exist."""
        data = await self._execute(
            "GetProjectIssues",
            queries.GET_PROJECT_ISSUES,
            {"projectId": project_id},
            allow_not_found=True,
        )
        project = data.get("project")
        if not isinstance(project, dict):
            return None
        return project_detail_from_node(project)

    async def project_exists(self, project_id: str) -> bool:
        data = await self._execute(
            "CheckProject",
            queries.GET_PROJECT_EXISTS,
            {"projectId": project_id},
            allow_not_found=True,
        )
        return isinstance(data.get("project"), dict)

    async def get_project_issue_count(self, project_id: str) -> int:
        data = await self._execute(
            "ProjectIssueCount",
            queries.GET_PROJECT_ISSUE_COUNT,
            {"projectId": project_id},
            allow_not_found=True,
        )
        project = data.get("project")
        if not isinstance(project, dict):
            return 0
        return len(nodes(project, "issues"))

    async def get_project_teams(self, project_id: str) -> list[Team]:
        """Return the teams owning a project, in API order, with their label vocabularies."""
        data = await self._execute(
            "GetProjectTeam",
            queries.GET_PROJECT_TEAMS,
            {"projectId": project_id},
            allow_not_found=True,
        )
        project = data.get("project")
        if not isinstance(project, dict):
            return []
        return [team_from_node(team) for team in nodes(project, "teams")]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create_label(self, *, team_id: str, name: str, color: str) -> str:
        """Create a team label and return its id."""
        data = await self._execute(
            "CreateLabel",
            queries.CREATE_LABEL,
            {"input": {"name": name, "teamId": team_id, "color": color}},
        )
        payload = self._require_success(data, "labelCreate")
        return self._require_str(self._require_dict(payload, "label"), "id")

    async def create_issue(
        self,
        *,
        team_id: str,
        project_id: str,
        title: str,
        description: str,
        priority: Priority,
        label_ids: list[str],
    ) -> CreatedIssueRef:
        data = await self._execute(
            "CreateIssue",
            queries.CREATE_ISSUE,
            {
                "input": {
                    "teamId": team_id,
                    "projectId": project_id,
                    "title": title,
                    "description": description,
                    "priority": priority.to_wire(),
                    "labelIds": label_ids,
                }
            },
        )
        issue = self._require_dict(self._require_success(data, "issueCreate"), "issue")
        return CreatedIssueRef(id=self._require_str(issue, "id"), title=self._require_str(issue, "title"))

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _execute(
        self,
        operation: str,
        query: str,
        variables: dict[str, Any] | None = None,
        *,
        allow_not_found: bool = False,
    ) -> dict[str, Any]:
        if self._client is None:
            raise ProviderError("Client is not initialized. Use 'async with'.")

        logger.debug("Linear %s %s", operation, variables or {})
        try:
            response = await self._client.post(
                self._api_url,
                json={"query": query, "variables": variables or {}, "operationName": operation},
            )
        except httpx.TransportError as exc:
            raise ProviderError(f"{operation} request failed: {exc}") from exc

        if response.status_code in (401, 403):
            raise AuthenticationError(f"Linear API rejected the API key ({response.status_code})")
        try:
            payload: Any = response.json()
        except ValueError as exc:
            if response.is_error:
                raise ProviderError(f"{operation} failed with HTTP {response.status_code}") from exc
            raise ProviderError(f"{operation} returned a non-JSON response") from exc
        if not isinstance(payload, dict):
            raise ProviderError(f"{operation} returned an unexpected payload")

        errors = payload.get("errors") or []
        if errors:
            if allow_not_found and _is_not_found(errors):
                logger.debug("Linear %s: entity not found", operation)
                return {}
            raise ProviderError(f"GraphQL returned errors: {errors}")
        if response.is_error:
            raise ProviderError(f"{operation} failed with HTTP {response.status_code}")

        data = payload.get("data")
        if not isinstance(data, dict):
            raise ProviderError("GraphQL response missing data payload")
        return data

    @classmethod
    def _require_success(cls, data: dict[str, Any], key: str) -> dict[str, Any]:
        payload = cls._require_dict(data, key)
        if payload.get("success") is not True:
            raise ProviderError(f"{key} reported failure")
        return payload

    @staticmethod
    def _require_dict(data: dict[str, Any], key: str) -> dict[str, Any]:
        value = data.get(key)
        if not isinstance(value, dict):
            raise ProviderError(f"Missing/invalid object at key '{key}'")
        return value

    @staticmethod
    def _require_str(data: dict[str, Any], key: str) -> str:
        value = data.get(key)
        if not isinstance(value, str):
            raise ProviderError(f"Missing/invalid string at key '{key}'")
        return value


def _is_not_found(errors: list[Any]) -> bool:
    for error in errors:
        if not isinstance(error, dict):
            return False
        message = str(error.get("message", "")).lower()
        extensions = error.get("extensions") or {}
        user_message = str(extensions.get("userPresentableMessage", "")).lower() if isinstance(extensions, dict) else ""
        if "not found" not in message and "not found" not in user_message:
            return False
    return True
