"""Customer-request submission.

A request becomes a Linear issue in three dependent steps: resolve the
project's owning team, find or create the team's "Customer Request" label,
then create the issue carrying that label. A failing step aborts the whole
submission with :class:`IssueCreationError`; nothing already done is undone.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from linearview.exceptions import IssueCreationError, LinearViewError
from linearview.models.enums import Priority
from linearview.models.project import Team
from linearview.models.request import CreatedIssueRef, IssueCreationRequest

logger = logging.getLogger(__name__)

CUSTOMER_REQUEST_LABEL = "Customer Request"
CUSTOMER_REQUEST_LABEL_COLOR = "#0052CC"
TITLE_PREFIX = "[CS] "

STEP_RESOLVE_TEAM = "resolve_team"
STEP_ENSURE_LABEL = "ensure_label"
STEP_CREATE_ISSUE = "create_issue"


class IssueGateway(Protocol):
    async def get_project_teams(self, project_id: str) -> list[Team]: ...

    async def create_label(self, *, team_id: str, name: str, color: str) -> str: ...

    async def create_issue(
        self,
        *,
        team_id: str,
        project_id: str,
        title: str,
        description: str,
        priority: Priority,
        label_ids: list[str],
    ) -> CreatedIssueRef: ...


def format_title(title: str) -> str:
    return f"{TITLE_PREFIX}{title}"


def format_description(customer_name: str, description: str) -> str:
    return f"**Customer Name:** {customer_name}\n\n{description}"


class IssueCreation:
    """Files customer requests as issues.

    Submissions through one instance run one at a time, and the label id
    found or created for a team is remembered, so repeated submissions from
    the same process never race to create duplicate labels. A failed issue
    mutation drops the cached id, so a label deleted in Linear is looked up
    again on the next submission. Submissions from separate processes are
    not coordinated.
    """

    def __init__(self, gateway: IssueGateway) -> None:
        self._gateway = gateway
        self._lock = asyncio.Lock()
        self._label_ids: dict[str, str] = {}

    async def submit(self, request: IssueCreationRequest) -> CreatedIssueRef:
        async with self._lock:
            return await self._submit(request)

    async def _submit(self, request: IssueCreationRequest) -> CreatedIssueRef:
        completed: list[str] = []
        step = STEP_RESOLVE_TEAM
        try:
            team = await self._resolve_team(request.project_id)
            completed.append(step)

            step = STEP_ENSURE_LABEL
            label_id = await self._ensure_label(team)
            completed.append(step)

            step = STEP_CREATE_ISSUE
            created = await self._gateway.create_issue(
                team_id=team.id,
                project_id=request.project_id,
                title=format_title(request.title),
                description=format_description(request.customer_name, request.description),
                priority=request.priority,
                label_ids=[label_id],
            )
        except IssueCreationError:
            raise
        except LinearViewError as exc:
            if step == STEP_CREATE_ISSUE:
                self._label_ids.pop(team.id, None)
            raise IssueCreationError(
                f"customer request failed at {step}: {exc}",
                step=step,
                completed_steps=tuple(completed),
            ) from exc

        logger.info("Created issue %s for project %s", created.id, request.project_id)
        return created

    async def _resolve_team(self, project_id: str) -> Team:
        teams = await self._gateway.get_project_teams(project_id)
        if not teams:
            raise IssueCreationError(
                f"Could not find team data for project {project_id}",
                step=STEP_RESOLVE_TEAM,
            )
        if len(teams) > 1:
            logger.debug("Project %s belongs to %d teams; using %s", project_id, len(teams), teams[0].id)
        return teams[0]

    async def _ensure_label(self, team: Team) -> str:
        cached = self._label_ids.get(team.id)
        if cached is not None:
            return cached

        existing = team.find_label(CUSTOMER_REQUEST_LABEL)
        if existing is not None:
            label_id = existing.id
        else:
            logger.info("Creating %r label for team %s", CUSTOMER_REQUEST_LABEL, team.id)
            label_id = await self._gateway.create_label(
                team_id=team.id,
                name=CUSTOMER_REQUEST_LABEL,
                color=CUSTOMER_REQUEST_LABEL_COLOR,
            )
        self._label_ids[team.id] = label_id
        return label_id
