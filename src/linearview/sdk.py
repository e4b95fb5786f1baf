"""SDK composition root for linear-view.

:class:`LinearView` wires the session store, the Linear client, the access
gate, the issue filter and customer-request intake together. The stored
access token is read fresh from the session store on every call; nothing
caches it between navigations.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from types import TracebackType

from linearview.access import Decision, ResourcePath, authorize, can_view_project, is_master
from linearview.auth import create_token_resolver
from linearview.config import AppConfig
from linearview.exceptions import AccessDeniedError, IssueNotFoundError, LoginError, ProjectNotFoundError
from linearview.filtering import FilterCriteria, apply, filter_projects
from linearview.intake import IssueCreation
from linearview.models.issue import Issue
from linearview.models.project import Project, ProjectDetail
from linearview.models.request import CreatedIssueRef, IssueCreationRequest
from linearview.providers.linear import LinearClient
from linearview.session import SessionStore

logger = logging.getLogger(__name__)


class LinearView:
    """Session-scoped entry point for browsing projects and filing customer requests.

    Use as an async context manager so the API client is opened and closed::

        async with await LinearView.from_config(config) as view:
            decision = view.navigate("/projects")
    """

    def __init__(self, *, config: AppConfig, client: LinearClient, store: SessionStore) -> None:
        self._config = config
        self._client = client
        self._store = store
        self._intake = IssueCreation(client)

    @classmethod
    async def from_config(cls, config: AppConfig) -> LinearView:
        api_key = await create_token_resolver(config).resolve()
        client = LinearClient(
            api_key=api_key,
            api_url=config.api_url,
            timeout=config.timeout,
            max_retries=config.max_retries,
        )
        return cls(config=config, client=client, store=SessionStore(config.session_path))

    async def __aenter__(self) -> LinearView:
        await self._client.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self._client.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def token(self) -> str | None:
        return self._store.get()

    @property
    def has_full_access(self) -> bool:
        return is_master(self.token, self._config.master_token)

    def navigate(self, path: ResourcePath | str) -> Decision:
        return authorize(self.token, path, master_token=self._config.master_token)

    async def login(self, candidate: str) -> str:
        """Validate ``candidate`` and store it as the session token.

        The master token is accepted without an API call; any other value must
        name an existing project.

        Raises:
            LoginError: If ``candidate`` is empty.
            ProjectNotFoundError: If no project has that id.
        """
        token = candidate.strip()
        if not token:
            raise LoginError("project id is missing")

        if is_master(token, self._config.master_token):
            self._store.set(token)
            logger.info("Logged in with full access")
            return token

        if not await self._client.project_exists(token):
            raise ProjectNotFoundError(token)
        self._store.set(token)
        logger.info("Logged in to project %s", token)
        return token

    def logout(self) -> None:
        self._store.clear()
        logger.info("Logged out")

    async def list_projects(self, query: str = "") -> list[Project]:
        """List every project matching ``query``.

        Raises:
            AccessDeniedError: If the session does not have full access.
        """
        if not self.has_full_access:
            raise AccessDeniedError()
        return filter_projects(await self._client.get_projects(), query)

    async def project_issue_count(self, project_id: str) -> int:
        self._require_access(project_id)
        return await self._client.get_project_issue_count(project_id)

    async def load_project(self, project_id: str) -> ProjectDetail | None:
        """Load a project's issues and milestones; None when the project does not exist.

        Raises:
            AccessDeniedError: If the session may not view this project.
        """
        self._require_access(project_id)
        return await self._client.get_project(project_id)

    async def load_issue(self, project_id: str, issue_id: str) -> Issue:
        """Load one issue of a project, with its description, dates and milestone.

        Raises:
            AccessDeniedError: If the session may not view this project.
            ProjectNotFoundError: If the project does not exist.
            IssueNotFoundError: If the project has no issue with that id.
        """
        detail = await self.load_project(project_id)
        if detail is None:
            raise ProjectNotFoundError(project_id)
        for issue in detail.issues:
            if issue.id == issue_id:
                return issue
        raise IssueNotFoundError(project_id, issue_id)

    def filter_issues(self, issues: Iterable[Issue], criteria: FilterCriteria) -> list[Issue]:
        return apply(issues, criteria)

    async def submit_request(self, request: IssueCreationRequest) -> CreatedIssueRef:
        self._require_access(request.project_id)
        return await self._intake.submit(request)

    def _require_access(self, project_id: str) -> None:
        if not can_view_project(self.token, project_id, master_token=self._config.master_token):
            raise AccessDeniedError(project_id)
