"""Shared test fixtures for linear-view tests."""

from __future__ import annotations

from pathlib import Path
from types import TracebackType

import pytest

from linearview.config import AppConfig
from linearview.exceptions import ProviderError
from linearview.models.enums import Priority, StateType
from linearview.models.issue import Issue, IssueState, Label, Milestone
from linearview.models.project import Project, ProjectDetail, Team
from linearview.models.request import CreatedIssueRef

MASTER = "team-master"


def make_issue(
    *,
    id: str = "I1",
    title: str = "Issue",
    state: str = "Todo",
    labels: list[str] | None = None,
    milestone: Milestone | None = None,
    priority: Priority = Priority.NO_PRIORITY,
) -> Issue:
    return Issue(
        id=id,
        title=title,
        priority=priority,
        state=IssueState(name=state, type=StateType.UNSTARTED, color="#ccc"),
        labels=[Label(name=name, color="#000") for name in (labels or [])],
        milestone=milestone,
    )


class FakeGateway:
    """In-memory stand-in for the Linear client's issue-creation calls."""

    def __init__(self, teams: list[Team] | None = None) -> None:
        self.teams = teams if teams is not None else [Team(id="team-1")]
        self.calls: list[str] = []
        self.created_labels: list[dict[str, str]] = []
        self.created_issues: list[dict[str, object]] = []
        self.fail_on: str | None = None

    async def get_project_teams(self, project_id: str) -> list[Team]:
        self.calls.append("get_project_teams")
        self._maybe_fail("get_project_teams")
        return self.teams

    async def create_label(self, *, team_id: str, name: str, color: str) -> str:
        self.calls.append("create_label")
        self._maybe_fail("create_label")
        self.created_labels.append({"team_id": team_id, "name": name, "color": color})
        return f"label-{len(self.created_labels)}"

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
        self.calls.append("create_issue")
        self._maybe_fail("create_issue")
        self.created_issues.append(
            {
                "team_id": team_id,
                "project_id": project_id,
                "title": title,
                "description": description,
                "priority": priority,
                "label_ids": label_ids,
            }
        )
        return CreatedIssueRef(id=f"issue-{len(self.created_issues)}", title=title)

    def _maybe_fail(self, call: str) -> None:
        if self.fail_on == call:
            raise ProviderError(f"{call} failed")


class FakeClient(FakeGateway):
    """Fake Linear client serving two projects from memory."""

    def __init__(self) -> None:
        super().__init__()
        self.projects = {
            "proj-123": ProjectDetail(
                id="proj-123",
                name="Portal",
                issues=[
                    make_issue(id="I1", title="Fix login bug", state="Open", labels=["bug"]),
                    make_issue(id="I2", title="Add dark mode", state="Done", labels=["feature"]),
                ],
            ),
            "proj-999": ProjectDetail(id="proj-999", name="Other"),
        }
        self.entered = False
        self.exited = False

    async def __aenter__(self) -> FakeClient:
        self.entered = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.exited = True

    async def project_exists(self, project_id: str) -> bool:
        self.calls.append("project_exists")
        return project_id in self.projects

    async def get_projects(self) -> list[Project]:
        return [Project(id=p.id, name=p.name) for p in self.projects.values()]

    async def get_project(self, project_id: str) -> ProjectDetail | None:
        return self.projects.get(project_id)

    async def get_project_issue_count(self, project_id: str) -> int:
        project = self.projects.get(project_id)
        return len(project.issues) if project else 0


@pytest.fixture
def master_token() -> str:
    return MASTER


@pytest.fixture
def login_bug() -> Issue:
    return make_issue(id="I1", title="Fix login bug", state="Open", labels=["bug"])


@pytest.fixture
def dark_mode() -> Issue:
    return make_issue(id="I2", title="Add dark mode", state="Done", labels=["feature"])


@pytest.fixture
def two_issues(login_bug: Issue, dark_mode: Issue) -> list[Issue]:
    return [login_bug, dark_mode]


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        master_token=MASTER,
        auth="token",
        token="lin_api_test",
        session_path=tmp_path / "session.json",
    )
