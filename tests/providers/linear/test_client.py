"""Tests for LinearClient against an httpx mock transport."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import date
from typing import Any

import httpx
import pytest

from linearview.exceptions import AuthenticationError, ProviderError
from linearview.models.enums import Priority, StateType
from linearview.providers.linear import LinearClient

Handler = Callable[[dict[str, Any]], httpx.Response]


def _client(handler: Handler, seen: list[dict[str, Any]] | None = None) -> LinearClient:
    async def transport_handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "lin_api_test"
        body = json.loads(request.read().decode("utf-8"))
        if seen is not None:
            seen.append(body)
        return handler(body)

    return LinearClient(api_key="lin_api_test", transport=httpx.MockTransport(transport_handler))


def _data(payload: dict[str, Any]) -> Callable[[dict[str, Any]], httpx.Response]:
    return lambda _body: httpx.Response(200, json={"data": payload})


def _not_found(_body: dict[str, Any]) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "data": None,
            "errors": [{"message": "Entity not found: Project", "extensions": {"code": "INPUT_ERROR"}}],
        },
    )


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_get_projects_flattens_teams() -> None:
    payload = {
        "teams": {
            "nodes": [
                {"projects": {"nodes": [{"id": "p1", "name": "One", "state": "started", "startDate": "2024-01-02"}]}},
                {"projects": {"nodes": [{"id": "p2", "name": "Two", "description": "d", "state": None}]}},
                {"projects": None},
            ]
        }
    }

    async with _client(_data(payload)) as client:
        projects = await client.get_projects()

    assert [p.id for p in projects] == ["p1", "p2"]
    assert projects[0].start_date == date(2024, 1, 2)
    assert projects[1].state == "backlog"


@pytest.mark.asyncio
async def test_get_projects_without_teams_is_an_error() -> None:
    async with _client(_data({"teams": None})) as client:
        with pytest.raises(ProviderError, match="No teams"):
            await client.get_projects()


@pytest.mark.asyncio
async def test_get_project_maps_issues_and_milestones() -> None:
    seen: list[dict[str, Any]] = []
    payload = {
        "project": {
            "id": "p1",
            "name": "Portal",
            "description": None,
            "startDate": None,
            "targetDate": "2024-09-30",
            "state": "started",
            "issues": {
                "nodes": [
                    {
                        "id": "i1",
                        "title": "Fix login bug",
                        "description": "**steps**",
                        "priority": 1,
                        "state": {"name": "Open", "type": "unstarted", "color": "#fff"},
                        "labels": {"nodes": [{"name": "bug", "color": "#f00"}]},
                        "projectMilestone": {"id": "m1", "name": "Beta", "description": None, "targetDate": None},
                        "createdAt": "2024-05-01T10:00:00.000Z",
                        "updatedAt": "2024-05-02T10:00:00.000Z",
                    },
                    {
                        "id": "i2",
                        "title": "Add dark mode",
                        "priority": 0,
                        "state": {"name": "Done", "type": "completed", "color": "#0f0"},
                        "labels": {"nodes": []},
                        "projectMilestone": None,
                    },
                ]
            },
            "projectMilestones": {"nodes": [{"id": "m1", "name": "Beta"}]},
        }
    }

    async with _client(_data(payload), seen) as client:
        detail = await client.get_project("p1")

    assert seen[0]["variables"] == {"projectId": "p1"}
    assert seen[0]["operationName"] == "GetProjectIssues"
    assert detail is not None
    assert detail.target_date == date(2024, 9, 30)
    first, second = detail.issues
    assert first.priority is Priority.HIGH
    assert first.state.type is StateType.UNSTARTED
    assert first.label_names == {"bug"}
    assert first.milestone is not None and first.milestone.id == "m1"
    assert first.created_at is not None and first.created_at.year == 2024
    assert second.priority is Priority.NO_PRIORITY
    assert second.milestone is None
    assert [m.name for m in detail.milestones] == ["Beta"]


@pytest.mark.asyncio
async def test_get_project_not_found_returns_none() -> None:
    async with _client(_not_found) as client:
        assert await client.get_project("missing") is None


@pytest.mark.asyncio
async def test_get_project_null_project_returns_none() -> None:
    async with _client(_data({"project": None})) as client:
        assert await client.get_project("missing") is None


@pytest.mark.asyncio
async def test_get_project_rejects_unknown_priority() -> None:
    payload = {
        "project": {
            "id": "p1",
            "name": "Portal",
            "issues": {
                "nodes": [{"id": "i1", "title": "x", "priority": 9, "state": {"name": "Open", "type": "started"}}]
            },
        }
    }

    async with _client(_data(payload)) as client:
        with pytest.raises(ProviderError, match="priority"):
            await client.get_project("p1")


@pytest.mark.asyncio
async def test_project_exists() -> None:
    async with _client(_data({"project": {"id": "p1"}})) as client:
        assert await client.project_exists("p1") is True
    async with _client(_not_found) as client:
        assert await client.project_exists("nope") is False


@pytest.mark.asyncio
async def test_get_project_issue_count() -> None:
    payload = {"project": {"id": "p1", "issues": {"nodes": [{"id": "a"}, {"id": "b"}]}}}

    async with _client(_data(payload)) as client:
        assert await client.get_project_issue_count("p1") == 2
    async with _client(_not_found) as client:
        assert await client.get_project_issue_count("nope") == 0


@pytest.mark.asyncio
async def test_get_project_teams_keeps_api_order() -> None:
    payload = {
        "project": {
            "teams": {
                "nodes": [
                    {"id": "t2", "labels": {"nodes": [{"id": "l1", "name": "Customer Request"}]}},
                    {"id": "t1", "labels": {"nodes": []}},
                ]
            }
        }
    }

    async with _client(_data(payload)) as client:
        teams = await client.get_project_teams("p1")

    assert [t.id for t in teams] == ["t2", "t1"]
    assert teams[0].find_label("Customer Request") is not None


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_label_sends_input() -> None:
    seen: list[dict[str, Any]] = []

    async with _client(_data({"labelCreate": {"success": True, "label": {"id": "l9"}}}), seen) as client:
        label_id = await client.create_label(team_id="t1", name="Customer Request", color="#0052CC")

    assert label_id == "l9"
    assert seen[0]["variables"] == {"input": {"name": "Customer Request", "teamId": "t1", "color": "#0052CC"}}


@pytest.mark.asyncio
async def test_create_label_reporting_failure_raises() -> None:
    async with _client(_data({"labelCreate": {"success": False, "label": None}})) as client:
        with pytest.raises(ProviderError, match="labelCreate"):
            await client.create_label(team_id="t1", name="x", color="#000")


@pytest.mark.asyncio
async def test_create_issue_sends_wire_priority() -> None:
    seen: list[dict[str, Any]] = []
    response = {"issueCreate": {"success": True, "issue": {"id": "i9", "title": "[CS] Export"}}}

    async with _client(_data(response), seen) as client:
        created = await client.create_issue(
            team_id="t1",
            project_id="p1",
            title="[CS] Export",
            description="body",
            priority=Priority.LOW,
            label_ids=["l1"],
        )

    assert created.id == "i9"
    assert seen[0]["variables"]["input"] == {
        "teamId": "t1",
        "projectId": "p1",
        "title": "[CS] Export",
        "description": "body",
        "priority": 3,
        "labelIds": ["l1"],
    }


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_graphql_errors_raise_provider_error() -> None:
    response = httpx.Response(200, json={"errors": [{"message": "Argument Validation Error"}]})

    async with _client(lambda _body: response) as client:
        with pytest.raises(ProviderError, match="GraphQL returned errors"):
            await client.get_projects()


@pytest.mark.asyncio
async def test_not_found_on_mutation_is_not_swallowed() -> None:
    async with _client(_not_found) as client:
        with pytest.raises(ProviderError):
            await client.create_label(team_id="t1", name="x", color="#000")


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 403])
async def test_rejected_key_raises_authentication_error(status: int) -> None:
    async with _client(lambda _body: httpx.Response(status, json={})) as client:
        with pytest.raises(AuthenticationError):
            await client.get_projects()


@pytest.mark.asyncio
async def test_http_error_without_json_raises_provider_error() -> None:
    async with _client(lambda _body: httpx.Response(502, text="bad gateway")) as client:
        with pytest.raises(ProviderError, match="HTTP 502"):
            await client.get_projects()


@pytest.mark.asyncio
async def test_transport_error_is_wrapped() -> None:
    def handler(_body: dict[str, Any]) -> httpx.Response:
        raise httpx.ConnectError("connection refused")

    async with _client(handler) as client:
        with pytest.raises(ProviderError, match="connection refused"):
            await client.get_projects()


@pytest.mark.asyncio
async def test_calls_outside_context_manager_raise() -> None:
    client = LinearClient(api_key="k")

    with pytest.raises(ProviderError, match="not initialized"):
        await client.get_projects()


@pytest.mark.asyncio
async def test_retries_are_opt_in(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[int] = []

    async def no_sleep(_attempt: int) -> None:
        return None

    monkeypatch.setattr(
        "linearview.providers.linear._retrying_transport.RetryingTransport._sleep_backoff",
        staticmethod(no_sleep),
    )

    def flaky(_body: dict[str, Any]) -> httpx.Response:
        calls.append(1)
        if len(calls) == 1:
            return httpx.Response(503, text="unavailable")
        return httpx.Response(200, json={"data": {"project": {"id": "p1"}}})

    async def handler(request: httpx.Request) -> httpx.Response:
        return flaky({})

    client = LinearClient(api_key="k", max_retries=2, transport=httpx.MockTransport(handler))
    async with client:
        assert await client.project_exists("p1") is True

    assert len(calls) == 2
