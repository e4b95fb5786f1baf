"""Command-line interface for linear-view."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from importlib.metadata import PackageNotFoundError, version

from rich.console import Console, Group
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from linearview import (
    AccessDeniedError,
    AppConfig,
    AuthenticationError,
    ConfigError,
    FilterCriteria,
    IssueCreationRequest,
    IssueNotFoundError,
    LinearView,
    LoginError,
    Priority,
    ProjectNotFoundError,
    ProviderError,
    Redirect,
    ResourcePath,
    SessionStore,
    load_config,
)
from linearview.access import is_master
from linearview.filtering import ALL_MILESTONES, distinct_label_names, distinct_state_names
from linearview.models.issue import Issue
from linearview.models.project import Project, ProjectDetail

console = Console()

_PRIORITY_STYLES: dict[Priority, str] = {
    Priority.NO_PRIORITY: "dim",
    Priority.HIGH: "red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "green",
}


class RedirectedError(Exception):
    """The access gate sent the session somewhere other than the requested view."""

    def __init__(self, redirect: Redirect) -> None:
        super().__init__(f"access redirected to {redirect.path}")
        self.redirect = redirect


def _package_version() -> str:
    try:
        return version("linear-view")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="linear-view")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")
    parser.add_argument("--config", default=None, help="Path to a linear-view JSON config file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    login_parser = subparsers.add_parser("login", help="Start a session with a project id or the master token")
    login_parser.add_argument("token", help="Project id or master token")

    subparsers.add_parser("logout", help="End the current session")
    subparsers.add_parser("status", help="Show the current session")

    projects_parser = subparsers.add_parser("projects", help="List projects (full-access sessions only)")
    projects_parser.add_argument("--search", default="", help="Match project name or description")

    issues_parser = subparsers.add_parser("issues", help="List and filter a project's issues")
    issues_parser.add_argument("project_id")
    issues_parser.add_argument("--search", default="", help="Case-insensitive title substring")
    issues_parser.add_argument("--label", action="append", default=[], help="Label name (repeatable, any matches)")
    issues_parser.add_argument("--state", action="append", default=[], help="State name (repeatable, any matches)")
    issues_parser.add_argument("--milestone", default=ALL_MILESTONES, help="Milestone id, or 'all'")

    issue_parser = subparsers.add_parser("issue", help="Show one issue with its description")
    issue_parser.add_argument("project_id")
    issue_parser.add_argument("issue_id")

    request_parser = subparsers.add_parser("request", help="File a customer request in a project")
    request_parser.add_argument("project_id")
    request_parser.add_argument("--title", required=True)
    request_parser.add_argument("--description", required=True)
    request_parser.add_argument("--customer", required=True, help="Customer name")
    request_parser.add_argument(
        "--priority",
        choices=[priority.value for priority in Priority],
        default=Priority.MEDIUM.value,
    )

    return parser


async def _open_view(config: AppConfig) -> LinearView:
    return await LinearView.from_config(config)


def _require_allowed(view: LinearView, path: ResourcePath) -> None:
    decision = view.navigate(path)
    if isinstance(decision, Redirect):
        raise RedirectedError(decision)


async def _run_login(args: argparse.Namespace) -> str:
    config = load_config(args.config)
    async with await _open_view(config) as view:
        _require_allowed(view, ResourcePath.login())
        token = await view.login(args.token)
        if view.has_full_access:
            console.print("[green]Logged in with full access.[/green]")
        else:
            console.print(f"[green]Logged in to project[/green] {escape(token)}")
        return token


async def _run_logout(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    SessionStore(config.session_path).clear()
    console.print("Logged out.")


async def _run_status(args: argparse.Namespace) -> str | None:
    config = load_config(args.config)
    token = SessionStore(config.session_path).get()
    if token is None:
        console.print("Not logged in.")
    elif is_master(token, config.master_token):
        console.print("Logged in with full access.")
    else:
        console.print(f"Logged in to project {escape(token)}")
    return token


async def _run_projects(args: argparse.Namespace) -> list[Project]:
    config = load_config(args.config)
    async with await _open_view(config) as view:
        _require_allowed(view, ResourcePath.project_list())
        projects = await view.list_projects(args.search)
    console.print(render_projects(projects))
    return projects


async def _run_issues(args: argparse.Namespace) -> list[Issue]:
    config = load_config(args.config)
    async with await _open_view(config) as view:
        _require_allowed(view, ResourcePath.project(args.project_id))
        detail = await view.load_project(args.project_id)
        if detail is None:
            raise ProjectNotFoundError(args.project_id)
        criteria = FilterCriteria(
            query=args.search,
            labels=frozenset(args.label),
            states=frozenset(args.state),
            milestone=args.milestone,
        )
        issues = view.filter_issues(detail.issues, criteria)
    console.print(render_issues(detail, issues))
    console.print(render_filter_options(detail))
    return issues


async def _run_issue(args: argparse.Namespace) -> Issue:
    config = load_config(args.config)
    async with await _open_view(config) as view:
        _require_allowed(view, ResourcePath.project(args.project_id))
        issue = await view.load_issue(args.project_id, args.issue_id)
    console.print(render_issue_detail(issue))
    return issue


async def _run_request(args: argparse.Namespace) -> str:
    config = load_config(args.config)
    request = IssueCreationRequest(
        project_id=args.project_id,
        title=args.title,
        description=args.description,
        customer_name=args.customer,
        priority=Priority(args.priority),
    )
    async with await _open_view(config) as view:
        _require_allowed(view, ResourcePath.project(args.project_id))
        created = await view.submit_request(request)
    console.print(f"[green]Request submitted:[/green] {escape(created.title)} ({escape(created.id)})")
    return created.id


def render_projects(projects: list[Project]) -> Table:
    table = Table(title="Projects")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("State")
    table.add_column("Start")
    table.add_column("Target")
    for project in projects:
        table.add_row(
            escape(project.id),
            escape(project.name),
            escape(project.state),
            project.start_date.isoformat() if project.start_date else "",
            project.target_date.isoformat() if project.target_date else "",
        )
    return table


def render_issues(detail: ProjectDetail, issues: list[Issue]) -> Table:
    table = Table(title=f"{escape(detail.name)} ({len(issues)}/{len(detail.issues)} issues)")
    table.add_column("ID", style="dim")
    table.add_column("Title")
    table.add_column("State")
    table.add_column("Priority")
    table.add_column("Labels")
    table.add_column("Milestone")
    for issue in issues:
        table.add_row(
            escape(issue.id),
            escape(issue.title),
            escape(issue.state.name),
            f"[{_PRIORITY_STYLES[issue.priority]}]{issue.priority.value}[/]",
            escape(", ".join(sorted(issue.label_names))),
            escape(issue.milestone.name) if issue.milestone else "",
        )
    return table


def render_issue_detail(issue: Issue) -> Panel:
    meta = Text()
    meta.append(issue.state.name)
    meta.append("  ")
    meta.append(issue.priority.value, style=_PRIORITY_STYLES[issue.priority])
    if issue.labels:
        meta.append("  " + ", ".join(sorted(issue.label_names)))
    lines = [meta]
    if issue.created_at is not None:
        lines.append(Text(f"Created: {issue.created_at:%Y-%m-%d %H:%M}"))
    if issue.updated_at is not None:
        lines.append(Text(f"Updated: {issue.updated_at:%Y-%m-%d %H:%M}"))
    if issue.milestone is not None:
        milestone = f"Milestone: {issue.milestone.name}"
        if issue.milestone.target_date is not None:
            milestone += f" ({issue.milestone.target_date.isoformat()})"
        lines.append(Text(milestone))
    if issue.description:
        body: Markdown | Text = Markdown(issue.description)
    else:
        body = Text("No description", style="dim")
    return Panel(Group(*lines, Text(""), body), title=escape(issue.title))


def render_filter_options(detail: ProjectDetail) -> str:
    labels = ", ".join(sorted(distinct_label_names(detail.issues))) or "-"
    states = ", ".join(sorted(distinct_state_names(detail.issues))) or "-"
    milestones = ", ".join(f"{m.name} ({m.id})" for m in detail.milestones) or "-"
    return escape(f"Labels: {labels}\nStates: {states}\nMilestones: {milestones}")


_COMMANDS = {
    "login": _run_login,
    "logout": _run_logout,
    "status": _run_status,
    "projects": _run_projects,
    "issues": _run_issues,
    "issue": _run_issue,
    "request": _run_request,
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    try:
        asyncio.run(_COMMANDS[args.command](args))
        return 0
    except RedirectedError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except (ConfigError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except (AuthenticationError, ProviderError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except (ProjectNotFoundError, IssueNotFoundError, AccessDeniedError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 5
    except LoginError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except Exception as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
