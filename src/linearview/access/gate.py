"""Access decisions for navigation between the login page, the project list and project views.

:func:`authorize` is a pure function of the stored access token, the requested
path and the master token. It reads nothing from ambient state and never
raises: every input maps to exactly one :class:`Allow` or :class:`Redirect`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

LOGIN_PATH = "/login"
PROJECTS_PATH = "/projects"


class PathKind(StrEnum):
    LOGIN = "login"
    PROJECT_LIST = "project-list"
    PROJECT_DETAIL = "project-detail"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ResourcePath:
    """A navigation target; ``project_id`` is set only for project detail views."""

    kind: PathKind
    project_id: str | None = None

    @classmethod
    def login(cls) -> ResourcePath:
        return cls(PathKind.LOGIN)

    @classmethod
    def project_list(cls) -> ResourcePath:
        return cls(PathKind.PROJECT_LIST)

    @classmethod
    def project(cls, project_id: str) -> ResourcePath:
        return cls(PathKind.PROJECT_DETAIL, project_id)

    @classmethod
    def parse(cls, raw: str) -> ResourcePath:
        """Parse a URL path such as ``/projects/abc``; unrecognised shapes become ``UNKNOWN``."""
        path = raw.split("?", 1)[0].split("#", 1)[0].strip()
        if len(path) > 1:
            path = path.rstrip("/")
        if path == LOGIN_PATH:
            return cls.login()
        if path == PROJECTS_PATH:
            return cls.project_list()
        prefix = f"{PROJECTS_PATH}/"
        if path.startswith(prefix):
            project_id = path[len(prefix) :]
            if project_id and "/" not in project_id:
                return cls.project(project_id)
        return cls(PathKind.UNKNOWN)

    def __str__(self) -> str:
        if self.kind is PathKind.LOGIN:
            return LOGIN_PATH
        if self.kind is PathKind.PROJECT_LIST:
            return PROJECTS_PATH
        if self.kind is PathKind.PROJECT_DETAIL:
            return f"{PROJECTS_PATH}/{self.project_id}"
        return "<unknown>"


@dataclass(frozen=True)
class Allow:
    """The session may view the requested resource."""


@dataclass(frozen=True)
class Redirect:
    """The session must be sent to ``target`` instead."""

    target: ResourcePath

    @property
    def path(self) -> str:
        return str(self.target)


Decision = Allow | Redirect


def is_master(token: str | None, master_token: str) -> bool:
    return bool(token) and bool(master_token) and token == master_token


def can_view_project(token: str | None, project_id: str, *, master_token: str) -> bool:
    """Whether a session holding ``token`` may load ``project_id``'s data."""
    if not token:
        return False
    return is_master(token, master_token) or token == project_id


def authorize(token: str | None, requested: ResourcePath | str, *, master_token: str) -> Decision:
    """Decide whether a session may view ``requested``.

    Args:
        token: The stored access token, or None/empty when no session exists.
        requested: The navigation target, parsed or as a raw path string.
        master_token: The token value granting unrestricted access.

    Returns:
        Allow, or a Redirect naming where the session must go instead.
        Cross-project access with a scoped token is answered with a redirect
        to the login page rather than a distinct "forbidden" outcome.
    """
    path = ResourcePath.parse(requested) if isinstance(requested, str) else requested

    if not token:
        if path.kind is PathKind.LOGIN:
            return Allow()
        return Redirect(ResourcePath.login())

    if path.kind is PathKind.UNKNOWN:
        return Redirect(ResourcePath.login())

    if is_master(token, master_token):
        if path.kind is PathKind.LOGIN:
            return Redirect(ResourcePath.project_list())
        return Allow()

    if path.kind in (PathKind.LOGIN, PathKind.PROJECT_LIST):
        return Redirect(ResourcePath.project(token))
    if path.project_id != token:
        return Redirect(ResourcePath.login())
    return Allow()
