"""Session access decisions."""

from linearview.access.gate import (
    LOGIN_PATH,
    PROJECTS_PATH,
    Allow,
    Decision,
    PathKind,
    Redirect,
    ResourcePath,
    authorize,
    can_view_project,
    is_master,
)

__all__ = [
    "LOGIN_PATH",
    "PROJECTS_PATH",
    "Allow",
    "Decision",
    "PathKind",
    "Redirect",
    "ResourcePath",
    "authorize",
    "can_view_project",
    "is_master",
]
