"""Exception hierarchy for linear-view.

All linear-view exceptions inherit from :class:`LinearViewError`, so callers
can catch every library failure with a single ``except`` clause while still
handling specific failure modes. Access decisions and issue filtering never
raise; only configuration, session and provider paths do.
"""

from __future__ import annotations


class LinearViewError(Exception):
    """Base exception for all linear-view errors."""


class ConfigError(LinearViewError):
    """Configuration or session-file loading/validation failure."""


class ProviderError(LinearViewError):
    """Linear API call failed (transport, HTTP status, GraphQL errors, bad payload)."""


class AuthenticationError(ProviderError):
    """The API key is missing or was rejected by the API."""


class LoginError(LinearViewError):
    """A login attempt was rejected."""


class ProjectNotFoundError(LoginError):
    """No project exists for the given identifier."""

    def __init__(self, project_id: str) -> None:
        super().__init__(f"project not found: {project_id}")
        self.project_id = project_id


class AccessDeniedError(LinearViewError):
    """The current session is not allowed to load the requested project.

    ``project_id`` is None when the denied resource is the project list.
    """

    def __init__(self, project_id: str | None = None) -> None:
        if project_id is None:
            super().__init__("no access to the project list")
        else:
            super().__init__(f"no access to project: {project_id}")
        self.project_id = project_id


class IssueNotFoundError(LinearViewError):
    """The project has no issue with the given identifier."""

    def __init__(self, project_id: str, issue_id: str) -> None:
        super().__init__(f"issue not found: {issue_id} (project {project_id})")
        self.project_id = project_id
        self.issue_id = issue_id


class IssueCreationError(ProviderError):
    """A customer-request submission failed part-way through.

    Earlier steps are not rolled back: a label created before the issue
    mutation failed stays in place.

    Attributes:
        step: Name of the step that failed.
        completed_steps: Steps that finished before the failure, in order.
    """

    def __init__(self, message: str, *, step: str, completed_steps: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.step = step
        self.completed_steps = completed_steps
