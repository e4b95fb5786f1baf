"""Public API surface for linear-view."""

from linearview.access import Allow, Decision, Redirect, ResourcePath, authorize
from linearview.auth import create_token_resolver
from linearview.config import AppConfig, load_config
from linearview.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    ConfigError,
    IssueCreationError,
    IssueNotFoundError,
    LinearViewError,
    LoginError,
    ProjectNotFoundError,
    ProviderError,
)
from linearview.filtering import FilterCriteria
from linearview.intake import IssueCreation
from linearview.models import (
    CreatedIssueRef,
    Issue,
    IssueCreationRequest,
    Milestone,
    Priority,
    Project,
    ProjectDetail,
)
from linearview.providers import LinearClient
from linearview.sdk import LinearView
from linearview.session import SessionStore

__all__ = [
    "AccessDeniedError",
    "Allow",
    "AppConfig",
    "AuthenticationError",
    "ConfigError",
    "CreatedIssueRef",
    "Decision",
    "FilterCriteria",
    "Issue",
    "IssueCreation",
    "IssueCreationError",
    "IssueCreationRequest",
    "IssueNotFoundError",
    "LinearClient",
    "LinearView",
    "LinearViewError",
    "LoginError",
    "Milestone",
    "Priority",
    "Project",
    "ProjectDetail",
    "ProjectNotFoundError",
    "ProviderError",
    "Redirect",
    "ResourcePath",
    "SessionStore",
    "authorize",
    "create_token_resolver",
    "load_config",
]
