"""Application configuration.

:class:`AppConfig` carries everything the session store, the Linear client
and the access gate need. :func:`load_config` reads an optional JSON file and
overlays environment variables, so a deployment can supply the master token
without writing it to disk.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from linearview.exceptions import ConfigError

DEFAULT_API_URL = "https://api.linear.app/graphql"
DEFAULT_SESSION_PATH = Path("~/.config/linear-view/session.json")

ENV_OVERRIDES: dict[str, str] = {
    "LINEAR_VIEW_MASTER_TOKEN": "master_token",
    "LINEAR_VIEW_API_URL": "api_url",
    "LINEAR_VIEW_SESSION_PATH": "session_path",
}


class AppConfig(BaseModel):
    """Top-level configuration for a linear-view session.

    Attributes:
        master_token: Access token granting unrestricted access to all projects.
        api_url: Linear GraphQL endpoint.
        auth: How the API key is resolved: ``"env"`` (``LINEAR_API_KEY``) or ``"token"``.
        token: API key used when ``auth`` is ``"token"``.
        session_path: JSON file holding the stored access token.
        timeout: HTTP timeout in seconds.
        max_retries: Transport-level retries on transient failures; 0 disables retrying.
    """

    master_token: str
    api_url: str = DEFAULT_API_URL
    auth: str = "env"
    token: str | None = None
    session_path: Path = DEFAULT_SESSION_PATH
    timeout: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=0, ge=0, le=10)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_master_token(self) -> AppConfig:
        if not self.master_token.strip():
            raise ValueError("master_token must not be empty")
        return self

    @model_validator(mode="after")
    def validate_auth_token(self) -> AppConfig:
        token = (self.token or "").strip()
        if self.auth == "token":
            if not token:
                raise ValueError("token auth requires a non-empty token")
            return self
        if token:
            raise ValueError("token must be unset when auth is not 'token'")
        if self.auth != "env":
            raise ValueError("auth must be one of: env, token")
        return self


def _resolve_path(value: Path, *, base_dir: Path | None) -> Path:
    value = value.expanduser()
    if value.is_absolute() or base_dir is None:
        return value
    return (base_dir / value).resolve()


def load_config(path: str | Path | None = None) -> AppConfig:
    """Build an :class:`AppConfig` from an optional JSON file plus environment overrides.

    Relative ``session_path`` values in the file resolve against the file's directory.

    Raises:
        ConfigError: If the file cannot be read or parsed, or the result is invalid.
    """
    raw_payload: dict[str, Any] = {}
    config_dir: Path | None = None
    if path is not None:
        config_path = Path(path).expanduser().resolve()
        config_dir = config_path.parent
        try:
            loaded: Any = json.loads(config_path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigError(f"failed reading config file: {config_path}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(f"config file must contain a JSON object: {config_path}")
        raw_payload.update(loaded)

    overridden: set[str] = set()
    for env_name, field_name in ENV_OVERRIDES.items():
        value = (os.getenv(env_name) or "").strip()
        if value:
            raw_payload[field_name] = value
            overridden.add(field_name)

    try:
        parsed = AppConfig.model_validate(raw_payload)
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc

    # Environment-supplied paths are taken as given; file-supplied ones resolve against the file.
    base_dir = None if "session_path" in overridden else config_dir
    return parsed.model_copy(update={"session_path": _resolve_path(parsed.session_path, base_dir=base_dir)})
