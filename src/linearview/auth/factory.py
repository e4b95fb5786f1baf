"""API key resolver factory."""

from __future__ import annotations

from linearview.auth.base import TokenResolver
from linearview.auth.resolvers.env import EnvTokenResolver
from linearview.auth.resolvers.static import StaticTokenResolver
from linearview.config import AppConfig
from linearview.exceptions import ConfigError

RESOLVERS: dict[str, type[TokenResolver]] = {
    "env": EnvTokenResolver,
    "token": StaticTokenResolver,
}


def create_token_resolver(config: AppConfig) -> TokenResolver:
    auth_mode = config.auth
    if auth_mode not in RESOLVERS:
        raise ConfigError(f"Unknown auth mode: {auth_mode}")

    if auth_mode == "env":
        return EnvTokenResolver()
    return StaticTokenResolver(token=config.token or "")
