"""Concrete API key resolvers."""

from linearview.auth.resolvers.env import EnvTokenResolver
from linearview.auth.resolvers.static import StaticTokenResolver

__all__ = ["EnvTokenResolver", "StaticTokenResolver"]
