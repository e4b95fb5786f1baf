"""Auth module public exports."""

from linearview.auth.base import TokenResolver
from linearview.auth.factory import create_token_resolver

__all__ = ["TokenResolver", "create_token_resolver"]
