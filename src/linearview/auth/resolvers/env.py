"""Environment API key resolver."""

from __future__ import annotations

import os

from linearview.auth.base import TokenResolver
from linearview.exceptions import AuthenticationError

API_KEY_ENV = "LINEAR_API_KEY"


class EnvTokenResolver(TokenResolver):
    async def resolve(self) -> str:
        token = (os.getenv(API_KEY_ENV) or "").strip()
        if not token:
            raise AuthenticationError(f"{API_KEY_ENV} is not set or empty")
        return token
