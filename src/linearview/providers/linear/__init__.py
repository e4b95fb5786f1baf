"""Linear GraphQL API adapter."""

from linearview.providers.linear.client import LinearClient

__all__ = ["LinearClient"]
