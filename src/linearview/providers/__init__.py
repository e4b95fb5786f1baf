"""External API adapters."""

from linearview.providers.linear import LinearClient

__all__ = ["LinearClient"]
