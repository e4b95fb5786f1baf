"""Session persistence."""

from linearview.session.store import ACCESS_KEY, SessionStore

__all__ = ["ACCESS_KEY", "SessionStore"]
