"""Persistent session storage.

The session is a single key-value pair, ``projectAccess``, kept in a small
JSON file. The file may hold other keys; they are preserved on write.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from linearview.exceptions import ConfigError

logger = logging.getLogger(__name__)

ACCESS_KEY = "projectAccess"


class SessionStore:
    """JSON-file backed store for the access token."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> str | None:
        """Return the stored access token, or None when no session exists."""
        value = self._read().get(ACCESS_KEY)
        if value is None:
            return None
        if not isinstance(value, str):
            raise ConfigError(f"invalid {ACCESS_KEY} value in session file: {self._path}")
        return value or None

    def set(self, token: str) -> None:
        payload = self._read()
        payload[ACCESS_KEY] = token
        self._write(payload)
        logger.debug("Stored session token in %s", self._path)

    def clear(self) -> None:
        payload = self._read()
        if ACCESS_KEY not in payload:
            return
        del payload[ACCESS_KEY]
        self._write(payload)
        logger.debug("Cleared session token in %s", self._path)

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            payload: Any = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"invalid session file: {self._path}") from exc
        if not isinstance(payload, dict):
            raise ConfigError(f"invalid session file: {self._path}")
        return payload

    def _write(self, payload: dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"failed to write session file: {self._path}") from exc
