"""Explicit session capability.

Wraps the per-user session mapping (Starlette's ``request.session`` in the
app, a plain dict in tests) and is passed into the router and views rather
than reached for as ambient state. One-time values are read with take().
"""

from collections.abc import MutableMapping
from typing import Any

from fastapi import Request

LOGGED_IN_KEY = "logged_in"
USERNAME_KEY = "username"
PENDING_EMAIL_KEY = "email"
SESSION_GENERATION_KEY = "generation"


class SessionHandle:
    """String-keyed values scoped to one user's browsing session."""

    def __init__(self, store: MutableMapping[str, Any]) -> None:
        self._store = store

    def get(self, key: str) -> Any | None:
        return self._store.get(key)

    def set(self, key: str, value: Any) -> None:
        self._store[key] = value

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def take(self, key: str) -> Any | None:
        """Return the value for ``key`` and remove it in the same step."""
        return self._store.pop(key, None)

    def clear(self) -> None:
        self._store.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._store

    @property
    def is_logged_in(self) -> bool:
        return bool(self._store.get(LOGGED_IN_KEY))

    @property
    def username(self) -> str | None:
        return self._store.get(USERNAME_KEY)

    @property
    def session_generation(self) -> int | None:
        """Account session generation recorded at login."""
        return self._store.get(SESSION_GENERATION_KEY)

    @property
    def pending_email(self) -> str | None:
        """Email carried forward to the verification steps."""
        return self._store.get(PENDING_EMAIL_KEY)


def get_session(request: Request) -> SessionHandle:
    """Dependency that wraps the request's session."""
    return SessionHandle(request.session)
