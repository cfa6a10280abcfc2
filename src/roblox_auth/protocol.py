"""
Protocol for the session store used by the OAuth flow.

Implementations hold the anti-forgery state and the token set for one browser
session (e.g. MappingSessionStore over Starlette's request.session).
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SessionStore(Protocol):
    """Key-value storage scoped to one user session."""

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under key, or default."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value under key."""
        ...

    def delete(self, key: str) -> None:
        """Remove key if present."""
        ...
