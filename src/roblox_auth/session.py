"""
Session storage adapter and FastAPI dependencies.

MappingSessionStore wraps request.session (populated by Starlette's
SessionMiddleware) or any plain dict, so the OAuth flow never touches the
request directly. require_login protects routes that need a stored token set.
"""

from typing import Any, MutableMapping

from fastapi import HTTPException, Request

# Well-known session keys
STATE_KEY = "oauth2state"
TOKEN_SET_KEY = "tokenSet"


class MappingSessionStore:
    """SessionStore backed by a mutable mapping."""

    def __init__(self, data: MutableMapping[str, Any]):
        self.data = data

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


def get_session_store(request: Request) -> MappingSessionStore:
    """Dependency: the current request's session as a SessionStore."""
    return MappingSessionStore(request.session)


def is_logged_in(request: Request) -> bool:
    """Return True if the session holds a token set."""
    return TOKEN_SET_KEY in request.session


async def require_login(request: Request) -> bool:
    """Dependency: reject the request with 401 unless a token set is stored."""
    if not is_logged_in(request):
        raise HTTPException(status_code=401, detail="Not authenticated")
    return True
