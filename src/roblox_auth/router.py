"""
FastAPI auth router: login, callback, /me, groups, logout.

Builds an APIRouter around a RobloxOAuthProvider. Integration errors are turned
into JSON error responses; the post-login redirect comes from LoginComplete.
"""

import logging
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse

from roblox_auth.config import ProviderConfig
from roblox_auth.errors import (
    DiscoveryError,
    GroupFetchError,
    NotAuthenticatedError,
    RobloxAuthError,
)
from roblox_auth.roblox import RobloxOAuthProvider
from roblox_auth.session import MappingSessionStore, get_session_store

logger = logging.getLogger(__name__)


def _error_response(exc: RobloxAuthError) -> JSONResponse:
    """Map an integration error to a JSON response."""
    if isinstance(exc, NotAuthenticatedError):
        status_code = 401
    elif isinstance(exc, (DiscoveryError, GroupFetchError)):
        # Upstream provider failed
        status_code = 502
    else:
        status_code = 400
    return JSONResponse({"error": str(exc)}, status_code=status_code)


def create_auth_router(config: ProviderConfig, provider: Optional[RobloxOAuthProvider] = None):
    """Create an APIRouter with /login, /auth/callback, /me, /groups and /logout endpoints."""
    provider = provider or RobloxOAuthProvider(config)
    router = APIRouter()

    @router.get("/login")
    async def login(session: MappingSessionStore = Depends(get_session_store)):
        """Redirect the user to the Roblox login page."""
        try:
            url = await provider.get_authorization_url(session)
        except RobloxAuthError as e:
            return _error_response(e)
        return RedirectResponse(url=url)

    @router.get("/auth/callback", name="auth_callback")
    async def auth_callback(request: Request, session: MappingSessionStore = Depends(get_session_store)):
        """Handle OAuth callback: check state, exchange code, store tokens, redirect to post-login URL."""
        try:
            result = await provider.handle_callback(session, dict(request.query_params))
        except RobloxAuthError as e:
            logger.warning("Login callback rejected: %s", e)
            return _error_response(e)
        return RedirectResponse(url=result.redirect_url)

    @router.get("/me")
    async def me(session: MappingSessionStore = Depends(get_session_store)):
        """Return the ID token claims; redirect to /login if not authenticated."""
        if not provider.is_authenticated(session):
            return RedirectResponse(url="/login")
        try:
            claims = provider.get_claims(session)
        except RobloxAuthError as e:
            return _error_response(e)
        return {"claims": claims}

    @router.get("/groups")
    async def groups(session: MappingSessionStore = Depends(get_session_store)):
        """Return the user's group memberships."""
        try:
            memberships = await provider.get_user_groups(session)
        except RobloxAuthError as e:
            return _error_response(e)
        return {"groups": [asdict(m) for m in memberships]}

    @router.get("/groups/{group_id}/rank")
    async def group_rank(group_id: int, session: MappingSessionStore = Depends(get_session_store)):
        """Return the user's rank in one group (0 if not a member)."""
        try:
            memberships = await provider.get_user_groups(session)
        except RobloxAuthError as e:
            return _error_response(e)
        return {"group_id": group_id, "rank": provider.get_group_rank(memberships, group_id)}

    @router.get("/logout")
    async def logout(session: MappingSessionStore = Depends(get_session_store)):
        """Clear tokens from the session and redirect to home."""
        provider.logout(session)
        return RedirectResponse(url="/")

    return router
