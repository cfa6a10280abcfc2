"""
Roblox OAuth/OIDC integration for FastAPI.

Exposes the provider (RobloxOAuthProvider), its configuration (ProviderConfig),
the flow and group helpers, session helpers (MappingSessionStore, require_login)
and the FastAPI auth router factory (create_auth_router).
"""

from .claims import decode_claims, require_subject
from .config import GROUP_SCOPE, ProviderConfig
from .discovery import DiscoveryDocument, resolve_discovery
from .errors import (
    ConfigurationError,
    DiscoveryError,
    GroupFetchError,
    InvalidArgumentError,
    InvalidCallbackError,
    MalformedTokenError,
    MissingClaimError,
    NotAuthenticatedError,
    RobloxAuthError,
    TokenExchangeError,
)
from .flow import LoginComplete, TokenSet, build_authorization_url, exchange_code
from .groups import GroupMembership, fetch_user_groups, find_rank
from .protocol import SessionStore
from .roblox import RobloxOAuthProvider
from .router import create_auth_router
from .session import MappingSessionStore, get_session_store, is_logged_in, require_login

__all__ = [
    "RobloxOAuthProvider",
    "ProviderConfig",
    "GROUP_SCOPE",
    "DiscoveryDocument",
    "resolve_discovery",
    "TokenSet",
    "LoginComplete",
    "build_authorization_url",
    "exchange_code",
    "decode_claims",
    "require_subject",
    "GroupMembership",
    "fetch_user_groups",
    "find_rank",
    "SessionStore",
    "MappingSessionStore",
    "get_session_store",
    "is_logged_in",
    "require_login",
    "create_auth_router",
    "RobloxAuthError",
    "ConfigurationError",
    "DiscoveryError",
    "TokenExchangeError",
    "InvalidCallbackError",
    "MalformedTokenError",
    "MissingClaimError",
    "NotAuthenticatedError",
    "GroupFetchError",
    "InvalidArgumentError",
]
