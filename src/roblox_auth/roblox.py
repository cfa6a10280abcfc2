"""
Roblox OAuth provider.

Ties discovery, the authorization code flow, claims decoding and the group
lookup to a per-request SessionStore. Session state moves
Anonymous -> AwaitingCallback (state stored) -> Authenticated (token set stored).
"""

import logging
from typing import Any, List, Mapping, Optional, Sequence

from roblox_auth.claims import Claims, decode_claims
from roblox_auth.config import ProviderConfig
from roblox_auth.discovery import resolve_discovery
from roblox_auth.errors import NotAuthenticatedError
from roblox_auth.flow import (
    Discover,
    LoginComplete,
    TokenSet,
    build_authorization_url,
    exchange_code,
    validate_callback,
)
from roblox_auth.groups import GroupMembership, fetch_user_groups, find_rank
from roblox_auth.protocol import SessionStore
from roblox_auth.session import STATE_KEY, TOKEN_SET_KEY

logger = logging.getLogger(__name__)


class RobloxOAuthProvider:
    """OAuth/OIDC integration for Roblox: login, callback, claims and group ranks."""

    name: str = "roblox"

    def __init__(self, config: ProviderConfig, discover: Discover = resolve_discovery):
        """Store the provider config; discover resolves the OpenID configuration on each call."""
        self.config = config
        self.discover = discover

    def is_authenticated(self, session: SessionStore) -> bool:
        return session.get(TOKEN_SET_KEY) is not None

    async def get_authorization_url(self, session: SessionStore, scopes: Optional[Sequence[str]] = None) -> str:
        """Return the provider login URL and remember its state in the session."""
        url, state = await build_authorization_url(self.config, scopes, discover=self.discover)
        session.set(STATE_KEY, state)
        return url

    async def handle_callback(self, session: SessionStore, params: Mapping[str, str]) -> LoginComplete:
        """
        Validate the callback, exchange the code and store the token set.

        The session is left untouched if validation or the exchange fails. On
        success the state value is consumed and the host must redirect to
        LoginComplete.redirect_url.
        """
        code = validate_callback(params, session.get(STATE_KEY))
        token_set = await exchange_code(self.config, code, discover=self.discover)

        session.set(TOKEN_SET_KEY, token_set.to_dict())
        session.delete(STATE_KEY)
        logger.info("Roblox login completed")
        return LoginComplete(redirect_url=self.config.post_login_url, token_set=token_set)

    def get_token_set(self, session: SessionStore) -> TokenSet:
        raw = session.get(TOKEN_SET_KEY)
        if not raw:
            raise NotAuthenticatedError("No token set in session")
        return TokenSet.from_dict(raw)

    def get_claims(self, session: SessionStore) -> Claims:
        """Decode the ID token claims (unverified, see roblox_auth.claims)."""
        return decode_claims(self.get_token_set(session))

    async def get_user_groups(self, session: SessionStore) -> List[GroupMembership]:
        return await fetch_user_groups(
            self.get_token_set(session),
            groups_api_url=self.config.groups_api_url,
            timeout=self.config.timeout,
        )

    def get_group_rank(self, memberships: List[Any], group_id: Any) -> int:
        return find_rank(memberships, group_id)

    def logout(self, session: SessionStore) -> None:
        """Drop the token set and any pending state."""
        session.delete(TOKEN_SET_KEY)
        session.delete(STATE_KEY)
