"""
Authorization code flow: login URL, callback validation and code exchange.

Uses Authlib's httpx client for building the authorization URL and for the
token request (client_secret_post, so client_id and client_secret travel in the
form body). Nothing here touches the session; RobloxOAuthProvider decides what
gets stored.
"""

import logging
import secrets
from dataclasses import asdict, dataclass, field
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Sequence, Tuple

import httpx
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.httpx_client import AsyncOAuth2Client

from roblox_auth.config import ProviderConfig
from roblox_auth.discovery import DiscoveryDocument, resolve_discovery
from roblox_auth.errors import InvalidCallbackError, TokenExchangeError

logger = logging.getLogger(__name__)

Discover = Callable[..., Awaitable[DiscoveryDocument]]

_TOKEN_FIELDS = ("access_token", "id_token", "token_type", "expires_in", "scope")


@dataclass
class TokenSet:
    """Tokens returned by the token endpoint. Stored in the session as a plain dict."""

    access_token: str
    id_token: str
    token_type: str = "Bearer"
    expires_in: Optional[int] = None
    scope: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, data: Any) -> "TokenSet":
        """Build a TokenSet from a token endpoint body; raises TokenExchangeError if it is unusable."""
        if not isinstance(data, Mapping):
            raise TokenExchangeError("Token response is not a JSON object")
        for name in ("access_token", "id_token"):
            if not isinstance(data.get(name), str) or not data.get(name):
                raise TokenExchangeError(f"Token response is missing {name}")

        expires_in = data.get("expires_in")
        try:
            expires_in = int(expires_in) if expires_in is not None else None
        except (TypeError, ValueError) as exc:
            raise TokenExchangeError(f"Token response has invalid expires_in: {expires_in!r}") from exc

        return cls(
            access_token=data["access_token"],
            id_token=data["id_token"],
            token_type=data.get("token_type") or "Bearer",
            expires_in=expires_in,
            scope=data.get("scope"),
            extra={k: v for k, v in data.items() if k not in _TOKEN_FIELDS},
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TokenSet":
        return cls(**{k: data[k] for k in (*_TOKEN_FIELDS, "extra") if k in data})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class LoginComplete:
    """Outcome of a successful callback. The host must redirect to redirect_url."""

    redirect_url: str
    token_set: TokenSet


def _raise_for_status(resp: httpx.Response) -> httpx.Response:
    # Authlib only raises for 5xx; a 4xx body without "error" would otherwise pass as a token
    resp.raise_for_status()
    return resp


def generate_state() -> str:
    """Return a fresh anti-forgery state value (16 random bytes, hex encoded)."""
    return secrets.token_hex(16)


async def build_authorization_url(
    config: ProviderConfig,
    scopes: Optional[Sequence[str]] = None,
    *,
    discover: Discover = resolve_discovery,
) -> Tuple[str, str]:
    """
    Resolve discovery and return (authorization_url, state).

    The caller stores state in the session and redirects the user agent to the URL.
    """
    discovery = await discover(config.discovery_url, timeout=config.timeout)
    state = generate_state()
    scope = " ".join(scopes if scopes is not None else config.scopes)

    async with AsyncOAuth2Client(
        client_id=config.client_id,
        redirect_uri=config.redirect_uri,
        scope=scope,
        timeout=config.timeout,
    ) as client:
        url, _ = client.create_authorization_url(discovery.authorization_endpoint, state=state)
    return url, state


async def exchange_code(
    config: ProviderConfig,
    code: str,
    *,
    discover: Discover = resolve_discovery,
) -> TokenSet:
    """POST the authorization code to the token endpoint and return the parsed TokenSet."""
    discovery = await discover(config.discovery_url, timeout=config.timeout)

    async with AsyncOAuth2Client(
        client_id=config.client_id,
        client_secret=config.client_secret,
        redirect_uri=config.redirect_uri,
        token_endpoint_auth_method="client_secret_post",
        timeout=config.timeout,
    ) as client:
        client.register_compliance_hook("access_token_response", _raise_for_status)
        try:
            token = await client.fetch_token(
                discovery.token_endpoint,
                grant_type="authorization_code",
                code=code,
            )
        except httpx.HTTPError as exc:
            logger.warning("Token exchange request failed: %s", exc)
            raise TokenExchangeError(f"Token request failed: {exc}") from exc
        except AuthlibBaseError as exc:
            logger.warning("Token endpoint returned an error: %s", exc)
            raise TokenExchangeError(f"Token endpoint error: {exc}") from exc
        except ValueError as exc:
            raise TokenExchangeError("Token response is not valid JSON") from exc

    return TokenSet.from_response(dict(token))


def validate_callback(params: Mapping[str, str], expected_state: Optional[str]) -> str:
    """
    Check the callback query parameters and return the authorization code.

    Rejects provider errors, a missing code, and a state that is absent or does not
    match the value stored when the login URL was issued.
    """
    error = params.get("error")
    if error:
        description = params.get("error_description") or error
        raise InvalidCallbackError(f"Provider returned an error: {description}")

    code = params.get("code")
    if not code:
        raise InvalidCallbackError("Callback is missing the authorization code")

    state = params.get("state")
    if not expected_state or not state:
        raise InvalidCallbackError("Callback state is missing")
    if not secrets.compare_digest(state.encode(), expected_state.encode()):
        raise InvalidCallbackError("Callback state does not match")

    return code
