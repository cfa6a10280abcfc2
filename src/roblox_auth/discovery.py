"""
OpenID Connect discovery.

The document is fetched fresh on every call; there is no cache and no retry.
Hosts that want caching can pass their own resolver to RobloxOAuthProvider.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict

import httpx

from roblox_auth.config import DEFAULT_TIMEOUT
from roblox_auth.errors import DiscoveryError
from roblox_auth.http_client import get_json

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("authorization_endpoint", "token_endpoint")


@dataclass(frozen=True)
class DiscoveryDocument:
    """The endpoints this integration needs; other fields land in extra."""

    authorization_endpoint: str
    token_endpoint: str
    extra: Dict[str, Any] = field(default_factory=dict)


async def resolve_discovery(discovery_url: str, *, timeout: float = DEFAULT_TIMEOUT) -> DiscoveryDocument:
    """Fetch and parse the provider's openid-configuration document."""
    try:
        data = await get_json(discovery_url, timeout=timeout)
    except httpx.HTTPError as exc:
        logger.warning("Discovery fetch failed for %s: %s", discovery_url, exc)
        raise DiscoveryError(f"Could not fetch discovery document: {exc}") from exc
    except ValueError as exc:
        raise DiscoveryError("Discovery document is not valid JSON") from exc

    if not isinstance(data, dict):
        raise DiscoveryError("Discovery document is not a JSON object")

    missing = [name for name in REQUIRED_FIELDS if not isinstance(data.get(name), str) or not data.get(name)]
    if missing:
        raise DiscoveryError(f"Discovery document is missing: {', '.join(missing)}")

    extra = {k: v for k, v in data.items() if k not in REQUIRED_FIELDS}
    return DiscoveryDocument(
        authorization_endpoint=data["authorization_endpoint"],
        token_endpoint=data["token_endpoint"],
        extra=extra,
    )
