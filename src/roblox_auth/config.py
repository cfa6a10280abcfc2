"""
Provider configuration for the Roblox OAuth integration.

Values come from the ROBLOX_* environment variables (loaded from .env by the
application entrypoint). ROBLOX_CLIENT_ID, ROBLOX_CLIENT_SECRET and
ROBLOX_REDIRECT_URI are required; everything else has a default.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from roblox_auth.errors import ConfigurationError

# OIDC discovery URL published by Roblox
DISCOVERY_URL = "https://apis.roblox.com/oauth/.well-known/openid-configuration"
GROUPS_API_URL = "https://groups.roblox.com"

DEFAULT_SCOPES: Tuple[str, ...] = ("openid", "profile")
# Roblox-specific scope required by the group membership lookup
GROUP_SCOPE = "group:read"

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ProviderConfig:
    """Client registration and endpoints for one Roblox OAuth app."""

    client_id: str
    client_secret: str
    redirect_uri: str
    discovery_url: str = DISCOVERY_URL
    post_login_url: str = "/"
    scopes: Tuple[str, ...] = DEFAULT_SCOPES
    groups_api_url: str = GROUPS_API_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProviderConfig":
        """Build a config from ROBLOX_* variables; raises ConfigurationError if any required one is unset."""
        env = os.environ if environ is None else environ

        required = {
            "client_id": "ROBLOX_CLIENT_ID",
            "client_secret": "ROBLOX_CLIENT_SECRET",
            "redirect_uri": "ROBLOX_REDIRECT_URI",
        }
        missing = [name for name in required.values() if not env.get(name)]
        if missing:
            raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")

        scopes = tuple(env.get("ROBLOX_SCOPES", "").split()) or DEFAULT_SCOPES

        timeout_raw = env.get("ROBLOX_HTTP_TIMEOUT")
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
        except ValueError as exc:
            raise ConfigurationError(f"ROBLOX_HTTP_TIMEOUT must be a number, got {timeout_raw!r}") from exc
        if timeout <= 0:
            raise ConfigurationError("ROBLOX_HTTP_TIMEOUT must be positive")

        return cls(
            **{field: env[name] for field, name in required.items()},
            discovery_url=env.get("ROBLOX_DISCOVERY_URL") or DISCOVERY_URL,
            post_login_url=env.get("ROBLOX_POST_LOGIN_URL") or "/",
            scopes=scopes,
            groups_api_url=(env.get("ROBLOX_GROUPS_API_URL") or GROUPS_API_URL).rstrip("/"),
            timeout=timeout,
        )
