# Shared fixtures for roblox_auth tests

import base64
import json

import httpx
import pytest
import respx

from roblox_auth.config import ProviderConfig

DISCOVERY_URL = "https://id.example/.well-known/openid-configuration"
DISCOVERY = {
    "issuer": "https://id.example",
    "authorization_endpoint": "https://id.example/auth",
    "token_endpoint": "https://id.example/token",
}
GROUPS_API_URL = "https://groups.example"


def make_id_token(payload: dict) -> str:
    """Build an unsigned three-segment token around payload."""

    def b64(data: bytes) -> str:
        return base64.urlsafe_b64encode(data).rstrip(b"=").decode()

    header = b64(json.dumps({"alg": "RS256", "typ": "JWT"}).encode())
    return f"{header}.{b64(json.dumps(payload).encode())}.signature"


@pytest.fixture
def config():
    return ProviderConfig(
        client_id="client-123",
        client_secret="secret-456",
        redirect_uri="https://app.example/auth/callback",
        discovery_url=DISCOVERY_URL,
        post_login_url="/dashboard",
        groups_api_url=GROUPS_API_URL,
        timeout=5,
    )


@pytest.fixture
def id_token():
    return make_id_token({"sub": "123", "preferred_username": "alice"})


@pytest.fixture
def token_body(id_token):
    return {
        "access_token": "access-abc",
        "id_token": id_token,
        "token_type": "Bearer",
        "expires_in": 900,
        "scope": "openid profile",
    }


@pytest.fixture
def mock_api():
    """respx router with the discovery document already mocked."""
    with respx.mock(assert_all_called=False) as router:
        router.get(DISCOVERY_URL).mock(return_value=httpx.Response(200, json=DISCOVERY))
        yield router
