# Tests for router.py: login round trip through FastAPI

from urllib.parse import parse_qs, urlsplit

import httpx
import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from starlette.middleware.sessions import SessionMiddleware

from roblox_auth.router import create_auth_router
from roblox_auth.session import require_login

from .conftest import GROUPS_API_URL

TOKEN_URL = "https://id.example/token"
ROLES_URL = f"{GROUPS_API_URL}/v1/users/123/groups/roles"


@pytest.fixture
def client(config):
    app = FastAPI()
    app.add_middleware(SessionMiddleware, secret_key="test-secret")
    app.include_router(create_auth_router(config))

    @app.get("/members")
    async def members(_=Depends(require_login)):
        return {"ok": True}

    return TestClient(app)


def _login(client, mock_api, token_body):
    r = client.get("/login", follow_redirects=False)
    state = parse_qs(urlsplit(r.headers["location"]).query)["state"][0]
    mock_api.post(TOKEN_URL).mock(return_value=httpx.Response(200, json=token_body))
    return client.get("/auth/callback", params={"code": "the-code", "state": state}, follow_redirects=False)


def test_login_redirects_to_provider(client, mock_api):
    r = client.get("/login", follow_redirects=False)
    assert r.status_code == 307
    assert r.headers["location"].startswith("https://id.example/auth?")


def test_login_discovery_failure(client, mock_api):
    mock_api.get("https://id.example/.well-known/openid-configuration").mock(return_value=httpx.Response(500))
    r = client.get("/login", follow_redirects=False)
    assert r.status_code == 502
    assert "error" in r.json()


def test_callback_redirects_after_login(client, mock_api, token_body):
    r = _login(client, mock_api, token_body)
    assert r.status_code == 307
    assert r.headers["location"] == "/dashboard"

    me = client.get("/me", follow_redirects=False)
    assert me.json() == {"claims": {"sub": "123", "preferred_username": "alice"}}
    assert client.get("/members").json() == {"ok": True}


def test_callback_with_bad_state(client, mock_api):
    client.get("/login", follow_redirects=False)
    r = client.get("/auth/callback", params={"code": "the-code", "state": "forged"}, follow_redirects=False)
    assert r.status_code == 400
    assert "state" in r.json()["error"]


def test_callback_without_code(client, mock_api):
    r = client.get("/auth/callback", follow_redirects=False)
    assert r.status_code == 400


def test_me_redirects_when_anonymous(client):
    r = client.get("/me", follow_redirects=False)
    assert r.status_code == 307
    assert r.headers["location"] == "/login"


def test_members_requires_login(client):
    assert client.get("/members").status_code == 401


def test_groups_and_rank(client, mock_api, token_body):
    _login(client, mock_api, token_body)
    mock_api.get(ROLES_URL).mock(
        return_value=httpx.Response(
            200,
            json={"data": [{"group": {"id": 7, "name": "Scripters"}, "role": {"rank": 50, "name": "Member"}}]},
        )
    )

    groups = client.get("/groups").json()
    assert groups == {"groups": [{"group_id": 7, "group_name": "Scripters", "rank": 50, "role_name": "Member"}]}
    assert client.get("/groups/7/rank").json() == {"group_id": 7, "rank": 50}
    assert client.get("/groups/99/rank").json() == {"group_id": 99, "rank": 0}


def test_groups_when_anonymous(client):
    assert client.get("/groups").status_code == 401


def test_groups_upstream_failure(client, mock_api, token_body):
    _login(client, mock_api, token_body)
    mock_api.get(ROLES_URL).mock(return_value=httpx.Response(503))
    assert client.get("/groups").status_code == 502


def test_logout(client, mock_api, token_body):
    _login(client, mock_api, token_body)
    r = client.get("/logout", follow_redirects=False)
    assert r.headers["location"] == "/"
    assert client.get("/me", follow_redirects=False).headers["location"] == "/login"
