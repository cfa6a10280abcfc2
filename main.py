"""
FastAPI app: Roblox OAuth login + session-stored tokens + group rank lookup.

Decisions:
- .env is loaded before importing roblox_auth so ROBLOX_* and SESSION_SECRET are
  available when the provider config is built (Ruff E402 suppressed for that).
- group:read is requested on top of openid/profile unless ROBLOX_SCOPES overrides
  it; the groups endpoints need it.
- Session secret from SESSION_SECRET env; default "change-me" is for dev only.
"""

import logging
import os
from dataclasses import replace

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware

load_dotenv()

# Load .env before roblox_auth so ROBLOX_* and SESSION_SECRET are set; Ruff E402.
from roblox_auth import GROUP_SCOPE, ProviderConfig, create_auth_router, is_logged_in, require_login  # noqa: E402

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))

SESSION_SECRET = os.getenv("SESSION_SECRET", "change-me")

config = ProviderConfig.from_env()
if not os.getenv("ROBLOX_SCOPES"):
    config = replace(config, scopes=(*config.scopes, GROUP_SCOPE))

app = FastAPI()
app.add_middleware(SessionMiddleware, secret_key=SESSION_SECRET)
app.include_router(create_auth_router(config))


@app.get("/")
async def home(request: Request):
    return {"logged_in": is_logged_in(request)}


# Example protected route (any logged-in Roblox user)
@app.get("/members")
async def members_area(_=Depends(require_login)):
    return {"ok": True, "area": "members"}
