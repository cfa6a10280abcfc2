"""
Thin httpx helpers shared by discovery and the group lookup.

Every request verifies TLS and is bounded by a timeout. Failures propagate as
httpx.HTTPError (transport or non-2xx status) or ValueError (body is not JSON);
callers wrap them in their own error type.
"""

from typing import Any, Mapping, Optional

import httpx

from roblox_auth.config import DEFAULT_TIMEOUT


def create_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    """Return an AsyncClient with TLS verification and a bounded timeout."""
    return httpx.AsyncClient(timeout=timeout, verify=True)


async def get_json(
    url: str,
    *,
    headers: Optional[Mapping[str, str]] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """GET url and return the decoded JSON body."""
    async with create_client(timeout) as client:
        r = await client.get(url, headers=headers)
        r.raise_for_status()
        return r.json()
