"""
ID token claims.

decode_claims does NOT verify the token signature. The claims are trusted only
because the token came straight from the provider's token endpoint over TLS.
Signature verification, if ever added, belongs in this module so callers do not change.
"""

from typing import Any, Dict

from authlib.common.encoding import json_loads, to_bytes, urlsafe_b64decode

from roblox_auth.errors import MalformedTokenError, MissingClaimError
from roblox_auth.flow import TokenSet

Claims = Dict[str, Any]


def decode_claims(token_set: TokenSet) -> Claims:
    """Return the unverified payload of the ID token as a dict."""
    segments = (token_set.id_token or "").split(".")
    if len(segments) != 3:
        raise MalformedTokenError(f"ID token has {len(segments)} segments, expected 3")

    try:
        payload = urlsafe_b64decode(to_bytes(segments[1]))
        claims = json_loads(payload)
    except ValueError as exc:
        raise MalformedTokenError("ID token payload is not base64url encoded JSON") from exc

    if not isinstance(claims, dict):
        raise MalformedTokenError("ID token payload is not a JSON object")
    return claims


def require_subject(claims: Claims) -> str:
    """Return the sub claim; raises MissingClaimError if it is absent."""
    sub = claims.get("sub")
    if sub is None or sub == "":
        raise MissingClaimError("ID token has no sub claim")
    return str(sub)

