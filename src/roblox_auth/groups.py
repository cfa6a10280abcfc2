"""
Roblox group membership lookup and rank resolution.

fetch_user_groups calls the groups API with the user's access token; find_rank
scans the result for one group. A rank of 0 means "not a member" and is never
raised as an error.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

import httpx

from roblox_auth.claims import decode_claims, require_subject
from roblox_auth.config import DEFAULT_TIMEOUT, GROUPS_API_URL
from roblox_auth.errors import GroupFetchError, InvalidArgumentError, NotAuthenticatedError
from roblox_auth.flow import TokenSet
from roblox_auth.http_client import get_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupMembership:
    """One group the user belongs to, with their role in it."""

    group_id: int
    group_name: str
    rank: int
    role_name: str

    @classmethod
    def from_api(cls, entry: Any) -> Optional["GroupMembership"]:
        """Parse one item of the API's data array; None if it is malformed."""
        try:
            group, role = entry["group"], entry["role"]
            return cls(
                group_id=int(group["id"]),
                group_name=str(group.get("name", "")),
                rank=int(role["rank"]),
                role_name=str(role.get("name", "")),
            )
        except (KeyError, TypeError, ValueError, AttributeError):
            return None


async def fetch_user_groups(
    token_set: Optional[TokenSet],
    *,
    groups_api_url: str = GROUPS_API_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[GroupMembership]:
    """
    Return every group membership of the token's subject.

    Calls GET {groups_api_url}/v1/users/{sub}/groups/roles with a bearer token.
    Malformed entries in the response are skipped.
    """
    if token_set is None or not token_set.access_token:
        raise NotAuthenticatedError("No access token in session")

    subject = require_subject(decode_claims(token_set))
    url = f"{groups_api_url.rstrip('/')}/v1/users/{subject}/groups/roles"
    headers = {"Authorization": f"Bearer {token_set.access_token}"}

    try:
        data = await get_json(url, headers=headers, timeout=timeout)
    except httpx.HTTPError as exc:
        logger.warning("Group lookup failed for user %s: %s", subject, exc)
        raise GroupFetchError(f"Group lookup failed: {exc}") from exc
    except ValueError as exc:
        raise GroupFetchError("Group lookup returned invalid JSON") from exc

    entries = data.get("data") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise GroupFetchError("Group lookup response has no data list")

    memberships = []
    for entry in entries:
        membership = GroupMembership.from_api(entry)
        if membership is None:
            logger.debug("Skipping malformed group entry: %r", entry)
            continue
        memberships.append(membership)
    return memberships


def _entry_group_and_rank(entry: Any):
    """Pull (group_id, rank) from a GroupMembership or a raw API dict; raises on malformed input."""
    if isinstance(entry, GroupMembership):
        return entry.group_id, entry.rank
    if isinstance(entry, Mapping):
        return int(entry["group"]["id"]), int(entry["role"]["rank"])
    raise TypeError(f"unsupported membership entry: {type(entry).__name__}")


def find_rank(memberships: List[Any], group_id: Any) -> int:
    """
    Return the user's rank in group_id, or 0 if they are not a member.

    Group ids compare as integers. The first matching entry wins; malformed
    entries are skipped.
    """
    if not isinstance(memberships, list):
        raise InvalidArgumentError("memberships must be a list")
    try:
        target = int(group_id)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"group_id must be numeric, got {group_id!r}") from exc

    for entry in memberships:
        try:
            entry_group, rank = _entry_group_and_rank(entry)
        except (KeyError, TypeError, ValueError):
            continue
        if entry_group == target:
            return rank
    return 0
