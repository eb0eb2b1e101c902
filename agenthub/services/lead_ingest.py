"""Webhook ingest adapters.

Each automation source names profile fields differently. One adapter per
source maps the raw payload onto LeadCreate, which is then validated and
stored through the pipeline service. Any status in the payload is ignored.
"""

import logging
from typing import Any, Callable

from agenthub.schemas.instagram_lead import LeadCreate

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "make"


class MissingUsername(ValueError):
    pass


def _first(payload: dict, *keys: str, default: Any = None) -> Any:
    """Return the first truthy value among keys."""
    for key in keys:
        value = payload.get(key)
        if value:
            return value
    return default


def _as_int(value: Any) -> int:
    try:
        return int(str(value).replace(",", ""))
    except (TypeError, ValueError):
        return 0


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def _require_username(payload: dict, *keys: str) -> str:
    username = _first(payload, *keys)
    if not username or not str(username).strip():
        raise MissingUsername("Invalid webhook data format: username is required")
    return str(username).strip().lstrip("@")


def from_make(payload: dict) -> LeadCreate:
    """Make.com scenario output (also the dashboard's generic format)."""
    username = _require_username(payload, "username")
    return LeadCreate(
        username=username,
        full_name=_first(payload, "fullName", "full_name", default=username),
        profile_url=_first(payload, "profileUrl", "profile_url", default=f"https://instagram.com/{username}"),
        profile_picture_url=_first(payload, "profilePictureUrl", "profile_picture_url", default=""),
        instagram_id=str(_first(payload, "instagramID", "instagram_id", "id", default="")),
        is_verified=_as_bool(_first(payload, "isVerified", "is_verified", default=False)),
        bio=_first(payload, "bio", "biography", default=""),
        followers=_as_int(_first(payload, "followers", "followerCount", default=0)),
        following=_as_int(_first(payload, "following", "followingCount", default=0)),
        tags=payload.get("tags") or [],
    )


def from_phantombuster(payload: dict) -> LeadCreate:
    """PhantomBuster Instagram Profile Scraper result row."""
    username = _require_username(payload, "username", "profileName")
    query = payload.get("query")
    return LeadCreate(
        username=username,
        full_name=_first(payload, "fullName", default=username),
        profile_url=_first(payload, "profileUrl", default=f"https://instagram.com/{username}"),
        profile_picture_url=_first(payload, "imgUrl", "profilePictureUrl", default=""),
        instagram_id=str(_first(payload, "instagramID", "instagramId", "id", default="")),
        is_verified=_as_bool(payload.get("isVerified", False)),
        bio=_first(payload, "bio", "biography", default=""),
        followers=_as_int(_first(payload, "followersCount", "followers", default=0)),
        following=_as_int(_first(payload, "followingCount", "following", default=0)),
        tags=[query] if query else [],
    )


ADAPTERS: dict[str, Callable[[dict], LeadCreate]] = {
    "make": from_make,
    "phantombuster": from_phantombuster,
}


def adapt_payload(payload: Any, source: str = DEFAULT_SOURCE) -> LeadCreate:
    """Map a raw webhook body onto the canonical lead DTO.

    Raises KeyError for an unknown source and MissingUsername when the
    payload has no username.
    """
    adapter = ADAPTERS[source]
    if not isinstance(payload, dict):
        raise MissingUsername("Invalid webhook data format: expected a JSON object")
    lead = adapter(payload)
    logger.debug("Adapted %s payload for @%s", source, lead.username)
    return lead
