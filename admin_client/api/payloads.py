"""Token extraction from login and refresh responses.

The backend is not consistent about where it puts tokens: some responses
nest them under ``data.tokens``, some directly under ``data``, some at the
top level.  Each field is looked up by trying an ordered list of key paths;
the first truthy value wins.  The order is part of the wire contract.
"""

from __future__ import annotations

from typing import Any, Sequence

from ..models.auth import TokenBundle

KeyPath = tuple[str, ...]

ACCESS_TOKEN_PATHS: tuple[KeyPath, ...] = (
    ("data", "tokens", "access_token"),
    ("data", "access_token"),
    ("tokens", "access_token"),
    ("access_token",),
)

REFRESH_TOKEN_PATHS: tuple[KeyPath, ...] = (
    ("data", "tokens", "refresh_token"),
    ("data", "refresh_token"),
    ("tokens", "refresh_token"),
    ("refresh_token",),
)

USER_PATHS: tuple[KeyPath, ...] = (
    ("data", "user"),
    ("user",),
    ("profile",),
)


def dig(payload: Any, path: KeyPath) -> Any:
    """Follow *path* through nested dicts, returning ``None`` on any miss."""
    current = payload
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def first_match(payload: Any, paths: Sequence[KeyPath]) -> Any:
    """Return the first truthy value found along *paths*, else ``None``."""
    for path in paths:
        value = dig(payload, path)
        if value:
            return value
    return None


def extract_tokens(payload: Any) -> TokenBundle | None:
    """Build a :class:`TokenBundle` from an auth response.

    A bare non-empty string response is taken to be the access token itself.
    Returns ``None`` when no access token can be found.
    """
    if isinstance(payload, str):
        return TokenBundle(access_token=payload) if payload.strip() else None

    access_token = first_match(payload, ACCESS_TOKEN_PATHS)
    if not isinstance(access_token, str) or not access_token:
        return None

    refresh_token = first_match(payload, REFRESH_TOKEN_PATHS)
    return TokenBundle(
        access_token=access_token,
        refresh_token=refresh_token if isinstance(refresh_token, str) else None,
        user=first_match(payload, USER_PATHS),
    )
