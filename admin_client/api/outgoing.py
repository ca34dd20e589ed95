"""Outgoing, priority and bidding posts.

Each function passes its keyword filters (``page``, ``limit``, ``search``,
``platform_id``, ``status`` ...) straight through as query parameters;
filters set to ``None`` are dropped.
"""

from __future__ import annotations

from typing import Any

from . import endpoints as ep
from .client import AdminClient


def _query(filters: dict[str, Any]) -> dict[str, Any] | None:
    params = {key: value for key, value in filters.items() if value is not None}
    return params or None


async def get_outgoing_posts(client: AdminClient, **filters: Any) -> Any:
    return await client.get(ep.GET_OUTGOING_POSTS_PATH, params=_query(filters))


async def get_priority_posts(client: AdminClient, **filters: Any) -> Any:
    return await client.get(ep.GET_PRIORITY_POSTS_PATH, params=_query(filters))


async def get_bidding_posts(client: AdminClient, **filters: Any) -> Any:
    return await client.get(ep.GET_BIDDING_POSTS_PATH, params=_query(filters))
