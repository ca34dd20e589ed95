"""Platform operations: platforms, notes, orders and API integrations."""

from __future__ import annotations

from typing import Any

from . import endpoints as ep
from .client import AdminClient


async def get_platforms(client: AdminClient) -> Any:
    return await client.get(ep.GET_PLATFORMS_PATH)


async def get_platform(client: AdminClient, platform_id: int | str) -> Any:
    return await client.get(f"{ep.PLATFORM_PATH}/{platform_id}")


async def create_platform(client: AdminClient, payload: dict[str, Any]) -> Any:
    return await client.post(ep.PLATFORM_PATH, json=payload)


async def update_platform(
    client: AdminClient, platform_id: int | str, payload: dict[str, Any]
) -> Any:
    return await client.patch(f"{ep.PLATFORM_PATH}/{platform_id}", json=payload)


async def activate_platform(client: AdminClient, platform_id: int | str) -> Any:
    return await client.patch(f"{ep.ACTIVATE_PLATFORM_PATH}/{platform_id}")


async def deactivate_platform(client: AdminClient, platform_id: int | str) -> Any:
    return await client.patch(f"{ep.DEACTIVATE_PLATFORM_PATH}/{platform_id}")


async def get_platform_types(client: AdminClient) -> Any:
    return await client.get(ep.GET_PLATFORM_TYPES_PATH)


async def get_lead_return_cutoffs(client: AdminClient) -> Any:
    return await client.get(ep.GET_LEAD_RETURN_CUTOFFS_PATH)


async def get_states(client: AdminClient) -> Any:
    return await client.get(ep.GET_STATES_PATH)


async def get_lists_dropdown(client: AdminClient) -> Any:
    return await client.get(ep.GET_LISTS_DROPDOWN_PATH)


async def get_presets_by_provider(
    client: AdminClient, service_provider: str | None = None
) -> Any:
    """Fetch platform presets, optionally for one service provider only."""
    params = {"service_provider": service_provider} if service_provider else None
    return await client.get(ep.PLATFORM_PRESETS_BY_PROVIDER_PATH, params=params)


# ------------------------------------------------------------------
# Notes
# ------------------------------------------------------------------


async def get_platform_notes(client: AdminClient, platform_id: int | str) -> Any:
    return await client.get(f"{ep.PLATFORM_PATH}/{platform_id}/notes")


async def create_platform_note(
    client: AdminClient, platform_id: int | str, payload: dict[str, Any]
) -> Any:
    return await client.post(f"{ep.PLATFORM_PATH}/{platform_id}/note", json=payload)


# ------------------------------------------------------------------
# Orders
# ------------------------------------------------------------------


async def get_platform_orders(client: AdminClient, platform_id: int | str) -> Any:
    return await client.get(f"{ep.PLATFORM_PATH}/{platform_id}/orders")


async def get_platform_order(
    client: AdminClient, platform_id: int | str, order_id: int | str
) -> Any:
    return await client.get(f"{ep.PLATFORM_PATH}/{platform_id}/order/{order_id}")


async def create_platform_order(
    client: AdminClient, platform_id: int | str, payload: dict[str, Any]
) -> Any:
    return await client.post(f"{ep.PLATFORM_PATH}/{platform_id}/order", json=payload)


# ------------------------------------------------------------------
# API integrations
# ------------------------------------------------------------------


def _integration_path(platform_id: int | str, integration_id: int | str) -> str:
    return f"{ep.PLATFORM_PATH}/{platform_id}/api-integration/{integration_id}"


async def get_api_integrations(client: AdminClient, platform_id: int | str) -> Any:
    return await client.get(f"{ep.PLATFORM_PATH}/{platform_id}/api-integrations")


async def get_api_integration(
    client: AdminClient, platform_id: int | str, integration_id: int | str
) -> Any:
    return await client.get(_integration_path(platform_id, integration_id))


async def create_api_integration(
    client: AdminClient, platform_id: int | str, payload: dict[str, Any]
) -> Any:
    return await client.post(
        f"{ep.PLATFORM_PATH}/{platform_id}/api-integration", json=payload
    )


async def update_api_integration(
    client: AdminClient,
    platform_id: int | str,
    integration_id: int | str,
    payload: dict[str, Any],
) -> Any:
    return await client.patch(_integration_path(platform_id, integration_id), json=payload)


async def delete_api_integration(
    client: AdminClient, platform_id: int | str, integration_id: int | str
) -> Any:
    return await client.delete(_integration_path(platform_id, integration_id))
