"""Active campaigns and the teams/vendors they are assigned to."""

from __future__ import annotations

from typing import Any

from . import endpoints as ep
from .client import AdminClient

# ------------------------------------------------------------------
# Active campaigns
# ------------------------------------------------------------------


async def get_active_campaigns(client: AdminClient, page: int = 1, limit: int = 10) -> Any:
    """Fetch one page of active campaigns."""
    return await client.get(
        ep.GET_ACTIVE_CAMPAIGNS_PATH, params={"page": page, "limit": limit}
    )


async def get_active_campaign(client: AdminClient, campaign_id: int | str) -> Any:
    return await client.get(f"{ep.ACTIVE_CAMPAIGN_PATH}/{campaign_id}")


async def create_active_campaign(client: AdminClient, payload: dict[str, Any]) -> Any:
    """Create a campaign.

    ``payload`` is ``{"list_ids": [...], "vendor_id": ..., "team_id": ...,
    "description": ...}``.
    """
    return await client.post(ep.ACTIVE_CAMPAIGN_PATH, json=payload)


async def update_active_campaign(
    client: AdminClient, campaign_id: int | str, payload: dict[str, Any]
) -> Any:
    return await client.patch(f"{ep.ACTIVE_CAMPAIGN_PATH}/{campaign_id}", json=payload)


async def delete_active_campaign(client: AdminClient, campaign_id: int | str) -> Any:
    return await client.delete(f"{ep.ACTIVE_CAMPAIGN_PATH}/{campaign_id}")


async def get_campaigns_dropdown(client: AdminClient) -> Any:
    return await client.get(ep.GET_CAMPAIGNS_DROPDOWN_PATH)


# ------------------------------------------------------------------
# Teams
# ------------------------------------------------------------------


async def get_teams(client: AdminClient) -> Any:
    return await client.get(ep.GET_TEAMS_PATH)


async def create_team(client: AdminClient, team_name: str) -> Any:
    return await client.post(ep.TEAM_PATH, json={"team_name": team_name})


async def update_team(client: AdminClient, team_id: int | str, team_name: str) -> Any:
    return await client.patch(f"{ep.TEAM_PATH}/{team_id}", json={"team_name": team_name})


async def delete_team(client: AdminClient, team_id: int | str) -> Any:
    return await client.delete(f"{ep.TEAM_PATH}/{team_id}")


# ------------------------------------------------------------------
# Campaign vendors
# ------------------------------------------------------------------


async def get_campaign_vendors(client: AdminClient) -> Any:
    return await client.get(ep.GET_VENDORS_FOR_ACTIVE_CAMPAIGN_PATH)


async def create_campaign_vendor(client: AdminClient, vendor_name: str) -> Any:
    return await client.post(
        ep.VENDOR_FOR_ACTIVE_CAMPAIGN_PATH, json={"vendor_name": vendor_name}
    )


async def update_campaign_vendor(
    client: AdminClient, vendor_id: int | str, vendor_name: str
) -> Any:
    return await client.patch(
        f"{ep.VENDOR_FOR_ACTIVE_CAMPAIGN_PATH}/{vendor_id}",
        json={"vendor_name": vendor_name},
    )


async def delete_campaign_vendor(client: AdminClient, vendor_id: int | str) -> Any:
    return await client.delete(f"{ep.VENDOR_FOR_ACTIVE_CAMPAIGN_PATH}/{vendor_id}")
