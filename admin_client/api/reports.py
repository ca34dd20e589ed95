"""Report dropdowns and report generation.

Report payloads are passed through unchanged; dates are ``YYYY-MM-DD``
strings.
"""

from __future__ import annotations

from typing import Any

from . import endpoints as ep
from .client import AdminClient


async def get_list_import_stats_dropdown(client: AdminClient) -> Any:
    return await client.get(ep.GET_LIST_IMPORT_STATS_DROPDOWN_PATH)


async def generate_list_import_stats_report(
    client: AdminClient, payload: dict[str, Any]
) -> Any:
    """Generate the list import stats report.

    ``payload`` keys: ``list_ids``, ``start_date``, ``end_date``,
    ``show_daily_breakdown`` and ``import_through`` (``"CSV"``,
    ``"Webhook"`` or ``"Both"``).
    """
    return await client.post(ep.GET_LIST_IMPORT_STATS_PATH, json=payload)


async def get_lead_delivery_dropdown(client: AdminClient) -> Any:
    return await client.get(ep.GET_LEAD_DELIVERY_DROPDOWN_PATH)


async def generate_lead_delivery_report(
    client: AdminClient, payload: dict[str, Any]
) -> Any:
    """Generate the lead delivery report.

    ``payload`` keys: ``platform_ids``, ``start_date``, ``end_date``,
    ``leads_type`` and ``subtract_returned_leads``.
    """
    return await client.post(ep.GET_LEAD_DELIVERY_PATH, json=payload)


async def generate_scrub_report(client: AdminClient, payload: dict[str, Any]) -> Any:
    return await client.post(ep.GET_SCRUB_REPORT_PATH, json=payload)
