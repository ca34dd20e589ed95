"""Vendor and vendor-list operations against the dashboard API.

All functions accept an :class:`~admin_client.api.client.AdminClient` as
their first argument and return the parsed JSON response.  Missing ids are
rejected with :class:`ValueError` before any request is sent.
"""

from __future__ import annotations

from typing import Any, BinaryIO

from . import endpoints as ep
from .client import AdminClient


def _require(value: Any, what: str) -> None:
    if not value:
        raise ValueError(f"{what} is required")


# ------------------------------------------------------------------
# Vendors
# ------------------------------------------------------------------


async def get_vendors(client: AdminClient, page: int = 1, limit: int = 10) -> Any:
    """Fetch one page of vendors."""
    return await client.get(ep.GET_VENDORS_PATH, params={"page": page, "limit": limit})


async def get_vendor(client: AdminClient, vendor_id: int | str) -> Any:
    """Fetch a single vendor by its ID."""
    _require(vendor_id, "Vendor ID")
    return await client.get(f"{ep.VENDOR_PATH}/{vendor_id}")


async def search_vendors(
    client: AdminClient,
    search: str = "",
    page: int = 1,
    limit: int = 10,
    is_active: str = "",
    vendor_type: str = "",
    country: str = "",
) -> Any:
    """Search vendors.  Empty filters are left out of the query string."""
    params: dict[str, Any] = {}
    if search:
        params["search"] = search
    params["page"] = page
    params["limit"] = limit
    if is_active:
        params["is_active"] = is_active
    if vendor_type:
        params["vendor_type"] = vendor_type
    if country:
        params["country"] = country
    return await client.get(ep.SEARCH_VENDORS_PATH, params=params)


async def create_vendor(client: AdminClient, payload: dict[str, Any]) -> Any:
    return await client.post(ep.VENDOR_PATH, json=payload)


async def update_vendor(
    client: AdminClient, vendor_id: int | str, payload: dict[str, Any]
) -> Any:
    _require(vendor_id, "Vendor ID")
    return await client.patch(f"{ep.VENDOR_PATH}/{vendor_id}", json=payload)


async def activate_vendor(client: AdminClient, vendor_id: int | str) -> Any:
    _require(vendor_id, "Vendor ID")
    return await client.patch(f"{ep.ACTIVATE_VENDOR_PATH}/{vendor_id}")


async def deactivate_vendor(client: AdminClient, vendor_id: int | str) -> Any:
    _require(vendor_id, "Vendor ID")
    return await client.patch(f"{ep.DEACTIVATE_VENDOR_PATH}/{vendor_id}")


async def get_vendor_api_configs(client: AdminClient, vendor_id: int | str) -> Any:
    """Fetch every list of a vendor together with its API posting configs."""
    _require(vendor_id, "Vendor ID")
    return await client.get(f"{ep.GET_VENDOR_API_CONFIGS_PATH}/{vendor_id}")


# ------------------------------------------------------------------
# Lookups
# ------------------------------------------------------------------


async def get_vendor_types(client: AdminClient) -> Any:
    return await client.get(ep.GET_VENDOR_TYPES_PATH)


async def get_payment_terms(client: AdminClient) -> Any:
    return await client.get(ep.GET_PAYMENT_TERMS_PATH)


async def get_countries(client: AdminClient) -> Any:
    return await client.get(ep.GET_COUNTRIES_PATH)


async def get_states_by_country(client: AdminClient, country_id: int | str) -> Any:
    _require(country_id, "Country ID")
    return await client.get(f"{ep.GET_STATES_BY_COUNTRY_PATH}/{country_id}")


async def get_list_verticals(client: AdminClient) -> Any:
    return await client.get(ep.GET_LIST_VERTICAL_PATH)


async def get_dedupe_backs(client: AdminClient) -> Any:
    return await client.get(ep.GET_DEDUPE_BACK_PATH)


# ------------------------------------------------------------------
# Vendor lists
# ------------------------------------------------------------------


async def get_vendor_lists(
    client: AdminClient,
    page: int = 1,
    limit: int = 10,
    vendor_id: int | str | None = None,
    list_status: str | None = None,
) -> Any:
    """Fetch one page of lists, optionally filtered by vendor and status."""
    params: dict[str, Any] = {"page": page, "limit": limit}
    if vendor_id:
        params["vendor_id"] = str(vendor_id)
    if list_status:
        params["list_status"] = list_status
    return await client.get(ep.GET_VENDOR_LISTS_PATH, params=params)


async def create_list(client: AdminClient, payload: dict[str, Any]) -> Any:
    return await client.post(ep.LIST_PATH, json=payload)


async def get_vendor_list(client: AdminClient, list_id: int | str) -> Any:
    _require(list_id, "List ID")
    return await client.get(f"{ep.LIST_PATH}/{list_id}")


async def update_list(
    client: AdminClient, list_id: int | str, payload: dict[str, Any]
) -> Any:
    _require(list_id, "List ID")
    return await client.patch(f"{ep.LIST_PATH}/{list_id}", json=payload)


async def activate_list(client: AdminClient, list_id: int | str) -> Any:
    _require(list_id, "List ID")
    return await client.patch(f"{ep.ACTIVATE_LIST_PATH}/{list_id}")


async def deactivate_list(client: AdminClient, list_id: int | str) -> Any:
    _require(list_id, "List ID")
    return await client.patch(f"{ep.DEACTIVATE_LIST_PATH}/{list_id}")


async def update_list_status(client: AdminClient, list_id: int | str, status: str) -> Any:
    """Move a list to another status (e.g. ``"active"`` or ``"archived"``)."""
    _require(list_id, "List ID")
    _require(status, "Status")
    return await client.patch(
        f"{ep.UPDATE_LIST_STATUS_PATH}/{list_id}", json={"status": status}
    )


async def upload_csv(
    client: AdminClient,
    list_id: int | str,
    csv_file: BinaryIO | bytes,
    filename: str = "records.csv",
    delimiter: str = ",",
    has_header_row: bool = True,
    has_opt_in_dates: bool = False,
) -> Any:
    """Upload a CSV of records into a list as ``multipart/form-data``."""
    _require(list_id, "List ID")
    if csv_file is None:
        raise ValueError("CSV file is required")
    form = {
        "delimiter": delimiter,
        "has_header_row": str(has_header_row).lower(),
        "has_opt_in_dates": str(has_opt_in_dates).lower(),
    }
    return await client.post(
        f"{ep.UPLOAD_CSV_PATH}/{list_id}",
        body=form,
        files={"csv_file": (filename, csv_file, "text/csv")},
    )
