"""Login, logout and session helpers.

Login posts the user's credentials to ``/auth/login`` and stores whatever
tokens come back (see :mod:`admin_client.api.payloads` for where they are
looked up).  Renewing the access token afterwards is automatic; see
:mod:`admin_client.api.refresh`.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from .client import AdminClient
from .endpoints import AUTH_LOGIN_PATH, AUTH_ME_PATH
from .errors import ApiError
from .payloads import extract_tokens


async def login(
    client: AdminClient,
    email: str,
    password: str,
    remember: bool = False,
) -> Any:
    """Log in and persist the returned credentials.

    ``remember`` keeps the session on disk across restarts; otherwise it
    only lives as long as the process.  Returns the raw login response.

    Raises :class:`ApiError` for rejected credentials (status 401, never
    retried) or a response that carries no access token.
    """
    response = await client.post(
        AUTH_LOGIN_PATH, json={"email": email, "password": password}
    )
    bundle = extract_tokens(response)
    if bundle is None:
        raise ApiError("Login response missing access token", status=0, data=response)

    # A new login replaces the previous record wholesale.
    client.store.clear()
    client.store.set(access_token=bundle.access_token, user=bundle.user, remember=remember)
    if bundle.refresh_token:
        client.store.set_refresh_token(bundle.refresh_token)
    logger.info(f"Logged in as {email}")
    return response


async def me(client: AdminClient) -> Any:
    """Fetch the profile of the logged-in user."""
    return await client.get(AUTH_ME_PATH)


async def refresh_session(client: AdminClient) -> str:
    """Renew the access token now, sharing any refresh already in flight.

    Returns the new access token.  Raises
    :class:`~admin_client.api.errors.AuthExpiredError` (and clears the
    stored session) if the refresh token is missing or rejected.
    """
    return await client.coordinator.refresh()


def logout(client: AdminClient) -> None:
    """Forget every stored credential."""
    client.store.clear()
    logger.info("Logged out")
