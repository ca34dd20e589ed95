"""Single-flight access-token refresh.

When a request comes back 401, :meth:`RefreshCoordinator.acquire_token`
hands it a fresh access token.  Only one refresh call is ever in flight:
the first request to hit a 401 drives the refresh, every other request
that hits a 401 meanwhile is queued as a :class:`PendingRequest` and
resolved, in arrival order, with the outcome of that one call.

The refresh itself runs as its own task so that cancelling the request
that started it does not cancel it for everybody else waiting on it.
"""

from __future__ import annotations

import asyncio
from collections import deque
from dataclasses import dataclass, field
from typing import Callable

from loguru import logger

from ..storage.credentials import CredentialStore
from .endpoints import AUTH_REFRESH_TOKEN_PATH
from .errors import NO_REFRESH_TOKEN_MESSAGE, SESSION_EXPIRED_MESSAGE, AuthExpiredError
from .payloads import extract_tokens
from .transport import ServerError, Transport


@dataclass
class PendingRequest:
    """A request parked behind an in-flight refresh.

    ``future`` is resolved exactly once, with the new access token or with
    an :class:`AuthExpiredError`.
    """

    method: str
    path: str
    future: asyncio.Future = field(repr=False)

    def resolve(self, token: str) -> None:
        if not self.future.done():
            self.future.set_result(token)

    def reject(self, error: BaseException) -> None:
        if not self.future.done():
            self.future.set_exception(error)


@dataclass
class RefreshState:
    """Refresh bookkeeping; ``waiters`` is only ever non-empty while ``in_progress``."""

    in_progress: bool = False
    waiters: deque[PendingRequest] = field(default_factory=deque)
    task: asyncio.Task | None = None

    def reset(self) -> None:
        self.in_progress = False
        self.waiters.clear()
        self.task = None


class RefreshCoordinator:
    """Collapses concurrent 401s onto one call to the refresh endpoint.

    Parameters
    ----------
    store:
        Credential store read for the refresh token and updated with the
        new tokens (or cleared on failure).
    transport:
        Transport used for the refresh call.  The call bypasses the
        request façade so it carries the refresh token, not the access token.
    on_session_expired:
        Called once per failed refresh so the hosting application can send
        the user back to its login entry point.
    """

    def __init__(
        self,
        store: CredentialStore,
        transport: Transport,
        on_session_expired: Callable[[], None] | None = None,
        refresh_path: str = AUTH_REFRESH_TOKEN_PATH,
    ) -> None:
        self.store = store
        self.transport = transport
        self.on_session_expired = on_session_expired
        self.refresh_path = refresh_path
        self.state = RefreshState()

    @property
    def in_progress(self) -> bool:
        return self.state.in_progress

    async def acquire_token(self, method: str, path: str) -> str:
        """Return a fresh access token for a request that got a 401.

        Raises :class:`AuthExpiredError` when the session cannot be renewed.
        """
        if self.state.in_progress:
            pending = PendingRequest(
                method, path, asyncio.get_running_loop().create_future()
            )
            self.state.waiters.append(pending)
            logger.debug(
                f"Queued {method} {path} behind token refresh "
                f"({len(self.state.waiters)} waiting)"
            )
            return await pending.future
        return await self.refresh()

    async def refresh(self) -> str:
        """Refresh the access token, joining the in-flight refresh if there is one."""
        task = self.state.task
        if task is None:
            # Flag and task are set before the first await: no second refresh
            # can start in between.
            self.state.in_progress = True
            task = asyncio.ensure_future(self._run_refresh())
            task.add_done_callback(_consume_result)
            self.state.task = task
        return await asyncio.shield(task)

    async def _run_refresh(self) -> str:
        try:
            try:
                token = await self._request_new_tokens()
            except Exception as exc:
                self._fail(exc)
                raise _expired_error(exc) from exc

            waiters = list(self.state.waiters)
            self.state.waiters.clear()
            for pending in waiters:
                pending.resolve(token)
            logger.info(f"Access token refreshed; released {len(waiters)} queued request(s)")
            return token
        finally:
            # Only reachable with waiters left if the refresh task was cancelled.
            for pending in self.state.waiters:
                pending.reject(AuthExpiredError())
            self.state.reset()

    async def _request_new_tokens(self) -> str:
        refresh_token = self.store.get().refresh_token
        if not refresh_token:
            raise AuthExpiredError(NO_REFRESH_TOKEN_MESSAGE)

        response = await self.transport.send(
            "POST",
            self.refresh_path,
            headers={"Authorization": f"Bearer {refresh_token}"},
        )
        bundle = extract_tokens(response.data)
        if bundle is None:
            raise AuthExpiredError(
                "Refresh token response missing access_token", data=response.data
            )

        self.store.set(access_token=bundle.access_token)
        if bundle.refresh_token:
            self.store.set_refresh_token(bundle.refresh_token)
        return bundle.access_token

    def _fail(self, exc: Exception) -> None:
        """Clear the session and reject every queued request."""
        logger.error(f"Token refresh failed: {exc}")
        self.store.clear()

        waiters = list(self.state.waiters)
        self.state.waiters.clear()
        for pending in waiters:
            pending.reject(_expired_error(exc))

        if self.on_session_expired is not None:
            logger.warning("Session expired; returning to login")
            try:
                self.on_session_expired()
            except Exception:
                logger.exception("on_session_expired hook failed")


def _expired_error(exc: Exception) -> AuthExpiredError:
    if isinstance(exc, AuthExpiredError) and exc.message == NO_REFRESH_TOKEN_MESSAGE:
        return AuthExpiredError(NO_REFRESH_TOKEN_MESSAGE)
    data = exc.data if isinstance(exc, (ServerError, AuthExpiredError)) else None
    return AuthExpiredError(SESSION_EXPIRED_MESSAGE, data=data)


def _consume_result(task: asyncio.Task) -> None:
    # The driver may have been cancelled; mark the outcome as retrieved.
    if not task.cancelled():
        task.exception()
