"""Authenticated HTTP client for the dashboard API with transparent token refresh."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, TypeVar
from urllib.parse import urlsplit

from loguru import logger

from ..storage.config import Settings
from ..storage.credentials import CredentialStore
from .endpoints import AUTH_ENDPOINTS
from .errors import NETWORK_ERROR_MESSAGE, ApiError
from .refresh import RefreshCoordinator
from .transport import NetworkError, ServerError, SetupError, Transport

T = TypeVar("T")


def is_auth_endpoint(path: str) -> bool:
    """Return ``True`` if *path* targets the login or refresh endpoint."""
    route = urlsplit(path).path.rstrip("/")
    return any(route.endswith(endpoint) for endpoint in AUTH_ENDPOINTS)


def error_message(data: Any, status: int) -> str:
    """Pick a human-readable message out of an error payload."""
    if isinstance(data, dict):
        message = data.get("message") or data.get("error")
        if message:
            return str(message)
    return f"Request failed ({status})"


class AdminClient:
    """Async HTTP client that attaches and renews the user's bearer token.

    The client owns one :class:`CredentialStore`, one :class:`Transport`
    and one :class:`RefreshCoordinator`.  Build one per application (or per
    test) and share it between every feature module.

    Every failure surfaces as :class:`~admin_client.api.errors.ApiError`.

    Example::

        async with AdminClient() as client:
            vendors = await client.get("/general/vendors", params={"page": 1})
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        store: CredentialStore | None = None,
        transport: Transport | None = None,
        on_session_expired: Callable[[], None] | None = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        self.store = store or CredentialStore()
        self.transport = transport or Transport(
            base_url=self.settings.api_base_url,
            timeout_ms=self.settings.timeout_ms,
        )
        self.coordinator = RefreshCoordinator(
            self.store, self.transport, on_session_expired=on_session_expired
        )

    # ------------------------------------------------------------------
    # Token helpers
    # ------------------------------------------------------------------

    @property
    def is_authenticated(self) -> bool:
        """Return ``True`` if an access token is available."""
        return self.store.is_authenticated()

    def _auth_headers(self) -> dict[str, str]:
        token = self.store.get().access_token
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def request_json(
        self,
        path: str,
        *,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        params: Any = None,
        json: Any = None,
        body: Any = None,
        files: Any = None,
        timeout_ms: float | None = None,
        signal: asyncio.Event | None = None,
    ) -> Any:
        """Send a request and return its parsed JSON body.

        *json* is serialised as JSON.  *body* is sent raw when it is ``str``
        or ``bytes``, JSON-encoded when it is a list, and form-encoded when
        it is a dict (which is what multipart uploads with *files* need).

        Raises :class:`ApiError` (or its subclass
        :class:`~admin_client.api.errors.AuthExpiredError`) on any failure.
        """
        try:
            return await self._send(
                path,
                method=method.upper(),
                headers=headers,
                params=params,
                json=json,
                body=body,
                files=files,
                timeout_ms=timeout_ms,
                signal=signal,
            )
        except ApiError:
            raise
        except ServerError as exc:
            raise ApiError(
                error_message(exc.data, exc.status), status=exc.status, data=exc.data
            ) from exc
        except NetworkError as exc:
            logger.warning(f"{method.upper()} {path}: {exc}")
            raise ApiError(NETWORK_ERROR_MESSAGE, status=0) from exc
        except SetupError as exc:
            raise ApiError(str(exc) or "Request failed", status=0) from exc

    async def _send(
        self,
        path: str,
        *,
        method: str,
        headers: dict[str, str] | None,
        params: Any,
        json: Any,
        body: Any,
        files: Any,
        timeout_ms: float | None,
        signal: asyncio.Event | None,
    ) -> Any:
        auth_endpoint = is_auth_endpoint(path)
        send_headers = dict(headers or {})
        if not auth_endpoint:
            send_headers.update(self._auth_headers())

        options: dict[str, Any] = {
            "params": params,
            "files": files,
            "timeout_ms": timeout_ms,
            "signal": signal,
        }
        if json is not None:
            options["json"] = json
        elif isinstance(body, (str, bytes)):
            options["content"] = body
        elif isinstance(body, dict):
            options["data"] = body
        elif body is not None:
            options["json"] = body

        try:
            response = await self.transport.send(
                method, path, headers=send_headers, **options
            )
            return response.data
        except ServerError as exc:
            if exc.status != 401 or auth_endpoint:
                raise

        logger.debug(f"{method} {path} returned 401; renewing access token")
        token = await self._wait(self.coordinator.acquire_token(method, path), signal)

        # The replay is never routed back through the refresh path: a second
        # 401 surfaces to the caller.
        send_headers["Authorization"] = f"Bearer {token}"
        response = await self.transport.send(
            method, path, headers=send_headers, **options
        )
        return response.data

    @staticmethod
    async def _wait(awaitable: Awaitable[T], signal: asyncio.Event | None) -> T:
        """Await *awaitable*, giving up with :class:`NetworkError` if *signal* fires."""
        if signal is None:
            return await awaitable
        if signal.is_set():
            raise NetworkError("Request cancelled")

        work = asyncio.ensure_future(awaitable)
        cancelled = asyncio.ensure_future(signal.wait())
        try:
            await asyncio.wait({work, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            work.cancel()
            raise
        finally:
            cancelled.cancel()

        if not work.done():
            work.cancel()
            raise NetworkError("Request cancelled")
        return work.result()

    # ------------------------------------------------------------------
    # HTTP verbs
    # ------------------------------------------------------------------

    async def get(self, path: str, **kwargs: Any) -> Any:
        """Send an authenticated GET request to ``API_BASE_URL + path``."""
        return await self.request_json(path, method="GET", **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        """Send an authenticated POST request to ``API_BASE_URL + path``."""
        return await self.request_json(path, method="POST", **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        """Send an authenticated PUT request to ``API_BASE_URL + path``."""
        return await self.request_json(path, method="PUT", **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> Any:
        """Send an authenticated PATCH request to ``API_BASE_URL + path``."""
        return await self.request_json(path, method="PATCH", **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        """Send an authenticated DELETE request to ``API_BASE_URL + path``."""
        return await self.request_json(path, method="DELETE", **kwargs)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        """Close the underlying HTTP transport."""
        await self.transport.aclose()

    async def __aenter__(self) -> AdminClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
