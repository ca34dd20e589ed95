"""Single-shot HTTP transport built on :class:`httpx.AsyncClient`.

:meth:`Transport.send` performs exactly one request and normalises the
outcome: a :class:`TransportResponse` on 2xx, otherwise one of the three
:class:`TransportError` subclasses so callers can tell a server rejection
from a request that never got an answer or could not be sent at all.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx
from loguru import logger

from ..storage.config import DEFAULT_TIMEOUT_MS, read_timeout_ms


class TransportError(Exception):
    """Base class for every failure raised by :class:`Transport`."""


class ServerError(TransportError):
    """A response arrived with a non-2xx status."""

    def __init__(
        self,
        status: int,
        data: Any = None,
        headers: httpx.Headers | None = None,
    ) -> None:
        super().__init__(f"HTTP {status}")
        self.status = status
        self.data = data
        self.headers = headers or httpx.Headers()


class NetworkError(TransportError):
    """The request was sent but no response arrived (timeout, reset, DNS, cancelled)."""


class SetupError(TransportError):
    """The request could not be constructed or sent."""


@dataclass
class TransportResponse:
    """A successful (2xx) response with its body already parsed."""

    status: int
    headers: httpx.Headers
    data: Any


def parse_body(response: httpx.Response) -> Any:
    """Return the JSON body of *response*, its text if not JSON, or ``None`` if empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class Transport:
    """Performs one HTTP call per :meth:`send` against ``base_url``.

    Parameters
    ----------
    base_url:
        Prefix for relative paths.  Absolute URLs are sent unchanged.
    timeout_ms:
        Default whole-call timeout.  Invalid values fall back to 15 s.
    http_transport:
        Optional :class:`httpx.AsyncBaseTransport` (``httpx.MockTransport``
        in tests) handed to the underlying client.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout_ms: float = DEFAULT_TIMEOUT_MS,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.default_timeout_ms = read_timeout_ms(timeout_ms)
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers={"Accept": "application/json"},
            transport=http_transport,
        )

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    def _timeout_seconds(self, timeout_ms: Any) -> float:
        return read_timeout_ms(timeout_ms, fallback=self.default_timeout_ms) / 1000.0

    async def send(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        params: Any = None,
        json: Any = None,
        content: str | bytes | None = None,
        data: dict[str, Any] | None = None,
        files: Any = None,
        timeout_ms: float | None = None,
        signal: asyncio.Event | None = None,
    ) -> TransportResponse:
        """Send one request and return the parsed response.

        Raises :class:`ServerError`, :class:`NetworkError` or
        :class:`SetupError`.  Setting *signal* abandons the request with a
        :class:`NetworkError`.
        """
        seconds = self._timeout_seconds(timeout_ms)
        try:
            request = self._http.build_request(
                method.upper(),
                path,
                headers=headers,
                params=params,
                json=json,
                content=content,
                data=data,
                files=files,
                timeout=httpx.Timeout(seconds),
            )
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            raise SetupError(str(exc) or "Invalid request") from exc

        response = await self._dispatch(request, seconds, signal)
        body = parse_body(response)
        logger.debug(f"{request.method} {request.url} -> {response.status_code}")

        if not response.is_success:
            raise ServerError(response.status_code, body, response.headers)
        return TransportResponse(response.status_code, response.headers, body)

    async def _dispatch(
        self,
        request: httpx.Request,
        seconds: float,
        signal: asyncio.Event | None,
    ) -> httpx.Response:
        """Run the request, bounded by *seconds* and abandoned when *signal* fires."""
        if signal is not None and signal.is_set():
            raise NetworkError("Request cancelled")

        send_task = asyncio.ensure_future(self._http.send(request))
        waiters: set[asyncio.Future] = {send_task}
        signal_task = None
        if signal is not None:
            signal_task = asyncio.ensure_future(signal.wait())
            waiters.add(signal_task)

        try:
            done, _ = await asyncio.wait(
                waiters, timeout=seconds, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            send_task.cancel()
            await asyncio.wait({send_task})
            raise
        finally:
            if signal_task is not None:
                signal_task.cancel()

        if send_task not in done:
            send_task.cancel()
            await asyncio.wait({send_task})
            if signal_task is not None and signal_task in done:
                raise NetworkError("Request cancelled")
            raise NetworkError(f"Request timed out after {seconds * 1000:g} ms")

        try:
            return send_task.result()
        except httpx.UnsupportedProtocol as exc:
            raise SetupError(str(exc) or "Unsupported URL") from exc
        except httpx.TimeoutException as exc:
            raise NetworkError(f"Request timed out: {exc}") from exc
        except (httpx.TransportError, OSError) as exc:
            raise NetworkError(str(exc) or type(exc).__name__) from exc

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()
