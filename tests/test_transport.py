"""Tests for the single-shot HTTP transport."""
import asyncio

import httpx
import pytest

from admin_client.api.transport import (
    NetworkError,
    ServerError,
    SetupError,
    Transport,
    TransportResponse,
)

BASE_URL = "https://api.test"


def _transport(handler, **kwargs) -> Transport:
    return Transport(base_url=BASE_URL, http_transport=httpx.MockTransport(handler), **kwargs)


async def _never_responds(request):
    await asyncio.Event().wait()


# =========================================================================
# Successful responses
# =========================================================================


class TestSuccess:
    @pytest.mark.asyncio
    async def test_parses_json_body(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["method"] = request.method
            return httpx.Response(200, json={"vendors": [1, 2]})

        transport = _transport(handler)
        resp = await transport.send("get", "/general/vendors", params={"page": 2})
        assert isinstance(resp, TransportResponse)
        assert resp.status == 200
        assert resp.data == {"vendors": [1, 2]}
        assert seen == {"url": "https://api.test/general/vendors?page=2", "method": "GET"}
        await transport.aclose()
        assert transport.is_closed

    @pytest.mark.asyncio
    async def test_empty_body_is_none(self):
        transport = _transport(lambda request: httpx.Response(204))
        resp = await transport.send("DELETE", "/general/team/1")
        assert resp.data is None

    @pytest.mark.asyncio
    async def test_text_body_kept_as_text(self):
        transport = _transport(lambda request: httpx.Response(200, text="pong"))
        resp = await transport.send("GET", "/ping")
        assert resp.data == "pong"

    @pytest.mark.asyncio
    async def test_absolute_url_bypasses_base(self):
        seen = []
        transport = _transport(lambda request: seen.append(str(request.url)) or httpx.Response(200))
        await transport.send("PUT", "https://uploads.example.com/bucket/file.csv", content=b"x")
        assert seen == ["https://uploads.example.com/bucket/file.csv"]

    @pytest.mark.asyncio
    async def test_json_body_and_headers_sent(self):
        seen = {}

        def handler(request):
            seen["body"] = request.content
            seen["auth"] = request.headers.get("Authorization")
            seen["type"] = request.headers.get("Content-Type")
            return httpx.Response(201, json={"id": 9})

        transport = _transport(handler)
        resp = await transport.send(
            "POST", "/general/team", headers={"Authorization": "Bearer t"}, json={"team_name": "Blue"}
        )
        assert resp.status == 201
        assert seen["auth"] == "Bearer t"
        assert seen["type"] == "application/json"
        assert b'"team_name"' in seen["body"]


# =========================================================================
# Failure modes
# =========================================================================


class TestFailures:
    @pytest.mark.asyncio
    async def test_non_2xx_is_server_error(self):
        transport = _transport(lambda request: httpx.Response(422, json={"error": "bad field"}))
        with pytest.raises(ServerError) as info:
            await transport.send("POST", "/general/vendor", json={})
        assert info.value.status == 422
        assert info.value.data == {"error": "bad field"}

    @pytest.mark.asyncio
    async def test_connection_failure_is_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport = _transport(handler)
        with pytest.raises(NetworkError):
            await transport.send("GET", "/general/vendors")

    @pytest.mark.asyncio
    async def test_timeout_against_hung_server(self):
        """A 1 ms timeout against a server that never answers fails fast."""
        transport = _transport(_never_responds)
        with pytest.raises(NetworkError):
            await asyncio.wait_for(
                transport.send("GET", "/general/vendors", timeout_ms=1), timeout=5
            )

    @pytest.mark.asyncio
    async def test_default_timeout_applies(self):
        transport = _transport(_never_responds, timeout_ms=5)
        with pytest.raises(NetworkError):
            await asyncio.wait_for(transport.send("GET", "/slow"), timeout=5)

    @pytest.mark.asyncio
    async def test_signal_cancels_request(self):
        transport = _transport(_never_responds)
        signal = asyncio.Event()
        task = asyncio.ensure_future(transport.send("GET", "/slow", signal=signal))
        await asyncio.sleep(0)
        signal.set()
        with pytest.raises(NetworkError, match="cancelled"):
            await asyncio.wait_for(task, timeout=5)

    @pytest.mark.asyncio
    async def test_cancelled_caller_waits_for_request_teardown(self):
        started = asyncio.Event()
        torn_down = []

        async def handler(request):
            started.set()
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                torn_down.append(request.url.path)
                raise

        transport = _transport(handler)
        task = asyncio.ensure_future(transport.send("GET", "/slow"))
        await asyncio.wait_for(started.wait(), timeout=5)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert torn_down == ["/slow"]

    @pytest.mark.asyncio
    async def test_already_set_signal(self):
        calls = []
        transport = _transport(lambda request: calls.append(request) or httpx.Response(200))
        signal = asyncio.Event()
        signal.set()
        with pytest.raises(NetworkError):
            await transport.send("GET", "/x", signal=signal)
        assert calls == []

    @pytest.mark.asyncio
    async def test_unserialisable_body_is_setup_error(self):
        transport = _transport(lambda request: httpx.Response(200))
        with pytest.raises(SetupError):
            await transport.send("POST", "/x", json={"when": object()})

    @pytest.mark.asyncio
    async def test_missing_scheme_is_setup_error(self):
        transport = Transport(base_url="")
        with pytest.raises(SetupError):
            await transport.send("GET", "/general/vendors")
        await transport.aclose()


class TestTimeoutConfig:
    def test_invalid_default_falls_back(self):
        assert Transport(timeout_ms=float("nan")).default_timeout_ms == 15000
        assert Transport(timeout_ms=-1).default_timeout_ms == 15000
        assert Transport(timeout_ms=300).default_timeout_ms == 300

    def test_invalid_override_uses_default(self):
        transport = Transport(timeout_ms=300)
        assert transport._timeout_seconds(None) == 0.3
        assert transport._timeout_seconds("junk") == 0.3
        assert transport._timeout_seconds(0) == 0.3
        assert transport._timeout_seconds(50) == 0.05
