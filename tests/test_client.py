"""Tests for the request facade -- token attachment, bodies, error normalisation."""
import asyncio

import httpx
import pytest

from admin_client.api.client import AdminClient, error_message, is_auth_endpoint
from admin_client.api.errors import NETWORK_ERROR_MESSAGE, ApiError
from admin_client.api.transport import ServerError
from admin_client.storage.config import Settings
from conftest import build_client


def _recorder(status=200, json=None, text=None):
    seen = []

    def handler(request):
        seen.append(request)
        if text is not None:
            return httpx.Response(status, text=text)
        return httpx.Response(status, json=json if json is not None else {"ok": True})

    return seen, handler


# =========================================================================
# Helpers
# =========================================================================


class TestHelpers:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/auth/login", True),
            ("/auth/refresh", True),
            ("/auth/refresh/", True),
            ("https://dash.example.com/api/auth/login?next=/", True),
            ("/auth/me", False),
            ("/auth/login-history", False),
            ("/general/vendors", False),
        ],
    )
    def test_is_auth_endpoint(self, path, expected):
        assert is_auth_endpoint(path) is expected

    def test_error_message_prefers_message_then_error(self):
        assert error_message({"message": "m", "error": "e"}, 400) == "m"
        assert error_message({"error": "e"}, 400) == "e"
        assert error_message({"detail": "x"}, 400) == "Request failed (400)"
        assert error_message("oops", 502) == "Request failed (502)"
        assert error_message(None, 500) == "Request failed (500)"


# =========================================================================
# Token attachment and bodies
# =========================================================================


class TestRequestJson:
    @pytest.mark.asyncio
    async def test_bearer_attached_when_authenticated(self, store):
        store.set(access_token="tok")
        seen, handler = _recorder()
        async with build_client(handler, store) as client:
            assert client.is_authenticated
            assert await client.get("/general/vendors") == {"ok": True}
        assert seen[0].headers["Authorization"] == "Bearer tok"
        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_no_header_when_logged_out(self, store):
        seen, handler = _recorder()
        async with build_client(handler, store) as client:
            assert not client.is_authenticated
            await client.get("/general/countries")
        assert "Authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_caller_headers_are_kept(self, store):
        store.set(access_token="tok")
        seen, handler = _recorder()
        async with build_client(handler, store) as client:
            await client.get("/general/vendors", headers={"X-Trace": "abc"})
        assert seen[0].headers["X-Trace"] == "abc"

    @pytest.mark.asyncio
    async def test_json_body(self, store):
        seen, handler = _recorder()
        async with build_client(handler, store) as client:
            await client.request_json("/general/team", method="post", json={"team_name": "Red"})
        assert seen[0].method == "POST"
        assert seen[0].headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_raw_body(self, store):
        seen, handler = _recorder()
        async with build_client(handler, store) as client:
            await client.put("/general/note", body="plain text")
        assert seen[0].content == b"plain text"

    @pytest.mark.asyncio
    async def test_parsed_body_returned_unchanged(self, store):
        payload = {"data": [{"id": 1, "name": "Acme"}], "total": 1}
        store.set(access_token="tok")
        seen, handler = _recorder(json=payload)
        async with build_client(handler, store) as client:
            assert await client.get("/general/vendors") == payload

    @pytest.mark.asyncio
    async def test_verbs(self, store):
        seen, handler = _recorder()
        async with build_client(handler, store) as client:
            await client.post("/a")
            await client.put("/b")
            await client.patch("/c")
            await client.delete("/d")
        assert [r.method for r in seen] == ["POST", "PUT", "PATCH", "DELETE"]


# =========================================================================
# Error normalisation
# =========================================================================


class TestErrorNormalisation:
    @pytest.mark.asyncio
    async def test_server_error_message_and_payload(self, store):
        _, handler = _recorder(status=409, json={"status": "failed", "error": "already exists"})
        async with build_client(handler, store) as client:
            with pytest.raises(ApiError) as info:
                await client.post("/general/vendor", json={})
        err = info.value
        assert err.status == 409
        assert err.message == "already exists"
        assert err.data == {"status": "failed", "error": "already exists"}
        assert isinstance(err.__cause__, ServerError)

    @pytest.mark.asyncio
    async def test_server_error_without_message(self, store):
        _, handler = _recorder(status=500, text="Internal Server Error")
        async with build_client(handler, store) as client:
            with pytest.raises(ApiError) as info:
                await client.get("/general/vendors")
        assert info.value.message == "Request failed (500)"
        assert info.value.data == "Internal Server Error"

    @pytest.mark.asyncio
    async def test_network_error_has_status_zero(self, store):
        def handler(request):
            raise httpx.ConnectError("dns failure", request=request)

        async with build_client(handler, store) as client:
            with pytest.raises(ApiError) as info:
                await client.get("/general/vendors")
        assert info.value.status == 0
        assert info.value.message == NETWORK_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_timeout_of_one_ms_is_network_error(self, store):
        async def handler(request):
            await asyncio.Event().wait()

        async with build_client(handler, store) as client:
            with pytest.raises(ApiError) as info:
                await asyncio.wait_for(client.get("/general/vendors", timeout_ms=1), timeout=5)
        assert info.value.status == 0

    @pytest.mark.asyncio
    async def test_setup_error_has_status_zero(self, store):
        _, handler = _recorder()
        async with build_client(handler, store) as client:
            with pytest.raises(ApiError) as info:
                await client.post("/general/vendor", json={"bad": object()})
        assert info.value.status == 0
        assert info.value.message

    @pytest.mark.asyncio
    async def test_cancel_signal_is_network_error(self, store):
        async def handler(request):
            await asyncio.Event().wait()

        signal = asyncio.Event()
        async with build_client(handler, store) as client:
            task = asyncio.ensure_future(client.get("/slow", signal=signal))
            await asyncio.sleep(0)
            signal.set()
            with pytest.raises(ApiError) as info:
                await asyncio.wait_for(task, timeout=5)
        assert info.value.status == 0


# =========================================================================
# Construction
# =========================================================================


class TestConstruction:
    @pytest.mark.asyncio
    async def test_builds_transport_from_settings(self, store):
        client = AdminClient(Settings(api_base_url="https://x.test/api", timeout_ms=1234), store=store)
        assert client.transport.default_timeout_ms == 1234
        assert str(client.transport._http.base_url) == "https://x.test/api/"
        await client.aclose()
        assert client.transport.is_closed

    def test_reads_settings_from_environment(self, store, monkeypatch):
        monkeypatch.setenv("API_BASE_URL", "https://env.test")
        monkeypatch.setenv("API_TIMEOUT_MS", "bogus")
        client = AdminClient(store=store)
        assert client.settings.api_base_url == "https://env.test"
        assert client.transport.default_timeout_ms == 15000
