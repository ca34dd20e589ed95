"""Shared fixtures: a scriptable fake backend and client factories."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from admin_client.api.client import AdminClient
from admin_client.api.transport import Transport
from admin_client.storage.config import Settings
from admin_client.storage.credentials import CredentialStore, FileStore, MemoryStore

BASE_URL = "https://api.test"


class FakeBackend:
    """An ``httpx.MockTransport`` handler that behaves like the dashboard API.

    Only ``valid_token`` is accepted on ordinary endpoints.  The refresh
    endpoint blocks on ``refresh_gate`` (open by default) so tests can pile
    up requests behind an in-flight refresh.
    """

    def __init__(self) -> None:
        self.valid_token = "fresh"
        self.always_401 = False
        self.refresh_status = 200
        self.refresh_body: object = {
            "data": {"access_token": "fresh", "refresh_token": "R2"}
        }
        self.login_status = 200
        self.login_body: object = {
            "data": {
                "tokens": {"access_token": "A", "refresh_token": "R"},
                "user": {"id": 7},
            }
        }
        self.refresh_gate = asyncio.Event()
        self.refresh_gate.set()
        self.refresh_started = asyncio.Event()
        self.requests: list[httpx.Request] = []
        self.refresh_calls = 0

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/auth/refresh":
            self.refresh_calls += 1
            self.refresh_started.set()
            await self.refresh_gate.wait()
            return httpx.Response(self.refresh_status, json=self.refresh_body)

        if path == "/auth/login":
            return httpx.Response(self.login_status, json=self.login_body)

        if self.always_401 or request.headers.get("Authorization") != (
            f"Bearer {self.valid_token}"
        ):
            return httpx.Response(401, json={"message": "jwt expired"})
        return httpx.Response(200, json={"path": path, "ok": True})


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def store(tmp_path) -> CredentialStore:
    return CredentialStore(
        persistent=FileStore(tmp_path / "credentials.json"),
        session=MemoryStore(),
    )


def build_client(handler, store: CredentialStore, timeout_ms: float = 2000, **kwargs) -> AdminClient:
    transport = Transport(
        base_url=BASE_URL,
        timeout_ms=timeout_ms,
        http_transport=httpx.MockTransport(handler),
    )
    return AdminClient(
        Settings(api_base_url=BASE_URL, timeout_ms=timeout_ms),
        store=store,
        transport=transport,
        **kwargs,
    )


async def wait_until(predicate, attempts: int = 1000) -> None:
    """Yield to the event loop until *predicate* holds."""
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition never became true")
