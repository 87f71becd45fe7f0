"""Shared fixtures: a scripted fake API behind httpx.MockTransport and a fake clock."""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from typing import Any

import httpx
import pytest

from shrine_client.client.transport import ApiTransport
from shrine_client.session.adapters.memory import InMemoryTokenStore

BASE_URL = "http://shrine.test"

Handler = Callable[[httpx.Request], httpx.Response]


class FakeClock:
    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeApi:
    """Answers requests from a route table and records every call."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Handler] = {}
        self.calls: list[httpx.Request] = []
        self.offline = False

    def route(self, method: str, path: str, status: int = 200, json: Any = None) -> None:
        self.routes[(method, path)] = lambda request: httpx.Response(status, json=json)

    def route_handler(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method, path)] = handler

    def count(self, method: str, path: str) -> int:
        return sum(1 for r in self.calls if r.method == method and r.url.path == path)

    def last(self, method: str, path: str) -> httpx.Request:
        return [r for r in self.calls if r.method == method and r.url.path == path][-1]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.offline:
            raise httpx.ConnectError("network unreachable", request=request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, json={"success": False, "message": "Not found"})
        return handler(request)


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def transport(fake_api: FakeApi) -> ApiTransport:
    return (
        ApiTransport.rest()
        .base_url(BASE_URL)
        .read_timeout(timedelta(seconds=10))
        .write_timeout(timedelta(seconds=30))
        .http_transport(httpx.MockTransport(fake_api))
        .build()
    )


@pytest.fixture
def store() -> InMemoryTokenStore:
    return InMemoryTokenStore()
