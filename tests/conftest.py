"""Shared test fixtures and dummy classes."""

from __future__ import annotations

import asyncio
from typing import Any, Callable

import httpx
import pytest

from movie_browser.api import ApiClient
from movie_browser.cache import default_cache

BASE_URL = "http://test"


@pytest.fixture(autouse=True)
def _clear_default_cache():
    default_cache().clear()
    yield
    default_cache().clear()


class DummyRoute:
    """Canned response for one method/path pair."""

    def __init__(self, payload: Any = None, status: int = 200, delay: float = 0.0) -> None:
        self.payload = payload
        self.status = status
        self.delay = delay


class DummyApi:
    """In-memory API served through ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], DummyRoute] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        payload: Any = None,
        status: int = 200,
        delay: float = 0.0,
    ) -> None:
        self.routes[(method.upper(), path)] = DummyRoute(payload, status, delay)

    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "not found"})
        if route.delay:
            await asyncio.sleep(route.delay)
        if route.payload is None:
            return httpx.Response(route.status)
        return httpx.Response(route.status, json=route.payload)

    def client(self) -> ApiClient:
        return make_client(self.handler)


def make_client(handler: Callable[[httpx.Request], Any]) -> ApiClient:
    return ApiClient(base_url=BASE_URL, timeout=1.0, transport=httpx.MockTransport(handler))


def movie(n: int, **extra: Any) -> dict[str, Any]:
    data: dict[str, Any] = {"_id": f"m{n}", "title": f"Movie {n}", "year": 2000 + n}
    data.update(extra)
    return data
