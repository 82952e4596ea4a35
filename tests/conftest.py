# tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import httpx
import pytest
import pytest_asyncio
import respx
from fastapi import FastAPI

from app import create_app
from config import Settings
from services.cache import TTLCache
from services.rapidapi import RapidAPIClient
from services.rate_limit import RateLimiter

UPSTREAM_HOST = "products.test.rapidapi.com"
UPSTREAM_URL = f"https://{UPSTREAM_HOST}"


class FakeClock:
    """Monotonic clock the tests advance by hand."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.setenv("RAPIDAPI_HOST", UPSTREAM_HOST)
    monkeypatch.setenv("RAPIDAPI_KEY", "test-key")
    monkeypatch.setenv("ENVIRONMENT", "test")
    return Settings()


@pytest.fixture
def cache(clock: FakeClock) -> TTLCache:
    return TTLCache(ttl_seconds=600, clock=clock)


@pytest.fixture
def limiter(clock: FakeClock) -> RateLimiter:
    return RateLimiter(max_requests=100, window_seconds=15 * 60, clock=clock)


@pytest.fixture
def app(settings: Settings, cache: TTLCache, limiter: RateLimiter) -> FastAPI:
    return create_app(
        settings=settings,
        cache=cache,
        limiter=limiter,
        rapidapi=RapidAPIClient(host=settings.rapidapi_host, api_key=settings.rapidapi_key),
    )


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


@pytest.fixture
def upstream() -> Iterator[respx.MockRouter]:
    with respx.mock(base_url=UPSTREAM_URL, assert_all_called=False) as router:
        yield router
