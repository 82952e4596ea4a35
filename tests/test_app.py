from __future__ import annotations

import httpx
import pytest

from app import create_app
from config import Settings
from services.cache import TTLCache
from services.rapidapi import RapidAPIClient
from services.rate_limit import RateLimiter


def test_create_app_keeps_injected_services(settings: Settings, clock) -> None:
    cache = TTLCache(clock=clock)
    limiter = RateLimiter(clock=clock)
    rapidapi = RapidAPIClient(host="example.test", api_key="k")
    # Freshly built services are empty, which must not count as "not provided"
    assert len(cache) == 0
    assert len(limiter) == 0

    app = create_app(settings=settings, cache=cache, limiter=limiter, rapidapi=rapidapi)

    assert app.state.settings is settings
    assert app.state.cache is cache
    assert app.state.limiter is limiter
    assert app.state.rapidapi is rapidapi


def test_create_app_builds_services_from_settings(settings: Settings) -> None:
    settings.cache_ttl_seconds = 42
    settings.rate_limit_max = 7

    app = create_app(settings=settings)

    assert app.state.cache.ttl_seconds == 42
    assert app.state.limiter.max_requests == 7
    assert app.state.rapidapi.host == settings.rapidapi_host


@pytest.mark.asyncio
async def test_malformed_upstream_host_is_500_with_headers(
    settings: Settings, cache: TTLCache, limiter: RateLimiter
) -> None:
    app = create_app(
        settings=settings,
        cache=cache,
        limiter=limiter,
        rapidapi=RapidAPIClient(host="bad host:port", api_key="k"),
    )
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        r = await client.get("/product-details/B0TEST0001", headers={"Origin": "https://shop.example"})

    assert r.status_code == 500
    assert r.json()["error"]
    assert r.json()["error"] != "Internal server error"
    assert r.headers["X-RateLimit-Limit"] == "100"
    assert r.headers["access-control-allow-origin"] == "*"
    assert len(cache) == 0
