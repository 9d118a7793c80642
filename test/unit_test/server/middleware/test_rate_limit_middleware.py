"""
Unit tests for the global rate limiting middleware.
"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from studentos.server.middleware import RateLimitMiddleware
from studentos.server.services.rate_limiter import RequestRateLimiter

pytestmark = pytest.mark.asyncio


def _app(limiter: RequestRateLimiter, enabled: bool = True) -> FastAPI:
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, limiter=limiter, enabled=enabled)

    @app.get("/api/ping")
    async def ping():
        return {"pong": True}

    @app.get("/status")
    async def status_page():
        return {"up": True}

    return app


async def _get(app: FastAPI, path: str, ip: str = "10.0.0.1"):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        return await client.get(path, headers={"X-Forwarded-For": ip})


async def test_blocks_after_limit():
    app = _app(RequestRateLimiter(points=2, window_seconds=60))
    assert (await _get(app, "/api/ping")).status_code == 200
    assert (await _get(app, "/api/ping")).status_code == 200

    response = await _get(app, "/api/ping")
    assert response.status_code == 429
    assert response.json()["error"] == "Too many requests. Please try again later."
    assert int(response.headers["Retry-After"]) >= 1


async def test_limits_are_per_client():
    app = _app(RequestRateLimiter(points=1, window_seconds=60))
    assert (await _get(app, "/api/ping", ip="10.0.0.1")).status_code == 200
    assert (await _get(app, "/api/ping", ip="10.0.0.2")).status_code == 200
    assert (await _get(app, "/api/ping", ip="10.0.0.1")).status_code == 429


async def test_only_api_paths_count():
    app = _app(RequestRateLimiter(points=1, window_seconds=60))
    for _ in range(3):
        assert (await _get(app, "/status")).status_code == 200
    assert (await _get(app, "/api/ping")).status_code == 200


async def test_disabled():
    app = _app(RequestRateLimiter(points=1, window_seconds=60), enabled=False)
    for _ in range(3):
        assert (await _get(app, "/api/ping")).status_code == 200


async def test_spoofed_forwarded_entries_share_one_bucket():
    app = _app(RequestRateLimiter(points=2, window_seconds=60))
    codes = [(await _get(app, "/api/ping", ip=f"1.2.3.{i}, 10.0.0.1")).status_code for i in range(3)]
    assert codes == [200, 200, 429]
