from __future__ import annotations

from typing import Tuple

import httpx
import pytest

# Hosts tests may reach: ASGI test clients and fake upstreams served by MockTransport.
REACHABLE_PREFIXES: Tuple[str, ...] = (
    "http://test",
    "http://mock",
    "https://mock",
    "http://localhost",
    "http://127.0.0.1",
    "/",
)


@pytest.fixture(autouse=True)
def _offline_http(monkeypatch: pytest.MonkeyPatch):
    """Fail any httpx request to a real host (Supabase, Gemini) instead of sending it."""
    send_sync = httpx.Client.request
    send_async = httpx.AsyncClient.request

    def _check(url) -> None:
        if not str(url).startswith(REACHABLE_PREFIXES):
            raise RuntimeError(f"Outbound HTTP is disabled in tests: {url}")

    def guarded_sync(self, method, url, *args, **kwargs):
        _check(url)
        return send_sync(self, method, url, *args, **kwargs)

    async def guarded_async(self, method, url, *args, **kwargs):
        _check(url)
        return await send_async(self, method, url, *args, **kwargs)

    monkeypatch.setattr(httpx.Client, "request", guarded_sync)
    monkeypatch.setattr(httpx.AsyncClient, "request", guarded_async)
