"""Unit tests for Supabase access token verification."""

import httpx
import pytest

from studentos.server.core.config import SupabaseConfig
from studentos.server.services.supabase import SupabaseAuthVerifier, SupabaseNotConfigured

pytestmark = pytest.mark.asyncio

CONFIG = SupabaseConfig(url="https://mock.supabase.co/", anon_key="anon-key")


def _verifier(handler) -> SupabaseAuthVerifier:
    return SupabaseAuthVerifier(CONFIG, transport=httpx.MockTransport(handler))


async def test_returns_email_of_token_owner():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["apikey"] = request.headers["apikey"]
        seen["auth"] = request.headers["authorization"]
        return httpx.Response(200, json={"id": "sb-1", "email": "google@studentos.com"})

    assert await _verifier(handler).verify("sb-token") == "google@studentos.com"
    assert seen == {
        "url": "https://mock.supabase.co/auth/v1/user",
        "apikey": "anon-key",
        "auth": "Bearer sb-token",
    }


async def test_rejected_token():
    verifier = _verifier(lambda request: httpx.Response(401, json={"msg": "invalid JWT"}))
    assert await verifier.verify("bad") is None


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>maintenance</html>"),
        httpx.Response(200, json=["not", "a", "user"]),
    ],
)
async def test_malformed_user_payload(response):
    assert await _verifier(lambda request: response).verify("sb-token") is None


async def test_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    assert await _verifier(handler).verify("sb-token") is None


async def test_not_configured():
    verifier = SupabaseAuthVerifier(SupabaseConfig())
    assert verifier.configured is False
    with pytest.raises(SupabaseNotConfigured):
        await verifier.verify("sb-token")
