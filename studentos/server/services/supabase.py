"""
Supabase access token verification.

The Google sign-in flow runs in the browser through Supabase. The frontend
hands the resulting Supabase access token to the backend, which asks the
Supabase auth API who the token belongs to before issuing its own tokens.
"""

from typing import Optional

import httpx

from studentos.core.logging_config import get_logger
from studentos.server.core.config import SupabaseConfig, settings

logger = get_logger(__name__)


class SupabaseNotConfigured(RuntimeError):
    """Raised when the Supabase URL or anon key is missing."""


class SupabaseAuthVerifier:
    """Resolve Supabase access tokens to the email of their user."""

    def __init__(self, config: SupabaseConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.config = config
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.config.url and self.config.anon_key)

    async def verify(self, access_token: str) -> Optional[str]:
        """Email of the Supabase user owning ``access_token``, or None if Supabase rejects it.

        Raises:
            SupabaseNotConfigured: if the Supabase URL or anon key is not set
        """
        if not self.configured:
            raise SupabaseNotConfigured("Supabase auth is not configured")

        url = f"{self.config.url.rstrip('/')}/auth/v1/user"
        headers = {"apikey": self.config.anon_key, "Authorization": f"Bearer {access_token}"}
        try:
            async with httpx.AsyncClient(timeout=self.config.timeout_seconds, transport=self._transport) as client:
                response = await client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning(f"Supabase token verification failed: {exc}")
            return None

        if response.status_code != 200:
            logger.info(f"Supabase rejected access token with status {response.status_code}")
            return None
        try:
            payload = response.json()
        except ValueError:
            logger.warning("Supabase returned a non-JSON user payload")
            return None
        if not isinstance(payload, dict):
            logger.warning("Supabase returned an unexpected user payload")
            return None
        return payload.get("email")



def get_supabase_verifier() -> SupabaseAuthVerifier:
    return SupabaseAuthVerifier(settings.supabase)
