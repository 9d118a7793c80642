"""
Rate limiting backed by the ``limits`` library.

Each :class:`RequestRateLimiter` applies a moving-window limit per key (the
client IP). Counters live in the storage named by ``RATE_LIMIT_STORAGE_URI``:
the default ``async+memory://`` keeps them in process and drops keys whose
window has emptied; a ``async+redis://`` URI shares them between workers.
"""

import math
import time
from typing import Optional

from fastapi import HTTPException, Request, status
from limits import RateLimitItemPerSecond
from limits.aio.storage import MemoryStorage, Storage
from limits.aio.strategies import MovingWindowRateLimiter
from limits.storage import storage_from_string

from studentos.core.logging_config import get_logger
from studentos.server.core.config import settings

from .deps import client_ip

logger = get_logger(__name__)


class RequestRateLimiter:
    """Allow at most ``points`` hits per ``window_seconds`` for every key.

    Limiters sharing one storage stay independent as long as their
    ``namespace`` differs.
    """

    def __init__(
        self,
        points: int,
        window_seconds: int,
        namespace: str = "api",
        storage: Optional[Storage] = None,
    ) -> None:
        self.item = RateLimitItemPerSecond(points, window_seconds, namespace=namespace)
        self.storage = storage if storage is not None else MemoryStorage()
        self.strategy = MovingWindowRateLimiter(self.storage)

    async def hit(self, key: str) -> Optional[int]:
        """Record one hit for ``key``.

        Returns:
            None when the hit is allowed, otherwise the number of seconds until
            the oldest hit in the window expires (the ``Retry-After`` value).
        """
        if await self.strategy.hit(self.item, key):
            return None
        stats = await self.strategy.get_window_stats(self.item, key)
        return max(1, math.ceil(stats.reset_time - time.time()))

    async def reset(self, key: str) -> None:
        await self.strategy.clear(self.item, key)


_rate_limit = settings.rate_limit
_storage = storage_from_string(_rate_limit.storage_uri)

global_limiter = RequestRateLimiter(_rate_limit.global_points, _rate_limit.window_seconds, "api", _storage)
login_limiter = RequestRateLimiter(_rate_limit.login_points, _rate_limit.window_seconds, "login", _storage)


async def enforce_login_limit(request: Request) -> str:
    """Count a login attempt for the caller's IP and return that IP.

    Raises:
        HTTPException: 429 with ``Retry-After`` once the attempts are used up
    """
    ip = client_ip(request)
    if not settings.rate_limit.enabled:
        return ip
    retry_after = await login_limiter.hit(ip)
    if retry_after is not None:
        logger.warning(f"Login rate limit exceeded for {ip}")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many login attempts. Please try again in 15 minutes.",
            headers={"Retry-After": str(retry_after)},
        )
    return ip


async def clear_login_attempts(ip: str) -> None:
    """Forget failed attempts after a successful login."""
    await login_limiter.reset(ip)
