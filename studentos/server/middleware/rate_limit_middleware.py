"""
Global API rate limiting middleware.

Every request under ``/api`` counts against the caller's IP address. Callers
over the limit get 429 with a ``Retry-After`` header.
"""

from typing import Callable, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from studentos.core.logging_config import get_logger
from studentos.server.core.config import settings
from studentos.server.core.constant import API_PREFIX
from studentos.server.services.deps import client_ip
from studentos.server.services.rate_limiter import RequestRateLimiter, global_limiter

logger = get_logger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Apply a per-IP moving-window limit to API requests."""

    def __init__(
        self,
        app: ASGIApp,
        limiter: Optional[RequestRateLimiter] = None,
        enabled: Optional[bool] = None,
    ) -> None:
        super().__init__(app)
        self.limiter = limiter or global_limiter
        self.enabled = settings.rate_limit.enabled if enabled is None else enabled

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not self.enabled or not request.url.path.startswith(API_PREFIX) or request.method == "OPTIONS":
            return await call_next(request)

        ip = client_ip(request)
        retry_after = await self.limiter.hit(ip)
        if retry_after is not None:
            logger.warning(f"Rate limit exceeded for {ip} on {request.method} {request.url.path}")
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"error": "Too many requests. Please try again later.", "retryAfter": retry_after},
                headers={"Retry-After": str(retry_after)},
            )
        return await call_next(request)
