"""
Request timing middleware.

Every request gets an ``X-Process-Time`` response header (milliseconds), a
debug log line and a Logfire event. Requests slower than the configured
threshold are logged as warnings.
"""

import time
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from studentos.core.logging_config import get_logger
from studentos.core.monitoring import log_api_request
from studentos.server.core.constant import SLOW_REQUEST_THRESHOLD_MS

logger = get_logger(__name__)


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, slow_threshold_ms: float = SLOW_REQUEST_THRESHOLD_MS) -> None:
        super().__init__(app)
        self.slow_threshold_ms = slow_threshold_ms

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        method, path = request.method, request.url.path
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            elapsed = _elapsed_ms(started)
            logger.error(f"{method} {path} raised after {elapsed:.2f}ms", exc_info=True)
            log_api_request(method=method, path=path, status_code=500, duration_ms=elapsed)
            raise

        elapsed = _elapsed_ms(started)
        status_code = response.status_code
        response.headers["X-Process-Time"] = f"{elapsed:.2f}"
        log_api_request(method=method, path=path, status_code=status_code, duration_ms=elapsed)

        if elapsed > self.slow_threshold_ms:
            logger.warning(f"Slow API request: {method} {path} took {elapsed:.2f}ms (status {status_code})")
        else:
            logger.debug(f"{method} {path} -> {status_code} in {elapsed:.2f}ms")
        return response
