"""
Middleware modules for the StudentOS API.

This package contains custom middleware for request/response logging and
per-client rate limiting.
"""

from .rate_limit_middleware import RateLimitMiddleware
from .request_logging_middleware import RequestLoggingMiddleware

__all__ = ["RateLimitMiddleware", "RequestLoggingMiddleware"]
