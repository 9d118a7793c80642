"""
StudentOS Server Package.

This package contains the web server implementation for the StudentOS platform.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration and constants.
    exception_handlers: Error response rendering.
    middleware: Request logging and rate limiting.
    services: Request-scoped dependencies and business services.
"""
