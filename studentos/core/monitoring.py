"""
Pydantic Logfire integration.

Tracing is opt-in: it needs ``LOGFIRE_ENABLED=true`` and a ``LOGFIRE_TOKEN``.
Once configured, the FastAPI app, the SQLAlchemy engine, outbound httpx calls
(Supabase) and Pydantic AI agents are instrumented according to the
``LOGFIRE_TRACE_*`` switches, and the ``log_*`` helpers below send structured
events. Before that the helpers do nothing.
"""

import logging
from functools import partial
from typing import Any, Callable, Iterator, Optional, Tuple

import logfire
from fastapi import FastAPI

from studentos import __version__
from studentos.server.core.config import settings

logger = logging.getLogger(__name__)

LOGFIRE_ENABLED = settings.logfire_enabled
LOGFIRE_TOKEN = settings.logfire_token or ""
LOGFIRE_SERVICE_NAME = settings.logfire_service_name
LOGFIRE_TRACE_FASTAPI = settings.logfire_trace_fastapi
LOGFIRE_TRACE_SQLALCHEMY = settings.logfire_trace_sqlalchemy
LOGFIRE_TRACE_HTTPX = settings.logfire_trace_httpx
LOGFIRE_TRACE_PYDANTIC_AI = settings.logfire_trace_pydantic_ai

_logfire_active = False


def is_logfire_active() -> bool:
    return _logfire_active


def _integrations(app: Optional[FastAPI]) -> Iterator[Tuple[str, Callable[[], Any]]]:
    """Yield ``(label, instrument)`` for every integration that is switched on."""
    if LOGFIRE_TRACE_PYDANTIC_AI:
        yield "Pydantic AI", logfire.instrument_pydantic_ai
    if LOGFIRE_TRACE_SQLALCHEMY:
        yield "SQLAlchemy", logfire.instrument_sqlalchemy
    if LOGFIRE_TRACE_HTTPX:
        yield "HTTPX", logfire.instrument_httpx
    if LOGFIRE_TRACE_FASTAPI and app is not None:
        yield "FastAPI", partial(logfire.instrument_fastapi, app=app)


def initialize_logfire(app: Optional[FastAPI] = None) -> None:
    """Configure Logfire and switch on the selected instrumentations.

    An integration that fails to load is logged and skipped; the others are
    still attempted.
    """
    global _logfire_active

    if not LOGFIRE_ENABLED:
        logger.info("Logfire tracing is off (LOGFIRE_ENABLED is not set)")
        return
    if not LOGFIRE_TOKEN:
        logger.warning("LOGFIRE_ENABLED is set but LOGFIRE_TOKEN is missing, tracing stays off")
        return

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=__version__,
            environment=settings.environment,
        )
    except Exception:
        logger.exception("Logfire configuration failed, tracing stays off")
        return
    _logfire_active = True

    loaded = []
    for label, instrument in _integrations(app):
        try:
            instrument()
        except Exception as exc:
            logger.warning(f"Skipping Logfire {label} instrumentation: {exc}")
        else:
            loaded.append(label)

    logger.info(
        f"Logfire tracing active for {LOGFIRE_SERVICE_NAME} ({settings.environment}): "
        f"{', '.join(loaded) or 'no integrations'}"
    )


def _emit(level: str, message: str, **attributes: Any) -> None:
    if not _logfire_active:
        return
    try:
        getattr(logfire, level)(message, **attributes)
    except Exception:
        logger.debug(f"Logfire dropped event {message!r}", exc_info=True)


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """Record a finished HTTP request with its status and latency."""
    _emit("info", "API request completed", method=method, path=path, status_code=status_code, duration_ms=duration_ms)


def log_ai_call(tool: str, model: str, user_id: str) -> None:
    _emit("info", "AI tool invoked", tool=tool, model=model, user_id=user_id)


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """Record an unhandled error; ``context`` entries become event attributes."""
    _emit("error", f"{error_type}: {error_message}", **(context or {}))
