"""
StudentOS API application.

Builds the FastAPI app: exception handlers, the CORS, request timing and rate
limit middleware, and every router mounted under ``/api``. ``run`` serves it
with uvicorn.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studentos.core.database import init_db
from studentos.core.logging_config import get_logger, setup_logging
from studentos.core.monitoring import initialize_logfire

from .api.v1 import (
    admin,
    ai,
    applications,
    auth,
    blog,
    community,
    contact,
    credits,
    employer,
    finance,
    habits,
    health,
    jobs,
    learning_plan,
    notifications,
    roles,
    scholarships,
    tools,
    users,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RateLimitMiddleware, RequestLoggingMiddleware

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start tracing and prepare the database before serving; a database failure is logged, not fatal."""
    logger.info(f"Starting up StudentOS API ({settings.environment})...")
    initialize_logfire(app)
    try:
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down StudentOS API...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    StudentOS API

    Backend services for the StudentOS student platform: accounts and profiles,
    scholarship and job search, job applications, habit tracking, the blog and
    community feed, AI study and career tools, and the admin back-office.
    """,
    version=constant.API_VERSION,
    openapi_url=f"{constant.API_PREFIX}/openapi.json",
    docs_url=f"{constant.API_PREFIX}/docs",
    redoc_url=f"{constant.API_PREFIX}/redoc",
    lifespan=lifespan,
)

setup_exception_handlers(app)

# Middleware added last runs first: CORS wraps logging, which wraps rate limiting.
app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLoggingMiddleware)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)


app.include_router(health.router, prefix=constant.API_PREFIX, tags=["health"])
app.include_router(auth.router, prefix=f"{constant.API_PREFIX}/auth", tags=["auth"])
app.include_router(users.router, prefix=f"{constant.API_PREFIX}/users", tags=["users"])
app.include_router(scholarships.router, prefix=f"{constant.API_PREFIX}/scholarships", tags=["scholarships"])
app.include_router(jobs.router, prefix=f"{constant.API_PREFIX}/jobs", tags=["jobs"])
app.include_router(applications.router, prefix=f"{constant.API_PREFIX}/applications", tags=["applications"])
app.include_router(employer.router, prefix=f"{constant.API_PREFIX}/employer", tags=["employer"])
app.include_router(habits.router, prefix=f"{constant.API_PREFIX}/habits", tags=["habits"])
app.include_router(finance.router, prefix=f"{constant.API_PREFIX}/finance", tags=["finance"])
app.include_router(learning_plan.router, prefix=f"{constant.API_PREFIX}/learning-plan", tags=["learning-plan"])
app.include_router(notifications.router, prefix=f"{constant.API_PREFIX}/notifications", tags=["notifications"])
app.include_router(credits.router, prefix=f"{constant.API_PREFIX}/credits", tags=["credits"])
app.include_router(blog.router, prefix=f"{constant.API_PREFIX}/blog", tags=["blog"])
app.include_router(community.router, prefix=f"{constant.API_PREFIX}/community", tags=["community"])
app.include_router(contact.router, prefix=f"{constant.API_PREFIX}/contact", tags=["contact"])
app.include_router(admin.router, prefix=f"{constant.API_PREFIX}/admin", tags=["admin"])
app.include_router(roles.router, prefix=f"{constant.API_PREFIX}/admin", tags=["roles"])
app.include_router(tools.router, prefix=f"{constant.API_PREFIX}/admin", tags=["tools"])
app.include_router(ai.router, prefix=f"{constant.API_PREFIX}/ai", tags=["ai"])


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.server_host, port=settings.server_port, log_config=None)


if __name__ == "__main__":
    run()
