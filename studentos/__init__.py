"""StudentOS backend.

REST API for the StudentOS student-services platform: accounts and profiles,
scholarships, jobs and applications, habits, a blog, a community feed, an
admin back-office (roles and permissions, employer verification, pricing
plans, audit logs) and Gemini-backed AI helpers.

Subpackages
-----------

- ``studentos.core``: logging, monitoring, security, persistence (SQLModel
  entities and repositories) and shared pydantic models.
- ``studentos.server``: the FastAPI application, its routers, middleware,
  exception handlers and request-scoped services.
"""

__version__ = "1.0.0"
