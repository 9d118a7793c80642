"""Request-scoped dependencies and domain services used by the API routers."""
