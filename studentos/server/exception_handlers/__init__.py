"""
Exception handlers for the StudentOS API.

This package contains the exception handlers that render every error as a
``{"error": ...}`` JSON body, and a setup function to register them with the
FastAPI application.
"""

from .global_handler import setup_exception_handlers

__all__ = ["setup_exception_handlers"]
