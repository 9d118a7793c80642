"""Core models: domain enums and API I/O schemas."""

from __future__ import annotations

from .io.base import CamelModel, MessageResponse, Pagination

__all__ = [
    "CamelModel",
    "MessageResponse",
    "Pagination",
]
