"""
API I/O models.

Request and response schemas exchanged with the frontend, one module per API
area. All of them serialize with camelCase keys.
"""

from .base import CamelModel, MessageResponse, Pagination

__all__ = [
    "CamelModel",
    "MessageResponse",
    "Pagination",
]
