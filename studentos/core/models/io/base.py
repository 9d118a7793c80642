"""
Shared building blocks for API request/response models.

Every model exchanged with the frontend uses camelCase keys on the wire while
keeping snake_case attribute names in Python.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases and readable from ORM entities."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


class Pagination(CamelModel):
    """Pagination block attached to every paginated list response."""

    page: int = Field(description="Current page (1-based)")
    limit: int = Field(description="Page size")
    total: int = Field(description="Total number of matching records")
    pages: int = Field(description="Total number of pages")

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, pages=math.ceil(total / limit) if limit else 0)


class MessageResponse(CamelModel):
    message: str
