"""Shared DTOs."""

import math

from pydantic import BaseModel


class Pagination(BaseModel):
    """Offset pagination metadata."""

    page: int
    size: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, page: int, size: int, total: int) -> "Pagination":
        """Build pagination metadata for a page of ``size`` items."""
        return cls(page=page, size=size, total=total, total_pages=math.ceil(total / size))


class MessageResponse(BaseModel):
    """Generic acknowledgement response."""

    message: str
