"""
Shapes shared by every router: the error body and page-numbered listings.

Dependencies: pydantic
System role: Common API response structures
"""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from ecocycle.core.exceptions import ValidationError

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class ErrorResponse(BaseModel):
    """Body of every categorised error, e.g. a 409 for a redemption the balance cannot cover."""

    success: bool = False
    error: str = Field(description="Human readable message")
    code: str = Field(description="Stable error code, e.g. INSUFFICIENT_COINS")
    details: dict | None = None


class Pagination(BaseModel):
    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    total: int = Field(ge=0)
    total_pages: int = Field(ge=0)

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit))


class PaginatedResponse(BaseModel, Generic[T]):
    items: list[T]
    pagination: Pagination


def page_offset(page: int, limit: int) -> int:
    """Rows to skip for a 1-based page number."""
    if page < 1 or not 1 <= limit <= MAX_PAGE_SIZE:
        raise ValidationError(
            f"page must be >= 1 and limit between 1 and {MAX_PAGE_SIZE}",
            field="page" if page < 1 else "limit",
        )
    return (page - 1) * limit
