"""
Common response models and shared field types.

Generic response wrappers, error schema and the enumerations shared by
several resources.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

Priority = Literal["low", "medium", "high", "critical"]
Currency = Literal["USD", "EUR", "GBP", "CHF", "CAD", "AUD"]
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class SuccessResponse(BaseModel, Generic[T]):
    """Generic success response wrapper."""

    success: bool = True
    message: str | None = None
    data: T


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    error: str = Field(description="Error message")
    details: dict | list | None = Field(default=None, description="Additional error context")


class Pagination(BaseModel):
    """Page metadata for paginated listings."""

    page: int
    limit: int
    total: int
    pages: int


class DeletedResponse(BaseModel):
    """Body returned by delete endpoints."""

    success: bool = True
    message: str
    id: str
