"""
User request/response schemas.

Dependencies: pydantic
System role: User API contracts
"""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from cigno.models.common import EMAIL_PATTERN


class CreateUserRequest(BaseModel):
    """Request schema for creating a user."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email_address: str = Field(..., max_length=320, pattern=EMAIL_PATTERN)
    job_title: str | None = Field(default=None, max_length=200)
    location: str | None = Field(default=None, max_length=200)
    phone_number: str | None = Field(default=None, max_length=50)
    organisation_id: Any = Field(
        default=None, validation_alias=AliasChoices("organisation_id", "organisation")
    )


class UserResponse(BaseModel):
    """Response schema for user operations."""

    id: str
    first_name: str
    last_name: str
    email_address: str
    job_title: str | None
    location: str | None
    phone_number: str | None
    organisation_id: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
