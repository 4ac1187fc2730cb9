"""
Contact request/response schemas.

Contacts are updated through the collection endpoint, so the update body
carries the identifier. It is typed loosely here and validated by the
service, which turns booleans or malformed values into a 400.

Dependencies: pydantic
System role: Contact API contracts
"""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from cigno.models.common import EMAIL_PATTERN


class CreateContactRequest(BaseModel):
    """Request schema for creating a contact."""

    name: str = Field(..., min_length=1, max_length=200)
    email_address: str = Field(..., max_length=320, pattern=EMAIL_PATTERN)
    client_id: Any = Field(default=None, validation_alias=AliasChoices("client_id", "client"))
    job_title: str | None = Field(default=None, max_length=200)
    phone_number: str | None = Field(default=None, max_length=50)
    department: str | None = Field(default=None, max_length=100)
    is_primary_contact: bool = False
    notes: str | None = None
    tags: list[str] = Field(default_factory=list)


class UpdateContactRequest(BaseModel):
    """Request schema for updating a contact; id may be sent as _id."""

    id: Any = Field(default=None, validation_alias=AliasChoices("id", "_id"))
    name: str | None = Field(default=None, min_length=1, max_length=200)
    email_address: str | None = Field(default=None, max_length=320, pattern=EMAIL_PATTERN)
    job_title: str | None = Field(default=None, max_length=200)
    phone_number: str | None = Field(default=None, max_length=50)
    department: str | None = Field(default=None, max_length=100)
    is_primary_contact: bool | None = None
    notes: str | None = None
    tags: list[str] | None = None


class ContactResponse(BaseModel):
    """Response schema for contact operations."""

    id: str
    name: str
    email_address: str
    client_id: str
    job_title: str | None
    phone_number: str | None
    department: str | None
    is_primary_contact: bool
    notes: str | None
    tags: list[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime
