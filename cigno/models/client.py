"""
Client request/response schemas.

Dependencies: pydantic
System role: Client API contracts
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, Field

from cigno.models.common import Priority
from cigno.models.contact import ContactResponse

ClientStatus = Literal["active", "inactive", "prospect", "former"]
CompanySize = Literal["startup", "small", "medium", "large", "enterprise"]


class CreateClientRequest(BaseModel):
    """Request schema for creating a client."""

    name: str = Field(..., min_length=1, max_length=200)
    industry: str = Field(..., min_length=1, max_length=100)
    location: str = Field(..., min_length=1, max_length=200)
    owner_id: Any = Field(default=None, validation_alias=AliasChoices("owner_id", "owner"))
    organisation_id: Any = Field(
        default=None, validation_alias=AliasChoices("organisation_id", "organisation")
    )
    website: str | None = Field(default=None, max_length=500)
    description: str | None = Field(default=None, max_length=2000)
    status: ClientStatus = "active"
    priority: Priority = "medium"
    company_size: CompanySize = "medium"
    tags: list[str] = Field(default_factory=list)
    notes: str | None = None


class UpdateClientRequest(BaseModel):
    """Request schema for updating a client. Omitted fields are kept."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    industry: str | None = Field(default=None, min_length=1, max_length=100)
    location: str | None = Field(default=None, min_length=1, max_length=200)
    owner_id: Any = Field(default=None, validation_alias=AliasChoices("owner_id", "owner"))
    website: str | None = Field(default=None, max_length=500)
    description: str | None = Field(default=None, max_length=2000)
    status: ClientStatus | None = None
    priority: Priority | None = None
    company_size: CompanySize | None = None
    tags: list[str] | None = None
    notes: str | None = None


class ClientResponse(BaseModel):
    """Response schema for client operations."""

    id: str
    name: str
    industry: str
    location: str
    owner_id: str
    organisation_id: str
    website: str | None
    description: str | None
    status: str
    priority: str
    company_size: str | None
    tags: list[str]
    notes: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ClientDetailResponse(ClientResponse):
    """Client with its contacts."""

    contacts: list[ContactResponse] = Field(default_factory=list)
