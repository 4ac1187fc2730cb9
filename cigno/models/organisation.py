"""
Organisation request/response schemas.

Dependencies: pydantic
System role: Organisation API contracts
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Industry = Literal[
    "Technology", "Healthcare", "Finance", "Education", "Manufacturing",
    "Retail", "Consulting", "Marketing", "Real Estate", "Other",
]
PaymentTerms = Literal["net_15", "net_30", "net_45", "net_60", "due_on_receipt", "custom"]


class BillingInfo(BaseModel):
    """Billing details stored with an organisation."""

    model_config = ConfigDict(extra="ignore")

    company_name: str | None = None
    billing_address: str | None = None
    tax_id: str | None = None
    vat_number: str | None = None
    payment_terms: PaymentTerms = "net_30"
    currency: str = "USD"
    billing_contact: str | None = None
    billing_email: str | None = None


class CreateOrganisationRequest(BaseModel):
    """Request schema for creating an organisation."""

    name: str = Field(..., min_length=1, max_length=200)
    industry: Industry
    admin_id: Any = Field(default=None, description="Owning user id")
    website: str | None = Field(default=None, max_length=500)
    logo: str | None = Field(default=None, max_length=500)
    locations: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    billing_info: BillingInfo = Field(default_factory=BillingInfo)
    created_by: Any = None


class UpdateOrganisationRequest(BaseModel):
    """Request schema for updating an organisation. Omitted fields are kept."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    industry: Industry | None = None
    admin_id: Any = None
    website: str | None = Field(default=None, max_length=500)
    logo: str | None = Field(default=None, max_length=500)
    locations: list[str] | None = None
    tags: list[str] | None = None
    billing_info: BillingInfo | None = None
    updated_by: Any = None


class OrganisationResponse(BaseModel):
    """Response schema for organisation operations."""

    id: str
    name: str
    industry: str
    admin_id: str | None
    website: str | None
    logo: str | None
    locations: list[str]
    tags: list[str]
    billing_info: dict
    is_active: bool
    created_by: str | None
    updated_by: str | None
    created_at: datetime
    updated_at: datetime
