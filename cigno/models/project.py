"""
Project request/response schemas.

Dependencies: pydantic
System role: Project API contracts
"""

from datetime import date, datetime
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, Field, model_validator

from cigno.models.common import Currency, Priority

ProjectStatus = Literal["Planning", "Active", "In Progress", "Completed", "Cancelled", "On Hold"]
ProjectType = Literal["consulting", "development", "design", "analysis", "strategy", "research", "other"]
BudgetType = Literal["Fixed", "Hourly", "Retainer", "Milestone"]


class Budget(BaseModel):
    """Project budget."""

    amount: float = Field(default=0, ge=0)
    currency: Currency = "USD"
    type: BudgetType = "Fixed"
    allocated: float = Field(default=0, ge=0)
    spent: float = Field(default=0, ge=0)


class CreateProjectRequest(BaseModel):
    """Request schema for creating a project."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    start_date: date
    end_date: date
    status: ProjectStatus = "Planning"
    client_id: Any = Field(default=None, validation_alias=AliasChoices("client_id", "client"))
    client_owner_id: Any = Field(
        default=None, validation_alias=AliasChoices("client_owner_id", "client_owner")
    )
    internal_owner_id: Any = Field(
        default=None, validation_alias=AliasChoices("internal_owner_id", "internal_owner")
    )
    organisation_id: Any = Field(
        default=None, validation_alias=AliasChoices("organisation_id", "organisation")
    )
    budget: Budget = Field(default_factory=Budget)
    priority: Priority = "medium"
    project_type: ProjectType = "consulting"
    tags: list[str] = Field(default_factory=list)
    notes: str | None = None

    @model_validator(mode="after")
    def check_dates(self) -> "CreateProjectRequest":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class UpdateProjectRequest(BaseModel):
    """Request schema for updating a project. Omitted fields are kept."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    start_date: date | None = None
    end_date: date | None = None
    status: ProjectStatus | None = None
    client_owner_id: Any = Field(
        default=None, validation_alias=AliasChoices("client_owner_id", "client_owner")
    )
    internal_owner_id: Any = Field(
        default=None, validation_alias=AliasChoices("internal_owner_id", "internal_owner")
    )
    budget: Budget | None = None
    priority: Priority | None = None
    project_type: ProjectType | None = None
    tags: list[str] | None = None
    notes: str | None = None


class ProjectResponse(BaseModel):
    """Response schema for project operations."""

    id: str
    name: str
    description: str | None
    start_date: date
    end_date: date
    status: str
    client_id: str
    client_owner_id: str | None
    internal_owner_id: str | None
    organisation_id: str
    budget: dict
    priority: str
    project_type: str
    tags: list[str]
    notes: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class AnalyzeProjectRequest(BaseModel):
    """Free-text project intake."""

    description: str = ""
    project_data: dict = Field(
        default_factory=dict, validation_alias=AliasChoices("projectData", "project_data")
    )


class AnalyzeProjectResponse(BaseModel):
    """
    Result of project analysis.

    analyzed_project is always present; warnings explains any fallback to
    local-only analysis.
    """

    success: bool = True
    message: str
    source: Literal["custom-agent", "local"]
    analyzedProject: dict
    warnings: list[str] = Field(default_factory=list)
    rawAnalysis: Any = None
