"""
Deliverable request/response schemas.

Update bodies on the collection endpoint carry the identifier; it is
typed loosely here and checked by the service so that booleans and other
non-identifiers produce a 400 rather than reaching the database.

Dependencies: pydantic
System role: Deliverable API contracts
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, Field

from cigno.models.common import Priority

DeliverableType = Literal[
    "Recommendation", "Workshop Document", "Presentation", "Report", "Strategy",
    "Analysis", "Design", "Code", "Documentation", "Dashboard", "API", "Brief",
    "Storyline", "Other",
]
DeliverableStatus = Literal[
    "draft", "in_review", "approved", "in_progress", "completed", "delivered", "rejected",
]
DeliverableFormat = Literal["PDF", "DOCX", "PPTX", "XLSX", "HTML", "TXT", "IMAGE", "VIDEO", "AUDIO", "OTHER"]


class CreateDeliverableRequest(BaseModel):
    """Request schema for creating a deliverable."""

    name: str = Field(..., min_length=1, max_length=200)
    project_id: Any = Field(default=None, validation_alias=AliasChoices("project_id", "project"))
    type: DeliverableType = "Report"
    format: DeliverableFormat = "PDF"
    status: DeliverableStatus = "draft"
    priority: Priority = "medium"
    brief: str | None = Field(default=None, max_length=2000)
    description: str | None = Field(default=None, max_length=2000)
    notes: str | None = Field(default=None, max_length=2000)
    due_date: datetime | None = None
    estimated_hours: float = Field(default=0, ge=0, le=10000)
    created_by: Any = None


class UpdateDeliverableRequest(BaseModel):
    """Partial update; brief_* fields refresh brief_last_evaluated_at."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    type: DeliverableType | None = None
    format: DeliverableFormat | None = None
    status: DeliverableStatus | None = None
    priority: Priority | None = None
    brief: str | None = Field(default=None, max_length=2000)
    notes: str | None = Field(default=None, max_length=2000)
    due_date: datetime | None = None
    estimated_hours: float | None = Field(default=None, ge=0, le=10000)
    brief_quality: Any = None
    brief_strengths: Any = None
    brief_improvements: Any = None
    updated_by: Any = None


class UpdateDeliverableByBodyRequest(UpdateDeliverableRequest):
    """Update sent to the collection endpoint with the id in the body."""

    id: Any = Field(default=None, validation_alias=AliasChoices("id", "_id"))


class DeliverableResponse(BaseModel):
    """Response schema for deliverable operations."""

    id: str
    name: str
    type: str
    format: str
    status: str
    priority: str
    brief: str | None
    notes: str | None
    due_date: datetime
    estimated_hours: float
    brief_quality: float | None
    brief_strengths: list[str]
    brief_improvements: list[str]
    brief_last_evaluated_at: datetime | None
    project_id: str
    is_active: bool
    created_by: str | None
    updated_by: str | None
    created_at: datetime
    updated_at: datetime
