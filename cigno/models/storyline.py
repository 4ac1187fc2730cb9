"""
Storyline request/response schemas.

Dependencies: pydantic
System role: Storyline API contracts
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, Field

StorylineStatus = Literal["draft", "in-progress", "review", "final"]


class StorylineSection(BaseModel):
    """One ordered section of a storyline."""

    id: str | None = None
    title: str = Field(..., min_length=1, max_length=300)
    description: str = ""
    status: str = "draft"
    key_points: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("key_points", "keyPoints")
    )
    content_blocks: list[Any] = Field(
        default_factory=list, validation_alias=AliasChoices("content_blocks", "contentBlocks")
    )
    estimated_slides: int | None = Field(
        default=None, validation_alias=AliasChoices("estimated_slides", "estimatedSlides")
    )
    order: int | None = None
    locked: bool = False
    locked_by: str | None = Field(default=None, validation_alias=AliasChoices("locked_by", "lockedBy"))
    locked_at: str | None = Field(default=None, validation_alias=AliasChoices("locked_at", "lockedAt"))


class AddSectionRequest(BaseModel):
    """Request schema for adding a section. Without order it is appended."""

    title: str = Field(default="", max_length=300)
    description: str = ""
    status: str | None = None
    key_points: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("key_points", "keyPoints")
    )
    content_blocks: list[Any] | None = Field(
        default=None, validation_alias=AliasChoices("content_blocks", "contentBlocks")
    )
    estimated_slides: int | None = Field(
        default=None, ge=1, validation_alias=AliasChoices("estimated_slides", "estimatedSlides")
    )
    order: int | None = Field(default=None, ge=0)
    user_id: Any = Field(default=None, validation_alias=AliasChoices("user_id", "userId"))


class UpdateSectionRequest(BaseModel):
    """Request schema for updating a section. Omitted fields are kept."""

    title: str | None = Field(default=None, max_length=300)
    description: str | None = None
    status: str | None = None
    key_points: list[str] | None = Field(
        default=None, validation_alias=AliasChoices("key_points", "keyPoints")
    )
    content_blocks: list[Any] | None = Field(
        default=None, validation_alias=AliasChoices("content_blocks", "contentBlocks")
    )
    estimated_slides: int | None = Field(
        default=None, ge=1, validation_alias=AliasChoices("estimated_slides", "estimatedSlides")
    )
    order: int | None = Field(default=None, ge=0)
    user_id: Any = Field(default=None, validation_alias=AliasChoices("user_id", "userId"))


class SectionLockRequest(BaseModel):
    user_id: Any = Field(default=None, validation_alias=AliasChoices("user_id", "userId"))


class SectionLockResponse(BaseModel):
    section_id: str
    locked: bool
    locked_by: str | None = None
    locked_at: str | None = None


class CreateStorylineRequest(BaseModel):
    """Request schema for creating a storyline."""

    deliverable_id: Any = Field(
        default=None, validation_alias=AliasChoices("deliverable_id", "deliverable")
    )
    title: str = Field(default="", max_length=300)
    status: StorylineStatus = "draft"
    executive_summary: str | None = Field(
        default=None, validation_alias=AliasChoices("executive_summary", "executiveSummary")
    )
    sections: list[StorylineSection] = Field(default_factory=list)
    created_by: Any = None


class UpdateStorylineRequest(BaseModel):
    """Request schema for updating a storyline. Omitted fields are kept."""

    title: str | None = Field(default=None, min_length=1, max_length=300)
    status: StorylineStatus | None = None
    executive_summary: str | None = Field(
        default=None, validation_alias=AliasChoices("executive_summary", "executiveSummary")
    )
    sections: list[StorylineSection] | None = None
    updated_by: Any = None


class StorylineResponse(BaseModel):
    """Response schema for storyline operations."""

    id: str
    deliverable_id: str
    title: str
    status: str
    executive_summary: str | None
    sections: list[dict]
    is_active: bool
    created_at: datetime
    updated_at: datetime
