"""
AI proxy request schemas.

Field names follow the camelCase JSON the dashboard sends.

Dependencies: pydantic
System role: AI endpoint contracts
"""

from typing import Any

from pydantic import BaseModel, Field

from cigno.models.deliverable import DeliverableResponse


class CustomAgentRequest(BaseModel):
    """Proxy a message to a named custom agent."""

    agentId: str = ""
    message: str = ""
    context: dict = Field(default_factory=dict)


class CustomAgentResponse(BaseModel):
    success: bool = True
    source: str = "custom-agent"
    agentId: str
    data: Any


class GenerateInsightsRequest(BaseModel):
    """Insight generation for a project."""

    projectId: str = ""
    projectData: dict = Field(default_factory=dict)
    topic: str | None = None
    category: str | None = None


class GenerateInsightsResponse(BaseModel):
    success: bool = True
    source: str
    agentId: str | None = None
    projectId: str
    topic: str | None = None
    category: str | None = None
    data: Any


class GenerateStorylineRequest(BaseModel):
    """Storyline outline generation."""

    topic: str | None = None
    industry: str | None = None
    audience: str | None = None
    objectives: str | None = None
    sectionsCount: int = Field(default=6, ge=1, le=20)
    presentationStyle: str = "consulting"
    complexity: str = "intermediate"
    projectId: str | None = None
    deliverableId: str | None = None
    projectData: dict = Field(default_factory=dict)


class GeneratedSection(BaseModel):
    title: str
    description: str = ""
    status: str = "draft"
    key_points: list[str] = Field(default_factory=list)
    content_blocks: list[Any] = Field(default_factory=list)
    estimated_slides: int | None = None
    order: int


class StorylineOutline(BaseModel):
    executive_summary: str
    sections: list[GeneratedSection]
    presentation_flow: str
    call_to_action: str
    total_sections: int
    estimated_duration: float | None = None


class GenerateStorylineResponse(BaseModel):
    success: bool = True
    source: str
    agentId: str | None = None
    projectId: str | None = None
    deliverableId: str | None = None
    warnings: list[str] = Field(default_factory=list)
    data: StorylineOutline


class ScoreBriefRequest(BaseModel):
    """Brief scoring for a deliverable. The stored brief is used when currentBrief is empty."""

    deliverableId: Any = None
    currentBrief: str | None = None
    deliverableData: dict = Field(default_factory=dict)
    projectData: dict = Field(default_factory=dict)


class BriefEvaluation(BaseModel):
    quality_score: float
    strengths: list[str]
    improvements: list[str]
    suggestions: list[str]
    summary: str


class ScoreBriefResponse(BaseModel):
    success: bool = True
    deliverableId: str
    source: str
    agentId: str | None = None
    warnings: list[str] = Field(default_factory=list)
    data: BriefEvaluation
    deliverable: DeliverableResponse
