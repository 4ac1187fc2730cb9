"""
AI proxy endpoints.

Routes:
- POST /ai/custom-agent - Forward a message to a named custom agent
- POST /ai/generate-insights - Generate project insights
- POST /ai/generate-storyline - Generate a storyline outline
- POST /ai/score-brief - Score a deliverable brief and store the evaluation

Dependencies: cigno.application.services, cigno.models
System role: AI integration HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from cigno.api.deps.dependencies import get_ai_service, get_brief_scoring_service
from cigno.api.errors import handle_api_errors
from cigno.application.services.brief_service import BriefScoringService
from cigno.application.services.insights_service import AIService
from cigno.models.ai import (
    CustomAgentRequest,
    CustomAgentResponse,
    GenerateInsightsRequest,
    GenerateInsightsResponse,
    GenerateStorylineRequest,
    GenerateStorylineResponse,
    ScoreBriefRequest,
    ScoreBriefResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/custom-agent", response_model=CustomAgentResponse)
@handle_api_errors
async def call_custom_agent(
    request: CustomAgentRequest,
    ai_service: AIService = Depends(get_ai_service),
) -> CustomAgentResponse:
    """
    Proxy a message to a custom agent.

    Raises:
        HTTPException(400): Missing agentId or message
        HTTPException(502): Agent call failed
        HTTPException(503): Agent API key not configured
    """
    logger.info("Proxying custom agent request", extra={"agent_id": request.agentId})
    result = await ai_service.run_custom_agent(request.agentId, request.message, request.context)
    return CustomAgentResponse(**result)


@router.post("/generate-insights", response_model=GenerateInsightsResponse)
@handle_api_errors
async def generate_insights(
    request: GenerateInsightsRequest,
    ai_service: AIService = Depends(get_ai_service),
) -> GenerateInsightsResponse:
    """
    Generate insights for a project.

    Raises:
        HTTPException(400): Missing projectId
        HTTPException(502): Both agent endpoints failed
    """
    result = await ai_service.generate_insights(
        request.projectId, request.projectData, request.topic, request.category
    )
    return GenerateInsightsResponse(**result)


@router.post("/generate-storyline", response_model=GenerateStorylineResponse)
@handle_api_errors
async def generate_storyline(
    request: GenerateStorylineRequest,
    ai_service: AIService = Depends(get_ai_service),
) -> GenerateStorylineResponse:
    """
    Generate a storyline outline.

    Agent failures are reported in warnings and answered with a local outline.

    Raises:
        HTTPException(400): Neither topic nor projectData.name given
    """
    result = await ai_service.generate_storyline(
        topic=request.topic,
        industry=request.industry,
        audience=request.audience,
        objectives=request.objectives,
        sections_count=request.sectionsCount,
        presentation_style=request.presentationStyle,
        complexity=request.complexity,
        project_id=request.projectId,
        deliverable_id=request.deliverableId,
        project_data=request.projectData,
    )
    return GenerateStorylineResponse(**result)


@router.post("/score-brief", response_model=ScoreBriefResponse)
@handle_api_errors
async def score_brief(
    request: ScoreBriefRequest,
    brief_service: BriefScoringService = Depends(get_brief_scoring_service),
) -> ScoreBriefResponse:
    """
    Score a deliverable brief and store quality, strengths and improvements.

    Raises:
        HTTPException(400): Malformed deliverableId or no brief text
        HTTPException(404): Deliverable not found
    """
    result = await brief_service.score_brief(
        request.deliverableId, request.currentBrief, request.deliverableData, request.projectData
    )
    return ScoreBriefResponse(**result)
