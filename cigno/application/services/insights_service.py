"""
AI proxy service: direct custom agent calls, project insights and
storyline generation.

Storyline generation falls back to a locally generated outline, with a
warning, whenever the storyline agent cannot supply usable sections.

Dependencies: cigno.boundary.agents, cigno.core.storyline_outline
System role: AI request orchestration
"""

import logging
from typing import Any

from cigno.boundary.agents.custom_agent_client import CustomAgentClient
from cigno.boundary.agents.json_extraction import extract_agent_text, extract_json_object
from cigno.configs import AgentSettings
from cigno.core.exceptions import AgentError, ValidationError
from cigno.core.storyline_outline import clamp_sections_count, generate_storyline_outline, outline_from_agent
from cigno.observability.log_utils import safe_log_value

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Market Research"

INSIGHTS_PROMPT = """Generate actionable insights for the project "{name}" for client "{client}".

Project Details:
- Industry: {industry}
- Description: {description}
- Focus Topic: {topic}
- Category: {category}

Please generate 3-5 specific, actionable insights that include:
1. Market trends and implications
2. Strategic recommendations
3. Risk factors and mitigation strategies
4. Competitive advantages
5. Implementation considerations

For each insight, provide:
- Clear, concise title
- Detailed explanation (2-3 sentences)
- Confidence level (0-100%)
- Data source or reasoning
- Category classification
- Relevant tags

Return the response as a JSON structure with insights array."""


def build_insights_request(
    project_id: str,
    project_data: dict[str, Any],
    topic: str | None,
    category: str | None,
) -> tuple[str, dict[str, Any]]:
    """Build the prompt and context sent for insight generation."""
    context = {
        "projectId": project_id,
        "projectName": project_data.get("name") or "Unknown Project",
        "clientName": project_data.get("client_name") or "Unknown Client",
        "industry": project_data.get("industry") or "General",
        "description": project_data.get("description") or "",
        "topic": topic or "general",
        "category": category or DEFAULT_CATEGORY,
        "requestType": "insights_generation",
    }
    message = INSIGHTS_PROMPT.format(
        name=project_data.get("name") or "project",
        client=project_data.get("client_name") or "client",
        industry=project_data.get("industry") or "Not specified",
        description=project_data.get("description") or "Not provided",
        topic=topic or "General analysis",
        category=category or DEFAULT_CATEGORY,
    )
    return message, context


STORYLINE_PROMPT = """Generate a comprehensive presentation storyline for the following requirements:

Topic: {topic}
Industry: {industry}
Target Audience: {audience}
Key Objectives: {objectives}
Number of Sections: {sections_count}
Presentation Style: {style}
Complexity Level: {complexity}

Project: {project_name} for client {client_name}
Project Description: {description}

Return a JSON object with:
- executiveSummary: high-level overview and key takeaways
- sections: array of {sections_count} objects with title, description, keyPoints (3-5 items),
  contentBlocks (e.g. BCG Matrix, MECE Framework, Timeline Layout, Process Flow) and estimatedSlides
- presentationFlow: logical narrative connecting all sections
- callToAction: recommended next steps for the audience"""


def build_storyline_request(options: dict[str, Any], project_data: dict[str, Any]) -> tuple[str, dict[str, Any]]:
    """Build the prompt and context sent for storyline generation."""
    context = {
        "projectId": options.get("project_id"),
        "deliverableId": options.get("deliverable_id"),
        "projectName": project_data.get("name") or "Unknown Project",
        "clientName": project_data.get("client_name") or "Unknown Client",
        "industry": options.get("industry") or project_data.get("industry") or "General",
        "topic": options["topic"],
        "sectionsCount": options["sections_count"],
        "presentationStyle": options["presentation_style"],
        "complexity": options["complexity"],
        "requestType": "storyline_generation",
    }
    message = STORYLINE_PROMPT.format(
        topic=options["topic"],
        industry=context["industry"],
        audience=options.get("audience") or "Business Professionals",
        objectives=options.get("objectives") or "Inform and educate audience",
        sections_count=options["sections_count"],
        style=options["presentation_style"],
        complexity=options["complexity"],
        project_name=project_data.get("name") or "Not specified",
        client_name=project_data.get("client_name") or "Not specified",
        description=project_data.get("description") or "Not provided",
    )
    return message, context


class AIService:
    """
    Proxy requests to the custom agent API.

    Args:
        settings: Agent configuration
        agent_client: Shared custom agent client
    """

    def __init__(self, settings: AgentSettings, agent_client: CustomAgentClient) -> None:
        self.settings = settings
        self.agent_client = agent_client

    async def run_custom_agent(self, agent_id: str, message: str, context: dict | None = None) -> dict:
        """
        Forward a message to a named agent.

        Raises:
            ValidationError: If agent_id or message is missing
            AgentError: If the agent call fails
        """
        if not agent_id:
            raise ValidationError("Agent ID is required", "agentId")
        if not message:
            raise ValidationError("Message is required", "message")
        data = await self.agent_client.execute(agent_id, message, context)
        return {"success": True, "source": "custom-agent", "agentId": agent_id, "data": data}

    async def generate_insights(
        self,
        project_id: str,
        project_data: dict[str, Any] | None = None,
        topic: str | None = None,
        category: str | None = None,
    ) -> dict:
        """
        Generate project insights.

        The insights agent's chat endpoint is tried first; on failure the
        general chat endpoint is used.

        Raises:
            ValidationError: If project_id is missing
            AgentError: If both endpoints fail
        """
        if not project_id:
            raise ValidationError("Project ID is required", "projectId")
        message, context = build_insights_request(project_id, project_data or {}, topic, category)
        result = {"success": True, "projectId": project_id, "topic": topic, "category": category}

        agent_id = self.settings.insights_agent_id
        if agent_id:
            try:
                data = await self.agent_client.chat(agent_id, message, context)
                logger.info("Insights generated via custom agent", extra={"project_id": project_id})
                return {**result, "source": "custom-agent", "agentId": agent_id, "data": data}
            except AgentError as e:
                logger.warning(
                    "Insights agent failed, falling back to chat endpoint",
                    extra={"project_id": project_id, "error": str(e)},
                )

        data = await self.agent_client.send_chat(message, context)
        logger.info("Insights generated via chat endpoint", extra={"project_id": project_id})
        return {**result, "source": "chat", "agentId": None, "data": data}

    async def generate_storyline(
        self,
        topic: str | None = None,
        industry: str | None = None,
        audience: str | None = None,
        objectives: str | None = None,
        sections_count: Any = 6,
        presentation_style: str = "consulting",
        complexity: str = "intermediate",
        project_id: str | None = None,
        deliverable_id: str | None = None,
        project_data: dict[str, Any] | None = None,
    ) -> dict:
        """
        Generate a storyline outline.

        The topic defaults to the project name. The storyline agent is asked
        for a JSON outline; any agent failure or an answer without sections
        yields the local outline and a warning.

        Returns:
            dict: {success, source, agentId, projectId, deliverableId, warnings, data}

        Raises:
            ValidationError: If neither a topic nor a project name is given
        """
        project_data = dict(project_data or {})
        topic = (topic or project_data.get("name") or "").strip()
        if not topic:
            raise ValidationError("Topic is required", "topic")
        options = {
            "topic": topic,
            "industry": industry,
            "audience": audience,
            "objectives": objectives,
            "sections_count": clamp_sections_count(sections_count),
            "presentation_style": presentation_style,
            "complexity": complexity,
            "project_id": project_id,
            "deliverable_id": deliverable_id,
        }
        local_outline = generate_storyline_outline(
            topic,
            industry=industry or project_data.get("industry"),
            audience=audience,
            objectives=objectives,
            sections_count=options["sections_count"],
            presentation_style=presentation_style,
            complexity=complexity,
        )
        result = {"success": True, "projectId": project_id, "deliverableId": deliverable_id}

        agent_id = self.settings.storyline_agent_id
        if not agent_id or not self.settings.api_key:
            warning = "Storyline agent is not configured; local outline used"
            logger.info("Storyline generated locally", extra={"topic": topic, "reason": warning})
            return {**result, "source": "local", "agentId": None, "warnings": [warning], "data": local_outline}

        message, context = build_storyline_request(options, project_data)
        try:
            agent_result = await self.agent_client.execute(agent_id, message, context)
        except AgentError as e:
            logger.warning("Storyline agent failed", extra={"agent_id": agent_id, "error": str(e)})
            return {
                **result,
                "source": "local",
                "agentId": agent_id,
                "warnings": [f"Storyline agent unavailable, local outline used: {e.message}"],
                "data": local_outline,
            }

        agent_data = extract_json_object(extract_agent_text(agent_result))
        outline = outline_from_agent(agent_data, local_outline) if agent_data is not None else None
        if outline is None:
            logger.warning(
                "Storyline agent reply had no sections",
                extra={"agent_id": agent_id, "reply": safe_log_value(agent_result)},
            )
            return {
                **result,
                "source": "local",
                "agentId": agent_id,
                "warnings": ["Storyline agent reply contained no sections; local outline used"],
                "data": local_outline,
            }

        logger.info(
            "Storyline generated via custom agent",
            extra={"agent_id": agent_id, "sections": outline["total_sections"]},
        )
        return {**result, "source": "custom-agent", "agentId": agent_id, "warnings": [], "data": outline}
