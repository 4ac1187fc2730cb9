"""
Project description analysis service.

Runs the local parser and, when configured, asks the custom agent for a
structured reading of the description. Agent failures never abort the
request: the local result is returned with a warning explaining why the
remote analysis is missing.

Dependencies: cigno.core.project_parser, cigno.boundary.agents
System role: Project analysis orchestration
"""

import logging
from typing import Any

from cigno.boundary.agents.custom_agent_client import CustomAgentClient
from cigno.boundary.agents.json_extraction import extract_agent_text, extract_json_object
from cigno.configs import AgentSettings
from cigno.core.exceptions import AgentError, ValidationError
from cigno.core.project_parser import parse_project_description
from cigno.observability.log_utils import safe_log_value

logger = logging.getLogger(__name__)

SOURCE_AGENT = "custom-agent"
SOURCE_LOCAL = "local"


class ProjectAnalysisService:
    """
    Turn a free-text project description into a structured project.

    Args:
        settings: Agent configuration
        agent_client: Client used for the remote analysis, None to stay local
    """

    def __init__(self, settings: AgentSettings, agent_client: CustomAgentClient | None = None) -> None:
        self.settings = settings
        self.agent_client = agent_client

    def _remote_unavailable_reason(self) -> str | None:
        if not self.settings.remote_analysis_enabled:
            return "Remote analysis is disabled; using local analysis only"
        if self.agent_client is None or not self.settings.api_key:
            return "AI_API_KEY is not configured; using local analysis only"
        if not self.settings.custom_agent_id:
            return "AI_CUSTOM_AGENT_ID is not configured; using local analysis only"
        return None

    async def analyze(self, description: str, project_data: dict[str, Any] | None = None) -> dict:
        """
        Analyse a project description.

        Args:
            description: Free-text description, must not be blank
            project_data: Values already known for the project

        Returns:
            dict: {success, message, source, analyzedProject, warnings, rawAnalysis}

        Raises:
            ValidationError: If description is blank
        """
        if not description or not description.strip():
            raise ValidationError("Project description is required", "description")
        project_data = dict(project_data or {})
        warnings: list[str] = []

        local_result = parse_project_description(description, project_data)
        reason = self._remote_unavailable_reason()
        if reason is not None:
            warnings.append(reason)
            logger.info("Project analysed locally", extra={"reason": reason})
            return self._result(local_result, SOURCE_LOCAL, warnings, None)

        try:
            agent_result = await self.agent_client.execute(
                self.settings.custom_agent_id, description, project_data
            )
        except AgentError as e:
            warnings.append(f"Custom agent unavailable, local analysis used: {e.message}")
            logger.warning(
                "Custom agent analysis failed",
                extra={"agent_id": self.settings.custom_agent_id, "error": str(e)},
            )
            return self._result(local_result, SOURCE_LOCAL, warnings, None)

        ai_data = extract_json_object(extract_agent_text(agent_result))
        if ai_data is None:
            warnings.append("Custom agent reply contained no JSON object; local analysis used")
            logger.warning(
                "Custom agent reply not parseable",
                extra={"reply": safe_log_value(agent_result)},
            )
            return self._result(local_result, SOURCE_LOCAL, warnings, agent_result)

        try:
            merged = parse_project_description(description, {**project_data, **ai_data})
        except Exception as e:
            warnings.append(f"Custom agent data could not be merged; local analysis used: {type(e).__name__}")
            logger.warning(
                "Merging custom agent analysis failed",
                extra={"agent_id": self.settings.custom_agent_id, "error_type": type(e).__name__},
            )
            return self._result(local_result, SOURCE_LOCAL, warnings, ai_data)

        logger.info(
            "Project analysed with custom agent",
            extra={"agent_id": self.settings.custom_agent_id, "deliverables": len(merged["deliverables"])},
        )
        return self._result(merged, SOURCE_AGENT, warnings, ai_data)

    @staticmethod
    def _result(project: dict, source: str, warnings: list[str], raw: Any) -> dict:
        message = (
            "Project analysis completed successfully"
            if not warnings
            else "Project analysis completed with local fallback"
        )
        return {
            "success": True,
            "message": message,
            "source": source,
            "analyzedProject": project,
            "warnings": warnings,
            "rawAnalysis": raw if raw is not None else project,
        }
