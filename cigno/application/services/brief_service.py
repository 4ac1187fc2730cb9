"""
Deliverable brief scoring service.

Scores a brief with the local heuristics and, when configured, the brief
scoring agent, then stores the evaluation on the deliverable.

Dependencies: cigno.boundary.agents, cigno.boundary.db.CRUD, cigno.core.brief_scoring
System role: Brief evaluation orchestration
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from cigno.application.services.deliverable_service import DeliverableService
from cigno.application.services.service_utils import require_record
from cigno.boundary.agents.custom_agent_client import CustomAgentClient
from cigno.boundary.agents.json_extraction import extract_agent_text, extract_json_object
from cigno.boundary.db.CRUD.deliverable_crud import deliverable_crud
from cigno.configs import AgentSettings
from cigno.core.brief_scoring import derive_brief_insights, merge_agent_evaluation
from cigno.core.exceptions import AgentError, ValidationError

logger = logging.getLogger(__name__)


class BriefScoringService:
    """
    Evaluate deliverable briefs.

    Args:
        db: Async SQLAlchemy session
        settings: Agent configuration
        agent_client: Shared custom agent client
    """

    def __init__(self, db: AsyncSession, settings: AgentSettings, agent_client: CustomAgentClient) -> None:
        self.db = db
        self.settings = settings
        self.agent_client = agent_client

    async def _agent_evaluation(
        self, deliverable_id: str, brief: str, context: dict[str, Any]
    ) -> tuple[dict | None, str | None]:
        agent_id = self.settings.brief_score_agent_id
        if not agent_id or not self.settings.api_key:
            return None, "Brief scoring agent is not configured; heuristic score used"
        try:
            agent_result = await self.agent_client.execute(agent_id, brief, context)
        except AgentError as e:
            logger.warning(
                "Brief scoring agent failed",
                extra={"deliverable_id": deliverable_id, "agent_id": agent_id, "error": str(e)},
            )
            return None, f"Brief scoring agent unavailable, heuristic score used: {e.message}"
        payload = extract_json_object(extract_agent_text(agent_result))
        if payload is None:
            return None, "Brief scoring agent reply contained no JSON object; heuristic score used"
        return payload, None

    async def score_brief(
        self,
        deliverable_id: Any,
        brief: str | None = None,
        deliverable_data: dict[str, Any] | None = None,
        project_data: dict[str, Any] | None = None,
    ) -> dict:
        """
        Score a brief and store the result on the deliverable.

        The stored brief is scored when none is sent. brief_quality,
        brief_strengths and brief_improvements are written, which also
        refreshes brief_last_evaluated_at.

        Returns:
            dict: {success, deliverableId, source, agentId, warnings, data, deliverable}

        Raises:
            InvalidIdentifierError: If deliverable_id is malformed
            NotFoundError: If the deliverable does not exist
            ValidationError: If there is no brief text to score
        """
        deliverable = await require_record(
            self.db, deliverable_crud, deliverable_id, "Deliverable", "deliverableId"
        )
        text = brief if isinstance(brief, str) and brief.strip() else deliverable.brief
        if not text or not text.strip():
            raise ValidationError("Current brief content is required", "currentBrief")

        heuristic = derive_brief_insights(text)
        context = {
            "deliverableId": deliverable.id,
            "requestType": "brief_evaluation",
            "deliverableData": deliverable_data or {},
            "projectData": project_data or {},
        }
        payload, warning = await self._agent_evaluation(deliverable.id, text, context)
        evaluation = merge_agent_evaluation(payload, heuristic)
        source = "local" if payload is None else "custom-agent"

        updated = await DeliverableService(self.db).update_deliverable(
            deliverable.id,
            {
                "brief_quality": evaluation["quality_score"],
                "brief_strengths": evaluation["strengths"],
                "brief_improvements": evaluation["improvements"],
            },
        )
        logger.info(
            "Brief scored",
            extra={
                "deliverable_id": deliverable.id,
                "source": source,
                "quality_score": evaluation["quality_score"],
            },
        )
        return {
            "success": True,
            "deliverableId": deliverable.id,
            "source": source,
            "agentId": self.settings.brief_score_agent_id if payload is not None else None,
            "warnings": [warning] if warning else [],
            "data": evaluation,
            "deliverable": updated,
        }
