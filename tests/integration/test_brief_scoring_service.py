"""
Integration tests for brief scoring.

System role: Verification that brief evaluations are stored on the deliverable
"""

from unittest.mock import AsyncMock

import pytest

from cigno.application.services import BriefScoringService
from cigno.configs import AgentSettings
from cigno.core.exceptions import AgentRequestError, InvalidIdentifierError, NotFoundError, ValidationError

MISSING_ID = "0" * 24
BRIEF = "Objective: size the Swiss wealth market for the executive board and propose a roadmap."


@pytest.fixture
def score_settings() -> AgentSettings:
    return AgentSettings(api_key="key", brief_score_agent_id="score-1")


class TestScoreBrief:
    @pytest.mark.asyncio
    async def test_agent_evaluation_should_be_stored(self, test_async_db, deliverable, score_settings) -> None:
        agent = AsyncMock()
        agent.execute.return_value = {
            "response": '{"qualityScore": 78, "strengths": ["Clear objective"], "improvements": "Add KPIs"}'
        }

        result = await BriefScoringService(test_async_db, score_settings, agent).score_brief(
            deliverable.id, BRIEF, {"name": "Market Sizing"}, {"name": "Market Entry"}
        )

        assert result["source"] == "custom-agent"
        assert result["agentId"] == "score-1"
        assert result["data"]["quality_score"] == 7.8
        assert result["deliverable"]["brief_quality"] == 7.8
        assert result["deliverable"]["brief_strengths"][0] == "Clear objective"
        assert result["deliverable"]["brief_improvements"][0] == "Add KPIs"
        assert result["deliverable"]["brief_last_evaluated_at"] is not None
        agent_id, message, context = agent.execute.await_args.args
        assert (agent_id, message) == ("score-1", BRIEF)
        assert context["requestType"] == "brief_evaluation"

    @pytest.mark.asyncio
    async def test_agent_failure_should_store_heuristic_score(
        self, test_async_db, deliverable, score_settings
    ) -> None:
        agent = AsyncMock()
        agent.execute.side_effect = AgentRequestError(500, "boom", "score-1")

        result = await BriefScoringService(test_async_db, score_settings, agent).score_brief(deliverable.id, BRIEF)

        assert result["source"] == "local"
        assert result["agentId"] is None
        assert "heuristic score used" in result["warnings"][0]
        assert result["deliverable"]["brief_quality"] == result["data"]["quality_score"]

    @pytest.mark.asyncio
    async def test_stored_brief_should_be_scored_when_none_sent(self, test_async_db, deliverable) -> None:
        agent = AsyncMock()

        result = await BriefScoringService(test_async_db, AgentSettings(), agent).score_brief(deliverable.id)

        assert result["source"] == "local"
        assert result["deliverable"]["brief_improvements"]
        agent.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_brief_text_should_be_rejected(self, test_async_db, deliverable) -> None:
        deliverable.brief = None
        await test_async_db.flush()

        with pytest.raises(ValidationError):
            await BriefScoringService(test_async_db, AgentSettings(), AsyncMock()).score_brief(deliverable.id, "  ")

    @pytest.mark.asyncio
    async def test_unknown_deliverable_should_be_not_found(self, test_async_db) -> None:
        with pytest.raises(NotFoundError):
            await BriefScoringService(test_async_db, AgentSettings(), AsyncMock()).score_brief(MISSING_ID, BRIEF)

    @pytest.mark.asyncio
    async def test_malformed_deliverable_id_should_be_rejected(self, mock_db_session) -> None:
        with pytest.raises(InvalidIdentifierError):
            await BriefScoringService(mock_db_session, AgentSettings(), AsyncMock()).score_brief(
                {"$gt": ""}, BRIEF
            )
        mock_db_session.execute.assert_not_called()
