"""
Test suite for the AI proxy service.

System role: Verification of insight generation fallbacks
"""

from unittest.mock import AsyncMock

import pytest

from cigno.application.services.insights_service import AIService, build_insights_request
from cigno.configs import AgentSettings
from cigno.core.exceptions import AgentError, ValidationError


@pytest.fixture
def agent_settings() -> AgentSettings:
    return AgentSettings(api_key="key", insights_agent_id="insights-1")


def test_build_insights_request_should_fill_defaults() -> None:
    message, context = build_insights_request("p1", {"name": "Atlas"}, None, None)

    assert context["projectName"] == "Atlas"
    assert context["clientName"] == "Unknown Client"
    assert context["category"] == "Market Research"
    assert context["requestType"] == "insights_generation"
    assert 'project "Atlas"' in message


class TestGenerateInsights:
    @pytest.mark.asyncio
    async def test_should_use_insights_agent_first(self, agent_settings) -> None:
        client = AsyncMock()
        client.chat.return_value = {"insights": [1]}

        result = await AIService(agent_settings, client).generate_insights("p1", {}, "pricing", "Finance")

        assert result["source"] == "custom-agent"
        assert result["agentId"] == "insights-1"
        assert result["data"] == {"insights": [1]}
        client.send_chat.assert_not_called()

    @pytest.mark.asyncio
    async def test_should_fall_back_to_chat_endpoint(self, agent_settings) -> None:
        client = AsyncMock()
        client.chat.side_effect = AgentError("agent down")
        client.send_chat.return_value = {"reply": "ok"}

        result = await AIService(agent_settings, client).generate_insights("p1")

        assert result["source"] == "chat"
        assert result["data"] == {"reply": "ok"}

    @pytest.mark.asyncio
    async def test_both_failing_should_raise(self, agent_settings) -> None:
        client = AsyncMock()
        client.chat.side_effect = AgentError("agent down")
        client.send_chat.side_effect = AgentError("chat down")

        with pytest.raises(AgentError):
            await AIService(agent_settings, client).generate_insights("p1")

    @pytest.mark.asyncio
    async def test_missing_project_id_should_be_rejected(self, agent_settings) -> None:
        with pytest.raises(ValidationError):
            await AIService(agent_settings, AsyncMock()).generate_insights("")


class TestRunCustomAgent:
    @pytest.mark.asyncio
    async def test_should_wrap_agent_reply(self, agent_settings) -> None:
        client = AsyncMock()
        client.execute.return_value = {"response": "hi"}

        result = await AIService(agent_settings, client).run_custom_agent("a1", "hello", {"k": 1})

        assert result == {"success": True, "source": "custom-agent", "agentId": "a1", "data": {"response": "hi"}}
        client.execute.assert_awaited_once_with("a1", "hello", {"k": 1})

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("agent_id", "message"), [("", "hello"), ("a1", "")])
    async def test_missing_arguments_should_be_rejected(self, agent_settings, agent_id, message) -> None:
        with pytest.raises(ValidationError):
            await AIService(agent_settings, AsyncMock()).run_custom_agent(agent_id, message)


class TestGenerateStoryline:
    @pytest.fixture
    def storyline_settings(self) -> AgentSettings:
        return AgentSettings(api_key="key", storyline_agent_id="storyline-1")

    @pytest.mark.asyncio
    async def test_should_use_agent_sections(self, storyline_settings) -> None:
        client = AsyncMock()
        client.execute.return_value = {
            "response": 'Here you go: {"executiveSummary": "Agent view", '
            '"sections": [{"title": "Context", "keyPoints": ["Demand is flat"]}, {"title": "Plan"}]}'
        }

        result = await AIService(storyline_settings, client).generate_storyline(
            topic="Pricing", project_id="p1", sections_count=2
        )

        assert result["source"] == "custom-agent"
        assert result["agentId"] == "storyline-1"
        assert result["warnings"] == []
        assert result["data"]["executive_summary"] == "Agent view"
        assert [section["title"] for section in result["data"]["sections"]] == ["Context", "Plan"]
        agent_id, message, context = client.execute.await_args.args
        assert agent_id == "storyline-1"
        assert "Topic: Pricing" in message
        assert context["requestType"] == "storyline_generation"

    @pytest.mark.asyncio
    async def test_agent_failure_should_fall_back_to_local_outline(self, storyline_settings) -> None:
        client = AsyncMock()
        client.execute.side_effect = AgentError("agent down")

        result = await AIService(storyline_settings, client).generate_storyline(topic="Pricing")

        assert result["source"] == "local"
        assert "agent down" in result["warnings"][0]
        assert result["data"]["total_sections"] == 6

    @pytest.mark.asyncio
    async def test_reply_without_sections_should_fall_back(self, storyline_settings) -> None:
        client = AsyncMock()
        client.execute.return_value = {"response": "I cannot help with that"}

        result = await AIService(storyline_settings, client).generate_storyline(topic="Pricing")

        assert result["source"] == "local"
        assert "no sections" in result["warnings"][0]

    @pytest.mark.asyncio
    async def test_unconfigured_agent_should_stay_local(self) -> None:
        client = AsyncMock()

        result = await AIService(AgentSettings(api_key="key"), client).generate_storyline(
            project_data={"name": "Atlas", "industry": "technology"}
        )

        assert result["source"] == "local"
        assert result["data"]["sections"][1]["title"] == "Technical Overview"
        client.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_topic_should_be_rejected(self, storyline_settings) -> None:
        with pytest.raises(ValidationError):
            await AIService(storyline_settings, AsyncMock()).generate_storyline(topic="  ")
