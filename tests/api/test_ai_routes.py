from unittest.mock import AsyncMock

from cigno.api.deps.dependencies import get_ai_service, get_brief_scoring_service
from cigno.application.services.insights_service import AIService
from cigno.configs.agents import AgentSettings
from cigno.core.exceptions import AgentRequestError, NotFoundError


def _ai_service(agent_client, insights_agent_id=None) -> AIService:
    settings = AgentSettings(api_key="test-key", insights_agent_id=insights_agent_id)
    return AIService(settings=settings, agent_client=agent_client)


def test_custom_agent_should_return_agent_data(client):
    agent_client = AsyncMock()
    agent_client.execute.return_value = {"response": "ok"}
    client.app.dependency_overrides[get_ai_service] = lambda: _ai_service(agent_client)

    response = client.post("/api/v1/ai/custom-agent", json={"agentId": "agent-7", "message": "hello"})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "source": "custom-agent",
        "agentId": "agent-7",
        "data": {"response": "ok"},
    }


def test_custom_agent_without_message_should_return_400(client):
    agent_client = AsyncMock()
    client.app.dependency_overrides[get_ai_service] = lambda: _ai_service(agent_client)

    response = client.post("/api/v1/ai/custom-agent", json={"agentId": "agent-7"})

    assert response.status_code == 400
    agent_client.execute.assert_not_called()


def test_custom_agent_failure_should_return_502(client):
    agent_client = AsyncMock()
    agent_client.execute.side_effect = AgentRequestError(500, "boom", "agent-7")
    client.app.dependency_overrides[get_ai_service] = lambda: _ai_service(agent_client)

    response = client.post("/api/v1/ai/custom-agent", json={"agentId": "agent-7", "message": "hello"})

    assert response.status_code == 502
    assert response.json()["details"]["status_code"] == 500


def test_generate_insights_should_return_502_when_every_endpoint_fails(client):
    agent_client = AsyncMock()
    agent_client.chat.side_effect = AgentRequestError(500, "agent down", "insights")
    agent_client.send_chat.side_effect = AgentRequestError(503, "chat down")
    client.app.dependency_overrides[get_ai_service] = lambda: _ai_service(agent_client, "insights")

    response = client.post("/api/v1/ai/generate-insights", json={"projectId": "p-1", "topic": "pricing"})

    assert response.status_code == 502
    assert response.json()["success"] is False


def test_generate_insights_should_use_chat_fallback(client):
    agent_client = AsyncMock()
    agent_client.chat.side_effect = AgentRequestError(500, "agent down", "insights")
    agent_client.send_chat.return_value = {"reply": "insight"}
    client.app.dependency_overrides[get_ai_service] = lambda: _ai_service(agent_client, "insights")

    response = client.post("/api/v1/ai/generate-insights", json={"projectId": "p-1"})

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "chat"
    assert body["agentId"] is None
    assert body["data"] == {"reply": "insight"}


def _storyline_service(agent_client) -> AIService:
    settings = AgentSettings(api_key="test-key", storyline_agent_id="storyline-1")
    return AIService(settings=settings, agent_client=agent_client)


def test_generate_storyline_should_return_agent_sections(client):
    agent_client = AsyncMock()
    agent_client.execute.return_value = {
        "response": '```json\n{"sections": [{"title": "Context", "description": "Where {we} stand"}]}\n```'
    }
    client.app.dependency_overrides[get_ai_service] = lambda: _storyline_service(agent_client)

    response = client.post("/api/v1/ai/generate-storyline", json={"topic": "Pricing", "projectId": "p-1"})

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "custom-agent"
    assert body["warnings"] == []
    assert body["data"]["sections"][0]["title"] == "Context"
    assert body["data"]["sections"][0]["description"] == "Where {we} stand"


def test_generate_storyline_agent_failure_should_fall_back_with_warning(client):
    agent_client = AsyncMock()
    agent_client.execute.side_effect = AgentRequestError(500, "boom", "storyline-1")
    client.app.dependency_overrides[get_ai_service] = lambda: _storyline_service(agent_client)

    response = client.post(
        "/api/v1/ai/generate-storyline",
        json={"topic": "Pricing", "industry": "healthcare", "sectionsCount": 3},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "local"
    assert len(body["warnings"]) == 1
    assert [section["title"] for section in body["data"]["sections"]] == [
        "Executive Summary",
        "Clinical Context",
        "Market Analysis",
    ]


def test_generate_storyline_without_topic_should_return_400(client):
    client.app.dependency_overrides[get_ai_service] = lambda: _storyline_service(AsyncMock())

    response = client.post("/api/v1/ai/generate-storyline", json={})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_score_brief_should_return_stored_evaluation(client, deliverable_payload):
    evaluation = {
        "quality_score": 6.5,
        "strengths": ["Clear objective"],
        "improvements": ["Add KPIs"],
        "suggestions": [],
        "summary": "Decent",
    }
    stored = {**deliverable_payload, "brief_quality": 6.5, "brief_strengths": ["Clear objective"]}
    brief_service = AsyncMock()
    brief_service.score_brief.return_value = {
        "success": True,
        "deliverableId": deliverable_payload["id"],
        "source": "local",
        "agentId": None,
        "warnings": ["Brief scoring agent is not configured; heuristic score used"],
        "data": evaluation,
        "deliverable": stored,
    }
    client.app.dependency_overrides[get_brief_scoring_service] = lambda: brief_service

    response = client.post(
        "/api/v1/ai/score-brief",
        json={"deliverableId": deliverable_payload["id"], "currentBrief": "Size the market"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["data"]["quality_score"] == 6.5
    assert body["deliverable"]["brief_quality"] == 6.5
    brief_service.score_brief.assert_awaited_once_with(deliverable_payload["id"], "Size the market", {}, {})


def test_score_brief_unknown_deliverable_should_return_404(client):
    brief_service = AsyncMock()
    brief_service.score_brief.side_effect = NotFoundError("Deliverable", "0" * 24)
    client.app.dependency_overrides[get_brief_scoring_service] = lambda: brief_service

    response = client.post("/api/v1/ai/score-brief", json={"deliverableId": "0" * 24, "currentBrief": "x"})

    assert response.status_code == 404
