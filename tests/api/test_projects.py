from unittest.mock import AsyncMock

from cigno.api.deps.dependencies import get_analysis_service, get_project_service
from cigno.application.services.analysis_service import ProjectAnalysisService
from cigno.application.services.project_service import ProjectService
from cigno.configs.agents import AgentSettings
from cigno.core.exceptions import AgentRequestError

DESCRIPTION = (
    "The client Finews AG needs a dashboard for editorial analytics. "
    "Budget: CHF 12,000, milestone-based. Prepare a kickoff presentation for stakeholders."
)


def _analysis_service(agent_client) -> ProjectAnalysisService:
    settings = AgentSettings(api_key="test-key", custom_agent_id="agent-1", remote_analysis_enabled=True)
    return ProjectAnalysisService(settings=settings, agent_client=agent_client)


def test_analyze_should_fall_back_to_local_result_when_agent_fails(client):
    agent_client = AsyncMock()
    agent_client.execute.side_effect = AgentRequestError(500, "upstream down", "agent-1")
    client.app.dependency_overrides[get_analysis_service] = lambda: _analysis_service(agent_client)

    response = client.post("/api/v1/projects/analyze", json={"description": DESCRIPTION})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["source"] == "local"
    assert body["analyzedProject"] is not None
    assert body["analyzedProject"]["currency"] == "CHF"
    assert body["analyzedProject"]["budget_amount"] == 12000
    assert any("upstream down" in warning for warning in body["warnings"])


def test_analyze_should_merge_agent_json(client):
    agent_client = AsyncMock()
    agent_client.execute.return_value = {"response": 'Here you go: {"name": "Editorial Pulse", "priority": "high"}'}
    client.app.dependency_overrides[get_analysis_service] = lambda: _analysis_service(agent_client)

    response = client.post(
        "/api/v1/projects/analyze",
        json={"description": DESCRIPTION, "projectData": {"client": "Finews AG"}},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "custom-agent"
    assert body["analyzedProject"]["name"] == "Editorial Pulse"
    assert body["warnings"] == []


def test_analyze_blank_description_should_return_400(client):
    client.app.dependency_overrides[get_analysis_service] = lambda: _analysis_service(AsyncMock())

    response = client.post("/api/v1/projects/analyze", json={"description": "   "})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_get_project_with_boolean_like_path_should_return_400(client):
    db = AsyncMock()
    client.app.dependency_overrides[get_project_service] = lambda: ProjectService(db=db)

    response = client.get("/api/v1/projects/true")

    assert response.status_code == 400
    db.execute.assert_not_called()


def test_list_projects_should_reject_invalid_status(client):
    client.app.dependency_overrides[get_project_service] = lambda: AsyncMock()

    response = client.get("/api/v1/projects", params={"status": "sleeping"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert body["details"][0]["loc"] == ["query", "status"]


def test_analyze_deeply_nested_description_should_not_fail(client):
    settings = AgentSettings(api_key="test-key", custom_agent_id="agent-1", remote_analysis_enabled=False)
    client.app.dependency_overrides[get_analysis_service] = lambda: ProjectAnalysisService(
        settings=settings, agent_client=AsyncMock()
    )
    description = 'Build a dashboard. {"a": ' + "[" * 5000 + "]" * 5000 + "}"

    response = client.post("/api/v1/projects/analyze", json={"description": description})

    assert response.status_code == 200
    assert response.json()["analyzedProject"] is not None


def test_analyze_deeply_nested_agent_reply_should_fall_back(client):
    agent_client = AsyncMock()
    agent_client.execute.return_value = {"response": "[" * 5000}
    client.app.dependency_overrides[get_analysis_service] = lambda: _analysis_service(agent_client)

    response = client.post("/api/v1/projects/analyze", json={"description": DESCRIPTION})

    assert response.status_code == 200
    assert response.json()["source"] == "local"
    assert response.json()["warnings"]
