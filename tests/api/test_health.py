from unittest.mock import AsyncMock, MagicMock

from cigno.boundary.db import get_database_holder


def _holder(ping) -> MagicMock:
    holder = MagicMock()
    holder.ping = ping
    return holder


def test_health_check_should_report_connected_database(client):
    client.app.dependency_overrides[get_database_holder] = lambda: _holder(AsyncMock(return_value=None))

    response = client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "connected"
    assert data["service"] == "cigno-platform"
    assert data["uptime"] >= 0


def test_health_check_should_answer_503_when_database_fails(client):
    ping = AsyncMock(side_effect=RuntimeError("connection refused"))
    client.app.dependency_overrides[get_database_holder] = lambda: _holder(ping)

    response = client.get("/api/v1/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"
    assert "connection refused" in response.json()["error"]


def test_health_check_db(client):
    client.app.dependency_overrides[get_database_holder] = lambda: _holder(AsyncMock(return_value=None))

    response = client.get("/api/v1/health/db")

    assert response.status_code == 200
    assert response.json()["database"] == "connected"


def test_response_should_carry_correlation_id(client):
    client.app.dependency_overrides[get_database_holder] = lambda: _holder(AsyncMock(return_value=None))

    response = client.get("/api/v1/health", headers={"X-Correlation-ID": "abc-123"})

    assert response.headers["X-Correlation-ID"] == "abc-123"
