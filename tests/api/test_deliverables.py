from unittest.mock import AsyncMock

import pytest

from cigno.api.deps.dependencies import get_deliverable_service
from cigno.application.services.deliverable_service import DeliverableService

DELIVERABLE_ID = "65f1c2a4b9e77a0012345678"
PROJECT_ID = "65f1c2a4b9e77a0012345679"


@pytest.fixture
def mock_deliverable_service():
    return AsyncMock()


@pytest.mark.parametrize("bad_id", [True, False, 42, None, "not-an-object-id"])
def test_put_with_non_identifier_should_return_400(client, bad_id):
    db = AsyncMock()
    client.app.dependency_overrides[get_deliverable_service] = lambda: DeliverableService(db=db)

    response = client.put("/api/v1/deliverables", json={"id": bad_id, "name": "Renamed"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "Valid ObjectId required" in body["error"]
    db.execute.assert_not_called()


def test_put_with_valid_id_should_echo_id(client, mock_deliverable_service, deliverable_payload):
    mock_deliverable_service.update_deliverable.return_value = {**deliverable_payload, "name": "Renamed"}
    client.app.dependency_overrides[get_deliverable_service] = lambda: mock_deliverable_service

    response = client.put("/api/v1/deliverables", json={"_id": DELIVERABLE_ID, "name": "Renamed"})

    assert response.status_code == 200
    assert response.json()["data"]["id"] == DELIVERABLE_ID
    mock_deliverable_service.update_deliverable.assert_awaited_once_with(DELIVERABLE_ID, {"name": "Renamed"})


def test_put_without_fields_should_return_400(client, mock_deliverable_service):
    client.app.dependency_overrides[get_deliverable_service] = lambda: mock_deliverable_service

    response = client.put("/api/v1/deliverables", json={"id": DELIVERABLE_ID})

    assert response.status_code == 400
    mock_deliverable_service.update_deliverable.assert_not_called()


def test_list_should_pass_project_filter(client, mock_deliverable_service, deliverable_payload):
    mock_deliverable_service.list_deliverables.return_value = [deliverable_payload]
    client.app.dependency_overrides[get_deliverable_service] = lambda: mock_deliverable_service

    response = client.get("/api/v1/deliverables", params={"projectId": PROJECT_ID})

    assert response.status_code == 200
    assert len(response.json()["data"]) == 1
    mock_deliverable_service.list_deliverables.assert_awaited_once_with(
        project_id=PROJECT_ID, limit=100, offset=0
    )


def test_create_should_return_201(client, mock_deliverable_service, deliverable_payload):
    mock_deliverable_service.create_deliverable.return_value = deliverable_payload
    client.app.dependency_overrides[get_deliverable_service] = lambda: mock_deliverable_service

    response = client.post("/api/v1/deliverables", json={"name": "Market Sizing", "project": PROJECT_ID})

    assert response.status_code == 201
    assert response.json()["data"]["project_id"] == PROJECT_ID
    kwargs = mock_deliverable_service.create_deliverable.await_args.kwargs
    assert kwargs["project_id"] == PROJECT_ID


def test_get_unknown_should_return_404(client, mock_deliverable_service):
    from cigno.core.exceptions import NotFoundError

    mock_deliverable_service.get_deliverable.side_effect = NotFoundError("Deliverable", DELIVERABLE_ID)
    client.app.dependency_overrides[get_deliverable_service] = lambda: mock_deliverable_service

    response = client.get(f"/api/v1/deliverables/{DELIVERABLE_ID}")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": "Deliverable not found",
        "details": {"id": DELIVERABLE_ID},
    }


def test_patch_should_forward_brief_evaluation(client, mock_deliverable_service, deliverable_payload):
    mock_deliverable_service.update_deliverable.return_value = {**deliverable_payload, "brief_quality": 8.0}
    client.app.dependency_overrides[get_deliverable_service] = lambda: mock_deliverable_service

    response = client.patch(
        f"/api/v1/deliverables/{DELIVERABLE_ID}",
        json={"brief_quality": 8, "brief_strengths": ["clear"]},
    )

    assert response.status_code == 200
    mock_deliverable_service.update_deliverable.assert_awaited_once_with(
        DELIVERABLE_ID, {"brief_quality": 8, "brief_strengths": ["clear"]}
    )


def test_delete_by_query_should_return_id(client, mock_deliverable_service):
    mock_deliverable_service.delete_deliverable.return_value = DELIVERABLE_ID
    client.app.dependency_overrides[get_deliverable_service] = lambda: mock_deliverable_service

    response = client.delete("/api/v1/deliverables", params={"id": DELIVERABLE_ID})

    assert response.status_code == 200
    assert response.json()["id"] == DELIVERABLE_ID


def test_unexpected_error_should_return_500_with_message(client, mock_deliverable_service):
    mock_deliverable_service.get_deliverable.side_effect = RuntimeError("driver exploded")
    client.app.dependency_overrides[get_deliverable_service] = lambda: mock_deliverable_service

    response = client.get(f"/api/v1/deliverables/{DELIVERABLE_ID}")

    assert response.status_code == 500
    assert response.json()["details"]["message"] == "driver exploded"
