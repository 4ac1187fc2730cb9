from unittest.mock import AsyncMock

from cigno.api.deps.dependencies import get_storyline_service
from cigno.core.exceptions import LockedError, NotFoundError, PermissionDeniedError, ValidationError

STORYLINE_ID = "65f1c2a4b9e77a0012345680"
USER_ID = "65f1c2a4b9e77a0012345681"
SECTIONS_URL = f"/api/v1/storylines/{STORYLINE_ID}/sections"


def _override(client) -> AsyncMock:
    service = AsyncMock()
    client.app.dependency_overrides[get_storyline_service] = lambda: service
    return service


def test_add_section_should_return_201_and_split_user(client):
    service = _override(client)
    service.add_section.return_value = {"id": "s1", "title": "Context", "order": 0}

    response = client.post(SECTIONS_URL, json={"title": "Context", "keyPoints": ["a"], "userId": USER_ID})

    assert response.status_code == 201
    assert response.json()["data"]["id"] == "s1"
    storyline_id, fields, user_id = service.add_section.await_args.args
    assert storyline_id == STORYLINE_ID
    assert fields["key_points"] == ["a"]
    assert "user_id" not in fields
    assert user_id == USER_ID


def test_add_section_blank_title_should_return_400(client):
    service = _override(client)
    service.add_section.side_effect = ValidationError("Section title is required", "title")

    response = client.post(SECTIONS_URL, json={})

    assert response.status_code == 400


def test_update_section_should_forward_only_sent_fields(client):
    service = _override(client)
    service.update_section.return_value = {"id": "s1", "title": "Renamed", "order": 0}

    response = client.put(f"{SECTIONS_URL}/s1", json={"title": "Renamed", "userId": USER_ID})

    assert response.status_code == 200
    service.update_section.assert_awaited_once_with(STORYLINE_ID, "s1", {"title": "Renamed"}, USER_ID)


def test_update_locked_section_should_return_423(client):
    service = _override(client)
    service.update_section.side_effect = LockedError("Section is locked by another user", {"section_id": "s1"})

    response = client.put(f"{SECTIONS_URL}/s1", json={"title": "Renamed"})

    assert response.status_code == 423
    assert response.json()["error"] == "Section is locked by another user"


def test_delete_section_should_pass_user_from_query(client):
    service = _override(client)
    service.delete_section.return_value = None

    response = client.delete(f"{SECTIONS_URL}/s1", params={"userId": USER_ID})

    assert response.status_code == 200
    assert response.json()["id"] == "s1"
    service.delete_section.assert_awaited_once_with(STORYLINE_ID, "s1", USER_ID)


def test_missing_section_should_return_404(client):
    service = _override(client)
    service.delete_section.side_effect = NotFoundError("Section", "s9")

    response = client.delete(f"{SECTIONS_URL}/s9")

    assert response.status_code == 404


def test_lock_section_should_return_lock_state(client):
    service = _override(client)
    service.lock_section.return_value = {
        "section_id": "s1",
        "locked": True,
        "locked_by": USER_ID,
        "locked_at": "2026-01-01T00:00:00+00:00",
    }

    response = client.post(f"{SECTIONS_URL}/s1/lock", json={"userId": USER_ID})

    assert response.status_code == 200
    assert response.json()["data"]["locked_by"] == USER_ID


def test_lock_held_by_other_user_should_return_423(client):
    service = _override(client)
    service.lock_section.side_effect = LockedError("Section is already locked by another user")

    response = client.post(f"{SECTIONS_URL}/s1/lock", json={"userId": USER_ID})

    assert response.status_code == 423


def test_unlock_by_other_user_should_return_403(client):
    service = _override(client)
    service.unlock_section.side_effect = PermissionDeniedError("Section is locked by another user")

    response = client.delete(f"{SECTIONS_URL}/s1/lock", params={"userId": USER_ID})

    assert response.status_code == 403
    service.unlock_section.assert_awaited_once_with(STORYLINE_ID, "s1", USER_ID)


def test_list_sections_should_wrap_sections(client):
    service = _override(client)
    service.list_sections.return_value = [{"id": "s1", "title": "Context", "order": 0}]

    response = client.get(SECTIONS_URL)

    assert response.status_code == 200
    assert response.json()["data"] == [{"id": "s1", "title": "Context", "order": 0}]
