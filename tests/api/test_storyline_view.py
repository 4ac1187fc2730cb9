from unittest.mock import AsyncMock, MagicMock

import pytest

from cigno.api.deps.dependencies import get_storyline_service
from cigno.application.services.storyline_service import StorylineService
from cigno.boundary.db.CRUD.deliverable_crud import deliverable_crud
from cigno.boundary.db.CRUD.storyline_crud import storyline_crud

DELIVERABLE_ID = "65f1c2a4b9e77a0012345678"


def _record(data: dict) -> MagicMock:
    record = MagicMock()
    record.id = data["id"]
    record.to_dict.return_value = data
    return record


@pytest.fixture
def storyline_records():
    return [
        _record(
            {
                "id": "65f1c2a4b9e77a00123456a1",
                "title": "Entry Narrative",
                "deliverable_id": DELIVERABLE_ID,
                "status": "draft",
                "sections": [
                    {"id": "s1", "title": "Situation", "description": "Market <b>is</b> flat", "order": 0, "key_points": ["Flat demand"]},
                    {"id": "s2", "title": "Resolution", "description": "Enter via partners", "order": 1, "key_points": []},
                ],
            }
        )
    ]


@pytest.fixture
def patched_crud(monkeypatch, storyline_records):
    get_by_id = AsyncMock(return_value=_record({"id": DELIVERABLE_ID, "name": "Market Sizing", "brief": "Size it"}))
    get_all = AsyncMock(return_value=storyline_records)
    monkeypatch.setattr(deliverable_crud, "get_by_id", get_by_id)
    monkeypatch.setattr(storyline_crud, "get_all", get_all)
    return get_by_id, get_all


def test_storyline_view_should_render_every_section(client, patched_crud):
    client.app.dependency_overrides[get_storyline_service] = lambda: StorylineService(db=AsyncMock())

    response = client.get(f"/api/v1/deliverables/{DELIVERABLE_ID}/storyline")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    html = response.text
    assert "Storyline - Market Sizing" in html
    assert "Situation" in html
    assert "Resolution" in html
    assert "Enter via partners" in html
    assert "Market &lt;b&gt;is&lt;/b&gt; flat" in html


def test_storyline_view_should_query_by_requested_deliverable(client, patched_crud):
    _, get_all = patched_crud
    client.app.dependency_overrides[get_storyline_service] = lambda: StorylineService(db=AsyncMock())

    client.get(f"/api/v1/deliverables/{DELIVERABLE_ID}/storyline")

    assert get_all.await_args.kwargs["deliverable_id"] == DELIVERABLE_ID


def test_storyline_view_should_show_empty_state(client, patched_crud):
    _, get_all = patched_crud
    get_all.return_value = []
    client.app.dependency_overrides[get_storyline_service] = lambda: StorylineService(db=AsyncMock())

    response = client.get(f"/api/v1/deliverables/{DELIVERABLE_ID}/storyline")

    assert response.status_code == 200
    assert "No storyline has been created" in response.text


def test_storyline_view_with_malformed_id_should_return_400(client, patched_crud):
    get_by_id, _ = patched_crud
    client.app.dependency_overrides[get_storyline_service] = lambda: StorylineService(db=AsyncMock())

    response = client.get("/api/v1/deliverables/false/storyline")

    assert response.status_code == 400
    get_by_id.assert_not_called()
