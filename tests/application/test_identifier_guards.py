"""
Services must reject malformed identifiers before touching the database.

System role: Verification of the identifier guard on every id-taking operation
"""

import pytest

from cigno.application.services import (
    ClientService,
    ContactService,
    DeliverableService,
    ProjectService,
    StorylineService,
)
from cigno.core.exceptions import InvalidIdentifierError

BAD_IDS = [True, False, 123, None, {"$ne": None}, "not-an-id"]


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_id", BAD_IDS)
async def test_deliverable_update_should_reject_before_querying(mock_db_session, bad_id) -> None:
    with pytest.raises(InvalidIdentifierError):
        await DeliverableService(mock_db_session).update_deliverable(bad_id, {"name": "x"})

    mock_db_session.execute.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_id", BAD_IDS)
async def test_contact_update_should_reject_before_querying(mock_db_session, bad_id) -> None:
    with pytest.raises(InvalidIdentifierError):
        await ContactService(mock_db_session).update_contact(bad_id, {"name": "x"})

    mock_db_session.execute.assert_not_called()


@pytest.mark.asyncio
async def test_reference_fields_are_guarded_too(mock_db_session) -> None:
    with pytest.raises(InvalidIdentifierError) as exc_info:
        await DeliverableService(mock_db_session).create_deliverable(name="x", project_id=True)

    assert exc_info.value.field == "project_id"
    mock_db_session.execute.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "call",
    [
        lambda db: ProjectService(db).get_project(True),
        lambda db: ProjectService(db).list_project_deliverables(False),
        lambda db: ClientService(db).get_client(1),
        lambda db: StorylineService(db).get_storyline_view(True),
        lambda db: DeliverableService(db).list_deliverables(project_id=True),
    ],
)
async def test_read_operations_are_guarded(mock_db_session, call) -> None:
    with pytest.raises(InvalidIdentifierError):
        await call(mock_db_session)

    mock_db_session.execute.assert_not_called()
