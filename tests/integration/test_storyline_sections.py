"""
Integration tests for storyline section editing and locking.

System role: Verification of section workflows against SQLite
"""

import pytest

from cigno.application.services import StorylineService
from cigno.core.exceptions import (
    InvalidIdentifierError,
    LockedError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from cigno.core.identifiers import generate_object_id

MISSING_ID = "0" * 24


@pytest.fixture
async def storyline(test_async_db, deliverable) -> dict:
    return await StorylineService(test_async_db).create_storyline(
        deliverable_id=deliverable.id,
        title="Market entry story",
        sections=[{"title": "Situation"}, {"title": "Resolution"}],
    )


def _titles(sections: list[dict]) -> list[str]:
    return [section["title"] for section in sections]


class TestSectionEditing:
    @pytest.mark.asyncio
    async def test_add_should_insert_at_order_and_renumber(self, test_async_db, storyline) -> None:
        service = StorylineService(test_async_db)

        section = await service.add_section(storyline["id"], {"title": " Complication ", "order": 1})
        sections = await service.list_sections(storyline["id"])

        assert section["title"] == "Complication"
        assert section["content_blocks"] == [{"type": "Content Block", "items": []}]
        assert section["locked"] is False
        assert _titles(sections) == ["Situation", "Complication", "Resolution"]
        assert [item["order"] for item in sections] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_add_without_order_should_append(self, test_async_db, storyline) -> None:
        service = StorylineService(test_async_db)

        await service.add_section(storyline["id"], {"title": "Next steps"})

        assert _titles(await service.list_sections(storyline["id"]))[-1] == "Next steps"

    @pytest.mark.asyncio
    async def test_add_blank_title_should_be_rejected(self, test_async_db, storyline) -> None:
        with pytest.raises(ValidationError):
            await StorylineService(test_async_db).add_section(storyline["id"], {"title": "  "})

    @pytest.mark.asyncio
    async def test_update_order_should_move_section(self, test_async_db, storyline) -> None:
        service = StorylineService(test_async_db)
        resolution_id = storyline["sections"][1]["id"]

        updated = await service.update_section(
            storyline["id"], resolution_id, {"order": 0, "description": "Enter via partners"}
        )
        sections = await service.list_sections(storyline["id"])

        assert updated["description"] == "Enter via partners"
        assert _titles(sections) == ["Resolution", "Situation"]
        assert [item["order"] for item in sections] == [0, 1]

    @pytest.mark.asyncio
    async def test_delete_should_renumber_remaining(self, test_async_db, storyline) -> None:
        service = StorylineService(test_async_db)

        await service.delete_section(storyline["id"], storyline["sections"][0]["id"])
        sections = await service.list_sections(storyline["id"])

        assert _titles(sections) == ["Resolution"]
        assert sections[0]["order"] == 0

    @pytest.mark.asyncio
    async def test_unknown_section_should_be_not_found(self, test_async_db, storyline) -> None:
        with pytest.raises(NotFoundError):
            await StorylineService(test_async_db).update_section(storyline["id"], "missing", {"title": "X"})

    @pytest.mark.asyncio
    async def test_unknown_storyline_should_be_not_found(self, test_async_db) -> None:
        with pytest.raises(NotFoundError):
            await StorylineService(test_async_db).list_sections(MISSING_ID)

    @pytest.mark.asyncio
    async def test_malformed_storyline_id_should_be_rejected(self, test_async_db) -> None:
        with pytest.raises(InvalidIdentifierError):
            await StorylineService(test_async_db).add_section("not-an-id", {"title": "X"})


class TestSectionLocking:
    @pytest.mark.asyncio
    async def test_lock_should_block_other_users(self, test_async_db, storyline, user) -> None:
        service = StorylineService(test_async_db)
        section_id = storyline["sections"][0]["id"]
        other_user = generate_object_id()

        lock = await service.lock_section(storyline["id"], section_id, user.id)

        assert lock["locked"] is True
        assert lock["locked_by"] == user.id
        with pytest.raises(LockedError):
            await service.update_section(storyline["id"], section_id, {"title": "Hijacked"}, other_user)
        with pytest.raises(LockedError):
            await service.delete_section(storyline["id"], section_id, other_user)
        with pytest.raises(LockedError):
            await service.lock_section(storyline["id"], section_id, other_user)
        with pytest.raises(PermissionDeniedError):
            await service.unlock_section(storyline["id"], section_id, other_user)

    @pytest.mark.asyncio
    async def test_holder_should_edit_and_release(self, test_async_db, storyline, user) -> None:
        service = StorylineService(test_async_db)
        section_id = storyline["sections"][0]["id"]
        await service.lock_section(storyline["id"], section_id, user.id)

        updated = await service.update_section(storyline["id"], section_id, {"title": "Context"}, user.id)
        released = await service.unlock_section(storyline["id"], section_id, user.id)
        stored = await service.get_storyline(storyline["id"])

        assert updated["title"] == "Context"
        assert released == {"section_id": section_id, "locked": False, "locked_by": None, "locked_at": None}
        assert stored["sections"][0]["locked"] is False
        assert stored["updated_by"] == user.id

    @pytest.mark.asyncio
    async def test_update_without_user_should_respect_lock(self, test_async_db, storyline, user) -> None:
        service = StorylineService(test_async_db)
        section_id = storyline["sections"][0]["id"]
        await service.lock_section(storyline["id"], section_id, user.id)

        with pytest.raises(LockedError):
            await service.update_section(storyline["id"], section_id, {"title": "Anonymous"})

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_id", [None, ""])
    async def test_lock_without_user_should_be_rejected(self, test_async_db, storyline, user_id) -> None:
        with pytest.raises(ValidationError):
            await StorylineService(test_async_db).lock_section(
                storyline["id"], storyline["sections"][0]["id"], user_id
            )

    @pytest.mark.asyncio
    async def test_malformed_user_should_be_rejected(self, test_async_db, storyline) -> None:
        with pytest.raises(InvalidIdentifierError):
            await StorylineService(test_async_db).unlock_section(
                storyline["id"], storyline["sections"][0]["id"], {"$ne": None}
            )
