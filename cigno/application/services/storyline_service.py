"""
Storyline service orchestrator.

Coordinates storyline lifecycle operations and assembles the data behind
the per-deliverable storyline view.

Dependencies: cigno.boundary.db.CRUD, cigno.core
System role: Storyline use case orchestration
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from cigno.application.services.service_utils import require_record
from cigno.boundary.db.CRUD.deliverable_crud import deliverable_crud
from cigno.boundary.db.CRUD.storyline_crud import storyline_crud
from cigno.boundary.db.models.storyline_model import StorylineModel
from cigno.core.exceptions import (
    ConflictError,
    LockedError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from cigno.core.identifiers import ensure_object_id, ensure_optional_object_id, generate_object_id

logger = logging.getLogger(__name__)


def order_sections(sections: list[dict]) -> list[dict]:
    """
    Give every section an id and a position, sorted by position.

    Sections without an explicit order keep their submitted position.
    """
    ordered = []
    for index, section in enumerate(sections):
        item = dict(section)
        item["id"] = item.get("id") or generate_object_id()
        if item.get("order") is None:
            item["order"] = index
        ordered.append(item)
    return sorted(ordered, key=lambda item: item["order"])


SECTION_FIELDS = ("title", "description", "status", "key_points", "content_blocks", "estimated_slides")
DEFAULT_CONTENT_BLOCKS = [{"type": "Content Block", "items": []}]
DEFAULT_ESTIMATED_SLIDES = 3


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _move_section(sections: list[dict], section: dict, position: int | None) -> list[dict]:
    """Insert section at position (appended when None) and renumber 0..n-1."""
    if position is None:
        sections.append(section)
    else:
        sections.insert(max(0, min(position, len(sections))), section)
    for index, item in enumerate(sections):
        item["order"] = index
    return sections


def _find_section(sections: list[dict], section_id: str) -> int:
    for index, section in enumerate(sections):
        if section.get("id") == section_id:
            return index
    raise NotFoundError("Section", section_id)


def _held_by_other(section: dict, user_id: str | None) -> bool:
    return bool(section.get("locked") and section.get("locked_by") and section["locked_by"] != user_id)


def _ensure_unlocked(section: dict, user_id: str | None) -> None:
    if _held_by_other(section, user_id):
        raise LockedError(
            "Section is locked by another user",
            {"section_id": section["id"], "locked_by": section["locked_by"], "locked_at": section.get("locked_at")},
        )


def _required_user(user_id: Any) -> str:
    if user_id is None or user_id == "":
        raise ValidationError("User ID is required", "userId")
    return ensure_object_id(user_id, "userId")


class StorylineService:
    """Storyline service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize storyline service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def list_storylines(
        self,
        deliverable_id: Any = None,
        status: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[dict], dict]:
        """
        List storylines, newest first, with pagination metadata.

        Args:
            deliverable_id: Optional deliverable filter
            status: Optional status filter
            page: 1-based page number
            limit: Page size

        Returns:
            tuple: (storylines, {page, limit, total, pages})

        Raises:
            InvalidIdentifierError: If deliverable_id is malformed
        """
        filters = {
            "deliverable_id": ensure_optional_object_id(deliverable_id, "deliverable"),
            "status": status,
        }
        total = await storyline_crud.count(self.db, **filters)
        storylines = await storyline_crud.get_all(
            self.db, limit=limit, offset=(page - 1) * limit, **filters
        )
        pagination = {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit) if limit else 0,
        }
        return [storyline.to_dict() for storyline in storylines], pagination

    async def get_storyline(self, storyline_id: Any) -> dict:
        """
        Get storyline by ID.

        Raises:
            InvalidIdentifierError: If storyline_id is malformed
            NotFoundError: If storyline not found
        """
        storyline = await require_record(self.db, storyline_crud, storyline_id, "Storyline")
        return storyline.to_dict()

    async def create_storyline(self, **fields: Any) -> dict:
        """
        Create the storyline of a deliverable.

        A deliverable holds at most one active storyline.

        Raises:
            InvalidIdentifierError: If deliverable_id is malformed
            NotFoundError: If the deliverable does not exist
            ConflictError: If the deliverable already has an active storyline
            ValidationError: If the title is blank
        """
        deliverable = await require_record(
            self.db, deliverable_crud, fields.pop("deliverable_id", None), "Deliverable", "deliverable"
        )
        existing = await storyline_crud.get_active_for_deliverable(self.db, deliverable.id)
        if existing is not None:
            raise ConflictError(
                "Storyline already exists for this deliverable",
                {"storyline_id": existing.id, "deliverable_id": deliverable.id},
            )

        title = (fields.get("title") or "").strip()
        if not title:
            raise ValidationError("Storyline title is required", "title")
        fields["title"] = title
        fields["sections"] = order_sections(fields.get("sections") or [])
        fields["created_by"] = ensure_optional_object_id(fields.get("created_by"), "created_by")
        fields["updated_by"] = fields["created_by"]

        storyline = await storyline_crud.create(self.db, deliverable_id=deliverable.id, **fields)
        logger.info(
            "Storyline created",
            extra={
                "storyline_id": storyline.id,
                "deliverable_id": deliverable.id,
                "section_count": len(storyline.sections),
            },
        )
        return storyline.to_dict()

    async def update_storyline(self, storyline_id: Any, fields: dict[str, Any]) -> dict:
        """
        Update a storyline. Sections, when sent, replace the stored list.

        Raises:
            InvalidIdentifierError: If storyline_id is malformed
            NotFoundError: If storyline not found
        """
        storyline = await require_record(self.db, storyline_crud, storyline_id, "Storyline")
        if fields.get("sections") is not None:
            fields["sections"] = order_sections(fields["sections"])
        if "updated_by" in fields:
            fields["updated_by"] = ensure_optional_object_id(fields["updated_by"], "updated_by")
        updated = await storyline_crud.update_by_id(self.db, storyline.id, **fields)
        logger.info("Storyline updated", extra={"storyline_id": storyline.id})
        return updated.to_dict()

    async def get_storyline_view(self, deliverable_id: Any) -> tuple[dict, list[dict]]:
        """
        Load a deliverable together with its storylines.

        Only storylines whose deliverable_id equals the requested id are
        returned.

        Returns:
            tuple: (deliverable, storylines)

        Raises:
            InvalidIdentifierError: If deliverable_id is malformed
            NotFoundError: If the deliverable does not exist
        """
        deliverable = await require_record(self.db, deliverable_crud, deliverable_id, "Deliverable")
        storylines = await storyline_crud.get_all(
            self.db, newest_first=True, deliverable_id=deliverable.id
        )
        return deliverable.to_dict(), [storyline.to_dict() for storyline in storylines]

    async def _load_sections(self, storyline_id: Any) -> tuple[StorylineModel, list[dict]]:
        storyline = await require_record(self.db, storyline_crud, storyline_id, "Storyline")
        sections = sorted(
            (dict(section) for section in storyline.sections or []),
            key=lambda section: section.get("order") or 0,
        )
        return storyline, sections

    async def _save_sections(self, storyline: StorylineModel, sections: list[dict], user_id: str | None) -> None:
        fields: dict[str, Any] = {"sections": sections}
        if user_id:
            fields["updated_by"] = user_id
        await storyline_crud.update_by_id(self.db, storyline.id, **fields)

    async def list_sections(self, storyline_id: Any) -> list[dict]:
        """
        Return the sections of a storyline in order.

        Raises:
            InvalidIdentifierError: If storyline_id is malformed
            NotFoundError: If storyline not found
        """
        _, sections = await self._load_sections(storyline_id)
        return sections

    async def add_section(self, storyline_id: Any, fields: dict[str, Any], user_id: Any = None) -> dict:
        """
        Add a section at fields["order"], or at the end when no order is sent.

        Sections are renumbered from 0 afterwards.

        Raises:
            InvalidIdentifierError: If storyline_id or user_id is malformed
            NotFoundError: If storyline not found
            ValidationError: If the title is blank
        """
        title = (fields.get("title") or "").strip()
        if not title:
            raise ValidationError("Section title is required", "title")
        user_id = ensure_optional_object_id(user_id, "userId")
        storyline, sections = await self._load_sections(storyline_id)

        now = _now()
        section = {
            "id": generate_object_id(),
            "title": title,
            "description": fields.get("description") or "",
            "status": fields.get("status") or "draft",
            "key_points": list(fields.get("key_points") or []),
            "content_blocks": fields.get("content_blocks") or [dict(block) for block in DEFAULT_CONTENT_BLOCKS],
            "estimated_slides": fields.get("estimated_slides") or DEFAULT_ESTIMATED_SLIDES,
            "locked": False,
            "locked_by": None,
            "locked_at": None,
            "created_at": now,
            "updated_at": now,
        }
        await self._save_sections(storyline, _move_section(sections, section, fields.get("order")), user_id)
        logger.info("Section added", extra={"storyline_id": storyline.id, "section_id": section["id"]})
        return section

    async def update_section(
        self, storyline_id: Any, section_id: str, fields: dict[str, Any], user_id: Any = None
    ) -> dict:
        """
        Update one section. Sending order moves it and renumbers the rest.

        Raises:
            InvalidIdentifierError: If storyline_id or user_id is malformed
            NotFoundError: If the storyline or the section does not exist
            LockedError: If another user holds the section lock
            ValidationError: If the title is set blank
        """
        user_id = ensure_optional_object_id(user_id, "userId")
        storyline, sections = await self._load_sections(storyline_id)
        index = _find_section(sections, section_id)
        section = sections[index]
        _ensure_unlocked(section, user_id)

        if "title" in fields:
            fields["title"] = (fields["title"] or "").strip()
            if not fields["title"]:
                raise ValidationError("Section title is required", "title")
        for key in SECTION_FIELDS:
            if key in fields:
                section[key] = fields[key]
        section["updated_at"] = _now()
        if fields.get("order") is not None:
            sections.pop(index)
            _move_section(sections, section, fields["order"])

        await self._save_sections(storyline, sections, user_id)
        logger.info(
            "Section updated",
            extra={"storyline_id": storyline.id, "section_id": section_id, "fields": sorted(fields)},
        )
        return section

    async def delete_section(self, storyline_id: Any, section_id: str, user_id: Any = None) -> None:
        """
        Remove a section and renumber the rest.

        Raises:
            InvalidIdentifierError: If storyline_id or user_id is malformed
            NotFoundError: If the storyline or the section does not exist
            LockedError: If another user holds the section lock
        """
        user_id = ensure_optional_object_id(user_id, "userId")
        storyline, sections = await self._load_sections(storyline_id)
        index = _find_section(sections, section_id)
        _ensure_unlocked(sections[index], user_id)
        sections.pop(index)
        for position, section in enumerate(sections):
            section["order"] = position
        await self._save_sections(storyline, sections, user_id)
        logger.info("Section deleted", extra={"storyline_id": storyline.id, "section_id": section_id})

    async def lock_section(self, storyline_id: Any, section_id: str, user_id: Any) -> dict:
        """
        Lock a section for a user. Locking again by the holder refreshes locked_at.

        Raises:
            ValidationError: If user_id is missing or malformed
            NotFoundError: If the storyline or the section does not exist
            LockedError: If another user already holds the lock
        """
        user_id = _required_user(user_id)
        storyline, sections = await self._load_sections(storyline_id)
        section = sections[_find_section(sections, section_id)]
        if _held_by_other(section, user_id):
            raise LockedError(
                "Section is already locked by another user",
                {"section_id": section_id, "locked_by": section["locked_by"], "locked_at": section.get("locked_at")},
            )
        now = _now()
        section.update(locked=True, locked_by=user_id, locked_at=now, updated_at=now)
        await self._save_sections(storyline, sections, user_id)
        logger.info("Section locked", extra={"storyline_id": storyline.id, "section_id": section_id})
        return {"section_id": section_id, "locked": True, "locked_by": user_id, "locked_at": now}

    async def unlock_section(self, storyline_id: Any, section_id: str, user_id: Any) -> dict:
        """
        Release a section lock.

        Raises:
            ValidationError: If user_id is missing or malformed
            NotFoundError: If the storyline or the section does not exist
            PermissionDeniedError: If another user holds the lock
        """
        user_id = _required_user(user_id)
        storyline, sections = await self._load_sections(storyline_id)
        section = sections[_find_section(sections, section_id)]
        if _held_by_other(section, user_id):
            raise PermissionDeniedError(
                "Section is locked by another user", {"section_id": section_id, "locked_by": section["locked_by"]}
            )
        section.update(locked=False, locked_by=None, locked_at=None, updated_at=_now())
        await self._save_sections(storyline, sections, user_id)
        logger.info("Section unlocked", extra={"storyline_id": storyline.id, "section_id": section_id})
        return {"section_id": section_id, "locked": False, "locked_by": None, "locked_at": None}
