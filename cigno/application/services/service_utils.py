"""
Helpers shared by the service layer.

Dependencies: cigno.boundary.db.CRUD, cigno.core
System role: Reference checks and value normalisation for services
"""

import math
import re
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from cigno.boundary.db.CRUD.base_crud import BaseCRUD
from cigno.core.exceptions import NotFoundError
from cigno.core.identifiers import ensure_object_id


async def require_record(
    db: AsyncSession,
    crud: BaseCRUD,
    record_id: Any,
    resource: str,
    field: str = "id",
):
    """
    Validate an identifier and load the record it points to.

    Args:
        db: Async database session
        crud: CRUD singleton for the resource
        record_id: Client-supplied identifier
        resource: Name used in the not-found message
        field: Name used in the validation message

    Returns:
        The model instance

    Raises:
        InvalidIdentifierError: If record_id is not a well-formed identifier
        NotFoundError: If no such record exists
    """
    valid_id = ensure_object_id(record_id, field)
    instance = await crud.get_by_id(db, valid_id)
    if instance is None:
        raise NotFoundError(resource, valid_id)
    return instance


def normalize_list(value: Any) -> list[str]:
    """
    Turn a list or a bullet/comma separated string into clean strings.

    Examples:
        ["a ", "", "b"] -> ["a", "b"]
        "- first\\n- second" -> ["first", "second"]
    """
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if str(item).strip()]
    if isinstance(value, str):
        parts = re.split(r"[\n;,•\-]+", value)
        return [p for p in (re.sub(r"^[-•\s]+", "", part).strip() for part in parts) if p]
    return [str(value)]


def normalize_quality(value: Any) -> float | None:
    """Round a quality score to one decimal; non-numeric values become None."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return round(number, 1)
