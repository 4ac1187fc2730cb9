"""
Helpers shared by the routers.

Dependencies: pydantic
System role: Request-to-service argument shaping
"""

from typing import Any, Iterable

from pydantic import BaseModel


def changed_fields(
    request: BaseModel,
    nullable: Iterable[str] = (),
    exclude: Iterable[str] = (),
) -> dict[str, Any]:
    """
    Collect the fields a client actually sent in an update body.

    Explicit nulls are dropped unless the field is listed in nullable.

    Args:
        request: Parsed update request
        nullable: Fields that may be cleared with null
        exclude: Fields that are not columns, e.g. a body identifier

    Returns:
        dict: Column values to write
    """
    allowed_null = set(nullable)
    sent = request.model_dump(exclude_unset=True, exclude=set(exclude))
    return {key: value for key, value in sent.items() if value is not None or key in allowed_null}
