"""
Deliverable validation utilities.

Business rules not covered by the Pydantic models.

Dependencies: cigno.models.deliverable, cigno.core.exceptions
System role: Deliverable business logic validation
"""

from typing import Any

from cigno.core.exceptions import ValidationError
from cigno.models.deliverable import CreateDeliverableRequest


def validate_deliverable_creation(request: CreateDeliverableRequest) -> None:
    """
    Validate deliverable creation request with business rules.

    Raises:
        ValidationError: If the name is whitespace-only
    """
    if not request.name.strip():
        raise ValidationError("Deliverable name cannot be empty or whitespace-only", "name")


def validate_deliverable_update(fields: dict[str, Any]) -> None:
    """
    Validate the fields of a deliverable update.

    Args:
        fields: Fields explicitly sent by the client, identifier excluded

    Raises:
        ValidationError: If nothing is being updated or the name is blank
    """
    if not fields:
        raise ValidationError("At least one field must be provided for update")

    name = fields.get("name")
    if name is not None and not name.strip():
        raise ValidationError("Deliverable name cannot be empty or whitespace-only", "name")
