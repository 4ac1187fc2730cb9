"""
Deliverable response mapping utilities.

Dependencies: cigno.models
System role: Deliverable response transformation
"""

from typing import Any

from cigno.models.common import SuccessResponse
from cigno.models.deliverable import DeliverableResponse


def map_deliverable_to_response(
    deliverable_data: dict[str, Any],
    message: str | None = None,
) -> SuccessResponse[DeliverableResponse]:
    """
    Wrap one deliverable dictionary in the success envelope.

    Args:
        deliverable_data: Deliverable fields as returned by the service
        message: Optional human-readable message

    Returns:
        SuccessResponse[DeliverableResponse]: Pydantic model for API response
    """
    return SuccessResponse(message=message, data=DeliverableResponse(**deliverable_data))


def map_deliverables_to_response(
    deliverables_data: list[dict[str, Any]],
) -> SuccessResponse[list[DeliverableResponse]]:
    """Wrap a list of deliverable dictionaries in the success envelope."""
    return SuccessResponse(data=[DeliverableResponse(**item) for item in deliverables_data])
