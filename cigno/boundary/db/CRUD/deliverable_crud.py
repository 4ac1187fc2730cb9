"""
Deliverable CRUD operations.

Dependencies: sqlalchemy, cigno.boundary.db.models
System role: Deliverable persistence operations
"""

from cigno.boundary.db.CRUD.base_crud import BaseCRUD
from cigno.boundary.db.models.deliverable_model import DeliverableModel


class DeliverableCRUD(BaseCRUD[DeliverableModel]):
    """CRUD operations for DeliverableModel."""

    def __init__(self) -> None:
        """Initialize DeliverableCRUD with DeliverableModel."""
        super().__init__(DeliverableModel)


deliverable_crud = DeliverableCRUD()
