"""
Organisation CRUD operations.

Dependencies: sqlalchemy, cigno.boundary.db.models
System role: Organisation persistence operations
"""

from cigno.boundary.db.CRUD.base_crud import BaseCRUD
from cigno.boundary.db.models.organisation_model import OrganisationModel


class OrganisationCRUD(BaseCRUD[OrganisationModel]):
    """CRUD operations for OrganisationModel."""

    def __init__(self) -> None:
        """Initialize OrganisationCRUD with OrganisationModel."""
        super().__init__(OrganisationModel)


organisation_crud = OrganisationCRUD()
