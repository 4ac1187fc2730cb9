"""
Organisation ORM model.

Top-level tenant grouping users, clients and projects.

Dependencies: sqlalchemy, cigno.boundary.db.base
System role: Organisation persistence
"""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cigno.boundary.db.base import AuditMixin, Base, ObjectIdMixin, TimestampMixin


class OrganisationModel(Base, ObjectIdMixin, TimestampMixin, AuditMixin):
    """
    Organisation ORM model.

    Attributes:
        name: Display name
        industry: One of the supported industry labels
        admin_id: Owning user id (no foreign key, users reference organisations)
        website: Public website
        logo: Logo URL
        locations: List of office locations
        tags: Free-form labels
        billing_info: Billing details (company_name, payment_terms, currency, ...)

    Relationships:
        users: Members of the organisation
    """

    __tablename__ = "organisations"

    name: Mapped[str] = mapped_column(String(200), nullable=False, doc="Organisation name")
    industry: Mapped[str] = mapped_column(String(50), nullable=False, doc="Industry label")
    admin_id: Mapped[str | None] = mapped_column(String(24), nullable=True, default=None)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True, default=None)
    logo: Mapped[str | None] = mapped_column(String(500), nullable=True, default=None)
    locations: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    billing_info: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        doc="company_name, billing_address, tax_id, vat_number, payment_terms, currency",
    )

    users: Mapped[list["UserModel"]] = relationship(
        "UserModel",
        back_populates="organisation",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<OrganisationModel(id={self.id}, name={self.name!r})>"
