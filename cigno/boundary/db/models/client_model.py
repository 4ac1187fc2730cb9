"""
Client ORM model.

Dependencies: sqlalchemy, cigno.boundary.db.base
System role: Client persistence
"""

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cigno.boundary.db.base import AuditMixin, Base, ObjectIdMixin, TimestampMixin


class ClientModel(Base, ObjectIdMixin, TimestampMixin, AuditMixin):
    """
    Client company served by an organisation.

    Relationships:
        contacts: People at the client (deleted with the client)
    """

    __tablename__ = "clients"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    industry: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    owner_id: Mapped[str] = mapped_column(
        String(24), ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    organisation_id: Mapped[str] = mapped_column(
        String(24), ForeignKey("organisations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    website: Mapped[str | None] = mapped_column(String(500), nullable=True, default=None)
    description: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="medium")
    company_size: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    contacts: Mapped[list["ContactModel"]] = relationship(
        "ContactModel",
        back_populates="client",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ContactModel.created_at",
    )

    def __repr__(self) -> str:
        return f"<ClientModel(id={self.id}, name={self.name!r})>"
