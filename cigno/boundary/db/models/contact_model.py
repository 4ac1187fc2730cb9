"""
Contact ORM model.

Dependencies: sqlalchemy, cigno.boundary.db.base
System role: Client contact persistence
"""

from sqlalchemy import JSON, Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cigno.boundary.db.base import AuditMixin, Base, ObjectIdMixin, TimestampMixin


class ContactModel(Base, ObjectIdMixin, TimestampMixin, AuditMixin):
    """Person at a client. At most one contact per client is primary."""

    __tablename__ = "contacts"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email_address: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    client_id: Mapped[str] = mapped_column(
        String(24), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True
    )
    job_title: Mapped[str | None] = mapped_column(String(200), nullable=True, default=None)
    phone_number: Mapped[str | None] = mapped_column(String(50), nullable=True, default=None)
    department: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    is_primary_contact: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    client: Mapped["ClientModel"] = relationship("ClientModel", back_populates="contacts")

    def __repr__(self) -> str:
        return f"<ContactModel(id={self.id}, email={self.email_address!r})>"
