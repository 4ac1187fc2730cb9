"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, ObjectIdMixin, TimestampMixin, AuditMixin: Model building blocks
  - DatabaseHolder, get_async_db: Async connection management
  - *Model: Domain entities

Dependencies: sqlalchemy, cigno.configs
System role: Database adapter for organisations, users, clients, contacts,
projects, deliverables and storylines.
"""

from cigno.boundary.db.base import AuditMixin, Base, ObjectIdMixin, TimestampMixin
from cigno.boundary.db.connection import DatabaseHolder, get_async_db, get_database_holder
from cigno.boundary.db.models import (
    ClientModel,
    ContactModel,
    DeliverableModel,
    OrganisationModel,
    ProjectModel,
    StorylineModel,
    UserModel,
)

__all__ = [
    # Base classes
    "AuditMixin",
    "Base",
    "ObjectIdMixin",
    "TimestampMixin",
    # Connection
    "DatabaseHolder",
    "get_async_db",
    "get_database_holder",
    # Models
    "ClientModel",
    "ContactModel",
    "DeliverableModel",
    "OrganisationModel",
    "ProjectModel",
    "StorylineModel",
    "UserModel",
]
