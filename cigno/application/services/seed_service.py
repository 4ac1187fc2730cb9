"""
Demo data seeding.

Replaces every record with a small, linked demo dataset: one
organisation, its admin user, a client with a primary contact, a project,
two deliverables and a storyline.

Dependencies: cigno.boundary.db.CRUD
System role: Development and demo data setup
"""

import logging
from datetime import date, datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from cigno.application.services.storyline_service import order_sections
from cigno.boundary.db.CRUD import (
    client_crud,
    contact_crud,
    deliverable_crud,
    organisation_crud,
    project_crud,
    storyline_crud,
    user_crud,
)

logger = logging.getLogger(__name__)

# Children first so foreign keys never dangle mid-clear
CLEAR_ORDER = (
    storyline_crud,
    deliverable_crud,
    project_crud,
    contact_crud,
    client_crud,
    user_crud,
    organisation_crud,
)


class SeedService:
    """Seed the database with demo records."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def clear(self) -> dict[str, int]:
        """Delete every record. Returns deleted row counts per table."""
        removed = {}
        for crud in CLEAR_ORDER:
            removed[crud.model.__tablename__] = await crud.delete_all(self.db)
        logger.info("Database cleared", extra={"removed": removed})
        return removed

    async def seed(self) -> dict:
        """
        Replace all data with the demo dataset.

        Returns:
            dict: Ids of the created records keyed by resource
        """
        await self.clear()
        today = date.today()
        now = datetime.now(timezone.utc)

        organisation = await organisation_crud.create(
            self.db,
            name="Test Organization",
            industry="Technology",
            website="https://testorg.com",
            locations=["New York", "San Francisco"],
            tags=["startup", "tech", "innovation"],
            billing_info={
                "company_name": "Test Organization LLC",
                "payment_terms": "net_30",
                "currency": "USD",
                "billing_email": "invoices@testorg.com",
            },
        )
        admin = await user_crud.create(
            self.db,
            first_name="John",
            last_name="Doe",
            email_address="john.doe@testorg.com",
            job_title="CEO",
            location="New York, NY",
            phone_number="+1-555-123-4567",
            organisation_id=organisation.id,
            created_by=organisation.id,
        )
        await organisation_crud.update_by_id(
            self.db, organisation.id, admin_id=admin.id, created_by=admin.id, updated_by=admin.id
        )

        client = await client_crud.create(
            self.db,
            name="Acme Retail AG",
            industry="Retail",
            location="Zurich, Switzerland",
            owner_id=admin.id,
            organisation_id=organisation.id,
            website="https://acme-retail.example",
            status="active",
            priority="high",
            company_size="large",
            tags=["retail", "strategy"],
            created_by=admin.id,
        )
        contact = await contact_crud.create(
            self.db,
            name="Anna Keller",
            email_address="anna.keller@acme-retail.example",
            client_id=client.id,
            job_title="Head of Strategy",
            department="Strategy",
            is_primary_contact=True,
            created_by=admin.id,
        )
        project = await project_crud.create(
            self.db,
            name="Market Entry Strategy",
            description="Assess the Swiss e-commerce market and recommend an entry plan.",
            start_date=today,
            end_date=today + timedelta(days=60),
            status="Active",
            client_id=client.id,
            client_owner_id=contact.id,
            internal_owner_id=admin.id,
            organisation_id=organisation.id,
            budget={"amount": 45000, "currency": "CHF", "type": "Fixed", "allocated": 45000, "spent": 0},
            priority="high",
            project_type="strategy",
            tags=["market-entry", "e-commerce"],
            created_by=admin.id,
        )
        analysis = await deliverable_crud.create(
            self.db,
            name="Market Sizing Analysis",
            type="Analysis",
            format="PPTX",
            status="in_progress",
            priority="high",
            brief="Size the addressable Swiss e-commerce market by segment.",
            due_date=now + timedelta(days=14),
            estimated_hours=40,
            project_id=project.id,
            created_by=admin.id,
        )
        await deliverable_crud.create(
            self.db,
            name="Entry Recommendation",
            type="Recommendation",
            format="PDF",
            status="draft",
            priority="medium",
            brief="Recommend an entry mode with a phased roadmap.",
            due_date=now + timedelta(days=45),
            estimated_hours=24,
            project_id=project.id,
            created_by=admin.id,
        )
        storyline = await storyline_crud.create(
            self.db,
            deliverable_id=analysis.id,
            title="Swiss e-commerce opportunity",
            status="draft",
            executive_summary="The Swiss market rewards a focused, premium entry.",
            sections=order_sections(
                [
                    {
                        "title": "Market overview",
                        "description": "Size and growth of Swiss online retail.",
                        "status": "draft",
                        "key_points": ["CHF 14bn market", "8% annual growth"],
                    },
                    {
                        "title": "Competitive landscape",
                        "description": "Incumbents and their positioning.",
                        "status": "draft",
                        "key_points": ["Two dominant players", "Fragmented long tail"],
                    },
                ]
            ),
            created_by=admin.id,
        )

        created = {
            "organisation_id": organisation.id,
            "user_id": admin.id,
            "client_id": client.id,
            "contact_id": contact.id,
            "project_id": project.id,
            "deliverable_id": analysis.id,
            "storyline_id": storyline.id,
        }
        logger.info("Demo data seeded", extra=created)
        return created
