"""
Integration tests for the CRM services: organisations, users, clients
and contacts.

System role: Verification of reference checks and persistence rules
"""

import pytest

from cigno.application.services import (
    ClientService,
    ContactService,
    OrganisationService,
    UserService,
)
from cigno.core.exceptions import ConflictError, InvalidIdentifierError, NotFoundError

MISSING_ID = "0" * 24


class TestOrganisationService:
    @pytest.mark.asyncio
    async def test_deactivate_should_hide_from_listing(self, test_async_db) -> None:
        service = OrganisationService(test_async_db)
        created = await service.create_organisation(name="Initech", industry="Technology", created_by=None)

        await service.deactivate_organisation(created["id"])

        assert await service.list_organisations() == []
        assert (await service.get_organisation(created["id"]))["is_active"] is False

    @pytest.mark.asyncio
    async def test_create_should_reject_malformed_admin(self, test_async_db) -> None:
        with pytest.raises(InvalidIdentifierError):
            await OrganisationService(test_async_db).create_organisation(
                name="Initech", industry="Technology", admin_id=True
            )


class TestUserService:
    @pytest.mark.asyncio
    async def test_create_should_lowercase_email(self, test_async_db, organisation) -> None:
        user = await UserService(test_async_db).create_user(
            first_name="Bo",
            last_name="Berg",
            email_address="Bo.Berg@Example.com",
            organisation_id=organisation.id,
        )

        assert user["email_address"] == "bo.berg@example.com"

    @pytest.mark.asyncio
    async def test_duplicate_email_should_conflict(self, test_async_db, user) -> None:
        with pytest.raises(ConflictError):
            await UserService(test_async_db).create_user(
                first_name="Ada",
                last_name="Other",
                email_address="ADA.MEIER@northwind.example",
                organisation_id=user.organisation_id,
            )

    @pytest.mark.asyncio
    async def test_unknown_organisation_should_be_not_found(self, test_async_db) -> None:
        with pytest.raises(NotFoundError):
            await UserService(test_async_db).create_user(
                first_name="Bo", last_name="Berg", email_address="bo@example.com", organisation_id=MISSING_ID
            )


class TestClientAndContactServices:
    @pytest.mark.asyncio
    async def test_client_detail_should_include_contacts(self, test_async_db, client_record) -> None:
        await ContactService(test_async_db).create_contact(
            name="Anna Keller", email_address="anna@acme.example", client_id=client_record.id
        )

        detail = await ClientService(test_async_db).get_client(client_record.id)

        assert [contact["name"] for contact in detail["contacts"]] == ["Anna Keller"]

    @pytest.mark.asyncio
    async def test_only_one_primary_contact_per_client(self, test_async_db, client_record) -> None:
        service = ContactService(test_async_db)
        first = await service.create_contact(
            name="First", email_address="first@acme.example", client_id=client_record.id, is_primary_contact=True
        )
        second = await service.create_contact(
            name="Second", email_address="second@acme.example", client_id=client_record.id, is_primary_contact=True
        )

        contacts = {contact["id"]: contact for contact in await service.list_contacts(client_record.id)}

        assert contacts[first["id"]]["is_primary_contact"] is False
        assert contacts[second["id"]]["is_primary_contact"] is True

    @pytest.mark.asyncio
    async def test_update_contact_should_echo_id(self, test_async_db, client_record) -> None:
        service = ContactService(test_async_db)
        contact = await service.create_contact(
            name="Anna", email_address="anna@acme.example", client_id=client_record.id
        )

        updated = await service.update_contact(contact["id"], {"job_title": "CFO"})

        assert updated["id"] == contact["id"]
        assert updated["job_title"] == "CFO"

    @pytest.mark.asyncio
    async def test_client_with_unknown_owner_should_be_not_found(self, test_async_db, organisation) -> None:
        with pytest.raises(NotFoundError):
            await ClientService(test_async_db).create_client(
                name="Umbrella",
                industry="Pharma",
                location="Basel",
                owner_id=MISSING_ID,
                organisation_id=organisation.id,
            )
