"""Tests for client search, updates and deletion."""

from __future__ import annotations

import uuid

import pytest

from rentdesk.db.session import get_sessionmaker
from rentdesk.schemas.client import ClientCreate, ClientUpdate
from rentdesk.services import client_service
from rentdesk.services.exceptions import ClientNotFoundError

pytestmark = pytest.mark.asyncio


async def _add_clients(session) -> None:
    for index in range(12):
        await client_service.create_client(
            session,
            ClientCreate(
                name=f"Party Rentals {index:02d}",
                email=f"party{index}@example.com",
                document=f"12.345.678/0001-{index:02d}",
            ),
        )
    await client_service.create_client(
        session, ClientCreate(name="Zeta Stages", phone="+55 21 2222-1111")
    )


async def test_search_matches_any_contact_field(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        await _add_clients(session)
        by_name = await client_service.search_clients(session, "ACME")
        by_email = await client_service.search_clients(session, "party3@")
        by_phone = await client_service.search_clients(session, "2222-1111")
        by_document = await client_service.search_clients(session, "0001-07")
        nothing = await client_service.search_clients(session, "no such client")
    assert [c.name for c in by_name] == ["Acme Events"]
    assert [c.name for c in by_email] == ["Party Rentals 03"]
    assert [c.name for c in by_phone] == ["Zeta Stages"]
    assert [c.name for c in by_document] == ["Party Rentals 07"]
    assert nothing == []


async def test_search_is_capped(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        await _add_clients(session)
        party = await client_service.search_clients(session, "party")
        blank = await client_service.search_clients(session, "   ")
    assert len(party) == client_service.SEARCH_LIMIT
    assert party[0].name == "Party Rentals 00"
    assert len(blank) == client_service.SEARCH_LIMIT
    assert blank[0].name == "Acme Events"


async def test_update_client(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        client = await client_service.get_client(session, rental["client_id"])
        updated = await client_service.update_client(
            session, client, ClientUpdate(phone="+55 11 90000-0000", notes="VIP")
        )
        assert updated.phone == "+55 11 90000-0000"
        assert updated.name == "Acme Events"
        with pytest.raises(ValueError, match="name cannot be null"):
            await client_service.update_client(session, client, ClientUpdate(name=None))


async def test_delete_client(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        spare = await client_service.create_client(
            session, ClientCreate(name="Walk-in")
        )
        await client_service.delete_client(session, client_id=spare.id)
        assert await client_service.get_client(session, spare.id) is None

        with pytest.raises(ValueError, match="with reservations"):
            await client_service.delete_client(session, client_id=rental["client_id"])
        with pytest.raises(ClientNotFoundError):
            await client_service.delete_client(session, client_id=uuid.uuid4())


async def test_client_endpoints(rental, api_client) -> None:
    created = await api_client.post(
        "/api/v1/clients", json={"name": "Beta Sound", "email": "ops@beta.example"}
    )
    assert created.status_code == 201, created.text
    client_id = created.json()["id"]

    found = await api_client.get("/api/v1/clients/search", params={"q": "beta"})
    assert found.status_code == 200
    assert [c["id"] for c in found.json()] == [client_id]

    patched = await api_client.patch(
        f"/api/v1/clients/{client_id}", json={"city": "Campinas"}
    )
    assert patched.status_code == 200
    assert patched.json()["city"] == "Campinas"

    refused = await api_client.delete(f"/api/v1/clients/{rental['client_id']}")
    assert refused.status_code == 400

    deleted = await api_client.delete(f"/api/v1/clients/{client_id}")
    assert deleted.status_code == 204
    gone = await api_client.get(f"/api/v1/clients/{client_id}")
    assert gone.status_code == 404
