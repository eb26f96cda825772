"""Tests for storage services."""

from __future__ import annotations

import pytest

from rentdesk.db.session import get_sessionmaker
from rentdesk.schemas.storage import StorageCreate, StorageUpdate
from rentdesk.services import storage_service
from rentdesk.services.storage_service import haversine_km

pytestmark = pytest.mark.asyncio


def _payload(name: str, latitude: float | None, longitude: float | None):
    return StorageCreate(
        name=name,
        address="Somewhere 1",
        city="Sao Paulo",
        state="SP",
        postal_code="01000-000",
        country="BR",
        latitude=latitude,
        longitude=longitude,
    )


async def test_haversine_known_distance() -> None:
    # Sao Paulo to Rio de Janeiro, roughly 360 km
    distance = haversine_km(-23.5505, -46.6333, -22.9068, -43.1729)
    assert 355 < distance < 365
    assert haversine_km(10.0, 10.0, 10.0, 10.0) == pytest.approx(0.0)


async def test_nearby_storages_sorted_and_filtered(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        await storage_service.create_storage(session, _payload("No Coords", None, None))
        await storage_service.create_storage(
            session, _payload("Far Away", -22.9068, -43.1729)
        )

        nearby = await storage_service.find_nearby_storages(
            session, latitude=-23.5505, longitude=-46.6333
        )
        names = [storage.name for storage, _ in nearby]
        distances = [distance for _, distance in nearby]

        wide = await storage_service.find_nearby_storages(
            session, latitude=-23.5505, longitude=-46.6333, max_km=500
        )

    assert names == ["Central Depot", "North Yard"]
    assert distances == sorted(distances)
    assert all(distance <= 10 for distance in distances)
    assert [storage.name for storage, _ in wide][-1] == "Far Away"


async def test_deactivated_storage_hidden_from_listing(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        storage = await storage_service.get_storage(
            session, storage_id=rental["north_storage_id"]
        )
        await storage_service.deactivate_storage(session, storage)

        active = await storage_service.list_storages(session)
        everything = await storage_service.list_storages(session, include_inactive=True)
        nearby = await storage_service.find_nearby_storages(
            session, latitude=-23.5505, longitude=-46.6333
        )

    assert [s.name for s in active] == ["Central Depot"]
    assert len(everything) == 2
    assert [s.name for s, _ in nearby] == ["Central Depot"]


async def test_update_storage(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        storage = await storage_service.get_storage(
            session, storage_id=rental["main_storage_id"]
        )
        updated = await storage_service.update_storage(
            session, storage, StorageUpdate(notes="Dock 3")
        )
    assert updated.notes == "Dock 3"
    assert updated.name == "Central Depot"


async def test_list_storage_units(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        units = await storage_service.list_storage_units(
            session, storage_id=rental["main_storage_id"]
        )
    assert [unit.unit_code for unit in units] == ["GEN-0001", "GEN-0002"]
