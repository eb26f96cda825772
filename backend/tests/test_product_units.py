"""Tests for product unit services."""

from __future__ import annotations

import uuid
from datetime import date

import pytest

from rentdesk.db.session import get_sessionmaker
from rentdesk.models import ProductUnitStatus, UnitRentalStatus
from rentdesk.schemas.product_unit import (
    ProductUnitCreate,
    ProductUnitUpdate,
    UnitRentalHistoryCreate,
)
from rentdesk.services import delivery_service, product_unit_service
from rentdesk.services.exceptions import (
    ProductNotFoundError,
    ProductUnitNotFoundError,
    ReservationNotFoundError,
    StorageNotFoundError,
)

pytestmark = pytest.mark.asyncio


async def test_create_unit_generates_barcode(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        unit = await product_unit_service.create_product_unit(
            session,
            product_id=rental["product_id"],
            payload=ProductUnitCreate(storage_id=rental["north_storage_id"]),
        )
    assert unit.unit_code.startswith("GEN-")
    assert len(unit.unit_code) == len("GEN-") + 9
    assert unit.status == ProductUnitStatus.AVAILABLE
    assert unit.storage is not None
    assert unit.storage.name == "North Yard"


async def test_create_unit_keeps_explicit_code(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        unit = await product_unit_service.create_product_unit(
            session,
            product_id=rental["product_id"],
            payload=ProductUnitCreate(unit_code="GEN-CUSTOM", serial_number="SN-9"),
        )
        found = await product_unit_service.get_unit_by_code(
            session, unit_code="GEN-CUSTOM"
        )
    assert found is not None
    assert found.id == unit.id
    assert found.product.code == "GEN"


async def test_create_unit_validates_references(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        with pytest.raises(ProductNotFoundError):
            await product_unit_service.create_product_unit(
                session, product_id=uuid.uuid4(), payload=ProductUnitCreate()
            )
        with pytest.raises(StorageNotFoundError):
            await product_unit_service.create_product_unit(
                session,
                product_id=rental["product_id"],
                payload=ProductUnitCreate(storage_id=uuid.uuid4()),
            )


async def test_unit_stats(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        unit = await product_unit_service.get_product_unit(
            session, unit_id=rental["unit_b_id"]
        )
        await product_unit_service.update_product_unit(
            session, unit, ProductUnitUpdate(is_active=False)
        )
        stats = await product_unit_service.get_product_unit_stats(
            session, product_id=rental["product_id"]
        )
    assert stats.total == 3
    assert stats.available == 1
    assert stats.maintenance == 1
    assert stats.rented == 0
    assert stats.inactive == 1


async def test_update_unit_storage(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        moved = await product_unit_service.update_unit_storage(
            session, unit_id=rental["unit_a_id"], storage_id=rental["north_storage_id"]
        )
        assert moved.storage_id == rental["north_storage_id"]

        detached = await product_unit_service.update_unit_storage(
            session, unit_id=rental["unit_a_id"], storage_id=None
        )
        assert detached.storage_id is None
        assert detached.storage is None


async def test_unknown_barcode(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        assert (
            await product_unit_service.get_unit_by_code(session, unit_code="NOPE")
            is None
        )


async def test_rental_history_newest_first(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        rented = await product_unit_service.add_unit_rental_history(
            session,
            unit_id=rental["unit_a_id"],
            payload=UnitRentalHistoryCreate(
                reservation_id=rental["reservation_id"],
                client_name="Acme Events",
                start_date=date(2026, 3, 2),
                end_date=date(2026, 3, 9),
            ),
        )
        returned = await product_unit_service.add_unit_rental_history(
            session,
            unit_id=rental["unit_a_id"],
            payload=UnitRentalHistoryCreate(
                reservation_id=rental["reservation_id"],
                client_name="Acme Events",
                start_date=date(2026, 3, 2),
                end_date=date(2026, 3, 9),
                status=UnitRentalStatus.RETURNED,
                notes="Scratched housing",
            ),
        )
        history = await product_unit_service.get_unit_rental_history(
            session, unit_id=rental["unit_a_id"]
        )
        untouched = await product_unit_service.get_unit_rental_history(
            session, unit_id=rental["unit_b_id"]
        )
    assert rented.status == UnitRentalStatus.RENTED
    assert [entry.id for entry in history] == [returned.id, rented.id]
    assert history[0].notes == "Scratched housing"
    assert untouched == []


async def test_rental_history_validates_references(rental, db_url: str) -> None:
    entry = UnitRentalHistoryCreate(
        client_name="Acme Events",
        start_date=date(2026, 3, 2),
        end_date=date(2026, 3, 9),
    )
    async with get_sessionmaker(db_url)() as session:
        with pytest.raises(ProductUnitNotFoundError):
            await product_unit_service.add_unit_rental_history(
                session, unit_id=uuid.uuid4(), payload=entry
            )
        with pytest.raises(ReservationNotFoundError):
            await product_unit_service.add_unit_rental_history(
                session,
                unit_id=rental["unit_a_id"],
                payload=entry.model_copy(update={"reservation_id": uuid.uuid4()}),
            )
    with pytest.raises(ValueError):
        UnitRentalHistoryCreate(
            client_name="Acme Events",
            start_date=date(2026, 3, 9),
            end_date=date(2026, 3, 2),
        )


async def test_available_units_skip_units_bound_to_overlapping_handoffs(
    rental, db_url: str
) -> None:
    async with get_sessionmaker(db_url)() as session:
        records = await delivery_service.create_delivery_pickups_from_reservation(
            session, reservation_id=rental["reservation_id"]
        )
        delivery = next(r for r in records if r.type.value == "delivery")
        await delivery_service.scan_unit_at_storage(
            session,
            delivery_pickup_id=delivery.id,
            unit_id=rental["unit_a_id"],
            storage_id=rental["main_storage_id"],
            user_id=rental["driver_id"],
        )

        during = await product_unit_service.list_available_units_for_reservation(
            session,
            product_id=rental["product_id"],
            start_date=date(2026, 3, 1),
            end_date=date(2026, 3, 3),
        )
        later = await product_unit_service.list_available_units_for_reservation(
            session,
            product_id=rental["product_id"],
            start_date=date(2026, 4, 1),
            end_date=date(2026, 4, 2),
        )
        with pytest.raises(ValueError):
            await product_unit_service.list_available_units_for_reservation(
                session,
                product_id=rental["product_id"],
                start_date=date(2026, 4, 2),
                end_date=date(2026, 4, 1),
            )
    # GEN-0003 is in maintenance and never offered
    assert [unit.unit_code for unit in during] == ["GEN-0002"]
    assert sorted(unit.unit_code for unit in later) == ["GEN-0001", "GEN-0002"]


async def test_rental_history_and_available_units_endpoints(rental, api_client) -> None:
    unit_id = rental["unit_b_id"]
    created = await api_client.post(
        f"/api/v1/units/{unit_id}/rental-history",
        json={
            "client_name": "Acme Events",
            "start_date": "2026-03-02",
            "end_date": "2026-03-09",
            "status": "damaged",
        },
    )
    assert created.status_code == 201, created.text
    assert created.json()["status"] == "damaged"

    listed = await api_client.get(f"/api/v1/units/{unit_id}/rental-history")
    assert [entry["id"] for entry in listed.json()] == [created.json()["id"]]
    missing = await api_client.get(f"/api/v1/units/{uuid.uuid4()}/rental-history")
    assert missing.status_code == 404

    available = await api_client.get(
        f"/api/v1/products/{rental['product_id']}/available-units",
        params={"start_date": "2026-03-02", "end_date": "2026-03-09"},
    )
    assert available.status_code == 200
    assert sorted(u["unit_code"] for u in available.json()) == ["GEN-0001", "GEN-0002"]
    inverted = await api_client.get(
        f"/api/v1/products/{rental['product_id']}/available-units",
        params={"start_date": "2026-03-09", "end_date": "2026-03-02"},
    )
    assert inverted.status_code == 400
