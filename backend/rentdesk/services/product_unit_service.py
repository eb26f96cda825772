"""Product unit (physical item) services."""

from __future__ import annotations

import logging
import secrets
import time
import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from rentdesk.models.delivery import DeliveryPickup, DeliveryStatus
from rentdesk.models.product import Product
from rentdesk.models.product_unit import (
    ProductUnit,
    ProductUnitStatus,
    UnitRentalHistory,
)
from rentdesk.models.reservation import Reservation, ReservationStatus
from rentdesk.models.storage import Storage
from rentdesk.schemas.product_unit import (
    ProductUnitCreate,
    ProductUnitStats,
    ProductUnitUpdate,
    UnitRentalHistoryCreate,
)
from rentdesk.services.exceptions import (
    ProductNotFoundError,
    ProductUnitNotFoundError,
    ReservationNotFoundError,
    StorageNotFoundError,
)

logger = logging.getLogger(__name__)

_BARCODE_ATTEMPTS = 5

_OPEN_HANDOFF_STATUSES = (
    DeliveryStatus.PENDING,
    DeliveryStatus.ASSIGNED,
    DeliveryStatus.IN_PROGRESS,
)


async def _reload(session: AsyncSession, unit_id: uuid.UUID) -> ProductUnit:
    stmt = (
        select(ProductUnit)
        .options(selectinload(ProductUnit.storage))
        .where(ProductUnit.id == unit_id)
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)
    return result.scalars().one()


async def list_product_units(
    session: AsyncSession, *, product_id: uuid.UUID
) -> list[ProductUnit]:
    """Return the units of a product, oldest first."""
    stmt = (
        select(ProductUnit)
        .options(selectinload(ProductUnit.storage))
        .where(ProductUnit.product_id == product_id)
        .order_by(ProductUnit.created_at.asc(), ProductUnit.unit_code.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_product_unit(
    session: AsyncSession, *, unit_id: uuid.UUID
) -> ProductUnit | None:
    stmt = (
        select(ProductUnit)
        .options(selectinload(ProductUnit.storage))
        .where(ProductUnit.id == unit_id)
    )
    result = await session.execute(stmt)
    return result.scalars().one_or_none()


async def get_unit_by_code(session: AsyncSession, *, unit_code: str) -> ProductUnit | None:
    """Look a unit up by its barcode."""
    stmt = (
        select(ProductUnit)
        .options(selectinload(ProductUnit.storage), selectinload(ProductUnit.product))
        .where(ProductUnit.unit_code == unit_code)
    )
    result = await session.execute(stmt)
    return result.scalars().one_or_none()


async def generate_unique_barcode(session: AsyncSession, product: Product) -> str:
    """Build an unused unit code from the product code, e.g. ``GEN-123456042``."""
    for _ in range(_BARCODE_ATTEMPTS):
        stamp = str(time.time_ns() // 1_000_000)[-6:]
        candidate = f"{product.code}-{stamp}{secrets.randbelow(1000):03d}"
        existing = await session.execute(
            select(ProductUnit.id).where(ProductUnit.unit_code == candidate)
        )
        if existing.first() is None:
            return candidate
    raise ValueError("Could not generate a unique unit code")


async def _require_storage(session: AsyncSession, storage_id: uuid.UUID) -> Storage:
    storage = await session.get(Storage, storage_id)
    if storage is None:
        raise StorageNotFoundError()
    return storage


async def create_product_unit(
    session: AsyncSession, *, product_id: uuid.UUID, payload: ProductUnitCreate
) -> ProductUnit:
    """Register a physical unit of a product."""
    product = await session.get(Product, product_id)
    if product is None:
        raise ProductNotFoundError()
    if payload.storage_id is not None:
        await _require_storage(session, payload.storage_id)

    data = payload.model_dump()
    if not data.get("unit_code"):
        data["unit_code"] = await generate_unique_barcode(session, product)
    unit = ProductUnit(product_id=product.id, **data)
    session.add(unit)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    logger.info("Registered unit %s for product %s", unit.unit_code, product.id)
    return await _reload(session, unit.id)


async def update_product_unit(
    session: AsyncSession, unit: ProductUnit, payload: ProductUnitUpdate
) -> ProductUnit:
    """Update mutable fields on a unit."""
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("storage_id") is not None:
        await _require_storage(session, changes["storage_id"])
    for field, value in changes.items():
        setattr(unit, field, value)
    await session.commit()
    return await _reload(session, unit.id)


async def update_unit_storage(
    session: AsyncSession, *, unit_id: uuid.UUID, storage_id: uuid.UUID | None
) -> ProductUnit:
    """Move a unit to a storage, or detach it with ``storage_id=None``."""
    unit = await session.get(ProductUnit, unit_id)
    if unit is None:
        raise ProductUnitNotFoundError()
    if storage_id is not None:
        await _require_storage(session, storage_id)
    unit.storage_id = storage_id
    await session.commit()
    return await _reload(session, unit.id)


async def get_product_unit_stats(
    session: AsyncSession, *, product_id: uuid.UUID
) -> ProductUnitStats:
    """Count a product's units by availability.

    Inactive units, and units with the inactive status, only count as
    inactive.
    """
    result = await session.execute(
        select(ProductUnit.status, ProductUnit.is_active).where(
            ProductUnit.product_id == product_id
        )
    )
    stats = ProductUnitStats()
    for status, is_active in result.all():
        stats.total += 1
        if not is_active or status == ProductUnitStatus.INACTIVE:
            stats.inactive += 1
        elif status == ProductUnitStatus.AVAILABLE:
            stats.available += 1
        elif status == ProductUnitStatus.RENTED:
            stats.rented += 1
        elif status == ProductUnitStatus.MAINTENANCE:
            stats.maintenance += 1
    return stats


async def get_unit_rental_history(
    session: AsyncSession, *, unit_id: uuid.UUID
) -> list[UnitRentalHistory]:
    """Return a unit's rental history, newest entry first."""
    stmt = (
        select(UnitRentalHistory)
        .where(UnitRentalHistory.unit_id == unit_id)
        .order_by(
            UnitRentalHistory.created_at.desc(), UnitRentalHistory.start_date.desc()
        )
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def add_unit_rental_history(
    session: AsyncSession, *, unit_id: uuid.UUID, payload: UnitRentalHistoryCreate
) -> UnitRentalHistory:
    """Append an entry to a unit's rental history."""
    if await session.get(ProductUnit, unit_id) is None:
        raise ProductUnitNotFoundError()
    if (
        payload.reservation_id is not None
        and await session.get(Reservation, payload.reservation_id) is None
    ):
        raise ReservationNotFoundError()
    entry = UnitRentalHistory(unit_id=unit_id, **payload.model_dump())
    session.add(entry)
    await session.commit()
    await session.refresh(entry)
    logger.info("Logged %s rental for unit %s", entry.status.value, unit_id)
    return entry


async def list_available_units_for_reservation(
    session: AsyncSession,
    *,
    product_id: uuid.UUID,
    start_date: date,
    end_date: date,
) -> list[ProductUnit]:
    """Units of a product that can be handed out for ``[start_date, end_date]``.

    Active, available units qualify unless they are already bound to an open
    handoff of a live reservation overlapping the period.
    """
    if end_date < start_date:
        raise ValueError("end_date must not be before start_date")
    committed = (
        select(DeliveryPickup.product_unit_id)
        .join(Reservation, Reservation.id == DeliveryPickup.reservation_id)
        .where(
            DeliveryPickup.product_unit_id.is_not(None),
            DeliveryPickup.status.in_(_OPEN_HANDOFF_STATUSES),
            Reservation.status != ReservationStatus.CANCELLED,
            Reservation.start_date <= end_date,
            Reservation.end_date >= start_date,
        )
    )
    stmt = (
        select(ProductUnit)
        .options(selectinload(ProductUnit.storage))
        .where(
            ProductUnit.product_id == product_id,
            ProductUnit.is_active.is_(True),
            ProductUnit.status == ProductUnitStatus.AVAILABLE,
            ProductUnit.id.not_in(committed),
        )
        .order_by(ProductUnit.created_at.asc(), ProductUnit.unit_code.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())
