"""Storage (warehouse) services."""

from __future__ import annotations

import logging
import math
import uuid

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from rentdesk.core.config import get_settings
from rentdesk.models.product_unit import ProductUnit
from rentdesk.models.storage import Storage
from rentdesk.schemas.storage import StorageCreate, StorageUpdate

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two coordinates, in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


async def list_storages(
    session: AsyncSession,
    *,
    include_inactive: bool = False,
    skip: int = 0,
    limit: int = 50,
) -> list[Storage]:
    """Return storages ordered by name."""
    stmt: Select[tuple[Storage]] = select(Storage)
    if not include_inactive:
        stmt = stmt.where(Storage.is_active.is_(True))
    stmt = stmt.order_by(Storage.name.asc()).offset(skip).limit(min(limit, 100))
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_storage(session: AsyncSession, *, storage_id: uuid.UUID) -> Storage | None:
    return await session.get(Storage, storage_id)


async def create_storage(session: AsyncSession, payload: StorageCreate) -> Storage:
    """Create a new storage."""
    storage = Storage(**payload.model_dump())
    session.add(storage)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(storage)
    logger.info("Created storage %s", storage.id)
    return storage


async def update_storage(
    session: AsyncSession, storage: Storage, payload: StorageUpdate
) -> Storage:
    """Update mutable fields on a storage."""
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(storage, field, value)
    await session.commit()
    await session.refresh(storage)
    return storage


async def deactivate_storage(session: AsyncSession, storage: Storage) -> Storage:
    """Soft-delete a storage; its units keep their reference."""
    storage.is_active = False
    await session.commit()
    await session.refresh(storage)
    logger.info("Deactivated storage %s", storage.id)
    return storage


async def find_nearby_storages(
    session: AsyncSession,
    *,
    latitude: float,
    longitude: float,
    max_km: float | None = None,
) -> list[tuple[Storage, float]]:
    """Active storages within ``max_km`` of a point, nearest first.

    Storages without coordinates are skipped.
    """
    radius = max_km if max_km is not None else get_settings().nearby_storage_radius_km
    nearby: list[tuple[Storage, float]] = []
    for storage in await list_storages(session, limit=100):
        if storage.latitude is None or storage.longitude is None:
            continue
        distance = haversine_km(latitude, longitude, storage.latitude, storage.longitude)
        if distance <= radius:
            nearby.append((storage, distance))
    nearby.sort(key=lambda pair: pair[1])
    return nearby


async def list_storage_units(
    session: AsyncSession, *, storage_id: uuid.UUID
) -> list[ProductUnit]:
    """Units currently kept at a storage."""
    stmt = (
        select(ProductUnit)
        .options(selectinload(ProductUnit.storage))
        .where(ProductUnit.storage_id == storage_id)
        .order_by(ProductUnit.unit_code.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())
