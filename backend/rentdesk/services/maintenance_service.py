"""Product maintenance bookkeeping."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rentdesk.models.maintenance import ProductMaintenance
from rentdesk.models.product import Product
from rentdesk.models.product_unit import ProductUnit
from rentdesk.schemas.maintenance import MaintenanceCreate, MaintenanceUpdate
from rentdesk.services.exceptions import (
    MaintenanceNotFoundError,
    ProductNotFoundError,
    ProductUnitNotFoundError,
)

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = frozenset({"maintenance_type", "cost", "maintenance_date"})


async def _ensure_unit_of_product(
    session: AsyncSession, *, product_id: uuid.UUID, unit_id: uuid.UUID | None
) -> None:
    if unit_id is None:
        return
    unit = await session.get(ProductUnit, unit_id)
    if unit is None:
        raise ProductUnitNotFoundError()
    if unit.product_id != product_id:
        raise ValueError("Unit does not belong to this product")


async def list_product_maintenance(
    session: AsyncSession, *, product_id: uuid.UUID
) -> list[ProductMaintenance]:
    """Return a product's maintenance records, most recent first."""
    stmt = (
        select(ProductMaintenance)
        .where(ProductMaintenance.product_id == product_id)
        .order_by(
            ProductMaintenance.maintenance_date.desc(),
            ProductMaintenance.created_at.desc(),
        )
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_maintenance(
    session: AsyncSession, *, maintenance_id: uuid.UUID
) -> ProductMaintenance | None:
    return await session.get(ProductMaintenance, maintenance_id)


async def create_maintenance(
    session: AsyncSession, *, product_id: uuid.UUID, payload: MaintenanceCreate
) -> ProductMaintenance:
    """Record maintenance performed on a product or one of its units."""
    if await session.get(Product, product_id) is None:
        raise ProductNotFoundError()
    await _ensure_unit_of_product(
        session, product_id=product_id, unit_id=payload.product_unit_id
    )
    record = ProductMaintenance(product_id=product_id, **payload.model_dump())
    session.add(record)
    await session.commit()
    await session.refresh(record)
    logger.info(
        "Recorded %s maintenance for product %s", record.maintenance_type, product_id
    )
    return record


async def update_maintenance(
    session: AsyncSession, record: ProductMaintenance, payload: MaintenanceUpdate
) -> ProductMaintenance:
    changes = payload.model_dump(exclude_unset=True)
    for field in sorted(_REQUIRED_FIELDS & changes.keys()):
        if changes[field] is None:
            raise ValueError(f"{field} cannot be null")
    if changes.get("product_unit_id") is not None:
        await _ensure_unit_of_product(
            session, product_id=record.product_id, unit_id=changes["product_unit_id"]
        )
    for field, value in changes.items():
        setattr(record, field, value)
    await session.commit()
    await session.refresh(record)
    return record


async def delete_maintenance(
    session: AsyncSession, *, maintenance_id: uuid.UUID
) -> None:
    record = await session.get(ProductMaintenance, maintenance_id)
    if record is None:
        raise MaintenanceNotFoundError()
    await session.delete(record)
    await session.commit()
    logger.info("Deleted maintenance record %s", maintenance_id)
