"""Product catalog services."""

from __future__ import annotations

import uuid

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rentdesk.models.product import Product, ProductCategory
from rentdesk.schemas.product import (
    ProductCategoryCreate,
    ProductCreate,
    ProductUpdate,
)
from rentdesk.services.exceptions import ProductCategoryNotFoundError


async def list_categories(session: AsyncSession) -> list[ProductCategory]:
    """Return product categories ordered by name."""
    result = await session.execute(
        select(ProductCategory).order_by(ProductCategory.name.asc())
    )
    return list(result.scalars().all())


async def create_category(
    session: AsyncSession, payload: ProductCategoryCreate
) -> ProductCategory:
    """Create a product category; names are unique."""
    category = ProductCategory(**payload.model_dump())
    session.add(category)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    return category


async def _ensure_category(session: AsyncSession, category_id: uuid.UUID | None) -> None:
    if category_id is not None and await session.get(ProductCategory, category_id) is None:
        raise ProductCategoryNotFoundError()


async def list_products(
    session: AsyncSession,
    *,
    include_inactive: bool = False,
    category_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[Product]:
    """Return products ordered by name."""
    stmt: Select[tuple[Product]] = select(Product)
    if not include_inactive:
        stmt = stmt.where(Product.is_active.is_(True))
    if category_id is not None:
        stmt = stmt.where(Product.category_id == category_id)
    stmt = stmt.order_by(Product.name.asc()).offset(skip).limit(min(limit, 100))
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_product(session: AsyncSession, *, product_id: uuid.UUID) -> Product | None:
    return await session.get(Product, product_id)


async def create_product(session: AsyncSession, payload: ProductCreate) -> Product:
    """Create a new product."""
    await _ensure_category(session, payload.category_id)
    product = Product(**payload.model_dump())
    session.add(product)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(product)
    return product


async def update_product(
    session: AsyncSession, product: Product, payload: ProductUpdate
) -> Product:
    """Update mutable fields on a product."""
    changes = payload.model_dump(exclude_unset=True)
    if "category_id" in changes:
        await _ensure_category(session, changes["category_id"])
    for field, value in changes.items():
        setattr(product, field, value)
    await session.commit()
    await session.refresh(product)
    return product
