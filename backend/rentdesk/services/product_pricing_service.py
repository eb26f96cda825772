"""Pricing tier administration and price quotes for products."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rentdesk.models.product import Product, ProductPricingTier
from rentdesk.schemas.product import PricingTierCreate, PricingTierUpdate
from rentdesk.services.exceptions import (
    PricingTierNotFoundError,
    ProductNotFoundError,
)
from rentdesk.services.pricing_calculator import (
    PriceCalculation,
    resolve_price,
    tier_matches,
)

logger = logging.getLogger(__name__)


class TierOverlapError(ValueError):
    """Raised when a tier's day range collides with another active tier."""


def _ranges_overlap(
    first_min: int, first_max: int | None, second_min: int, second_max: int | None
) -> bool:
    if first_max is not None and first_max < second_min:
        return False
    if second_max is not None and second_max < first_min:
        return False
    return True


def _describe(min_days: int, max_days: int | None) -> str:
    if max_days is None:
        return f"{min_days}+ days"
    return f"{min_days}-{max_days} days"


async def _require_product(session: AsyncSession, product_id: uuid.UUID) -> Product:
    product = await session.get(Product, product_id)
    if product is None:
        raise ProductNotFoundError()
    return product


async def list_pricing_tiers(
    session: AsyncSession, *, product_id: uuid.UUID
) -> list[ProductPricingTier]:
    """Return the active tiers of a product, shortest duration first."""
    stmt = (
        select(ProductPricingTier)
        .where(
            ProductPricingTier.product_id == product_id,
            ProductPricingTier.is_active.is_(True),
        )
        .order_by(ProductPricingTier.min_days.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_pricing_tier(
    session: AsyncSession, *, tier_id: uuid.UUID
) -> ProductPricingTier | None:
    return await session.get(ProductPricingTier, tier_id)


async def _ensure_no_overlap(
    session: AsyncSession,
    *,
    product_id: uuid.UUID,
    min_days: int,
    max_days: int | None,
    exclude_id: uuid.UUID | None = None,
) -> None:
    if max_days is not None and max_days < min_days:
        raise ValueError("max_days must be greater than or equal to min_days")
    for tier in await list_pricing_tiers(session, product_id=product_id):
        if tier.id == exclude_id:
            continue
        if _ranges_overlap(min_days, max_days, tier.min_days, tier.max_days):
            raise TierOverlapError(
                f"Range {_describe(min_days, max_days)} overlaps tier "
                f"{_describe(tier.min_days, tier.max_days)}"
            )


async def create_pricing_tier(
    session: AsyncSession, *, product_id: uuid.UUID, payload: PricingTierCreate
) -> ProductPricingTier:
    """Add a tier to a product after checking it against the active ones."""
    await _require_product(session, product_id)
    await _ensure_no_overlap(
        session,
        product_id=product_id,
        min_days=payload.min_days,
        max_days=payload.max_days,
    )
    tier = ProductPricingTier(product_id=product_id, **payload.model_dump())
    session.add(tier)
    await session.commit()
    await session.refresh(tier)
    logger.info(
        "Created pricing tier %s (%s) for product %s",
        tier.id,
        _describe(tier.min_days, tier.max_days),
        product_id,
    )
    return tier


async def update_pricing_tier(
    session: AsyncSession, tier: ProductPricingTier, payload: PricingTierUpdate
) -> ProductPricingTier:
    """Apply changes to a tier, re-validating its range."""
    changes = payload.model_dump(exclude_unset=True)
    min_days = changes.get("min_days", tier.min_days)
    max_days = changes.get("max_days", tier.max_days)
    if "min_days" in changes or "max_days" in changes:
        await _ensure_no_overlap(
            session,
            product_id=tier.product_id,
            min_days=min_days,
            max_days=max_days,
            exclude_id=tier.id,
        )
    for field, value in changes.items():
        setattr(tier, field, value)
    await session.commit()
    await session.refresh(tier)
    return tier


async def deactivate_pricing_tier(
    session: AsyncSession, tier: ProductPricingTier
) -> ProductPricingTier:
    """Soft-delete a tier; it stops taking part in price resolution."""
    tier.is_active = False
    await session.commit()
    await session.refresh(tier)
    logger.info("Deactivated pricing tier %s", tier.id)
    return tier


async def quote_product_price(
    session: AsyncSession, *, product_id: uuid.UUID, rental_days: int
) -> PriceCalculation:
    """Resolve the price of renting a product for ``rental_days``."""
    product = await _require_product(session, product_id)
    tiers = await list_pricing_tiers(session, product_id=product_id)
    return resolve_price(product.daily_price, rental_days, tiers)


async def calculate_price_for_days(
    session: AsyncSession, *, product_id: uuid.UUID, days: int
) -> ProductPricingTier:
    """Return the active tier covering ``days``; no base-rate fallback."""
    for tier in await list_pricing_tiers(session, product_id=product_id):
        if tier_matches(tier, days):
            return tier
    raise PricingTierNotFoundError(f"No pricing tier covers {days} days")
