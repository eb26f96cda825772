"""Tests for pricing tier administration and quotes."""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest

from rentdesk.db.session import get_sessionmaker
from rentdesk.schemas.product import PricingTierCreate, PricingTierUpdate
from rentdesk.services import product_pricing_service
from rentdesk.services.exceptions import PricingTierNotFoundError, ProductNotFoundError
from rentdesk.services.product_pricing_service import TierOverlapError

pytestmark = pytest.mark.asyncio


async def test_tiers_listed_by_min_days(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        tiers = await product_pricing_service.list_pricing_tiers(
            session, product_id=rental["product_id"]
        )
    assert [tier.tier_name for tier in tiers] == ["Daily", "Weekly", "Monthly"]


async def test_overlapping_tier_rejected(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        with pytest.raises(TierOverlapError):
            await product_pricing_service.create_pricing_tier(
                session,
                product_id=rental["product_id"],
                payload=PricingTierCreate(
                    min_days=5, max_days=8, price_per_day=Decimal("90.00")
                ),
            )


async def test_tier_added_after_deactivating_conflict(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        tiers = await product_pricing_service.list_pricing_tiers(
            session, product_id=rental["product_id"]
        )
        monthly = tiers[-1]
        await product_pricing_service.deactivate_pricing_tier(session, monthly)

        tier = await product_pricing_service.create_pricing_tier(
            session,
            product_id=rental["product_id"],
            payload=PricingTierCreate(
                min_days=30,
                max_days=89,
                price_per_day=Decimal("55.00"),
                tier_name="Quarter",
            ),
        )
        assert tier.is_active
        names = [
            item.tier_name
            for item in await product_pricing_service.list_pricing_tiers(
                session, product_id=rental["product_id"]
            )
        ]
    assert names == ["Daily", "Weekly", "Quarter"]


async def test_update_checks_overlap_against_other_tiers(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        daily, weekly, _ = await product_pricing_service.list_pricing_tiers(
            session, product_id=rental["product_id"]
        )
        updated = await product_pricing_service.update_pricing_tier(
            session, weekly, PricingTierUpdate(price_per_day=Decimal("75.00"))
        )
        assert updated.price_per_day == Decimal("75.00")

        with pytest.raises(TierOverlapError):
            await product_pricing_service.update_pricing_tier(
                session, daily, PricingTierUpdate(max_days=10)
            )
        with pytest.raises(ValueError):
            await product_pricing_service.update_pricing_tier(
                session, daily, PricingTierUpdate(min_days=8)
            )


async def test_tier_for_unknown_product(reset_database, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        with pytest.raises(ProductNotFoundError):
            await product_pricing_service.create_pricing_tier(
                session,
                product_id=uuid.uuid4(),
                payload=PricingTierCreate(min_days=1, price_per_day=Decimal("1.00")),
            )


async def test_quote_uses_active_tiers(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        quote = await product_pricing_service.quote_product_price(
            session, product_id=rental["product_id"], rental_days=14
        )
    assert quote.tier_name == "Weekly"
    assert quote.total_price == Decimal("1120.00")
    assert quote.savings == Decimal("280.00")


async def test_calculate_price_for_days(rental, db_url: str) -> None:
    async with get_sessionmaker(db_url)() as session:
        tier = await product_pricing_service.calculate_price_for_days(
            session, product_id=rental["product_id"], days=45
        )
        assert tier.tier_name == "Monthly"

        with pytest.raises(PricingTierNotFoundError):
            await product_pricing_service.calculate_price_for_days(
                session, product_id=rental["product_id"], days=0
            )
