"""Pricing tier maintenance endpoints."""
from __future__ import annotations

import uuid

from fastapi import APIRouter, HTTPException, status

from rentdesk.api.deps import SessionDep
from rentdesk.api.errors import to_http_error
from rentdesk.models.product import ProductPricingTier
from rentdesk.schemas.product import PricingTierRead, PricingTierUpdate
from rentdesk.services import product_pricing_service

router = APIRouter()


async def _get_tier_or_404(
    session: SessionDep, tier_id: uuid.UUID
) -> ProductPricingTier:
    tier = await product_pricing_service.get_pricing_tier(session, tier_id=tier_id)
    if tier is None or not tier.is_active:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Pricing tier not found"
        )
    return tier


@router.patch(
    "/{tier_id}", response_model=PricingTierRead, summary="Update pricing tier"
)
async def update_pricing_tier(
    tier_id: uuid.UUID, payload: PricingTierUpdate, session: SessionDep
) -> PricingTierRead:
    tier = await _get_tier_or_404(session, tier_id)
    try:
        tier = await product_pricing_service.update_pricing_tier(session, tier, payload)
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return PricingTierRead.model_validate(tier)


@router.delete(
    "/{tier_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deactivate pricing tier",
)
async def delete_pricing_tier(tier_id: uuid.UUID, session: SessionDep) -> None:
    tier = await _get_tier_or_404(session, tier_id)
    await product_pricing_service.deactivate_pricing_tier(session, tier)
