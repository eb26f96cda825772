"""Product catalog API endpoints."""
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError

from rentdesk.api.deps import SessionDep
from rentdesk.api.errors import to_http_error
from rentdesk.models.product import Product
from rentdesk.schemas.maintenance import MaintenanceCreate, MaintenanceRead
from rentdesk.schemas.product import (
    PriceQuoteRead,
    PricingTierCreate,
    PricingTierRead,
    ProductCreate,
    ProductRead,
    ProductUpdate,
)
from rentdesk.schemas.product_unit import (
    ProductUnitCreate,
    ProductUnitRead,
    ProductUnitStats,
)
from rentdesk.schemas.storage import StorageRead
from rentdesk.services import (
    delivery_service,
    maintenance_service,
    product_pricing_service,
    product_service,
    product_unit_service,
)
from rentdesk.services.pricing_calculator import format_price_with_discount

router = APIRouter()


async def _get_product_or_404(session: SessionDep, product_id: uuid.UUID) -> Product:
    product = await product_service.get_product(session, product_id=product_id)
    if product is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Product not found"
        )
    return product


@router.get("", response_model=list[ProductRead], summary="List products")
async def list_products(
    session: SessionDep,
    include_inactive: bool = False,
    category_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[ProductRead]:
    products = await product_service.list_products(
        session,
        include_inactive=include_inactive,
        category_id=category_id,
        skip=skip,
        limit=limit,
    )
    return [ProductRead.model_validate(obj) for obj in products]


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
)
async def create_product(payload: ProductCreate, session: SessionDep) -> ProductRead:
    try:
        product = await product_service.create_product(session, payload)
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Product code already exists",
        ) from exc
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return ProductRead.model_validate(product)


@router.get("/{product_id}", response_model=ProductRead, summary="Get product")
async def read_product(product_id: uuid.UUID, session: SessionDep) -> ProductRead:
    product = await _get_product_or_404(session, product_id)
    return ProductRead.model_validate(product)


@router.patch("/{product_id}", response_model=ProductRead, summary="Update product")
async def update_product(
    product_id: uuid.UUID, payload: ProductUpdate, session: SessionDep
) -> ProductRead:
    product = await _get_product_or_404(session, product_id)
    try:
        product = await product_service.update_product(session, product, payload)
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return ProductRead.model_validate(product)


@router.get(
    "/{product_id}/pricing-tiers",
    response_model=list[PricingTierRead],
    summary="List active pricing tiers",
)
async def list_pricing_tiers(
    product_id: uuid.UUID, session: SessionDep
) -> list[PricingTierRead]:
    await _get_product_or_404(session, product_id)
    tiers = await product_pricing_service.list_pricing_tiers(
        session, product_id=product_id
    )
    return [PricingTierRead.model_validate(tier) for tier in tiers]


@router.post(
    "/{product_id}/pricing-tiers",
    response_model=PricingTierRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add pricing tier",
)
async def create_pricing_tier(
    product_id: uuid.UUID, payload: PricingTierCreate, session: SessionDep
) -> PricingTierRead:
    try:
        tier = await product_pricing_service.create_pricing_tier(
            session, product_id=product_id, payload=payload
        )
    except (ValueError, IntegrityError) as exc:
        raise to_http_error(exc) from exc
    return PricingTierRead.model_validate(tier)


@router.get(
    "/{product_id}/quote",
    response_model=PriceQuoteRead,
    summary="Quote a rental price",
)
async def quote_price(
    product_id: uuid.UUID,
    session: SessionDep,
    days: int = Query(..., description="Rental length in days"),
) -> PriceQuoteRead:
    try:
        calculation = await product_pricing_service.quote_product_price(
            session, product_id=product_id, rental_days=days
        )
    except ValueError as exc:
        raise to_http_error(exc) from exc
    display = format_price_with_discount(calculation)
    return PriceQuoteRead(
        product_id=product_id,
        rental_days=days,
        price_per_day=calculation.price_per_day,
        total_price=calculation.total_price,
        original_price=calculation.original_price,
        savings=calculation.savings,
        is_discounted=calculation.is_discounted,
        tier_name=calculation.tier_name,
        display_price=display.display_price,
        display_original_price=display.original_price,
        display_savings=display.savings,
        discount_percentage=display.discount_percentage,
    )


@router.get(
    "/{product_id}/units",
    response_model=list[ProductUnitRead],
    summary="List product units",
)
async def list_units(
    product_id: uuid.UUID, session: SessionDep
) -> list[ProductUnitRead]:
    await _get_product_or_404(session, product_id)
    units = await product_unit_service.list_product_units(
        session, product_id=product_id
    )
    return [ProductUnitRead.model_validate(unit) for unit in units]


@router.post(
    "/{product_id}/units",
    response_model=ProductUnitRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register product unit",
)
async def create_unit(
    product_id: uuid.UUID, payload: ProductUnitCreate, session: SessionDep
) -> ProductUnitRead:
    try:
        unit = await product_unit_service.create_product_unit(
            session, product_id=product_id, payload=payload
        )
    except (ValueError, IntegrityError) as exc:
        raise to_http_error(exc) from exc
    return ProductUnitRead.model_validate(unit)


@router.get(
    "/{product_id}/units/stats",
    response_model=ProductUnitStats,
    summary="Unit counts by availability",
)
async def unit_stats(product_id: uuid.UUID, session: SessionDep) -> ProductUnitStats:
    await _get_product_or_404(session, product_id)
    return await product_unit_service.get_product_unit_stats(
        session, product_id=product_id
    )


@router.get(
    "/{product_id}/available-storages",
    response_model=list[StorageRead],
    summary="Storages holding available units",
)
async def available_storages(
    product_id: uuid.UUID, session: SessionDep
) -> list[StorageRead]:
    await _get_product_or_404(session, product_id)
    storages = await delivery_service.get_available_storages_for_product(
        session, product_id=product_id
    )
    return [StorageRead.model_validate(storage) for storage in storages]


@router.get(
    "/{product_id}/available-units",
    response_model=list[ProductUnitRead],
    summary="Units free for a rental period",
)
async def available_units(
    product_id: uuid.UUID,
    session: SessionDep,
    start_date: date = Query(...),
    end_date: date = Query(...),
) -> list[ProductUnitRead]:
    await _get_product_or_404(session, product_id)
    try:
        units = await product_unit_service.list_available_units_for_reservation(
            session, product_id=product_id, start_date=start_date, end_date=end_date
        )
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return [ProductUnitRead.model_validate(unit) for unit in units]


@router.get(
    "/{product_id}/maintenance",
    response_model=list[MaintenanceRead],
    summary="List maintenance records",
)
async def list_maintenance(
    product_id: uuid.UUID, session: SessionDep
) -> list[MaintenanceRead]:
    await _get_product_or_404(session, product_id)
    records = await maintenance_service.list_product_maintenance(
        session, product_id=product_id
    )
    return [MaintenanceRead.model_validate(record) for record in records]


@router.post(
    "/{product_id}/maintenance",
    response_model=MaintenanceRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record maintenance",
)
async def create_maintenance(
    product_id: uuid.UUID, payload: MaintenanceCreate, session: SessionDep
) -> MaintenanceRead:
    try:
        record = await maintenance_service.create_maintenance(
            session, product_id=product_id, payload=payload
        )
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return MaintenanceRead.model_validate(record)
