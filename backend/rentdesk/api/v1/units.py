"""Product unit lookup and maintenance endpoints."""
from __future__ import annotations

import uuid

from fastapi import APIRouter, HTTPException, status

from rentdesk.api.deps import SessionDep
from rentdesk.api.errors import to_http_error
from rentdesk.schemas.product_unit import (
    ProductUnitRead,
    ProductUnitUpdate,
    UnitRentalHistoryCreate,
    UnitRentalHistoryRead,
    UnitStorageUpdate,
)
from rentdesk.services import product_unit_service

router = APIRouter()


@router.get(
    "/by-code/{unit_code}",
    response_model=ProductUnitRead,
    summary="Find unit by barcode",
)
async def read_unit_by_code(unit_code: str, session: SessionDep) -> ProductUnitRead:
    unit = await product_unit_service.get_unit_by_code(session, unit_code=unit_code)
    if unit is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Product unit not found"
        )
    return ProductUnitRead.model_validate(unit)


@router.get("/{unit_id}", response_model=ProductUnitRead, summary="Get unit")
async def read_unit(unit_id: uuid.UUID, session: SessionDep) -> ProductUnitRead:
    unit = await product_unit_service.get_product_unit(session, unit_id=unit_id)
    if unit is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Product unit not found"
        )
    return ProductUnitRead.model_validate(unit)


@router.patch("/{unit_id}", response_model=ProductUnitRead, summary="Update unit")
async def update_unit(
    unit_id: uuid.UUID, payload: ProductUnitUpdate, session: SessionDep
) -> ProductUnitRead:
    unit = await product_unit_service.get_product_unit(session, unit_id=unit_id)
    if unit is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Product unit not found"
        )
    try:
        unit = await product_unit_service.update_product_unit(session, unit, payload)
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return ProductUnitRead.model_validate(unit)


@router.put(
    "/{unit_id}/storage",
    response_model=ProductUnitRead,
    summary="Move unit to a storage",
)
async def move_unit(
    unit_id: uuid.UUID, payload: UnitStorageUpdate, session: SessionDep
) -> ProductUnitRead:
    try:
        unit = await product_unit_service.update_unit_storage(
            session, unit_id=unit_id, storage_id=payload.storage_id
        )
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return ProductUnitRead.model_validate(unit)


@router.get(
    "/{unit_id}/rental-history",
    response_model=list[UnitRentalHistoryRead],
    summary="Unit rental history",
)
async def read_rental_history(
    unit_id: uuid.UUID, session: SessionDep
) -> list[UnitRentalHistoryRead]:
    unit = await product_unit_service.get_product_unit(session, unit_id=unit_id)
    if unit is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Product unit not found"
        )
    entries = await product_unit_service.get_unit_rental_history(
        session, unit_id=unit_id
    )
    return [UnitRentalHistoryRead.model_validate(entry) for entry in entries]


@router.post(
    "/{unit_id}/rental-history",
    response_model=UnitRentalHistoryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Log a unit rental",
)
async def add_rental_history(
    unit_id: uuid.UUID, payload: UnitRentalHistoryCreate, session: SessionDep
) -> UnitRentalHistoryRead:
    try:
        entry = await product_unit_service.add_unit_rental_history(
            session, unit_id=unit_id, payload=payload
        )
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return UnitRentalHistoryRead.model_validate(entry)
