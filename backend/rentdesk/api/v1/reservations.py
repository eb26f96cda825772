"""Reservation API endpoints."""
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, HTTPException, Query, status

from rentdesk.api.deps import SessionDep
from rentdesk.api.errors import to_http_error
from rentdesk.models.reservation import ReservationStatus
from rentdesk.schemas.delivery import DeliveryPickupRead
from rentdesk.schemas.reservation import (
    AvailabilityRead,
    ReservationCreate,
    ReservationRead,
    ReservationUpdate,
)
from rentdesk.services import delivery_service, reservation_service

router = APIRouter()


@router.get("", response_model=list[ReservationRead], summary="List reservations")
async def list_reservations(
    session: SessionDep,
    client_id: uuid.UUID | None = None,
    status_filter: ReservationStatus | None = Query(default=None, alias="status"),
    product_id: uuid.UUID | None = None,
    period_start: date | None = None,
    period_end: date | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[ReservationRead]:
    reservations = await reservation_service.list_reservations(
        session,
        client_id=client_id,
        status=status_filter,
        product_id=product_id,
        period_start=period_start,
        period_end=period_end,
        skip=skip,
        limit=limit,
    )
    return [ReservationRead.model_validate(obj) for obj in reservations]


@router.post(
    "",
    response_model=ReservationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create reservation",
)
async def create_reservation(
    payload: ReservationCreate, session: SessionDep
) -> ReservationRead:
    try:
        reservation = await reservation_service.create_reservation(session, payload)
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return ReservationRead.model_validate(reservation)


@router.get(
    "/availability",
    response_model=AvailabilityRead,
    summary="Check product availability",
)
async def check_availability(
    session: SessionDep,
    product_id: uuid.UUID = Query(...),
    start_date: date = Query(...),
    end_date: date = Query(...),
) -> AvailabilityRead:
    if end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date must not be before start_date",
        )
    available = await reservation_service.check_product_availability(
        session, product_id=product_id, start_date=start_date, end_date=end_date
    )
    return AvailabilityRead(
        product_id=product_id,
        start_date=start_date,
        end_date=end_date,
        available=available,
    )


@router.get(
    "/{reservation_id}", response_model=ReservationRead, summary="Get reservation"
)
async def read_reservation(
    reservation_id: uuid.UUID, session: SessionDep
) -> ReservationRead:
    try:
        reservation = await reservation_service.get_reservation(
            session, reservation_id=reservation_id
        )
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return ReservationRead.model_validate(reservation)


@router.patch(
    "/{reservation_id}", response_model=ReservationRead, summary="Update reservation"
)
async def update_reservation(
    reservation_id: uuid.UUID, payload: ReservationUpdate, session: SessionDep
) -> ReservationRead:
    try:
        reservation = await reservation_service.update_reservation(
            session, reservation_id=reservation_id, payload=payload
        )
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return ReservationRead.model_validate(reservation)


@router.delete(
    "/{reservation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete reservation",
)
async def delete_reservation(reservation_id: uuid.UUID, session: SessionDep) -> None:
    try:
        await reservation_service.delete_reservation(
            session, reservation_id=reservation_id
        )
    except ValueError as exc:
        raise to_http_error(exc) from exc


@router.post(
    "/{reservation_id}/deliveries",
    response_model=list[DeliveryPickupRead],
    status_code=status.HTTP_201_CREATED,
    summary="Schedule deliveries and pickups",
)
async def create_deliveries(
    reservation_id: uuid.UUID, session: SessionDep
) -> list[DeliveryPickupRead]:
    try:
        records = await delivery_service.create_delivery_pickups_from_reservation(
            session, reservation_id=reservation_id
        )
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return [DeliveryPickupRead.model_validate(record) for record in records]
