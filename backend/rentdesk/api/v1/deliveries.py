"""Delivery and pickup workflow endpoints."""
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, HTTPException, Query, status

from rentdesk.api.deps import SessionDep
from rentdesk.api.errors import to_http_error
from rentdesk.models.delivery import DeliveryPickupType, DeliveryStatus
from rentdesk.schemas.delivery import (
    AssignRequest,
    CancelRequest,
    DeliveryPickupEventRead,
    DeliveryPickupRead,
    ScanAtLocationRequest,
    ScanAtStorageRequest,
    StaffActionRequest,
)
from rentdesk.services import delivery_service

router = APIRouter()


@router.get(
    "", response_model=list[DeliveryPickupRead], summary="List deliveries and pickups"
)
async def list_deliveries(
    session: SessionDep,
    type: DeliveryPickupType | None = None,
    status_filter: DeliveryStatus | None = Query(default=None, alias="status"),
    scheduled_date: date | None = None,
    assigned_to_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 100,
) -> list[DeliveryPickupRead]:
    records = await delivery_service.list_deliveries_pickups(
        session,
        type=type,
        status=status_filter,
        scheduled_date=scheduled_date,
        assigned_to_id=assigned_to_id,
        skip=skip,
        limit=min(limit, 200),
    )
    return [DeliveryPickupRead.model_validate(record) for record in records]


@router.get(
    "/{delivery_pickup_id}",
    response_model=DeliveryPickupRead,
    summary="Get delivery or pickup",
)
async def read_delivery(
    delivery_pickup_id: uuid.UUID, session: SessionDep
) -> DeliveryPickupRead:
    record = await delivery_service.get_delivery_pickup(
        session, delivery_pickup_id=delivery_pickup_id
    )
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Delivery/pickup not found"
        )
    return DeliveryPickupRead.model_validate(record)


@router.get(
    "/{delivery_pickup_id}/events",
    response_model=list[DeliveryPickupEventRead],
    summary="Delivery or pickup history",
)
async def list_events(
    delivery_pickup_id: uuid.UUID, session: SessionDep
) -> list[DeliveryPickupEventRead]:
    events = await delivery_service.get_delivery_pickup_events(
        session, delivery_pickup_id=delivery_pickup_id
    )
    return [DeliveryPickupEventRead.model_validate(event) for event in events]


@router.post(
    "/{delivery_pickup_id}/assign",
    response_model=DeliveryPickupRead,
    summary="Assign to staff member",
)
async def assign(
    delivery_pickup_id: uuid.UUID, payload: AssignRequest, session: SessionDep
) -> DeliveryPickupRead:
    try:
        record = await delivery_service.assign_delivery_pickup(
            session,
            delivery_pickup_id=delivery_pickup_id,
            staff_id=payload.staff_id,
            staff_name=payload.staff_name,
            notes=payload.notes,
        )
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return DeliveryPickupRead.model_validate(record)


@router.post(
    "/{delivery_pickup_id}/start",
    response_model=DeliveryPickupRead,
    summary="Start delivery or pickup",
)
async def start(
    delivery_pickup_id: uuid.UUID, payload: StaffActionRequest, session: SessionDep
) -> DeliveryPickupRead:
    try:
        record = await delivery_service.start_delivery_pickup(
            session,
            delivery_pickup_id=delivery_pickup_id,
            staff_id=payload.staff_id,
            staff_name=payload.staff_name,
            latitude=payload.latitude,
            longitude=payload.longitude,
        )
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return DeliveryPickupRead.model_validate(record)


@router.post(
    "/{delivery_pickup_id}/complete",
    response_model=DeliveryPickupRead,
    summary="Complete delivery or pickup",
)
async def complete(
    delivery_pickup_id: uuid.UUID, payload: StaffActionRequest, session: SessionDep
) -> DeliveryPickupRead:
    try:
        record = await delivery_service.complete_delivery_pickup(
            session,
            delivery_pickup_id=delivery_pickup_id,
            staff_id=payload.staff_id,
            staff_name=payload.staff_name,
            latitude=payload.latitude,
            longitude=payload.longitude,
        )
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return DeliveryPickupRead.model_validate(record)


@router.post(
    "/{delivery_pickup_id}/cancel",
    response_model=DeliveryPickupRead,
    summary="Cancel delivery or pickup",
)
async def cancel(
    delivery_pickup_id: uuid.UUID, payload: CancelRequest, session: SessionDep
) -> DeliveryPickupRead:
    try:
        record = await delivery_service.cancel_delivery_pickup(
            session,
            delivery_pickup_id=delivery_pickup_id,
            user_id=payload.user_id,
            reason=payload.reason,
        )
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return DeliveryPickupRead.model_validate(record)


@router.post(
    "/{delivery_pickup_id}/scan-storage",
    response_model=DeliveryPickupEventRead,
    status_code=status.HTTP_201_CREATED,
    summary="Scan unit at storage",
)
async def scan_at_storage(
    delivery_pickup_id: uuid.UUID, payload: ScanAtStorageRequest, session: SessionDep
) -> DeliveryPickupEventRead:
    try:
        event = await delivery_service.scan_unit_at_storage(
            session,
            delivery_pickup_id=delivery_pickup_id,
            unit_id=payload.unit_id,
            storage_id=payload.storage_id,
            user_id=payload.user_id,
            user_name=payload.user_name,
            latitude=payload.latitude,
            longitude=payload.longitude,
        )
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return DeliveryPickupEventRead.model_validate(event)


@router.post(
    "/{delivery_pickup_id}/scan-location",
    response_model=DeliveryPickupEventRead,
    status_code=status.HTTP_201_CREATED,
    summary="Scan unit at client address",
)
async def scan_at_location(
    delivery_pickup_id: uuid.UUID, payload: ScanAtLocationRequest, session: SessionDep
) -> DeliveryPickupEventRead:
    try:
        event = await delivery_service.scan_unit_at_location(
            session,
            delivery_pickup_id=delivery_pickup_id,
            unit_id=payload.unit_id,
            user_id=payload.user_id,
            user_name=payload.user_name,
            latitude=payload.latitude,
            longitude=payload.longitude,
        )
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return DeliveryPickupEventRead.model_validate(event)
