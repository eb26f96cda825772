"""Maintenance record endpoints."""
from __future__ import annotations

import uuid

from fastapi import APIRouter, HTTPException, status

from rentdesk.api.deps import SessionDep
from rentdesk.api.errors import to_http_error
from rentdesk.models.maintenance import ProductMaintenance
from rentdesk.schemas.maintenance import MaintenanceRead, MaintenanceUpdate
from rentdesk.services import maintenance_service

router = APIRouter()


async def _get_record_or_404(
    session: SessionDep, maintenance_id: uuid.UUID
) -> ProductMaintenance:
    record = await maintenance_service.get_maintenance(
        session, maintenance_id=maintenance_id
    )
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Maintenance record not found",
        )
    return record


@router.get(
    "/{maintenance_id}", response_model=MaintenanceRead, summary="Get maintenance"
)
async def read_maintenance(
    maintenance_id: uuid.UUID, session: SessionDep
) -> MaintenanceRead:
    record = await _get_record_or_404(session, maintenance_id)
    return MaintenanceRead.model_validate(record)


@router.patch(
    "/{maintenance_id}",
    response_model=MaintenanceRead,
    summary="Update maintenance",
)
async def update_maintenance(
    maintenance_id: uuid.UUID, payload: MaintenanceUpdate, session: SessionDep
) -> MaintenanceRead:
    record = await _get_record_or_404(session, maintenance_id)
    try:
        record = await maintenance_service.update_maintenance(session, record, payload)
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return MaintenanceRead.model_validate(record)


@router.delete(
    "/{maintenance_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete maintenance",
)
async def delete_maintenance(maintenance_id: uuid.UUID, session: SessionDep) -> None:
    try:
        await maintenance_service.delete_maintenance(
            session, maintenance_id=maintenance_id
        )
    except ValueError as exc:
        raise to_http_error(exc) from exc
