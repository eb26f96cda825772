"""Storage administration API endpoints."""
from __future__ import annotations

import uuid

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError

from rentdesk.api.deps import SessionDep
from rentdesk.models.storage import Storage
from rentdesk.schemas.product_unit import ProductUnitRead
from rentdesk.schemas.storage import (
    NearbyStorageRead,
    StorageCreate,
    StorageRead,
    StorageUpdate,
)
from rentdesk.services import storage_service

router = APIRouter()


async def _get_storage_or_404(session: SessionDep, storage_id: uuid.UUID) -> Storage:
    storage = await storage_service.get_storage(session, storage_id=storage_id)
    if storage is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Storage not found"
        )
    return storage


@router.get("", response_model=list[StorageRead], summary="List storages")
async def list_storages(
    session: SessionDep,
    include_inactive: bool = False,
    skip: int = 0,
    limit: int = 50,
) -> list[StorageRead]:
    storages = await storage_service.list_storages(
        session, include_inactive=include_inactive, skip=skip, limit=limit
    )
    return [StorageRead.model_validate(obj) for obj in storages]


@router.post(
    "",
    response_model=StorageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create storage",
)
async def create_storage(payload: StorageCreate, session: SessionDep) -> StorageRead:
    try:
        storage = await storage_service.create_storage(session, payload)
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Storage already exists"
        ) from exc
    return StorageRead.model_validate(storage)


@router.get(
    "/nearby",
    response_model=list[NearbyStorageRead],
    summary="Storages near a point",
)
async def nearby_storages(
    session: SessionDep,
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    max_km: float | None = Query(default=None, gt=0),
) -> list[NearbyStorageRead]:
    nearby = await storage_service.find_nearby_storages(
        session, latitude=latitude, longitude=longitude, max_km=max_km
    )
    return [
        NearbyStorageRead(
            **StorageRead.model_validate(storage).model_dump(),
            distance_km=round(distance, 3),
        )
        for storage, distance in nearby
    ]


@router.get("/{storage_id}", response_model=StorageRead, summary="Get storage")
async def read_storage(storage_id: uuid.UUID, session: SessionDep) -> StorageRead:
    storage = await _get_storage_or_404(session, storage_id)
    return StorageRead.model_validate(storage)


@router.patch("/{storage_id}", response_model=StorageRead, summary="Update storage")
async def update_storage(
    storage_id: uuid.UUID, payload: StorageUpdate, session: SessionDep
) -> StorageRead:
    storage = await _get_storage_or_404(session, storage_id)
    storage = await storage_service.update_storage(session, storage, payload)
    return StorageRead.model_validate(storage)


@router.delete(
    "/{storage_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deactivate storage",
)
async def delete_storage(storage_id: uuid.UUID, session: SessionDep) -> None:
    storage = await _get_storage_or_404(session, storage_id)
    await storage_service.deactivate_storage(session, storage)


@router.get(
    "/{storage_id}/units",
    response_model=list[ProductUnitRead],
    summary="Units kept at a storage",
)
async def storage_units(
    storage_id: uuid.UUID, session: SessionDep
) -> list[ProductUnitRead]:
    await _get_storage_or_404(session, storage_id)
    units = await storage_service.list_storage_units(session, storage_id=storage_id)
    return [ProductUnitRead.model_validate(unit) for unit in units]
