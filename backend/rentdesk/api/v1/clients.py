"""Client endpoints."""
from __future__ import annotations

import uuid

from fastapi import APIRouter, HTTPException, Query, status

from rentdesk.api.deps import SessionDep
from rentdesk.api.errors import to_http_error
from rentdesk.models.client import Client
from rentdesk.schemas.client import ClientCreate, ClientRead, ClientUpdate
from rentdesk.services import client_service

router = APIRouter()


async def _get_client_or_404(session: SessionDep, client_id: uuid.UUID) -> Client:
    client = await client_service.get_client(session, client_id)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Client not found"
        )
    return client


@router.get("", response_model=list[ClientRead], summary="List clients")
async def list_clients(
    session: SessionDep, skip: int = 0, limit: int = 50
) -> list[ClientRead]:
    clients = await client_service.list_clients(session, skip=skip, limit=limit)
    return [ClientRead.model_validate(obj) for obj in clients]


@router.post(
    "",
    response_model=ClientRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create client",
)
async def create_client(payload: ClientCreate, session: SessionDep) -> ClientRead:
    client = await client_service.create_client(session, payload)
    return ClientRead.model_validate(client)


@router.get("/search", response_model=list[ClientRead], summary="Search clients")
async def search_clients(
    session: SessionDep,
    q: str = Query(default="", description="Name, e-mail, phone or document"),
) -> list[ClientRead]:
    clients = await client_service.search_clients(session, q)
    return [ClientRead.model_validate(obj) for obj in clients]


@router.get("/{client_id}", response_model=ClientRead, summary="Get client")
async def read_client(client_id: uuid.UUID, session: SessionDep) -> ClientRead:
    client = await _get_client_or_404(session, client_id)
    return ClientRead.model_validate(client)


@router.patch("/{client_id}", response_model=ClientRead, summary="Update client")
async def update_client(
    client_id: uuid.UUID, payload: ClientUpdate, session: SessionDep
) -> ClientRead:
    client = await _get_client_or_404(session, client_id)
    try:
        client = await client_service.update_client(session, client, payload)
    except ValueError as exc:
        raise to_http_error(exc) from exc
    return ClientRead.model_validate(client)


@router.delete(
    "/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete client",
)
async def delete_client(client_id: uuid.UUID, session: SessionDep) -> None:
    try:
        await client_service.delete_client(session, client_id=client_id)
    except ValueError as exc:
        raise to_http_error(exc) from exc
