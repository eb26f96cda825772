"""Client data access helpers."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from rentdesk.models.client import Client
from rentdesk.models.reservation import Reservation
from rentdesk.schemas.client import ClientCreate, ClientUpdate
from rentdesk.services.exceptions import ClientNotFoundError

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10


async def get_client(session: AsyncSession, client_id: uuid.UUID) -> Client | None:
    return await session.get(Client, client_id)


async def list_clients(
    session: AsyncSession, *, skip: int = 0, limit: int = 50
) -> list[Client]:
    """Return clients ordered by name."""
    result = await session.execute(
        select(Client).order_by(Client.name.asc()).offset(skip).limit(min(limit, 100))
    )
    return list(result.scalars().all())


async def search_clients(
    session: AsyncSession, query: str = "", *, limit: int = SEARCH_LIMIT
) -> list[Client]:
    """Match ``query`` against name, e-mail, phone or document, ignoring case.

    A blank query returns the first clients by name.
    """
    stmt = select(Client)
    term = query.strip()
    if term:
        pattern = f"%{term}%"
        stmt = stmt.where(
            or_(
                Client.name.ilike(pattern),
                Client.email.ilike(pattern),
                Client.phone.ilike(pattern),
                Client.document.ilike(pattern),
            )
        )
    stmt = stmt.order_by(Client.name.asc()).limit(min(limit, 100))
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def create_client(session: AsyncSession, payload: ClientCreate) -> Client:
    """Create a client record."""
    client = Client(**payload.model_dump())
    session.add(client)
    await session.commit()
    await session.refresh(client)
    return client


async def update_client(
    session: AsyncSession, client: Client, payload: ClientUpdate
) -> Client:
    """Update mutable fields on a client."""
    changes = payload.model_dump(exclude_unset=True)
    if "name" in changes and changes["name"] is None:
        raise ValueError("name cannot be null")
    for field, value in changes.items():
        setattr(client, field, value)
    await session.commit()
    await session.refresh(client)
    return client


async def delete_client(session: AsyncSession, *, client_id: uuid.UUID) -> None:
    """Delete a client that has no reservations."""
    client = await session.get(Client, client_id)
    if client is None:
        raise ClientNotFoundError()
    booked = await session.execute(
        select(Reservation.id).where(Reservation.client_id == client.id).limit(1)
    )
    if booked.first() is not None:
        raise ValueError("Clients with reservations cannot be deleted")
    await session.delete(client)
    await session.commit()
    logger.info("Deleted client %s", client_id)
