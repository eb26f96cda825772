"""Delivery and pickup handoff services.

Every reservation line item gets a delivery record and a pickup record. Staff
move each record through ``pending -> assigned -> in_progress -> completed``
and scan the physical unit along the way; each of those operations writes the
record update and its history event in one transaction.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from datetime import UTC, date, datetime, time
from typing import Any

from sqlalchemy import Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from rentdesk.core.config import get_settings
from rentdesk.db.session import unit_of_work
from rentdesk.models.delivery import (
    DeliveryPickup,
    DeliveryPickupEvent,
    DeliveryPickupEventType,
    DeliveryPickupType,
    DeliveryStatus,
)
from rentdesk.models.mixins import utcnow
from rentdesk.models.product_unit import ProductUnit, ProductUnitStatus
from rentdesk.models.reservation import Reservation
from rentdesk.models.storage import Storage
from rentdesk.models.user import User
from rentdesk.services.delivery_lifecycle import (
    LifecycleAction,
    can_scan,
    evaluate_transition,
)
from rentdesk.services.exceptions import (
    DeliveryPickupNotFoundError,
    ProductUnitNotFoundError,
    ReservationNotFoundError,
    StorageNotFoundError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)

_DEFAULT_NOTES: dict[LifecycleAction, str] = {
    LifecycleAction.ASSIGN: "Assigned for delivery/pickup",
    LifecycleAction.START: "Started delivery/pickup",
    LifecycleAction.COMPLETE: "Completed delivery/pickup",
    LifecycleAction.CANCEL: "Cancelled delivery/pickup",
}


class InvalidTransitionError(ValueError):
    """Raised when a handoff is not in a state that allows the operation."""


def _coerce_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def _monotonic_now(*previous: datetime | None) -> datetime:
    now = utcnow()
    for value in previous:
        if value is not None:
            now = max(now, _coerce_utc(value))
    return now


def _parse_window(value: str) -> time:
    return time.fromisoformat(value)


def _base_query() -> Select[tuple[DeliveryPickup]]:
    return select(DeliveryPickup).options(
        selectinload(DeliveryPickup.client),
        selectinload(DeliveryPickup.product),
        selectinload(DeliveryPickup.assigned_user),
        selectinload(DeliveryPickup.product_unit).selectinload(ProductUnit.storage),
    )


async def list_deliveries_pickups(
    session: AsyncSession,
    *,
    type: DeliveryPickupType | None = None,
    status: DeliveryStatus | None = None,
    scheduled_date: date | None = None,
    assigned_to_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 100,
) -> Sequence[DeliveryPickup]:
    """Return handoffs ordered by schedule, optionally filtered."""
    stmt = _base_query()
    if type is not None:
        stmt = stmt.where(DeliveryPickup.type == type)
    if status is not None:
        stmt = stmt.where(DeliveryPickup.status == status)
    if scheduled_date is not None:
        stmt = stmt.where(DeliveryPickup.scheduled_date == scheduled_date)
    if assigned_to_id is not None:
        stmt = stmt.where(DeliveryPickup.assigned_to_id == assigned_to_id)
    stmt = (
        stmt.order_by(
            DeliveryPickup.scheduled_date.asc(),
            DeliveryPickup.scheduled_time_start.asc(),
        )
        .offset(skip)
        .limit(limit)
    )
    result = await session.execute(stmt)
    return result.scalars().unique().all()


async def get_delivery_pickup(
    session: AsyncSession, *, delivery_pickup_id: uuid.UUID
) -> DeliveryPickup | None:
    """Fetch one handoff with its client, product, assignee and unit."""
    stmt = _base_query().where(DeliveryPickup.id == delivery_pickup_id)
    result = await session.execute(stmt)
    return result.scalars().unique().one_or_none()


async def _reload(
    session: AsyncSession, delivery_pickup_id: uuid.UUID
) -> DeliveryPickup:
    stmt = (
        _base_query()
        .where(DeliveryPickup.id == delivery_pickup_id)
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)
    return result.scalars().unique().one()


async def _require_delivery_pickup(
    session: AsyncSession, delivery_pickup_id: uuid.UUID
) -> DeliveryPickup:
    record = await get_delivery_pickup(session, delivery_pickup_id=delivery_pickup_id)
    if record is None:
        raise DeliveryPickupNotFoundError()
    return record


async def _require_user(session: AsyncSession, user_id: uuid.UUID) -> User:
    user = await session.get(User, user_id)
    if user is None or not user.is_active:
        raise UserNotFoundError()
    return user


async def get_delivery_pickup_events(
    session: AsyncSession, *, delivery_pickup_id: uuid.UUID
) -> list[DeliveryPickupEvent]:
    """Return the history of a handoff, oldest first."""
    stmt = (
        select(DeliveryPickupEvent)
        .where(DeliveryPickupEvent.delivery_pickup_id == delivery_pickup_id)
        .order_by(DeliveryPickupEvent.event_time.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def _transition(
    session: AsyncSession,
    *,
    delivery_pickup_id: uuid.UUID,
    action: LifecycleAction,
    user: User,
    user_name: str | None = None,
    latitude: float | None = None,
    longitude: float | None = None,
    notes: str | None = None,
    extra_values: dict[str, Any] | None = None,
) -> DeliveryPickup:
    record = await _require_delivery_pickup(session, delivery_pickup_id)
    result = evaluate_transition(
        record.status,
        action,
        assigned_to_id=record.assigned_to_id,
        actor_id=user.id,
    )
    if not result.ok:
        logger.warning(
            "Rejected %s on handoff %s: %s", action.value, record.id, result.error
        )
        raise InvalidTransitionError(result.error)

    now = _monotonic_now(record.assigned_at, record.started_at, record.completed_at)
    values: dict[str, Any] = {"status": result.to_status, "updated_at": now}
    if result.timestamp_field is not None:
        values[result.timestamp_field] = now
    values.update(extra_values or {})

    stmt = update(DeliveryPickup).where(
        DeliveryPickup.id == record.id,
        DeliveryPickup.status == result.from_status,
    )
    if result.requires_assignee:
        stmt = stmt.where(DeliveryPickup.assigned_to_id == user.id)
    stmt = stmt.values(**values).execution_options(synchronize_session=False)

    async with unit_of_work(session):
        outcome = await session.execute(stmt)
        if outcome.rowcount != 1:
            logger.warning(
                "Handoff %s changed before %s could be applied", record.id, action.value
            )
            raise InvalidTransitionError(
                f"Handoff is no longer {result.from_status.value}; "
                f"cannot {action.value} it"
            )
        session.add(
            DeliveryPickupEvent(
                delivery_pickup_id=record.id,
                type=result.event_type.value,
                user_id=user.id,
                user_name=user_name or user.name,
                event_time=now,
                latitude=latitude,
                longitude=longitude,
                notes=notes or _DEFAULT_NOTES[action],
            )
        )

    record = await _reload(session, record.id)
    logger.info(
        "Handoff %s moved %s -> %s by user %s",
        record.id,
        result.from_status.value,
        record.status.value,
        user.id,
    )
    return record


async def assign_delivery_pickup(
    session: AsyncSession,
    *,
    delivery_pickup_id: uuid.UUID,
    staff_id: uuid.UUID,
    staff_name: str | None = None,
    notes: str | None = None,
) -> DeliveryPickup:
    """Assign a pending handoff to a staff member."""
    staff = await _require_user(session, staff_id)
    name = staff_name or staff.name
    return await _transition(
        session,
        delivery_pickup_id=delivery_pickup_id,
        action=LifecycleAction.ASSIGN,
        user=staff,
        user_name=name,
        notes=notes,
        extra_values={"assigned_to_id": staff.id, "assigned_to_name": name},
    )


async def start_delivery_pickup(
    session: AsyncSession,
    *,
    delivery_pickup_id: uuid.UUID,
    staff_id: uuid.UUID,
    staff_name: str | None = None,
    latitude: float | None = None,
    longitude: float | None = None,
) -> DeliveryPickup:
    """Mark an assigned handoff as under way; only its assignee may do this."""
    staff = await _require_user(session, staff_id)
    return await _transition(
        session,
        delivery_pickup_id=delivery_pickup_id,
        action=LifecycleAction.START,
        user=staff,
        user_name=staff_name,
        latitude=latitude,
        longitude=longitude,
    )


async def complete_delivery_pickup(
    session: AsyncSession,
    *,
    delivery_pickup_id: uuid.UUID,
    staff_id: uuid.UUID,
    staff_name: str | None = None,
    latitude: float | None = None,
    longitude: float | None = None,
) -> DeliveryPickup:
    """Close an in-progress handoff; only its assignee may do this."""
    staff = await _require_user(session, staff_id)
    return await _transition(
        session,
        delivery_pickup_id=delivery_pickup_id,
        action=LifecycleAction.COMPLETE,
        user=staff,
        user_name=staff_name,
        latitude=latitude,
        longitude=longitude,
    )


async def cancel_delivery_pickup(
    session: AsyncSession,
    *,
    delivery_pickup_id: uuid.UUID,
    user_id: uuid.UUID,
    reason: str | None = None,
) -> DeliveryPickup:
    """Cancel a handoff that has not been completed."""
    user = await _require_user(session, user_id)
    return await _transition(
        session,
        delivery_pickup_id=delivery_pickup_id,
        action=LifecycleAction.CANCEL,
        user=user,
        notes=reason,
    )


async def _scan_targets(
    session: AsyncSession,
    *,
    delivery_pickup_id: uuid.UUID,
    unit_id: uuid.UUID,
    user_id: uuid.UUID,
) -> tuple[DeliveryPickup, ProductUnit, User]:
    record = await _require_delivery_pickup(session, delivery_pickup_id)
    if not can_scan(record.status):
        logger.warning("Rejected scan on %s handoff %s", record.status.value, record.id)
        raise InvalidTransitionError(
            f"Cannot scan units for a handoff with status {record.status.value}"
        )
    unit = await session.get(ProductUnit, unit_id)
    if unit is None:
        raise ProductUnitNotFoundError()
    if unit.product_id != record.product_id:
        raise ValueError("Scanned unit does not belong to the handoff's product")
    user = await _require_user(session, user_id)
    return record, unit, user


async def scan_unit_at_storage(
    session: AsyncSession,
    *,
    delivery_pickup_id: uuid.UUID,
    unit_id: uuid.UUID,
    storage_id: uuid.UUID,
    user_id: uuid.UUID,
    user_name: str | None = None,
    latitude: float | None = None,
    longitude: float | None = None,
) -> DeliveryPickupEvent:
    """Record a unit scan at a storage.

    For a delivery this binds the unit to the handoff (first scan wins). For
    a pickup the unit is checked back in: it moves to the storage and becomes
    available again.
    """
    record, unit, user = await _scan_targets(
        session, delivery_pickup_id=delivery_pickup_id, unit_id=unit_id, user_id=user_id
    )
    storage = await session.get(Storage, storage_id)
    if storage is None:
        raise StorageNotFoundError()

    now = utcnow()
    async with unit_of_work(session):
        if record.type == DeliveryPickupType.DELIVERY:
            event_type = DeliveryPickupEventType.SCANNED_AT_STORAGE_DELIVERY
            notes = f"Unit scanned at storage for delivery: {storage.name}"
            if record.product_unit_id is None:
                record.product_unit_id = unit.id
                record.updated_at = now
        else:
            event_type = DeliveryPickupEventType.SCANNED_AT_STORAGE_RETURN
            notes = f"Unit returned to storage after pickup: {storage.name}"
            unit.storage_id = storage.id
            unit.status = ProductUnitStatus.AVAILABLE
        event = DeliveryPickupEvent(
            delivery_pickup_id=record.id,
            type=event_type.value,
            user_id=user.id,
            user_name=user_name or user.name,
            event_time=now,
            latitude=latitude,
            longitude=longitude,
            notes=notes,
            unit_id=unit.id,
            storage_id=storage.id,
            location=f"{storage.name} - {storage.address}",
        )
        session.add(event)

    logger.info(
        "Unit %s scanned at storage %s for handoff %s", unit.id, storage.id, record.id
    )
    return event


async def scan_unit_at_location(
    session: AsyncSession,
    *,
    delivery_pickup_id: uuid.UUID,
    unit_id: uuid.UUID,
    user_id: uuid.UUID,
    user_name: str | None = None,
    latitude: float | None = None,
    longitude: float | None = None,
) -> DeliveryPickupEvent:
    """Record a unit scan at the customer's address.

    A delivery scan hands the unit over: it becomes rented and leaves its
    storage. A pickup scan only logs the event; the unit is checked back in
    when it is scanned at a storage.
    """
    record, unit, user = await _scan_targets(
        session, delivery_pickup_id=delivery_pickup_id, unit_id=unit_id, user_id=user_id
    )

    now = utcnow()
    async with unit_of_work(session):
        if record.type == DeliveryPickupType.DELIVERY:
            event_type = DeliveryPickupEventType.SCANNED_AT_DELIVERY
            notes = f"Unit delivered to client at {record.address}, {record.city}"
            unit.status = ProductUnitStatus.RENTED
            unit.storage_id = None
        else:
            event_type = DeliveryPickupEventType.SCANNED_AT_PICKUP
            notes = f"Unit collected from client at {record.address}, {record.city}"
        event = DeliveryPickupEvent(
            delivery_pickup_id=record.id,
            type=event_type.value,
            user_id=user.id,
            user_name=user_name or user.name,
            event_time=now,
            latitude=latitude,
            longitude=longitude,
            notes=notes,
            unit_id=unit.id,
            location=f"{record.address}, {record.city}, {record.state}",
        )
        session.add(event)

    logger.info("Unit %s scanned at client site for handoff %s", unit.id, record.id)
    return event


async def create_delivery_pickups_from_reservation(
    session: AsyncSession, *, reservation_id: uuid.UUID
) -> list[DeliveryPickup]:
    """Create the delivery and pickup records for each reservation line item.

    Deliveries are scheduled on the start date in the morning window and
    pickups on the end date in the afternoon window. Pickup address fields
    fall back to the delivery address one by one. All records are written in
    a single transaction.
    """
    stmt = (
        select(Reservation)
        .options(selectinload(Reservation.items), selectinload(Reservation.client))
        .where(Reservation.id == reservation_id)
    )
    reservation = (await session.execute(stmt)).scalars().unique().one_or_none()
    if reservation is None:
        raise ReservationNotFoundError()

    existing = await session.execute(
        select(DeliveryPickup.id)
        .where(DeliveryPickup.reservation_id == reservation.id)
        .limit(1)
    )
    if existing.first() is not None:
        raise ValueError("Deliveries and pickups already exist for this reservation")

    settings = get_settings()
    delivery_window = (
        _parse_window(settings.delivery_window_start),
        _parse_window(settings.delivery_window_end),
    )
    pickup_window = (
        _parse_window(settings.pickup_window_start),
        _parse_window(settings.pickup_window_end),
    )

    common = {
        "reservation_id": reservation.id,
        "client_id": reservation.client_id,
        "client_name": reservation.client.name,
        "status": DeliveryStatus.PENDING,
    }
    records: list[DeliveryPickup] = []
    async with unit_of_work(session):
        for item in reservation.items:
            delivery = DeliveryPickup(
                **common,
                type=DeliveryPickupType.DELIVERY,
                product_id=item.product_id,
                product_name=item.product_name,
                scheduled_date=reservation.start_date,
                scheduled_time_start=delivery_window[0],
                scheduled_time_end=delivery_window[1],
                address=reservation.delivery_address,
                city=reservation.delivery_city,
                state=reservation.delivery_state,
                postal_code=reservation.delivery_postal_code,
                country=reservation.delivery_country,
                notes=reservation.delivery_notes,
            )
            pickup = DeliveryPickup(
                **common,
                type=DeliveryPickupType.PICKUP,
                product_id=item.product_id,
                product_name=item.product_name,
                scheduled_date=reservation.end_date,
                scheduled_time_start=pickup_window[0],
                scheduled_time_end=pickup_window[1],
                address=reservation.pickup_address or reservation.delivery_address,
                city=reservation.pickup_city or reservation.delivery_city,
                state=reservation.pickup_state or reservation.delivery_state,
                postal_code=(
                    reservation.pickup_postal_code or reservation.delivery_postal_code
                ),
                country=reservation.pickup_country or reservation.delivery_country,
                notes=reservation.pickup_notes,
            )
            session.add_all([delivery, pickup])
            records.extend([delivery, pickup])

    logger.info(
        "Created %d handoff records for reservation %s", len(records), reservation.id
    )
    ids = [record.id for record in records]
    result = await session.execute(
        _base_query()
        .where(DeliveryPickup.id.in_(ids))
        .execution_options(populate_existing=True)
    )
    loaded = {record.id: record for record in result.scalars().unique()}
    return [loaded[record_id] for record_id in ids]


async def get_available_storages_for_product(
    session: AsyncSession, *, product_id: uuid.UUID
) -> list[Storage]:
    """Storages currently holding at least one available unit of a product."""
    stmt = (
        select(Storage)
        .join(ProductUnit, ProductUnit.storage_id == Storage.id)
        .where(
            ProductUnit.product_id == product_id,
            ProductUnit.status == ProductUnitStatus.AVAILABLE,
            ProductUnit.is_active.is_(True),
        )
        .order_by(Storage.name.asc())
    )
    result = await session.execute(stmt)
    storages: dict[uuid.UUID, Storage] = {}
    for storage in result.scalars():
        storages.setdefault(storage.id, storage)
    return list(storages.values())
