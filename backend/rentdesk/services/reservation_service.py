"""Reservation management service helpers."""
from __future__ import annotations

import logging
import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from rentdesk.db.session import unit_of_work
from rentdesk.models.client import Client
from rentdesk.models.delivery import DeliveryPickup
from rentdesk.models.product import Product
from rentdesk.models.reservation import (
    Reservation,
    ReservationProduct,
    ReservationStatus,
)
from rentdesk.schemas.reservation import ReservationCreate, ReservationUpdate
from rentdesk.services.exceptions import (
    ClientNotFoundError,
    ProductNotFoundError,
    ProductUnavailableError,
    ReservationNotFoundError,
)
from rentdesk.services.pricing_calculator import PriceCalculation, resolve_price
from rentdesk.services.product_pricing_service import list_pricing_tiers

logger = logging.getLogger(__name__)


def _base_reservation_query():
    return select(Reservation).options(
        selectinload(Reservation.client),
        selectinload(Reservation.items),
    )


async def _price_for_period(
    session: AsyncSession, product: Product, rental_days: int
) -> PriceCalculation:
    tiers = await list_pricing_tiers(session, product_id=product.id)
    return resolve_price(product.daily_price, rental_days, tiers)


async def _has_handoffs(session: AsyncSession, reservation_id: uuid.UUID) -> bool:
    result = await session.execute(
        select(DeliveryPickup.id)
        .where(DeliveryPickup.reservation_id == reservation_id)
        .limit(1)
    )
    return result.first() is not None


async def list_reservations(
    session: AsyncSession,
    *,
    client_id: uuid.UUID | None = None,
    status: ReservationStatus | None = None,
    product_id: uuid.UUID | None = None,
    period_start: date | None = None,
    period_end: date | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[Reservation]:
    """Return reservations, most recent start date first.

    ``period_start``/``period_end`` keep reservations whose dates overlap the
    period; either bound may be omitted.
    """
    stmt = _base_reservation_query()
    if client_id is not None:
        stmt = stmt.where(Reservation.client_id == client_id)
    if status is not None:
        stmt = stmt.where(Reservation.status == status)
    if product_id is not None:
        stmt = stmt.where(
            Reservation.id.in_(
                select(ReservationProduct.reservation_id).where(
                    ReservationProduct.product_id == product_id
                )
            )
        )
    if period_end is not None:
        stmt = stmt.where(Reservation.start_date <= period_end)
    if period_start is not None:
        stmt = stmt.where(Reservation.end_date >= period_start)
    stmt = (
        stmt.order_by(Reservation.start_date.desc())
        .offset(skip)
        .limit(min(limit, 100))
    )
    result = await session.execute(stmt)
    return list(result.scalars().unique().all())


async def get_reservation(
    session: AsyncSession, *, reservation_id: uuid.UUID
) -> Reservation:
    """Fetch a reservation with its client and line items."""
    stmt = _base_reservation_query().where(Reservation.id == reservation_id)
    result = await session.execute(stmt.execution_options(populate_existing=True))
    reservation = result.scalars().unique().one_or_none()
    if reservation is None:
        raise ReservationNotFoundError()
    return reservation


async def check_product_availability(
    session: AsyncSession,
    *,
    product_id: uuid.UUID,
    start_date: date,
    end_date: date,
    exclude_reservation_id: uuid.UUID | None = None,
) -> bool:
    """Return whether no confirmed reservation books the product in the period."""
    stmt = (
        select(Reservation.id)
        .join(ReservationProduct, ReservationProduct.reservation_id == Reservation.id)
        .where(
            ReservationProduct.product_id == product_id,
            Reservation.status == ReservationStatus.CONFIRMED,
            Reservation.start_date <= end_date,
            Reservation.end_date >= start_date,
        )
        .limit(1)
    )
    if exclude_reservation_id is not None:
        stmt = stmt.where(Reservation.id != exclude_reservation_id)
    result = await session.execute(stmt)
    return result.first() is None


async def _ensure_available(
    session: AsyncSession,
    product: Product,
    start_date: date,
    end_date: date,
    exclude_reservation_id: uuid.UUID | None = None,
) -> None:
    available = await check_product_availability(
        session,
        product_id=product.id,
        start_date=start_date,
        end_date=end_date,
        exclude_reservation_id=exclude_reservation_id,
    )
    if not available:
        logger.warning(
            "Product %s already booked between %s and %s",
            product.id,
            start_date,
            end_date,
        )
        raise ProductUnavailableError(
            f"{product.name} is already booked between {start_date} and {end_date}"
        )


async def create_reservation(
    session: AsyncSession, payload: ReservationCreate
) -> Reservation:
    """Create a reservation and price each line for the rental period.

    The rental length is the number of days between the start and end dates;
    a same-day rental is billed as one day. Products already held by a
    confirmed reservation in the period are refused.
    """
    client = await session.get(Client, payload.client_id)
    if client is None:
        raise ClientNotFoundError()

    rental_days = (payload.end_date - payload.start_date).days
    items: list[ReservationProduct] = []
    total = Decimal("0.00")
    for line in payload.items:
        product = await session.get(Product, line.product_id)
        if product is None or not product.is_active:
            raise ProductNotFoundError()
        await _ensure_available(session, product, payload.start_date, payload.end_date)
        price = await _price_for_period(session, product, rental_days)
        line_total = price.total_price * line.quantity
        items.append(
            ReservationProduct(
                product_id=product.id,
                product_name=product.name,
                quantity=line.quantity,
                days=max(1, rental_days),
                price_per_day=price.price_per_day,
                total_price=line_total,
                tier_name=price.tier_name,
            )
        )
        total += line_total

    data = payload.model_dump(exclude={"items"})
    reservation = Reservation(**data, total_value=total, items=items)
    async with unit_of_work(session):
        session.add(reservation)

    logger.info(
        "Created reservation %s with %d items, total %s",
        reservation.id,
        len(items),
        total,
    )
    return await get_reservation(session, reservation_id=reservation.id)


async def update_reservation(
    session: AsyncSession, *, reservation_id: uuid.UUID, payload: ReservationUpdate
) -> Reservation:
    """Apply a partial update, re-pricing every line when the dates move.

    Dates are frozen once deliveries and pickups have been scheduled. A
    reservation that ends up confirmed must not clash with another confirmed
    booking of its products.
    """
    reservation = await get_reservation(session, reservation_id=reservation_id)
    changes = payload.model_dump(exclude_unset=True)
    start_date = changes.get("start_date", reservation.start_date)
    end_date = changes.get("end_date", reservation.end_date)
    if end_date < start_date:
        raise ValueError("end_date must not be before start_date")

    dates_changed = (start_date, end_date) != (
        reservation.start_date,
        reservation.end_date,
    )
    if dates_changed and await _has_handoffs(session, reservation.id):
        raise ValueError(
            "Dates cannot change once deliveries and pickups are scheduled"
        )

    products: dict[uuid.UUID, Product] = {}
    for item in reservation.items:
        product = await session.get(Product, item.product_id)
        if product is None:
            raise ProductNotFoundError()
        products[product.id] = product

    if changes.get("status", reservation.status) == ReservationStatus.CONFIRMED:
        for product in products.values():
            await _ensure_available(
                session,
                product,
                start_date,
                end_date,
                exclude_reservation_id=reservation.id,
            )

    prices: dict[uuid.UUID, PriceCalculation] = {}
    if dates_changed:
        rental_days = (end_date - start_date).days
        for product in products.values():
            prices[product.id] = await _price_for_period(session, product, rental_days)

    async with unit_of_work(session):
        for field, value in changes.items():
            setattr(reservation, field, value)
        if dates_changed:
            total = Decimal("0.00")
            for item in reservation.items:
                price = prices[item.product_id]
                item.days = max(1, (end_date - start_date).days)
                item.price_per_day = price.price_per_day
                item.total_price = price.total_price * item.quantity
                item.tier_name = price.tier_name
                total += item.total_price
            reservation.total_value = total

    logger.info("Updated reservation %s (%s)", reservation.id, ", ".join(changes))
    return await get_reservation(session, reservation_id=reservation.id)


async def delete_reservation(
    session: AsyncSession, *, reservation_id: uuid.UUID
) -> None:
    """Delete a reservation that has no deliveries or pickups scheduled."""
    reservation = await get_reservation(session, reservation_id=reservation_id)
    if await _has_handoffs(session, reservation.id):
        raise ValueError(
            "Reservations with scheduled deliveries or pickups cannot be deleted; "
            "cancel them instead"
        )
    async with unit_of_work(session):
        await session.delete(reservation)
    logger.info("Deleted reservation %s", reservation_id)
