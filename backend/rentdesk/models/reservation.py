"""Reservation models."""
from __future__ import annotations

import enum
import uuid
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Date, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentdesk.db.base import Base
from rentdesk.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from rentdesk.models.client import Client
    from rentdesk.models.product import Product


class ReservationStatus(str, enum.Enum):
    """Lifecycle states for reservations."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class Reservation(TimestampMixin, Base):
    """A customer's rental of one or more products over a date range."""

    __tablename__ = "reservations"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    client_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    status: Mapped[ReservationStatus] = mapped_column(
        Enum(ReservationStatus), default=ReservationStatus.PENDING, nullable=False
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    total_value: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0.00"), nullable=False
    )
    notes: Mapped[str | None] = mapped_column(String(1024))

    delivery_address: Mapped[str] = mapped_column(String(255), nullable=False)
    delivery_city: Mapped[str] = mapped_column(String(120), nullable=False)
    delivery_state: Mapped[str] = mapped_column(String(120), nullable=False)
    delivery_postal_code: Mapped[str] = mapped_column(String(32), nullable=False)
    delivery_country: Mapped[str] = mapped_column(String(120), nullable=False)
    delivery_notes: Mapped[str | None] = mapped_column(String(1024))

    pickup_address: Mapped[str | None] = mapped_column(String(255))
    pickup_city: Mapped[str | None] = mapped_column(String(120))
    pickup_state: Mapped[str | None] = mapped_column(String(120))
    pickup_postal_code: Mapped[str | None] = mapped_column(String(32))
    pickup_country: Mapped[str | None] = mapped_column(String(120))
    pickup_notes: Mapped[str | None] = mapped_column(String(1024))

    client: Mapped["Client"] = relationship("Client", back_populates="reservations")
    items: Mapped[list["ReservationProduct"]] = relationship(
        "ReservationProduct",
        back_populates="reservation",
        cascade="all, delete-orphan",
    )


class ReservationProduct(Base):
    """Line item: one product rented within a reservation."""

    __tablename__ = "reservation_products"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    reservation_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("reservations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("products.id", ondelete="RESTRICT"), nullable=False
    )
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    days: Mapped[int] = mapped_column(Integer, nullable=False)
    price_per_day: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    tier_name: Mapped[str | None] = mapped_column(String(120))

    reservation: Mapped[Reservation] = relationship(
        "Reservation", back_populates="items"
    )
    product: Mapped["Product"] = relationship("Product")
