"""Delivery/pickup handoff models."""
from __future__ import annotations

import enum
import uuid
from datetime import date, datetime, time
from typing import TYPE_CHECKING

from sqlalchemy import (
    Date,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    String,
    Time,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentdesk.db.base import Base
from rentdesk.models.mixins import TimestampMixin, utcnow

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from rentdesk.models.client import Client
    from rentdesk.models.product import Product
    from rentdesk.models.product_unit import ProductUnit
    from rentdesk.models.reservation import Reservation
    from rentdesk.models.user import User


class DeliveryPickupType(str, enum.Enum):
    """Which leg of the rental a handoff record covers."""

    DELIVERY = "delivery"
    PICKUP = "pickup"


class DeliveryStatus(str, enum.Enum):
    """Lifecycle states for a handoff."""

    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DeliveryPickupEventType(str, enum.Enum):
    """Tags written to the handoff event log."""

    ASSIGNED = "assigned"
    STARTED = "started"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    SCANNED_AT_STORAGE_DELIVERY = "scanned_at_storage_delivery"
    SCANNED_AT_STORAGE_RETURN = "scanned_at_storage_return"
    SCANNED_AT_DELIVERY = "scanned_at_delivery"
    SCANNED_AT_PICKUP = "scanned_at_pickup"


class DeliveryPickup(TimestampMixin, Base):
    """Delivery to, or pickup from, a customer for one reservation line item."""

    __tablename__ = "delivery_pickups"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    reservation_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("reservations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    client_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False
    )
    client_name: Mapped[str] = mapped_column(String(255), nullable=False)
    product_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("products.id", ondelete="RESTRICT"), nullable=False
    )
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    product_unit_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("product_units.id", ondelete="SET NULL")
    )
    type: Mapped[DeliveryPickupType] = mapped_column(
        Enum(DeliveryPickupType), nullable=False
    )
    status: Mapped[DeliveryStatus] = mapped_column(
        Enum(DeliveryStatus), default=DeliveryStatus.PENDING, nullable=False, index=True
    )
    scheduled_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    scheduled_time_start: Mapped[time] = mapped_column(Time, nullable=False)
    scheduled_time_end: Mapped[time] = mapped_column(Time, nullable=False)

    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(120), nullable=False)
    state: Mapped[str] = mapped_column(String(120), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(32), nullable=False)
    country: Mapped[str] = mapped_column(String(120), nullable=False)
    latitude: Mapped[float | None] = mapped_column(Float)
    longitude: Mapped[float | None] = mapped_column(Float)
    notes: Mapped[str | None] = mapped_column(String(1024))

    assigned_to_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), index=True
    )
    assigned_to_name: Mapped[str | None] = mapped_column(String(255))
    assigned_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    reservation: Mapped["Reservation"] = relationship("Reservation")
    client: Mapped["Client"] = relationship("Client")
    product: Mapped["Product"] = relationship("Product")
    product_unit: Mapped["ProductUnit | None"] = relationship("ProductUnit")
    assigned_user: Mapped["User | None"] = relationship("User")
    events: Mapped[list["DeliveryPickupEvent"]] = relationship(
        "DeliveryPickupEvent",
        back_populates="delivery_pickup",
        order_by="DeliveryPickupEvent.event_time",
    )


class DeliveryPickupEvent(Base):
    """Immutable history entry for a handoff."""

    __tablename__ = "delivery_pickup_events"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    delivery_pickup_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("delivery_pickups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    user_name: Mapped[str] = mapped_column(String(255), nullable=False)
    event_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    location: Mapped[str | None] = mapped_column(String(512))
    latitude: Mapped[float | None] = mapped_column(Float)
    longitude: Mapped[float | None] = mapped_column(Float)
    notes: Mapped[str | None] = mapped_column(String(1024))
    unit_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("product_units.id", ondelete="SET NULL")
    )
    storage_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("storages.id", ondelete="SET NULL")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    delivery_pickup: Mapped[DeliveryPickup] = relationship(
        "DeliveryPickup", back_populates="events"
    )
