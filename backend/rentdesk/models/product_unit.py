"""Individually tracked product units and their rental history."""
from __future__ import annotations

import enum
import uuid
from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentdesk.db.base import Base
from rentdesk.models.mixins import TimestampMixin, utcnow

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from rentdesk.models.product import Product
    from rentdesk.models.storage import Storage


class ProductUnitStatus(str, enum.Enum):
    """Availability states for a physical unit."""

    AVAILABLE = "available"
    RENTED = "rented"
    MAINTENANCE = "maintenance"
    INACTIVE = "inactive"


class ProductUnit(TimestampMixin, Base):
    """One physical instance of a product, identified by its barcode."""

    __tablename__ = "product_units"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    product_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    unit_code: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    serial_number: Mapped[str | None] = mapped_column(String(120))
    status: Mapped[ProductUnitStatus] = mapped_column(
        Enum(ProductUnitStatus), default=ProductUnitStatus.AVAILABLE, nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    storage_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("storages.id", ondelete="SET NULL")
    )
    notes: Mapped[str | None] = mapped_column(String(1024))

    product: Mapped["Product"] = relationship("Product", back_populates="units")
    storage: Mapped["Storage | None"] = relationship("Storage", back_populates="units")
    rental_history: Mapped[list["UnitRentalHistory"]] = relationship(
        "UnitRentalHistory",
        back_populates="unit",
        cascade="all, delete-orphan",
        order_by="UnitRentalHistory.created_at.desc()",
    )


class UnitRentalStatus(str, enum.Enum):
    """Outcome recorded for one rental of a unit."""

    RENTED = "rented"
    RETURNED = "returned"
    DAMAGED = "damaged"


class UnitRentalHistory(Base):
    """Append-only log of the rentals a unit went out on."""

    __tablename__ = "unit_rental_history"
    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="ck_rental_history_period"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    unit_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("product_units.id", ondelete="CASCADE"), nullable=False, index=True
    )
    reservation_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("reservations.id", ondelete="SET NULL")
    )
    client_name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[UnitRentalStatus] = mapped_column(
        Enum(UnitRentalStatus), default=UnitRentalStatus.RENTED, nullable=False
    )
    notes: Mapped[str | None] = mapped_column(String(1024))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    unit: Mapped[ProductUnit] = relationship(
        "ProductUnit", back_populates="rental_history"
    )
