"""Product maintenance records."""
from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentdesk.db.base import Base
from rentdesk.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from rentdesk.models.product import Product
    from rentdesk.models.product_unit import ProductUnit


class ProductMaintenance(TimestampMixin, Base):
    """Service, repair or inspection performed on a product."""

    __tablename__ = "product_maintenance"
    __table_args__ = (CheckConstraint("cost >= 0", name="ck_maintenance_cost"),)

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    product_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_unit_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("product_units.id", ondelete="SET NULL")
    )
    maintenance_type: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str | None] = mapped_column(String(2048))
    cost: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), default=Decimal("0.00"), nullable=False
    )
    maintenance_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    provider: Mapped[str | None] = mapped_column(String(255))
    notes: Mapped[str | None] = mapped_column(String(1024))

    product: Mapped["Product"] = relationship(
        "Product", back_populates="maintenance_records"
    )
    product_unit: Mapped["ProductUnit | None"] = relationship("ProductUnit")
