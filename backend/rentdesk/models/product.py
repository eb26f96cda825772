"""Catalog models: categories, rentable products and pricing tiers."""
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentdesk.db.base import Base
from rentdesk.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing only imports
    from rentdesk.models.maintenance import ProductMaintenance
    from rentdesk.models.product_unit import ProductUnit


class ProductCategory(TimestampMixin, Base):
    """Grouping used to browse the catalog."""

    __tablename__ = "product_categories"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(String(1024))

    products: Mapped[list["Product"]] = relationship(
        "Product", back_populates="category"
    )


class Product(TimestampMixin, Base):
    """Catalog entry that customers rent by the day."""

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    code: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(2048))
    daily_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    category_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("product_categories.id", ondelete="SET NULL"), index=True
    )

    category: Mapped[ProductCategory | None] = relationship(
        "ProductCategory", back_populates="products"
    )
    pricing_tiers: Mapped[list["ProductPricingTier"]] = relationship(
        "ProductPricingTier",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductPricingTier.min_days",
    )
    units: Mapped[list["ProductUnit"]] = relationship(
        "ProductUnit", back_populates="product", cascade="all, delete-orphan"
    )
    maintenance_records: Mapped[list["ProductMaintenance"]] = relationship(
        "ProductMaintenance",
        back_populates="product",
        cascade="all, delete-orphan",
    )


class ProductPricingTier(TimestampMixin, Base):
    """Per-day rate that applies to rentals within a duration range."""

    __tablename__ = "product_pricing_tiers"
    __table_args__ = (
        CheckConstraint("min_days >= 1", name="ck_pricing_tier_min_days"),
        CheckConstraint(
            "max_days IS NULL OR max_days >= min_days",
            name="ck_pricing_tier_range",
        ),
        CheckConstraint("price_per_day > 0", name="ck_pricing_tier_price"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    product_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    min_days: Mapped[int] = mapped_column(Integer, nullable=False)
    max_days: Mapped[int | None] = mapped_column(Integer)
    price_per_day: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    tier_name: Mapped[str | None] = mapped_column(String(120))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    product: Mapped[Product] = relationship("Product", back_populates="pricing_tiers")
