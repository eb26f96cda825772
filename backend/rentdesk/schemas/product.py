"""Pydantic schemas for categories, products and pricing tiers."""
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProductCategoryCreate(BaseModel):
    """Payload for creating a product category."""

    name: str = Field(min_length=1, max_length=120)
    description: str | None = None


class ProductCategoryRead(ProductCategoryCreate):
    """Serialized product category."""

    id: uuid.UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductBase(BaseModel):
    """Shared product fields."""

    code: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    daily_price: Decimal = Field(gt=Decimal("0"))
    is_active: bool = True
    category_id: uuid.UUID | None = None


class ProductCreate(ProductBase):
    """Payload for creating products."""


class ProductUpdate(BaseModel):
    """Mutable product fields."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    daily_price: Decimal | None = Field(default=None, gt=Decimal("0"))
    is_active: bool | None = None
    category_id: uuid.UUID | None = None


class ProductRead(ProductBase):
    """Serialized product representation."""

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PricingTierBase(BaseModel):
    """Shared pricing tier fields."""

    min_days: int = Field(ge=1)
    max_days: int | None = Field(default=None, ge=1)
    price_per_day: Decimal = Field(gt=Decimal("0"))
    tier_name: str | None = Field(default=None, max_length=120)

    @model_validator(mode="after")
    def _check_range(self) -> "PricingTierBase":
        if self.max_days is not None and self.max_days < self.min_days:
            raise ValueError("max_days must be greater than or equal to min_days")
        return self


class PricingTierCreate(PricingTierBase):
    """Payload for adding a pricing tier to a product."""


class PricingTierUpdate(BaseModel):
    """Mutable pricing tier fields."""

    min_days: int | None = Field(default=None, ge=1)
    max_days: int | None = Field(default=None, ge=1)
    price_per_day: Decimal | None = Field(default=None, gt=Decimal("0"))
    tier_name: str | None = Field(default=None, max_length=120)


class PricingTierRead(PricingTierBase):
    """Serialized pricing tier."""

    id: uuid.UUID
    product_id: uuid.UUID
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PriceQuoteRead(BaseModel):
    """Resolved rental price for a product and duration."""

    product_id: uuid.UUID
    rental_days: int
    price_per_day: Decimal
    total_price: Decimal
    original_price: Decimal
    savings: Decimal
    is_discounted: bool
    tier_name: str | None = None
    display_price: str
    display_original_price: str | None = None
    display_savings: str | None = None
    discount_percentage: int = 0
