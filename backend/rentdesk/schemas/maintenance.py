"""Pydantic schemas for product maintenance records."""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class MaintenanceBase(BaseModel):
    """Shared maintenance fields."""

    product_unit_id: uuid.UUID | None = None
    maintenance_type: str = Field(min_length=1, max_length=120)
    description: str | None = None
    cost: Decimal = Field(default=Decimal("0.00"), ge=Decimal("0"))
    maintenance_date: date
    provider: str | None = Field(default=None, max_length=255)
    notes: str | None = None


class MaintenanceCreate(MaintenanceBase):
    """Payload for recording maintenance on a product."""


class MaintenanceUpdate(BaseModel):
    """Mutable maintenance fields."""

    product_unit_id: uuid.UUID | None = None
    maintenance_type: str | None = Field(default=None, min_length=1, max_length=120)
    description: str | None = None
    cost: Decimal | None = Field(default=None, ge=Decimal("0"))
    maintenance_date: date | None = None
    provider: str | None = Field(default=None, max_length=255)
    notes: str | None = None


class MaintenanceRead(MaintenanceBase):
    """Serialized maintenance record."""

    id: uuid.UUID
    product_id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
