"""Pydantic schemas for product units."""
from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rentdesk.models.product_unit import ProductUnitStatus, UnitRentalStatus
from rentdesk.schemas.storage import StorageSummary


class ProductUnitCreate(BaseModel):
    """Payload for registering a unit; the barcode is generated when omitted."""

    unit_code: str | None = Field(default=None, min_length=1, max_length=64)
    serial_number: str | None = None
    status: ProductUnitStatus = ProductUnitStatus.AVAILABLE
    storage_id: uuid.UUID | None = None
    notes: str | None = None


class ProductUnitUpdate(BaseModel):
    """Mutable unit fields."""

    serial_number: str | None = None
    status: ProductUnitStatus | None = None
    is_active: bool | None = None
    storage_id: uuid.UUID | None = None
    notes: str | None = None


class ProductUnitRead(BaseModel):
    """Serialized unit."""

    id: uuid.UUID
    product_id: uuid.UUID
    unit_code: str
    serial_number: str | None = None
    status: ProductUnitStatus
    is_active: bool
    storage_id: uuid.UUID | None = None
    notes: str | None = None
    storage: StorageSummary | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductUnitStats(BaseModel):
    """Unit counts per availability bucket."""

    total: int = 0
    available: int = 0
    rented: int = 0
    maintenance: int = 0
    inactive: int = 0


class UnitStorageUpdate(BaseModel):
    """Payload for moving a unit; ``null`` detaches it from any storage."""

    storage_id: uuid.UUID | None = None


class UnitRentalHistoryCreate(BaseModel):
    """Entry appended to a unit's rental history."""

    reservation_id: uuid.UUID | None = None
    client_name: str = Field(min_length=1, max_length=255)
    start_date: date
    end_date: date
    status: UnitRentalStatus = UnitRentalStatus.RENTED
    notes: str | None = None

    @model_validator(mode="after")
    def _check_period(self) -> "UnitRentalHistoryCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class UnitRentalHistoryRead(BaseModel):
    """Serialized rental history entry."""

    id: uuid.UUID
    unit_id: uuid.UUID
    reservation_id: uuid.UUID | None = None
    client_name: str
    start_date: date
    end_date: date
    status: UnitRentalStatus
    notes: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
