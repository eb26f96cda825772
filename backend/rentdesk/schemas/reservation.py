"""Pydantic schemas for reservations."""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rentdesk.models.reservation import ReservationStatus
from rentdesk.schemas.client import ClientSummary

_NON_NULLABLE_UPDATES = frozenset(
    {
        "status",
        "start_date",
        "end_date",
        "delivery_address",
        "delivery_city",
        "delivery_state",
        "delivery_postal_code",
        "delivery_country",
    }
)


class ReservationItemCreate(BaseModel):
    """Product line requested for a reservation."""

    product_id: uuid.UUID
    quantity: int = Field(default=1, ge=1)


class ReservationItemRead(BaseModel):
    """Priced reservation line item."""

    id: uuid.UUID
    product_id: uuid.UUID
    product_name: str
    quantity: int
    days: int
    price_per_day: Decimal
    total_price: Decimal
    tier_name: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ReservationBase(BaseModel):
    """Shared reservation fields."""

    client_id: uuid.UUID
    start_date: date
    end_date: date
    notes: str | None = None

    delivery_address: str
    delivery_city: str
    delivery_state: str
    delivery_postal_code: str
    delivery_country: str
    delivery_notes: str | None = None

    pickup_address: str | None = None
    pickup_city: str | None = None
    pickup_state: str | None = None
    pickup_postal_code: str | None = None
    pickup_country: str | None = None
    pickup_notes: str | None = None


class ReservationCreate(ReservationBase):
    """Payload for creating reservations."""

    status: ReservationStatus = ReservationStatus.PENDING
    items: list[ReservationItemCreate] = Field(min_length=1)

    @model_validator(mode="after")
    def _check_dates(self) -> "ReservationCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ReservationRead(ReservationBase):
    """Serialized reservation representation."""

    id: uuid.UUID
    status: ReservationStatus
    total_value: Decimal
    client: ClientSummary | None = None
    items: list[ReservationItemRead] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReservationUpdate(BaseModel):
    """Mutable reservation fields; line items are re-priced when dates move."""

    status: ReservationStatus | None = None
    start_date: date | None = None
    end_date: date | None = None
    notes: str | None = None

    delivery_address: str | None = None
    delivery_city: str | None = None
    delivery_state: str | None = None
    delivery_postal_code: str | None = None
    delivery_country: str | None = None
    delivery_notes: str | None = None

    pickup_address: str | None = None
    pickup_city: str | None = None
    pickup_state: str | None = None
    pickup_postal_code: str | None = None
    pickup_country: str | None = None
    pickup_notes: str | None = None

    @model_validator(mode="after")
    def _reject_null_required(self) -> "ReservationUpdate":
        for field in sorted(self.model_fields_set & _NON_NULLABLE_UPDATES):
            if getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class AvailabilityRead(BaseModel):
    """Whether a product is free for a period."""

    product_id: uuid.UUID
    start_date: date
    end_date: date
    available: bool
