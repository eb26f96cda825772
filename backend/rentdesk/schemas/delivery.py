"""Pydantic schemas for deliveries, pickups and their history."""
from __future__ import annotations

import uuid
from datetime import date, datetime, time

from pydantic import BaseModel, ConfigDict, Field

from rentdesk.models.delivery import DeliveryPickupType, DeliveryStatus
from rentdesk.models.product_unit import ProductUnitStatus
from rentdesk.schemas.client import ClientSummary
from rentdesk.schemas.storage import StorageSummary


class DeliveryProductSummary(BaseModel):
    """Product reference embedded in a handoff."""

    id: uuid.UUID
    code: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class DeliveryUnitSummary(BaseModel):
    """Unit reference embedded in a handoff."""

    id: uuid.UUID
    unit_code: str
    status: ProductUnitStatus
    storage: StorageSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class DeliveryPickupRead(BaseModel):
    """Serialized delivery or pickup."""

    id: uuid.UUID
    reservation_id: uuid.UUID
    client_id: uuid.UUID
    client_name: str
    product_id: uuid.UUID
    product_name: str
    product_unit_id: uuid.UUID | None = None
    type: DeliveryPickupType
    status: DeliveryStatus
    scheduled_date: date
    scheduled_time_start: time
    scheduled_time_end: time
    address: str
    city: str
    state: str
    postal_code: str
    country: str
    latitude: float | None = None
    longitude: float | None = None
    notes: str | None = None
    assigned_to_id: uuid.UUID | None = None
    assigned_to_name: str | None = None
    assigned_at: datetime | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    client: ClientSummary | None = None
    product: DeliveryProductSummary | None = None
    product_unit: DeliveryUnitSummary | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DeliveryPickupEventRead(BaseModel):
    """Serialized history entry."""

    id: uuid.UUID
    delivery_pickup_id: uuid.UUID
    type: str
    user_id: uuid.UUID
    user_name: str
    event_time: datetime
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    notes: str | None = None
    unit_id: uuid.UUID | None = None
    storage_id: uuid.UUID | None = None

    model_config = ConfigDict(from_attributes=True)


class AssignRequest(BaseModel):
    """Payload for assigning a handoff to a staff member."""

    staff_id: uuid.UUID
    staff_name: str | None = None
    notes: str | None = None


class _Position(BaseModel):
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)


class StaffActionRequest(_Position):
    """Payload for starting or completing a handoff."""

    staff_id: uuid.UUID
    staff_name: str | None = None


class CancelRequest(BaseModel):
    """Payload for cancelling a handoff."""

    user_id: uuid.UUID
    reason: str | None = Field(default=None, max_length=1024)


class ScanAtStorageRequest(_Position):
    """Payload for a unit scan performed at a storage."""

    unit_id: uuid.UUID
    storage_id: uuid.UUID
    user_id: uuid.UUID
    user_name: str | None = None


class ScanAtLocationRequest(_Position):
    """Payload for a unit scan performed at the client's address."""

    unit_id: uuid.UUID
    user_id: uuid.UUID
    user_name: str | None = None
