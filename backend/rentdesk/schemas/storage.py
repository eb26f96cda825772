"""Pydantic schemas for storages."""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class StorageBase(BaseModel):
    """Shared storage fields."""

    name: str = Field(min_length=1, max_length=255)
    address: str
    city: str
    state: str
    postal_code: str
    country: str
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    notes: str | None = None


class StorageCreate(StorageBase):
    """Payload for creating storages."""


class StorageUpdate(BaseModel):
    """Mutable storage fields."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    is_active: bool | None = None
    notes: str | None = None


class StorageRead(StorageBase):
    """Serialized storage."""

    id: uuid.UUID
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StorageSummary(BaseModel):
    """Compact storage reference embedded in other payloads."""

    id: uuid.UUID
    name: str
    address: str
    city: str | None = None
    state: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    model_config = ConfigDict(from_attributes=True)


class NearbyStorageRead(StorageRead):
    """Storage with its distance from the query point."""

    distance_km: float
