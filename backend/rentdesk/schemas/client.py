"""Pydantic schemas for clients."""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ClientBase(BaseModel):
    """Shared client fields."""

    name: str = Field(min_length=1, max_length=255)
    email: str | None = None
    phone: str | None = None
    document: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    notes: str | None = None


class ClientCreate(ClientBase):
    """Payload for creating clients."""


class ClientUpdate(BaseModel):
    """Mutable client fields."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = None
    phone: str | None = None
    document: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None
    country: str | None = None
    notes: str | None = None


class ClientRead(ClientBase):
    """Serialized client."""

    id: uuid.UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ClientSummary(BaseModel):
    """Compact client reference embedded in other payloads."""

    id: uuid.UUID
    name: str
    email: str | None = None
    phone: str | None = None

    model_config = ConfigDict(from_attributes=True)
