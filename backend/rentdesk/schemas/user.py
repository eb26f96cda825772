"""Pydantic schemas for staff users."""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from rentdesk.models.user import UserRole


class UserCreate(BaseModel):
    """Payload for registering a staff member."""

    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=320)
    phone: str | None = None
    role: UserRole = UserRole.DRIVER


class UserRead(BaseModel):
    """Serialized staff member."""

    id: uuid.UUID
    name: str
    email: str
    phone: str | None = None
    role: UserRole
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
    """Compact user reference."""

    id: uuid.UUID
    name: str

    model_config = ConfigDict(from_attributes=True)
