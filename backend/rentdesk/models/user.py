"""Staff user model."""
from __future__ import annotations

import enum
import uuid

from sqlalchemy import Boolean, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from rentdesk.db.base import Base
from rentdesk.models.mixins import TimestampMixin


class UserRole(str, enum.Enum):
    """Roles available to staff members."""

    ADMIN = "admin"
    MANAGER = "manager"
    DRIVER = "driver"


class User(TimestampMixin, Base):
    """A staff member who can be assigned deliveries and pickups."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    phone: Mapped[str | None] = mapped_column(String(32))
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole), default=UserRole.DRIVER, nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
