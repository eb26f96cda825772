"""Exceptions shared by the service layer."""

from __future__ import annotations


class NotFoundError(ValueError):
    """Raised when a referenced record does not exist."""

    entity = "Record"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or f"{self.entity} not found")


class ClientNotFoundError(NotFoundError):
    entity = "Client"


class ProductNotFoundError(NotFoundError):
    entity = "Product"


class ProductUnitNotFoundError(NotFoundError):
    entity = "Product unit"


class StorageNotFoundError(NotFoundError):
    entity = "Storage"


class UserNotFoundError(NotFoundError):
    entity = "User"


class ReservationNotFoundError(NotFoundError):
    entity = "Reservation"


class DeliveryPickupNotFoundError(NotFoundError):
    entity = "Delivery/pickup"


class PricingTierNotFoundError(NotFoundError):
    entity = "Pricing tier"


class ProductCategoryNotFoundError(NotFoundError):
    entity = "Product category"


class MaintenanceNotFoundError(NotFoundError):
    entity = "Maintenance record"


class ProductUnavailableError(ValueError):
    """Raised when a product is already booked for an overlapping period."""
