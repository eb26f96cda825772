"""ORM models package export."""

from rentdesk.models.client import Client
from rentdesk.models.delivery import (
    DeliveryPickup,
    DeliveryPickupEvent,
    DeliveryPickupEventType,
    DeliveryPickupType,
    DeliveryStatus,
)
from rentdesk.models.maintenance import ProductMaintenance
from rentdesk.models.product import Product, ProductCategory, ProductPricingTier
from rentdesk.models.product_unit import (
    ProductUnit,
    ProductUnitStatus,
    UnitRentalHistory,
    UnitRentalStatus,
)
from rentdesk.models.reservation import (
    Reservation,
    ReservationProduct,
    ReservationStatus,
)
from rentdesk.models.storage import Storage
from rentdesk.models.user import User, UserRole

__all__ = [
    "Client",
    "DeliveryPickup",
    "DeliveryPickupEvent",
    "DeliveryPickupEventType",
    "DeliveryPickupType",
    "DeliveryStatus",
    "Product",
    "ProductCategory",
    "ProductMaintenance",
    "ProductPricingTier",
    "ProductUnit",
    "ProductUnitStatus",
    "Reservation",
    "ReservationProduct",
    "ReservationStatus",
    "Storage",
    "UnitRentalHistory",
    "UnitRentalStatus",
    "User",
    "UserRole",
]
