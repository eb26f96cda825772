"""Service layer exports."""
from rentdesk.services import (
    client_service,
    delivery_service,
    maintenance_service,
    product_pricing_service,
    product_service,
    product_unit_service,
    reservation_service,
    storage_service,
    user_service,
)

__all__ = [
    "client_service",
    "delivery_service",
    "maintenance_service",
    "product_pricing_service",
    "product_service",
    "product_unit_service",
    "reservation_service",
    "storage_service",
    "user_service",
]
