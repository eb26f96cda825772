"""Schema exports."""

from rentdesk.schemas.client import (
    ClientCreate,
    ClientRead,
    ClientSummary,
    ClientUpdate,
)
from rentdesk.schemas.delivery import (
    AssignRequest,
    CancelRequest,
    DeliveryPickupEventRead,
    DeliveryPickupRead,
    ScanAtLocationRequest,
    ScanAtStorageRequest,
    StaffActionRequest,
)
from rentdesk.schemas.maintenance import (
    MaintenanceCreate,
    MaintenanceRead,
    MaintenanceUpdate,
)
from rentdesk.schemas.product import (
    PriceQuoteRead,
    PricingTierCreate,
    PricingTierRead,
    PricingTierUpdate,
    ProductCategoryCreate,
    ProductCategoryRead,
    ProductCreate,
    ProductRead,
    ProductUpdate,
)
from rentdesk.schemas.product_unit import (
    ProductUnitCreate,
    ProductUnitRead,
    ProductUnitStats,
    ProductUnitUpdate,
    UnitRentalHistoryCreate,
    UnitRentalHistoryRead,
    UnitStorageUpdate,
)
from rentdesk.schemas.reservation import (
    AvailabilityRead,
    ReservationCreate,
    ReservationItemCreate,
    ReservationItemRead,
    ReservationRead,
    ReservationUpdate,
)
from rentdesk.schemas.storage import (
    NearbyStorageRead,
    StorageCreate,
    StorageRead,
    StorageSummary,
    StorageUpdate,
)
from rentdesk.schemas.user import UserCreate, UserRead, UserSummary

__all__ = [
    "AssignRequest",
    "AvailabilityRead",
    "CancelRequest",
    "ClientCreate",
    "ClientRead",
    "ClientSummary",
    "ClientUpdate",
    "DeliveryPickupEventRead",
    "DeliveryPickupRead",
    "MaintenanceCreate",
    "MaintenanceRead",
    "MaintenanceUpdate",
    "NearbyStorageRead",
    "PriceQuoteRead",
    "PricingTierCreate",
    "PricingTierRead",
    "PricingTierUpdate",
    "ProductCategoryCreate",
    "ProductCategoryRead",
    "ProductCreate",
    "ProductRead",
    "ProductUnitCreate",
    "ProductUnitRead",
    "ProductUnitStats",
    "ProductUnitUpdate",
    "ProductUpdate",
    "ReservationCreate",
    "ReservationItemCreate",
    "ReservationItemRead",
    "ReservationRead",
    "ReservationUpdate",
    "ScanAtLocationRequest",
    "ScanAtStorageRequest",
    "StaffActionRequest",
    "StorageCreate",
    "StorageRead",
    "StorageSummary",
    "StorageUpdate",
    "UnitRentalHistoryCreate",
    "UnitRentalHistoryRead",
    "UnitStorageUpdate",
    "UserCreate",
    "UserRead",
    "UserSummary",
]
