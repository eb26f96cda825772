"""Versioned API router."""

from fastapi import APIRouter

from . import (
    categories,
    clients,
    deliveries,
    health,
    maintenance,
    pricing_tiers,
    products,
    reservations,
    storages,
    units,
    users,
)

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(clients.router, prefix="/clients", tags=["clients"])
router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(categories.router, prefix="/categories", tags=["products"])
router.include_router(
    maintenance.router, prefix="/maintenance", tags=["maintenance"]
)
router.include_router(
    pricing_tiers.router, prefix="/pricing-tiers", tags=["pricing"]
)
router.include_router(units.router, prefix="/units", tags=["units"])
router.include_router(storages.router, prefix="/storages", tags=["storages"])
router.include_router(
    reservations.router, prefix="/reservations", tags=["reservations"]
)
router.include_router(deliveries.router, prefix="/deliveries", tags=["deliveries"])
