"""Test fixtures for the RentDesk backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator
from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from rentdesk.core.config import get_settings
from rentdesk.db.base import Base
from rentdesk.db.session import dispose_engine, get_sessionmaker
from rentdesk.main import app
from rentdesk.models import (
    Client,
    Product,
    ProductPricingTier,
    ProductUnit,
    ProductUnitStatus,
    Reservation,
    ReservationProduct,
    Storage,
    User,
    UserRole,
)


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def rental(reset_database: None, db_url: str) -> dict[str, object]:
    """Seed a product with tiers, storages, units, staff and one reservation."""
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        driver = User(
            name="Dana Driver",
            email="dana@example.com",
            phone="+55 11 98888-7777",
            role=UserRole.DRIVER,
        )
        other_driver = User(
            name="Otto Other", email="otto@example.com", role=UserRole.DRIVER
        )
        client = Client(
            name="Acme Events",
            email="events@acme.example",
            phone="+55 11 3333-4444",
            address="Rua das Flores 100",
            city="Sao Paulo",
            state="SP",
            postal_code="01000-000",
            country="BR",
        )
        product = Product(
            code="GEN",
            name="Generator 5kVA",
            daily_price=Decimal("100.00"),
        )
        session.add_all([driver, other_driver, client, product])
        await session.flush()

        session.add_all(
            [
                ProductPricingTier(
                    product_id=product.id,
                    min_days=1,
                    max_days=6,
                    price_per_day=Decimal("100.00"),
                    tier_name="Daily",
                ),
                ProductPricingTier(
                    product_id=product.id,
                    min_days=7,
                    max_days=29,
                    price_per_day=Decimal("80.00"),
                    tier_name="Weekly",
                ),
                ProductPricingTier(
                    product_id=product.id,
                    min_days=30,
                    max_days=None,
                    price_per_day=Decimal("60.00"),
                    tier_name="Monthly",
                ),
            ]
        )

        main_storage = Storage(
            name="Central Depot",
            address="Av. Paulista 1000",
            city="Sao Paulo",
            state="SP",
            postal_code="01310-100",
            country="BR",
            latitude=-23.5614,
            longitude=-46.6559,
        )
        north_storage = Storage(
            name="North Yard",
            address="Rua Voluntarios 50",
            city="Sao Paulo",
            state="SP",
            postal_code="02010-000",
            country="BR",
            latitude=-23.5000,
            longitude=-46.6250,
        )
        session.add_all([main_storage, north_storage])
        await session.flush()

        unit_a = ProductUnit(
            product_id=product.id, unit_code="GEN-0001", storage_id=main_storage.id
        )
        unit_b = ProductUnit(
            product_id=product.id, unit_code="GEN-0002", storage_id=main_storage.id
        )
        unit_c = ProductUnit(
            product_id=product.id,
            unit_code="GEN-0003",
            storage_id=north_storage.id,
            status=ProductUnitStatus.MAINTENANCE,
        )
        session.add_all([unit_a, unit_b, unit_c])
        await session.flush()

        reservation = Reservation(
            client_id=client.id,
            start_date=date(2026, 3, 2),
            end_date=date(2026, 3, 9),
            total_value=Decimal("560.00"),
            delivery_address="Rua das Flores 100",
            delivery_city="Sao Paulo",
            delivery_state="SP",
            delivery_postal_code="01000-000",
            delivery_country="BR",
            pickup_city="Guarulhos",
        )
        reservation.items.append(
            ReservationProduct(
                product_id=product.id,
                product_name=product.name,
                quantity=1,
                days=7,
                price_per_day=Decimal("80.00"),
                total_price=Decimal("560.00"),
                tier_name="Weekly",
            )
        )
        session.add(reservation)
        await session.commit()

        return {
            "driver_id": driver.id,
            "other_driver_id": other_driver.id,
            "client_id": client.id,
            "product_id": product.id,
            "main_storage_id": main_storage.id,
            "north_storage_id": north_storage.id,
            "unit_a_id": unit_a.id,
            "unit_b_id": unit_b.id,
            "unit_c_id": unit_c.id,
            "reservation_id": reservation.id,
        }


@pytest_asyncio.fixture()
async def api_client(reset_database: None) -> AsyncIterator[AsyncClient]:
    """Yield an HTTP client bound to the application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
