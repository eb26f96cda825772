"""Initial rental schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


user_role = sa.Enum("ADMIN", "MANAGER", "DRIVER", name="userrole")
unit_status = sa.Enum(
    "AVAILABLE", "RENTED", "MAINTENANCE", "INACTIVE", name="productunitstatus"
)
reservation_status = sa.Enum(
    "PENDING", "CONFIRMED", "CANCELLED", "COMPLETED", name="reservationstatus"
)
handoff_type = sa.Enum("DELIVERY", "PICKUP", name="deliverypickuptype")
delivery_status = sa.Enum(
    "PENDING",
    "ASSIGNED",
    "IN_PROGRESS",
    "COMPLETED",
    "CANCELLED",
    name="deliverystatus",
)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("phone", sa.String(length=32)),
        sa.Column("role", user_role, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "clients",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320)),
        sa.Column("phone", sa.String(length=32)),
        sa.Column("document", sa.String(length=32)),
        sa.Column("address", sa.String(length=255)),
        sa.Column("city", sa.String(length=120)),
        sa.Column("state", sa.String(length=120)),
        sa.Column("postal_code", sa.String(length=32)),
        sa.Column("country", sa.String(length=120)),
        sa.Column("notes", sa.String(length=1024)),
        *_timestamps(),
    )

    op.create_table(
        "products",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("code", sa.String(length=64), nullable=False, unique=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=2048)),
        sa.Column("daily_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "product_pricing_tiers",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "product_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("products.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("min_days", sa.Integer(), nullable=False),
        sa.Column("max_days", sa.Integer()),
        sa.Column("price_per_day", sa.Numeric(10, 2), nullable=False),
        sa.Column("tier_name", sa.String(length=120)),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("min_days >= 1", name="ck_pricing_tier_min_days"),
        sa.CheckConstraint(
            "max_days IS NULL OR max_days >= min_days", name="ck_pricing_tier_range"
        ),
        sa.CheckConstraint("price_per_day > 0", name="ck_pricing_tier_price"),
    )
    op.create_index(
        "ix_product_pricing_tiers_product_id",
        "product_pricing_tiers",
        ["product_id"],
    )

    op.create_table(
        "storages",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=255), nullable=False),
        sa.Column("city", sa.String(length=120), nullable=False),
        sa.Column("state", sa.String(length=120), nullable=False),
        sa.Column("postal_code", sa.String(length=32), nullable=False),
        sa.Column("country", sa.String(length=120), nullable=False),
        sa.Column("latitude", sa.Float()),
        sa.Column("longitude", sa.Float()),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("notes", sa.String(length=1024)),
        *_timestamps(),
    )

    op.create_table(
        "product_units",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "product_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("products.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("unit_code", sa.String(length=64), nullable=False, unique=True),
        sa.Column("serial_number", sa.String(length=120)),
        sa.Column("status", unit_status, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column(
            "storage_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("storages.id", ondelete="SET NULL"),
        ),
        sa.Column("notes", sa.String(length=1024)),
        *_timestamps(),
    )
    op.create_index("ix_product_units_product_id", "product_units", ["product_id"])

    op.create_table(
        "reservations",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "client_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("clients.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("status", reservation_status, nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("total_value", sa.Numeric(12, 2), nullable=False),
        sa.Column("notes", sa.String(length=1024)),
        sa.Column("delivery_address", sa.String(length=255), nullable=False),
        sa.Column("delivery_city", sa.String(length=120), nullable=False),
        sa.Column("delivery_state", sa.String(length=120), nullable=False),
        sa.Column("delivery_postal_code", sa.String(length=32), nullable=False),
        sa.Column("delivery_country", sa.String(length=120), nullable=False),
        sa.Column("delivery_notes", sa.String(length=1024)),
        sa.Column("pickup_address", sa.String(length=255)),
        sa.Column("pickup_city", sa.String(length=120)),
        sa.Column("pickup_state", sa.String(length=120)),
        sa.Column("pickup_postal_code", sa.String(length=32)),
        sa.Column("pickup_country", sa.String(length=120)),
        sa.Column("pickup_notes", sa.String(length=1024)),
        *_timestamps(),
    )
    op.create_index("ix_reservations_client_id", "reservations", ["client_id"])

    op.create_table(
        "reservation_products",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "reservation_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("reservations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "product_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("products.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("product_name", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("days", sa.Integer(), nullable=False),
        sa.Column("price_per_day", sa.Numeric(10, 2), nullable=False),
        sa.Column("total_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("tier_name", sa.String(length=120)),
    )
    op.create_index(
        "ix_reservation_products_reservation_id",
        "reservation_products",
        ["reservation_id"],
    )

    op.create_table(
        "delivery_pickups",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "reservation_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("reservations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "client_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("clients.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("client_name", sa.String(length=255), nullable=False),
        sa.Column(
            "product_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("products.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("product_name", sa.String(length=255), nullable=False),
        sa.Column(
            "product_unit_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("product_units.id", ondelete="SET NULL"),
        ),
        sa.Column("type", handoff_type, nullable=False),
        sa.Column("status", delivery_status, nullable=False),
        sa.Column("scheduled_date", sa.Date(), nullable=False),
        sa.Column("scheduled_time_start", sa.Time(), nullable=False),
        sa.Column("scheduled_time_end", sa.Time(), nullable=False),
        sa.Column("address", sa.String(length=255), nullable=False),
        sa.Column("city", sa.String(length=120), nullable=False),
        sa.Column("state", sa.String(length=120), nullable=False),
        sa.Column("postal_code", sa.String(length=32), nullable=False),
        sa.Column("country", sa.String(length=120), nullable=False),
        sa.Column("latitude", sa.Float()),
        sa.Column("longitude", sa.Float()),
        sa.Column("notes", sa.String(length=1024)),
        sa.Column(
            "assigned_to_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
        ),
        sa.Column("assigned_to_name", sa.String(length=255)),
        sa.Column("assigned_at", sa.DateTime(timezone=True)),
        sa.Column("started_at", sa.DateTime(timezone=True)),
        sa.Column("completed_at", sa.DateTime(timezone=True)),
        *_timestamps(),
    )
    op.create_index(
        "ix_delivery_pickups_reservation_id", "delivery_pickups", ["reservation_id"]
    )
    op.create_index("ix_delivery_pickups_status", "delivery_pickups", ["status"])
    op.create_index(
        "ix_delivery_pickups_scheduled_date", "delivery_pickups", ["scheduled_date"]
    )
    op.create_index(
        "ix_delivery_pickups_assigned_to_id", "delivery_pickups", ["assigned_to_id"]
    )

    op.create_table(
        "delivery_pickup_events",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "delivery_pickup_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("delivery_pickups.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("type", sa.String(length=64), nullable=False),
        sa.Column(
            "user_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("user_name", sa.String(length=255), nullable=False),
        sa.Column("event_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("location", sa.String(length=512)),
        sa.Column("latitude", sa.Float()),
        sa.Column("longitude", sa.Float()),
        sa.Column("notes", sa.String(length=1024)),
        sa.Column(
            "unit_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("product_units.id", ondelete="SET NULL"),
        ),
        sa.Column(
            "storage_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("storages.id", ondelete="SET NULL"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index(
        "ix_delivery_pickup_events_delivery_pickup_id",
        "delivery_pickup_events",
        ["delivery_pickup_id"],
    )


def downgrade() -> None:
    op.drop_index(
        "ix_delivery_pickup_events_delivery_pickup_id",
        table_name="delivery_pickup_events",
    )
    op.drop_table("delivery_pickup_events")
    for index in (
        "ix_delivery_pickups_assigned_to_id",
        "ix_delivery_pickups_scheduled_date",
        "ix_delivery_pickups_status",
        "ix_delivery_pickups_reservation_id",
    ):
        op.drop_index(index, table_name="delivery_pickups")
    op.drop_table("delivery_pickups")
    op.drop_index(
        "ix_reservation_products_reservation_id", table_name="reservation_products"
    )
    op.drop_table("reservation_products")
    op.drop_index("ix_reservations_client_id", table_name="reservations")
    op.drop_table("reservations")
    op.drop_index("ix_product_units_product_id", table_name="product_units")
    op.drop_table("product_units")
    op.drop_table("storages")
    op.drop_index(
        "ix_product_pricing_tiers_product_id", table_name="product_pricing_tiers"
    )
    op.drop_table("product_pricing_tiers")
    op.drop_table("products")
    op.drop_table("clients")
    op.drop_table("users")

    bind = op.get_bind()
    for enum_type in (
        delivery_status,
        handoff_type,
        reservation_status,
        unit_status,
        user_role,
    ):
        enum_type.drop(bind, checkfirst=True)
