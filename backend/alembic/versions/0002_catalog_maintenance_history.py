"""Product categories, maintenance records and unit rental history.

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0002"
down_revision = "0001"
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


rental_status = sa.Enum("RENTED", "RETURNED", "DAMAGED", name="unitrentalstatus")


def upgrade() -> None:
    op.create_table(
        "product_categories",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False, unique=True),
        sa.Column("description", sa.String(length=1024)),
        *_timestamps(),
    )

    with op.batch_alter_table("products") as batch_op:
        batch_op.add_column(sa.Column("category_id", sa.Uuid(as_uuid=True)))
        batch_op.create_foreign_key(
            "fk_products_category_id",
            "product_categories",
            ["category_id"],
            ["id"],
            ondelete="SET NULL",
        )
        batch_op.create_index("ix_products_category_id", ["category_id"])

    op.create_table(
        "product_maintenance",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "product_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("products.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "product_unit_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("product_units.id", ondelete="SET NULL"),
        ),
        sa.Column("maintenance_type", sa.String(length=120), nullable=False),
        sa.Column("description", sa.String(length=2048)),
        sa.Column("cost", sa.Numeric(10, 2), nullable=False),
        sa.Column("maintenance_date", sa.Date(), nullable=False),
        sa.Column("provider", sa.String(length=255)),
        sa.Column("notes", sa.String(length=1024)),
        *_timestamps(),
        sa.CheckConstraint("cost >= 0", name="ck_maintenance_cost"),
    )
    op.create_index(
        "ix_product_maintenance_product_id", "product_maintenance", ["product_id"]
    )
    op.create_index(
        "ix_product_maintenance_maintenance_date",
        "product_maintenance",
        ["maintenance_date"],
    )

    op.create_table(
        "unit_rental_history",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "unit_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("product_units.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "reservation_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("reservations.id", ondelete="SET NULL"),
        ),
        sa.Column("client_name", sa.String(length=255), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("status", rental_status, nullable=False),
        sa.Column("notes", sa.String(length=1024)),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint(
            "end_date >= start_date", name="ck_rental_history_period"
        ),
    )
    op.create_index(
        "ix_unit_rental_history_unit_id", "unit_rental_history", ["unit_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_unit_rental_history_unit_id", table_name="unit_rental_history")
    op.drop_table("unit_rental_history")
    op.drop_index(
        "ix_product_maintenance_maintenance_date", table_name="product_maintenance"
    )
    op.drop_index(
        "ix_product_maintenance_product_id", table_name="product_maintenance"
    )
    op.drop_table("product_maintenance")

    with op.batch_alter_table("products") as batch_op:
        batch_op.drop_index("ix_products_category_id")
        batch_op.drop_constraint("fk_products_category_id", type_="foreignkey")
        batch_op.drop_column("category_id")
    op.drop_table("product_categories")

    rental_status.drop(op.get_bind(), checkfirst=True)
