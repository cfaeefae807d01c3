"""create subscription ledger tables

Revision ID: 202610190001
Revises:
Create Date: 2026-10-19 00:00:00
"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa


revision: str = "202610190001"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    ledger_state = op.create_table(
        "ledger_state",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("next_plan_id", sa.Integer(), server_default="1", nullable=False),
        sa.Column("next_payment_id", sa.Integer(), server_default="1", nullable=False),
        sa.Column("total_revenue", sa.BigInteger(), server_default="0", nullable=False),
        sa.Column("active_subscribers", sa.Integer(), server_default="0", nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.bulk_insert(
        ledger_state,
        [{"id": 1, "next_plan_id": 1, "next_payment_id": 1, "total_revenue": 0, "active_subscribers": 0}],
    )

    op.create_table(
        "plans",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("price_per_month", sa.BigInteger(), nullable=False),
        sa.Column("max_users", sa.Integer(), nullable=False),
        sa.Column("features", sa.Text(), nullable=False),
        sa.Column("active", sa.Boolean(), server_default="true", nullable=False),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "subscriptions",
        sa.Column("subscriber", sa.String(length=128), nullable=False),
        sa.Column("plan_id", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.BigInteger(), nullable=False),
        sa.Column("end_date", sa.BigInteger(), nullable=False),
        sa.Column("active", sa.Boolean(), server_default="true", nullable=False),
        sa.Column("auto_renew", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("total_paid", sa.BigInteger(), server_default="0", nullable=False),
        sa.Column("payment_count", sa.Integer(), server_default="0", nullable=False),
        sa.PrimaryKeyConstraint("subscriber"),
    )

    op.create_table(
        "access_entries",
        sa.Column("subscriber", sa.String(length=128), nullable=False),
        sa.Column("service_name", sa.String(length=64), nullable=False),
        sa.Column("has_access", sa.Boolean(), server_default="false", nullable=False),
        sa.Column("granted_at", sa.BigInteger(), nullable=False),
        sa.Column("last_accessed", sa.BigInteger(), server_default="0", nullable=False),
        sa.PrimaryKeyConstraint("subscriber", "service_name"),
    )

    op.create_table(
        "payment_records",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("subscriber", sa.String(length=128), nullable=False),
        sa.Column("plan_id", sa.Integer(), nullable=False),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("date", sa.BigInteger(), nullable=False),
        sa.Column("payment_type", sa.String(length=16), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_payment_records_subscriber", "payment_records", ["subscriber", "id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_payment_records_subscriber", table_name="payment_records")
    op.drop_table("payment_records")
    op.drop_table("access_entries")
    op.drop_table("subscriptions")
    op.drop_table("plans")
    op.drop_table("ledger_state")
