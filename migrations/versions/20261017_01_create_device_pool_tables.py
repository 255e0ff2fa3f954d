"""create accounts, devices and device feedback tables

Revision ID: 20261017_01
Revises:
Create Date: 2026-10-17 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261017_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("email", sa.String(length=100), nullable=True, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_accounts_username", "accounts", ["username"], unique=True)

    op.create_table(
        "devices",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("sequence", sa.Integer(), nullable=False, unique=True),
        sa.Column("model", sa.String(length=100), nullable=False),
        sa.Column("os", sa.String(length=100), nullable=False),
        sa.Column("manufacturer", sa.String(length=100), nullable=False),
        sa.Column("registered_by", sa.String(length=36), nullable=False),
        sa.Column("registered_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_checked_out", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("last_checked_out_by", sa.String(length=36), nullable=True),
        sa.Column("last_checked_out_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_checked_in_date", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_devices_registered_by", "devices", ["registered_by"])
    op.create_index(
        "uq_devices_active_holder",
        "devices",
        ["last_checked_out_by"],
        unique=True,
        sqlite_where=sa.text("is_checked_out = 1"),
        postgresql_where=sa.text("is_checked_out"),
    )

    op.create_table(
        "device_feedback",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("device_id", sa.String(length=36), nullable=False),
        sa.Column("reviewer_id", sa.String(length=36), nullable=False),
        sa.Column("reviewer_name", sa.String(length=100), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("text", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["device_id"], ["devices.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("device_id", "reviewer_id", name="uq_device_feedback_reviewer"),
    )
    op.create_index("ix_device_feedback_device_id", "device_feedback", ["device_id"])


def downgrade() -> None:
    op.drop_index("ix_device_feedback_device_id", table_name="device_feedback")
    op.drop_table("device_feedback")
    op.drop_index("uq_devices_active_holder", table_name="devices")
    op.drop_index("ix_devices_registered_by", table_name="devices")
    op.drop_table("devices")
    op.drop_index("ix_accounts_username", table_name="accounts")
    op.drop_table("accounts")
