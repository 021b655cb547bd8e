# backend/alembic/versions/001_availability_foundation.py
"""Availability foundation - Users, organizations, memberships, weekly blocks

Revision ID: 001_availability_foundation
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the identity and organization tables that own schedules, plus the
instructor_availability table holding one row per weekly block.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_availability_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MEMBERSHIP_ROLES = ("super_admin", "instructor", "student", "guardian")
MEMBERSHIP_STATUSES = ("active", "suspended", "deleted")


def upgrade() -> None:
    """Create availability foundation tables."""
    print("Creating availability foundation tables...")

    op.create_table(
        "users",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(50), nullable=True),
        sa.Column("last_name", sa.String(50), nullable=True),
        sa.Column("timezone", sa.String(50), nullable=False, server_default="America/New_York"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "organizations",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )

    op.create_table(
        "organization_memberships",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("organization_id", sa.String(26), nullable=False),
        sa.Column("user_id", sa.String(26), nullable=False),
        sa.Column(
            "role",
            sa.Enum(*MEMBERSHIP_ROLES, name="membership_role", native_enum=False),
            nullable=False,
        ),
        sa.Column(
            "status",
            sa.Enum(*MEMBERSHIP_STATUSES, name="membership_status", native_enum=False),
            nullable=False,
            server_default="active",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("organization_id", "user_id", name="uq_membership_org_user"),
    )
    op.create_index(
        "idx_memberships_org_role", "organization_memberships", ["organization_id", "role"]
    )

    op.create_table(
        "instructor_availability",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("instructor_id", sa.String(26), nullable=False),
        sa.Column("organization_id", sa.String(26), nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.ForeignKeyConstraint(
            ["instructor_id"], ["organization_memberships.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["organization_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("day_of_week >= 0 AND day_of_week <= 6", name="ck_availability_day"),
        sa.CheckConstraint("end_time > start_time", name="ck_availability_range"),
        comment="Recurring weekly availability blocks (day 0 = Sunday)",
    )
    op.create_index("idx_availability_instructor", "instructor_availability", ["instructor_id"])
    op.create_index(
        "idx_availability_organization", "instructor_availability", ["organization_id"]
    )
    op.create_index(
        "idx_availability_instructor_day",
        "instructor_availability",
        ["instructor_id", "day_of_week"],
    )

    print("Availability foundation tables created successfully!")


def downgrade() -> None:
    """Drop availability foundation tables."""
    print("Dropping availability foundation tables...")

    op.drop_index("idx_availability_instructor_day", table_name="instructor_availability")
    op.drop_index("idx_availability_organization", table_name="instructor_availability")
    op.drop_index("idx_availability_instructor", table_name="instructor_availability")
    op.drop_table("instructor_availability")

    op.drop_index("idx_memberships_org_role", table_name="organization_memberships")
    op.drop_table("organization_memberships")
    op.drop_table("organizations")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")

    print("Availability foundation tables dropped successfully!")
