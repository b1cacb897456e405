"""Add resume_profiles and resume_profile_devices tables

Revision ID: 002_resume_profiles
Revises: 001_initial
Create Date: 2026-09-20

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "002_resume_profiles"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "resume_profiles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("profile_name", sa.String(length=100), nullable=False),
        sa.Column("resume_data", sa.JSON(), nullable=False),
        sa.Column("layout", sa.String(length=50), nullable=False),
        sa.Column("palette", sa.String(length=50), nullable=False),
        sa.Column("show_icons", sa.Boolean(), nullable=False),
        sa.Column("font_scale", sa.Integer(), nullable=False),
        sa.Column("locale", sa.String(length=10), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("profile_name"),
    )
    op.create_index(op.f("ix_resume_profiles_id"), "resume_profiles", ["id"], unique=False)

    op.create_table(
        "resume_profile_devices",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("profile_id", sa.Integer(), nullable=False),
        sa.Column("device_token", sa.String(length=200), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["profile_id"], ["resume_profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("profile_id", "device_token", name="uq_resume_profile_device"),
    )
    op.create_index(
        op.f("ix_resume_profile_devices_profile_id"), "resume_profile_devices", ["profile_id"], unique=False
    )
    op.create_index(
        op.f("ix_resume_profile_devices_device_token"), "resume_profile_devices", ["device_token"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_resume_profile_devices_device_token"), table_name="resume_profile_devices")
    op.drop_index(op.f("ix_resume_profile_devices_profile_id"), table_name="resume_profile_devices")
    op.drop_table("resume_profile_devices")
    op.drop_index(op.f("ix_resume_profiles_id"), table_name="resume_profiles")
    op.drop_table("resume_profiles")
