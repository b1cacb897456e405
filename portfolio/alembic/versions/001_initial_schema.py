"""Initial schema: admin users, site config and portfolio content tables

Revision ID: 001_initial
Revises:
Create Date: 2026-09-02

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _bilingual(name: str, type_=None, **kw):
    type_ = type_ or sa.String(length=255)
    return [
        sa.Column(f"{name}_zh", type_, **kw),
        sa.Column(f"{name}_en", type_, **kw),
    ]


def upgrade() -> None:
    op.create_table(
        "admin_users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_admin_users_id"), "admin_users", ["id"], unique=False)
    op.create_index(op.f("ix_admin_users_username"), "admin_users", ["username"], unique=True)

    op.create_table(
        "site_config",
        sa.Column("key", sa.String(length=100), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("key"),
    )

    op.create_table(
        "projects",
        sa.Column("id", sa.String(length=100), nullable=False),
        sa.Column("slug", sa.String(length=150), nullable=False),
        *_bilingual("title", nullable=False),
        *_bilingual("description", sa.Text()),
        *_bilingual("detail", sa.Text()),
        sa.Column("links_json", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=50), nullable=True),
        sa.Column("tags", sa.Text(), nullable=True),
        sa.Column("image", sa.String(length=1024), nullable=True),
        sa.Column("link", sa.String(length=1024), nullable=True),
        sa.Column("source", sa.String(length=1024), nullable=True),
        sa.Column("date", sa.String(length=50), nullable=True),
        sa.Column("featured", sa.Boolean(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "awards",
        sa.Column("id", sa.String(length=100), nullable=False),
        sa.Column("slug", sa.String(length=150), nullable=False),
        *_bilingual("title", nullable=False),
        *_bilingual("description", sa.Text()),
        *_bilingual("detail", sa.Text()),
        *_bilingual("org"),
        sa.Column("date", sa.String(length=50), nullable=True),
        sa.Column("level", sa.String(length=100), nullable=True),
        sa.Column("image", sa.String(length=1024), nullable=True),
        sa.Column("official_links", sa.Text(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "experiences",
        sa.Column("id", sa.String(length=100), nullable=False),
        *_bilingual("title", nullable=False),
        *_bilingual("org"),
        *_bilingual("description", sa.Text()),
        sa.Column("start_date", sa.String(length=50), nullable=True),
        sa.Column("end_date", sa.String(length=50), nullable=True),
        sa.Column("icon", sa.String(length=255), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "skills",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("icon", sa.String(length=255), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_skills_id"), "skills", ["id"], unique=False)

    op.create_table(
        "sites",
        sa.Column("id", sa.String(length=100), nullable=False),
        *_bilingual("title", nullable=False),
        *_bilingual("description", sa.Text()),
        sa.Column("url", sa.String(length=1024), nullable=True),
        sa.Column("icon", sa.String(length=255), nullable=True),
        sa.Column("since", sa.String(length=50), nullable=True),
        sa.Column("tags", sa.Text(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "social_links",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("icon", sa.String(length=255), nullable=True),
        sa.Column("url", sa.String(length=1024), nullable=True),
        sa.Column("link_type", sa.String(length=20), nullable=True),
        sa.Column("text_content", sa.String(length=255), nullable=True),
        sa.Column("color", sa.String(length=20), nullable=True),
        sa.Column("visible", sa.Boolean(), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_social_links_id"), "social_links", ["id"], unique=False)

    op.create_table(
        "games",
        sa.Column("id", sa.String(length=100), nullable=False),
        *_bilingual("title", nullable=False),
        sa.Column("icon", sa.String(length=255), nullable=True),
        sa.Column("hours_played", sa.Integer(), nullable=True),
        sa.Column("max_level", sa.String(length=50), nullable=True),
        sa.Column("account_name", sa.String(length=255), nullable=True),
        sa.Column("show_account", sa.Boolean(), nullable=True),
        sa.Column("url", sa.String(length=1024), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("games")
    op.drop_index(op.f("ix_social_links_id"), table_name="social_links")
    op.drop_table("social_links")
    op.drop_table("sites")
    op.drop_index(op.f("ix_skills_id"), table_name="skills")
    op.drop_table("skills")
    op.drop_table("experiences")
    op.drop_table("awards")
    op.drop_table("projects")
    op.drop_table("site_config")
    op.drop_index(op.f("ix_admin_users_username"), table_name="admin_users")
    op.drop_index(op.f("ix_admin_users_id"), table_name="admin_users")
    op.drop_table("admin_users")
