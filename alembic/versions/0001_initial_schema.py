"""initial schema: entities, users, stores, sellers

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

_LIVE_ROWS = sa.text("deleted_at IS NULL")


def _audit_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "entities",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        *_audit_columns(),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("entity_id", sa.Integer(), sa.ForeignKey("entities.id"), nullable=False),
        sa.Column(
            "role", sa.Enum("admin", "manager", "seller", name="userrole"), nullable=False
        ),
        sa.Column("reset_token_hash", sa.String(64), nullable=True),
        sa.Column("reset_token_expires_at", sa.DateTime(), nullable=True),
        *_audit_columns(),
    )
    op.create_index("ix_users_entity_id", "users", ["entity_id"])
    op.create_index("ix_users_reset_token_hash", "users", ["reset_token_hash"])
    op.create_index(
        "uq_users_email_live",
        "users",
        ["email"],
        unique=True,
        sqlite_where=_LIVE_ROWS,
        postgresql_where=_LIVE_ROWS,
    )

    op.create_table(
        "stores",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("entity_id", sa.Integer(), sa.ForeignKey("entities.id"), nullable=False),
        *_audit_columns(),
    )
    op.create_index("ix_stores_entity_id", "stores", ["entity_id"])
    op.create_index(
        "uq_stores_entity_name_live",
        "stores",
        ["entity_id", "name"],
        unique=True,
        sqlite_where=_LIVE_ROWS,
        postgresql_where=_LIVE_ROWS,
    )

    op.create_table(
        "sellers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("store_id", sa.Integer(), sa.ForeignKey("stores.id"), nullable=False),
        *_audit_columns(),
    )
    op.create_index("ix_sellers_store_id", "sellers", ["store_id"])
    op.create_index(
        "uq_sellers_email_live",
        "sellers",
        ["email"],
        unique=True,
        sqlite_where=_LIVE_ROWS,
        postgresql_where=_LIVE_ROWS,
    )


def downgrade() -> None:
    op.drop_table("sellers")
    op.drop_table("stores")
    op.drop_table("users")
    op.drop_table("entities")
    sa.Enum(name="userrole").drop(op.get_bind(), checkfirst=True)
