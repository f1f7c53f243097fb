"""create chat_configs table

Revision ID: 0001_create_chat_configs
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001_create_chat_configs"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "chat_configs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("organization_id", sa.String(length=255), nullable=False),
        sa.Column("base_url", sa.Text(), nullable=False),
        sa.Column("workflow_id", sa.String(length=255), nullable=False),
        sa.Column("api_key", sa.Text(), nullable=False),
        sa.Column("company_name", sa.String(length=255), nullable=True),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.Column("primary_color", sa.String(length=32), nullable=True),
        sa.Column("secondary_color", sa.String(length=32), nullable=True),
        sa.Column("welcome_message", sa.Text(), nullable=True),
        sa.Column("chat_title", sa.String(length=255), nullable=True),
        sa.Column("placeholder_text", sa.String(length=255), nullable=True),
        sa.Column("is_enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("public_slug", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_chat_configs_organization_id"), "chat_configs", ["organization_id"], unique=True,
    )
    op.create_index(
        op.f("ix_chat_configs_public_slug"), "chat_configs", ["public_slug"], unique=True,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_chat_configs_public_slug"), table_name="chat_configs")
    op.drop_index(op.f("ix_chat_configs_organization_id"), table_name="chat_configs")
    op.drop_table("chat_configs")
