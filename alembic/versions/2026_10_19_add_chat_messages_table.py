"""add chat_messages table

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "a1b2c3d4e5f6"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create chat_messages table."""
    op.create_table(
        "chat_messages",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("text", sa.Text(), nullable=True),
        sa.Column("origin", sa.String(length=16), nullable=False),
        sa.Column("subscriber_identity", sa.String(length=64), nullable=True),
        sa.Column(
            "processed",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column("processed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("error", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )
    op.create_index(
        "ix_chat_messages_identity_created",
        "chat_messages",
        ["subscriber_identity", "created_at"],
        unique=False,
    )
    op.create_index(
        "ix_chat_messages_origin_processed",
        "chat_messages",
        ["origin", "processed"],
        unique=False,
    )


def downgrade() -> None:
    """Drop chat_messages table."""
    op.drop_index("ix_chat_messages_origin_processed", table_name="chat_messages")
    op.drop_index("ix_chat_messages_identity_created", table_name="chat_messages")
    op.drop_table("chat_messages")
