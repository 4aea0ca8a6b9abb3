"""create users and messages

Revision ID: 5b1f0c2d9a7e
Revises:
Create Date: 2026-10-19 09:12:41.532118

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5b1f0c2d9a7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the users and messages tables."""
    op.create_table(
        "users",
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("password", sa.Text(), nullable=False),
        sa.Column("first_name", sa.Text(), nullable=False),
        sa.Column("last_name", sa.Text(), nullable=False),
        sa.Column("phone", sa.Text(), nullable=False),
        sa.Column("join_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("username"),
    )
    op.create_table(
        "messages",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("from_username", sa.Text(), nullable=False),
        sa.Column("to_username", sa.Text(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("read_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["from_username"], ["users.username"]),
        sa.ForeignKeyConstraint(["to_username"], ["users.username"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_messages_from_username", "messages", ["from_username"])
    op.create_index("ix_messages_to_username", "messages", ["to_username"])


def downgrade() -> None:
    """Drop the messages and users tables."""
    op.drop_index("ix_messages_to_username", table_name="messages")
    op.drop_index("ix_messages_from_username", table_name="messages")
    op.drop_table("messages")
    op.drop_table("users")
