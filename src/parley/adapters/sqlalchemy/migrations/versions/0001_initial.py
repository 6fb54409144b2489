"""Initial messenger schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from parley.adapters.sqlalchemy.mappings import UTCDateTime

revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

THREAD_TYPES = ("PRIVATE", "GROUP")
CALL_TYPES = ("VIDEO",)
MESSAGE_TYPES = ("TEXT", "IMAGE", "DOCUMENT", "AUDIO", "VIDEO", "SYSTEM")


def upgrade() -> None:
    op.create_table(
        "provider",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("alias", sa.String(length=32), nullable=False),
        sa.Column("avatar", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_provider")),
    )
    op.create_table(
        "thread",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "type", sa.Enum(*THREAD_TYPES, name="threadtype", native_enum=False), nullable=False
        ),
        sa.Column("subject", sa.String(), nullable=True),
        sa.Column("image", sa.String(), nullable=True),
        sa.Column("add_participants", sa.Boolean(), nullable=False),
        sa.Column("invitations", sa.Boolean(), nullable=False),
        sa.Column("calling", sa.Boolean(), nullable=False),
        sa.Column("messaging", sa.Boolean(), nullable=False),
        sa.Column("knocks", sa.Boolean(), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.Column("updated_at", UTCDateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_thread")),
    )
    op.create_index("ix_thread_recent", "thread", ["updated_at", "id"])
    op.create_table(
        "participant",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("thread_id", sa.Uuid(), nullable=False),
        sa.Column("provider_id", sa.Uuid(), nullable=False),
        sa.Column("admin", sa.Boolean(), nullable=False),
        sa.Column("pending", sa.Boolean(), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["thread_id"],
            ["thread.id"],
            name=op.f("fk_participant_thread_id_thread"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_participant")),
    )
    op.create_index(
        "ix_participant_provider", "participant", ["provider_id", "thread_id"], unique=True
    )
    op.create_table(
        "call",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("thread_id", sa.Uuid(), nullable=False),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        sa.Column("type", sa.Enum(*CALL_TYPES, name="calltype", native_enum=False), nullable=False),
        sa.Column("setup_complete", sa.Boolean(), nullable=False),
        sa.Column("teardown_complete", sa.Boolean(), nullable=False),
        sa.Column("call_ended", UTCDateTime(), nullable=True),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["thread_id"],
            ["thread.id"],
            name=op.f("fk_call_thread_id_thread"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_call")),
    )
    op.create_index("ix_call_thread_recent", "call", ["thread_id", "created_at", "id"])
    op.create_table(
        "message",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("thread_id", sa.Uuid(), nullable=False),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        sa.Column(
            "type", sa.Enum(*MESSAGE_TYPES, name="messagetype", native_enum=False), nullable=False
        ),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.Column("deleted_at", UTCDateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ["thread_id"],
            ["thread.id"],
            name=op.f("fk_message_thread_id_thread"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_message")),
    )
    op.create_index("ix_message_trashed", "message", ["type", "deleted_at"])


def downgrade() -> None:
    op.drop_index("ix_message_trashed", table_name="message")
    op.drop_table("message")
    op.drop_index("ix_call_thread_recent", table_name="call")
    op.drop_table("call")
    op.drop_index("ix_participant_provider", table_name="participant")
    op.drop_table("participant")
    op.drop_index("ix_thread_recent", table_name="thread")
    op.drop_table("thread")
    op.drop_table("provider")
