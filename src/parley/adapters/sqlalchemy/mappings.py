"""SQLAlchemy mapping metadata for the messenger domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    String,
    Table,
    Text,
    TypeDecorator,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from parley.domain.model import (
    Call,
    CallType,
    Message,
    MessageType,
    Participant,
    Provider,
    Thread,
    ThreadType,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

provider_table = Table(
    "provider",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("alias", String(32), nullable=False),
    Column("avatar", String, nullable=True),
)

thread_table = Table(
    "thread",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("type", Enum(ThreadType, native_enum=False), nullable=False),
    Column("subject", String, nullable=True),
    Column("image", String, nullable=True),
    Column("add_participants", Boolean, nullable=False),
    Column("invitations", Boolean, nullable=False),
    Column("calling", Boolean, nullable=False),
    Column("messaging", Boolean, nullable=False),
    Column("knocks", Boolean, nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("updated_at", UTCDateTime(), nullable=False),
    Index("ix_thread_recent", "updated_at", "id"),
)

# provider ids are not foreign keys: providers may disappear while their
# memberships and calls remain.
participant_table = Table(
    "participant",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "thread_id", UUIDColumnType, ForeignKey("thread.id", ondelete="CASCADE"), nullable=False
    ),
    Column("provider_id", UUIDColumnType, nullable=False),
    Column("admin", Boolean, nullable=False),
    Column("pending", Boolean, nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Index("ix_participant_provider", "provider_id", "thread_id", unique=True),
)

call_table = Table(
    "call",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "thread_id", UUIDColumnType, ForeignKey("thread.id", ondelete="CASCADE"), nullable=False
    ),
    Column("owner_id", UUIDColumnType, nullable=False),
    Column("type", Enum(CallType, native_enum=False), nullable=False),
    Column("setup_complete", Boolean, nullable=False),
    Column("teardown_complete", Boolean, nullable=False),
    Column("call_ended", UTCDateTime(), nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Index("ix_call_thread_recent", "thread_id", "created_at", "id"),
)

message_table = Table(
    "message",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "thread_id", UUIDColumnType, ForeignKey("thread.id", ondelete="CASCADE"), nullable=False
    ),
    Column("owner_id", UUIDColumnType, nullable=False),
    Column("type", Enum(MessageType, native_enum=False), nullable=False),
    Column("body", Text, nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("deleted_at", UTCDateTime(), nullable=True),
    Index("ix_message_trashed", "type", "deleted_at"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Provider, provider_table)

    mapper_registry.map_imperatively(
        Thread,
        thread_table,
        properties={
            "_participants": relationship(
                Participant,
                back_populates="_thread",
                cascade="all, delete-orphan",
                order_by=participant_table.c.created_at,
            ),
        },
    )

    mapper_registry.map_imperatively(
        Participant,
        participant_table,
        properties={
            "_thread": relationship(Thread, back_populates="_participants"),
            "_provider": relationship(
                Provider,
                primaryjoin=participant_table.c.provider_id == provider_table.c.id,
                foreign_keys=[participant_table.c.provider_id],
                viewonly=True,
            ),
        },
    )

    mapper_registry.map_imperatively(
        Call,
        call_table,
        properties={
            "_thread": relationship(Thread),
            "_owner": relationship(
                Provider,
                primaryjoin=call_table.c.owner_id == provider_table.c.id,
                foreign_keys=[call_table.c.owner_id],
                viewonly=True,
            ),
        },
    )

    mapper_registry.map_imperatively(Message, message_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
