"""Messages, soft-deleted before they are purged."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from parley.domain.model.entity import Entity, utcnow
from parley.domain.model.enums import MessageType

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID


@dataclass(eq=False, kw_only=True)
class Message(Entity):
    thread_id: UUID
    owner_id: UUID
    type: MessageType = MessageType.TEXT
    body: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    deleted_at: datetime | None = None

    @property
    def is_trashed(self) -> bool:
        return self.deleted_at is not None

    def trash(self, *, now: datetime | None = None) -> None:
        if self.deleted_at is None:
            self.deleted_at = now or utcnow()
