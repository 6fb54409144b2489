"""Calls placed inside a thread."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from parley.domain.model.entity import Entity, MissingRelationError, utcnow
from parley.domain.model.enums import CallType

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from parley.domain.model.provider import Provider
    from parley.domain.model.thread import Thread


@dataclass(eq=False, kw_only=True)
class Call(Entity):
    _thread: Thread = field(repr=False)
    owner_id: UUID
    _owner: Provider | None = field(default=None, repr=False)

    type: CallType = CallType.VIDEO
    setup_complete: bool = False
    teardown_complete: bool = False
    call_ended: datetime | None = None
    created_at: datetime = field(default_factory=utcnow)

    @property
    def thread(self) -> Thread:
        return self._thread

    @property
    def owner(self) -> Provider | None:
        return self._owner

    @property
    def is_active(self) -> bool:
        return self.call_ended is None

    def require_owner(self) -> Provider:
        if self._owner is None:
            raise MissingRelationError(f"call {self.id} references missing owner {self.owner_id}")
        return self._owner

    def end(self, *, now: datetime | None = None) -> None:
        if self.call_ended is None:
            self.call_ended = now or utcnow()
