"""Domain events and realtime channel naming."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from parley.domain.model import utcnow

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from parley.domain.model import ProviderRef, Thread

THREAD_AVATAR_BROADCAST = "thread.avatar"


def presence_channel(thread_id: UUID) -> str:
    """Channel reaching the participants currently present in a thread."""

    return f"presence-messenger.thread.{thread_id}"


@dataclass(frozen=True, slots=True, kw_only=True)
class ThreadAvatarEvent:
    """A thread's avatar was changed by ``provider``.

    ``thread`` is reloaded after the commit so listeners see the final state.
    """

    name: ClassVar[str] = "thread.avatar.updated"

    provider: ProviderRef
    thread: Thread
    occurred_at: datetime

    @classmethod
    def create(
        cls, provider: ProviderRef, thread: Thread, *, now: datetime | None = None
    ) -> ThreadAvatarEvent:
        return cls(provider=provider, thread=thread, occurred_at=now or utcnow())

    def to_payload(self) -> dict[str, object]:
        return {
            "event": self.name,
            "occurred_at": self.occurred_at.isoformat(),
            "provider": {
                "id": str(self.provider.id),
                "alias": self.provider.alias,
                "name": self.provider.name,
            },
            "thread": {
                "id": str(self.thread.id),
                "type": str(self.thread.type),
                "subject": self.thread.subject,
                "image": self.thread.image,
            },
        }
