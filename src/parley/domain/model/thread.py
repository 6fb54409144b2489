"""Threads and their participants.

Thread is the aggregate root; participants are created through
``Thread.add_participant`` so the graph stays consistent without the ORM.
A participant's provider is referenced by id only and may be gone.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Final

from parley.domain.model.call import Call
from parley.domain.model.entity import Entity, MissingRelationError, utcnow
from parley.domain.model.enums import CallType, ThreadType

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from parley.domain.model.provider import Provider

DEFAULT_GROUP_AVATARS: Final[frozenset[str]] = frozenset(
    {"1.png", "2.png", "3.png", "4.png", "5.png"}
)


@dataclass(eq=False, kw_only=True)
class Thread(Entity):
    STORAGE_DISK: ClassVar[str] = "messenger"

    type: ThreadType = ThreadType.PRIVATE
    subject: str | None = None
    image: str | None = None

    add_participants: bool = True
    invitations: bool = True
    calling: bool = True
    messaging: bool = True
    knocks: bool = True

    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    _participants: list[Participant] = field(default_factory=list["Participant"], repr=False)

    @property
    def is_group(self) -> bool:
        return self.type is ThreadType.GROUP

    @property
    def is_private(self) -> bool:
        return self.type is ThreadType.PRIVATE

    @property
    def participants(self) -> tuple[Participant, ...]:
        return tuple(self._participants)

    @property
    def storage_disk(self) -> str:
        return self.STORAGE_DISK

    @property
    def storage_directory(self) -> str:
        return f"threads/{self.id}"

    @property
    def avatar_directory(self) -> str:
        return f"{self.storage_directory}/avatar"

    def touch(self, *, now: datetime | None = None) -> None:
        """Record a content edit in the modification timestamp."""
        self.updated_at = now or utcnow()

    def add_participant(
        self,
        provider: Provider,
        *,
        admin: bool = False,
        pending: bool = False,
    ) -> Participant:
        if self.participant_for(provider.id) is not None:
            raise ValueError("provider already participates in thread")
        participant = Participant(
            _thread=self,
            provider_id=provider.id,
            _provider=provider,
            admin=admin,
            pending=pending,
        )
        self._participants.append(participant)
        return participant

    def participant_for(self, provider_id: UUID) -> Participant | None:
        for participant in self._participants:
            if participant.provider_id == provider_id:
                return participant
        return None

    def recipient_for(self, viewer_id: UUID) -> Participant:
        """Return the other participant of a private thread."""

        if not self.is_private:
            raise ValueError("only private threads have a recipient")
        for participant in self._participants:
            if participant.provider_id != viewer_id:
                return participant
        raise MissingRelationError(f"private thread {self.id} has no recipient")

    def start_call(
        self,
        owner: Provider,
        *,
        type_: CallType = CallType.VIDEO,
        started_at: datetime | None = None,
    ) -> Call:
        return Call(
            _thread=self,
            owner_id=owner.id,
            _owner=owner,
            type=type_,
            created_at=started_at or utcnow(),
        )


@dataclass(eq=False, kw_only=True)
class Participant(Entity):
    _thread: Thread = field(repr=False)
    provider_id: UUID
    _provider: Provider | None = field(default=None, repr=False)

    admin: bool = False
    pending: bool = False
    created_at: datetime = field(default_factory=utcnow)

    @property
    def thread(self) -> Thread:
        return self._thread

    @property
    def provider(self) -> Provider | None:
        return self._provider

    def require_provider(self) -> Provider:
        if self._provider is None:
            raise MissingRelationError(
                f"participant {self.id} references missing provider {self.provider_id}"
            )
        return self._provider
