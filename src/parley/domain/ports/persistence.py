"""Ports for persisting domain aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from parley.domain.model import Call, Message, Provider, Thread

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime
    from uuid import UUID

    from parley.domain.collections.pagination import FetchedPage


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class ProviderRepository(Repository[Provider], Protocol):
    """Persistence contract for providers."""

    def get(self, provider_id: UUID) -> Provider | None: ...


@runtime_checkable
class ThreadRepository(Repository[Thread], Protocol):
    """Persistence contract for threads.

    ``update`` must support skipping the audit bookkeeping so metadata-only
    changes do not bump ``updated_at``.
    """

    def get(self, thread_id: UUID, *, refresh: bool = False) -> Thread | None: ...

    def update(
        self,
        thread: Thread,
        fields: Mapping[str, object],
        *,
        skip_audit: bool = False,
    ) -> None: ...

    def page_private_threads(
        self,
        provider_id: UUID,
        *,
        page_id: UUID | None,
        limit: int,
    ) -> FetchedPage[Thread]: ...

    def count_private_threads(self, provider_id: UUID) -> int: ...


@runtime_checkable
class CallRepository(Repository[Call], Protocol):
    """Persistence contract for calls."""

    def page_for_thread(
        self,
        thread_id: UUID,
        *,
        page_id: UUID | None,
        limit: int,
    ) -> FetchedPage[Call]: ...

    def count_for_thread(self, thread_id: UUID) -> int: ...


@runtime_checkable
class MessageRepository(Repository[Message], Protocol):
    """Persistence contract for messages."""

    def purge_trashed_text(self, deleted_before: datetime) -> int: ...
