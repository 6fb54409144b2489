"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final, cast

from sqlalchemy import and_, delete, func, or_, select
from sqlalchemy.orm import selectinload

from parley.adapters.sqlalchemy.mappings import (
    call_table,
    message_table,
    participant_table,
    thread_table,
)
from parley.domain.collections.pagination import FetchedPage
from parley.domain.model import Call, MessageType, Participant, Provider, Thread, ThreadType

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime
    from uuid import UUID

    from sqlalchemy import ColumnElement, CursorResult, Select
    from sqlalchemy.orm import InstrumentedAttribute, Session

    from parley.domain.model import Message

UPDATABLE_THREAD_FIELDS: Final[frozenset[str]] = frozenset(
    {
        "subject",
        "image",
        "add_participants",
        "invitations",
        "calling",
        "messaging",
        "knocks",
    }
)


def _relation(entity: type[object], name: str) -> InstrumentedAttribute[Any]:
    return cast("InstrumentedAttribute[Any]", getattr(entity, name))


def _after_anchor(
    session: Session,
    order_column: ColumnElement[Any],
    id_column: ColumnElement[Any],
    anchor_id: UUID,
) -> ColumnElement[bool] | None:
    """Keyset condition for rows sorted after ``anchor_id`` in descending order."""

    anchor = session.execute(
        select(order_column, id_column).where(id_column == anchor_id)
    ).one_or_none()
    if anchor is None:
        return None
    anchor_value, anchor_key = anchor
    return or_(
        order_column < anchor_value,
        and_(order_column == anchor_value, id_column < anchor_key),
    )


def _fetch_page[TEntity](
    session: Session,
    stmt: Select[tuple[TEntity]],
    *,
    order_column: ColumnElement[Any],
    id_column: ColumnElement[Any],
    page_id: UUID | None,
    limit: int,
) -> FetchedPage[TEntity]:
    if page_id is not None:
        condition = _after_anchor(session, order_column, id_column, page_id)
        if condition is None:
            return FetchedPage(items=(), has_more=False)
        stmt = stmt.where(condition)
    stmt = stmt.order_by(order_column.desc(), id_column.desc()).limit(limit + 1)
    rows = session.scalars(stmt).unique().all()
    return FetchedPage.from_lookahead(rows, limit)


class SqlAlchemyProviderRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Provider) -> None:
        self.session.add(entity)

    def get(self, provider_id: UUID) -> Provider | None:
        return self.session.get(Provider, provider_id)


class SqlAlchemyThreadRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Thread) -> None:
        self.session.add(entity)

    def get(self, thread_id: UUID, *, refresh: bool = False) -> Thread | None:
        return self.session.get(Thread, thread_id, populate_existing=refresh)

    def update(
        self,
        thread: Thread,
        fields: Mapping[str, object],
        *,
        skip_audit: bool = False,
    ) -> None:
        unknown = set(fields) - UPDATABLE_THREAD_FIELDS
        if unknown:
            raise ValueError(f"Cannot update thread fields: {', '.join(sorted(unknown))}")
        persisted = self.session.get(Thread, thread.id)
        if persisted is None:
            raise LookupError(f"thread {thread.id} does not exist")
        targets = (persisted,) if persisted is thread else (persisted, thread)
        for target in targets:
            for name, value in fields.items():
                setattr(target, name, value)
        if not skip_audit:
            persisted.touch()
            thread.updated_at = persisted.updated_at

    def page_private_threads(
        self,
        provider_id: UUID,
        *,
        page_id: UUID | None,
        limit: int,
    ) -> FetchedPage[Thread]:
        stmt = (
            self._private_threads(provider_id)
            .options(
                selectinload(_relation(Thread, "_participants")).selectinload(
                    _relation(Participant, "_provider")
                )
            )
        )
        return _fetch_page(
            self.session,
            stmt,
            order_column=thread_table.c.updated_at,
            id_column=thread_table.c.id,
            page_id=page_id,
            limit=limit,
        )

    def count_private_threads(self, provider_id: UUID) -> int:
        stmt = select(func.count()).select_from(self._private_threads(provider_id).subquery())
        return self.session.execute(stmt).scalar_one()

    def _private_threads(self, provider_id: UUID) -> Select[tuple[Thread]]:
        return (
            select(Thread)
            .join(participant_table, participant_table.c.thread_id == thread_table.c.id)
            .where(participant_table.c.provider_id == provider_id)
            .where(thread_table.c.type == ThreadType.PRIVATE)
        )


class SqlAlchemyCallRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Call) -> None:
        self.session.add(entity)

    def page_for_thread(
        self,
        thread_id: UUID,
        *,
        page_id: UUID | None,
        limit: int,
    ) -> FetchedPage[Call]:
        stmt = (
            select(Call)
            .where(call_table.c.thread_id == thread_id)
            .options(selectinload(_relation(Call, "_owner")))
        )
        return _fetch_page(
            self.session,
            stmt,
            order_column=call_table.c.created_at,
            id_column=call_table.c.id,
            page_id=page_id,
            limit=limit,
        )

    def count_for_thread(self, thread_id: UUID) -> int:
        stmt = select(func.count()).select_from(call_table).where(call_table.c.thread_id == thread_id)
        return self.session.execute(stmt).scalar_one()


class SqlAlchemyMessageRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Message) -> None:
        self.session.add(entity)

    def purge_trashed_text(self, deleted_before: datetime) -> int:
        stmt = (
            delete(message_table)
            .where(message_table.c.type == MessageType.TEXT)
            .where(message_table.c.deleted_at.is_not(None))
            .where(message_table.c.deleted_at <= deleted_before)
        )
        result = cast("CursorResult[Any]", self.session.execute(stmt))
        return result.rowcount
