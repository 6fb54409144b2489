from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from sqlalchemy import delete, update

from parley.adapters.sqlalchemy.mappings import provider_table, thread_table
from parley.domain.model import MessageType, Thread
from tests.helpers.messenger import (
    BASE_TIME,
    make_calls,
    make_group_thread,
    make_private_thread,
    make_provider,
    trashed_message,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from parley.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

    UowFactory = Callable[[], SqlAlchemyUnitOfWork]


def test_private_threads_page_newest_first(sqlite_unit_of_work: UowFactory) -> None:
    viewer = make_provider("Viewer")
    others = [make_provider(f"Other{index}") for index in range(5)]
    threads = [
        make_private_thread(viewer, other, updated_at=BASE_TIME - timedelta(hours=index))
        for index, other in enumerate(others)
    ]
    with sqlite_unit_of_work() as uow:
        for provider in (viewer, *others):
            uow.repositories.providers.add(provider)
        for thread in threads:
            uow.repositories.threads.add(thread)
        uow.repositories.threads.add(make_group_thread())
        uow.commit()

    with sqlite_unit_of_work() as uow:
        repo = uow.repositories.threads
        first = repo.page_private_threads(viewer.id, page_id=None, limit=2)
        second = repo.page_private_threads(viewer.id, page_id=first.items[-1].id, limit=2)
        last = repo.page_private_threads(viewer.id, page_id=second.items[-1].id, limit=2)
        total = repo.count_private_threads(viewer.id)
        names = [item.recipient_for(viewer.id).require_provider().name for item in first.items]

    assert [item.id for item in first.items] == [threads[0].id, threads[1].id]
    assert first.has_more is True
    assert [item.id for item in second.items] == [threads[2].id, threads[3].id]
    assert [item.id for item in last.items] == [threads[4].id]
    assert last.has_more is False
    assert total == 5
    assert names == ["Other0", "Other1"]


def test_unknown_cursor_returns_empty_page(sqlite_unit_of_work: UowFactory) -> None:
    viewer = make_provider()
    with sqlite_unit_of_work() as uow:
        page = uow.repositories.threads.page_private_threads(
            viewer.id, page_id=make_provider().id, limit=10
        )

    assert page.items == ()
    assert page.has_more is False


def test_deleted_provider_loads_as_missing(sqlite_unit_of_work: UowFactory) -> None:
    viewer, other = make_provider("Viewer"), make_provider("Other")
    thread = make_private_thread(viewer, other)
    with sqlite_unit_of_work() as uow:
        uow.repositories.providers.add(viewer)
        uow.repositories.providers.add(other)
        uow.repositories.threads.add(thread)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        uow.session.execute(delete(provider_table).where(provider_table.c.id == other.id))
        uow.commit()

    with sqlite_unit_of_work() as uow:
        page = uow.repositories.threads.page_private_threads(viewer.id, page_id=None, limit=5)
        recipient = page.items[0].recipient_for(viewer.id)

        assert recipient.provider_id == other.id
        assert recipient.provider is None


def test_update_can_skip_audit(sqlite_unit_of_work: UowFactory) -> None:
    thread = make_group_thread("1.png")
    with sqlite_unit_of_work() as uow:
        uow.repositories.threads.add(thread)
        uow.commit()

    detached = Thread(
        id=thread.id,
        type=thread.type,
        subject=thread.subject,
        image=thread.image,
        created_at=thread.created_at,
        updated_at=thread.updated_at,
    )
    with sqlite_unit_of_work() as uow:
        uow.repositories.threads.update(detached, {"image": "2.png"}, skip_audit=True)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        stored = uow.repositories.threads.get(thread.id)
        assert stored is not None
        assert stored.image == "2.png"
        assert stored.updated_at == BASE_TIME
        uow.repositories.threads.update(stored, {"subject": "Renamed"})
        uow.commit()

    assert detached.image == "2.png"
    assert stored.updated_at > BASE_TIME


def test_get_with_refresh_reloads_state(sqlite_unit_of_work: UowFactory) -> None:
    thread = make_group_thread("1.png")
    with sqlite_unit_of_work() as uow:
        uow.repositories.threads.add(thread)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        loaded = uow.repositories.threads.get(thread.id)
        assert loaded is not None
        uow.session.execute(
            update(thread_table).where(thread_table.c.id == thread.id).values(image="3.png")
        )
        stale = uow.repositories.threads.get(thread.id)
        refreshed = uow.repositories.threads.get(thread.id, refresh=True)

        assert stale is loaded
        assert refreshed is loaded
        assert refreshed.image == "3.png"


def test_calls_page_for_thread(sqlite_unit_of_work: UowFactory) -> None:
    owner = make_provider("Owner")
    thread = make_group_thread()
    thread.add_participant(owner)
    calls = make_calls(thread, owner, 3)
    with sqlite_unit_of_work() as uow:
        uow.repositories.providers.add(owner)
        uow.repositories.threads.add(thread)
        for call in calls:
            uow.repositories.calls.add(call)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        repo = uow.repositories.calls
        first = repo.page_for_thread(thread.id, page_id=None, limit=2)
        rest = repo.page_for_thread(thread.id, page_id=first.items[-1].id, limit=2)
        owners = [call.require_owner().name for call in first.items]
        total = repo.count_for_thread(thread.id)

    assert [call.id for call in first.items] == [calls[0].id, calls[1].id]
    assert first.has_more is True
    assert [call.id for call in rest.items] == [calls[2].id]
    assert rest.has_more is False
    assert owners == ["Owner", "Owner"]
    assert total == 3


def test_purge_trashed_text_bulk_deletes(sqlite_unit_of_work: UowFactory) -> None:
    thread, owner = make_group_thread(), make_provider()
    old = trashed_message(thread, owner, deleted_at=BASE_TIME - timedelta(days=40))
    recent = trashed_message(thread, owner, deleted_at=BASE_TIME - timedelta(days=1))
    image = trashed_message(
        thread, owner, deleted_at=BASE_TIME - timedelta(days=40), type_=MessageType.IMAGE
    )
    with sqlite_unit_of_work() as uow:
        uow.repositories.threads.add(thread)
        for message in (old, recent, image):
            uow.repositories.messages.add(message)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        purged = uow.repositories.messages.purge_trashed_text(BASE_TIME - timedelta(days=30))
        uow.commit()

    assert purged == 1
