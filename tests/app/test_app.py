from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from parley.adapters.webhooks import WebhookListener
from parley.app import (
    build_event_dispatcher,
    list_calls,
    list_private_threads,
    purge_archived_messages,
    update_group_avatar,
)
from parley.config import THREAD_AVATAR_UPLOAD, CollectionConfig, MessengerConfig, WebhookConfig
from parley.config.http_resilience import ResilienceConfig
from parley.domain.errors import FeatureDisabledError
from parley.domain.events import ThreadAvatarEvent
from parley.domain.model import utcnow
from parley.domain.ports import UploadedFile
from parley.domain.thread_avatar import DefaultAvatar, UploadedAvatar
from tests.helpers.messenger import (
    FakeAssetStore,
    RecordingBroadcaster,
    RecordingEventDispatcher,
    RecordingReporter,
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

CONFIG = MessengerConfig()


def test_update_group_avatar_end_to_end(sqlite_unit_of_work: UowFactory) -> None:
    provider = make_provider("Admin")
    thread = make_group_thread("custom.png")
    thread.add_participant(provider, admin=True)
    with sqlite_unit_of_work() as uow:
        uow.repositories.providers.add(provider)
        uow.repositories.threads.add(thread)
        uow.commit()
    store = FakeAssetStore(files={f"threads/{thread.id}/avatar/custom.png": b"old"})
    broadcaster, events = RecordingBroadcaster(), RecordingEventDispatcher()

    outcome = update_group_avatar(
        thread.id,
        UploadedAvatar(file=UploadedFile(filename="new.webp", content=b"new")),
        provider_id=provider.id,
        assets=store,
        broadcaster=broadcaster,
        events=events,
        reporter=RecordingReporter(),
        config=CONFIG,
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert outcome.changed is True
    assert store.files == {f"threads/{thread.id}/avatar/img_1.webp": b"new"}
    with sqlite_unit_of_work() as uow:
        stored = uow.repositories.threads.get(thread.id)
        assert stored is not None
        assert stored.image == "img_1.webp"
        assert stored.updated_at == thread.updated_at
    assert len(broadcaster.sent) == 1
    event = events.events[0]
    assert isinstance(event, ThreadAvatarEvent)
    assert event.thread.image == "img_1.webp"
    assert event.provider.id == provider.id


def test_update_group_avatar_respects_feature_flag(sqlite_unit_of_work: UowFactory) -> None:
    provider = make_provider()
    thread = make_group_thread("1.png")
    with sqlite_unit_of_work() as uow:
        uow.repositories.providers.add(provider)
        uow.repositories.threads.add(thread)
        uow.commit()

    with pytest.raises(FeatureDisabledError):
        update_group_avatar(
            thread.id,
            UploadedAvatar(file=UploadedFile(filename="a.png", content=b"a")),
            provider_id=provider.id,
            assets=FakeAssetStore(),
            broadcaster=RecordingBroadcaster(),
            events=RecordingEventDispatcher(),
            config=MessengerConfig(features={THREAD_AVATAR_UPLOAD: False}),
            unit_of_work_factory=sqlite_unit_of_work,
        )


def test_update_group_avatar_unknown_thread(sqlite_unit_of_work: UowFactory) -> None:
    with pytest.raises(LookupError):
        update_group_avatar(
            uuid4(),
            DefaultAvatar(name="1.png"),
            provider_id=uuid4(),
            assets=FakeAssetStore(),
            config=CONFIG,
            unit_of_work_factory=sqlite_unit_of_work,
        )


def test_list_private_threads_pages_through(sqlite_unit_of_work: UowFactory) -> None:
    viewer = make_provider("Viewer")
    others = [make_provider(f"Other{index}") for index in range(3)]
    now = utcnow()
    threads = [
        make_private_thread(viewer, other, updated_at=now - timedelta(minutes=index))
        for index, other in enumerate(others)
    ]
    with sqlite_unit_of_work() as uow:
        for provider in (viewer, *others):
            uow.repositories.providers.add(provider)
        for thread in threads:
            uow.repositories.threads.add(thread)
        uow.commit()
    config = MessengerConfig(threads=CollectionConfig(index_count=2, page_count=2))

    first = list_private_threads(
        viewer.id,
        reporter=RecordingReporter(),
        config=config,
        unit_of_work_factory=sqlite_unit_of_work,
    )
    second = list_private_threads(
        viewer.id,
        page_id=threads[1].id,
        reporter=RecordingReporter(),
        config=config,
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert [item["name"] for item in first.data] == ["Other0", "Other1"]
    assert first.meta.total == 3
    assert first.meta.next_page_id == str(threads[1].id)
    assert first.meta.next_page_route == f"/api/messenger/privates/page/{threads[1].id}"
    assert [item["name"] for item in second.data] == ["Other2"]
    assert second.meta.final_page is True
    assert second.meta.total is None


def test_list_calls_for_thread(sqlite_unit_of_work: UowFactory) -> None:
    owner = make_provider("Owner")
    thread = make_group_thread()
    thread.add_participant(owner)
    calls = make_calls(thread, owner, 2)
    with sqlite_unit_of_work() as uow:
        uow.repositories.providers.add(owner)
        uow.repositories.threads.add(thread)
        for call in calls:
            uow.repositories.calls.add(call)
        uow.commit()

    page = list_calls(
        thread.id,
        reporter=RecordingReporter(),
        config=CONFIG,
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert [item["id"] for item in page.data] == [str(call.id) for call in calls]
    assert page.meta.results == 2
    assert page.meta.total == 2
    assert page.meta.final_page is True


def test_list_calls_unknown_thread(sqlite_unit_of_work: UowFactory) -> None:
    with pytest.raises(LookupError):
        list_calls(uuid4(), config=CONFIG, unit_of_work_factory=sqlite_unit_of_work)


def test_purge_archived_messages(sqlite_unit_of_work: UowFactory) -> None:
    thread, owner = make_group_thread(), make_provider()
    now = utcnow()
    with sqlite_unit_of_work() as uow:
        uow.repositories.threads.add(thread)
        uow.repositories.messages.add(
            trashed_message(thread, owner, deleted_at=now - timedelta(days=45))
        )
        uow.repositories.messages.add(
            trashed_message(thread, owner, deleted_at=now - timedelta(days=5))
        )
        uow.commit()

    assert purge_archived_messages(config=CONFIG, unit_of_work_factory=sqlite_unit_of_work) == 1
    assert purge_archived_messages(days=1, unit_of_work_factory=sqlite_unit_of_work) == 1


def test_event_dispatcher_registers_webhook_listener() -> None:
    webhook = WebhookConfig(url="https://hooks.example.test", resilience=ResilienceConfig("t"))
    dispatcher = build_event_dispatcher(RecordingReporter(), webhook=webhook)
    event = ThreadAvatarEvent.create(make_provider().ref(), make_group_thread())

    listeners = dispatcher.listeners_for(event)

    assert len(listeners) == 1
    assert isinstance(listeners[0], WebhookListener)
    assert build_event_dispatcher(RecordingReporter()).listeners_for(event) == ()
