"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from parley.adapters.broadcasting import LoggingBroadcastDriver
from parley.adapters.events import InProcessEventDispatcher
from parley.adapters.reporting import LoggingErrorReporter
from parley.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from parley.adapters.webhooks import WebhookListener
from parley.config import get_messenger_config, get_webhook_config
from parley.domain.collections import (
    CallCollection,
    CursorState,
    PageSizeConfig,
    PrivateThreadCollection,
)
from parley.domain.events import ThreadAvatarEvent
from parley.domain.model import DEFAULT_GROUP_AVATARS
from parley.domain.ports.unit_of_work import MessengerUnitOfWork
from parley.domain.purge import purge_messages
from parley.domain.resources import AssetUrls
from parley.domain.thread_avatar import UpdateGroupAvatar

if TYPE_CHECKING:
    from uuid import UUID

    from parley.config import CollectionConfig, MessengerConfig, WebhookConfig
    from parley.domain.collections import ResultPage
    from parley.domain.ports import AssetStore, BroadcastDriver, ErrorReporter, EventDispatcher
    from parley.domain.thread_avatar import AvatarRequest, AvatarUpdateOutcome

UnitOfWorkFactory = Callable[[], MessengerUnitOfWork]

log = getLogger(__name__)


def _unit_of_work_factory(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    if not is_started():
        startup()
    return SqlAlchemyUnitOfWork


def _page_sizes(config: CollectionConfig) -> PageSizeConfig:
    return PageSizeConfig(index_count=config.index_count, page_count=config.page_count)


def build_event_dispatcher(
    reporter: ErrorReporter,
    *,
    webhook: WebhookConfig | None = None,
) -> InProcessEventDispatcher:
    """Dispatcher with the webhook listener registered when one is configured."""

    dispatcher = InProcessEventDispatcher(reporter)
    if webhook is not None:
        dispatcher.listen(ThreadAvatarEvent, WebhookListener(webhook))
        log.info("Webhook listener enabled for %s", webhook.url)
    return dispatcher


def update_group_avatar(
    thread_id: UUID,
    request: AvatarRequest,
    *,
    provider_id: UUID,
    assets: AssetStore,
    broadcaster: BroadcastDriver | None = None,
    events: EventDispatcher | None = None,
    reporter: ErrorReporter | None = None,
    config: MessengerConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> AvatarUpdateOutcome:
    """Change a group thread's avatar on behalf of ``provider_id``."""

    effective_uow = _unit_of_work_factory(unit_of_work_factory)
    effective_config = config or get_messenger_config()
    effective_reporter = reporter or LoggingErrorReporter()

    with effective_uow() as uow:
        thread = uow.repositories.threads.get(thread_id)
        provider = uow.repositories.providers.get(provider_id)
    if thread is None:
        raise LookupError(f"thread {thread_id} does not exist")
    if provider is None:
        raise LookupError(f"provider {provider_id} does not exist")

    pipeline = UpdateGroupAvatar(
        unit_of_work_factory=effective_uow,
        assets=assets,
        broadcaster=broadcaster or LoggingBroadcastDriver(),
        events=events
        or build_event_dispatcher(effective_reporter, webhook=get_webhook_config()),
        features=effective_config,
        reporter=effective_reporter,
        urls=AssetUrls(prefix=effective_config.asset_prefix),
        default_avatars=DEFAULT_GROUP_AVATARS,
        timeout=effective_config.asset_timeout_seconds,
    )
    return pipeline.execute(thread, request, provider=provider)


def list_private_threads(
    provider_id: UUID,
    *,
    page_id: UUID | None = None,
    reporter: ErrorReporter | None = None,
    config: MessengerConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ResultPage:
    """Return one page of ``provider_id``'s private threads, newest activity first."""

    effective_uow = _unit_of_work_factory(unit_of_work_factory)
    effective_config = config or get_messenger_config()
    cursor = CursorState(page_id=str(page_id) if page_id else None)
    sizes = _page_sizes(effective_config.threads)
    collection = PrivateThreadCollection(
        provider_id,
        reporter=reporter or LoggingErrorReporter(),
        urls=AssetUrls(prefix=effective_config.asset_prefix),
        api_prefix=effective_config.api_prefix,
    )

    with effective_uow() as uow:
        threads = uow.repositories.threads
        fetched = threads.page_private_threads(
            provider_id, page_id=page_id, limit=sizes.per_page(cursor)
        )
        return collection.serialize(
            fetched, cursor, sizes, total=lambda: threads.count_private_threads(provider_id)
        )


def list_calls(
    thread_id: UUID,
    *,
    page_id: UUID | None = None,
    reporter: ErrorReporter | None = None,
    config: MessengerConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ResultPage:
    """Return one page of the calls placed in a thread, newest first."""

    effective_uow = _unit_of_work_factory(unit_of_work_factory)
    effective_config = config or get_messenger_config()
    cursor = CursorState(page_id=str(page_id) if page_id else None)
    sizes = _page_sizes(effective_config.calls)

    with effective_uow() as uow:
        thread = uow.repositories.threads.get(thread_id)
        if thread is None:
            raise LookupError(f"thread {thread_id} does not exist")
        collection = CallCollection(
            thread,
            reporter=reporter or LoggingErrorReporter(),
            urls=AssetUrls(prefix=effective_config.asset_prefix),
            api_prefix=effective_config.api_prefix,
        )
        calls = uow.repositories.calls
        fetched = calls.page_for_thread(thread_id, page_id=page_id, limit=sizes.per_page(cursor))
        return collection.serialize(
            fetched, cursor, sizes, total=lambda: calls.count_for_thread(thread_id)
        )


def purge_archived_messages(
    *,
    days: int | None = None,
    config: MessengerConfig | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> int:
    """Permanently delete archived text messages past the retention window."""

    effective_uow = _unit_of_work_factory(unit_of_work_factory)
    if days is None:
        days = (config or get_messenger_config()).purge_messages_days
    log.info("Purging archived messages older than %s days", days)
    return purge_messages(effective_uow, days=days)
