"""Conditional avatar mutation for group threads.

Steps run strictly in order: snapshot the original reference, detect the
change, check the feature flag and upload (uploads only), persist and commit,
clean up the replaced asset, represent, then notify observers. The commit is
the point of no return: anything failing before it propagates and leaves the
thread untouched, anything after it is reported and swallowed.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from parley.domain.errors import DeliveryError, FeatureDisabledError
from parley.domain.events import THREAD_AVATAR_BROADCAST, ThreadAvatarEvent, presence_channel
from parley.domain.model import DEFAULT_GROUP_AVATARS
from parley.domain.ports import THREAD_AVATAR_UPLOAD
from parley.domain.resources import (
    AssetUrls,
    ThreadSettingsBroadcast,
    ThreadSettingsResource,
    ThreadSettingsSnapshot,
    thread_settings_broadcast,
    thread_settings_resource,
)
from parley.domain.thread_avatar.assets import AssetLifecycleManager
from parley.domain.thread_avatar.changes import avatar_changed
from parley.domain.thread_avatar.requests import UploadedAvatar

if TYPE_CHECKING:
    from collections.abc import Collection

    from parley.domain.model import Provider, Thread
    from parley.domain.ports import (
        AssetStore,
        BroadcastDriver,
        ErrorReporter,
        EventDispatcher,
        FeatureFlags,
        MessengerUnitOfWork,
    )
    from parley.domain.thread_avatar.requests import AvatarRequest

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AvatarUpdateOutcome:
    changed: bool
    thread: Thread
    resource: ThreadSettingsResource
    broadcast: ThreadSettingsBroadcast | None = None


@dataclass(slots=True)
class UpdateGroupAvatar:
    unit_of_work_factory: Callable[[], MessengerUnitOfWork]
    assets: AssetStore
    broadcaster: BroadcastDriver
    events: EventDispatcher
    features: FeatureFlags
    reporter: ErrorReporter
    urls: AssetUrls = field(default_factory=AssetUrls)
    default_avatars: Collection[str] = DEFAULT_GROUP_AVATARS
    timeout: float | None = None

    @property
    def lifecycle(self) -> AssetLifecycleManager:
        return AssetLifecycleManager(
            store=self.assets, defaults=self.default_avatars, timeout=self.timeout
        )

    def execute(
        self,
        thread: Thread,
        request: AvatarRequest,
        *,
        provider: Provider,
    ) -> AvatarUpdateOutcome:
        if not thread.is_group:
            raise ValueError(f"thread {thread.id} is not a group thread")

        original = thread.image
        changed = avatar_changed(original, request)
        if changed:
            self._apply(thread, request, original)
        else:
            log.debug("Avatar for thread %s already %s; nothing to do", thread.id, original)

        snapshot = ThreadSettingsSnapshot.capture(thread)
        resource = thread_settings_resource(snapshot, self.urls)
        if not changed:
            return AvatarUpdateOutcome(changed=False, thread=thread, resource=resource)

        broadcast = thread_settings_broadcast(snapshot, provider.ref(), self.urls)
        self._broadcast(thread, broadcast)
        self._emit(thread, provider)
        return AvatarUpdateOutcome(
            changed=True, thread=thread, resource=resource, broadcast=broadcast
        )

    def _apply(self, thread: Thread, request: AvatarRequest, original: str | None) -> None:
        lifecycle = self.lifecycle
        if isinstance(request, UploadedAvatar):
            if not self.features.is_feature_enabled(THREAD_AVATAR_UPLOAD):
                raise FeatureDisabledError("Group avatar uploads are currently disabled.")
            target = lifecycle.upload(thread, request.file)
            uploaded = True
        else:
            target = request.name
            uploaded = False

        try:
            with self.unit_of_work_factory() as uow:
                uow.repositories.threads.update(thread, {"image": target}, skip_audit=True)
                uow.commit()
        except Exception:
            thread.image = original
            if uploaded:
                self._report(lifecycle.discard(thread, target))
            raise
        log.info("Thread %s avatar changed from %s to %s", thread.id, original, target)

        self._report(lifecycle.remove(thread, original))

    def _broadcast(self, thread: Thread, broadcast: ThreadSettingsBroadcast) -> None:
        channel = presence_channel(thread.id)
        try:
            self.broadcaster.send_to_present(
                channel, broadcast.model_dump(mode="json"), THREAD_AVATAR_BROADCAST
            )
        except Exception as exc:  # noqa: BLE001
            failure = DeliveryError(f"Broadcast to {channel} failed: {exc}", channel=channel)
            failure.__cause__ = exc
            self._report(failure)

    def _emit(self, thread: Thread, provider: Provider) -> None:
        try:
            with self.unit_of_work_factory() as uow:
                fresh = uow.repositories.threads.get(thread.id, refresh=True)
            self.events.dispatch(ThreadAvatarEvent.create(provider.ref(), fresh or thread))
        except Exception as exc:  # noqa: BLE001
            failure = DeliveryError(
                f"Event {ThreadAvatarEvent.name} failed: {exc}", channel=ThreadAvatarEvent.name
            )
            failure.__cause__ = exc
            self._report(failure)

    def _report(self, error: BaseException | None) -> None:
        if error is None:
            return
        log.warning("%s", error)
        self.reporter.report(error)
