"""API and broadcast representations of messenger entities.

Representations are pure projections. The avatar mutation captures one
``ThreadSettingsSnapshot`` and derives both the full resource and the compact
broadcast from it, so the two always describe the same state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from pydantic import BaseModel, ConfigDict

from parley.domain.model import CallType, ThreadType

if TYPE_CHECKING:
    from parley.domain.model import Call, Provider, ProviderRef, Thread

AVATAR_SIZES = ("sm", "md", "lg")


class ResourceModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class AvatarUrls(ResourceModel):
    sm: str
    md: str
    lg: str


class ProviderResource(ResourceModel):
    id: UUID
    alias: str
    name: str
    avatar: AvatarUrls | None = None


class ThreadSettingsResource(ResourceModel):
    id: UUID
    type: ThreadType
    name: str
    avatar: AvatarUrls | None
    add_participants: bool
    invitations: bool
    calling: bool
    messaging: bool
    knocks: bool
    updated_at: datetime


class ThreadSettingsBroadcast(ResourceModel):
    """Compact settings payload; recipients already know the thread's members."""

    thread_id: UUID
    name: str
    avatar: AvatarUrls | None
    sender: ProviderResource


class ThreadResource(ResourceModel):
    id: UUID
    type: ThreadType
    group: bool
    name: str
    avatar: AvatarUrls | None
    recipient: ProviderResource | None = None
    created_at: datetime
    updated_at: datetime


class CallResource(ResourceModel):
    id: UUID
    thread_id: UUID
    type: CallType
    active: bool
    setup_complete: bool
    teardown_complete: bool
    owner: ProviderResource
    created_at: datetime
    call_ended: datetime | None = None


@dataclass(frozen=True, slots=True)
class AssetUrls:
    """Builds public asset URLs below a common prefix."""

    prefix: str = "/messenger/assets"

    def thread_avatar(self, thread_id: UUID, image: str | None) -> AvatarUrls | None:
        if not image:
            return None
        base = f"{self.prefix}/threads/{thread_id}/avatar"
        return AvatarUrls(**{size: f"{base}/{size}/{image}" for size in AVATAR_SIZES})

    def provider_avatar(
        self, alias: str, provider_id: UUID, image: str | None
    ) -> AvatarUrls | None:
        if not image:
            return None
        base = f"{self.prefix}/provider/{alias}/{provider_id}"
        return AvatarUrls(**{size: f"{base}/{size}/{image}" for size in AVATAR_SIZES})


@dataclass(frozen=True, slots=True)
class ThreadSettingsSnapshot:
    id: UUID
    type: ThreadType
    subject: str | None
    image: str | None
    add_participants: bool
    invitations: bool
    calling: bool
    messaging: bool
    knocks: bool
    updated_at: datetime

    @classmethod
    def capture(cls, thread: Thread) -> ThreadSettingsSnapshot:
        return cls(
            id=thread.id,
            type=thread.type,
            subject=thread.subject,
            image=thread.image,
            add_participants=thread.add_participants,
            invitations=thread.invitations,
            calling=thread.calling,
            messaging=thread.messaging,
            knocks=thread.knocks,
            updated_at=thread.updated_at,
        )

    @property
    def name(self) -> str:
        return self.subject or ""


def provider_resource(provider: Provider | ProviderRef, urls: AssetUrls) -> ProviderResource:
    return ProviderResource(
        id=provider.id,
        alias=provider.alias,
        name=provider.name,
        avatar=urls.provider_avatar(provider.alias, provider.id, provider.avatar),
    )


def thread_settings_resource(
    snapshot: ThreadSettingsSnapshot,
    urls: AssetUrls,
) -> ThreadSettingsResource:
    return ThreadSettingsResource(
        id=snapshot.id,
        type=snapshot.type,
        name=snapshot.name,
        avatar=urls.thread_avatar(snapshot.id, snapshot.image),
        add_participants=snapshot.add_participants,
        invitations=snapshot.invitations,
        calling=snapshot.calling,
        messaging=snapshot.messaging,
        knocks=snapshot.knocks,
        updated_at=snapshot.updated_at,
    )


def thread_settings_broadcast(
    snapshot: ThreadSettingsSnapshot,
    sender: ProviderRef,
    urls: AssetUrls,
) -> ThreadSettingsBroadcast:
    return ThreadSettingsBroadcast(
        thread_id=snapshot.id,
        name=snapshot.name,
        avatar=urls.thread_avatar(snapshot.id, snapshot.image),
        sender=provider_resource(sender, urls),
    )


def thread_resource(thread: Thread, viewer_id: UUID, urls: AssetUrls) -> ThreadResource:
    """Represent ``thread`` as seen by ``viewer_id``.

    Private threads take their name and avatar from the other participant and
    raise ``MissingRelationError`` when that provider no longer exists.
    """

    if thread.is_private:
        recipient = provider_resource(thread.recipient_for(viewer_id).require_provider(), urls)
        name = recipient.name
        avatar = recipient.avatar
    else:
        recipient = None
        name = thread.subject or ""
        avatar = urls.thread_avatar(thread.id, thread.image)
    return ThreadResource(
        id=thread.id,
        type=thread.type,
        group=thread.is_group,
        name=name,
        avatar=avatar,
        recipient=recipient,
        created_at=thread.created_at,
        updated_at=thread.updated_at,
    )


def call_resource(call: Call, thread: Thread, urls: AssetUrls) -> CallResource:
    if call.thread.id != thread.id:
        raise ValueError(f"call {call.id} does not belong to thread {thread.id}")
    return CallResource(
        id=call.id,
        thread_id=thread.id,
        type=call.type,
        active=call.is_active,
        setup_complete=call.setup_complete,
        teardown_complete=call.teardown_complete,
        owner=provider_resource(call.require_owner(), urls),
        created_at=call.created_at,
        call_ended=call.call_ended,
    )
