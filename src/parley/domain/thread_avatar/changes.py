"""Change detection for avatar requests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from parley.domain.thread_avatar.requests import DefaultAvatar

if TYPE_CHECKING:
    from parley.domain.thread_avatar.requests import AvatarRequest


def avatar_changed(current: str | None, request: AvatarRequest) -> bool:
    """Uploads always count as a change; defaults only when they differ."""

    if isinstance(request, DefaultAvatar):
        return current != request.name
    return True
