"""Group thread avatar updates."""

from __future__ import annotations

from .assets import AssetLifecycleManager
from .changes import avatar_changed
from .pipeline import AvatarUpdateOutcome, UpdateGroupAvatar
from .requests import (
    AvatarRequest,
    AvatarRequestPayload,
    DefaultAvatar,
    UploadedAvatar,
    parse_avatar_request,
)

__all__ = [
    "AssetLifecycleManager",
    "AvatarRequest",
    "AvatarRequestPayload",
    "AvatarUpdateOutcome",
    "DefaultAvatar",
    "UpdateGroupAvatar",
    "UploadedAvatar",
    "avatar_changed",
    "parse_avatar_request",
]
