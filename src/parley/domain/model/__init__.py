"""Public domain model surface."""

from __future__ import annotations

from parley.domain.model.call import Call
from parley.domain.model.entity import Entity, MissingRelationError, new_id, utcnow
from parley.domain.model.enums import CallType, MessageType, ThreadType
from parley.domain.model.message import Message
from parley.domain.model.provider import Provider, ProviderRef
from parley.domain.model.thread import (
    DEFAULT_GROUP_AVATARS,
    Participant,
    Thread,
)

__all__ = [
    "DEFAULT_GROUP_AVATARS",
    "Call",
    "CallType",
    "Entity",
    "Message",
    "MessageType",
    "MissingRelationError",
    "Participant",
    "Provider",
    "ProviderRef",
    "Thread",
    "ThreadType",
    "new_id",
    "utcnow",
]
