"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ThreadType(StrEnum):
    PRIVATE = "private"
    GROUP = "group"


class CallType(StrEnum):
    VIDEO = "video"


class MessageType(StrEnum):
    TEXT = "text"
    IMAGE = "image"
    DOCUMENT = "document"
    AUDIO = "audio"
    VIDEO = "video"
    SYSTEM = "system"
