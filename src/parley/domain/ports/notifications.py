"""Ports for realtime broadcasts, domain events, feature flags and error reports."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

THREAD_AVATAR_UPLOAD = "thread_avatar_upload"


@runtime_checkable
class BroadcastDriver(Protocol):
    """Delivers payloads to the parties present on a channel (fire-and-forget)."""

    def send_to_present(self, channel: str, payload: Mapping[str, object], event: str) -> None: ...


@runtime_checkable
class EventDispatcher(Protocol):
    """Emits domain events to loggers, listeners and webhooks (fire-and-forget)."""

    def dispatch(self, event: object) -> None: ...


@runtime_checkable
class FeatureFlags(Protocol):
    def is_feature_enabled(self, name: str) -> bool: ...


@runtime_checkable
class ErrorReporter(Protocol):
    """Receives best-effort failures that must not fail the enclosing operation."""

    def report(self, error: BaseException) -> None: ...
