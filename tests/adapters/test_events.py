from __future__ import annotations

import logging

import pytest

from parley.adapters.broadcasting import LoggingBroadcastDriver
from parley.adapters.events import InProcessEventDispatcher
from parley.adapters.reporting import LoggingErrorReporter
from parley.domain.errors import DeliveryError
from parley.domain.events import ThreadAvatarEvent
from tests.helpers.messenger import RecordingReporter, make_group_thread, make_provider


def _event() -> ThreadAvatarEvent:
    return ThreadAvatarEvent.create(make_provider().ref(), make_group_thread("2.png"))


def test_dispatch_calls_listeners_in_order() -> None:
    reporter = RecordingReporter()
    dispatcher = InProcessEventDispatcher(reporter)
    seen: list[str] = []
    dispatcher.listen(ThreadAvatarEvent, lambda _event: seen.append("first"))
    dispatcher.listen(object, lambda _event: seen.append("catch-all"))
    dispatcher.listen(ThreadAvatarEvent, lambda _event: seen.append("second"))

    dispatcher.dispatch(_event())

    assert seen == ["first", "second", "catch-all"]
    assert reporter.errors == []


def test_failing_listener_does_not_stop_the_rest() -> None:
    reporter = RecordingReporter()
    dispatcher = InProcessEventDispatcher(reporter)
    seen: list[object] = []

    def explode(_event: object) -> None:
        raise RuntimeError("listener down")

    dispatcher.listen(ThreadAvatarEvent, explode)
    dispatcher.listen(ThreadAvatarEvent, seen.append)

    event = _event()
    dispatcher.dispatch(event)

    assert seen == [event]
    assert len(reporter.errors) == 1
    error = reporter.errors[0]
    assert isinstance(error, DeliveryError)
    assert error.channel == ThreadAvatarEvent.name
    assert isinstance(error.__cause__, RuntimeError)


def test_event_payload_describes_provider_and_thread() -> None:
    event = _event()

    payload = event.to_payload()

    assert payload["event"] == "thread.avatar.updated"
    assert payload["provider"] == {
        "id": str(event.provider.id),
        "alias": "user",
        "name": event.provider.name,
    }
    assert payload["thread"]["image"] == "2.png"  # type: ignore[index]


def test_logging_adapters(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    LoggingBroadcastDriver().send_to_present(
        "presence-messenger.thread.1", {"a": 1}, "thread.avatar"
    )
    LoggingErrorReporter().report(DeliveryError("socket closed", channel="x"))

    assert "thread.avatar" in caplog.text
    assert "DeliveryError: socket closed" in caplog.text
