"""In-process domain event dispatch."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from parley.domain.errors import DeliveryError

if TYPE_CHECKING:
    from parley.domain.ports import ErrorReporter

log = getLogger(__name__)

type Listener = Callable[[object], None]


class InProcessEventDispatcher:
    """Calls the listeners registered for an event type, in registration order.

    A failing listener is reported and does not stop the remaining listeners.
    """

    def __init__(self, reporter: ErrorReporter) -> None:
        self._reporter = reporter
        self._listeners: defaultdict[type, list[Listener]] = defaultdict(list)

    def listen(self, event_type: type, listener: Listener) -> None:
        self._listeners[event_type].append(listener)

    def listeners_for(self, event: object) -> tuple[Listener, ...]:
        matched: list[Listener] = []
        for event_type in type(event).__mro__:
            matched.extend(self._listeners.get(event_type, ()))
        return tuple(matched)

    def dispatch(self, event: object) -> None:
        name = getattr(event, "name", type(event).__name__)
        log.info("Dispatching %s", name)
        for listener in self.listeners_for(event):
            try:
                listener(event)
            except DeliveryError as exc:
                self._reporter.report(exc)
            except Exception as exc:  # noqa: BLE001
                failure = DeliveryError(f"Listener for {name} failed: {exc}", channel=str(name))
                failure.__cause__ = exc
                self._reporter.report(failure)
