"""Per-item serialization that never fails the whole batch."""

from __future__ import annotations

from logging import getLogger
from operator import attrgetter
from typing import TYPE_CHECKING

from parley.domain.errors import ItemSerializationError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from parley.domain.ports import ErrorReporter

log = getLogger(__name__)


class ResilientItemSerializer[TItem]:
    """Serialize items one by one, reporting and dropping the ones that fail.

    Items are independent: a failure never touches the resources produced for
    the other items of the batch.
    """

    def __init__(
        self,
        make_resource: Callable[[TItem], Mapping[str, object]],
        reporter: ErrorReporter,
        *,
        collection: str,
        key: Callable[[TItem], object] = attrgetter("id"),
    ) -> None:
        self._make_resource = make_resource
        self._reporter = reporter
        self._collection = collection
        self._key = key

    def serialize(self, items: Iterable[TItem]) -> list[dict[str, object]]:
        resources: list[dict[str, object]] = []
        for item in items:
            resource = self.serialize_one(item)
            if resource is not None:
                resources.append(resource)
        return resources

    def serialize_one(self, item: TItem) -> dict[str, object] | None:
        item_id: object = None
        try:
            item_id = self._key(item)
            return dict(self._make_resource(item))
        except Exception as exc:  # noqa: BLE001
            log.warning("Dropping %s item %s: %s", self._collection, item_id, exc)
            failure = ItemSerializationError(
                f"Could not serialize {self._collection} item {item_id}: {exc}",
                collection=self._collection,
                item_id=item_id,
            )
            failure.__cause__ = exc
            self._reporter.report(failure)
            return None
