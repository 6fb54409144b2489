"""Collection payloads combining serialized items and page metadata."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict

from parley.domain.collections.pagination import CursorPaginator, PageMeta
from parley.domain.collections.serializer import ResilientItemSerializer
from parley.domain.resources import AssetUrls, call_resource, thread_resource

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from uuid import UUID

    from parley.domain.collections.pagination import CursorState, FetchedPage, PageSizeConfig
    from parley.domain.model import Call, Thread
    from parley.domain.ports import ErrorReporter

DEFAULT_API_PREFIX = "/api/messenger"


class ResultPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    data: list[dict[str, Any]]
    meta: PageMeta

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class MessengerCollection[TItem](ABC):
    """Base responder for cursor-paginated messenger collections."""

    collection_type: ClassVar[str]
    route_template: ClassVar[str]

    def __init__(self, *, reporter: ErrorReporter, api_prefix: str = DEFAULT_API_PREFIX) -> None:
        self.reporter = reporter
        self.api_prefix = api_prefix.rstrip("/")

    @abstractmethod
    def make_resource(self, item: TItem) -> Mapping[str, object]:
        """Represent one item; any exception drops the item from the page."""

    def route_params(self) -> dict[str, object]:
        return {}

    def next_page_route(self, page_id: str) -> str:
        return self.route_template.format(
            prefix=self.api_prefix,
            page_id=page_id,
            **self.route_params(),
        )

    def serialize(
        self,
        fetched: FetchedPage[TItem],
        cursor: CursorState,
        sizes: PageSizeConfig,
        *,
        total: Callable[[], int] | None = None,
    ) -> ResultPage:
        serializer = ResilientItemSerializer(
            self.make_resource,
            self.reporter,
            collection=self.collection_type,
        )
        data = serializer.serialize(fetched.items)
        paginator: CursorPaginator[TItem] = CursorPaginator(route=self.next_page_route)
        meta = paginator.describe(fetched, cursor, sizes, results=len(data), total=total)
        return ResultPage(data=data, meta=meta)


class PrivateThreadCollection(MessengerCollection["Thread"]):
    collection_type = "privates"
    route_template = "{prefix}/privates/page/{page_id}"

    def __init__(
        self,
        viewer_id: UUID,
        *,
        reporter: ErrorReporter,
        urls: AssetUrls | None = None,
        api_prefix: str = DEFAULT_API_PREFIX,
    ) -> None:
        super().__init__(reporter=reporter, api_prefix=api_prefix)
        self.viewer_id = viewer_id
        self.urls = urls or AssetUrls()

    def make_resource(self, item: Thread) -> Mapping[str, object]:
        return thread_resource(item, self.viewer_id, self.urls).model_dump(mode="json")


class CallCollection(MessengerCollection["Call"]):
    collection_type = "calls"
    route_template = "{prefix}/threads/{thread}/calls/page/{page_id}"

    def __init__(
        self,
        thread: Thread,
        *,
        reporter: ErrorReporter,
        urls: AssetUrls | None = None,
        api_prefix: str = DEFAULT_API_PREFIX,
    ) -> None:
        super().__init__(reporter=reporter, api_prefix=api_prefix)
        self.thread = thread
        self.urls = urls or AssetUrls()

    def route_params(self) -> dict[str, object]:
        return {"thread": self.thread.id}

    def make_resource(self, item: Call) -> Mapping[str, object]:
        return call_resource(item, self.thread, self.urls).model_dump(mode="json")
