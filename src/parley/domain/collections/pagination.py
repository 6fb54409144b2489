"""Cursor pagination metadata over an ordered, already-fetched batch.

A cursor is the id of the last item fetched for the previous page. It is a
position marker, not a snapshot: rows inserted or removed between requests
can shift what the next page contains.
"""

from __future__ import annotations

from dataclasses import dataclass
from operator import attrgetter
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence


@dataclass(frozen=True, slots=True)
class FetchedPage[TItem]:
    """Ordered batch returned by a repository, plus whether more rows remain."""

    items: Sequence[TItem]
    has_more: bool = False

    @classmethod
    def from_lookahead(cls, rows: Sequence[TItem], limit: int) -> FetchedPage[TItem]:
        """Build a page from a query that fetched ``limit + 1`` rows."""

        return cls(items=tuple(rows[:limit]), has_more=len(rows) > limit)


@dataclass(frozen=True, slots=True)
class CursorState:
    """Where the request starts and whether the fetch was limited."""

    page_id: str | None = None
    paginate: bool = True

    @property
    def is_first_page(self) -> bool:
        return self.page_id is None


@dataclass(frozen=True, slots=True)
class PageSizeConfig:
    index_count: int
    page_count: int

    def __post_init__(self) -> None:
        if self.index_count < 1 or self.page_count < 1:
            raise ValueError("page sizes must be positive")

    def per_page(self, cursor: CursorState) -> int:
        return self.index_count if cursor.is_first_page else self.page_count


class PageMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: bool
    page_id: str | None
    next_page_id: str | None
    next_page_route: str | None
    final_page: bool
    per_page: int
    results: int
    total: int | None


class CursorPaginator[TItem]:
    """Compute page metadata for a fetched batch.

    ``results`` is the number of items that survived serialization, while the
    next cursor always points at the last *fetched* item so dropped items still
    advance the position. ``total`` is only evaluated for the first page.
    """

    def __init__(
        self,
        *,
        route: Callable[[str], str] | None = None,
        key: Callable[[TItem], object] = attrgetter("id"),
    ) -> None:
        self._route = route
        self._key = key

    def describe(
        self,
        fetched: FetchedPage[TItem],
        cursor: CursorState,
        sizes: PageSizeConfig,
        *,
        results: int,
        total: Callable[[], int] | None = None,
    ) -> PageMeta:
        final_page = not fetched.has_more
        next_page_id = self.next_page_id(fetched, cursor)
        return PageMeta(
            index=cursor.is_first_page,
            page_id=cursor.page_id,
            next_page_id=next_page_id,
            next_page_route=self._next_route(next_page_id),
            final_page=final_page,
            per_page=sizes.per_page(cursor),
            results=results,
            total=total() if cursor.is_first_page and total is not None else None,
        )

    def next_page_id(self, fetched: FetchedPage[TItem], cursor: CursorState) -> str | None:
        if not cursor.paginate or not fetched.has_more or not fetched.items:
            return None
        return str(self._key(fetched.items[-1]))

    def _next_route(self, next_page_id: str | None) -> str | None:
        if next_page_id is None or self._route is None:
            return None
        return self._route(next_page_id)
