"""Resilient cursor-paginated collections."""

from __future__ import annotations

from .pagination import CursorPaginator, CursorState, FetchedPage, PageMeta, PageSizeConfig
from .responder import (
    DEFAULT_API_PREFIX,
    CallCollection,
    MessengerCollection,
    PrivateThreadCollection,
    ResultPage,
)
from .serializer import ResilientItemSerializer

__all__ = [
    "DEFAULT_API_PREFIX",
    "CallCollection",
    "CursorPaginator",
    "CursorState",
    "FetchedPage",
    "MessengerCollection",
    "PageMeta",
    "PageSizeConfig",
    "PrivateThreadCollection",
    "ResilientItemSerializer",
    "ResultPage",
]
