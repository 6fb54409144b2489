"""Messenger feature flags, collection sizes and retention settings."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from parley.domain.collections import DEFAULT_API_PREFIX
from parley.domain.ports import THREAD_AVATAR_UPLOAD

from .env import env_flag, env_int

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_ASSET_PREFIX: Final[str] = "/messenger/assets"
DEFAULT_PURGE_MESSAGES_DAYS: Final[int] = 30
DEFAULT_ASSET_TIMEOUT_SECONDS: Final[float] = 30.0


@dataclass(frozen=True, slots=True)
class CollectionConfig:
    """Page sizes for one collection: the first page and every later page."""

    index_count: int
    page_count: int


@dataclass(frozen=True, slots=True)
class MessengerConfig:
    features: Mapping[str, bool] = field(default_factory=lambda: {THREAD_AVATAR_UPLOAD: True})
    threads: CollectionConfig = field(
        default_factory=lambda: CollectionConfig(index_count=100, page_count=25)
    )
    calls: CollectionConfig = field(
        default_factory=lambda: CollectionConfig(index_count=25, page_count=25)
    )
    api_prefix: str = DEFAULT_API_PREFIX
    asset_prefix: str = DEFAULT_ASSET_PREFIX
    asset_timeout_seconds: float = DEFAULT_ASSET_TIMEOUT_SECONDS
    purge_messages_days: int = DEFAULT_PURGE_MESSAGES_DAYS

    def is_feature_enabled(self, name: str) -> bool:
        return bool(self.features.get(str(name), False))


def get_messenger_config() -> MessengerConfig:
    features = {
        THREAD_AVATAR_UPLOAD: env_flag("PARLEY_THREAD_AVATAR_UPLOAD", default=True),
    }
    api_prefix = os.getenv("PARLEY_API_PREFIX", "").strip() or DEFAULT_API_PREFIX
    return MessengerConfig(
        features=features,
        threads=CollectionConfig(
            index_count=env_int("PARLEY_THREADS_INDEX_COUNT", default=100, minimum=1),
            page_count=env_int("PARLEY_THREADS_PAGE_COUNT", default=25, minimum=1),
        ),
        calls=CollectionConfig(
            index_count=env_int("PARLEY_CALLS_INDEX_COUNT", default=25, minimum=1),
            page_count=env_int("PARLEY_CALLS_PAGE_COUNT", default=25, minimum=1),
        ),
        api_prefix=api_prefix.rstrip("/"),
        purge_messages_days=env_int(
            "PARLEY_PURGE_MESSAGES_DAYS", default=DEFAULT_PURGE_MESSAGES_DAYS, minimum=0
        ),
    )
