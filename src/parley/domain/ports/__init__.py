"""Domain port definitions for adapters."""

from __future__ import annotations

from .notifications import (
    THREAD_AVATAR_UPLOAD,
    BroadcastDriver,
    ErrorReporter,
    EventDispatcher,
    FeatureFlags,
)
from .persistence import (
    CallRepository,
    MessageRepository,
    ProviderRepository,
    Repository,
    ThreadRepository,
)
from .storage import AssetStore, UploadedFile
from .unit_of_work import (
    MessengerRepositories,
    MessengerUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "THREAD_AVATAR_UPLOAD",
    "AssetStore",
    "BroadcastDriver",
    "CallRepository",
    "ErrorReporter",
    "EventDispatcher",
    "FeatureFlags",
    "MessageRepository",
    "MessengerRepositories",
    "MessengerUnitOfWork",
    "ProviderRepository",
    "Repository",
    "RepositoryCollection",
    "ThreadRepository",
    "UnitOfWork",
    "UploadedFile",
]
