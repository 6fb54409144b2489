"""Messenger error taxonomy.

Errors raised before the persistence commit reach the caller. The best-effort
types are never raised to callers; they are handed to the error reporter.
"""

from __future__ import annotations


class MessengerError(RuntimeError):
    """Base class for messenger domain errors."""


class FeatureDisabledError(MessengerError):
    """Raised when the requested operation is disabled by configuration."""


class StorageError(MessengerError):
    """Raised when the asset store fails to upload or delete an asset."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class CleanupError(MessengerError):
    """An old asset could not be removed after a committed change."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path


class ItemSerializationError(MessengerError):
    """One collection item could not be represented and was dropped."""

    def __init__(self, message: str, *, collection: str, item_id: object) -> None:
        super().__init__(message)
        self.collection = collection
        self.item_id = item_id


class DeliveryError(MessengerError):
    """A broadcast or domain event could not be delivered."""

    def __init__(self, message: str, *, channel: str) -> None:
        super().__init__(message)
        self.channel = channel
