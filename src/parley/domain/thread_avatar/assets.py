"""Upload and cleanup of thread avatar assets."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from parley.domain.errors import CleanupError, StorageError

if TYPE_CHECKING:
    from collections.abc import Collection

    from parley.domain.model import Thread
    from parley.domain.ports import AssetStore, UploadedFile

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AssetLifecycleManager:
    """Stores new avatars and removes replaced ones, never touching defaults."""

    store: AssetStore
    defaults: Collection[str]
    timeout: float | None = None

    def is_protected(self, reference: str | None) -> bool:
        return not reference or reference in self.defaults

    def upload(self, thread: Thread, file: UploadedFile) -> str:
        directory = thread.avatar_directory
        try:
            reference = self.store.upload(file, directory, timeout=self.timeout)
        except StorageError:
            raise
        except TimeoutError as exc:
            raise StorageError(
                f"Timed out uploading avatar for thread {thread.id}", path=directory
            ) from exc
        except Exception as exc:
            raise StorageError(
                f"Could not upload avatar for thread {thread.id}: {exc}", path=directory
            ) from exc
        log.info("Uploaded avatar %s for thread %s", reference, thread.id)
        return reference

    def remove(self, thread: Thread, original: str | None) -> CleanupError | None:
        """Delete the replaced asset; failures are returned, never raised."""

        if self.is_protected(original):
            return None
        path = f"{thread.avatar_directory}/{original}"
        try:
            self.store.delete(path, timeout=self.timeout)
        except Exception as exc:  # noqa: BLE001
            failure = CleanupError(f"Could not delete old avatar {path}: {exc}", path=path)
            failure.__cause__ = exc
            return failure
        log.debug("Deleted old avatar %s", path)
        return None

    def discard(self, thread: Thread, reference: str) -> CleanupError | None:
        """Remove an upload whose reference never got persisted."""

        return self.remove(thread, reference)
