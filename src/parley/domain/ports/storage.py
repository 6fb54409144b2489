"""Asset storage port."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """Binary payload received from a client."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def extension(self) -> str:
        return PurePosixPath(self.filename).suffix.lstrip(".").lower()


@runtime_checkable
class AssetStore(Protocol):
    """Stores binary assets under logical directories.

    Implementations raise ``StorageError`` (or ``TimeoutError`` once the
    timeout elapses). Deleting a missing path is not an error.
    """

    def upload(self, file: UploadedFile, directory: str, *, timeout: float | None = None) -> str:
        """Store ``file`` under ``directory`` and return the generated asset name."""
        ...

    def delete(self, path: str, *, timeout: float | None = None) -> None: ...
