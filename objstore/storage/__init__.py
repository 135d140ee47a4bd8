"""Storage abstraction (S3, local filesystem, or a recording test double)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from objstore.exceptions import ConfigurationError

if TYPE_CHECKING:
    from objstore.settings import StorageSettings


class ObjectStorage(Protocol):
    def upload(self, local_path: str | Path, bucket: str, key: str) -> None:
        ...

    def download(self, bucket: str, key: str, local_path: str | Path) -> None:
        ...


def build_storage(settings: "StorageSettings") -> ObjectStorage:
    """Create the storage backend named by ``settings.backend``."""
    backend = settings.backend
    if backend == "s3":
        from objstore.storage.s3 import S3Storage

        return S3Storage(settings.client_config())
    if backend == "local":
        from objstore.storage.local import LocalStorage

        return LocalStorage(Path(settings.local_root))
    if backend == "recording":
        from objstore.storage.recording import RecordingStorage

        return RecordingStorage()
    raise ConfigurationError(f"Unknown storage backend: {backend}", {"backend": str(backend)})


__all__ = ["ObjectStorage", "build_storage"]
