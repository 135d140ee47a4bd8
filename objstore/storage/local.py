from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

from loguru import logger

from objstore.exceptions import (
    FileCreateFailedError,
    ObjectNotFoundError,
    SourceFileNotFoundError,
    TargetValidationError,
    TransferFailedError,
)
from objstore.models import StorageTarget, TransferDirection, make_request


class LocalStorage:
    """Filesystem-backed store laid out as ``root/<bucket>/<key>``.

    Follows the same error contract as :class:`~objstore.storage.s3.S3Storage`.
    Objects are written to a temporary file and moved into place, so a reader
    never sees a half-written object and the last writer wins.
    """

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def _object_path(self, target: StorageTarget) -> Path:
        base = self.root.resolve()
        path = (base / target.bucket / target.key).resolve()
        if base not in path.parents:
            raise TargetValidationError(
                f"Key escapes the storage root: {target.uri}",
                {"bucket": target.bucket, "key": target.key},
            )
        return path

    def upload(self, local_path: str | Path, bucket: str, key: str) -> None:
        request = make_request(TransferDirection.UPLOAD, bucket, key, local_path)
        target = self._object_path(request.target)
        details = {"operation": "upload", "bucket": bucket, "key": key, "path": str(request.local_path)}
        logger.debug("Uploading {path} to {uri}", path=request.local_path, uri=request.target.uri)
        try:
            src = request.local_path.open("rb")
        except OSError as exc:
            raise SourceFileNotFoundError(
                f"Failed to open file {str(request.local_path)!r}: {exc}", details
            ) from exc

        with src:
            tmp_name = None
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                with tempfile.NamedTemporaryFile(dir=target.parent, delete=False) as tmp:
                    tmp_name = tmp.name
                    shutil.copyfileobj(src, tmp)
                os.replace(tmp_name, target)
            except OSError as exc:
                if tmp_name is not None:
                    Path(tmp_name).unlink(missing_ok=True)
                logger.error("Upload to {uri} failed: {exc}", uri=request.target.uri, exc=exc)
                raise TransferFailedError(
                    f"Failed to upload {str(request.local_path)!r} to {request.target.uri}: {exc}",
                    details,
                    cause=exc,
                ) from exc

        logger.info("Stored {path} at {target}", path=request.local_path, target=target)

    def download(self, bucket: str, key: str, local_path: str | Path) -> None:
        request = make_request(TransferDirection.DOWNLOAD, bucket, key, local_path)
        source = self._object_path(request.target)
        details = {"operation": "download", "bucket": bucket, "key": key, "path": str(request.local_path)}
        logger.debug("Downloading {uri} to {path}", uri=request.target.uri, path=request.local_path)
        try:
            dest = request.local_path.open("wb")
        except OSError as exc:
            raise FileCreateFailedError(
                f"Failed to create file {str(request.local_path)!r}: {exc}", details
            ) from exc

        with dest:
            if not source.is_file():
                raise ObjectNotFoundError(f"Object {request.target.uri} does not exist", details)
            try:
                with source.open("rb") as src:
                    shutil.copyfileobj(src, dest)
            except FileNotFoundError as exc:
                # Removed between the check and the open
                raise ObjectNotFoundError(
                    f"Object {request.target.uri} does not exist", details
                ) from exc
            except OSError as exc:
                logger.error("Download of {uri} failed: {exc}", uri=request.target.uri, exc=exc)
                raise TransferFailedError(
                    f"Failed to download {request.target.uri}: {exc}", details, cause=exc
                ) from exc

        logger.info("Copied {target} to {path}", target=source, path=request.local_path)


__all__ = ["LocalStorage"]
