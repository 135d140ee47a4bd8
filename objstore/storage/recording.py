from __future__ import annotations

import threading
from pathlib import Path

from objstore.models import TransferDirection, TransferRequest, make_request


class RecordingStorage:
    """Test double: touches neither the network nor the filesystem.

    Every call succeeds and is appended to ``calls`` for later assertions.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: list[TransferRequest] = []

    def _record(self, request: TransferRequest) -> None:
        with self._lock:
            self._calls.append(request)

    def upload(self, local_path: str | Path, bucket: str, key: str) -> None:
        self._record(make_request(TransferDirection.UPLOAD, bucket, key, local_path))

    def download(self, bucket: str, key: str, local_path: str | Path) -> None:
        self._record(make_request(TransferDirection.DOWNLOAD, bucket, key, local_path))

    @property
    def calls(self) -> list[TransferRequest]:
        with self._lock:
            return list(self._calls)

    @property
    def uploads(self) -> list[TransferRequest]:
        return [call for call in self.calls if call.direction is TransferDirection.UPLOAD]

    @property
    def downloads(self) -> list[TransferRequest]:
        return [call for call in self.calls if call.direction is TransferDirection.DOWNLOAD]

    def reset(self) -> None:
        with self._lock:
            self._calls.clear()


__all__ = ["RecordingStorage"]
