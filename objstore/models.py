"""Value types shared by the storage backends."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import pydantic as p

from objstore.exceptions import TargetValidationError


class StorageTarget(p.BaseModel):
    """A stored object, addressed by bucket and key."""

    model_config = p.ConfigDict(frozen=True)

    bucket: str
    key: str

    @p.field_validator("bucket", "key")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must be a non-empty string")
        return value

    @property
    def uri(self) -> str:
        return f"s3://{self.bucket}/{self.key}"


class TransferDirection(str, Enum):
    UPLOAD = "upload"
    DOWNLOAD = "download"


class TransferRequest(p.BaseModel):
    """One upload or download call. Lives only as long as the call."""

    model_config = p.ConfigDict(frozen=True)

    target: StorageTarget
    local_path: Path
    direction: TransferDirection


class ClientConfig(p.BaseModel):
    """Connection settings owned by a storage client for its lifetime."""

    model_config = p.ConfigDict(frozen=True)

    region: str | None = None
    # Named profile from the shared AWS files; None uses the default chain
    profile: str | None = None
    endpoint_url: str | None = None
    server_side_encryption: str | None = "AES256"


def make_target(bucket: str, key: str) -> StorageTarget:
    """Build a :class:`StorageTarget`, raising :class:`TargetValidationError` on bad input."""
    try:
        return StorageTarget(bucket=bucket, key=key)
    except p.ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err.get("loc"))
        raise TargetValidationError(
            f"Invalid storage target: {fields or 'bucket/key'} must be a non-empty string",
            {"bucket": str(bucket), "key": str(key)},
        ) from exc


def make_request(
    direction: TransferDirection, bucket: str, key: str, local_path: str | Path
) -> TransferRequest:
    return TransferRequest(
        target=make_target(bucket, key),
        local_path=Path(local_path),
        direction=direction,
    )


__all__ = [
    "StorageTarget",
    "TransferDirection",
    "TransferRequest",
    "ClientConfig",
    "make_target",
    "make_request",
]
