"""Custom exception hierarchy for objstore."""

from __future__ import annotations


class ObjstoreError(Exception):
    """Base exception for all objstore-specific errors."""

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(ObjstoreError):
    """Raised when configuration is invalid or missing."""
    pass


class CredentialsError(ConfigurationError):
    """Raised when storage credentials cannot be resolved."""
    pass


class ValidationError(ObjstoreError):
    """Base class for validation errors."""
    pass


class TargetValidationError(ValidationError):
    """Raised when a bucket or key is empty."""
    pass


class StorageError(ObjstoreError):
    """Raised when storage operations fail."""
    pass


class SourceFileNotFoundError(StorageError):
    """Raised when the local file to upload cannot be opened."""
    pass


class FileCreateFailedError(StorageError):
    """Raised when the local download destination cannot be created."""
    pass


class ObjectNotFoundError(StorageError):
    """Raised when the remote store reports that the key does not exist."""
    pass


class TransferFailedError(StorageError):
    """Raised when the remote side of a transfer fails.

    The collaborator's exception is kept on ``cause`` and is also chained as
    ``__cause__`` by the raising code.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, str] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, details)
        self.cause = cause


__all__ = [
    "ObjstoreError",
    "ConfigurationError",
    "CredentialsError",
    "ValidationError",
    "TargetValidationError",
    "StorageError",
    "SourceFileNotFoundError",
    "FileCreateFailedError",
    "ObjectNotFoundError",
    "TransferFailedError",
]
