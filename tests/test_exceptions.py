"""Tests for custom exception hierarchy."""

import pytest

from objstore.exceptions import (
    ObjstoreError,
    ConfigurationError,
    CredentialsError,
    ValidationError,
    TargetValidationError,
    StorageError,
    SourceFileNotFoundError,
    FileCreateFailedError,
    ObjectNotFoundError,
    TransferFailedError,
)


def test_objstore_error_base():
    """Test base ObjstoreError."""
    error = ObjstoreError("Test error", {"key": "value"})
    assert str(error) == "Test error"
    assert error.message == "Test error"
    assert error.details == {"key": "value"}


def test_details_default_to_empty_dict():
    assert ObjstoreError("no details").details == {}


def test_credentials_error_is_configuration_error():
    error = CredentialsError("No credentials", {"profile": "dev"})
    assert isinstance(error, ConfigurationError)
    assert isinstance(error, ObjstoreError)
    assert error.details == {"profile": "dev"}


def test_target_validation_error():
    error = TargetValidationError("Empty bucket")
    assert isinstance(error, ValidationError)
    assert not isinstance(error, StorageError)


def test_transfer_failed_error_keeps_cause():
    cause = RuntimeError("connection reset")
    error = TransferFailedError("Upload failed", {"key": "a.txt"}, cause=cause)
    assert error.cause is cause
    assert error.details == {"key": "a.txt"}
    assert isinstance(error, StorageError)


def test_object_not_found_is_distinct_from_transfer_failed():
    error = ObjectNotFoundError("missing")
    assert isinstance(error, StorageError)
    assert not isinstance(error, TransferFailedError)


def test_storage_error_hierarchy():
    """Test storage error hierarchy."""
    assert issubclass(SourceFileNotFoundError, StorageError)
    assert issubclass(FileCreateFailedError, StorageError)
    assert issubclass(ObjectNotFoundError, StorageError)
    assert issubclass(TransferFailedError, StorageError)
    assert issubclass(StorageError, ObjstoreError)
    # The local-file error must not shadow the builtin
    assert not issubclass(SourceFileNotFoundError, OSError)
