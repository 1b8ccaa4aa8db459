"""Storage-related exceptions."""
from typing import Any

from .base import ErrorCode, NotFoundError, ValidationError


class RecordNotFoundError(NotFoundError):
    """Raised when a requested record is not found in the record store."""

    def __init__(self, kind: str, record_id: Any) -> None:
        """Initialize the exception.

        Args:
            kind: The kind of record that was not found (e.g., "Meme").
            record_id: The ID of the record that was not found.
        """
        message = f"{kind} with ID {record_id} not found"
        super().__init__(
            message,
            ErrorCode.RECORD_NOT_FOUND,
            details={"kind": kind, "id": record_id},
        )
        self.kind = kind
        self.record_id = record_id


class BlobNotFoundError(NotFoundError):
    """Raised when an object is missing from the blob store."""

    def __init__(self, bucket: str, key: str) -> None:
        """Initialize the exception.

        Args:
            bucket: Bucket that was searched.
            key: Object key that was not found.
        """
        super().__init__(
            f"object {key} not found in bucket {bucket}",
            ErrorCode.BLOB_NOT_FOUND,
            details={"bucket": bucket, "key": key},
        )
        self.bucket = bucket
        self.key = key


class TemplateTooLargeError(ValidationError):
    """Raised when an uploaded template exceeds the size limit."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            "template is too large",
            ErrorCode.TEMPLATE_TOO_LARGE,
            details={"size": size, "limit": limit},
        )
