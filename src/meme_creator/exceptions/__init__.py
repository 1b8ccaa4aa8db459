"""Exceptions for the meme creator."""

from .base import (
    CacheError,
    DecodeError,
    ErrorCode,
    FontLoadError,
    GlyphDrawError,
    MemeCreatorError,
    NotFoundError,
    QueueError,
    StoreError,
    ValidationError,
    is_retryable,
)
from .database import BlobNotFoundError, RecordNotFoundError, TemplateTooLargeError

__all__ = [
    "BlobNotFoundError",
    "CacheError",
    "DecodeError",
    "ErrorCode",
    "FontLoadError",
    "GlyphDrawError",
    "MemeCreatorError",
    "NotFoundError",
    "QueueError",
    "RecordNotFoundError",
    "StoreError",
    "TemplateTooLargeError",
    "ValidationError",
    "is_retryable",
]
