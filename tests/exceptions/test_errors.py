"""Tests for the error hierarchy."""

import pytest

from meme_creator.exceptions import (
    BlobNotFoundError,
    CacheError,
    DecodeError,
    ErrorCode,
    FontLoadError,
    GlyphDrawError,
    MemeCreatorError,
    NotFoundError,
    QueueError,
    RecordNotFoundError,
    StoreError,
    TemplateTooLargeError,
    ValidationError,
    is_retryable,
)


@pytest.mark.parametrize(
    "error",
    [
        RecordNotFoundError("Meme", "m1"),
        BlobNotFoundError("bucket", "a.png"),
        DecodeError("bad image"),
        FontLoadError("bad font"),
        GlyphDrawError("draw failed"),
        ValidationError("bad input"),
        TemplateTooLargeError(10, 5),
    ],
)
def test_terminal_errors(error: MemeCreatorError) -> None:
    assert not is_retryable(error)


@pytest.mark.parametrize(
    "error", [StoreError("db down"), QueueError("queue down"), CacheError("cache down")]
)
def test_transient_errors(error: MemeCreatorError) -> None:
    assert is_retryable(error)


def test_unknown_errors_are_transient() -> None:
    assert is_retryable(RuntimeError("boom"))


def test_not_found_family() -> None:
    assert isinstance(RecordNotFoundError("Meme", "m1"), NotFoundError)
    assert isinstance(BlobNotFoundError("b", "k"), NotFoundError)


def test_to_dict() -> None:
    cause = OSError("disk full")
    error = StoreError("writing failed", details={"key": "a.png"}, original_error=cause)

    assert error.to_dict() == {
        "code": ErrorCode.STORE_ERROR.value,
        "message": "writing failed",
        "type": "StoreError",
        "details": {"key": "a.png"},
        "original_error": "disk full",
    }


def test_record_not_found_details() -> None:
    error = RecordNotFoundError("Template", "t1")

    assert error.code == ErrorCode.RECORD_NOT_FOUND
    assert error.details == {"kind": "Template", "id": "t1"}
    assert "t1" in str(error)


def test_template_too_large_message() -> None:
    error = TemplateTooLargeError(6_000_000, 5_242_880)

    assert error.message == "template is too large"
    assert error.details == {"size": 6_000_000, "limit": 5_242_880}
