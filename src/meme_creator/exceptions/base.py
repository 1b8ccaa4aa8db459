"""Base exceptions and error codes for the meme creator."""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes for different types of errors."""

    # Lookup Errors (1000-1999)
    NOT_FOUND = "MEME-1000"
    RECORD_NOT_FOUND = "MEME-1001"
    BLOB_NOT_FOUND = "MEME-1002"

    # Rendering Errors (2000-2999)
    DECODE_ERROR = "MEME-2000"
    FONT_LOAD_ERROR = "MEME-2001"
    GLYPH_DRAW_ERROR = "MEME-2002"

    # Infrastructure Errors (3000-3999)
    STORE_ERROR = "MEME-3000"
    QUEUE_ERROR = "MEME-3001"
    CACHE_ERROR = "MEME-3002"

    # Input Errors (4000-4999)
    VALIDATION_ERROR = "MEME-4000"
    TEMPLATE_TOO_LARGE = "MEME-4001"

    # General Errors (9000-9999)
    UNKNOWN_ERROR = "MEME-9000"


class MemeCreatorError(Exception):
    """Base exception class for the meme creator.

    ``retryable`` tells a task dispatcher whether redelivering the job could
    possibly succeed. Terminal errors are dropped, transient ones retried.
    """

    retryable: bool = False

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        """
        Initialize base exception.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            original_error: Original exception if this is a wrapped exception
        """
        self.message = message
        self.code = code
        self.details = details or {}
        self.original_error = original_error
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary representation.

        Returns:
            Dictionary containing error details
        """
        error_dict = {
            "code": self.code.value,
            "message": self.message,
            "type": self.__class__.__name__,
        }

        if self.details:
            error_dict["details"] = self.details

        if self.original_error:
            error_dict["original_error"] = str(self.original_error)

        return error_dict


class NotFoundError(MemeCreatorError):
    """Base class for references to things that do not exist."""

    def __init__(
        self, message: str, code: ErrorCode = ErrorCode.NOT_FOUND, **kwargs: Any
    ) -> None:
        """Initialize not found error."""
        super().__init__(message, code, **kwargs)


class DecodeError(MemeCreatorError):
    """Raised when template bytes are not a supported image format."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        """Initialize decode error."""
        super().__init__(message, ErrorCode.DECODE_ERROR, **kwargs)


class FontLoadError(MemeCreatorError):
    """Raised when the embedded font program cannot be parsed."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        """Initialize font load error."""
        super().__init__(message, ErrorCode.FONT_LOAD_ERROR, **kwargs)


class GlyphDrawError(MemeCreatorError):
    """Raised when rasterizing a caption fails partway."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        """Initialize glyph draw error."""
        super().__init__(message, ErrorCode.GLYPH_DRAW_ERROR, **kwargs)


class StoreError(MemeCreatorError):
    """Transient failure of the record store or blob store."""

    retryable = True

    def __init__(
        self, message: str, code: ErrorCode = ErrorCode.STORE_ERROR, **kwargs: Any
    ) -> None:
        """Initialize store error."""
        super().__init__(message, code, **kwargs)


class QueueError(MemeCreatorError):
    """Transient failure of the task dispatcher."""

    retryable = True

    def __init__(self, message: str, **kwargs: Any) -> None:
        """Initialize queue error."""
        super().__init__(message, ErrorCode.QUEUE_ERROR, **kwargs)


class CacheError(MemeCreatorError):
    """Transient failure of the existence cache."""

    retryable = True

    def __init__(self, message: str, **kwargs: Any) -> None:
        """Initialize cache error."""
        super().__init__(message, ErrorCode.CACHE_ERROR, **kwargs)


class ValidationError(MemeCreatorError):
    """Raised when caller input is malformed."""

    def __init__(
        self, message: str, code: ErrorCode = ErrorCode.VALIDATION_ERROR, **kwargs: Any
    ) -> None:
        """Initialize validation error."""
        super().__init__(message, code, **kwargs)


def is_retryable(error: BaseException) -> bool:
    """Return True if a failed job may succeed when delivered again.

    Errors outside the hierarchy are unexpected and treated as transient, so
    the dispatcher keeps its at-least-once promise for them.
    """
    if isinstance(error, MemeCreatorError):
        return error.retryable
    return True
