"""
Exception hierarchy for the EcoCycle application.

Provides layered exception structure for domain-specific errors. Every
error carries an ``ErrorCode`` (the category shown to users), an HTTP
status for the API layer and a ``retryable`` flag consumed by the retry
helpers. ``classify_error`` folds arbitrary exceptions into the same
categories.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

import asyncio
import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


class ErrorCode(str, enum.Enum):
    """User-facing error categories."""

    # Network errors
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    CONNECTION_LOST = "CONNECTION_LOST"

    # Authentication errors
    AUTH_FAILED = "AUTH_FAILED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    PERMISSION_DENIED = "PERMISSION_DENIED"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"
    DATA_NOT_FOUND = "DATA_NOT_FOUND"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"

    # Validation errors
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_INPUT = "INVALID_INPUT"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

    # File upload errors
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    INVALID_FILE_TYPE = "INVALID_FILE_TYPE"
    UPLOAD_FAILED = "UPLOAD_FAILED"

    # Business rule errors
    INSUFFICIENT_COINS = "INSUFFICIENT_COINS"
    ITEM_NOT_AVAILABLE = "ITEM_NOT_AVAILABLE"
    BOOKING_CONFLICT = "BOOKING_CONFLICT"
    RATE_LIMITED = "RATE_LIMITED"

    # Detection errors
    AI_DETECTION_FAILED = "AI_DETECTION_FAILED"
    IMAGE_PROCESSING_FAILED = "IMAGE_PROCESSING_FAILED"
    UNSUPPORTED_IMAGE = "UNSUPPORTED_IMAGE"

    UNKNOWN_ERROR = "UNKNOWN_ERROR"


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.NETWORK_ERROR: "Network connection failed. Please check your internet connection.",
    ErrorCode.TIMEOUT_ERROR: "Request timed out. Please try again.",
    ErrorCode.CONNECTION_LOST: "Connection lost. Attempting to reconnect...",
    ErrorCode.AUTH_FAILED: "Authentication failed. Please sign in again.",
    ErrorCode.TOKEN_EXPIRED: "Your session has expired. Please sign in again.",
    ErrorCode.PERMISSION_DENIED: "You don't have permission to perform this action.",
    ErrorCode.DATABASE_ERROR: "Database error occurred. Please try again later.",
    ErrorCode.DATA_NOT_FOUND: "Requested data not found.",
    ErrorCode.DUPLICATE_ENTRY: "This entry already exists.",
    ErrorCode.VALIDATION_FAILED: "Please check your input and try again.",
    ErrorCode.INVALID_INPUT: "Invalid input provided.",
    ErrorCode.MISSING_REQUIRED_FIELD: "Please fill in all required fields.",
    ErrorCode.FILE_TOO_LARGE: "File size is too large. Maximum size is 10MB.",
    ErrorCode.INVALID_FILE_TYPE: "Invalid file type. Please upload an image file.",
    ErrorCode.UPLOAD_FAILED: "File upload failed. Please try again.",
    ErrorCode.INSUFFICIENT_COINS: "You don't have enough EcoCoins for this reward.",
    ErrorCode.ITEM_NOT_AVAILABLE: "This item is currently not available.",
    ErrorCode.BOOKING_CONFLICT: "This time slot is no longer available.",
    ErrorCode.RATE_LIMITED: "Rate limit exceeded. Please try again later.",
    ErrorCode.AI_DETECTION_FAILED: "AI detection failed. Please try with a clearer image.",
    ErrorCode.IMAGE_PROCESSING_FAILED: "Failed to process image. Please try again.",
    ErrorCode.UNSUPPORTED_IMAGE: "Image format not supported. Please use JPG or PNG.",
    ErrorCode.UNKNOWN_ERROR: "An unexpected error occurred. Please try again.",
}

ERROR_RECOVERY: dict[ErrorCode, list[str]] = {
    ErrorCode.NETWORK_ERROR: [
        "Check your internet connection",
        "Try refreshing the page",
        "Switch to a different network if available",
    ],
    ErrorCode.AUTH_FAILED: [
        "Sign out and sign in again",
        "Clear browser cache and cookies",
        "Contact support if the problem persists",
    ],
    ErrorCode.FILE_TOO_LARGE: [
        "Compress your image",
        "Use a different image",
        "Try taking a new photo with lower resolution",
    ],
    ErrorCode.AI_DETECTION_FAILED: [
        "Take a clearer photo with better lighting",
        "Make sure the item is clearly visible",
        "Try a different angle or remove any obstructions",
    ],
}


class EcoCycleError(Exception):
    """Base exception for all EcoCycle application errors."""

    code: ErrorCode = ErrorCode.UNKNOWN_ERROR
    status_code: int = 500
    retryable: bool = False

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message (defaults to the code's message)
            details: Optional dictionary of additional context for debugging
        """
        self.message = message or ERROR_MESSAGES[self.code]
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    @property
    def user_message(self) -> str:
        """Message safe to show to end users."""
        return ERROR_MESSAGES[self.code]


class ValidationError(EcoCycleError):
    """Raised when input validation fails."""

    code = ErrorCode.VALIDATION_FAILED
    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class NotFoundError(EcoCycleError):
    """Raised when a requested row does not exist (or is not visible to the caller)."""

    code = ErrorCode.DATA_NOT_FOUND
    status_code = 404


class AuthenticationError(EcoCycleError):
    """Raised when a request carries no valid credentials."""

    code = ErrorCode.AUTH_FAILED
    status_code = 401


class TokenExpiredError(AuthenticationError):
    code = ErrorCode.TOKEN_EXPIRED


class PermissionDeniedError(EcoCycleError):
    code = ErrorCode.PERMISSION_DENIED
    status_code = 403


class InsufficientCoinsError(EcoCycleError):
    """Raised when a redemption costs more than the current balance."""

    code = ErrorCode.INSUFFICIENT_COINS
    status_code = 409

    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            f"Insufficient EcoCoins. Required: {required}, Available: {available}",
            {"required": required, "available": available},
        )


class RewardUnavailableError(EcoCycleError):
    code = ErrorCode.ITEM_NOT_AVAILABLE
    status_code = 409


class BookingConflictError(EcoCycleError):
    code = ErrorCode.BOOKING_CONFLICT
    status_code = 409


class RateLimitExceededError(EcoCycleError):
    """Raised when a user exceeds the quota for an action."""

    code = ErrorCode.RATE_LIMITED
    status_code = 429

    def __init__(self, action: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["action"] = action
        super().__init__("Rate limit exceeded. Please try again later.", details)


class UploadError(EcoCycleError):
    code = ErrorCode.UPLOAD_FAILED
    status_code = 400


class FileTooLargeError(UploadError):
    code = ErrorCode.FILE_TOO_LARGE
    status_code = 413


class InvalidFileTypeError(UploadError):
    code = ErrorCode.INVALID_FILE_TYPE
    status_code = 415


class DetectionError(EcoCycleError):
    """Raised when the (simulated) classifier cannot produce a result."""

    code = ErrorCode.AI_DETECTION_FAILED
    status_code = 422


class UnsupportedImageError(DetectionError):
    code = ErrorCode.UNSUPPORTED_IMAGE
    status_code = 415


class DatabaseError(EcoCycleError):
    """Raised when persistence fails for reasons outside business rules."""

    code = ErrorCode.DATABASE_ERROR
    status_code = 503
    retryable = True


class OperationTimeoutError(EcoCycleError):
    code = ErrorCode.TIMEOUT_ERROR
    status_code = 504
    retryable = True


class NetworkError(EcoCycleError):
    code = ErrorCode.NETWORK_ERROR
    status_code = 503
    retryable = True


ERRORS_BY_CODE: dict[ErrorCode, type[EcoCycleError]] = {
    ErrorCode.VALIDATION_FAILED: ValidationError,
    ErrorCode.DATA_NOT_FOUND: NotFoundError,
    ErrorCode.AUTH_FAILED: AuthenticationError,
    ErrorCode.TOKEN_EXPIRED: TokenExpiredError,
    ErrorCode.PERMISSION_DENIED: PermissionDeniedError,
    ErrorCode.ITEM_NOT_AVAILABLE: RewardUnavailableError,
    ErrorCode.BOOKING_CONFLICT: BookingConflictError,
    ErrorCode.UPLOAD_FAILED: UploadError,
    ErrorCode.FILE_TOO_LARGE: FileTooLargeError,
    ErrorCode.INVALID_FILE_TYPE: InvalidFileTypeError,
    ErrorCode.AI_DETECTION_FAILED: DetectionError,
    ErrorCode.UNSUPPORTED_IMAGE: UnsupportedImageError,
    ErrorCode.DATABASE_ERROR: DatabaseError,
    ErrorCode.TIMEOUT_ERROR: OperationTimeoutError,
    ErrorCode.NETWORK_ERROR: NetworkError,
}


@dataclass
class AppError:
    """Categorised view of a failure, as reported to clients and logs."""

    code: ErrorCode
    message: str
    details: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    context: dict[str, Any] = field(default_factory=dict)

    @property
    def recovery(self) -> list[str]:
        return ERROR_RECOVERY.get(self.code, [])


def create_error(
    code: ErrorCode,
    details: str | None = None,
    context: dict[str, Any] | None = None,
) -> AppError:
    """Build an ``AppError`` carrying the standard message for ``code``."""
    return AppError(
        code=code,
        message=ERROR_MESSAGES[code],
        details=details,
        context=context or {},
    )


# Checked in order; the first bucket whose keyword occurs in the message wins.
_KEYWORD_BUCKETS: list[tuple[tuple[str, ...], ErrorCode]] = [
    (("fetch", "network"), ErrorCode.NETWORK_ERROR),
    (("jwt", "auth"), ErrorCode.AUTH_FAILED),
    (("database", "relation"), ErrorCode.DATABASE_ERROR),
    (("validation", "required"), ErrorCode.VALIDATION_FAILED),
    (("file", "upload"), ErrorCode.UPLOAD_FAILED),
]


def classify_error(error: BaseException | str | None, context: dict[str, Any] | None = None) -> AppError:
    """
    Fold any failure into an ``AppError`` category.

    Args:
        error: Exception, plain message, or None
        context: Extra context to attach

    Returns:
        AppError: Categorised error
    """
    if isinstance(error, EcoCycleError):
        return create_error(error.code, error.message, {**error.details, **(context or {})})

    if isinstance(error, (asyncio.TimeoutError, TimeoutError)):
        return create_error(ErrorCode.TIMEOUT_ERROR, str(error) or None, context)

    if isinstance(error, BaseException):
        text = str(error)
        lowered = text.lower()
        for keywords, code in _KEYWORD_BUCKETS:
            if any(keyword in lowered for keyword in keywords):
                return create_error(code, text, context)
        return create_error(ErrorCode.UNKNOWN_ERROR, text, context)

    if isinstance(error, str):
        return create_error(ErrorCode.UNKNOWN_ERROR, error, context)

    return create_error(ErrorCode.UNKNOWN_ERROR, "An unexpected error occurred", context)


def error_from_code(code: str, message: str | None = None, details: dict[str, Any] | None = None) -> EcoCycleError:
    """
    Rebuild a typed exception from a wire error code.

    Unknown codes produce a plain ``EcoCycleError``.
    """
    try:
        error_code = ErrorCode(code)
    except ValueError:
        return EcoCycleError(message, details)

    if error_code == ErrorCode.INSUFFICIENT_COINS:
        details = details or {}
        return InsufficientCoinsError(
            int(details.get("required", 0)),
            int(details.get("available", 0)),
        )
    if error_code == ErrorCode.RATE_LIMITED:
        details = dict(details or {})
        return RateLimitExceededError(str(details.pop("action", "unknown")), details)

    error_cls = ERRORS_BY_CODE.get(error_code)
    if error_cls is None:
        err = EcoCycleError(message, details)
        err.code = error_code
        return err
    if error_cls is ValidationError:
        return ValidationError(message or ERROR_MESSAGES[error_code], details=details)
    return error_cls(message, details)
