"""Application error taxonomy.

Every failure the service reports on purpose is an ``AppError`` subclass
carrying a human-readable ``message`` and a machine-readable ``code``.
``exception_handlers`` maps them onto HTTP responses.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Stable machine-readable error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_DATE = "INVALID_DATE"
    UPLOAD_REJECTED = "UPLOAD_REJECTED"
    CONFLICT = "CONFLICT"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    MISSING_TOKEN = "MISSING_TOKEN"
    INVALID_TOKEN = "INVALID_TOKEN"
    EXPIRED = "EXPIRED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFIG_ERROR = "CONFIG_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppError(Exception):
    """Base class for expected application errors."""

    default_code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, code: ErrorCode | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code


class ValidationError(AppError):
    """Missing or malformed input."""

    default_code = ErrorCode.VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        missing: list[str] | None = None,
    ) -> None:
        super().__init__(message, code)
        self.missing = missing or []


class UploadError(ValidationError):
    """Uploaded file was rejected (type not allowed or too large)."""

    default_code = ErrorCode.UPLOAD_REJECTED


class ConflictError(AppError):
    """A unique key already exists."""

    default_code = ErrorCode.CONFLICT


class AuthError(AppError):
    """Bad credentials or a bad/missing/expired token."""

    default_code = ErrorCode.INVALID_TOKEN

    @classmethod
    def invalid_credentials(cls) -> "AuthError":
        # Same message for unknown email and wrong password
        return cls("Invalid credentials", ErrorCode.INVALID_CREDENTIALS)

    @classmethod
    def missing_token(cls) -> "AuthError":
        return cls("No token, authorization denied", ErrorCode.MISSING_TOKEN)

    @classmethod
    def invalid_token(cls) -> "AuthError":
        return cls("Token is not valid", ErrorCode.INVALID_TOKEN)

    @classmethod
    def expired(cls) -> "AuthError":
        return cls("Token has expired", ErrorCode.EXPIRED)


class ForbiddenError(AppError):
    """Authenticated, but not allowed to touch the resource."""

    default_code = ErrorCode.FORBIDDEN


class NotFoundError(AppError):
    """No such entity."""

    default_code = ErrorCode.NOT_FOUND


class ConfigError(AppError):
    """Required process configuration is missing."""

    default_code = ErrorCode.CONFIG_ERROR
