"""Centralized exception handlers for the FastAPI application.

Application errors are mapped to HTTP responses with a consistent body:

    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }

Anything unexpected is logged with its traceback and answered with a
generic 500 so no internal detail reaches the caller.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from college_events.exceptions import (
    AppError,
    AuthError,
    ConfigError,
    ConflictError,
    ErrorCode,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error"

# Bad credentials are a 400 (form error), bad tokens a 401
AUTH_CODE_TO_STATUS: dict[ErrorCode, int] = {
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.MISSING_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.EXPIRED: status.HTTP_401_UNAUTHORIZED,
}


def get_status_for_exception(exc: AppError) -> int:  # NOQA: PLR0911
    """Determine HTTP status code for an application error."""
    if isinstance(exc, AuthError):
        return AUTH_CODE_TO_STATUS.get(exc.code, status.HTTP_401_UNAUTHORIZED)
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, ConflictError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, ForbiddenError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": message,
            "code": code,
        },
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        status_code = get_status_for_exception(exc)

        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            # ConfigError and friends: log the detail, return the stable message
            logger.error(
                "Server-side failure on %s %s: %s (code=%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.code.value,
            )
            code = exc.code.value if isinstance(exc, ConfigError) else ErrorCode.INTERNAL_ERROR.value
            return _create_error_response(status_code, SERVER_ERROR_MESSAGE, code)

        logger.warning(
            "%s on %s %s: %s (code=%s)",
            type(exc).__name__,
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
        )

        headers = None
        if status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        return _create_error_response(status_code, exc.message, exc.code.value, headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Report malformed request bodies as ValidationError (400)."""
        missing = [
            str(err["loc"][-1])
            for err in exc.errors()
            if err.get("type") == "missing" and err.get("loc")
        ]
        message = (
            f"Missing required fields: {', '.join(missing)}"
            if missing
            else "Invalid request data"
        )
        logger.warning(
            "Request validation failed on %s %s: %s",
            request.method,
            request.url.path,
            exc.errors(),
        )
        return _create_error_response(
            status.HTTP_400_BAD_REQUEST,
            message,
            ErrorCode.VALIDATION_ERROR.value,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.exception(
            "Unhandled error on %s %s",
            request.method,
            request.url.path,
        )
        return _create_error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            SERVER_ERROR_MESSAGE,
            ErrorCode.INTERNAL_ERROR.value,
        )
