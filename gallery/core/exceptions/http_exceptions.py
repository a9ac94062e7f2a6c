"""Custom HTTP exception hierarchy and standardized error responses.

Exception Hierarchy:
    AppError (HTTPException)
    ├── ClientError (4xx errors)
    │   ├── BadRequestError (400)
    │   ├── NotFoundError (404)
    │   └── PayloadTooLargeError (413)
    └── ServerError (5xx errors)
        ├── InternalServerError (500)
        └── UpstreamError (500, storage or database failure)

Usage:
    # Option 1: Pass individual parameters
    raise NotFoundError(
        message="Image not found",
        detail={"id": image_id}
    )

    # Option 2: Pass ErrorResponse object directly
    error = ErrorResponse(
        error_code="IMAGE_NOT_FOUND",
        error="Image not found",
    )
    raise NotFoundError(error)
"""

from typing import Any, Literal

from fastapi import HTTPException, status
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standardized error response model."""

    status: Literal["error"] = Field(default="error", description="Always 'error' for errors")
    error: str = Field(description="Human-readable error message")
    error_code: str = Field(description="Error code identifier")
    detail: dict[str, Any] | None = Field(default=None, description="Additional error details")
    path: str | None = Field(default=None, description="Request path where error occurred")


class AppError(HTTPException):
    """Base exception for all application HTTP errors."""

    def __init__(
        self,
        message: str | ErrorResponse = "An error occurred",
        error_code: str | None = None,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: dict[str, Any] | None = None,
    ) -> None:
        if isinstance(message, ErrorResponse):
            self.message = message.error
            self.error_code = message.error_code
            self.extra = message.detail
        else:
            self.message = message
            self.error_code = error_code or self.__class__.__name__
            self.extra = detail

        # HTTPException owns `detail` and keeps the message there
        super().__init__(status_code=status_code, detail=self.message)

    def to_error_response(self, path: str | None = None) -> ErrorResponse:
        """Convert exception to ErrorResponse object.

        Args:
            path: Request path where error occurred

        Returns:
            ErrorResponse object
        """
        return ErrorResponse(
            error=self.message,
            error_code=self.error_code,
            detail=self.extra,
            path=path,
        )


# ============================================================================
# Client Exceptions (4xx)
# ============================================================================


class ClientError(AppError):
    """Base exception for client errors (4xx)."""

    def __init__(
        self,
        message: str | ErrorResponse = "Client error",
        error_code: str | None = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, status_code, detail)


class BadRequestError(ClientError):
    """400 Bad Request - Missing or invalid request parameters."""

    def __init__(
        self,
        message: str | ErrorResponse = "Bad request",
        error_code: str | None = None,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, status.HTTP_400_BAD_REQUEST, detail)


class NotFoundError(ClientError):
    """404 Not Found - Resource does not exist."""

    def __init__(
        self,
        message: str | ErrorResponse = "Not found",
        error_code: str | None = None,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, status.HTTP_404_NOT_FOUND, detail)


class PayloadTooLargeError(ClientError):
    """413 Payload Too Large - Upload exceeds the configured limit."""

    def __init__(
        self,
        message: str | ErrorResponse = "Payload too large",
        error_code: str | None = None,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail)


# ============================================================================
# Server Exceptions (5xx)
# ============================================================================


class ServerError(AppError):
    """Base exception for server errors (5xx)."""

    def __init__(
        self,
        message: str | ErrorResponse = "Server error",
        error_code: str | None = None,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, status_code, detail)


class InternalServerError(ServerError):
    """500 Internal Server Error - Unexpected server error."""

    def __init__(
        self,
        message: str | ErrorResponse = "Internal server error",
        error_code: str | None = None,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, status.HTTP_500_INTERNAL_SERVER_ERROR, detail)


class UpstreamError(ServerError):
    """500 - Object storage or database operation failed.

    The message sent to the client is generic. ``stage`` records which step
    failed and is only used for server-side logging.
    """

    def __init__(
        self,
        message: str | ErrorResponse = "Upstream operation failed",
        error_code: str | None = None,
        detail: dict[str, Any] | None = None,
        stage: str | None = None,
    ) -> None:
        super().__init__(message, error_code, status.HTTP_500_INTERNAL_SERVER_ERROR, detail)
        self.stage = stage
