"""Exception handling package for the gallery API.

Provides custom exception hierarchy and handlers for standardized error responses.
"""

from .handlers import register_exception_handlers
from .http_exceptions import (
    AppError,
    BadRequestError,
    ClientError,
    ErrorResponse,
    InternalServerError,
    NotFoundError,
    PayloadTooLargeError,
    ServerError,
    UpstreamError,
)

__all__ = [
    # Base exceptions
    "AppError",
    # Client exceptions (4xx)
    "BadRequestError",
    "ClientError",
    # Models
    "ErrorResponse",
    # Server Error (5xx)
    "InternalServerError",
    "NotFoundError",
    "PayloadTooLargeError",
    "ServerError",
    "UpstreamError",
    # Handlers
    "register_exception_handlers",
]
