"""
Custom exception classes and error handling for API Composer.

Provides consistent error responses across all API endpoints and keeps
local validation failures (raised before any network call) distinct from
transport failures.
"""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError


class ErrorResponse(BaseModel):
    """Standard error response format."""
    detail: str
    error_code: str | None = None


class APIException(Exception):
    """Base exception for API errors."""

    def __init__(
        self,
        detail: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str | None = None
    ):
        self.detail = detail
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(detail)


class ResourceNotFoundError(APIException):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: Any):
        super().__init__(
            detail=f"{resource_type} with id {resource_id} not found",
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="RESOURCE_NOT_FOUND"
        )


class LocalValidationError(APIException):
    """
    Base for failures detected while assembling a request.

    These are raised before any transport call and never produce a
    history entry.
    """

    def __init__(self, detail: str, error_code: str):
        super().__init__(
            detail=detail,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=error_code
        )


class EmptyUrlError(LocalValidationError):
    """Exception raised when the URL is empty after trimming."""

    def __init__(self):
        super().__init__("Please enter a URL.", "EMPTY_URL")


class MalformedUrlError(LocalValidationError):
    """Exception raised when a URL cannot be parsed as an absolute URL."""

    def __init__(self, url: str):
        self.url = url
        super().__init__("Invalid URL. Please check the value or variables.", "MALFORMED_URL")


class TransportError(APIException):
    """
    Exception raised by a transport when a request could not complete.

    Attributes:
        error_type: One of ``network_error``, ``timeout``, ``invalid_url`` or ``unknown``
        details: Underlying error description, if any
    """

    def __init__(self, detail: str, error_type: str = "network_error", details: str | None = None):
        self.error_type = error_type
        self.details = details
        super().__init__(
            detail=detail,
            status_code=(
                status.HTTP_504_GATEWAY_TIMEOUT if error_type == "timeout"
                else status.HTTP_502_BAD_GATEWAY
            ),
            error_code="TRANSPORT_ERROR"
        )


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    """Handler for custom API exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error_code": exc.error_code}
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handler for Pydantic validation errors."""
    errors = exc.errors()
    # Format validation errors into a readable message
    error_messages = []
    for error in errors:
        loc = " -> ".join(str(part) for part in error["loc"])
        error_messages.append(f"{loc}: {error['msg']}")

    detail = "; ".join(error_messages) if error_messages else "Validation error"

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": detail, "error_code": "VALIDATION_ERROR"}
    )


async def sqlalchemy_exception_handler(
    request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    """Handler for SQLAlchemy storage errors."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database error occurred", "error_code": "DATABASE_ERROR"}
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""
    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
