"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from shuttlestock.application.dto.responses import ErrorResponse
from shuttlestock.config import get_logger
from shuttlestock.core.exceptions import (
    GroupNotAssignedError,
    InsufficientStockError,
    InvalidInputError,
    NotFoundError,
    OwnershipError,
    QueryError,
    RecordInUseError,
    ShuttleStockError,
    StorageError,
    TypeInactiveError,
    UnauthorizedError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes; first isinstance match wins
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InsufficientStockError: status.HTTP_400_BAD_REQUEST,
    TypeInactiveError: status.HTTP_400_BAD_REQUEST,
    InvalidInputError: 422,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    GroupNotAssignedError: status.HTTP_403_FORBIDDEN,
    OwnershipError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    RecordInUseError: status.HTTP_409_CONFLICT,
    QueryError: status.HTTP_503_SERVICE_UNAVAILABLE,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
}

# Hint messages per error code / exception type
HINT_MAP: dict[str, str] = {
    "TYPE_NOT_FOUND": "Check the type ID and try GET /api/inventory/types to list types.",
    "RESTOCK_NOT_FOUND": "Check the restock ID and try GET /api/inventory/history.",
    "PICKUP_NOT_FOUND": "Check the pickup ID and try GET /api/pickups.",
    "INSUFFICIENT_STOCK": "Check GET /api/inventory/{type_id}/stock and pick up fewer tubes.",
    "TYPE_INACTIVE": "Show the type again with PATCH /api/inventory/types/{id} before restocking.",
    "TYPE_OWNED_BY_OTHER": "Only the user who owns this type can rename it.",
    "RECORD_IN_USE": "Pickups have already drawn from this batch. Delete those pickups first.",
    "INVALID_INPUT": "Stored inventory records are inconsistent. Check server logs.",
    "UNAUTHORIZED": "Send the user identity header set by the identity provider.",
    "GROUP_NOT_ASSIGNED": "Ask an administrator to add this user to a group.",
    "QUERY_ERROR": "The event store is unavailable. Retry later.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
    "ValueError": "A parameter value is invalid. Check the request.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    401: "Authentication is required.",
    403: "The current user may not perform this action.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The resource is in use and cannot be changed.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
    503: "The service is temporarily unavailable. Retry later.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Converts exceptions to standardized JSON error responses.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)

        except Exception as e:
            return self._handle_exception(request, e)

    def _handle_exception(
        self,
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Convert exception to standardized JSON response."""
        status_code = status_for(exc)

        if isinstance(exc, ShuttleStockError):
            error_code = exc.code
            message = exc.message
        else:
            error_code = exc.__class__.__name__
            message = str(exc)

        request_id = getattr(request.state, "request_id", None)

        log = logger.error if status_code >= 500 else logger.warning
        log(
            "request_error",
            request_id=request_id,
            path=request.url.path,
            status=status_code,
            error_type=error_code,
            error=message,
            traceback=traceback.format_exc() if status_code >= 500 else None,
        )

        error_response = ErrorResponse(
            error_code=error_code,
            message=message,
            hint=_get_hint(error_code, status_code),
            path=request.url.path,
        )

        return JSONResponse(
            status_code=status_code,
            content=error_response.model_dump(mode="json"),
        )


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint="Check the request body fields and types.",
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = {
            400: "BAD_REQUEST",
            401: "UNAUTHORIZED",
            403: "FORBIDDEN",
            404: "NOT_FOUND",
            405: "METHOD_NOT_ALLOWED",
            422: "UNPROCESSABLE_ENTITY",
        }.get(exc.status_code, "HTTP_ERROR")

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=str(exc.detail) if exc.detail else "An error occurred",
                hint=_get_hint(error_code, exc.status_code),
                path=request.url.path,
            ).model_dump(mode="json"),
        )
