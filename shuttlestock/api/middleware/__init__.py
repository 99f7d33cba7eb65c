"""API middleware."""

from shuttlestock.api.middleware.error_handler import ErrorHandlerMiddleware
from shuttlestock.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
