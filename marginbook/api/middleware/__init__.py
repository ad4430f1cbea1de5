"""API middleware."""

from marginbook.api.middleware.error_handler import ErrorHandlerMiddleware
from marginbook.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
