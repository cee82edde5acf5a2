"""API middleware."""

from solarbooks.api.middleware.error_handler import ErrorHandlerMiddleware
from solarbooks.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
