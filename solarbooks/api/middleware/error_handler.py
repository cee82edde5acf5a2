"""
Error responses.

Domain exceptions become an ``ErrorResponse`` body: a machine-readable
``error_code``, the message, a recovery ``hint`` and, where the exception
carries them, its details (e.g. available vs requested stock).
"""

import traceback
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from solarbooks.application.dto.responses import ErrorResponse
from solarbooks.config import get_logger
from solarbooks.core.exceptions import (
    ConfigurationError,
    NotFoundError,
    SolarBooksError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)


EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

HINT_MAP: dict[str, str] = {
    "ITEM_NOT_FOUND": "Check the item ID and try GET /api/inventory/items to list items.",
    "INVOICE_NOT_FOUND": "Check the invoice ID and try GET /api/invoices to list invoices.",
    "QUOTATION_NOT_FOUND": "Check the quotation ID and try GET /api/quotations to list quotations.",
    "INSUFFICIENT_STOCK": "Record a Purchase or Return from Site before issuing more stock.",
    "INVALID_QUANTITY": "Send a positive quantity; the transaction type decides the sign.",
    "ITEM_HAS_TRANSACTIONS": "Set the item status to inactive instead of deleting it.",
    "INVALID_STATUS_TRANSITION": "Check the document's current status before changing it.",
    "OVERPAYMENT": "The payment amount cannot exceed the invoice balance.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
    "NOT_FOUND": "No such endpoint. See /docs for the available routes.",
    "METHOD_NOT_ALLOWED": "This endpoint does not accept that HTTP method.",
}

STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "The requested resource was not found. Verify the ID.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
}

HTTP_ERROR_CODES: dict[int, str] = {
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


def _get_hint(error_code: str, status_code: int) -> str:
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _format_details(details: dict[str, Any]) -> str | None:
    """{"available": "10", "requested": "11"} -> "available=10; requested=11"."""
    parts = [f"{key}={value}" for key, value in details.items() if value is not None]
    return "; ".join(parts) or None


def _error_json(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    detail: str | None = None,
    hint: str | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error_code=error_code,
            message=message,
            hint=hint or _get_hint(error_code, status_code),
            detail=detail,
            path=request.url.path,
        ).model_dump(mode="json"),
    )


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert any exception into an ErrorResponse. Unknown errors are 500s."""
    status_code = _status_for(exc)

    if isinstance(exc, SolarBooksError):
        error_code, message = exc.code, exc.message
        detail = _format_details(exc.details)
    else:
        error_code, message, detail = "INTERNAL_ERROR", "Internal server error", None

    if status_code >= 500:
        logger.error(
            "request_error",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
            traceback=traceback.format_exc(),
        )
    else:
        logger.warning(
            "request_rejected",
            path=request.url.path,
            error_code=error_code,
            error=message,
        )

    return _error_json(request, status_code, error_code, message, detail)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last-resort handler for exceptions no exception handler caught."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return build_error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers for domain, request-validation and HTTP errors."""

    @app.exception_handler(SolarBooksError)
    async def domain_exception_handler(
        request: Request,
        exc: SolarBooksError,
    ) -> JSONResponse:
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = [
            f"{' -> '.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        return _error_json(
            request,
            422,
            "VALIDATION_ERROR",
            "Request validation failed",
            detail="; ".join(errors),
            hint="Check the request body fields and types.",
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        error_code = HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
        return _error_json(
            request,
            exc.status_code,
            error_code,
            str(exc.detail or "An error occurred"),
        )
