"""
Domain exceptions for the SolarBooks application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class SolarBooksError(Exception):
    """Base exception for all SolarBooks errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(SolarBooksError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Referential Exceptions
class NotFoundError(SolarBooksError):
    """Referenced entity does not exist."""

    pass


class ItemNotFoundError(NotFoundError):
    """Inventory item not found."""

    def __init__(self, item_id: int):
        super().__init__(
            f"Item not found: {item_id}",
            code="ITEM_NOT_FOUND",
            details={"item_id": item_id},
        )


class InvoiceNotFoundError(NotFoundError):
    """Invoice not found in storage."""

    def __init__(self, invoice_id: int):
        super().__init__(
            f"Invoice not found: {invoice_id}",
            code="INVOICE_NOT_FOUND",
            details={"invoice_id": invoice_id},
        )


class QuotationNotFoundError(NotFoundError):
    """Quotation not found in storage."""

    def __init__(self, quotation_id: int):
        super().__init__(
            f"Quotation not found: {quotation_id}",
            code="QUOTATION_NOT_FOUND",
            details={"quotation_id": quotation_id},
        )


# Validation Exceptions
class ValidationError(SolarBooksError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InvalidQuantityError(ValidationError):
    """Transaction quantity must be positive."""

    def __init__(self, quantity: Any):
        super().__init__(
            field="quantity",
            message="Quantity must be greater than zero",
            value=quantity,
        )
        self.code = "INVALID_QUANTITY"


class InsufficientStockError(ValidationError):
    """Outbound transaction would take the balance below zero."""

    def __init__(self, item_id: int, requested: Any, available: Any):
        super().__init__(
            field="quantity",
            message=f"Insufficient stock. Available: {available}, Required: {requested}",
            value=requested,
        )
        self.code = "INSUFFICIENT_STOCK"
        self.details.update(
            {
                "item_id": item_id,
                "requested": str(requested),
                "available": str(available),
            }
        )


class ItemHasTransactionsError(ValidationError):
    """Item cannot be deleted once stock has moved."""

    def __init__(self, item_id: int, transactions: int):
        super().__init__(
            field="item_id",
            message="Cannot delete item with stock transactions. Mark it inactive instead.",
            value=item_id,
        )
        self.code = "ITEM_HAS_TRANSACTIONS"
        self.details["transactions"] = transactions


class InvalidStatusTransitionError(ValidationError):
    """Document status change is not allowed."""

    def __init__(self, entity: str, current: str, requested: str):
        super().__init__(
            field="status",
            message=f"Cannot move {entity} from '{current}' to '{requested}'",
            value=requested,
        )
        self.code = "INVALID_STATUS_TRANSITION"
        self.details.update({"entity": entity, "current": current})


class OverpaymentError(ValidationError):
    """Payment exceeds the outstanding balance."""

    def __init__(self, invoice_id: int, amount: Any, balance: Any):
        super().__init__(
            field="amount",
            message=f"Payment {amount} exceeds outstanding balance {balance}",
            value=amount,
        )
        self.code = "OVERPAYMENT"
        self.details.update({"invoice_id": invoice_id, "balance": str(balance)})


class ConfigurationError(SolarBooksError):
    """Configuration error."""

    pass
