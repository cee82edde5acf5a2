"""
Application layer - Use cases and DTOs.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services and stores

Use cases are the only entry point for API handlers.
"""

from solarbooks.application.use_cases import (
    BuildPaymentScheduleUseCase,
    CalculateTotalsUseCase,
    CreateInvoiceUseCase,
    CreateItemUseCase,
    CreateQuotationUseCase,
    RecordStockTransactionUseCase,
)

__all__ = [
    "CalculateTotalsUseCase",
    "BuildPaymentScheduleUseCase",
    "CreateItemUseCase",
    "RecordStockTransactionUseCase",
    "CreateInvoiceUseCase",
    "CreateQuotationUseCase",
]
