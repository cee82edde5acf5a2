"""Data Transfer Objects for API contracts."""

from solarbooks.application.dto.requests import (
    BuildPaymentScheduleRequest,
    CalculateTotalsRequest,
    CreateInvoiceRequest,
    CreateItemRequest,
    CreateQuotationRequest,
    InclusivePriceRequest,
    LineItemRequest,
    PaymentStageRequest,
    RecordPaymentRequest,
    RecordStockTransactionRequest,
    TaxLineRequest,
    UpdateInvoiceStatusRequest,
    UpdateItemRequest,
    UpdateQuotationStatusRequest,
)
from solarbooks.application.dto.responses import (
    DocumentTotalsResponse,
    ErrorResponse,
    HealthResponse,
    InvoiceResponse,
    ItemResponse,
    LineItemResponse,
    PaginatedResponse,
    PaymentScheduleResponse,
    QuotationResponse,
    StockLedgerEntryResponse,
    TaxCalculationResponse,
)

__all__ = [
    # Requests
    "TaxLineRequest",
    "CalculateTotalsRequest",
    "InclusivePriceRequest",
    "LineItemRequest",
    "CreateItemRequest",
    "UpdateItemRequest",
    "RecordStockTransactionRequest",
    "CreateInvoiceRequest",
    "RecordPaymentRequest",
    "UpdateInvoiceStatusRequest",
    "PaymentStageRequest",
    "BuildPaymentScheduleRequest",
    "CreateQuotationRequest",
    "UpdateQuotationStatusRequest",
    # Responses
    "HealthResponse",
    "ErrorResponse",
    "PaginatedResponse",
    "LineItemResponse",
    "DocumentTotalsResponse",
    "TaxCalculationResponse",
    "ItemResponse",
    "StockLedgerEntryResponse",
    "InvoiceResponse",
    "QuotationResponse",
    "PaymentScheduleResponse",
]
