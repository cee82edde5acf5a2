"""Application use cases."""

from solarbooks.application.use_cases.build_payment_schedule import (
    BuildPaymentScheduleUseCase,
)
from solarbooks.application.use_cases.calculate_totals import CalculateTotalsUseCase
from solarbooks.application.use_cases.create_invoice import CreateInvoiceUseCase
from solarbooks.application.use_cases.create_quotation import CreateQuotationUseCase
from solarbooks.application.use_cases.generate_document_pdf import (
    GenerateInvoicePdfUseCase,
    GenerateQuotationPdfUseCase,
)
from solarbooks.application.use_cases.invoice_lifecycle import (
    MarkOverdueInvoicesUseCase,
    RecordInvoicePaymentUseCase,
    UpdateInvoiceStatusUseCase,
)
from solarbooks.application.use_cases.manage_items import (
    CreateItemUseCase,
    DeleteItemUseCase,
    InventoryValuationUseCase,
    UpdateItemUseCase,
)
from solarbooks.application.use_cases.quotation_lifecycle import (
    ExpireQuotationsUseCase,
    UpdateQuotationStatusUseCase,
)
from solarbooks.application.use_cases.record_stock_transaction import (
    RecordStockTransactionUseCase,
)

__all__ = [
    "CalculateTotalsUseCase",
    "BuildPaymentScheduleUseCase",
    # Inventory
    "CreateItemUseCase",
    "UpdateItemUseCase",
    "DeleteItemUseCase",
    "InventoryValuationUseCase",
    "RecordStockTransactionUseCase",
    # Invoices
    "CreateInvoiceUseCase",
    "RecordInvoicePaymentUseCase",
    "UpdateInvoiceStatusUseCase",
    "MarkOverdueInvoicesUseCase",
    "GenerateInvoicePdfUseCase",
    # Quotations
    "CreateQuotationUseCase",
    "UpdateQuotationStatusUseCase",
    "ExpireQuotationsUseCase",
    "GenerateQuotationPdfUseCase",
]
