"""
Dependency injection container for FastAPI.

Provides store and use case instances to route handlers. Tests swap
these through ``app.dependency_overrides``.
"""

from functools import lru_cache

from solarbooks.application.use_cases import (
    BuildPaymentScheduleUseCase,
    CalculateTotalsUseCase,
    CreateInvoiceUseCase,
    CreateItemUseCase,
    CreateQuotationUseCase,
    DeleteItemUseCase,
    ExpireQuotationsUseCase,
    GenerateInvoicePdfUseCase,
    GenerateQuotationPdfUseCase,
    InventoryValuationUseCase,
    MarkOverdueInvoicesUseCase,
    RecordInvoicePaymentUseCase,
    RecordStockTransactionUseCase,
    UpdateInvoiceStatusUseCase,
    UpdateItemUseCase,
    UpdateQuotationStatusUseCase,
)
from solarbooks.config import Settings, get_settings
from solarbooks.infrastructure.storage.sqlite import (
    SQLiteInventoryStore,
    SQLiteInvoiceStore,
    SQLiteQuotationStore,
    get_inventory_store,
    get_invoice_store,
    get_quotation_store,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Store dependencies
async def get_inv_item_store() -> SQLiteInventoryStore:
    """Get inventory store."""
    return await get_inventory_store()


async def get_invoice_doc_store() -> SQLiteInvoiceStore:
    """Get invoice store."""
    return await get_invoice_store()


async def get_quote_store() -> SQLiteQuotationStore:
    """Get quotation store."""
    return await get_quotation_store()


# Tax engine
def get_calculate_totals_use_case() -> CalculateTotalsUseCase:
    return CalculateTotalsUseCase()


def get_build_payment_schedule_use_case() -> BuildPaymentScheduleUseCase:
    return BuildPaymentScheduleUseCase()


# Inventory use case dependencies
def get_create_item_use_case() -> CreateItemUseCase:
    return CreateItemUseCase()


def get_update_item_use_case() -> UpdateItemUseCase:
    return UpdateItemUseCase()


def get_delete_item_use_case() -> DeleteItemUseCase:
    return DeleteItemUseCase()


def get_inventory_valuation_use_case() -> InventoryValuationUseCase:
    return InventoryValuationUseCase()


def get_record_stock_transaction_use_case() -> RecordStockTransactionUseCase:
    """Get record stock transaction use case."""
    return RecordStockTransactionUseCase()


# Invoice use case dependencies
def get_create_invoice_use_case() -> CreateInvoiceUseCase:
    """Get create invoice use case."""
    return CreateInvoiceUseCase()


def get_record_payment_use_case() -> RecordInvoicePaymentUseCase:
    return RecordInvoicePaymentUseCase()


def get_update_invoice_status_use_case() -> UpdateInvoiceStatusUseCase:
    return UpdateInvoiceStatusUseCase()


def get_mark_overdue_use_case() -> MarkOverdueInvoicesUseCase:
    return MarkOverdueInvoicesUseCase()


def get_invoice_pdf_use_case() -> GenerateInvoicePdfUseCase:
    """Get invoice PDF use case."""
    return GenerateInvoicePdfUseCase()


# Quotation use case dependencies
def get_create_quotation_use_case() -> CreateQuotationUseCase:
    """Get create quotation use case."""
    return CreateQuotationUseCase()


def get_update_quotation_status_use_case() -> UpdateQuotationStatusUseCase:
    return UpdateQuotationStatusUseCase()


def get_expire_quotations_use_case() -> ExpireQuotationsUseCase:
    return ExpireQuotationsUseCase()


def get_quotation_pdf_use_case() -> GenerateQuotationPdfUseCase:
    """Get quotation PDF use case."""
    return GenerateQuotationPdfUseCase()
