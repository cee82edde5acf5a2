"""Storage infrastructure implementations."""

from solarbooks.infrastructure.storage.sqlite import (
    SQLiteInventoryStore,
    SQLiteInvoiceStore,
    SQLiteQuotationStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    "SQLiteInventoryStore",
    "SQLiteInvoiceStore",
    "SQLiteQuotationStore",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
