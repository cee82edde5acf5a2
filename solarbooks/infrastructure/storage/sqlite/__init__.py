"""SQLite storage implementations."""

from solarbooks.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from solarbooks.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from solarbooks.infrastructure.storage.sqlite.invoice_store import SQLiteInvoiceStore
from solarbooks.infrastructure.storage.sqlite.quotation_store import SQLiteQuotationStore

# Singleton instances
_inventory_store: SQLiteInventoryStore | None = None
_invoice_store: SQLiteInvoiceStore | None = None
_quotation_store: SQLiteQuotationStore | None = None


async def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore()
    return _inventory_store


async def get_invoice_store() -> SQLiteInvoiceStore:
    """Get singleton invoice store instance."""
    global _invoice_store
    if _invoice_store is None:
        _invoice_store = SQLiteInvoiceStore()
    return _invoice_store


async def get_quotation_store() -> SQLiteQuotationStore:
    """Get singleton quotation store instance."""
    global _quotation_store
    if _quotation_store is None:
        _quotation_store = SQLiteQuotationStore()
    return _quotation_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteInventoryStore",
    "SQLiteInvoiceStore",
    "SQLiteQuotationStore",
    # Factory functions
    "get_inventory_store",
    "get_invoice_store",
    "get_quotation_store",
]
