"""Core interfaces (ports) for dependency injection."""

from solarbooks.core.interfaces.inventory_store import IInventoryStore
from solarbooks.core.interfaces.invoice_store import IInvoiceStore
from solarbooks.core.interfaces.quotation_store import IQuotationStore

__all__ = [
    # Storage interfaces
    "IInventoryStore",
    "IInvoiceStore",
    "IQuotationStore",
]
