"""Core domain entities."""

from solarbooks.core.entities.inventory import (
    INBOUND_TYPES,
    OUTBOUND_TYPES,
    Item,
    ItemCategory,
    ItemStatus,
    StockDirection,
    StockLedgerEntry,
    TransactionType,
)
from solarbooks.core.entities.invoice import (
    Invoice,
    InvoicePayment,
    InvoiceStatus,
    InvoiceType,
    PaymentMode,
)
from solarbooks.core.entities.payment_schedule import (
    PaymentSchedule,
    PaymentScheduleStage,
    PaymentStage,
    StageStatus,
)
from solarbooks.core.entities.quotation import Quotation, QuotationStatus
from solarbooks.core.entities.tax import (
    GST_RATES,
    DiscountMode,
    DocumentTotals,
    GSTType,
    LineItem,
)

__all__ = [
    # Tax entities
    "GST_RATES",
    "GSTType",
    "DiscountMode",
    "LineItem",
    "DocumentTotals",
    # Inventory entities
    "Item",
    "ItemCategory",
    "ItemStatus",
    "StockLedgerEntry",
    "TransactionType",
    "StockDirection",
    "INBOUND_TYPES",
    "OUTBOUND_TYPES",
    # Documents
    "Invoice",
    "InvoiceStatus",
    "InvoiceType",
    "InvoicePayment",
    "PaymentMode",
    "Quotation",
    "QuotationStatus",
    # Payment schedule
    "PaymentSchedule",
    "PaymentScheduleStage",
    "PaymentStage",
    "StageStatus",
]
