"""Inventory domain entities."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class ItemCategory(str, Enum):
    """Catalogue categories for solar installation material."""

    PANEL = "Panel"
    INVERTER = "Inverter"
    STRUCTURE = "Structure"
    CABLE = "Cable"
    EARTHING = "Earthing"
    PROTECTION_DEVICE = "Protection Device"
    JUNCTION_BOX = "Junction Box"
    ACCESSORY = "Accessory"
    SERVICE = "Service"
    OTHER = "Other"


class ItemStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class TransactionType(str, Enum):
    """Kinds of stock ledger transactions."""

    PURCHASE = "Purchase"
    SALE = "Sale"
    TRANSFER_TO_SITE = "Transfer to Site"
    RETURN_FROM_SITE = "Return from Site"
    ADJUSTMENT = "Adjustment"
    DAMAGE = "Damage"
    OPENING_STOCK = "Opening Stock"


class StockDirection(str, Enum):
    """Direction of a stock movement."""

    IN = "in"
    OUT = "out"


INBOUND_TYPES = frozenset(
    {
        TransactionType.PURCHASE,
        TransactionType.RETURN_FROM_SITE,
        TransactionType.OPENING_STOCK,
    }
)
OUTBOUND_TYPES = frozenset(
    {
        TransactionType.SALE,
        TransactionType.TRANSFER_TO_SITE,
        TransactionType.DAMAGE,
    }
)


class Item(BaseModel):
    """A stocked material or billable service."""

    id: int | None = None
    item_code: str = ""  # ITEM001
    name: str
    category: ItemCategory = ItemCategory.OTHER
    brand: str | None = None
    model: str | None = None
    specification: str | None = None
    unit: str = "Nos"
    hsn: str | None = None
    gst_rate: Decimal = Decimal("18")
    purchase_price: Decimal | None = None
    selling_price: Decimal | None = None
    current_stock: Decimal = Decimal("0")  # cache of the latest ledger balance
    reorder_level: Decimal | None = None
    status: ItemStatus = ItemStatus.ACTIVE
    remarks: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def valuation_price(self) -> Decimal:
        """Price used for stock valuation: purchase price, else selling price."""
        return self.purchase_price or self.selling_price or Decimal("0")

    @property
    def stock_value(self) -> Decimal:
        return self.current_stock * self.valuation_price

    @property
    def is_low_stock(self) -> bool:
        return bool(self.reorder_level) and self.current_stock <= self.reorder_level


class StockLedgerEntry(BaseModel):
    """One immutable row of an item's stock ledger."""

    id: int | None = None
    item_id: int  # FK -> items.id
    transaction_type: TransactionType
    direction: StockDirection = StockDirection.IN
    quantity: Decimal  # always positive
    signed_quantity: Decimal = Decimal("0")
    unit: str = "Nos"
    rate: Decimal | None = None
    amount: Decimal | None = None
    balance_quantity: Decimal = Decimal("0")
    transaction_date: date = Field(default_factory=date.today)
    reference_number: str | None = None  # bill no, challan no
    project_id: int | None = None
    supplier_id: int | None = None
    remarks: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
