"""GST line item and document totals entities."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

# GST slabs accepted on a line
GST_RATES: tuple[int, ...] = (0, 5, 12, 18, 28)

ZERO = Decimal("0")


class GSTType(str, Enum):
    """How GST is levied on a document."""

    INTRA_STATE = "Intra-state"  # CGST + SGST
    INTER_STATE = "Inter-state"  # IGST

    @classmethod
    def from_interstate(cls, is_interstate: bool) -> "GSTType":
        return cls.INTER_STATE if is_interstate else cls.INTRA_STATE


class DiscountMode(str, Enum):
    """Which discount field drives the other on a line."""

    PERCENT = "percent"
    AMOUNT = "amount"


class LineItem(BaseModel):
    """A single priced line on a quotation or invoice.

    Input fields are quantity, unit_price, the authoritative discount field
    and gst_rate. Everything from ``gross`` down is derived by the
    line-item calculator and overwritten on every recalculation.
    """

    id: int | None = None
    line_number: int = 1
    item_id: int | None = None  # FK -> items.id
    item_name: str = ""
    description: str | None = None
    hsn_code: str | None = None
    unit: str = "Nos"

    quantity: Decimal = ZERO
    unit_price: Decimal = ZERO
    discount_mode: DiscountMode = DiscountMode.PERCENT
    discount_percent: Decimal = ZERO
    discount_amount: Decimal = ZERO
    gst_rate: Decimal = Decimal("18")

    # Derived
    gross: Decimal = ZERO
    taxable_amount: Decimal = ZERO
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    igst: Decimal = ZERO
    total_amount: Decimal = ZERO

    @property
    def gst_amount(self) -> Decimal:
        return self.cgst + self.sgst + self.igst


class DocumentTotals(BaseModel):
    """Aggregate money fields of a quotation or invoice."""

    subtotal: Decimal = ZERO
    total_discount: Decimal = ZERO
    taxable_amount: Decimal = ZERO
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    igst: Decimal = ZERO
    total_gst: Decimal = ZERO
    tcs_rate: Decimal = ZERO
    tcs_amount: Decimal = ZERO
    round_off: Decimal = ZERO
    grand_total: Decimal = ZERO
    amount_in_words: str = "Zero Rupees Only"
    gst_type: GSTType = GSTType.INTRA_STATE
    line_count: int = Field(default=0, ge=0)

    @property
    def total_before_rounding(self) -> Decimal:
        return self.taxable_amount + self.total_gst + self.tcs_amount
