"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field

from solarbooks.core.entities.inventory import (
    ItemCategory,
    ItemStatus,
    StockDirection,
    TransactionType,
)
from solarbooks.core.entities.invoice import InvoiceStatus, InvoiceType, PaymentMode
from solarbooks.core.entities.payment_schedule import PaymentStage
from solarbooks.core.entities.quotation import QuotationStatus
from solarbooks.core.entities.tax import GST_RATES, DiscountMode
from solarbooks.core.services.gst_calculator import MAX_MAGNITUDE, validate_gstin

# Raw numeric input from a form: number, typed text or nothing
RawNumber = float | str | None


def _check_gst_rate(value: Decimal) -> Decimal:
    if value not in {Decimal(r) for r in GST_RATES}:
        raise ValueError(f"GST rate must be one of {', '.join(map(str, GST_RATES))}")
    return value


def _check_gstin(value: str | None) -> str | None:
    if value in (None, ""):
        return None
    value = value.strip().upper()
    if not validate_gstin(value):
        raise ValueError(
            "GSTIN must be a state code, PAN, entity number, 'Z' and a check character"
        )
    return value


GSTRate = Annotated[Decimal, AfterValidator(_check_gst_rate)]
GSTIN = Annotated[str | None, AfterValidator(_check_gstin)]


# --- Tax engine ---


class TaxLineRequest(BaseModel):
    """A line as currently typed in a form.

    Numbers are taken as-is; anything unreadable counts as 0.
    """

    item_name: str = ""
    hsn_code: str | None = None
    unit: str = "Nos"
    quantity: RawNumber = None
    unit_price: RawNumber = None
    discount_mode: DiscountMode = DiscountMode.PERCENT
    discount_percent: RawNumber = None
    discount_amount: RawNumber = None
    gst_rate: RawNumber = 18


class CalculateTotalsRequest(BaseModel):
    """Live recalculation of a quotation or invoice."""

    items: list[TaxLineRequest] = Field(default_factory=list)
    company_gstin: str | None = Field(
        default=None,
        description="Issuing company GSTIN (default from company settings)",
    )
    place_of_supply: str = Field(default="", examples=["Karnataka", "Maharashtra"])
    tcs_rate: RawNumber = None


class InclusivePriceRequest(BaseModel):
    amount: Decimal = Field(
        ..., ge=0, le=MAX_MAGNITUDE, description="GST-inclusive amount"
    )
    gst_rate: GSTRate = Decimal("18")


# --- Document lines ---


class LineItemRequest(BaseModel):
    """A validated document line."""

    item_id: int | None = Field(default=None, description="Linked inventory item")
    item_name: str = Field(..., min_length=1)
    description: str | None = None
    hsn_code: str | None = None
    unit: str = "Nos"
    quantity: Decimal = Field(..., ge=0, le=MAX_MAGNITUDE)
    unit_price: Decimal = Field(..., ge=0, le=MAX_MAGNITUDE)
    discount_mode: DiscountMode | None = Field(
        default=None,
        description="Authoritative discount field; inferred when omitted",
    )
    discount_percent: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    discount_amount: Decimal = Field(default=Decimal("0"), ge=0, le=MAX_MAGNITUDE)
    gst_rate: GSTRate = Decimal("18")


# --- Inventory ---


class CreateItemRequest(BaseModel):
    """Request to create a catalogue item."""

    name: str = Field(..., min_length=1)
    item_code: str | None = Field(default=None, description="Auto-generated when omitted")
    category: ItemCategory = ItemCategory.OTHER
    brand: str | None = None
    model: str | None = None
    specification: str | None = None
    unit: str = "Nos"
    hsn: str | None = None
    gst_rate: GSTRate = Decimal("18")
    purchase_price: Decimal | None = Field(default=None, ge=0)
    selling_price: Decimal | None = Field(default=None, ge=0)
    opening_stock: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Posted as an Opening Stock ledger entry",
    )
    reorder_level: Decimal | None = Field(default=None, ge=0)
    remarks: str | None = None


class UpdateItemRequest(BaseModel):
    """Partial update of descriptive item fields. Stock is not editable."""

    name: str | None = Field(default=None, min_length=1)
    category: ItemCategory | None = None
    brand: str | None = None
    model: str | None = None
    specification: str | None = None
    unit: str | None = None
    hsn: str | None = None
    gst_rate: GSTRate | None = None
    purchase_price: Decimal | None = Field(default=None, ge=0)
    selling_price: Decimal | None = Field(default=None, ge=0)
    reorder_level: Decimal | None = Field(default=None, ge=0)
    status: ItemStatus | None = None
    remarks: str | None = None


class RecordStockTransactionRequest(BaseModel):
    """Request to append a stock ledger entry."""

    item_id: int
    transaction_type: TransactionType
    # Sign comes from the type; non-positive values are rejected by the ledger
    quantity: Decimal
    direction: StockDirection | None = Field(
        default=None,
        description="Adjustment only: 'in' (default) or 'out'",
    )
    rate: Decimal | None = Field(default=None, ge=0)
    transaction_date: date | None = None
    reference_number: str | None = Field(default=None, examples=["BILL-1042"])
    project_id: int | None = None
    supplier_id: int | None = None
    remarks: str | None = None


# --- Invoices ---


class CreateInvoiceRequest(BaseModel):
    """Request to create a GST invoice."""

    invoice_type: InvoiceType = InvoiceType.TAX_INVOICE
    customer_name: str = Field(..., min_length=1)
    customer_gstin: GSTIN = None
    billing_address: str | None = None
    place_of_supply: str = Field(default="", examples=["Karnataka"])
    project_id: int | None = None
    quotation_id: int | None = None
    invoice_date: date | None = None
    due_date: date | None = Field(
        default=None,
        description="Defaults to invoice date + billing payment_terms_days",
    )
    payment_terms: str | None = None
    reverse_charge: bool = False
    tcs_rate: Decimal | None = Field(default=None, ge=0, le=10)
    items: list[LineItemRequest] = Field(..., min_length=1)
    notes: str | None = None
    as_draft: bool = Field(default=False, description="Keep in Draft instead of Generated")


class RecordPaymentRequest(BaseModel):
    amount: Decimal = Field(..., gt=0)
    payment_date: date | None = None
    payment_mode: PaymentMode = PaymentMode.NEFT
    reference_number: str | None = None
    remarks: str | None = None


class UpdateInvoiceStatusRequest(BaseModel):
    status: InvoiceStatus


# --- Payment schedules ---


class PaymentStageRequest(BaseModel):
    stage: PaymentStage
    percentage: Decimal = Field(..., ge=0, le=100)
    due_date: date | None = None


class BuildPaymentScheduleRequest(BaseModel):
    """Split a value into staged payments by preset or explicit stages."""

    project_value: Decimal = Field(..., ge=0)
    preset: str | None = Field(default=None, examples=["40-50-10", "30-65-5", "50-50"])
    stages: list[PaymentStageRequest] | None = None


# --- Quotations ---


class CreateQuotationRequest(BaseModel):
    """Request to create a quotation."""

    client_name: str = Field(..., min_length=1)
    lead_id: int | None = None
    site_location: str | None = None
    place_of_supply: str = ""
    system_size_kw: float | None = Field(default=None, gt=0)
    quotation_date: date | None = None
    validity_days: int | None = Field(default=None, ge=1, le=365)
    tcs_rate: Decimal | None = Field(default=None, ge=0, le=10)
    items: list[LineItemRequest] = Field(..., min_length=1)
    payment_terms: str | None = Field(
        default=None,
        description="Payment schedule preset applied to the grand total",
    )
    payment_stages: list[PaymentStageRequest] | None = None
    terms_and_conditions: str | None = None


class UpdateQuotationStatusRequest(BaseModel):
    status: QuotationStatus
    rejection_reason: str | None = None
