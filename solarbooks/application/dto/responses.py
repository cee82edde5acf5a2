"""Response DTOs for API endpoints.

Pydantic v2 models for API responses. Money leaves the service as plain
JSON numbers; display formatting is left to the caller.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: str | None = None
    schema_version: str | None = None
    environment: str | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. ITEM_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


class PaginatedResponse(BaseModel):
    """Base for paginated responses."""

    total: int
    limit: int
    offset: int
    has_more: bool


# --- Tax engine ---


class LineItemResponse(BaseModel):
    """A computed document line."""

    id: int | None = None
    line_number: int
    item_id: int | None = None
    item_name: str
    description: str | None = None
    hsn_code: str | None = None
    unit: str
    quantity: float
    unit_price: float
    discount_mode: str
    discount_percent: float
    discount_amount: float
    gst_rate: float
    gross: float
    taxable_amount: float
    cgst: float
    sgst: float
    igst: float
    gst_amount: float
    total_amount: float


class DocumentTotalsResponse(BaseModel):
    subtotal: float
    total_discount: float
    taxable_amount: float
    cgst: float
    sgst: float
    igst: float
    total_gst: float
    tcs_rate: float
    tcs_amount: float
    round_off: float
    grand_total: float
    amount_in_words: str
    gst_type: str
    line_count: int


class TaxTypeResponse(BaseModel):
    """Result of resolving intra-state vs inter-state supply."""

    company_gstin: str
    company_state_code: str
    place_of_supply: str
    supply_state_code: str
    is_interstate: bool
    gst_type: str


class TaxCalculationResponse(BaseModel):
    items: list[LineItemResponse]
    totals: DocumentTotalsResponse
    is_interstate: bool


class AmountInWordsResponse(BaseModel):
    amount: float
    words: str
    formatted: str


class InclusivePriceResponse(BaseModel):
    amount: float
    gst_rate: float
    base_amount: float
    gst_amount: float


class StateCodeResponse(BaseModel):
    state: str
    code: str


# --- Inventory ---


class ItemResponse(BaseModel):
    """Catalogue item with its cached stock."""

    id: int
    item_code: str
    name: str
    category: str
    brand: str | None = None
    model: str | None = None
    specification: str | None = None
    unit: str
    hsn: str | None = None
    gst_rate: float
    purchase_price: float | None = None
    selling_price: float | None = None
    current_stock: float
    reorder_level: float | None = None
    stock_value: float
    is_low_stock: bool
    status: str
    remarks: str | None = None
    created_at: datetime
    updated_at: datetime


class ItemListResponse(PaginatedResponse):
    items: list[ItemResponse]


class StockLedgerEntryResponse(BaseModel):
    """One stock ledger row."""

    id: int
    item_id: int
    transaction_type: str
    direction: str
    quantity: float
    signed_quantity: float
    unit: str
    rate: float | None = None
    amount: float | None = None
    balance_quantity: float
    transaction_date: date
    reference_number: str | None = None
    project_id: int | None = None
    supplier_id: int | None = None
    remarks: str | None = None
    created_at: datetime


class StockTransactionResponse(BaseModel):
    """Response for a recorded stock transaction."""

    item: ItemResponse
    entry: StockLedgerEntryResponse


class CreateItemResponse(BaseModel):
    item: ItemResponse
    opening_entry: StockLedgerEntryResponse | None = None


class StockLedgerResponse(BaseModel):
    entries: list[StockLedgerEntryResponse]
    total: int


class CategoryValuationResponse(BaseModel):
    category: str
    item_count: int
    total_quantity: float
    total_value: float


class InventoryValuationResponse(BaseModel):
    """Stock value grouped by item category."""

    categories: list[CategoryValuationResponse]
    total_items: int
    total_value: float


# --- Invoices ---


class InvoicePaymentResponse(BaseModel):
    id: int
    invoice_id: int
    amount: float
    payment_date: date
    payment_mode: str
    reference_number: str | None = None
    remarks: str | None = None
    created_at: datetime


class InvoiceResponse(BaseModel):
    """GST invoice with lines and totals."""

    id: int
    invoice_number: str
    invoice_type: str
    status: str
    project_id: int | None = None
    quotation_id: int | None = None
    customer_name: str
    customer_gstin: str | None = None
    billing_address: str | None = None
    place_of_supply: str
    company_gstin: str
    reverse_charge: bool
    gst_type: str
    invoice_date: date
    due_date: date | None = None
    payment_terms: str | None = None
    items: list[LineItemResponse] = Field(default_factory=list)
    totals: DocumentTotalsResponse
    amount_paid: float
    balance_amount: float
    notes: str | None = None
    created_at: datetime
    updated_at: datetime


class InvoiceListResponse(PaginatedResponse):
    invoices: list[InvoiceResponse]


class RecordPaymentResponse(BaseModel):
    invoice: InvoiceResponse
    payment: InvoicePaymentResponse


class OverdueSweepResponse(BaseModel):
    updated: list[str]
    count: int


# --- Payment schedules ---


class PaymentScheduleStageResponse(BaseModel):
    stage: str
    percentage: float
    amount: float
    due_date: date | None = None
    status: str


class PaymentScheduleResponse(BaseModel):
    """Staged payment plan with its balance check."""

    terms_name: str | None = None
    project_value: float
    stages: list[PaymentScheduleStageResponse]
    total_percentage: float
    total_amount: float
    is_balanced: bool
    unallocated_percentage: float


class PaymentPresetResponse(BaseModel):
    name: str
    stages: list[PaymentScheduleStageResponse]


# --- Quotations ---


class QuotationResponse(BaseModel):
    """Quotation with lines, totals and optional payment schedule."""

    id: int
    quotation_number: str
    status: str
    lead_id: int | None = None
    client_name: str
    site_location: str | None = None
    place_of_supply: str
    company_gstin: str
    gst_type: str
    system_size_kw: float | None = None
    quotation_date: date
    validity_date: date | None = None
    items: list[LineItemResponse] = Field(default_factory=list)
    totals: DocumentTotalsResponse
    payment_schedule: PaymentScheduleResponse | None = None
    terms_and_conditions: str | None = None
    sent_date: date | None = None
    accepted_date: date | None = None
    rejection_reason: str | None = None
    created_at: datetime
    updated_at: datetime


class QuotationListResponse(PaginatedResponse):
    quotations: list[QuotationResponse]


class ExpirySweepResponse(BaseModel):
    updated: list[str]
    count: int
