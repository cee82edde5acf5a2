"""GST invoice domain entities."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field

from solarbooks.core.entities.tax import DocumentTotals, GSTType, LineItem
from solarbooks.core.exceptions import InvalidStatusTransitionError, OverpaymentError


class InvoiceType(str, Enum):
    PROFORMA = "Proforma"
    TAX_INVOICE = "Tax Invoice"
    STAGE_PAYMENT = "Stage Payment"


class InvoiceStatus(str, Enum):
    DRAFT = "Draft"
    GENERATED = "Generated"
    SENT = "Sent"
    PAID = "Paid"
    PARTIALLY_PAID = "Partially Paid"
    OVERDUE = "Overdue"
    CANCELLED = "Cancelled"


# Statuses still waiting on money
OPEN_STATUSES = frozenset(
    {InvoiceStatus.GENERATED, InvoiceStatus.SENT, InvoiceStatus.PARTIALLY_PAID}
)

# Statuses that can still take money
PAYABLE_STATUSES = OPEN_STATUSES | {InvoiceStatus.OVERDUE}

# Manual status changes; payment statuses are set by recording payments
ALLOWED_TRANSITIONS: dict[InvoiceStatus, frozenset[InvoiceStatus]] = {
    InvoiceStatus.DRAFT: frozenset({InvoiceStatus.GENERATED, InvoiceStatus.CANCELLED}),
    InvoiceStatus.GENERATED: frozenset(
        {InvoiceStatus.SENT, InvoiceStatus.OVERDUE, InvoiceStatus.CANCELLED}
    ),
    InvoiceStatus.SENT: frozenset({InvoiceStatus.OVERDUE, InvoiceStatus.CANCELLED}),
    InvoiceStatus.PARTIALLY_PAID: frozenset({InvoiceStatus.OVERDUE}),
    InvoiceStatus.OVERDUE: frozenset({InvoiceStatus.CANCELLED}),
    InvoiceStatus.PAID: frozenset(),
    InvoiceStatus.CANCELLED: frozenset(),
}


class Invoice(BaseModel):
    """A GST invoice with its lines and computed totals."""

    id: int | None = None
    invoice_number: str = ""  # SS/INV/2025/001
    invoice_type: InvoiceType = InvoiceType.TAX_INVOICE
    status: InvoiceStatus = InvoiceStatus.DRAFT
    project_id: int | None = None
    quotation_id: int | None = None

    customer_name: str
    customer_gstin: str | None = None
    billing_address: str | None = None
    place_of_supply: str = ""  # state name
    company_gstin: str = ""
    reverse_charge: bool = False
    gst_type: GSTType = GSTType.INTRA_STATE

    invoice_date: date = Field(default_factory=date.today)
    due_date: date | None = None
    payment_terms: str | None = None

    items: list[LineItem] = Field(default_factory=list)
    totals: DocumentTotals = Field(default_factory=DocumentTotals)

    amount_paid: Decimal = Decimal("0")
    notes: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def balance_amount(self) -> Decimal:
        return self.totals.grand_total - self.amount_paid

    def apply_payment(self, amount: Decimal) -> None:
        """
        Add *amount* to the paid total and move to Paid or Partially Paid.

        Raises InvalidStatusTransitionError when the invoice cannot take money
        and OverpaymentError when *amount* exceeds the balance.
        """
        if self.status not in PAYABLE_STATUSES:
            raise InvalidStatusTransitionError(
                "invoice", self.status.value, InvoiceStatus.PAID.value
            )
        balance = self.balance_amount
        if amount > balance:
            raise OverpaymentError(self.id, amount, balance)

        self.amount_paid += amount
        self.status = (
            InvoiceStatus.PAID
            if self.amount_paid >= self.totals.grand_total
            else InvoiceStatus.PARTIALLY_PAID
        )

    def is_overdue(self, today: date) -> bool:
        return (
            self.status in OPEN_STATUSES
            and self.due_date is not None
            and self.due_date < today
        )


class PaymentMode(str, Enum):
    CASH = "Cash"
    UPI = "UPI"
    NEFT = "NEFT"
    RTGS = "RTGS"
    CHEQUE = "Cheque"
    CARD = "Card"


class InvoicePayment(BaseModel):
    """Money received against an invoice."""

    id: int | None = None
    invoice_id: int
    amount: Decimal
    payment_date: date = Field(default_factory=date.today)
    payment_mode: PaymentMode = PaymentMode.NEFT
    reference_number: str | None = None  # UTR / cheque no
    remarks: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
