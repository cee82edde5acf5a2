"""Quotation domain entities."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field

from solarbooks.core.entities.payment_schedule import PaymentSchedule
from solarbooks.core.entities.tax import DocumentTotals, GSTType, LineItem


class QuotationStatus(str, Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    EXPIRED = "Expired"


ALLOWED_TRANSITIONS: dict[QuotationStatus, frozenset[QuotationStatus]] = {
    QuotationStatus.DRAFT: frozenset({QuotationStatus.SENT, QuotationStatus.EXPIRED}),
    QuotationStatus.SENT: frozenset(
        {QuotationStatus.ACCEPTED, QuotationStatus.REJECTED, QuotationStatus.EXPIRED}
    ),
    QuotationStatus.ACCEPTED: frozenset(),
    QuotationStatus.REJECTED: frozenset(),
    QuotationStatus.EXPIRED: frozenset(),
}


class Quotation(BaseModel):
    """A priced offer for a solar installation."""

    id: int | None = None
    quotation_number: str = ""  # QUO-2025-001
    status: QuotationStatus = QuotationStatus.DRAFT
    lead_id: int | None = None

    client_name: str
    site_location: str | None = None
    place_of_supply: str = ""
    company_gstin: str = ""
    gst_type: GSTType = GSTType.INTRA_STATE
    system_size_kw: float | None = None

    quotation_date: date = Field(default_factory=date.today)
    validity_date: date | None = None

    items: list[LineItem] = Field(default_factory=list)
    totals: DocumentTotals = Field(default_factory=DocumentTotals)
    payment_schedule: PaymentSchedule | None = None

    terms_and_conditions: str | None = None
    sent_date: date | None = None
    accepted_date: date | None = None
    rejection_reason: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def is_expired(self, today: date) -> bool:
        return (
            self.status in (QuotationStatus.DRAFT, QuotationStatus.SENT)
            and self.validity_date is not None
            and self.validity_date < today
        )
