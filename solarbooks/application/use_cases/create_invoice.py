"""Create Invoice Use Case: number, compute GST totals and persist."""

from dataclasses import dataclass
from datetime import date, timedelta

from solarbooks.application.dto.mappers import invoice_to_response, line_from_request
from solarbooks.application.dto.requests import CreateInvoiceRequest
from solarbooks.application.dto.responses import InvoiceResponse
from solarbooks.config import Settings, get_logger, get_settings
from solarbooks.core.entities.invoice import Invoice, InvoiceStatus
from solarbooks.core.interfaces.invoice_store import IInvoiceStore
from solarbooks.core.services.gst_calculator import calculate_document

logger = get_logger(__name__)


@dataclass
class CreateInvoiceResult:
    """Result of creating an invoice."""

    invoice: Invoice


def invoice_number_prefix(prefix: str, year: int) -> str:
    return f"{prefix}/{year}/"


def format_invoice_number(prefix: str, year: int, sequence: int, digits: int = 3) -> str:
    """SS/INV/2025/001"""
    return f"{invoice_number_prefix(prefix, year)}{sequence:0{digits}d}"


class CreateInvoiceUseCase:
    """Create a GST invoice with engine-computed lines and totals."""

    def __init__(
        self,
        invoice_store: IInvoiceStore | None = None,
        settings: Settings | None = None,
    ):
        self._invoice_store = invoice_store
        self._settings = settings

    async def _get_invoice_store(self) -> IInvoiceStore:
        if self._invoice_store is None:
            from solarbooks.infrastructure.storage.sqlite import get_invoice_store

            self._invoice_store = await get_invoice_store()
        return self._invoice_store

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    async def execute(self, request: CreateInvoiceRequest) -> CreateInvoiceResult:
        settings = self.settings
        logger.info(
            "create_invoice_started",
            customer=request.customer_name,
            items=len(request.items),
            place_of_supply=request.place_of_supply,
        )

        store = await self._get_invoice_store()
        invoice_date = request.invoice_date or date.today()
        due_date = request.due_date or invoice_date + timedelta(
            days=settings.billing.payment_terms_days
        )
        tcs_rate = (
            request.tcs_rate
            if request.tcs_rate is not None
            else settings.billing.default_tcs_rate
        )
        company_gstin = settings.company.gstin

        items, totals = calculate_document(
            [line_from_request(line) for line in request.items],
            company_gstin=company_gstin,
            place_of_supply=request.place_of_supply,
            tcs_rate=tcs_rate,
        )

        prefix = settings.billing.invoice_prefix
        sequence = await store.next_sequence(
            invoice_number_prefix(prefix, invoice_date.year)
        )

        invoice = Invoice(
            invoice_number=format_invoice_number(
                prefix, invoice_date.year, sequence, settings.billing.number_digits
            ),
            invoice_type=request.invoice_type,
            status=InvoiceStatus.DRAFT if request.as_draft else InvoiceStatus.GENERATED,
            project_id=request.project_id,
            quotation_id=request.quotation_id,
            customer_name=request.customer_name,
            customer_gstin=request.customer_gstin,
            billing_address=request.billing_address,
            place_of_supply=request.place_of_supply,
            company_gstin=company_gstin,
            reverse_charge=request.reverse_charge,
            gst_type=totals.gst_type,
            invoice_date=invoice_date,
            due_date=due_date,
            payment_terms=request.payment_terms
            or f"Net {settings.billing.payment_terms_days} days",
            items=items,
            totals=totals,
            notes=request.notes,
        )
        invoice = await store.create_invoice(invoice)

        logger.info(
            "create_invoice_complete",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            gst_type=totals.gst_type.value,
            grand_total=str(totals.grand_total),
        )
        return CreateInvoiceResult(invoice=invoice)

    def to_response(self, result: CreateInvoiceResult) -> InvoiceResponse:
        return invoice_to_response(result.invoice)
