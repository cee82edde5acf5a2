"""Invoice lifecycle use cases: payments, status changes and the overdue sweep."""

from dataclasses import dataclass
from datetime import date

from solarbooks.application.dto.mappers import invoice_to_response, payment_to_response
from solarbooks.application.dto.requests import RecordPaymentRequest
from solarbooks.application.dto.responses import (
    OverdueSweepResponse,
    RecordPaymentResponse,
)
from solarbooks.config import get_logger
from solarbooks.core.entities.invoice import (
    ALLOWED_TRANSITIONS,
    Invoice,
    InvoicePayment,
    InvoiceStatus,
)
from solarbooks.core.exceptions import InvalidStatusTransitionError, InvoiceNotFoundError
from solarbooks.core.interfaces.invoice_store import IInvoiceStore

logger = get_logger(__name__)


class _InvoiceUseCase:
    def __init__(self, invoice_store: IInvoiceStore | None = None):
        self._invoice_store = invoice_store

    async def _get_invoice_store(self) -> IInvoiceStore:
        if self._invoice_store is None:
            from solarbooks.infrastructure.storage.sqlite import get_invoice_store

            self._invoice_store = await get_invoice_store()
        return self._invoice_store

    async def _load(self, invoice_id: int) -> Invoice:
        store = await self._get_invoice_store()
        invoice = await store.get_invoice(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)
        return invoice


@dataclass
class RecordPaymentResult:
    invoice: Invoice
    payment: InvoicePayment


class RecordInvoicePaymentUseCase(_InvoiceUseCase):
    """
    Record money received against an invoice.

    The invoice becomes Paid once the grand total is covered, Partially
    Paid otherwise. Payments larger than the balance are rejected. The
    check runs here for a fast answer and again by the store against the
    locked invoice row, which decides the stored amount and status.
    """

    async def execute(
        self, invoice_id: int, request: RecordPaymentRequest
    ) -> RecordPaymentResult:
        invoice = await self._load(invoice_id)
        invoice.apply_payment(request.amount)

        payment = InvoicePayment(
            invoice_id=invoice_id,
            amount=request.amount,
            payment_mode=request.payment_mode,
            reference_number=request.reference_number,
            remarks=request.remarks,
        )
        if request.payment_date:
            payment.payment_date = request.payment_date

        store = await self._get_invoice_store()
        payment = await store.record_payment(payment, invoice)

        logger.info(
            "invoice_payment_applied",
            invoice_number=invoice.invoice_number,
            amount=str(request.amount),
            balance=str(invoice.balance_amount),
            status=invoice.status.value,
        )
        return RecordPaymentResult(invoice=invoice, payment=payment)

    def to_response(self, result: RecordPaymentResult) -> RecordPaymentResponse:
        return RecordPaymentResponse(
            invoice=invoice_to_response(result.invoice),
            payment=payment_to_response(result.payment),
        )


class UpdateInvoiceStatusUseCase(_InvoiceUseCase):
    """Manual status change following the allowed transition map."""

    async def execute(self, invoice_id: int, new_status: InvoiceStatus) -> Invoice:
        invoice = await self._load(invoice_id)
        if new_status == invoice.status:
            return invoice

        if new_status not in ALLOWED_TRANSITIONS[invoice.status]:
            raise InvalidStatusTransitionError(
                "invoice", invoice.status.value, new_status.value
            )

        previous = invoice.status
        invoice.status = new_status
        store = await self._get_invoice_store()
        invoice = await store.update_invoice(invoice)
        logger.info(
            "invoice_status_changed",
            invoice_id=invoice_id,
            from_status=previous.value,
            to_status=new_status.value,
        )
        return invoice


@dataclass
class OverdueSweepResult:
    updated: list[Invoice]


class MarkOverdueInvoicesUseCase(_InvoiceUseCase):
    """Move open invoices past their due date to Overdue."""

    async def execute(self, today: date | None = None) -> OverdueSweepResult:
        today = today or date.today()
        store = await self._get_invoice_store()

        updated = []
        for invoice in await store.list_past_due(today):
            if not invoice.is_overdue(today):
                continue
            invoice.status = InvoiceStatus.OVERDUE
            updated.append(await store.update_invoice(invoice))

        logger.info("overdue_sweep_complete", today=today.isoformat(), updated=len(updated))
        return OverdueSweepResult(updated=updated)

    def to_response(self, result: OverdueSweepResult) -> OverdueSweepResponse:
        return OverdueSweepResponse(
            updated=[i.invoice_number for i in result.updated],
            count=len(result.updated),
        )
