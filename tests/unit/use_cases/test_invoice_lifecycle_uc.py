"""Tests for invoice payment, status and overdue use cases."""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from solarbooks.application.dto.requests import RecordPaymentRequest
from solarbooks.application.use_cases.invoice_lifecycle import (
    MarkOverdueInvoicesUseCase,
    RecordInvoicePaymentUseCase,
    UpdateInvoiceStatusUseCase,
)
from solarbooks.core.entities.invoice import Invoice, InvoicePayment, InvoiceStatus, PaymentMode
from solarbooks.core.entities.tax import DocumentTotals
from solarbooks.core.exceptions import (
    InvalidStatusTransitionError,
    InvoiceNotFoundError,
    OverpaymentError,
)


def _invoice(status=InvoiceStatus.GENERATED, **kwargs) -> Invoice:
    return Invoice(
        id=kwargs.pop("id", 1),
        invoice_number=kwargs.pop("invoice_number", "SS/INV/2025/001"),
        customer_name="Sunrise Apartments",
        status=status,
        totals=DocumentTotals(grand_total=Decimal("2124")),
        **kwargs,
    )


@pytest.fixture
def mock_invoice_store():
    store = AsyncMock()
    store.update_invoice.side_effect = lambda invoice: invoice

    async def _record(payment: InvoicePayment, invoice: Invoice) -> InvoicePayment:
        return payment.model_copy(update={"id": 5})

    store.record_payment.side_effect = _record
    return store


class TestRecordInvoicePayment:
    async def test_partial_payment(self, mock_invoice_store):
        mock_invoice_store.get_invoice.return_value = _invoice()
        use_case = RecordInvoicePaymentUseCase(invoice_store=mock_invoice_store)

        result = await use_case.execute(
            1,
            RecordPaymentRequest(
                amount=Decimal("1000"),
                payment_mode=PaymentMode.UPI,
                reference_number="UTR123",
                payment_date=date(2025, 3, 12),
            ),
        )

        assert result.invoice.status == InvoiceStatus.PARTIALLY_PAID
        assert result.invoice.balance_amount == Decimal("1124")
        assert result.payment.id == 5
        assert result.payment.payment_date == date(2025, 3, 12)
        _, saved_invoice = mock_invoice_store.record_payment.call_args[0]
        assert saved_invoice.amount_paid == Decimal("1000")

    async def test_full_payment(self, mock_invoice_store):
        mock_invoice_store.get_invoice.return_value = _invoice(
            status=InvoiceStatus.PARTIALLY_PAID, amount_paid=Decimal("1000")
        )
        use_case = RecordInvoicePaymentUseCase(invoice_store=mock_invoice_store)

        result = await use_case.execute(1, RecordPaymentRequest(amount=Decimal("1124")))

        assert result.invoice.status == InvoiceStatus.PAID
        response = use_case.to_response(result)
        assert response.invoice.balance_amount == 0.0
        assert response.payment.payment_mode == "NEFT"

    async def test_overdue_invoice_accepts_payment(self, mock_invoice_store):
        mock_invoice_store.get_invoice.return_value = _invoice(status=InvoiceStatus.OVERDUE)
        use_case = RecordInvoicePaymentUseCase(invoice_store=mock_invoice_store)

        result = await use_case.execute(1, RecordPaymentRequest(amount=Decimal("100")))
        assert result.invoice.status == InvoiceStatus.PARTIALLY_PAID

    async def test_overpayment(self, mock_invoice_store):
        mock_invoice_store.get_invoice.return_value = _invoice()
        use_case = RecordInvoicePaymentUseCase(invoice_store=mock_invoice_store)

        with pytest.raises(OverpaymentError):
            await use_case.execute(1, RecordPaymentRequest(amount=Decimal("3000")))
        mock_invoice_store.record_payment.assert_not_called()

    @pytest.mark.parametrize(
        "status", [InvoiceStatus.DRAFT, InvoiceStatus.PAID, InvoiceStatus.CANCELLED]
    )
    async def test_not_payable(self, mock_invoice_store, status):
        mock_invoice_store.get_invoice.return_value = _invoice(status=status)
        use_case = RecordInvoicePaymentUseCase(invoice_store=mock_invoice_store)

        with pytest.raises(InvalidStatusTransitionError):
            await use_case.execute(1, RecordPaymentRequest(amount=Decimal("1")))

    async def test_not_found(self, mock_invoice_store):
        mock_invoice_store.get_invoice.return_value = None
        use_case = RecordInvoicePaymentUseCase(invoice_store=mock_invoice_store)

        with pytest.raises(InvoiceNotFoundError):
            await use_case.execute(1, RecordPaymentRequest(amount=Decimal("1")))


class TestUpdateInvoiceStatus:
    async def test_generated_to_sent(self, mock_invoice_store):
        mock_invoice_store.get_invoice.return_value = _invoice()
        use_case = UpdateInvoiceStatusUseCase(invoice_store=mock_invoice_store)

        invoice = await use_case.execute(1, InvoiceStatus.SENT)
        assert invoice.status == InvoiceStatus.SENT
        mock_invoice_store.update_invoice.assert_awaited_once()

    async def test_same_status_is_noop(self, mock_invoice_store):
        mock_invoice_store.get_invoice.return_value = _invoice()
        use_case = UpdateInvoiceStatusUseCase(invoice_store=mock_invoice_store)

        await use_case.execute(1, InvoiceStatus.GENERATED)
        mock_invoice_store.update_invoice.assert_not_called()

    async def test_paid_is_terminal(self, mock_invoice_store):
        mock_invoice_store.get_invoice.return_value = _invoice(status=InvoiceStatus.PAID)
        use_case = UpdateInvoiceStatusUseCase(invoice_store=mock_invoice_store)

        with pytest.raises(InvalidStatusTransitionError):
            await use_case.execute(1, InvoiceStatus.CANCELLED)

    async def test_paid_cannot_be_set_manually(self, mock_invoice_store):
        mock_invoice_store.get_invoice.return_value = _invoice(status=InvoiceStatus.SENT)
        use_case = UpdateInvoiceStatusUseCase(invoice_store=mock_invoice_store)

        with pytest.raises(InvalidStatusTransitionError):
            await use_case.execute(1, InvoiceStatus.PAID)


class TestMarkOverdueInvoices:
    async def test_sweep(self, mock_invoice_store):
        today = date(2025, 5, 1)
        past = date(2025, 4, 1)
        mock_invoice_store.list_past_due.return_value = [
            _invoice(id=1, invoice_number="A", status=InvoiceStatus.SENT, due_date=past),
            _invoice(
                id=2, invoice_number="B", status=InvoiceStatus.PARTIALLY_PAID, due_date=past
            ),
            _invoice(id=3, invoice_number="C", status=InvoiceStatus.DRAFT, due_date=past),
        ]
        use_case = MarkOverdueInvoicesUseCase(invoice_store=mock_invoice_store)

        result = await use_case.execute(today)
        response = use_case.to_response(result)

        mock_invoice_store.list_past_due.assert_awaited_once_with(today)
        assert response.updated == ["A", "B"]
        assert response.count == 2
        assert all(i.status == InvoiceStatus.OVERDUE for i in result.updated)
