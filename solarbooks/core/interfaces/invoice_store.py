"""Abstract interface for GST invoice storage."""

from abc import ABC, abstractmethod
from datetime import date

from solarbooks.core.entities.invoice import (
    Invoice,
    InvoicePayment,
    InvoiceStatus,
    InvoiceType,
)


class IInvoiceStore(ABC):
    """Interface for invoice, line item and payment persistence."""

    @abstractmethod
    async def create_invoice(self, invoice: Invoice) -> Invoice:
        """Create an invoice together with its line items."""
        pass

    @abstractmethod
    async def get_invoice(self, invoice_id: int) -> Invoice | None:
        """Get invoice by ID, including line items."""
        pass

    @abstractmethod
    async def get_invoice_by_number(self, invoice_number: str) -> Invoice | None:
        pass

    @abstractmethod
    async def update_invoice(self, invoice: Invoice) -> Invoice:
        """Update header fields (status, amount_paid, due date, notes)."""
        pass

    @abstractmethod
    async def list_invoices(
        self,
        status: InvoiceStatus | None = None,
        invoice_type: InvoiceType | None = None,
        project_id: int | None = None,
        customer: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Invoice]:
        """List invoices, newest first. Line items are not loaded."""
        pass

    @abstractmethod
    async def list_past_due(self, today: date) -> list[Invoice]:
        """Open invoices whose due date is before *today*."""
        pass

    @abstractmethod
    async def next_sequence(self, number_prefix: str) -> int:
        """Next running number for invoice numbers starting with *number_prefix*."""
        pass

    @abstractmethod
    async def record_payment(
        self, payment: InvoicePayment, invoice: Invoice
    ) -> InvoicePayment:
        """
        Apply a payment to the stored invoice and insert it atomically.

        The balance is re-checked against the stored paid amount; raises
        OverpaymentError or InvalidStatusTransitionError without writing.
        """
        pass

    @abstractmethod
    async def list_payments(self, invoice_id: int) -> list[InvoicePayment]:
        pass
