"""Tests for the document PDF use cases."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from solarbooks.application.use_cases.generate_document_pdf import (
    GenerateInvoicePdfUseCase,
    GenerateQuotationPdfUseCase,
    pdf_file_name,
)
from solarbooks.core.entities.invoice import Invoice
from solarbooks.core.entities.quotation import Quotation
from solarbooks.core.exceptions import InvoiceNotFoundError, QuotationNotFoundError


@pytest.fixture
def mock_renderer():
    renderer = MagicMock()
    renderer.render_invoice.return_value = b"%PDF-1.4 invoice"
    renderer.render_quotation.return_value = b"%PDF-1.4 quote"
    return renderer


def test_pdf_file_name():
    assert pdf_file_name("SS/INV/2025/001") == "SS-INV-2025-001.pdf"
    assert pdf_file_name("QUO-2025-001") == "QUO-2025-001.pdf"


class TestGenerateInvoicePdf:
    async def test_renders_invoice(self, mock_renderer):
        invoice = Invoice(id=1, invoice_number="SS/INV/2025/001", customer_name="Sunrise")
        store = AsyncMock()
        store.get_invoice.return_value = invoice
        use_case = GenerateInvoicePdfUseCase(invoice_store=store, renderer=mock_renderer)

        result = await use_case.execute(1)

        mock_renderer.render_invoice.assert_called_once_with(invoice)
        assert result.file_name == "SS-INV-2025-001.pdf"
        assert result.file_size == len(b"%PDF-1.4 invoice")
        assert result.document_id == 1

    async def test_missing_invoice(self, mock_renderer):
        store = AsyncMock()
        store.get_invoice.return_value = None
        use_case = GenerateInvoicePdfUseCase(invoice_store=store, renderer=mock_renderer)

        with pytest.raises(InvoiceNotFoundError):
            await use_case.execute(404)
        mock_renderer.render_invoice.assert_not_called()


class TestGenerateQuotationPdf:
    async def test_renders_quotation(self, mock_renderer):
        quotation = Quotation(id=2, quotation_number="QUO-2025-002", client_name="Sharma")
        store = AsyncMock()
        store.get_quotation.return_value = quotation
        use_case = GenerateQuotationPdfUseCase(quotation_store=store, renderer=mock_renderer)

        result = await use_case.execute(2)

        assert result.pdf_bytes.startswith(b"%PDF")
        assert result.file_name == "QUO-2025-002.pdf"

    async def test_missing_quotation(self, mock_renderer):
        store = AsyncMock()
        store.get_quotation.return_value = None
        use_case = GenerateQuotationPdfUseCase(quotation_store=store, renderer=mock_renderer)

        with pytest.raises(QuotationNotFoundError):
            await use_case.execute(9)
