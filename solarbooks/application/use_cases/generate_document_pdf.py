"""
Generate Document PDF Use Cases.

Render a stored invoice or quotation to PDF bytes.
"""

import re
from dataclasses import dataclass

from solarbooks.config import get_logger
from solarbooks.core.exceptions import InvoiceNotFoundError, QuotationNotFoundError
from solarbooks.core.interfaces.invoice_store import IInvoiceStore
from solarbooks.core.interfaces.quotation_store import IQuotationStore
from solarbooks.infrastructure.pdf.document_pdf_renderer import (
    Fpdf2DocumentRenderer,
    IDocumentPdfRenderer,
)

logger = get_logger(__name__)


def pdf_file_name(document_number: str) -> str:
    """SS/INV/2025/001 -> SS-INV-2025-001.pdf"""
    return re.sub(r"[^A-Za-z0-9_-]+", "-", document_number).strip("-") + ".pdf"


@dataclass
class DocumentPdfResult:
    """Result of document PDF generation."""

    pdf_bytes: bytes
    document_id: int
    file_name: str
    file_size: int


class GenerateInvoicePdfUseCase:
    """
    Use case for generating GST invoice PDFs.

    Flow:
    1. Load invoice from store
    2. Render PDF via the document renderer
    3. Return PDF bytes and metadata
    """

    def __init__(
        self,
        invoice_store: IInvoiceStore | None = None,
        renderer: IDocumentPdfRenderer | None = None,
    ):
        self._invoice_store = invoice_store
        self._renderer = renderer

    async def _get_invoice_store(self) -> IInvoiceStore:
        if self._invoice_store is None:
            from solarbooks.infrastructure.storage.sqlite import get_invoice_store

            self._invoice_store = await get_invoice_store()
        return self._invoice_store

    async def execute(self, invoice_id: int) -> DocumentPdfResult:
        """
        Raises:
            InvoiceNotFoundError: If the invoice does not exist.
        """
        logger.info("invoice_pdf_started", invoice_id=invoice_id)

        store = await self._get_invoice_store()
        invoice = await store.get_invoice(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)

        renderer = self._renderer or Fpdf2DocumentRenderer()
        pdf_bytes = renderer.render_invoice(invoice)

        logger.info(
            "invoice_pdf_complete",
            invoice_number=invoice.invoice_number,
            file_size=len(pdf_bytes),
        )
        return DocumentPdfResult(
            pdf_bytes=pdf_bytes,
            document_id=invoice_id,
            file_name=pdf_file_name(invoice.invoice_number),
            file_size=len(pdf_bytes),
        )


class GenerateQuotationPdfUseCase:
    """Use case for generating quotation PDFs with payment terms."""

    def __init__(
        self,
        quotation_store: IQuotationStore | None = None,
        renderer: IDocumentPdfRenderer | None = None,
    ):
        self._quotation_store = quotation_store
        self._renderer = renderer

    async def _get_quotation_store(self) -> IQuotationStore:
        if self._quotation_store is None:
            from solarbooks.infrastructure.storage.sqlite import get_quotation_store

            self._quotation_store = await get_quotation_store()
        return self._quotation_store

    async def execute(self, quotation_id: int) -> DocumentPdfResult:
        logger.info("quotation_pdf_started", quotation_id=quotation_id)

        store = await self._get_quotation_store()
        quotation = await store.get_quotation(quotation_id)
        if quotation is None:
            raise QuotationNotFoundError(quotation_id)

        renderer = self._renderer or Fpdf2DocumentRenderer()
        pdf_bytes = renderer.render_quotation(quotation)

        logger.info(
            "quotation_pdf_complete",
            quotation_number=quotation.quotation_number,
            file_size=len(pdf_bytes),
        )
        return DocumentPdfResult(
            pdf_bytes=pdf_bytes,
            document_id=quotation_id,
            file_name=pdf_file_name(quotation.quotation_number),
            file_size=len(pdf_bytes),
        )
