"""Tests for the GST invoice and quotation PDF renderer."""

import zlib
from datetime import date
from decimal import Decimal

import pytest

from solarbooks.config.settings import CompanySettings, PdfSettings
from solarbooks.core.entities.invoice import Invoice, InvoiceStatus
from solarbooks.core.entities.quotation import Quotation
from solarbooks.core.entities.tax import LineItem
from solarbooks.core.services.gst_calculator import calculate_document
from solarbooks.core.services.payment_schedule import build_schedule
from solarbooks.infrastructure.pdf.document_pdf_renderer import (
    Fpdf2DocumentRenderer,
    _latin1,
)

COMPANY_GSTIN = "29ABCDE1234F1Z5"


def _extract_pdf_text(pdf_bytes: bytes) -> str:
    """Decompress FlateDecode streams in *pdf_bytes* and return all text."""
    texts = [pdf_bytes.decode("latin-1")]
    start_marker = b"stream\n"
    end_marker = b"\nendstream"
    idx = 0
    while True:
        s = pdf_bytes.find(start_marker, idx)
        if s == -1:
            break
        s += len(start_marker)
        e = pdf_bytes.find(end_marker, s)
        if e == -1:
            break
        try:
            texts.append(zlib.decompress(pdf_bytes[s:e]).decode("latin-1", errors="replace"))
        except zlib.error:
            pass
        idx = e + len(end_marker)
    return "\n".join(texts)


def _document_lines(place: str):
    lines = [
        LineItem(
            item_name="Mono PERC 540W Panel",
            hsn_code="85414011",
            quantity=Decimal("10"),
            unit_price=Decimal("100"),
            discount_percent=Decimal("10"),
        ),
        LineItem(
            item_name="Mono PERC 540W Panel",
            hsn_code="85414011",
            quantity=Decimal("10"),
            unit_price=Decimal("100"),
            discount_percent=Decimal("10"),
        ),
    ]
    return calculate_document(lines, COMPANY_GSTIN, place)


@pytest.fixture
def renderer() -> Fpdf2DocumentRenderer:
    return Fpdf2DocumentRenderer(
        pdf_settings=PdfSettings(footer_text="Test Footer", bank_details="HDFC Bank A/c 1234"),
        company=CompanySettings(
            name="Shine Solar Solutions",
            gstin=COMPANY_GSTIN,
            address="12 MG Road, Bengaluru",
            phone="+91 80 1234 5678",
        ),
    )


@pytest.fixture
def invoice() -> Invoice:
    items, totals = _document_lines("Karnataka")
    return Invoice(
        id=1,
        invoice_number="SS/INV/2025/001",
        status=InvoiceStatus.GENERATED,
        customer_name="Sunrise Apartments",
        customer_gstin="29AAACS9999K1Z2",
        billing_address="Whitefield, Bengaluru",
        place_of_supply="Karnataka",
        gst_type=totals.gst_type,
        invoice_date=date(2025, 3, 10),
        due_date=date(2025, 3, 25),
        payment_terms="Net 15 days",
        items=items,
        totals=totals,
    )


@pytest.fixture
def quotation() -> Quotation:
    items, totals = _document_lines("Maharashtra")
    return Quotation(
        id=1,
        quotation_number="QUO-2025-001",
        client_name="R. Sharma",
        site_location="Pune",
        place_of_supply="Maharashtra",
        gst_type=totals.gst_type,
        system_size_kw=3.0,
        quotation_date=date(2025, 6, 1),
        validity_date=date(2025, 7, 1),
        items=items,
        totals=totals,
        payment_schedule=build_schedule(totals.grand_total, preset="40-50-10"),
        terms_and_conditions="Prices valid for 30 days.",
    )


class TestInvoicePdf:
    def test_returns_pdf(self, renderer, invoice):
        result = renderer.render_invoice(invoice)
        assert isinstance(result, bytes)
        assert result.startswith(b"%PDF")

    def test_contents(self, renderer, invoice):
        text = _extract_pdf_text(renderer.render_invoice(invoice))

        assert "TAX INVOICE" in text
        assert "SS/INV/2025/001" in text
        assert "Sunrise Apartments" in text
        assert "CGST" in text
        assert "2,124.00" in text
        assert "Rupees Only" in text
        assert "Test Footer" in text
        assert "HDFC Bank" in text
        assert "Page 1 of 1" in text

    def test_balance_shown_after_payment(self, renderer, invoice):
        invoice.amount_paid = Decimal("1000")
        text = _extract_pdf_text(renderer.render_invoice(invoice))

        assert "Balance Due" in text
        assert "1,124.00" in text


class TestQuotationPdf:
    def test_returns_pdf(self, renderer, quotation):
        assert renderer.render_quotation(quotation).startswith(b"%PDF")

    def test_inter_state_with_schedule(self, renderer, quotation):
        text = _extract_pdf_text(renderer.render_quotation(quotation))

        assert "QUOTATION" in text
        assert "QUO-2025-001" in text
        assert "IGST" in text
        assert "Payment Schedule" in text
        assert "Installation" in text
        assert "1,062" in text
        assert "Valid Until" in text

    def test_without_schedule(self, renderer, quotation):
        quotation.payment_schedule = None
        text = _extract_pdf_text(renderer.render_quotation(quotation))
        assert "Payment Schedule" not in text


def test_latin1_replaces_rupee_sign():
    assert _latin1("₹500") == "Rs. 500"
    assert _latin1(None) == ""
