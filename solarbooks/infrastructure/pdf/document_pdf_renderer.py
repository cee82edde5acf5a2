"""
GST invoice and quotation PDF renderer using fpdf2.

Both documents share one layout: company header, party and document
details, a line table with per-line tax, a totals block (CGST/SGST or
IGST, TCS, round-off, grand total, amount in words) and a page-numbered
footer. Only core fonts are used, so the rupee sign is written "Rs.".
"""

import os
from abc import ABC, abstractmethod
from datetime import datetime

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from solarbooks.config.settings import CompanySettings, PdfSettings, get_settings
from solarbooks.core.entities.invoice import Invoice
from solarbooks.core.entities.payment_schedule import PaymentSchedule
from solarbooks.core.entities.quotation import Quotation
from solarbooks.core.entities.tax import DocumentTotals, GSTType, LineItem
from solarbooks.core.services.gst_calculator import state_code_for
from solarbooks.core.services.indian_currency import format_indian_number, format_inr

RUPEE = "Rs. "


def _latin1(text: str | None) -> str:
    """Core fonts are latin-1 only."""
    if not text:
        return ""
    return text.replace("₹", RUPEE).encode("latin-1", "replace").decode("latin-1")


def _money(value) -> str:
    return format_indian_number(value, 2)


# ---------------------------------------------------------------------------
# Interface
# ---------------------------------------------------------------------------


class IDocumentPdfRenderer(ABC):
    """Interface for GST document PDF rendering implementations."""

    @abstractmethod
    def render_invoice(self, invoice: Invoice) -> bytes:
        ...

    @abstractmethod
    def render_quotation(self, quotation: Quotation) -> bytes:
        ...


# ---------------------------------------------------------------------------
# FPDF subclass with page-number footer
# ---------------------------------------------------------------------------


class _DocumentPdf(FPDF):
    """FPDF subclass that renders a footer on every page."""

    def __init__(self, pdf_settings: PdfSettings) -> None:
        super().__init__()
        self._pdf_settings = pdf_settings
        self._generation_date = datetime.utcnow().strftime("%d-%m-%Y %H:%M UTC")

    def footer(self) -> None:
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.cell(0, 5, _latin1(self._pdf_settings.footer_text), align="L")
        self.set_x(-60)
        self.cell(
            0,
            5,
            f"Page {self.page_no()} of {{nb}} | {self._generation_date}",
            align="R",
        )


# ---------------------------------------------------------------------------
# Concrete renderer
# ---------------------------------------------------------------------------


class Fpdf2DocumentRenderer(IDocumentPdfRenderer):
    """Renders invoices and quotations with fpdf2."""

    # #, Item, HSN, Qty, Rate, Disc, Taxable, GST%, Tax, Total
    COL_WIDTHS = (8, 52, 18, 14, 20, 16, 20, 12, 14, 16)
    HEADERS = ("#", "Item", "HSN", "Qty", "Rate", "Disc", "Taxable", "GST%", "Tax", "Total")

    def __init__(
        self,
        pdf_settings: PdfSettings | None = None,
        company: CompanySettings | None = None,
    ) -> None:
        settings = get_settings() if pdf_settings is None or company is None else None
        self._settings = pdf_settings or settings.pdf
        self._company = company or settings.company

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render_invoice(self, invoice: Invoice) -> bytes:
        pdf = self._new_pdf()
        title = invoice.invoice_type.value.upper()
        self._render_header(pdf, title)

        details = [
            ("Invoice No", invoice.invoice_number),
            ("Invoice Date", invoice.invoice_date.strftime("%d-%m-%Y")),
        ]
        if invoice.due_date:
            details.append(("Due Date", invoice.due_date.strftime("%d-%m-%Y")))
        details.append(("Place of Supply", self._place(invoice.place_of_supply)))
        details.append(("Reverse Charge", "Yes" if invoice.reverse_charge else "No"))

        party = [invoice.customer_name]
        if invoice.billing_address:
            party.append(invoice.billing_address)
        if invoice.customer_gstin:
            party.append(f"GSTIN: {invoice.customer_gstin}")

        self._render_parties(pdf, "Bill To", party, details)
        self._render_items_table(pdf, invoice.items, invoice.totals.gst_type)
        self._render_totals(pdf, invoice.totals)
        if invoice.amount_paid:
            self._render_row(pdf, "Amount Paid", _money(invoice.amount_paid))
            self._render_row(pdf, "Balance Due", _money(invoice.balance_amount), bold=True)
        self._render_words(pdf, invoice.totals)
        self._render_notes(pdf, "Payment Terms", invoice.payment_terms)
        self._render_notes(pdf, "Notes", invoice.notes)
        self._render_bank_details(pdf)
        self._render_signature(pdf)
        return bytes(pdf.output())

    def render_quotation(self, quotation: Quotation) -> bytes:
        pdf = self._new_pdf()
        self._render_header(pdf, "QUOTATION")

        details = [
            ("Quotation No", quotation.quotation_number),
            ("Date", quotation.quotation_date.strftime("%d-%m-%Y")),
        ]
        if quotation.validity_date:
            details.append(("Valid Until", quotation.validity_date.strftime("%d-%m-%Y")))
        if quotation.system_size_kw:
            details.append(("System Size", f"{quotation.system_size_kw:g} kW"))
        details.append(("Place of Supply", self._place(quotation.place_of_supply)))

        party = [quotation.client_name]
        if quotation.site_location:
            party.append(f"Site: {quotation.site_location}")

        self._render_parties(pdf, "Quotation For", party, details)
        self._render_items_table(pdf, quotation.items, quotation.totals.gst_type)
        self._render_totals(pdf, quotation.totals)
        self._render_words(pdf, quotation.totals)
        if quotation.payment_schedule:
            self._render_schedule(pdf, quotation.payment_schedule)
        self._render_notes(pdf, "Terms & Conditions", quotation.terms_and_conditions)
        self._render_signature(pdf)
        return bytes(pdf.output())

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _new_pdf(self) -> _DocumentPdf:
        pdf = _DocumentPdf(self._settings)
        pdf.alias_nb_pages()
        pdf.set_auto_page_break(auto=True, margin=20)
        pdf.add_page()
        return pdf

    @staticmethod
    def _place(state: str) -> str:
        code = state_code_for(state)
        return f"{state} ({code})" if code else state or "-"

    def _render_header(self, pdf: FPDF, title: str) -> None:
        logo_path = self._settings.logo_path
        text_x = 10
        if logo_path and os.path.isfile(logo_path):
            pdf.image(logo_path, x=10, y=10, w=35, h=18)
            text_x = 50

        pdf.set_xy(text_x, 10)
        pdf.set_font("Helvetica", "B", 14)
        pdf.cell(0, 7, _latin1(self._company.name), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        pdf.set_font("Helvetica", "", 8)
        for line in (
            self._company.address,
            f"GSTIN: {self._company.gstin}" if self._company.gstin else "",
            f"Tel: {self._company.phone}" if self._company.phone else "",
            f"Email: {self._company.email}" if self._company.email else "",
        ):
            if line:
                pdf.set_x(text_x)
                pdf.cell(0, 4, _latin1(line), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        if pdf.get_y() < 30:
            pdf.set_y(30)
        pdf.ln(2)
        pdf.set_font("Helvetica", "B", 16)
        pdf.cell(0, 10, title, align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        y = pdf.get_y()
        pdf.set_draw_color(100, 100, 100)
        pdf.line(10, y, 200, y)
        pdf.set_draw_color(0, 0, 0)
        pdf.ln(3)

    @staticmethod
    def _render_parties(
        pdf: FPDF,
        heading: str,
        party: list[str],
        details: list[tuple[str, str]],
    ) -> None:
        top = pdf.get_y()

        pdf.set_font("Helvetica", "B", 9)
        pdf.cell(95, 5, heading, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "", 9)
        for line in party:
            pdf.multi_cell(95, 4.5, _latin1(line), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        left_bottom = pdf.get_y()

        pdf.set_y(top)
        for label, value in details:
            pdf.set_x(110)
            pdf.set_font("Helvetica", "B", 9)
            pdf.cell(35, 5, f"{label}:")
            pdf.set_font("Helvetica", "", 9)
            pdf.cell(0, 5, _latin1(value), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        pdf.set_y(max(left_bottom, pdf.get_y()) + 4)

    def _render_items_table(
        self, pdf: FPDF, items: list[LineItem], gst_type: GSTType
    ) -> None:
        pdf.set_font("Helvetica", "B", 8)
        pdf.set_fill_color(70, 70, 70)
        pdf.set_text_color(255, 255, 255)
        headers = list(self.HEADERS)
        if gst_type == GSTType.INTER_STATE:
            headers[8] = "IGST"
        for width, header in zip(self.COL_WIDTHS, headers):
            pdf.cell(width, 7, header, border=1, fill=True, align="C")
        pdf.ln()
        pdf.set_text_color(0, 0, 0)

        pdf.set_font("Helvetica", "", 8)
        for idx, line in enumerate(items, 1):
            fill = idx % 2 == 0
            if fill:
                pdf.set_fill_color(240, 240, 240)
            cells = (
                (str(line.line_number), "C"),
                (_latin1(line.item_name)[:32], "L"),
                (line.hsn_code or "", "C"),
                (f"{line.quantity.normalize():f} {line.unit}"[:9], "R"),
                (_money(line.unit_price), "R"),
                (_money(line.discount_amount) if line.discount_amount else "-", "R"),
                (_money(line.taxable_amount), "R"),
                (f"{line.gst_rate.normalize():f}", "R"),
                (_money(line.gst_amount), "R"),
                (_money(line.total_amount), "R"),
            )
            for width, (text, align) in zip(self.COL_WIDTHS, cells):
                pdf.cell(width, 6, text, border=1, align=align, fill=fill)
            pdf.ln()
        pdf.ln(3)

    @staticmethod
    def _render_row(pdf: FPDF, label: str, value: str, bold: bool = False) -> None:
        pdf.set_font("Helvetica", "B" if bold else "", 10 if bold else 9)
        pdf.cell(140, 6, f"{label}:", align="R")
        pdf.cell(0, 6, value, align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    def _render_totals(self, pdf: FPDF, totals: DocumentTotals) -> None:
        self._render_row(pdf, "Subtotal", _money(totals.subtotal))
        if totals.total_discount:
            self._render_row(pdf, "Discount", f"-{_money(totals.total_discount)}")
        self._render_row(pdf, "Taxable Amount", _money(totals.taxable_amount))
        if totals.gst_type == GSTType.INTER_STATE:
            self._render_row(pdf, "IGST", _money(totals.igst))
        else:
            self._render_row(pdf, "CGST", _money(totals.cgst))
            self._render_row(pdf, "SGST", _money(totals.sgst))
        if totals.tcs_amount:
            self._render_row(
                pdf, f"TCS @ {totals.tcs_rate.normalize():f}%", _money(totals.tcs_amount)
            )
        if totals.round_off:
            self._render_row(pdf, "Round Off", _money(totals.round_off))
        self._render_row(
            pdf, "Grand Total", format_inr(totals.grand_total, symbol=RUPEE), bold=True
        )

    @staticmethod
    def _render_words(pdf: FPDF, totals: DocumentTotals) -> None:
        pdf.ln(2)
        pdf.set_font("Helvetica", "I", 9)
        pdf.multi_cell(
            0, 5, f"Amount in words: {totals.amount_in_words}",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        pdf.ln(2)

    @staticmethod
    def _render_schedule(pdf: FPDF, schedule: PaymentSchedule) -> None:
        pdf.set_font("Helvetica", "B", 10)
        heading = "Payment Schedule"
        if schedule.terms_name:
            heading += f" ({schedule.terms_name})"
        pdf.cell(0, 7, heading, new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        pdf.set_font("Helvetica", "", 9)
        for stage in schedule.stages:
            pdf.cell(60, 5, stage.stage.value)
            pdf.cell(25, 5, f"{stage.percentage.normalize():f}%", align="R")
            pdf.cell(40, 5, format_inr(stage.amount, 0, symbol=RUPEE), align="R")
            due = stage.due_date.strftime("%d-%m-%Y") if stage.due_date else ""
            pdf.cell(0, 5, due, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(2)

    @staticmethod
    def _render_notes(pdf: FPDF, heading: str, text: str | None) -> None:
        if not text:
            return
        pdf.set_font("Helvetica", "B", 9)
        pdf.cell(0, 5, heading, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "", 8)
        pdf.multi_cell(0, 4, _latin1(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(2)

    def _render_bank_details(self, pdf: FPDF) -> None:
        self._render_notes(pdf, "Bank Details", self._settings.bank_details)

    def _render_signature(self, pdf: FPDF) -> None:
        pdf.ln(6)
        pdf.set_font("Helvetica", "B", 9)
        pdf.cell(
            0, 5, _latin1(f"For {self._company.name}"), align="R",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        pdf.ln(10)
        pdf.set_font("Helvetica", "", 8)
        pdf.cell(0, 5, "Authorised Signatory", align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
