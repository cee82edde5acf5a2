"""Entity <-> DTO conversions shared by use cases and routes."""

from decimal import Decimal

from solarbooks.application.dto.requests import (
    LineItemRequest,
    PaymentStageRequest,
    TaxLineRequest,
)
from solarbooks.application.dto.responses import (
    DocumentTotalsResponse,
    InvoicePaymentResponse,
    InvoiceResponse,
    ItemResponse,
    LineItemResponse,
    PaymentScheduleResponse,
    PaymentScheduleStageResponse,
    QuotationResponse,
    StockLedgerEntryResponse,
)
from solarbooks.core.entities.inventory import Item, StockLedgerEntry
from solarbooks.core.entities.invoice import Invoice, InvoicePayment
from solarbooks.core.entities.payment_schedule import (
    PaymentSchedule,
    PaymentScheduleStage,
)
from solarbooks.core.entities.quotation import Quotation
from solarbooks.core.entities.tax import DiscountMode, DocumentTotals, LineItem
from solarbooks.core.services.gst_calculator import to_decimal
from solarbooks.core.services.payment_schedule import summarize


def _f(value: Decimal | None) -> float | None:
    return None if value is None else float(value)


# --- Requests -> entities ---


def line_from_request(req: LineItemRequest) -> LineItem:
    """Build an uncomputed line; the discount mode is inferred when omitted."""
    mode = req.discount_mode
    if mode is None:
        mode = (
            DiscountMode.AMOUNT
            if req.discount_amount > 0 and req.discount_percent == 0
            else DiscountMode.PERCENT
        )
    return LineItem(
        item_id=req.item_id,
        item_name=req.item_name,
        description=req.description,
        hsn_code=req.hsn_code,
        unit=req.unit,
        quantity=req.quantity,
        unit_price=req.unit_price,
        discount_mode=mode,
        discount_percent=req.discount_percent,
        discount_amount=req.discount_amount,
        gst_rate=req.gst_rate,
    )


def line_from_raw(req: TaxLineRequest) -> LineItem:
    """Build a line from raw form input. Unreadable numbers become 0."""
    return LineItem(
        item_name=req.item_name,
        hsn_code=req.hsn_code,
        unit=req.unit,
        quantity=to_decimal(req.quantity),
        unit_price=to_decimal(req.unit_price),
        discount_mode=req.discount_mode,
        discount_percent=to_decimal(req.discount_percent),
        discount_amount=to_decimal(req.discount_amount),
        gst_rate=to_decimal(req.gst_rate),
    )


def stage_from_request(req: PaymentStageRequest) -> PaymentScheduleStage:
    return PaymentScheduleStage(
        stage=req.stage,
        percentage=req.percentage,
        due_date=req.due_date,
    )


# --- Entities -> responses ---


def line_to_response(line: LineItem) -> LineItemResponse:
    return LineItemResponse(
        id=line.id,
        line_number=line.line_number,
        item_id=line.item_id,
        item_name=line.item_name,
        description=line.description,
        hsn_code=line.hsn_code,
        unit=line.unit,
        quantity=float(line.quantity),
        unit_price=float(line.unit_price),
        discount_mode=line.discount_mode.value,
        discount_percent=float(line.discount_percent),
        discount_amount=float(line.discount_amount),
        gst_rate=float(line.gst_rate),
        gross=float(line.gross),
        taxable_amount=float(line.taxable_amount),
        cgst=float(line.cgst),
        sgst=float(line.sgst),
        igst=float(line.igst),
        gst_amount=float(line.gst_amount),
        total_amount=float(line.total_amount),
    )


def totals_to_response(totals: DocumentTotals) -> DocumentTotalsResponse:
    return DocumentTotalsResponse(
        subtotal=float(totals.subtotal),
        total_discount=float(totals.total_discount),
        taxable_amount=float(totals.taxable_amount),
        cgst=float(totals.cgst),
        sgst=float(totals.sgst),
        igst=float(totals.igst),
        total_gst=float(totals.total_gst),
        tcs_rate=float(totals.tcs_rate),
        tcs_amount=float(totals.tcs_amount),
        round_off=float(totals.round_off),
        grand_total=float(totals.grand_total),
        amount_in_words=totals.amount_in_words,
        gst_type=totals.gst_type.value,
        line_count=totals.line_count,
    )


def item_to_response(item: Item) -> ItemResponse:
    return ItemResponse(
        id=item.id,  # type: ignore[arg-type]
        item_code=item.item_code,
        name=item.name,
        category=item.category.value,
        brand=item.brand,
        model=item.model,
        specification=item.specification,
        unit=item.unit,
        hsn=item.hsn,
        gst_rate=float(item.gst_rate),
        purchase_price=_f(item.purchase_price),
        selling_price=_f(item.selling_price),
        current_stock=float(item.current_stock),
        reorder_level=_f(item.reorder_level),
        stock_value=float(item.stock_value),
        is_low_stock=item.is_low_stock,
        status=item.status.value,
        remarks=item.remarks,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


def entry_to_response(entry: StockLedgerEntry) -> StockLedgerEntryResponse:
    return StockLedgerEntryResponse(
        id=entry.id,  # type: ignore[arg-type]
        item_id=entry.item_id,
        transaction_type=entry.transaction_type.value,
        direction=entry.direction.value,
        quantity=float(entry.quantity),
        signed_quantity=float(entry.signed_quantity),
        unit=entry.unit,
        rate=_f(entry.rate),
        amount=_f(entry.amount),
        balance_quantity=float(entry.balance_quantity),
        transaction_date=entry.transaction_date,
        reference_number=entry.reference_number,
        project_id=entry.project_id,
        supplier_id=entry.supplier_id,
        remarks=entry.remarks,
        created_at=entry.created_at,
    )


def schedule_to_response(
    schedule: PaymentSchedule, project_value: Decimal
) -> PaymentScheduleResponse:
    summary = summarize(schedule, project_value)
    return PaymentScheduleResponse(
        terms_name=schedule.terms_name,
        project_value=float(summary.project_value),
        stages=[
            PaymentScheduleStageResponse(
                stage=s.stage.value,
                percentage=float(s.percentage),
                amount=float(s.amount),
                due_date=s.due_date,
                status=s.status.value,
            )
            for s in schedule.stages
        ],
        total_percentage=float(summary.total_percentage),
        total_amount=float(summary.total_amount),
        is_balanced=summary.is_balanced,
        unallocated_percentage=float(summary.unallocated_percentage),
    )


def payment_to_response(payment: InvoicePayment) -> InvoicePaymentResponse:
    return InvoicePaymentResponse(
        id=payment.id,  # type: ignore[arg-type]
        invoice_id=payment.invoice_id,
        amount=float(payment.amount),
        payment_date=payment.payment_date,
        payment_mode=payment.payment_mode.value,
        reference_number=payment.reference_number,
        remarks=payment.remarks,
        created_at=payment.created_at,
    )


def invoice_to_response(invoice: Invoice) -> InvoiceResponse:
    return InvoiceResponse(
        id=invoice.id,  # type: ignore[arg-type]
        invoice_number=invoice.invoice_number,
        invoice_type=invoice.invoice_type.value,
        status=invoice.status.value,
        project_id=invoice.project_id,
        quotation_id=invoice.quotation_id,
        customer_name=invoice.customer_name,
        customer_gstin=invoice.customer_gstin,
        billing_address=invoice.billing_address,
        place_of_supply=invoice.place_of_supply,
        company_gstin=invoice.company_gstin,
        reverse_charge=invoice.reverse_charge,
        gst_type=invoice.gst_type.value,
        invoice_date=invoice.invoice_date,
        due_date=invoice.due_date,
        payment_terms=invoice.payment_terms,
        items=[line_to_response(line) for line in invoice.items],
        totals=totals_to_response(invoice.totals),
        amount_paid=float(invoice.amount_paid),
        balance_amount=float(invoice.balance_amount),
        notes=invoice.notes,
        created_at=invoice.created_at,
        updated_at=invoice.updated_at,
    )


def quotation_to_response(quotation: Quotation) -> QuotationResponse:
    schedule = None
    if quotation.payment_schedule is not None:
        schedule = schedule_to_response(
            quotation.payment_schedule, quotation.totals.grand_total
        )
    return QuotationResponse(
        id=quotation.id,  # type: ignore[arg-type]
        quotation_number=quotation.quotation_number,
        status=quotation.status.value,
        lead_id=quotation.lead_id,
        client_name=quotation.client_name,
        site_location=quotation.site_location,
        place_of_supply=quotation.place_of_supply,
        company_gstin=quotation.company_gstin,
        gst_type=quotation.gst_type.value,
        system_size_kw=quotation.system_size_kw,
        quotation_date=quotation.quotation_date,
        validity_date=quotation.validity_date,
        items=[line_to_response(line) for line in quotation.items],
        totals=totals_to_response(quotation.totals),
        payment_schedule=schedule,
        terms_and_conditions=quotation.terms_and_conditions,
        sent_date=quotation.sent_date,
        accepted_date=quotation.accepted_date,
        rejection_reason=quotation.rejection_reason,
        created_at=quotation.created_at,
        updated_at=quotation.updated_at,
    )
