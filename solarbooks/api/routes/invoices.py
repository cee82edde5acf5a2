"""GST invoice endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from solarbooks.api.dependencies import (
    get_create_invoice_use_case,
    get_invoice_doc_store,
    get_invoice_pdf_use_case,
    get_mark_overdue_use_case,
    get_record_payment_use_case,
    get_update_invoice_status_use_case,
)
from solarbooks.application.dto.mappers import invoice_to_response, payment_to_response
from solarbooks.application.dto.requests import (
    CreateInvoiceRequest,
    RecordPaymentRequest,
    UpdateInvoiceStatusRequest,
)
from solarbooks.application.dto.responses import (
    ErrorResponse,
    InvoiceListResponse,
    InvoicePaymentResponse,
    InvoiceResponse,
    OverdueSweepResponse,
    RecordPaymentResponse,
)
from solarbooks.application.use_cases.create_invoice import CreateInvoiceUseCase
from solarbooks.application.use_cases.generate_document_pdf import GenerateInvoicePdfUseCase
from solarbooks.application.use_cases.invoice_lifecycle import (
    MarkOverdueInvoicesUseCase,
    RecordInvoicePaymentUseCase,
    UpdateInvoiceStatusUseCase,
)
from solarbooks.core.entities.invoice import InvoiceStatus, InvoiceType
from solarbooks.core.exceptions import InvoiceNotFoundError
from solarbooks.infrastructure.storage.sqlite import SQLiteInvoiceStore

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_invoice(
    request: CreateInvoiceRequest,
    use_case: CreateInvoiceUseCase = Depends(get_create_invoice_use_case),
) -> InvoiceResponse:
    """Create a numbered GST invoice with computed lines and totals."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    invoice_status: InvoiceStatus | None = Query(default=None, alias="status"),
    invoice_type: InvoiceType | None = None,
    project_id: int | None = None,
    customer: str | None = None,
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    store: SQLiteInvoiceStore = Depends(get_invoice_doc_store),
) -> InvoiceListResponse:
    invoices = await store.list_invoices(
        status=invoice_status,
        invoice_type=invoice_type,
        project_id=project_id,
        customer=customer,
        limit=limit,
        offset=offset,
    )
    return InvoiceListResponse(
        invoices=[invoice_to_response(i) for i in invoices],
        total=offset + len(invoices),
        limit=limit,
        offset=offset,
        has_more=len(invoices) == limit,
    )


@router.post("/mark-overdue", response_model=OverdueSweepResponse)
async def mark_overdue(
    today: date | None = None,
    use_case: MarkOverdueInvoicesUseCase = Depends(get_mark_overdue_use_case),
) -> OverdueSweepResponse:
    """Move open invoices past their due date to Overdue."""
    result = await use_case.execute(today)
    return use_case.to_response(result)


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_invoice(
    invoice_id: int,
    store: SQLiteInvoiceStore = Depends(get_invoice_doc_store),
) -> InvoiceResponse:
    invoice = await store.get_invoice(invoice_id)
    if invoice is None:
        raise InvoiceNotFoundError(invoice_id)
    return invoice_to_response(invoice)


@router.post(
    "/{invoice_id}/payments",
    response_model=RecordPaymentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def record_payment(
    invoice_id: int,
    request: RecordPaymentRequest,
    use_case: RecordInvoicePaymentUseCase = Depends(get_record_payment_use_case),
) -> RecordPaymentResponse:
    result = await use_case.execute(invoice_id, request)
    return use_case.to_response(result)


@router.get(
    "/{invoice_id}/payments",
    response_model=list[InvoicePaymentResponse],
    responses={404: {"model": ErrorResponse}},
)
async def list_payments(
    invoice_id: int,
    store: SQLiteInvoiceStore = Depends(get_invoice_doc_store),
) -> list[InvoicePaymentResponse]:
    if await store.get_invoice(invoice_id) is None:
        raise InvoiceNotFoundError(invoice_id)
    return [payment_to_response(p) for p in await store.list_payments(invoice_id)]


@router.patch(
    "/{invoice_id}/status",
    response_model=InvoiceResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_status(
    invoice_id: int,
    request: UpdateInvoiceStatusRequest,
    use_case: UpdateInvoiceStatusUseCase = Depends(get_update_invoice_status_use_case),
) -> InvoiceResponse:
    invoice = await use_case.execute(invoice_id, request.status)
    return invoice_to_response(invoice)


@router.get(
    "/{invoice_id}/pdf",
    responses={
        200: {"content": {"application/pdf": {}}},
        404: {"model": ErrorResponse},
    },
)
async def download_pdf(
    invoice_id: int,
    use_case: GenerateInvoicePdfUseCase = Depends(get_invoice_pdf_use_case),
) -> Response:
    """Render the invoice as a PDF attachment."""
    result = await use_case.execute(invoice_id)
    return Response(
        content=result.pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{result.file_name}"'},
    )
