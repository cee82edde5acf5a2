"""Quotation endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from solarbooks.api.dependencies import (
    get_create_quotation_use_case,
    get_expire_quotations_use_case,
    get_quotation_pdf_use_case,
    get_quote_store,
    get_update_quotation_status_use_case,
)
from solarbooks.application.dto.mappers import quotation_to_response
from solarbooks.application.dto.requests import (
    CreateQuotationRequest,
    UpdateQuotationStatusRequest,
)
from solarbooks.application.dto.responses import (
    ErrorResponse,
    ExpirySweepResponse,
    QuotationListResponse,
    QuotationResponse,
)
from solarbooks.application.use_cases.create_quotation import CreateQuotationUseCase
from solarbooks.application.use_cases.generate_document_pdf import (
    GenerateQuotationPdfUseCase,
)
from solarbooks.application.use_cases.quotation_lifecycle import (
    ExpireQuotationsUseCase,
    UpdateQuotationStatusUseCase,
)
from solarbooks.core.entities.quotation import QuotationStatus
from solarbooks.core.exceptions import QuotationNotFoundError
from solarbooks.infrastructure.storage.sqlite import SQLiteQuotationStore

router = APIRouter(prefix="/api/quotations", tags=["quotations"])


@router.post(
    "",
    response_model=QuotationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_quotation(
    request: CreateQuotationRequest,
    use_case: CreateQuotationUseCase = Depends(get_create_quotation_use_case),
) -> QuotationResponse:
    """Price a system; payment terms are split over the grand total."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=QuotationListResponse)
async def list_quotations(
    quotation_status: QuotationStatus | None = Query(default=None, alias="status"),
    lead_id: int | None = None,
    client: str | None = None,
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    store: SQLiteQuotationStore = Depends(get_quote_store),
) -> QuotationListResponse:
    quotations = await store.list_quotations(
        status=quotation_status, lead_id=lead_id, client=client, limit=limit, offset=offset
    )
    return QuotationListResponse(
        quotations=[quotation_to_response(q) for q in quotations],
        total=offset + len(quotations),
        limit=limit,
        offset=offset,
        has_more=len(quotations) == limit,
    )


@router.post("/expire", response_model=ExpirySweepResponse)
async def expire_quotations(
    today: date | None = None,
    use_case: ExpireQuotationsUseCase = Depends(get_expire_quotations_use_case),
) -> ExpirySweepResponse:
    """Mark Draft and Sent quotations past validity as Expired."""
    result = await use_case.execute(today)
    return use_case.to_response(result)


@router.get(
    "/{quotation_id}",
    response_model=QuotationResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_quotation(
    quotation_id: int,
    store: SQLiteQuotationStore = Depends(get_quote_store),
) -> QuotationResponse:
    quotation = await store.get_quotation(quotation_id)
    if quotation is None:
        raise QuotationNotFoundError(quotation_id)
    return quotation_to_response(quotation)


@router.patch(
    "/{quotation_id}/status",
    response_model=QuotationResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_status(
    quotation_id: int,
    request: UpdateQuotationStatusRequest,
    use_case: UpdateQuotationStatusUseCase = Depends(get_update_quotation_status_use_case),
) -> QuotationResponse:
    quotation = await use_case.execute(quotation_id, request)
    return quotation_to_response(quotation)


@router.get(
    "/{quotation_id}/pdf",
    responses={
        200: {"content": {"application/pdf": {}}},
        404: {"model": ErrorResponse},
    },
)
async def download_pdf(
    quotation_id: int,
    use_case: GenerateQuotationPdfUseCase = Depends(get_quotation_pdf_use_case),
) -> Response:
    result = await use_case.execute(quotation_id)
    return Response(
        content=result.pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{result.file_name}"'},
    )
