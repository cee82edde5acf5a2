"""GST calculation endpoints. Nothing here touches storage."""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query

from solarbooks.api.dependencies import get_calculate_totals_use_case
from solarbooks.application.dto.requests import CalculateTotalsRequest, InclusivePriceRequest
from solarbooks.application.dto.responses import (
    AmountInWordsResponse,
    InclusivePriceResponse,
    StateCodeResponse,
    TaxCalculationResponse,
    TaxTypeResponse,
)
from solarbooks.application.use_cases.calculate_totals import CalculateTotalsUseCase
from solarbooks.core.services.gst_calculator import STATE_CODES, base_from_inclusive
from solarbooks.core.services.indian_currency import MAX_AMOUNT, amount_in_words, format_inr

router = APIRouter(prefix="/api/tax", tags=["tax"])


@router.post("/calculate", response_model=TaxCalculationResponse)
async def calculate_totals(
    request: CalculateTotalsRequest,
    use_case: CalculateTotalsUseCase = Depends(get_calculate_totals_use_case),
) -> TaxCalculationResponse:
    """
    Recalculate lines and document totals.

    Accepts half-typed form input: blank or non-numeric values count as
    zero and negative values are clamped.
    """
    result = use_case.execute(request)
    return use_case.to_response(result)


@router.get("/resolve", response_model=TaxTypeResponse)
async def resolve_tax_type(
    place_of_supply: str = Query(..., examples=["Karnataka"]),
    company_gstin: str | None = None,
    use_case: CalculateTotalsUseCase = Depends(get_calculate_totals_use_case),
) -> TaxTypeResponse:
    """Intra-state (CGST + SGST) or inter-state (IGST) for a place of supply."""
    return use_case.resolve(place_of_supply, company_gstin)


@router.get("/amount-in-words", response_model=AmountInWordsResponse)
async def words(
    amount: Decimal = Query(..., gt=-MAX_AMOUNT, lt=MAX_AMOUNT),
) -> AmountInWordsResponse:
    return AmountInWordsResponse(
        amount=float(amount),
        words=amount_in_words(amount),
        formatted=format_inr(amount),
    )


@router.post("/inclusive", response_model=InclusivePriceResponse)
async def split_inclusive_price(request: InclusivePriceRequest) -> InclusivePriceResponse:
    """Split a GST-inclusive amount into base and tax."""
    base, gst = base_from_inclusive(request.amount, request.gst_rate)
    return InclusivePriceResponse(
        amount=float(request.amount),
        gst_rate=float(request.gst_rate),
        base_amount=float(base),
        gst_amount=float(gst),
    )


@router.get("/states", response_model=list[StateCodeResponse])
async def list_states() -> list[StateCodeResponse]:
    return [StateCodeResponse(state=name, code=code) for name, code in STATE_CODES.items()]
