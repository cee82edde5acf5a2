"""Calculate Totals Use Case: live GST recalculation for a form."""

from dataclasses import dataclass

from solarbooks.application.dto.mappers import (
    line_from_raw,
    line_to_response,
    totals_to_response,
)
from solarbooks.application.dto.requests import CalculateTotalsRequest
from solarbooks.application.dto.responses import TaxCalculationResponse, TaxTypeResponse
from solarbooks.config import get_settings
from solarbooks.core.entities.tax import DocumentTotals, GSTType, LineItem
from solarbooks.core.services.gst_calculator import (
    calculate_document,
    resolve_interstate,
    state_code_for,
    state_code_from_gstin,
)


@dataclass
class CalculateTotalsResult:
    items: list[LineItem]
    totals: DocumentTotals
    is_interstate: bool


class CalculateTotalsUseCase:
    """
    Recompute lines and totals without saving anything.

    Accepts partially typed input; nothing here raises on bad numbers.
    """

    def __init__(self, company_gstin: str | None = None):
        self._company_gstin = company_gstin

    def _gstin(self, override: str | None) -> str:
        if override is not None:
            return override
        if self._company_gstin is not None:
            return self._company_gstin
        return get_settings().company.gstin

    def execute(self, request: CalculateTotalsRequest) -> CalculateTotalsResult:
        tcs_rate = request.tcs_rate
        if tcs_rate is None:
            tcs_rate = get_settings().billing.default_tcs_rate

        items, totals = calculate_document(
            [line_from_raw(line) for line in request.items],
            company_gstin=self._gstin(request.company_gstin),
            place_of_supply=request.place_of_supply,
            tcs_rate=tcs_rate,
        )
        return CalculateTotalsResult(
            items=items,
            totals=totals,
            is_interstate=totals.gst_type == GSTType.INTER_STATE,
        )

    def resolve(self, place_of_supply: str, company_gstin: str | None = None) -> TaxTypeResponse:
        gstin = self._gstin(company_gstin)
        is_interstate = resolve_interstate(gstin, place_of_supply)
        return TaxTypeResponse(
            company_gstin=gstin,
            company_state_code=state_code_from_gstin(gstin),
            place_of_supply=place_of_supply,
            supply_state_code=state_code_for(place_of_supply),
            is_interstate=is_interstate,
            gst_type=GSTType.from_interstate(is_interstate).value,
        )

    def to_response(self, result: CalculateTotalsResult) -> TaxCalculationResponse:
        return TaxCalculationResponse(
            items=[line_to_response(line) for line in result.items],
            totals=totals_to_response(result.totals),
            is_interstate=result.is_interstate,
        )
