"""Create Quotation Use Case: price a system and attach payment terms."""

from dataclasses import dataclass
from datetime import date, timedelta

from solarbooks.application.dto.mappers import (
    line_from_request,
    quotation_to_response,
    stage_from_request,
)
from solarbooks.application.dto.requests import CreateQuotationRequest
from solarbooks.application.dto.responses import QuotationResponse
from solarbooks.config import Settings, get_logger, get_settings
from solarbooks.core.entities.quotation import Quotation
from solarbooks.core.interfaces.quotation_store import IQuotationStore
from solarbooks.core.services.gst_calculator import calculate_document
from solarbooks.core.services.payment_schedule import build_schedule

logger = get_logger(__name__)


def quotation_number_prefix(prefix: str, year: int) -> str:
    return f"{prefix}-{year}-"


def format_quotation_number(prefix: str, year: int, sequence: int, digits: int = 3) -> str:
    """QUO-2025-001"""
    return f"{quotation_number_prefix(prefix, year)}{sequence:0{digits}d}"


@dataclass
class CreateQuotationResult:
    quotation: Quotation


class CreateQuotationUseCase:
    """
    Create a quotation.

    Lines and totals come from the GST engine. When payment terms or
    explicit stages are given, a payment schedule is derived from the
    grand total.
    """

    def __init__(
        self,
        quotation_store: IQuotationStore | None = None,
        settings: Settings | None = None,
    ):
        self._quotation_store = quotation_store
        self._settings = settings

    async def _get_quotation_store(self) -> IQuotationStore:
        if self._quotation_store is None:
            from solarbooks.infrastructure.storage.sqlite import get_quotation_store

            self._quotation_store = await get_quotation_store()
        return self._quotation_store

    async def execute(self, request: CreateQuotationRequest) -> CreateQuotationResult:
        settings = self._settings or get_settings()
        store = await self._get_quotation_store()

        quotation_date = request.quotation_date or date.today()
        validity_days = request.validity_days or settings.billing.quotation_validity_days
        tcs_rate = (
            request.tcs_rate
            if request.tcs_rate is not None
            else settings.billing.default_tcs_rate
        )
        company_gstin = settings.company.gstin

        items, totals = calculate_document(
            [line_from_request(line) for line in request.items],
            company_gstin=company_gstin,
            place_of_supply=request.place_of_supply,
            tcs_rate=tcs_rate,
        )

        schedule = None
        if request.payment_terms or request.payment_stages:
            schedule = build_schedule(
                totals.grand_total,
                preset=request.payment_terms,
                stages=[stage_from_request(s) for s in request.payment_stages or []],
            )

        prefix = settings.billing.quotation_prefix
        sequence = await store.next_sequence(
            quotation_number_prefix(prefix, quotation_date.year)
        )

        quotation = await store.create_quotation(
            Quotation(
                quotation_number=format_quotation_number(
                    prefix, quotation_date.year, sequence, settings.billing.number_digits
                ),
                lead_id=request.lead_id,
                client_name=request.client_name,
                site_location=request.site_location,
                place_of_supply=request.place_of_supply,
                company_gstin=company_gstin,
                gst_type=totals.gst_type,
                system_size_kw=request.system_size_kw,
                quotation_date=quotation_date,
                validity_date=quotation_date + timedelta(days=validity_days),
                items=items,
                totals=totals,
                payment_schedule=schedule,
                terms_and_conditions=request.terms_and_conditions,
            )
        )

        logger.info(
            "quotation_created",
            quotation_number=quotation.quotation_number,
            grand_total=str(totals.grand_total),
            payment_terms=schedule.terms_name if schedule else None,
        )
        return CreateQuotationResult(quotation=quotation)

    def to_response(self, result: CreateQuotationResult) -> QuotationResponse:
        return quotation_to_response(result.quotation)
