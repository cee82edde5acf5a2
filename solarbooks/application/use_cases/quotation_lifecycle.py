"""Quotation lifecycle use cases: status changes and expiry sweep."""

from dataclasses import dataclass
from datetime import date

from solarbooks.application.dto.requests import UpdateQuotationStatusRequest
from solarbooks.application.dto.responses import ExpirySweepResponse
from solarbooks.config import get_logger
from solarbooks.core.entities.quotation import (
    ALLOWED_TRANSITIONS,
    Quotation,
    QuotationStatus,
)
from solarbooks.core.exceptions import (
    InvalidStatusTransitionError,
    QuotationNotFoundError,
    ValidationError,
)
from solarbooks.core.interfaces.quotation_store import IQuotationStore

logger = get_logger(__name__)


class _QuotationUseCase:
    def __init__(self, quotation_store: IQuotationStore | None = None):
        self._quotation_store = quotation_store

    async def _get_quotation_store(self) -> IQuotationStore:
        if self._quotation_store is None:
            from solarbooks.infrastructure.storage.sqlite import get_quotation_store

            self._quotation_store = await get_quotation_store()
        return self._quotation_store


class UpdateQuotationStatusUseCase(_QuotationUseCase):
    """
    Move a quotation along Draft -> Sent -> Accepted / Rejected / Expired.

    Sending stamps sent_date, accepting stamps accepted_date, and a
    rejection requires a reason.
    """

    async def execute(
        self,
        quotation_id: int,
        request: UpdateQuotationStatusRequest,
        today: date | None = None,
    ) -> Quotation:
        today = today or date.today()
        store = await self._get_quotation_store()
        quotation = await store.get_quotation(quotation_id)
        if quotation is None:
            raise QuotationNotFoundError(quotation_id)

        new_status = request.status
        if new_status == quotation.status:
            return quotation
        if new_status not in ALLOWED_TRANSITIONS[quotation.status]:
            raise InvalidStatusTransitionError(
                "quotation", quotation.status.value, new_status.value
            )

        if new_status == QuotationStatus.SENT:
            quotation.sent_date = today
        elif new_status == QuotationStatus.ACCEPTED:
            if quotation.is_expired(today):
                raise InvalidStatusTransitionError(
                    "quotation", "Expired", new_status.value
                )
            quotation.accepted_date = today
        elif new_status == QuotationStatus.REJECTED:
            if not request.rejection_reason:
                raise ValidationError(
                    field="rejection_reason",
                    message="A reason is required to reject a quotation",
                )
            quotation.rejection_reason = request.rejection_reason

        previous = quotation.status
        quotation.status = new_status
        quotation = await store.update_quotation(quotation)
        logger.info(
            "quotation_status_changed",
            quotation_id=quotation_id,
            from_status=previous.value,
            to_status=new_status.value,
        )
        return quotation


@dataclass
class ExpirySweepResult:
    updated: list[Quotation]


class ExpireQuotationsUseCase(_QuotationUseCase):
    """Mark Draft and Sent quotations past their validity date as Expired."""

    async def execute(self, today: date | None = None) -> ExpirySweepResult:
        today = today or date.today()
        store = await self._get_quotation_store()

        updated = []
        for status in (QuotationStatus.DRAFT, QuotationStatus.SENT):
            for quotation in await store.list_quotations(status=status, limit=10_000):
                if quotation.is_expired(today):
                    quotation.status = QuotationStatus.EXPIRED
                    updated.append(await store.update_quotation(quotation))

        logger.info("quotation_expiry_sweep_complete", updated=len(updated))
        return ExpirySweepResult(updated=updated)

    def to_response(self, result: ExpirySweepResult) -> ExpirySweepResponse:
        return ExpirySweepResponse(
            updated=[q.quotation_number for q in result.updated],
            count=len(result.updated),
        )
