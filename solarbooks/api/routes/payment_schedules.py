"""Payment schedule endpoints."""

from fastapi import APIRouter, Depends

from solarbooks.api.dependencies import get_build_payment_schedule_use_case
from solarbooks.application.dto.requests import BuildPaymentScheduleRequest
from solarbooks.application.dto.responses import (
    ErrorResponse,
    PaymentPresetResponse,
    PaymentScheduleResponse,
)
from solarbooks.application.use_cases.build_payment_schedule import (
    BuildPaymentScheduleUseCase,
)

router = APIRouter(prefix="/api/payment-schedules", tags=["payment-schedules"])


@router.post(
    "",
    response_model=PaymentScheduleResponse,
    responses={400: {"model": ErrorResponse}},
)
async def build_payment_schedule(
    request: BuildPaymentScheduleRequest,
    use_case: BuildPaymentScheduleUseCase = Depends(get_build_payment_schedule_use_case),
) -> PaymentScheduleResponse:
    """
    Split a value into staged payments.

    A schedule whose percentages do not total 100 is still returned with
    ``is_balanced`` false.
    """
    result = use_case.execute(request)
    return use_case.to_response(result)


@router.get("/presets", response_model=list[PaymentPresetResponse])
async def list_presets() -> list[PaymentPresetResponse]:
    return BuildPaymentScheduleUseCase.presets()
