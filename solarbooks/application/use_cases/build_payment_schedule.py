"""Build Payment Schedule Use Case."""

from dataclasses import dataclass
from decimal import Decimal

from solarbooks.application.dto.mappers import schedule_to_response, stage_from_request
from solarbooks.application.dto.requests import BuildPaymentScheduleRequest
from solarbooks.application.dto.responses import (
    PaymentPresetResponse,
    PaymentScheduleResponse,
    PaymentScheduleStageResponse,
)
from solarbooks.core.entities.payment_schedule import PaymentSchedule
from solarbooks.core.services.payment_schedule import PRESETS, build_schedule


@dataclass
class BuildPaymentScheduleResult:
    schedule: PaymentSchedule
    project_value: Decimal


class BuildPaymentScheduleUseCase:
    """Split a project value by preset terms or explicit stages. No storage."""

    def execute(self, request: BuildPaymentScheduleRequest) -> BuildPaymentScheduleResult:
        schedule = build_schedule(
            request.project_value,
            preset=request.preset,
            stages=[stage_from_request(s) for s in request.stages or []],
        )
        return BuildPaymentScheduleResult(
            schedule=schedule, project_value=request.project_value
        )

    def to_response(self, result: BuildPaymentScheduleResult) -> PaymentScheduleResponse:
        return schedule_to_response(result.schedule, result.project_value)

    @staticmethod
    def presets() -> list[PaymentPresetResponse]:
        return [
            PaymentPresetResponse(
                name=name,
                stages=[
                    PaymentScheduleStageResponse(
                        stage=stage.value,
                        percentage=float(pct),
                        amount=0.0,
                        status="Due",
                    )
                    for stage, pct in stages
                ],
            )
            for name, stages in PRESETS.items()
        ]
