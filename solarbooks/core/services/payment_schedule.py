"""
Payment schedule builder.

Splits a project or quotation value into staged payments. Stage
percentages are expected to total 100; an unbalanced schedule is logged
and reported through ``is_balanced`` but still returned.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from solarbooks.config import get_logger
from solarbooks.core.entities.payment_schedule import (
    PaymentSchedule,
    PaymentScheduleStage,
    PaymentStage,
)
from solarbooks.core.exceptions import ValidationError
from solarbooks.core.services.gst_calculator import non_negative, round_rupee

logger = get_logger(__name__)

# Named payment terms offered on quotations
PRESETS: dict[str, list[tuple[PaymentStage, Decimal]]] = {
    "40-50-10": [
        (PaymentStage.BOOKING, Decimal("40")),
        (PaymentStage.INSTALLATION, Decimal("50")),
        (PaymentStage.FINAL, Decimal("10")),
    ],
    "30-65-5": [
        (PaymentStage.BOOKING, Decimal("30")),
        (PaymentStage.INSTALLATION, Decimal("65")),
        (PaymentStage.FINAL, Decimal("5")),
    ],
    "50-50": [
        (PaymentStage.BOOKING, Decimal("50")),
        (PaymentStage.FINAL, Decimal("50")),
    ],
}

DEFAULT_PRESET = "40-50-10"


@dataclass
class ScheduleSummary:
    """Totals of a schedule against a project value."""

    project_value: Decimal
    total_percentage: Decimal
    total_amount: Decimal
    is_balanced: bool
    unallocated_percentage: Decimal


def stage_amount(percentage: Decimal, project_value: Decimal) -> Decimal:
    """round_half_up(percentage / 100 * value) in whole rupees."""
    return round_rupee(percentage / Decimal("100") * non_negative(project_value))


def build_schedule(
    project_value: Decimal,
    preset: str | None = None,
    stages: list[PaymentScheduleStage] | None = None,
    due_dates: dict[PaymentStage, date] | None = None,
) -> PaymentSchedule:
    """
    Build a schedule from a named preset or explicit stages.

    Explicit *stages* take precedence over *preset*. With neither, the
    default 40-50-10 terms are used.

    Raises:
        ValidationError: unknown preset name
    """
    if stages:
        terms_name = preset
        base = [s.model_copy() for s in stages]
    else:
        terms_name = preset or DEFAULT_PRESET
        if terms_name not in PRESETS:
            raise ValidationError(
                field="preset",
                message=f"Unknown payment terms. Use one of: {', '.join(PRESETS)}",
                value=terms_name,
            )
        base = [
            PaymentScheduleStage(stage=stage, percentage=pct)
            for stage, pct in PRESETS[terms_name]
        ]

    if due_dates:
        for s in base:
            if s.stage in due_dates:
                s.due_date = due_dates[s.stage]

    schedule = recompute_amounts(
        PaymentSchedule(terms_name=terms_name, stages=base), project_value
    )
    if not schedule.is_balanced:
        logger.warning(
            "payment_schedule_unbalanced",
            terms=terms_name,
            total_percentage=str(schedule.total_percentage),
        )
    return schedule


def recompute_amounts(
    schedule: PaymentSchedule, project_value: Decimal
) -> PaymentSchedule:
    """Return a copy with every stage amount recomputed from *project_value*."""
    return schedule.model_copy(
        update={
            "stages": [
                s.model_copy(update={"amount": stage_amount(s.percentage, project_value)})
                for s in schedule.stages
            ]
        }
    )


def summarize(schedule: PaymentSchedule, project_value: Decimal) -> ScheduleSummary:
    total_pct = schedule.total_percentage
    return ScheduleSummary(
        project_value=non_negative(project_value),
        total_percentage=total_pct,
        total_amount=sum((s.amount for s in schedule.stages), Decimal("0")),
        is_balanced=schedule.is_balanced,
        unallocated_percentage=Decimal("100") - total_pct,
    )
