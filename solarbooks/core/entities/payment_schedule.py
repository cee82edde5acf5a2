"""Staged payment plan entities."""

from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class PaymentStage(str, Enum):
    BOOKING = "Booking"
    MATERIAL = "Material"
    INSTALLATION = "Installation"
    FINAL = "Final"
    OTHER = "Other"


class StageStatus(str, Enum):
    DUE = "Due"
    PARTIAL = "Partial"
    RECEIVED = "Received"


class PaymentScheduleStage(BaseModel):
    """One milestone of a payment schedule."""

    stage: PaymentStage
    percentage: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    amount: Decimal = Decimal("0")
    due_date: date | None = None
    status: StageStatus = StageStatus.DUE


class PaymentSchedule(BaseModel):
    """Ordered stages splitting a project or quotation value."""

    terms_name: str | None = None
    stages: list[PaymentScheduleStage] = Field(default_factory=list)

    @property
    def total_percentage(self) -> Decimal:
        return sum((s.percentage for s in self.stages), Decimal("0"))

    @property
    def is_balanced(self) -> bool:
        return self.total_percentage == Decimal("100")
