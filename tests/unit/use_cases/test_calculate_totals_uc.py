"""Tests for CalculateTotalsUseCase and BuildPaymentScheduleUseCase."""

from decimal import Decimal

import pytest

from solarbooks.application.dto.requests import (
    BuildPaymentScheduleRequest,
    CalculateTotalsRequest,
    TaxLineRequest,
)
from solarbooks.application.use_cases.build_payment_schedule import (
    BuildPaymentScheduleUseCase,
)
from solarbooks.application.use_cases.calculate_totals import CalculateTotalsUseCase
from solarbooks.core.exceptions import ValidationError


@pytest.fixture
def use_case(company_gstin):
    return CalculateTotalsUseCase(company_gstin=company_gstin)


class TestCalculateTotalsUseCase:
    def test_intra_state(self, use_case, sample_line_payload):
        request = CalculateTotalsRequest(
            items=[sample_line_payload, sample_line_payload],
            place_of_supply="Karnataka",
            tcs_rate=0,
        )
        result = use_case.execute(request)

        assert not result.is_interstate
        assert result.totals.cgst == Decimal("162")
        assert result.totals.sgst == Decimal("162")
        assert result.totals.grand_total == Decimal("2124")
        assert [line.line_number for line in result.items] == [1, 2]

    def test_unreadable_numbers_become_zero(self, use_case):
        request = CalculateTotalsRequest(
            items=[TaxLineRequest(item_name="Panel", quantity="abc", unit_price="1000")],
            place_of_supply="Karnataka",
            tcs_rate="",
        )
        result = use_case.execute(request)

        assert result.totals.grand_total == Decimal("0")
        assert result.totals.amount_in_words == "Zero Rupees Only"

    def test_request_gstin_overrides(self, use_case, sample_line_payload):
        request = CalculateTotalsRequest(
            items=[sample_line_payload],
            company_gstin="27AAACS1234F1Z9",
            place_of_supply="Karnataka",
            tcs_rate=0,
        )
        response = use_case.to_response(use_case.execute(request))

        assert response.is_interstate is True
        assert response.totals.igst == 162.0
        assert response.totals.gst_type == "Inter-state"

    def test_resolve(self, use_case):
        resolved = use_case.resolve("Maharashtra")

        assert resolved.company_state_code == "29"
        assert resolved.supply_state_code == "27"
        assert resolved.is_interstate is True

    def test_resolve_unknown_state_is_intra(self, use_case):
        assert use_case.resolve("Goa").is_interstate is False


class TestBuildPaymentScheduleUseCase:
    def test_preset(self):
        use_case = BuildPaymentScheduleUseCase()
        result = use_case.execute(
            BuildPaymentScheduleRequest(project_value=Decimal("250000"), preset="30-65-5")
        )
        response = use_case.to_response(result)

        assert [s.amount for s in response.stages] == [75000.0, 162500.0, 12500.0]
        assert response.is_balanced is True

    def test_unknown_preset(self):
        with pytest.raises(ValidationError):
            BuildPaymentScheduleUseCase().execute(
                BuildPaymentScheduleRequest(project_value=Decimal("1000"), preset="nope")
            )

    def test_presets_listing(self):
        names = [p.name for p in BuildPaymentScheduleUseCase.presets()]
        assert names == ["40-50-10", "30-65-5", "50-50"]
