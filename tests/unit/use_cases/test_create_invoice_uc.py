"""Tests for CreateInvoiceUseCase."""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from solarbooks.application.dto.requests import CreateInvoiceRequest, LineItemRequest
from solarbooks.application.use_cases.create_invoice import (
    CreateInvoiceUseCase,
    format_invoice_number,
)
from solarbooks.config.settings import BillingSettings, CompanySettings, Settings
from solarbooks.core.entities.invoice import InvoiceStatus
from solarbooks.core.entities.tax import DiscountMode, GSTType


@pytest.fixture
def settings(company_gstin) -> Settings:
    return Settings(
        company=CompanySettings(gstin=company_gstin, state="Karnataka"),
        billing=BillingSettings(invoice_prefix="SS/INV", payment_terms_days=15),
    )


@pytest.fixture
def mock_invoice_store():
    store = AsyncMock()
    store.next_sequence.return_value = 7
    store.create_invoice.side_effect = lambda invoice: invoice.model_copy(update={"id": 1})
    return store


@pytest.fixture
def use_case(mock_invoice_store, settings):
    return CreateInvoiceUseCase(invoice_store=mock_invoice_store, settings=settings)


def _request(**kwargs) -> CreateInvoiceRequest:
    line = LineItemRequest(
        item_name="Mono PERC 540W Panel",
        quantity=Decimal("10"),
        unit_price=Decimal("100"),
        discount_percent=Decimal("10"),
        gst_rate=Decimal("18"),
    )
    defaults = {
        "customer_name": "Sunrise Apartments",
        "place_of_supply": "Karnataka",
        "invoice_date": date(2025, 3, 10),
        "items": [line, line],
    }
    defaults.update(kwargs)
    return CreateInvoiceRequest(**defaults)


class TestCreateInvoiceUseCase:
    def test_number_format(self):
        assert format_invoice_number("SS/INV", 2025, 1) == "SS/INV/2025/001"
        assert format_invoice_number("SS/INV", 2025, 1234) == "SS/INV/2025/1234"

    async def test_intra_state_invoice(self, use_case, mock_invoice_store):
        result = await use_case.execute(_request())
        invoice = result.invoice

        mock_invoice_store.next_sequence.assert_awaited_once_with("SS/INV/2025/")
        assert invoice.invoice_number == "SS/INV/2025/007"
        assert invoice.status == InvoiceStatus.GENERATED
        assert invoice.gst_type == GSTType.INTRA_STATE
        assert invoice.totals.cgst == Decimal("162")
        assert invoice.totals.grand_total == Decimal("2124")
        assert invoice.due_date == date(2025, 3, 25)
        assert invoice.payment_terms == "Net 15 days"
        assert [line.line_number for line in invoice.items] == [1, 2]

    async def test_inter_state_invoice(self, use_case):
        result = await use_case.execute(_request(place_of_supply="Maharashtra"))

        assert result.invoice.gst_type == GSTType.INTER_STATE
        assert result.invoice.totals.igst == Decimal("324")
        assert result.invoice.totals.cgst == Decimal("0")

    async def test_draft_with_tcs(self, use_case):
        result = await use_case.execute(_request(as_draft=True, tcs_rate=Decimal("1")))

        assert result.invoice.status == InvoiceStatus.DRAFT
        assert result.invoice.totals.tcs_amount == Decimal("18.00")
        assert result.invoice.totals.grand_total == Decimal("2142")

    async def test_discount_mode_inferred(self, use_case):
        line = LineItemRequest(
            item_name="Inverter",
            quantity=Decimal("1"),
            unit_price=Decimal("1000"),
            discount_amount=Decimal("150"),
        )
        result = await use_case.execute(_request(items=[line]))

        assert result.invoice.items[0].discount_mode == DiscountMode.AMOUNT
        assert result.invoice.items[0].discount_percent == Decimal("15")

    async def test_to_response(self, use_case):
        response = use_case.to_response(await use_case.execute(_request()))

        assert response.id == 1
        assert response.totals.grand_total == 2124.0
        assert response.balance_amount == 2124.0
