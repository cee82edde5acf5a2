"""Pytest configuration and shared fixtures."""

from decimal import Decimal

import pytest

from solarbooks.core.entities.inventory import Item, ItemCategory
from solarbooks.core.entities.tax import DiscountMode, LineItem

# Karnataka company registration
COMPANY_GSTIN = "29ABCDE1234F1Z5"


@pytest.fixture
def company_gstin() -> str:
    return COMPANY_GSTIN


@pytest.fixture
def panel_line() -> LineItem:
    """10 x 100 at 10% discount, 18% GST."""
    return LineItem(
        item_name="Mono PERC 540W Panel",
        hsn_code="85414011",
        quantity=Decimal("10"),
        unit_price=Decimal("100"),
        discount_mode=DiscountMode.PERCENT,
        discount_percent=Decimal("10"),
        gst_rate=Decimal("18"),
    )


@pytest.fixture
def sample_item() -> Item:
    return Item(
        id=1,
        item_code="ITEM001",
        name="DC Cable 4 sq mm",
        category=ItemCategory.CABLE,
        unit="Mtr",
        hsn="8544",
        purchase_price=Decimal("42"),
        reorder_level=Decimal("20"),
    )


@pytest.fixture
def sample_line_payload() -> dict:
    return {
        "item_name": "Mono PERC 540W Panel",
        "hsn_code": "85414011",
        "quantity": 10,
        "unit_price": 100,
        "discount_percent": 10,
        "gst_rate": 18,
    }
