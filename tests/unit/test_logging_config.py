"""Tests for the structlog processors."""

from decimal import Decimal

from solarbooks.config.logging import add_app_context, stringify_money


def test_stringify_money():
    event = stringify_money(
        None,
        "info",
        {"event": "invoice_payment_applied", "amount": Decimal("1062.00"), "count": 2},
    )
    assert event["amount"] == "1062.00"
    assert event["count"] == 2


def test_app_context():
    event = add_app_context(None, "info", {"event": "x"})
    assert event["app"] == "SolarBooks"
    assert "environment" in event
