"""Tests for SQLite quotation store."""

from datetime import date
from decimal import Decimal

import pytest

from solarbooks.core.entities.quotation import Quotation, QuotationStatus
from solarbooks.core.entities.tax import LineItem
from solarbooks.core.exceptions import QuotationNotFoundError
from solarbooks.core.services.gst_calculator import calculate_document
from solarbooks.core.services.payment_schedule import build_schedule
from solarbooks.infrastructure.storage.sqlite.quotation_store import SQLiteQuotationStore


def _quotation(number: str = "QUO-2025-001", with_schedule: bool = True, **kwargs) -> Quotation:
    lines = [
        LineItem(
            item_name="3 kW On-grid System",
            quantity=Decimal("1"),
            unit_price=Decimal("180000"),
            gst_rate=Decimal("12"),
        )
    ]
    items, totals = calculate_document(lines, "29ABCDE1234F1Z5", "Karnataka")
    schedule = build_schedule(totals.grand_total, preset="40-50-10") if with_schedule else None
    return Quotation(
        quotation_number=number,
        client_name=kwargs.pop("client_name", "R. Sharma"),
        place_of_supply="Karnataka",
        system_size_kw=3.0,
        quotation_date=date(2025, 6, 1),
        validity_date=date(2025, 7, 1),
        items=items,
        totals=totals,
        payment_schedule=schedule,
        **kwargs,
    )


class TestSQLiteQuotationStore:
    async def test_create_and_get(self, initialized_db):
        store = SQLiteQuotationStore()
        created = await store.create_quotation(_quotation())

        fetched = await store.get_quotation(created.id)
        assert fetched.quotation_number == "QUO-2025-001"
        assert fetched.quotation_date == date(2025, 6, 1)
        assert fetched.validity_date == date(2025, 7, 1)
        assert fetched.system_size_kw == 3.0
        assert fetched.totals.grand_total == Decimal("201600")
        assert len(fetched.items) == 1

    async def test_schedule_round_trip(self, initialized_db):
        store = SQLiteQuotationStore()
        created = await store.create_quotation(_quotation())

        fetched = await store.get_quotation(created.id)
        assert fetched.payment_schedule == created.payment_schedule
        assert fetched.payment_schedule.terms_name == "40-50-10"
        assert [s.amount for s in fetched.payment_schedule.stages] == [
            Decimal("80640"),
            Decimal("100800"),
            Decimal("20160"),
        ]

    async def test_without_schedule(self, initialized_db):
        store = SQLiteQuotationStore()
        created = await store.create_quotation(_quotation(with_schedule=False))

        assert (await store.get_quotation(created.id)).payment_schedule is None

    async def test_update_status(self, initialized_db):
        store = SQLiteQuotationStore()
        quotation = await store.create_quotation(_quotation())
        quotation.status = QuotationStatus.SENT
        quotation.sent_date = date(2025, 6, 2)
        await store.update_quotation(quotation)

        fetched = await store.get_quotation(quotation.id)
        assert fetched.status == QuotationStatus.SENT
        assert fetched.sent_date == date(2025, 6, 2)

    async def test_update_missing(self, initialized_db):
        with pytest.raises(QuotationNotFoundError):
            await SQLiteQuotationStore().update_quotation(
                Quotation(id=50, client_name="Nobody")
            )

    async def test_list_and_sequence(self, initialized_db):
        store = SQLiteQuotationStore()
        await store.create_quotation(_quotation("QUO-2025-001"))
        await store.create_quotation(
            _quotation("QUO-2025-002", status=QuotationStatus.SENT, client_name="Green Homes")
        )

        sent = await store.list_quotations(status=QuotationStatus.SENT)
        assert [q.quotation_number for q in sent] == ["QUO-2025-002"]
        assert [q.quotation_number for q in await store.list_quotations(client="sharma")] == [
            "QUO-2025-001"
        ]
        assert await store.next_sequence("QUO-2025-") == 3
        assert await store.next_sequence("QUO-2026-") == 1
