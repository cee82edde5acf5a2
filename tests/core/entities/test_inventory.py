"""Tests for item and stock ledger entities."""

from decimal import Decimal

from solarbooks.core.entities.inventory import (
    INBOUND_TYPES,
    OUTBOUND_TYPES,
    Item,
    ItemCategory,
    ItemStatus,
    StockLedgerEntry,
    TransactionType,
)


class TestItem:
    def test_defaults(self):
        item = Item(name="Earthing Rod")
        assert item.category == ItemCategory.OTHER
        assert item.status == ItemStatus.ACTIVE
        assert item.current_stock == Decimal("0")
        assert item.gst_rate == Decimal("18")

    def test_stock_value_prefers_purchase_price(self, sample_item):
        sample_item.current_stock = Decimal("10")
        sample_item.selling_price = Decimal("60")
        assert sample_item.stock_value == Decimal("420")

    def test_stock_value_falls_back_to_selling_price(self):
        item = Item(name="MC4", current_stock=Decimal("4"), selling_price=Decimal("25"))
        assert item.stock_value == Decimal("100")

    def test_low_stock(self, sample_item):
        sample_item.current_stock = Decimal("20")
        assert sample_item.is_low_stock
        sample_item.current_stock = Decimal("21")
        assert not sample_item.is_low_stock

    def test_no_reorder_level_never_low(self):
        assert not Item(name="Service", current_stock=Decimal("0")).is_low_stock


class TestLedgerTypes:
    def test_types_partition(self):
        assert not INBOUND_TYPES & OUTBOUND_TYPES
        unassigned = set(TransactionType) - INBOUND_TYPES - OUTBOUND_TYPES
        assert unassigned == {TransactionType.ADJUSTMENT}

    def test_entry_defaults(self):
        entry = StockLedgerEntry(
            item_id=1, transaction_type=TransactionType.PURCHASE, quantity=Decimal("5")
        )
        assert entry.id is None
        assert entry.unit == "Nos"
        assert entry.transaction_date is not None
