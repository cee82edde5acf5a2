"""API tests for item catalogue and stock ledger endpoints."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from solarbooks.api.dependencies import (
    get_create_item_use_case,
    get_delete_item_use_case,
    get_inv_item_store,
    get_inventory_valuation_use_case,
    get_record_stock_transaction_use_case,
)
from solarbooks.api.main import app
from solarbooks.application.use_cases.manage_items import (
    CreateItemUseCase,
    DeleteItemUseCase,
    InventoryValuationUseCase,
)
from solarbooks.application.use_cases.record_stock_transaction import (
    RecordStockTransactionUseCase,
)
from solarbooks.core.entities.inventory import StockLedgerEntry, TransactionType


@pytest.fixture
def mock_inventory_store(sample_item):
    store = AsyncMock()
    store.get_item.return_value = sample_item
    store.list_items.return_value = [sample_item]
    store.list_low_stock.return_value = [sample_item]
    store.next_item_code.return_value = "ITEM002"
    store.count_entries.return_value = 0
    store.create_item.side_effect = lambda item: item.model_copy(update={"id": 2})
    store.append_entry.side_effect = lambda entry: entry.model_copy(update={"id": 9})
    store.get_ledger.return_value = []
    return store


@pytest.fixture
async def inv_client(async_client: AsyncClient, mock_inventory_store):
    store = mock_inventory_store
    app.dependency_overrides[get_inv_item_store] = lambda: store
    app.dependency_overrides[get_create_item_use_case] = lambda: CreateItemUseCase(store)
    app.dependency_overrides[get_delete_item_use_case] = lambda: DeleteItemUseCase(store)
    app.dependency_overrides[get_inventory_valuation_use_case] = (
        lambda: InventoryValuationUseCase(store)
    )
    app.dependency_overrides[get_record_stock_transaction_use_case] = (
        lambda: RecordStockTransactionUseCase(store)
    )
    return async_client


class TestItemsAPI:
    async def test_create_with_opening_stock(self, inv_client: AsyncClient):
        response = await inv_client.post(
            "/api/inventory/items",
            json={
                "name": "Mono PERC 540W",
                "category": "Panel",
                "purchase_price": 11500,
                "opening_stock": 40,
                "reorder_level": 10,
            },
        )
        assert response.status_code == 201

        data = response.json()
        assert data["item"]["item_code"] == "ITEM002"
        assert data["item"]["current_stock"] == 40.0
        assert data["item"]["stock_value"] == 460000.0
        assert data["opening_entry"]["transaction_type"] == "Opening Stock"

    async def test_create_rejects_bad_gst_rate(self, inv_client: AsyncClient):
        response = await inv_client.post(
            "/api/inventory/items", json={"name": "Panel", "gst_rate": 15}
        )
        assert response.status_code == 422

    async def test_list(self, inv_client: AsyncClient, mock_inventory_store):
        response = await inv_client.get(
            "/api/inventory/items", params={"category": "Cable", "status": "active"}
        )
        assert response.status_code == 200

        data = response.json()
        assert [i["item_code"] for i in data["items"]] == ["ITEM001"]
        kwargs = mock_inventory_store.list_items.call_args.kwargs
        assert kwargs["category"].value == "Cable"
        assert kwargs["status"].value == "active"

    async def test_low_stock(self, inv_client: AsyncClient):
        response = await inv_client.get("/api/inventory/items/low-stock")
        assert response.status_code == 200
        assert response.json()[0]["is_low_stock"] is True

    async def test_get_missing(self, inv_client: AsyncClient, mock_inventory_store):
        mock_inventory_store.get_item.return_value = None

        response = await inv_client.get("/api/inventory/items/404")
        assert response.status_code == 404

        data = response.json()
        assert data["error_code"] == "ITEM_NOT_FOUND"
        assert data["hint"]
        assert data["path"] == "/api/inventory/items/404"

    async def test_delete_unused(self, inv_client: AsyncClient, mock_inventory_store):
        response = await inv_client.delete("/api/inventory/items/1")
        assert response.status_code == 204
        mock_inventory_store.delete_item.assert_awaited_once_with(1)

    async def test_delete_with_transactions(
        self, inv_client: AsyncClient, mock_inventory_store
    ):
        mock_inventory_store.count_entries.return_value = 3

        response = await inv_client.delete("/api/inventory/items/1")
        assert response.status_code == 400
        assert response.json()["error_code"] == "ITEM_HAS_TRANSACTIONS"


class TestStockAPI:
    async def test_purchase(self, inv_client: AsyncClient, sample_item):
        sample_item.current_stock = Decimal("100")

        response = await inv_client.post(
            "/api/inventory/transactions",
            json={
                "item_id": 1,
                "transaction_type": "Purchase",
                "quantity": 50,
                "rate": 42,
                "reference_number": "BILL-1042",
            },
        )
        assert response.status_code == 201

        data = response.json()
        assert data["entry"]["balance_quantity"] == 150.0
        assert data["entry"]["amount"] == 2100.0
        assert data["item"]["current_stock"] == 150.0

    async def test_insufficient_stock(self, inv_client: AsyncClient, sample_item):
        sample_item.current_stock = Decimal("10")

        response = await inv_client.post(
            "/api/inventory/transactions",
            json={"item_id": 1, "transaction_type": "Transfer to Site", "quantity": 11},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "INSUFFICIENT_STOCK"

    async def test_invalid_quantity(self, inv_client: AsyncClient):
        response = await inv_client.post(
            "/api/inventory/transactions",
            json={"item_id": 1, "transaction_type": "Purchase", "quantity": -5},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_QUANTITY"

    async def test_unknown_type(self, inv_client: AsyncClient):
        response = await inv_client.post(
            "/api/inventory/transactions",
            json={"item_id": 1, "transaction_type": "Theft", "quantity": 1},
        )
        assert response.status_code == 422

    async def test_item_ledger(self, inv_client: AsyncClient, mock_inventory_store):
        mock_inventory_store.get_ledger.return_value = [
            StockLedgerEntry(
                id=1,
                item_id=1,
                transaction_type=TransactionType.PURCHASE,
                quantity=Decimal("100"),
                signed_quantity=Decimal("100"),
                balance_quantity=Decimal("100"),
            ),
            StockLedgerEntry(
                id=2,
                item_id=1,
                transaction_type=TransactionType.SALE,
                direction="out",
                quantity=Decimal("30"),
                signed_quantity=Decimal("-30"),
                balance_quantity=Decimal("70"),
            ),
        ]
        mock_inventory_store.count_entries.return_value = 2

        response = await inv_client.get("/api/inventory/items/1/ledger")
        assert response.status_code == 200

        data = response.json()
        assert data["total"] == 2
        assert [e["balance_quantity"] for e in data["entries"]] == [100.0, 70.0]

    async def test_valuation(self, inv_client: AsyncClient, sample_item):
        sample_item.current_stock = Decimal("100")

        response = await inv_client.get("/api/inventory/valuation")
        assert response.status_code == 200

        data = response.json()
        assert data["total_value"] == 4200.0
        assert data["categories"][0]["category"] == "Cable"
