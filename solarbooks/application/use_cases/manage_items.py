"""Item catalogue use cases: create, update, delete and valuation."""

from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal

from solarbooks.application.dto.mappers import entry_to_response, item_to_response
from solarbooks.application.dto.requests import CreateItemRequest, UpdateItemRequest
from solarbooks.application.dto.responses import (
    CategoryValuationResponse,
    CreateItemResponse,
    InventoryValuationResponse,
)
from solarbooks.config import get_logger
from solarbooks.core.entities.inventory import (
    Item,
    ItemStatus,
    StockLedgerEntry,
    TransactionType,
)
from solarbooks.core.exceptions import ItemHasTransactionsError, ItemNotFoundError
from solarbooks.core.interfaces.inventory_store import IInventoryStore
from solarbooks.core.services.stock_ledger import build_entry

logger = get_logger(__name__)


class _InventoryUseCase:
    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from solarbooks.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store


@dataclass
class CreateItemResult:
    item: Item
    opening_entry: StockLedgerEntry | None = None


class CreateItemUseCase(_InventoryUseCase):
    """Create an item; a positive opening stock becomes an Opening Stock entry."""

    async def execute(self, request: CreateItemRequest) -> CreateItemResult:
        store = await self._get_inventory_store()
        item_code = request.item_code or await store.next_item_code()

        item = await store.create_item(
            Item(
                item_code=item_code,
                name=request.name,
                category=request.category,
                brand=request.brand,
                model=request.model,
                specification=request.specification,
                unit=request.unit,
                hsn=request.hsn,
                gst_rate=request.gst_rate,
                purchase_price=request.purchase_price,
                selling_price=request.selling_price,
                reorder_level=request.reorder_level,
                remarks=request.remarks,
            )
        )

        opening_entry = None
        if request.opening_stock > 0:
            opening_entry = await store.append_entry(
                build_entry(
                    item_id=item.id,  # type: ignore[arg-type]
                    previous_balance=item.current_stock,
                    transaction_type=TransactionType.OPENING_STOCK,
                    quantity=request.opening_stock,
                    unit=item.unit,
                    rate=request.purchase_price,
                    remarks="Opening stock",
                )
            )
            item.current_stock = opening_entry.balance_quantity

        logger.info(
            "item_created_with_stock",
            item_id=item.id,
            item_code=item.item_code,
            opening_stock=str(item.current_stock),
        )
        return CreateItemResult(item=item, opening_entry=opening_entry)

    def to_response(self, result: CreateItemResult) -> CreateItemResponse:
        return CreateItemResponse(
            item=item_to_response(result.item),
            opening_entry=(
                entry_to_response(result.opening_entry) if result.opening_entry else None
            ),
        )


class UpdateItemUseCase(_InventoryUseCase):
    """Change descriptive fields; stock only moves through the ledger."""

    # Explicit nulls are ignored for these
    REQUIRED_FIELDS = frozenset({"name", "category", "unit", "gst_rate", "status"})

    async def execute(self, item_id: int, request: UpdateItemRequest) -> Item:
        store = await self._get_inventory_store()
        item = await store.get_item(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)

        changes = request.model_dump(exclude_unset=True)
        for key, value in changes.items():
            if value is None and key in self.REQUIRED_FIELDS:
                continue
            setattr(item, key, value)
        return await store.update_item(item)


class DeleteItemUseCase(_InventoryUseCase):
    """Delete an item that has never moved; moved items can only be made inactive."""

    async def execute(self, item_id: int) -> None:
        store = await self._get_inventory_store()
        item = await store.get_item(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)

        transactions = await store.count_entries(item_id)
        if transactions:
            raise ItemHasTransactionsError(item_id, transactions)

        await store.delete_item(item_id)


@dataclass
class CategoryValuation:
    category: str
    item_count: int = 0
    total_quantity: Decimal = Decimal("0")
    total_value: Decimal = Decimal("0")


@dataclass
class InventoryValuationResult:
    categories: list[CategoryValuation] = field(default_factory=list)
    total_items: int = 0
    total_value: Decimal = Decimal("0")


class InventoryValuationUseCase(_InventoryUseCase):
    """Stock value (current stock x purchase price, else selling price) by category."""

    PAGE_SIZE = 500

    async def execute(self) -> InventoryValuationResult:
        store = await self._get_inventory_store()

        buckets: dict[str, CategoryValuation] = defaultdict(lambda: CategoryValuation(""))
        offset = 0
        while True:
            page = await store.list_items(
                status=ItemStatus.ACTIVE, limit=self.PAGE_SIZE, offset=offset
            )
            for item in page:
                bucket = buckets[item.category.value]
                bucket.category = item.category.value
                bucket.item_count += 1
                bucket.total_quantity += item.current_stock
                bucket.total_value += item.stock_value
            if len(page) < self.PAGE_SIZE:
                break
            offset += self.PAGE_SIZE

        categories = sorted(buckets.values(), key=lambda b: b.category)
        return InventoryValuationResult(
            categories=categories,
            total_items=sum(b.item_count for b in categories),
            total_value=sum((b.total_value for b in categories), Decimal("0")),
        )

    def to_response(self, result: InventoryValuationResult) -> InventoryValuationResponse:
        return InventoryValuationResponse(
            categories=[
                CategoryValuationResponse(
                    category=b.category,
                    item_count=b.item_count,
                    total_quantity=float(b.total_quantity),
                    total_value=float(b.total_value),
                )
                for b in result.categories
            ],
            total_items=result.total_items,
            total_value=float(result.total_value),
        )
