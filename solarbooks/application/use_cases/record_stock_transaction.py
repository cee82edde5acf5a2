"""Record Stock Transaction Use Case: append to the running stock ledger."""

from dataclasses import dataclass

from solarbooks.application.dto.mappers import entry_to_response, item_to_response
from solarbooks.application.dto.requests import RecordStockTransactionRequest
from solarbooks.application.dto.responses import StockTransactionResponse
from solarbooks.config import get_logger
from solarbooks.core.entities.inventory import Item, StockLedgerEntry
from solarbooks.core.exceptions import ItemNotFoundError
from solarbooks.core.interfaces.inventory_store import IInventoryStore
from solarbooks.core.services.stock_ledger import build_entry

logger = get_logger(__name__)


@dataclass
class RecordStockTransactionResult:
    """Result of recording a stock transaction."""

    item: Item
    entry: StockLedgerEntry


class RecordStockTransactionUseCase:
    """
    Append one ledger entry and move the item's cached stock.

    Inbound types add, outbound types subtract, Adjustment follows the
    requested direction. The entry and the new current_stock are written
    in a single storage transaction.
    """

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from solarbooks.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(
        self, request: RecordStockTransactionRequest
    ) -> RecordStockTransactionResult:
        logger.info(
            "stock_transaction_started",
            item_id=request.item_id,
            type=request.transaction_type.value,
            quantity=str(request.quantity),
        )

        store = await self._get_inventory_store()
        item = await store.get_item(request.item_id)
        if item is None:
            raise ItemNotFoundError(request.item_id)

        entry = build_entry(
            item_id=item.id,  # type: ignore[arg-type]
            previous_balance=item.current_stock,
            transaction_type=request.transaction_type,
            quantity=request.quantity,
            direction=request.direction,
            unit=item.unit,
            rate=request.rate,
            transaction_date=request.transaction_date,
            reference_number=request.reference_number,
            project_id=request.project_id,
            supplier_id=request.supplier_id,
            remarks=request.remarks,
        )
        entry = await store.append_entry(entry)
        item.current_stock = entry.balance_quantity

        logger.info(
            "stock_transaction_recorded",
            item_id=item.id,
            entry_id=entry.id,
            balance=str(entry.balance_quantity),
        )
        if item.is_low_stock:
            logger.warning(
                "item_low_stock",
                item_id=item.id,
                item_code=item.item_code,
                current_stock=str(item.current_stock),
                reorder_level=str(item.reorder_level),
            )

        return RecordStockTransactionResult(item=item, entry=entry)

    def to_response(
        self, result: RecordStockTransactionResult
    ) -> StockTransactionResponse:
        return StockTransactionResponse(
            item=item_to_response(result.item),
            entry=entry_to_response(result.entry),
        )
