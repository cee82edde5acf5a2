"""Abstract interface for inventory storage."""

from abc import ABC, abstractmethod

from solarbooks.core.entities.inventory import (
    Item,
    ItemCategory,
    ItemStatus,
    StockLedgerEntry,
    TransactionType,
)


class IInventoryStore(ABC):
    """Interface for item and stock ledger persistence."""

    @abstractmethod
    async def create_item(self, item: Item) -> Item:
        """Create a new item."""
        pass

    @abstractmethod
    async def get_item(self, item_id: int) -> Item | None:
        """Get item by ID."""
        pass

    @abstractmethod
    async def get_item_by_code(self, item_code: str) -> Item | None:
        pass

    @abstractmethod
    async def update_item(self, item: Item) -> Item:
        """Update descriptive fields of an item. current_stock is not written."""
        pass

    @abstractmethod
    async def delete_item(self, item_id: int) -> bool:
        pass

    @abstractmethod
    async def list_items(
        self,
        category: ItemCategory | None = None,
        status: ItemStatus | None = None,
        search: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Item]:
        """List items ordered by item code."""
        pass

    @abstractmethod
    async def list_low_stock(self, limit: int = 100, offset: int = 0) -> list[Item]:
        """List items whose current_stock is at or below their reorder level."""
        pass

    @abstractmethod
    async def next_item_code(self) -> str:
        """Next free sequential item code (ITEM001, ITEM002, ...)."""
        pass

    @abstractmethod
    async def append_entry(self, entry: StockLedgerEntry) -> StockLedgerEntry:
        """
        Append a ledger entry and set the item's current_stock to the
        entry's balance_quantity, atomically.
        """
        pass

    @abstractmethod
    async def get_ledger(
        self,
        item_id: int | None = None,
        transaction_type: TransactionType | None = None,
        project_id: int | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[StockLedgerEntry]:
        """Ledger entries matching all given filters, in insertion order."""
        pass

    @abstractmethod
    async def count_entries(self, item_id: int) -> int:
        pass
