"""SQLite implementation of inventory storage."""

from datetime import datetime

import aiosqlite

from solarbooks.config import get_logger
from solarbooks.core.entities.inventory import (
    Item,
    ItemCategory,
    ItemStatus,
    StockDirection,
    StockLedgerEntry,
    TransactionType,
)
from solarbooks.core.exceptions import DatabaseError, ItemNotFoundError
from solarbooks.core.interfaces.inventory_store import IInventoryStore
from solarbooks.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)
from solarbooks.infrastructure.storage.sqlite.row_codec import (
    date_in,
    date_out,
    datetime_in,
    dec_in,
    dec_out,
    opt_dec_in,
)

logger = get_logger(__name__)

ITEM_CODE_PREFIX = "ITEM"
ITEM_CODE_DIGITS = 3


class SQLiteInventoryStore(IInventoryStore):
    """SQLite implementation of item and stock ledger storage."""

    async def create_item(self, item: Item) -> Item:
        now = datetime.utcnow()
        item.created_at = now
        item.updated_at = now
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO items (
                    item_code, name, category, brand, model, specification,
                    unit, hsn, gst_rate, purchase_price, selling_price,
                    current_stock, reorder_level, status, remarks,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    item.item_code,
                    item.name,
                    item.category.value,
                    item.brand,
                    item.model,
                    item.specification,
                    item.unit,
                    item.hsn,
                    dec_out(item.gst_rate),
                    dec_out(item.purchase_price),
                    dec_out(item.selling_price),
                    dec_out(item.current_stock),
                    dec_out(item.reorder_level),
                    item.status.value,
                    item.remarks,
                    item.created_at.isoformat(),
                    item.updated_at.isoformat(),
                ),
            )
            item.id = cursor.lastrowid
            logger.info("item_created", item_id=item.id, item_code=item.item_code)
            return item

    async def get_item(self, item_id: int) -> Item | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM items WHERE id = ?", (item_id,))
            row = await cursor.fetchone()
            return self._row_to_item(row) if row else None

    async def get_item_by_code(self, item_code: str) -> Item | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM items WHERE item_code = ?", (item_code,)
            )
            row = await cursor.fetchone()
            return self._row_to_item(row) if row else None

    async def update_item(self, item: Item) -> Item:
        """Update descriptive fields. Stock moves only through the ledger."""
        item.updated_at = datetime.utcnow()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE items SET
                    name = ?, category = ?, brand = ?, model = ?,
                    specification = ?, unit = ?, hsn = ?, gst_rate = ?,
                    purchase_price = ?, selling_price = ?, reorder_level = ?,
                    status = ?, remarks = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    item.name,
                    item.category.value,
                    item.brand,
                    item.model,
                    item.specification,
                    item.unit,
                    item.hsn,
                    dec_out(item.gst_rate),
                    dec_out(item.purchase_price),
                    dec_out(item.selling_price),
                    dec_out(item.reorder_level),
                    item.status.value,
                    item.remarks,
                    item.updated_at.isoformat(),
                    item.id,
                ),
            )
            if cursor.rowcount == 0:
                raise ItemNotFoundError(item.id)
            logger.info("item_updated", item_id=item.id)
            return item

    async def delete_item(self, item_id: int) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM items WHERE id = ?", (item_id,))
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("item_deleted", item_id=item_id)
            return deleted

    async def list_items(
        self,
        category: ItemCategory | None = None,
        status: ItemStatus | None = None,
        search: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Item]:
        clauses: list[str] = []
        params: list = []
        if category is not None:
            clauses.append("category = ?")
            params.append(category.value)
        if status is not None:
            clauses.append("status = ?")
            params.append(status.value)
        if search:
            clauses.append("(name LIKE ? OR item_code LIKE ? OR brand LIKE ?)")
            pattern = f"%{search}%"
            params.extend([pattern, pattern, pattern])

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM items {where} ORDER BY item_code LIMIT ? OFFSET ?",
                (*params, limit, offset),
            )
            return [self._row_to_item(row) for row in await cursor.fetchall()]

    async def list_low_stock(self, limit: int = 100, offset: int = 0) -> list[Item]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM items
                WHERE reorder_level IS NOT NULL
                  AND CAST(reorder_level AS REAL) > 0
                  AND CAST(current_stock AS REAL) <= CAST(reorder_level AS REAL)
                  AND status = 'active'
                ORDER BY item_code
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            return [self._row_to_item(row) for row in await cursor.fetchall()]

    async def next_item_code(self) -> str:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT item_code FROM items WHERE item_code LIKE ?",
                (f"{ITEM_CODE_PREFIX}%",),
            )
            highest = 0
            for row in await cursor.fetchall():
                digits = row[0][len(ITEM_CODE_PREFIX):]
                if digits.isdigit():
                    highest = max(highest, int(digits))
        return f"{ITEM_CODE_PREFIX}{highest + 1:0{ITEM_CODE_DIGITS}d}"

    async def append_entry(self, entry: StockLedgerEntry) -> StockLedgerEntry:
        """
        Insert the entry and move items.current_stock to its balance.

        Both writes share one transaction. The stored balance must still be
        the one the entry was computed from, otherwise nothing is written.
        """
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "SELECT current_stock FROM items WHERE id = ?", (entry.item_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                raise ItemNotFoundError(entry.item_id)

            stored = dec_in(row["current_stock"])
            expected = entry.balance_quantity - entry.signed_quantity
            if stored != expected:
                raise DatabaseError(
                    "append_entry",
                    f"stale balance for item {entry.item_id}: "
                    f"stored {stored}, expected {expected}",
                )

            cursor = await conn.execute(
                """
                INSERT INTO stock_ledger (
                    item_id, transaction_type, direction, quantity,
                    signed_quantity, unit, rate, amount, balance_quantity,
                    transaction_date, reference_number, project_id,
                    supplier_id, remarks, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.item_id,
                    entry.transaction_type.value,
                    entry.direction.value,
                    dec_out(entry.quantity),
                    dec_out(entry.signed_quantity),
                    entry.unit,
                    dec_out(entry.rate),
                    dec_out(entry.amount),
                    dec_out(entry.balance_quantity),
                    date_out(entry.transaction_date),
                    entry.reference_number,
                    entry.project_id,
                    entry.supplier_id,
                    entry.remarks,
                    entry.created_at.isoformat(),
                ),
            )
            entry.id = cursor.lastrowid

            await conn.execute(
                "UPDATE items SET current_stock = ?, updated_at = ? WHERE id = ?",
                (
                    dec_out(entry.balance_quantity),
                    datetime.utcnow().isoformat(),
                    entry.item_id,
                ),
            )
            logger.info(
                "stock_entry_appended",
                entry_id=entry.id,
                item_id=entry.item_id,
                type=entry.transaction_type.value,
                qty=str(entry.signed_quantity),
                balance=str(entry.balance_quantity),
            )
            return entry

    async def get_ledger(
        self,
        item_id: int | None = None,
        transaction_type: TransactionType | None = None,
        project_id: int | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[StockLedgerEntry]:
        clauses: list[str] = []
        params: list = []
        if item_id is not None:
            clauses.append("item_id = ?")
            params.append(item_id)
        if transaction_type is not None:
            clauses.append("transaction_type = ?")
            params.append(transaction_type.value)
        if project_id is not None:
            clauses.append("project_id = ?")
            params.append(project_id)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        sql = f"SELECT * FROM stock_ledger {where} ORDER BY id ASC"
        if limit is not None:
            sql += " LIMIT ? OFFSET ?"
            params.extend([limit, offset])

        async with get_connection() as conn:
            cursor = await conn.execute(sql, params)
            return [self._row_to_entry(row) for row in await cursor.fetchall()]

    async def count_entries(self, item_id: int) -> int:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT COUNT(*) FROM stock_ledger WHERE item_id = ?", (item_id,)
            )
            row = await cursor.fetchone()
            return row[0] if row else 0

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> Item:
        return Item(
            id=row["id"],
            item_code=row["item_code"],
            name=row["name"],
            category=ItemCategory(row["category"]),
            brand=row["brand"],
            model=row["model"],
            specification=row["specification"],
            unit=row["unit"],
            hsn=row["hsn"],
            gst_rate=dec_in(row["gst_rate"]),
            purchase_price=opt_dec_in(row["purchase_price"]),
            selling_price=opt_dec_in(row["selling_price"]),
            current_stock=dec_in(row["current_stock"]),
            reorder_level=opt_dec_in(row["reorder_level"]),
            status=ItemStatus(row["status"]),
            remarks=row["remarks"],
            created_at=datetime_in(row["created_at"]),
            updated_at=datetime_in(row["updated_at"]),
        )

    @staticmethod
    def _row_to_entry(row: aiosqlite.Row) -> StockLedgerEntry:
        entry = StockLedgerEntry(
            id=row["id"],
            item_id=row["item_id"],
            transaction_type=TransactionType(row["transaction_type"]),
            direction=StockDirection(row["direction"]),
            quantity=dec_in(row["quantity"]),
            signed_quantity=dec_in(row["signed_quantity"]),
            unit=row["unit"],
            rate=opt_dec_in(row["rate"]),
            amount=opt_dec_in(row["amount"]),
            balance_quantity=dec_in(row["balance_quantity"]),
            reference_number=row["reference_number"],
            project_id=row["project_id"],
            supplier_id=row["supplier_id"],
            remarks=row["remarks"],
            created_at=datetime_in(row["created_at"]),
        )
        transaction_date = date_in(row["transaction_date"])
        if transaction_date:
            entry.transaction_date = transaction_date
        return entry
