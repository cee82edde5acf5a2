"""
Running stock ledger arithmetic.

Pure helpers that turn a transaction request into the next ledger entry.
Persistence (appending the entry and refreshing ``Item.current_stock``)
is done by the record-transaction use case in one storage transaction.
"""

from datetime import date
from decimal import Decimal

from solarbooks.core.entities.inventory import (
    INBOUND_TYPES,
    OUTBOUND_TYPES,
    StockDirection,
    StockLedgerEntry,
    TransactionType,
)
from solarbooks.core.exceptions import InsufficientStockError, InvalidQuantityError


def direction_for(
    transaction_type: TransactionType,
    direction: StockDirection | None = None,
) -> StockDirection:
    """
    Resolve the stock direction of a transaction.

    Inbound and outbound types have a fixed direction and ignore *direction*.
    Adjustment follows *direction* and defaults to inbound.
    """
    if transaction_type in INBOUND_TYPES:
        return StockDirection.IN
    if transaction_type in OUTBOUND_TYPES:
        return StockDirection.OUT
    return direction or StockDirection.IN


def signed_quantity(
    transaction_type: TransactionType,
    quantity: Decimal,
    direction: StockDirection | None = None,
) -> Decimal:
    if direction_for(transaction_type, direction) == StockDirection.OUT:
        return -quantity
    return quantity


def build_entry(
    item_id: int,
    previous_balance: Decimal,
    transaction_type: TransactionType,
    quantity: Decimal,
    *,
    direction: StockDirection | None = None,
    unit: str = "Nos",
    rate: Decimal | None = None,
    transaction_date: date | None = None,
    reference_number: str | None = None,
    project_id: int | None = None,
    supplier_id: int | None = None,
    remarks: str | None = None,
    allow_negative: bool = False,
) -> StockLedgerEntry:
    """
    Build the next ledger entry for an item.

    Args:
        item_id: Item the entry belongs to
        previous_balance: Balance after the item's latest entry
        transaction_type: Kind of movement
        quantity: Magnitude of the movement, must be > 0
        direction: Only used for Adjustment
        rate: Optional per-unit rate; amount = rate * quantity

    Returns:
        Unsaved StockLedgerEntry carrying the new running balance

    Raises:
        InvalidQuantityError: quantity is not positive
        InsufficientStockError: an outbound movement would go below zero
    """
    if quantity is None or not quantity.is_finite() or quantity <= 0:
        raise InvalidQuantityError(quantity)

    resolved = direction_for(transaction_type, direction)
    signed = -quantity if resolved == StockDirection.OUT else quantity
    balance = previous_balance + signed

    if balance < 0 and not allow_negative:
        raise InsufficientStockError(
            item_id=item_id,
            requested=quantity,
            available=previous_balance,
        )

    entry = StockLedgerEntry(
        item_id=item_id,
        transaction_type=transaction_type,
        direction=resolved,
        quantity=quantity,
        signed_quantity=signed,
        unit=unit,
        rate=rate,
        amount=rate * quantity if rate is not None else None,
        balance_quantity=balance,
        reference_number=reference_number,
        project_id=project_id,
        supplier_id=supplier_id,
        remarks=remarks,
    )
    if transaction_date is not None:
        entry.transaction_date = transaction_date
    return entry


def replay_balances(entries: list[StockLedgerEntry]) -> list[Decimal]:
    """Recompute running balances from signed quantities, starting at 0."""
    balances: list[Decimal] = []
    running = Decimal("0")
    for entry in entries:
        running += entry.signed_quantity
        balances.append(running)
    return balances
