"""
Column codecs shared by the SQLite stores.

Money and quantities are stored as decimal strings so values read back
exactly as they were computed.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

import aiosqlite

from solarbooks.core.entities.tax import DiscountMode, DocumentTotals, GSTType, LineItem

LINE_COLUMNS = (
    "line_number",
    "item_id",
    "item_name",
    "description",
    "hsn_code",
    "unit",
    "quantity",
    "unit_price",
    "discount_mode",
    "discount_percent",
    "discount_amount",
    "gst_rate",
    "gross",
    "taxable_amount",
    "cgst",
    "sgst",
    "igst",
    "total_amount",
)

TOTALS_COLUMNS = (
    "subtotal",
    "total_discount",
    "taxable_amount",
    "cgst",
    "sgst",
    "igst",
    "total_gst",
    "tcs_rate",
    "tcs_amount",
    "round_off",
    "grand_total",
    "amount_in_words",
)


def dec_out(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def dec_in(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    if value is None or value == "":
        return default
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return default


def opt_dec_in(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    return dec_in(value)


def date_out(value: date | None) -> str | None:
    return value.isoformat() if value else None


def date_in(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except (ValueError, TypeError):
        return None


def datetime_in(value: str | None) -> datetime:
    if value:
        try:
            return datetime.fromisoformat(value)
        except (ValueError, TypeError):
            pass
    return datetime.utcnow()


def line_params(parent_id: int, line: LineItem) -> tuple:
    """Positional parameters for an INSERT of (parent_id, *LINE_COLUMNS)."""
    return (
        parent_id,
        line.line_number,
        line.item_id,
        line.item_name,
        line.description,
        line.hsn_code,
        line.unit,
        dec_out(line.quantity),
        dec_out(line.unit_price),
        line.discount_mode.value,
        dec_out(line.discount_percent),
        dec_out(line.discount_amount),
        dec_out(line.gst_rate),
        dec_out(line.gross),
        dec_out(line.taxable_amount),
        dec_out(line.cgst),
        dec_out(line.sgst),
        dec_out(line.igst),
        dec_out(line.total_amount),
    )


def line_insert_sql(table: str, parent_column: str) -> str:
    columns = ", ".join((parent_column, *LINE_COLUMNS))
    placeholders = ", ".join("?" for _ in range(len(LINE_COLUMNS) + 1))
    return f"INSERT INTO {table} ({columns}) VALUES ({placeholders})"


def row_to_line(row: aiosqlite.Row) -> LineItem:
    return LineItem(
        id=row["id"],
        line_number=row["line_number"],
        item_id=row["item_id"],
        item_name=row["item_name"],
        description=row["description"],
        hsn_code=row["hsn_code"],
        unit=row["unit"],
        quantity=dec_in(row["quantity"]),
        unit_price=dec_in(row["unit_price"]),
        discount_mode=DiscountMode(row["discount_mode"]),
        discount_percent=dec_in(row["discount_percent"]),
        discount_amount=dec_in(row["discount_amount"]),
        gst_rate=dec_in(row["gst_rate"]),
        gross=dec_in(row["gross"]),
        taxable_amount=dec_in(row["taxable_amount"]),
        cgst=dec_in(row["cgst"]),
        sgst=dec_in(row["sgst"]),
        igst=dec_in(row["igst"]),
        total_amount=dec_in(row["total_amount"]),
    )


def totals_params(totals: DocumentTotals) -> tuple:
    """Parameters matching TOTALS_COLUMNS."""
    return (
        dec_out(totals.subtotal),
        dec_out(totals.total_discount),
        dec_out(totals.taxable_amount),
        dec_out(totals.cgst),
        dec_out(totals.sgst),
        dec_out(totals.igst),
        dec_out(totals.total_gst),
        dec_out(totals.tcs_rate),
        dec_out(totals.tcs_amount),
        dec_out(totals.round_off),
        dec_out(totals.grand_total),
        totals.amount_in_words,
    )


def row_to_totals(row: aiosqlite.Row, line_count: int = 0) -> DocumentTotals:
    return DocumentTotals(
        subtotal=dec_in(row["subtotal"]),
        total_discount=dec_in(row["total_discount"]),
        taxable_amount=dec_in(row["taxable_amount"]),
        cgst=dec_in(row["cgst"]),
        sgst=dec_in(row["sgst"]),
        igst=dec_in(row["igst"]),
        total_gst=dec_in(row["total_gst"]),
        tcs_rate=dec_in(row["tcs_rate"]),
        tcs_amount=dec_in(row["tcs_amount"]),
        round_off=dec_in(row["round_off"]),
        grand_total=dec_in(row["grand_total"]),
        amount_in_words=row["amount_in_words"] or "Zero Rupees Only",
        gst_type=GSTType(row["gst_type"]),
        line_count=line_count,
    )


def max_sequence(numbers: list[str]) -> int:
    """Largest trailing integer found in a list of document numbers."""
    best = 0
    for number in numbers:
        tail = number.rsplit("/", 1)[-1].rsplit("-", 1)[-1]
        if tail.isdigit():
            best = max(best, int(tail))
    return best
