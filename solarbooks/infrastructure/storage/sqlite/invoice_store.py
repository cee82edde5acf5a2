"""SQLite implementation of GST invoice storage."""

from datetime import date, datetime

import aiosqlite

from solarbooks.config import get_logger
from solarbooks.core.entities.invoice import (
    OPEN_STATUSES,
    Invoice,
    InvoicePayment,
    InvoiceStatus,
    InvoiceType,
    PaymentMode,
)
from solarbooks.core.entities.tax import GSTType
from solarbooks.core.exceptions import InvoiceNotFoundError
from solarbooks.core.interfaces.invoice_store import IInvoiceStore
from solarbooks.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)
from solarbooks.infrastructure.storage.sqlite.row_codec import (
    TOTALS_COLUMNS,
    date_in,
    date_out,
    datetime_in,
    dec_in,
    dec_out,
    line_insert_sql,
    line_params,
    max_sequence,
    row_to_line,
    row_to_totals,
    totals_params,
)

logger = get_logger(__name__)

_HEADER_COLUMNS = (
    "invoice_number",
    "invoice_type",
    "status",
    "project_id",
    "quotation_id",
    "customer_name",
    "customer_gstin",
    "billing_address",
    "place_of_supply",
    "company_gstin",
    "reverse_charge",
    "gst_type",
    "invoice_date",
    "due_date",
    "payment_terms",
    *TOTALS_COLUMNS,
    "amount_paid",
    "notes",
    "created_at",
    "updated_at",
)


class SQLiteInvoiceStore(IInvoiceStore):
    """SQLite implementation of invoice, line item and payment storage."""

    async def create_invoice(self, invoice: Invoice) -> Invoice:
        now = datetime.utcnow()
        invoice.created_at = now
        invoice.updated_at = now

        params = (
            invoice.invoice_number,
            invoice.invoice_type.value,
            invoice.status.value,
            invoice.project_id,
            invoice.quotation_id,
            invoice.customer_name,
            invoice.customer_gstin,
            invoice.billing_address,
            invoice.place_of_supply,
            invoice.company_gstin,
            int(invoice.reverse_charge),
            invoice.gst_type.value,
            date_out(invoice.invoice_date),
            date_out(invoice.due_date),
            invoice.payment_terms,
            *totals_params(invoice.totals),
            dec_out(invoice.amount_paid),
            invoice.notes,
            invoice.created_at.isoformat(),
            invoice.updated_at.isoformat(),
        )
        placeholders = ", ".join("?" for _ in _HEADER_COLUMNS)

        async with get_transaction() as conn:
            cursor = await conn.execute(
                f"INSERT INTO invoices ({', '.join(_HEADER_COLUMNS)}) VALUES ({placeholders})",
                params,
            )
            invoice.id = cursor.lastrowid

            insert_line = line_insert_sql("invoice_items", "invoice_id")
            for line in invoice.items:
                cursor = await conn.execute(insert_line, line_params(invoice.id, line))
                line.id = cursor.lastrowid

            logger.info(
                "invoice_created",
                invoice_id=invoice.id,
                invoice_number=invoice.invoice_number,
                items=len(invoice.items),
                grand_total=str(invoice.totals.grand_total),
            )
            return invoice

    async def get_invoice(self, invoice_id: int) -> Invoice | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM invoices WHERE id = ?", (invoice_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return await self._load_invoice(conn, row)

    async def get_invoice_by_number(self, invoice_number: str) -> Invoice | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM invoices WHERE invoice_number = ?", (invoice_number,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return await self._load_invoice(conn, row)

    async def update_invoice(self, invoice: Invoice) -> Invoice:
        invoice.updated_at = datetime.utcnow()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE invoices SET
                    status = ?, amount_paid = ?, due_date = ?,
                    payment_terms = ?, notes = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    invoice.status.value,
                    dec_out(invoice.amount_paid),
                    date_out(invoice.due_date),
                    invoice.payment_terms,
                    invoice.notes,
                    invoice.updated_at.isoformat(),
                    invoice.id,
                ),
            )
            if cursor.rowcount == 0:
                raise InvoiceNotFoundError(invoice.id)
            logger.info("invoice_updated", invoice_id=invoice.id, status=invoice.status.value)
            return invoice

    async def list_invoices(
        self,
        status: InvoiceStatus | None = None,
        invoice_type: InvoiceType | None = None,
        project_id: int | None = None,
        customer: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Invoice]:
        clauses: list[str] = []
        params: list = []
        if status is not None:
            clauses.append("status = ?")
            params.append(status.value)
        if invoice_type is not None:
            clauses.append("invoice_type = ?")
            params.append(invoice_type.value)
        if project_id is not None:
            clauses.append("project_id = ?")
            params.append(project_id)
        if customer:
            clauses.append("customer_name LIKE ?")
            params.append(f"%{customer}%")

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM invoices {where}
                ORDER BY invoice_date DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            return [self._row_to_invoice(row) for row in await cursor.fetchall()]

    async def list_past_due(self, today: date) -> list[Invoice]:
        statuses = [s.value for s in OPEN_STATUSES]
        marks = ", ".join("?" for _ in statuses)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM invoices
                WHERE status IN ({marks})
                  AND due_date IS NOT NULL
                  AND due_date < ?
                ORDER BY due_date, id
                """,
                (*statuses, today.isoformat()),
            )
            return [self._row_to_invoice(row) for row in await cursor.fetchall()]

    async def next_sequence(self, number_prefix: str) -> int:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT invoice_number FROM invoices WHERE invoice_number LIKE ?",
                (f"{number_prefix}%",),
            )
            numbers = [row[0] for row in await cursor.fetchall()]
        return max_sequence(numbers) + 1

    async def record_payment(
        self, payment: InvoicePayment, invoice: Invoice
    ) -> InvoicePayment:
        """
        Apply *payment* to the invoice row and insert it, in one transaction.

        The paid amount and status are re-read under the write lock and the
        payment is applied to them, so concurrent payments cannot both pass
        the balance check. *invoice* is updated to the stored values.
        """
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "SELECT amount_paid, status FROM invoices WHERE id = ?",
                (payment.invoice_id,),
            )
            row = await cursor.fetchone()
            if row is None:
                raise InvoiceNotFoundError(payment.invoice_id)

            invoice.amount_paid = dec_in(row["amount_paid"])
            invoice.status = InvoiceStatus(row["status"])
            invoice.apply_payment(payment.amount)
            invoice.updated_at = datetime.utcnow()

            cursor = await conn.execute(
                """
                INSERT INTO invoice_payments (
                    invoice_id, amount, payment_date, payment_mode,
                    reference_number, remarks, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    payment.invoice_id,
                    dec_out(payment.amount),
                    date_out(payment.payment_date),
                    payment.payment_mode.value,
                    payment.reference_number,
                    payment.remarks,
                    payment.created_at.isoformat(),
                ),
            )
            payment.id = cursor.lastrowid

            await conn.execute(
                "UPDATE invoices SET amount_paid = ?, status = ?, updated_at = ? WHERE id = ?",
                (
                    dec_out(invoice.amount_paid),
                    invoice.status.value,
                    invoice.updated_at.isoformat(),
                    payment.invoice_id,
                ),
            )
            logger.info(
                "invoice_payment_recorded",
                invoice_id=invoice.id,
                payment_id=payment.id,
                amount=str(payment.amount),
                status=invoice.status.value,
            )
            return payment

    async def list_payments(self, invoice_id: int) -> list[InvoicePayment]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM invoice_payments WHERE invoice_id = ? ORDER BY id",
                (invoice_id,),
            )
            return [self._row_to_payment(row) for row in await cursor.fetchall()]

    async def _load_invoice(self, conn: aiosqlite.Connection, row: aiosqlite.Row) -> Invoice:
        cursor = await conn.execute(
            "SELECT * FROM invoice_items WHERE invoice_id = ? ORDER BY line_number, id",
            (row["id"],),
        )
        items = [row_to_line(r) for r in await cursor.fetchall()]
        invoice = self._row_to_invoice(row, line_count=len(items))
        invoice.items = items
        return invoice

    @staticmethod
    def _row_to_invoice(row: aiosqlite.Row, line_count: int = 0) -> Invoice:
        invoice = Invoice(
            id=row["id"],
            invoice_number=row["invoice_number"],
            invoice_type=InvoiceType(row["invoice_type"]),
            status=InvoiceStatus(row["status"]),
            project_id=row["project_id"],
            quotation_id=row["quotation_id"],
            customer_name=row["customer_name"],
            customer_gstin=row["customer_gstin"],
            billing_address=row["billing_address"],
            place_of_supply=row["place_of_supply"],
            company_gstin=row["company_gstin"],
            reverse_charge=bool(row["reverse_charge"]),
            gst_type=GSTType(row["gst_type"]),
            due_date=date_in(row["due_date"]),
            payment_terms=row["payment_terms"],
            totals=row_to_totals(row, line_count),
            amount_paid=dec_in(row["amount_paid"]),
            notes=row["notes"],
            created_at=datetime_in(row["created_at"]),
            updated_at=datetime_in(row["updated_at"]),
        )
        invoice_date = date_in(row["invoice_date"])
        if invoice_date:
            invoice.invoice_date = invoice_date
        return invoice

    @staticmethod
    def _row_to_payment(row: aiosqlite.Row) -> InvoicePayment:
        payment = InvoicePayment(
            id=row["id"],
            invoice_id=row["invoice_id"],
            amount=dec_in(row["amount"]),
            payment_mode=PaymentMode(row["payment_mode"]),
            reference_number=row["reference_number"],
            remarks=row["remarks"],
            created_at=datetime_in(row["created_at"]),
        )
        payment_date = date_in(row["payment_date"])
        if payment_date:
            payment.payment_date = payment_date
        return payment
