"""SQLite implementation of quotation storage."""

from datetime import datetime

import aiosqlite

from solarbooks.config import get_logger
from solarbooks.core.entities.payment_schedule import PaymentSchedule
from solarbooks.core.entities.quotation import Quotation, QuotationStatus
from solarbooks.core.entities.tax import GSTType
from solarbooks.core.exceptions import QuotationNotFoundError
from solarbooks.core.interfaces.quotation_store import IQuotationStore
from solarbooks.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
)
from solarbooks.infrastructure.storage.sqlite.row_codec import (
    TOTALS_COLUMNS,
    date_in,
    date_out,
    datetime_in,
    line_insert_sql,
    line_params,
    max_sequence,
    row_to_line,
    row_to_totals,
    totals_params,
)

logger = get_logger(__name__)

_HEADER_COLUMNS = (
    "quotation_number",
    "status",
    "lead_id",
    "client_name",
    "site_location",
    "place_of_supply",
    "company_gstin",
    "gst_type",
    "system_size_kw",
    "quotation_date",
    "validity_date",
    *TOTALS_COLUMNS,
    "payment_schedule",
    "terms_and_conditions",
    "sent_date",
    "accepted_date",
    "rejection_reason",
    "created_at",
    "updated_at",
)


class SQLiteQuotationStore(IQuotationStore):
    """SQLite implementation of quotation and quotation line storage."""

    async def create_quotation(self, quotation: Quotation) -> Quotation:
        now = datetime.utcnow()
        quotation.created_at = now
        quotation.updated_at = now

        params = (
            quotation.quotation_number,
            quotation.status.value,
            quotation.lead_id,
            quotation.client_name,
            quotation.site_location,
            quotation.place_of_supply,
            quotation.company_gstin,
            quotation.gst_type.value,
            quotation.system_size_kw,
            date_out(quotation.quotation_date),
            date_out(quotation.validity_date),
            *totals_params(quotation.totals),
            quotation.payment_schedule.model_dump_json() if quotation.payment_schedule else None,
            quotation.terms_and_conditions,
            date_out(quotation.sent_date),
            date_out(quotation.accepted_date),
            quotation.rejection_reason,
            quotation.created_at.isoformat(),
            quotation.updated_at.isoformat(),
        )
        placeholders = ", ".join("?" for _ in _HEADER_COLUMNS)

        async with get_transaction() as conn:
            cursor = await conn.execute(
                f"INSERT INTO quotations ({', '.join(_HEADER_COLUMNS)}) VALUES ({placeholders})",
                params,
            )
            quotation.id = cursor.lastrowid

            insert_line = line_insert_sql("quotation_items", "quotation_id")
            for line in quotation.items:
                cursor = await conn.execute(insert_line, line_params(quotation.id, line))
                line.id = cursor.lastrowid

            logger.info(
                "quotation_created",
                quotation_id=quotation.id,
                quotation_number=quotation.quotation_number,
                items=len(quotation.items),
                grand_total=str(quotation.totals.grand_total),
            )
            return quotation

    async def get_quotation(self, quotation_id: int) -> Quotation | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM quotations WHERE id = ?", (quotation_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None

            cursor = await conn.execute(
                "SELECT * FROM quotation_items WHERE quotation_id = ? ORDER BY line_number, id",
                (quotation_id,),
            )
            items = [row_to_line(r) for r in await cursor.fetchall()]
            quotation = self._row_to_quotation(row, line_count=len(items))
            quotation.items = items
            return quotation

    async def update_quotation(self, quotation: Quotation) -> Quotation:
        quotation.updated_at = datetime.utcnow()
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE quotations SET
                    status = ?, sent_date = ?, accepted_date = ?,
                    rejection_reason = ?, validity_date = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    quotation.status.value,
                    date_out(quotation.sent_date),
                    date_out(quotation.accepted_date),
                    quotation.rejection_reason,
                    date_out(quotation.validity_date),
                    quotation.updated_at.isoformat(),
                    quotation.id,
                ),
            )
            if cursor.rowcount == 0:
                raise QuotationNotFoundError(quotation.id)
            logger.info(
                "quotation_updated",
                quotation_id=quotation.id,
                status=quotation.status.value,
            )
            return quotation

    async def list_quotations(
        self,
        status: QuotationStatus | None = None,
        lead_id: int | None = None,
        client: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Quotation]:
        clauses: list[str] = []
        params: list = []
        if status is not None:
            clauses.append("status = ?")
            params.append(status.value)
        if lead_id is not None:
            clauses.append("lead_id = ?")
            params.append(lead_id)
        if client:
            clauses.append("client_name LIKE ?")
            params.append(f"%{client}%")

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM quotations {where}
                ORDER BY quotation_date DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (*params, limit, offset),
            )
            return [self._row_to_quotation(row) for row in await cursor.fetchall()]

    async def next_sequence(self, number_prefix: str) -> int:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT quotation_number FROM quotations WHERE quotation_number LIKE ?",
                (f"{number_prefix}%",),
            )
            numbers = [row[0] for row in await cursor.fetchall()]
        return max_sequence(numbers) + 1

    @staticmethod
    def _row_to_quotation(row: aiosqlite.Row, line_count: int = 0) -> Quotation:
        schedule = None
        if row["payment_schedule"]:
            schedule = PaymentSchedule.model_validate_json(row["payment_schedule"])

        quotation = Quotation(
            id=row["id"],
            quotation_number=row["quotation_number"],
            status=QuotationStatus(row["status"]),
            lead_id=row["lead_id"],
            client_name=row["client_name"],
            site_location=row["site_location"],
            place_of_supply=row["place_of_supply"],
            company_gstin=row["company_gstin"],
            gst_type=GSTType(row["gst_type"]),
            system_size_kw=row["system_size_kw"],
            validity_date=date_in(row["validity_date"]),
            totals=row_to_totals(row, line_count),
            payment_schedule=schedule,
            terms_and_conditions=row["terms_and_conditions"],
            sent_date=date_in(row["sent_date"]),
            accepted_date=date_in(row["accepted_date"]),
            rejection_reason=row["rejection_reason"],
            created_at=datetime_in(row["created_at"]),
            updated_at=datetime_in(row["updated_at"]),
        )
        quotation_date = date_in(row["quotation_date"])
        if quotation_date:
            quotation.quotation_date = quotation_date
        return quotation
