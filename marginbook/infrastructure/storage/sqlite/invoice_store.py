"""
SQLite implementation of invoice storage.

Numbering follows the receipt store: ``BEGIN IMMEDIATE``, read the user's
highest invoice number, insert with the next one, commit.
"""

from datetime import datetime

import aiosqlite

from marginbook.config import get_logger
from marginbook.core.entities import InvoiceData, InvoiceRecord, InvoiceTotals, RecordKind
from marginbook.core.exceptions import DatabaseError, SequenceConflictError
from marginbook.core.interfaces import IInvoiceStore
from marginbook.infrastructure.storage.sqlite.codec import decode_model, encode_payload
from marginbook.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from marginbook.infrastructure.storage.sqlite.utils import (
    is_locked_error,
    label_pattern,
    parse_timestamp,
)

logger = get_logger(__name__)


class SQLiteInvoiceStore(IInvoiceStore):
    """SQLite implementation of invoice storage."""

    async def find_max_sequence_number(self, user_id: str) -> int | None:
        async with get_connection() as conn:
            return await self._max_number(conn, user_id)

    @staticmethod
    async def _max_number(conn: aiosqlite.Connection, user_id: str) -> int | None:
        cursor = await conn.execute(
            "SELECT MAX(invoice_number) FROM invoices WHERE user_id = ?",
            (user_id,),
        )
        row = await cursor.fetchone()
        return row[0] if row and row[0] is not None else None

    async def create_invoice(self, invoice: InvoiceRecord) -> InvoiceRecord:
        """
        Assign ``max + 1`` for the owner and insert, in one transaction.

        Raises:
            SequenceConflictError: If the number was taken or the write lock
                could not be obtained
        """
        now = datetime.utcnow()
        number = None
        try:
            async with get_transaction(immediate=True) as conn:
                number = (await self._max_number(conn, invoice.user_id) or 0) + 1
                await conn.execute(
                    """
                    INSERT INTO invoices (
                        id, user_id, invoice_number, label, usd_rate,
                        payload, totals, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        invoice.id,
                        invoice.user_id,
                        number,
                        invoice.label,
                        invoice.usd_rate,
                        self._encode(invoice.payload),
                        self._encode(invoice.totals),
                        now.isoformat(),
                        now.isoformat(),
                    ),
                )
        except aiosqlite.IntegrityError as e:
            if "invoice_number" not in str(e):
                raise DatabaseError("create_invoice", str(e))
            raise SequenceConflictError(RecordKind.INVOICE.value, invoice.user_id, number)
        except aiosqlite.OperationalError as e:
            if not is_locked_error(e):
                raise DatabaseError("create_invoice", str(e))
            raise SequenceConflictError(RecordKind.INVOICE.value, invoice.user_id, number)

        invoice.invoice_number = number
        invoice.created_at = now
        invoice.updated_at = now

        logger.info(
            "invoice_created",
            invoice_id=invoice.id,
            user_id=invoice.user_id,
            invoice_number=number,
        )
        return invoice

    async def get_invoice(self, invoice_id: str, user_id: str) -> InvoiceRecord | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM invoices WHERE id = ? AND user_id = ?",
                (invoice_id, user_id),
            )
            row = await cursor.fetchone()
            return self._row_to_invoice(row) if row else None

    async def update_invoice(self, invoice: InvoiceRecord) -> InvoiceRecord:
        invoice.updated_at = datetime.utcnow()
        async with get_transaction() as conn:
            await conn.execute(
                """
                UPDATE invoices
                SET label = ?, usd_rate = ?, payload = ?, totals = ?, updated_at = ?
                WHERE id = ? AND user_id = ?
                """,
                (
                    invoice.label,
                    invoice.usd_rate,
                    self._encode(invoice.payload),
                    self._encode(invoice.totals),
                    invoice.updated_at.isoformat(),
                    invoice.id,
                    invoice.user_id,
                ),
            )

        logger.info("invoice_updated", invoice_id=invoice.id, user_id=invoice.user_id)
        return invoice

    async def delete_invoice(self, invoice_id: str, user_id: str) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM invoices WHERE id = ? AND user_id = ?",
                (invoice_id, user_id),
            )
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("invoice_deleted", invoice_id=invoice_id, user_id=user_id)
        return deleted

    async def list_invoices(
        self,
        user_id: str,
        query: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[InvoiceRecord]:
        sql = "SELECT * FROM invoices WHERE user_id = ?"
        params: list = [user_id]
        if query:
            sql += " AND unicode_lower(COALESCE(label, '')) LIKE ? ESCAPE '\\'"
            params.append(label_pattern(query))
        sql += " ORDER BY invoice_number DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        async with get_connection() as conn:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
            return [self._row_to_invoice(r) for r in rows]

    @staticmethod
    def _encode(value: InvoiceData | InvoiceTotals | str) -> str:
        return value if isinstance(value, str) else encode_payload(value)

    @staticmethod
    def _row_to_invoice(row: aiosqlite.Row) -> InvoiceRecord:
        usd_rate = row["usd_rate"]
        return InvoiceRecord(
            id=row["id"],
            user_id=row["user_id"],
            invoice_number=row["invoice_number"],
            label=row["label"],
            usd_rate=float(usd_rate) if usd_rate is not None else None,
            payload=decode_model(row["payload"], InvoiceData),
            totals=decode_model(row["totals"], InvoiceTotals),
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )
