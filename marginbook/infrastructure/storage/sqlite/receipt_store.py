"""
SQLite implementation of receipt storage.

Receipt numbers are assigned inside a ``BEGIN IMMEDIATE`` transaction: the
write lock is held from the MAX() read through the insert, so two writers
can never both see the same maximum. The unique ``(user_id,
receipt_number)`` index rejects anything that slips past.
"""

from datetime import datetime

import aiosqlite

from marginbook.config import get_logger
from marginbook.core.entities import Receipt, ReceiptPayload, RecordKind
from marginbook.core.exceptions import DatabaseError, SequenceConflictError
from marginbook.core.interfaces import IReceiptStore
from marginbook.infrastructure.storage.sqlite.codec import decode_model, encode_payload
from marginbook.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from marginbook.infrastructure.storage.sqlite.utils import (
    is_locked_error,
    label_pattern,
    parse_timestamp,
)

logger = get_logger(__name__)


class SQLiteReceiptStore(IReceiptStore):
    """SQLite implementation of receipt storage."""

    async def find_max_sequence_number(self, user_id: str) -> int | None:
        async with get_connection() as conn:
            return await self._max_number(conn, user_id)

    @staticmethod
    async def _max_number(conn: aiosqlite.Connection, user_id: str) -> int | None:
        cursor = await conn.execute(
            "SELECT MAX(receipt_number) FROM receipts WHERE user_id = ?",
            (user_id,),
        )
        row = await cursor.fetchone()
        return row[0] if row and row[0] is not None else None

    async def create_receipt(self, receipt: Receipt) -> Receipt:
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
                number = (await self._max_number(conn, receipt.user_id) or 0) + 1
                await conn.execute(
                    """
                    INSERT INTO receipts (
                        id, user_id, receipt_number, label, payload,
                        created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        receipt.id,
                        receipt.user_id,
                        number,
                        receipt.label,
                        self._encode(receipt.payload),
                        now.isoformat(),
                        now.isoformat(),
                    ),
                )
        except aiosqlite.IntegrityError as e:
            if "receipt_number" not in str(e):
                raise DatabaseError("create_receipt", str(e))
            raise SequenceConflictError(RecordKind.RECEIPT.value, receipt.user_id, number)
        except aiosqlite.OperationalError as e:
            if not is_locked_error(e):
                raise DatabaseError("create_receipt", str(e))
            raise SequenceConflictError(RecordKind.RECEIPT.value, receipt.user_id, number)

        receipt.receipt_number = number
        receipt.created_at = now
        receipt.updated_at = now

        logger.info(
            "receipt_created",
            receipt_id=receipt.id,
            user_id=receipt.user_id,
            receipt_number=number,
        )
        return receipt

    async def get_receipt(self, receipt_id: str, user_id: str) -> Receipt | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM receipts WHERE id = ? AND user_id = ?",
                (receipt_id, user_id),
            )
            row = await cursor.fetchone()
            return self._row_to_receipt(row) if row else None

    async def update_receipt(self, receipt: Receipt) -> Receipt:
        receipt.updated_at = datetime.utcnow()
        async with get_transaction() as conn:
            await conn.execute(
                """
                UPDATE receipts SET label = ?, payload = ?, updated_at = ?
                WHERE id = ? AND user_id = ?
                """,
                (
                    receipt.label,
                    self._encode(receipt.payload),
                    receipt.updated_at.isoformat(),
                    receipt.id,
                    receipt.user_id,
                ),
            )

        logger.info("receipt_updated", receipt_id=receipt.id, user_id=receipt.user_id)
        return receipt

    async def delete_receipt(self, receipt_id: str, user_id: str) -> bool:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM receipts WHERE id = ? AND user_id = ?",
                (receipt_id, user_id),
            )
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("receipt_deleted", receipt_id=receipt_id, user_id=user_id)
        return deleted

    async def list_receipts(
        self,
        user_id: str,
        query: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Receipt]:
        sql = "SELECT * FROM receipts WHERE user_id = ?"
        params: list = [user_id]
        if query:
            sql += " AND unicode_lower(COALESCE(label, '')) LIKE ? ESCAPE '\\'"
            params.append(label_pattern(query))
        sql += " ORDER BY receipt_number DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        async with get_connection() as conn:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
            return [self._row_to_receipt(r) for r in rows]

    @staticmethod
    def _encode(payload: ReceiptPayload | str) -> str:
        return payload if isinstance(payload, str) else encode_payload(payload)

    @staticmethod
    def _row_to_receipt(row: aiosqlite.Row) -> Receipt:
        return Receipt(
            id=row["id"],
            user_id=row["user_id"],
            receipt_number=row["receipt_number"],
            label=row["label"],
            payload=decode_model(row["payload"], ReceiptPayload),
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )
