"""SQLite implementation of user storage."""

from datetime import datetime

import aiosqlite

from marginbook.config import get_logger
from marginbook.core.entities import User
from marginbook.core.exceptions import DuplicateUserError
from marginbook.core.interfaces import IUserStore
from marginbook.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from marginbook.infrastructure.storage.sqlite.utils import parse_timestamp

logger = get_logger(__name__)


class SQLiteUserStore(IUserStore):
    """SQLite implementation of user storage."""

    async def create_user(self, user: User) -> User:
        now = datetime.utcnow()
        user.email = user.email.strip().lower()
        user.created_at = now
        user.updated_at = now
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO users (id, email, created_at, updated_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (user.id, user.email, now.isoformat(), now.isoformat()),
                )
        except aiosqlite.IntegrityError:
            raise DuplicateUserError(user.email)

        logger.info("user_created", user_id=user.id)
        return user

    async def get_user(self, user_id: str) -> User | None:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            return self._row_to_user(row) if row else None

    async def get_user_by_email(self, email: str) -> User | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM users WHERE email = ?",
                (email.strip().lower(),),
            )
            row = await cursor.fetchone()
            return self._row_to_user(row) if row else None

    async def delete_user(self, user_id: str) -> bool:
        """Delete a user; receipts and invoices go with them (ON DELETE CASCADE)."""
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info("user_deleted", user_id=user_id)
        return deleted

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        return User(
            id=row["id"],
            email=row["email"],
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )
