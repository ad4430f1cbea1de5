"""SQLite storage implementations."""

from marginbook.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from marginbook.infrastructure.storage.sqlite.invoice_store import SQLiteInvoiceStore
from marginbook.infrastructure.storage.sqlite.receipt_store import SQLiteReceiptStore
from marginbook.infrastructure.storage.sqlite.user_store import SQLiteUserStore

# Singleton instances
_user_store: SQLiteUserStore | None = None
_receipt_store: SQLiteReceiptStore | None = None
_invoice_store: SQLiteInvoiceStore | None = None


async def get_user_store() -> SQLiteUserStore:
    """Get singleton user store instance."""
    global _user_store
    if _user_store is None:
        _user_store = SQLiteUserStore()
    return _user_store


async def get_receipt_store() -> SQLiteReceiptStore:
    """Get singleton receipt store instance."""
    global _receipt_store
    if _receipt_store is None:
        _receipt_store = SQLiteReceiptStore()
    return _receipt_store


async def get_invoice_store() -> SQLiteInvoiceStore:
    """Get singleton invoice store instance."""
    global _invoice_store
    if _invoice_store is None:
        _invoice_store = SQLiteInvoiceStore()
    return _invoice_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteUserStore",
    "SQLiteReceiptStore",
    "SQLiteInvoiceStore",
    # Factory functions
    "get_user_store",
    "get_receipt_store",
    "get_invoice_store",
]
