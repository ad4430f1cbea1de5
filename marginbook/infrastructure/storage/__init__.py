"""Storage infrastructure implementations."""

from marginbook.infrastructure.storage.sqlite import (
    SQLiteInvoiceStore,
    SQLiteReceiptStore,
    SQLiteUserStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    "SQLiteUserStore",
    "SQLiteReceiptStore",
    "SQLiteInvoiceStore",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
