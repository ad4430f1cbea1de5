"""Core interfaces (ports) for dependency injection."""

from marginbook.core.interfaces.storage import (
    IInvoiceStore,
    IReceiptStore,
    IUserStore,
)

__all__ = [
    # Storage interfaces
    "IUserStore",
    "IReceiptStore",
    "IInvoiceStore",
]
