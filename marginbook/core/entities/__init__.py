"""Core domain entities."""

from marginbook.core.entities.calculation import (
    Allocation,
    CalcInput,
    CalcResults,
    Currency,
    ExtraCost,
    ExtraCostKind,
    ProductBreakdown,
    ProductInput,
)
from marginbook.core.entities.invoice import (
    InvoiceData,
    InvoiceItem,
    InvoiceParty,
    InvoiceTotals,
)
from marginbook.core.entities.record import (
    InvoiceRecord,
    Receipt,
    ReceiptPayload,
    RecordKind,
    User,
)

__all__ = [
    # Calculation entities
    "Currency",
    "Allocation",
    "ExtraCostKind",
    "ExtraCost",
    "ProductInput",
    "CalcInput",
    "ProductBreakdown",
    "CalcResults",
    # Invoice entities
    "InvoiceParty",
    "InvoiceItem",
    "InvoiceData",
    "InvoiceTotals",
    # Records
    "RecordKind",
    "User",
    "ReceiptPayload",
    "Receipt",
    "InvoiceRecord",
]
