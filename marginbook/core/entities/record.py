"""Persisted, user-owned records: receipts, invoices and their owners."""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from marginbook.core.entities.calculation import CalcInput, CalcResults
from marginbook.core.entities.invoice import InvoiceData, InvoiceTotals


def _utcnow() -> datetime:
    return datetime.utcnow()


def _new_id() -> str:
    return uuid4().hex


class RecordKind(str, Enum):
    """Kinds of record that carry a per-user sequence number."""

    RECEIPT = "receipt"
    INVOICE = "invoice"


class User(BaseModel):
    """Owner of receipts and invoices. Credentials live elsewhere."""

    id: str = Field(default_factory=_new_id)
    email: str
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class ReceiptPayload(BaseModel):
    """A saved calculation: the input and the results computed from it."""

    input: CalcInput
    results: CalcResults


class Receipt(BaseModel):
    """
    A saved margin calculation.

    ``receipt_number`` is 0 until the store assigns it at creation and never
    changes afterwards. ``payload`` holds the raw stored text when it could
    not be decoded.
    """

    id: str = Field(default_factory=_new_id)
    user_id: str
    receipt_number: int = 0
    label: str | None = None
    payload: ReceiptPayload | str
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def sequence_number(self) -> int:
        return self.receipt_number


class InvoiceRecord(BaseModel):
    """A saved invoice with its computed totals."""

    id: str = Field(default_factory=_new_id)
    user_id: str
    invoice_number: int = 0
    label: str | None = None
    usd_rate: float | None = None
    payload: InvoiceData | str
    totals: InvoiceTotals | str
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def sequence_number(self) -> int:
        return self.invoice_number
