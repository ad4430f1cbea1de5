"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from marginbook.core.entities import (
    CalcInput,
    CalcResults,
    InvoiceData,
    InvoiceTotals,
    ReceiptPayload,
)


class CalcResponse(BaseModel):
    """Result of a stateless calculation, echoing the input."""

    input: CalcInput
    results: CalcResults


class ReceiptResponse(BaseModel):
    """A saved calculation.

    ``payload`` is the raw stored text when it could not be decoded.
    """

    id: str = Field(..., description="Receipt ID")
    receipt_number: int = Field(..., ge=1, description="Per-user sequence number")
    display_number: str = Field(..., description="Display form, e.g. RCPT-0007")
    label: str | None = Field(default=None, description="Free-text label")
    payload: ReceiptPayload | str = Field(..., description="Stored input and results")
    created_at: datetime
    updated_at: datetime


class ReceiptListResponse(BaseModel):
    """Receipts of the current user, highest number first."""

    receipts: list[ReceiptResponse]
    total: int


class InvoiceResponse(BaseModel):
    """A saved invoice with its computed totals."""

    id: str = Field(..., description="Invoice ID")
    invoice_number: int = Field(..., ge=1, description="Per-user sequence number")
    display_number: str = Field(..., description="Display form, e.g. INV-0007")
    label: str | None = Field(default=None, description="Free-text label")
    usd_rate: float | None = Field(default=None, description="NGN per USD")
    payload: InvoiceData | str = Field(..., description="Stored invoice document")
    totals: InvoiceTotals | str = Field(..., description="Totals computed at save time")
    display_total: str | None = Field(
        default=None,
        description="Total with currency code, plus NGN equivalent for USD invoices",
    )
    created_at: datetime
    updated_at: datetime


class InvoiceListResponse(BaseModel):
    """Invoices of the current user, highest number first."""

    invoices: list[InvoiceResponse]
    total: int


class DatabaseHealthResponse(BaseModel):
    """Database connectivity and schema state."""

    status: str
    latency_ms: float | None = None
    schema_version: str | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: DatabaseHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. RECEIPT_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
