"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from pydantic import BaseModel, Field

from marginbook.core.entities import CalcInput, InvoiceData


class CalcRequest(CalcInput):
    """Stateless margin calculation. Same shape as a saved calculator input."""


class ReceiptCreateRequest(BaseModel):
    """Save a margin calculation as a new receipt."""

    label: str | None = Field(
        default=None,
        description="Free-text label shown in receipt lists",
        examples=["Tote bags, March order"],
    )
    input: CalcInput = Field(..., description="Calculator input to compute and store")


class ReceiptUpdateRequest(BaseModel):
    """Update a receipt.

    Results are recomputed only when a new input is given. The receipt
    number never changes.
    """

    label: str | None = Field(default=None, description="New label; keeps the stored one if omitted")
    input: CalcInput | None = Field(default=None, description="New calculator input")


class InvoiceCreateRequest(BaseModel):
    """Create an invoice; totals are computed server-side."""

    label: str | None = Field(default=None, description="Free-text label")
    usd_rate: float | None = Field(
        default=None,
        description="NGN per USD at the time of invoicing",
        examples=[1500.0],
    )
    invoice: InvoiceData = Field(..., description="Invoice document")


class InvoiceUpdateRequest(BaseModel):
    """Update an invoice.

    Totals are always recomputed, from the new invoice document if given or
    else from the stored one.
    """

    label: str | None = Field(default=None, description="New label; keeps the stored one if omitted")
    usd_rate: float | None = Field(default=None, description="New rate; keeps the stored one if omitted")
    invoice: InvoiceData | None = Field(default=None, description="New invoice document")
