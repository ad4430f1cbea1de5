"""Invoice document entities."""

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from marginbook.core.entities.calculation import Currency


class InvoiceParty(BaseModel):
    """Sender or recipient block on an invoice."""

    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""

    @field_validator("name", "email", "phone", "address", mode="before")
    @classmethod
    def coerce_string(cls, v: object) -> object:
        """Ensure string fields are never None."""
        return "" if v is None else v


class InvoiceItem(BaseModel):
    """A single billable line."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    description: str = ""
    quantity: float = 0.0
    unit_price: float = 0.0


class InvoiceData(BaseModel):
    """
    Invoice document as entered by the user.

    ``from`` is a Python keyword, so the sender lives on ``from_party`` and
    travels as ``from`` on the wire and in storage.
    """

    model_config = ConfigDict(populate_by_name=True)

    invoice_number: str = ""
    issue_date: str = ""
    due_date: str = ""
    currency: Currency = Currency.NGN
    from_party: InvoiceParty = Field(default_factory=InvoiceParty, alias="from")
    to: InvoiceParty = Field(default_factory=InvoiceParty)
    notes: str | None = None
    terms: str | None = None
    discount_pct: float | None = None
    tax_pct: float | None = None
    shipping: float | None = None
    items: list[InvoiceItem] = Field(default_factory=list)


class InvoiceTotals(BaseModel):
    """Totals derived from InvoiceData."""

    subtotal: float = 0.0
    discount: float = 0.0
    taxable: float = 0.0
    tax: float = 0.0
    shipping: float = 0.0
    total: float = 0.0
