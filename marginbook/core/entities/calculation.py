"""
Margin calculation entities with Pydantic v2 validation.

Inputs are validated structurally here; numeric coercion (NaN, negatives,
missing values) happens at the boundary of each compute function.
"""

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator, model_validator


class Currency(str, Enum):
    """Supported currencies."""

    NGN = "NGN"
    USD = "USD"


class Allocation(str, Enum):
    """How an amount-kind extra cost is spread across an order."""

    PER_UNIT = "per-unit"
    PER_ORDER = "per-order"


class ExtraCostKind(str, Enum):
    """Flat amount or percentage of revenue."""

    AMOUNT = "amount"
    PERCENT = "percent"


def _new_id() -> str:
    return uuid4().hex


class ExtraCost(BaseModel):
    """Additional cost line such as shipping, duty or commission."""

    id: str = Field(default_factory=_new_id)
    label: str = ""
    kind: ExtraCostKind = ExtraCostKind.AMOUNT
    amount: float | None = None
    currency: Currency | None = None
    percent: float | None = None
    allocation: Allocation = Allocation.PER_ORDER


class ProductInput(BaseModel):
    """One product line in a margin calculation."""

    id: str = Field(default_factory=_new_id)
    name: str | None = None
    quantity: float = 0.0
    unit_sell_price: float = 0.0
    unit_supplier_cost: float = 0.0
    unit_production_overhead: float = 0.0
    markup_pct: float = 0.0

    @field_validator(
        "quantity",
        "unit_sell_price",
        "unit_supplier_cost",
        "unit_production_overhead",
        "markup_pct",
        mode="before",
    )
    @classmethod
    def default_missing(cls, v: object) -> object:
        """Explicit nulls mean the same as an absent field."""
        return 0.0 if v is None else v


class CalcInput(BaseModel):
    """
    Complete input to one margin calculation.

    Extra costs without a currency are tagged with the base currency here,
    once, so the calculator never has to guess.
    """

    base_currency: Currency = Currency.NGN
    usd_rate: float = 1.0
    products: list[ProductInput] = Field(default_factory=list)
    extras: list[ExtraCost] = Field(default_factory=list)
    target_margin_pct: float = 0.0

    @field_validator("usd_rate", mode="before")
    @classmethod
    def default_rate(cls, v: object) -> object:
        return 1.0 if v is None else v

    @field_validator("target_margin_pct", mode="before")
    @classmethod
    def default_target(cls, v: object) -> object:
        return 0.0 if v is None else v

    @model_validator(mode="after")
    def resolve_extra_currencies(self) -> "CalcInput":
        for extra in self.extras:
            if extra.currency is None:
                extra.currency = self.base_currency
        return self


class ProductBreakdown(BaseModel):
    """Per-product revenue, cost and profit."""

    product_id: str
    name: str
    quantity: float = 0.0
    revenue: float = 0.0
    supplier_cost: float = 0.0
    production_overhead: float = 0.0
    gross_profit: float = 0.0


class CalcResults(BaseModel):
    """Aggregate results derived from a CalcInput. Never stored on its own."""

    revenue: float = 0.0
    net_revenue: float = 0.0
    supplier: float = 0.0
    prod_overhead: float = 0.0
    extras_total: float = 0.0
    withholding_tax: float = 0.0
    gross_profit: float = 0.0
    margin_pct: float = 0.0
    profit_per_unit: float = 0.0
    net_revenue_per_unit: float = 0.0
    required_unit_price: float = 0.0
    product_breakdown: list[ProductBreakdown] = Field(default_factory=list)
