"""
Margin calculator.

Layer-pure: turns a CalcInput into CalcResults with ordinary float
arithmetic. Division by a zero quantity or a non-positive margin
denominator yields 0, never an exception.
"""

from marginbook.core.entities.calculation import (
    Allocation,
    CalcInput,
    CalcResults,
    ExtraCost,
    ExtraCostKind,
    ProductBreakdown,
    ProductInput,
)
from marginbook.core.services.currency import to_base
from marginbook.core.services.numeric import non_negative, running_total, sanitize_number

# Withholding tax deducted from gross revenue. Fixed domain constant.
WITHHOLDING_RATE = 0.02
NET_REVENUE_SHARE = 1 - WITHHOLDING_RATE

DEFAULT_PRODUCT_NAME = "Product"


def compute_product_breakdown(product: ProductInput) -> ProductBreakdown:
    """Revenue, cost and profit for one product line."""
    quantity = non_negative(product.quantity)
    revenue = sanitize_number(product.unit_sell_price) * quantity
    supplier_cost = sanitize_number(product.unit_supplier_cost) * quantity
    production_overhead = sanitize_number(product.unit_production_overhead) * quantity
    return ProductBreakdown(
        product_id=product.id,
        name=product.name or DEFAULT_PRODUCT_NAME,
        quantity=quantity,
        revenue=revenue,
        supplier_cost=supplier_cost,
        production_overhead=production_overhead,
        gross_profit=revenue - supplier_cost - production_overhead,
    )


def compute_extra_cost(
    extra: ExtraCost,
    calc: CalcInput,
    revenue: float,
    total_quantity: float,
) -> float:
    """
    Value of one extra cost in the base currency.

    Percent extras always apply to total revenue; allocation only matters
    for amount extras.
    """
    if extra.kind == ExtraCostKind.PERCENT:
        return non_negative(extra.percent) / 100 * revenue

    as_base = to_base(
        non_negative(extra.amount),
        extra.currency,
        calc.base_currency,
        calc.usd_rate,
    )
    if extra.allocation == Allocation.PER_ORDER:
        return as_base
    return as_base * (total_quantity if total_quantity > 0 else 0.0)


def compute_calculator(calc: CalcInput) -> CalcResults:
    """
    Compute the full profitability breakdown for a calculation.

    Pure function: the same input always yields the same results.

    Args:
        calc: Products, extra costs, currency settings and target margin

    Returns:
        CalcResults in the base currency
    """
    breakdown = [compute_product_breakdown(p) for p in calc.products]

    revenue = running_total(b.revenue for b in breakdown)
    supplier = running_total(b.supplier_cost for b in breakdown)
    prod_overhead = running_total(b.production_overhead for b in breakdown)
    total_quantity = running_total(b.quantity for b in breakdown)

    extras_total = running_total(
        compute_extra_cost(extra, calc, revenue, total_quantity) for extra in calc.extras
    )
    production_cost = supplier + prod_overhead + extras_total

    withholding_tax = revenue * WITHHOLDING_RATE if revenue > 0 else 0.0
    net_revenue = max(revenue - withholding_tax, 0.0)
    gross_profit = net_revenue - production_cost
    margin_pct = (gross_profit / net_revenue) * 100 if net_revenue > 0 else 0.0

    profit_per_unit = gross_profit / total_quantity if total_quantity > 0 else 0.0
    net_revenue_per_unit = net_revenue / total_quantity if total_quantity > 0 else 0.0

    return CalcResults(
        revenue=revenue,
        net_revenue=net_revenue,
        supplier=supplier,
        prod_overhead=prod_overhead,
        extras_total=extras_total,
        withholding_tax=withholding_tax,
        gross_profit=gross_profit,
        margin_pct=margin_pct,
        profit_per_unit=profit_per_unit,
        net_revenue_per_unit=net_revenue_per_unit,
        required_unit_price=required_unit_price(
            production_cost, total_quantity, calc.target_margin_pct
        ),
        product_breakdown=breakdown,
    )


def required_revenue(production_cost: float, target_margin_pct: float) -> float:
    """
    Revenue needed to reach the target margin after withholding.

    Returns 0 when the target is 100% or more: with 2% withheld no revenue
    can reach it.
    """
    target_margin = non_negative(target_margin_pct) / 100
    denominator = (1 - target_margin) * NET_REVENUE_SHARE
    if denominator <= 0:
        return 0.0
    return production_cost / denominator


def required_unit_price(
    production_cost: float,
    total_quantity: float,
    target_margin_pct: float,
) -> float:
    """Unit price that yields the target margin across the whole order."""
    revenue = required_revenue(production_cost, target_margin_pct)
    if revenue > 0 and total_quantity > 0:
        return revenue / total_quantity
    return 0.0
