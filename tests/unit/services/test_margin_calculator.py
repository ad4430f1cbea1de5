"""Tests for the margin calculator."""

import functools
import math
import operator

import pytest

from marginbook.core.entities import CalcInput, ExtraCost, ProductInput
from marginbook.core.services.margin_calculator import (
    WITHHOLDING_RATE,
    compute_calculator,
    compute_extra_cost,
    compute_product_breakdown,
    required_revenue,
    required_unit_price,
)


@pytest.fixture
def calc(sample_calc_input) -> CalcInput:
    return CalcInput.model_validate(sample_calc_input)


class TestComputeCalculator:
    def test_single_product_breakdown(self, calc):
        results = compute_calculator(calc)

        assert results.revenue == 1000
        assert results.supplier == 400
        assert results.prod_overhead == 100
        assert results.extras_total == 0
        assert results.withholding_tax == pytest.approx(20)
        assert results.net_revenue == pytest.approx(980)
        assert results.gross_profit == pytest.approx(480)
        assert results.margin_pct == pytest.approx(48.9795918, rel=1e-6)
        assert results.profit_per_unit == pytest.approx(48)
        assert results.net_revenue_per_unit == pytest.approx(98)

    def test_product_breakdown_lines(self, calc):
        results = compute_calculator(calc)
        assert len(results.product_breakdown) == 1
        line = results.product_breakdown[0]
        assert line.product_id == "p1"
        assert line.name == "Tote bag"
        assert line.gross_profit == 500

    def test_empty_input(self):
        results = compute_calculator(CalcInput())
        assert results.revenue == 0
        assert results.net_revenue == 0
        assert results.margin_pct == 0
        assert results.profit_per_unit == 0
        assert results.required_unit_price == 0
        assert results.product_breakdown == []

    def test_is_pure(self, calc):
        before = calc.model_dump()
        first = compute_calculator(calc)
        second = compute_calculator(calc)
        assert first == second
        assert calc.model_dump() == before

    def test_multiple_products_sum(self):
        calc = CalcInput(
            products=[
                ProductInput(quantity=2, unit_sell_price=50, unit_supplier_cost=10),
                ProductInput(quantity=3, unit_sell_price=100, unit_production_overhead=20),
            ]
        )
        results = compute_calculator(calc)
        assert results.revenue == 400
        assert results.supplier == 20
        assert results.prod_overhead == 60
        assert len(results.product_breakdown) == 2

    def test_totals_add_products_in_order(self):
        calc = CalcInput(
            products=[ProductInput(quantity=1, unit_sell_price=0.1, unit_supplier_cost=0.1) for _ in range(10)]
        )
        expected = functools.reduce(operator.add, [0.1] * 10, 0.0)

        results = compute_calculator(calc)

        assert results.revenue == expected
        assert results.supplier == expected
        assert results.revenue != 1.0

    def test_nan_and_negative_inputs_never_raise(self):
        calc = CalcInput(
            usd_rate=math.nan,
            products=[ProductInput(quantity=-5, unit_sell_price=math.nan, unit_supplier_cost=math.inf)],
            extras=[ExtraCost(amount=math.nan), ExtraCost(kind="percent", percent=-10)],
            target_margin_pct=math.nan,
        )
        results = compute_calculator(calc)
        for value in results.model_dump(exclude={"product_breakdown"}).values():
            assert math.isfinite(value)
        assert results.revenue == 0
        assert results.extras_total == 0

    def test_unnamed_product_gets_default_name(self):
        results = compute_calculator(CalcInput(products=[ProductInput(quantity=1)]))
        assert results.product_breakdown[0].name == "Product"

    def test_loss_gives_negative_margin(self):
        calc = CalcInput(products=[ProductInput(quantity=1, unit_sell_price=100, unit_supplier_cost=200)])
        results = compute_calculator(calc)
        assert results.gross_profit == pytest.approx(-102)
        assert results.margin_pct < 0


class TestExtraCosts:
    def test_per_unit_usd_extra_in_ngn_base(self, calc):
        calc.usd_rate = 1500
        extra = ExtraCost(amount=50, currency="USD", allocation="per-unit")
        assert compute_extra_cost(extra, calc, revenue=1000, total_quantity=10) == 750000

    def test_per_order_extra_ignores_quantity(self, calc):
        extra = ExtraCost(amount=250, allocation="per-order", currency="NGN")
        assert compute_extra_cost(extra, calc, revenue=1000, total_quantity=10) == 250

    def test_per_unit_with_no_quantity(self, calc):
        extra = ExtraCost(amount=250, allocation="per-unit", currency="NGN")
        assert compute_extra_cost(extra, calc, revenue=0, total_quantity=0) == 0

    def test_percent_extra_ignores_allocation(self, calc):
        per_unit = ExtraCost(kind="percent", percent=5, allocation="per-unit")
        per_order = ExtraCost(kind="percent", percent=5, allocation="per-order")
        assert compute_extra_cost(per_unit, calc, revenue=1000, total_quantity=10) == 50
        assert compute_extra_cost(per_order, calc, revenue=1000, total_quantity=10) == 50

    def test_extras_feed_gross_profit(self, sample_calc_input):
        sample_calc_input["extras"] = [
            {"kind": "amount", "amount": 80, "allocation": "per-order"},
            {"kind": "percent", "percent": 2},
        ]
        results = compute_calculator(CalcInput.model_validate(sample_calc_input))
        assert results.extras_total == pytest.approx(100)
        assert results.gross_profit == pytest.approx(380)

    def test_missing_currency_means_base(self):
        calc = CalcInput(base_currency="USD", usd_rate=1500, extras=[{"amount": 10}])
        assert compute_extra_cost(calc.extras[0], calc, revenue=0, total_quantity=0) == 10


class TestRequiredPrice:
    def test_required_unit_price_for_target(self, sample_calc_input):
        sample_calc_input["target_margin_pct"] = 20
        results = compute_calculator(CalcInput.model_validate(sample_calc_input))
        expected = 500 / (0.8 * (1 - WITHHOLDING_RATE)) / 10
        assert results.required_unit_price == pytest.approx(expected)

    def test_required_price_hits_target(self):
        price = required_unit_price(500, 10, 20)
        calc = CalcInput(
            products=[ProductInput(quantity=10, unit_sell_price=price, unit_supplier_cost=50)],
            target_margin_pct=20,
        )
        assert compute_calculator(calc).margin_pct == pytest.approx(20)

    @pytest.mark.parametrize("target", [100, 150])
    def test_unreachable_target(self, target):
        assert required_revenue(500, target) == 0
        assert required_unit_price(500, 10, target) == 0

    def test_zero_quantity(self):
        assert required_unit_price(500, 0, 20) == 0

    def test_zero_target(self):
        assert required_revenue(980, 0) == pytest.approx(1000)


class TestProductBreakdown:
    def test_negative_quantity_clamped(self):
        line = compute_product_breakdown(ProductInput(quantity=-3, unit_sell_price=10))
        assert line.quantity == 0
        assert line.revenue == 0
