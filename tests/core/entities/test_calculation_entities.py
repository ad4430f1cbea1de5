"""Tests for calculation entities."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from marginbook.core.entities import (
    Allocation,
    CalcInput,
    Currency,
    ExtraCost,
    ExtraCostKind,
    ProductInput,
)


class TestProductInput:
    def test_defaults(self):
        product = ProductInput()
        assert product.quantity == 0.0
        assert product.unit_sell_price == 0.0
        assert product.name is None
        assert product.id

    def test_null_numbers_become_zero(self):
        product = ProductInput(quantity=None, unit_sell_price=None)
        assert product.quantity == 0.0
        assert product.unit_sell_price == 0.0

    def test_ids_are_unique(self):
        assert ProductInput().id != ProductInput().id

    def test_rejects_non_numeric_text(self):
        with pytest.raises(PydanticValidationError):
            ProductInput(quantity="lots")


class TestExtraCost:
    def test_defaults(self):
        extra = ExtraCost()
        assert extra.kind == ExtraCostKind.AMOUNT
        assert extra.allocation == Allocation.PER_ORDER
        assert extra.currency is None

    def test_enum_values_on_the_wire(self):
        extra = ExtraCost(kind="percent", allocation="per-unit", percent=5)
        assert extra.kind == ExtraCostKind.PERCENT
        assert extra.allocation == Allocation.PER_UNIT
        dumped = extra.model_dump(mode="json")
        assert dumped["allocation"] == "per-unit"
        assert dumped["kind"] == "percent"


class TestCalcInput:
    def test_defaults(self):
        calc = CalcInput()
        assert calc.base_currency == Currency.NGN
        assert calc.usd_rate == 1.0
        assert calc.products == []
        assert calc.extras == []
        assert calc.target_margin_pct == 0.0

    def test_missing_extra_currency_takes_base(self):
        calc = CalcInput(base_currency="USD", extras=[{"amount": 10}])
        assert calc.extras[0].currency == Currency.USD

    def test_explicit_extra_currency_is_kept(self):
        calc = CalcInput(base_currency="USD", extras=[{"amount": 10, "currency": "NGN"}])
        assert calc.extras[0].currency == Currency.NGN

    def test_null_rate_and_target(self):
        calc = CalcInput(usd_rate=None, target_margin_pct=None)
        assert calc.usd_rate == 1.0
        assert calc.target_margin_pct == 0.0

    def test_unknown_currency_rejected(self):
        with pytest.raises(PydanticValidationError):
            CalcInput(base_currency="EUR")
