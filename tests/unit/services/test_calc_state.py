"""Tests for the stored calculator state loader."""

import math

import pytest

from marginbook.core.entities import Allocation, Currency, ExtraCostKind
from marginbook.core.exceptions import UnsupportedSchemaVersionError
from marginbook.core.services.calc_state import (
    CURRENT_SCHEMA_VERSION,
    LEGACY_SCHEMA_VERSION,
    default_calc_state,
    detect_schema_version,
    normalize_calc_state,
)


@pytest.fixture
def legacy_state() -> dict:
    return {
        "baseCurrency": "USD",
        "usdRate": 1500,
        "productName": "Mug",
        "quantity": 4,
        "unitSellPrice": 12,
        "unitSupplierCost": 5,
        "unitProductionOverhead": 1,
        "extras": [{"label": "Freight", "kind": "amount", "amount": 20, "allocation": "per-order"}],
        "targetMarginPct": 30,
    }


@pytest.fixture
def current_state() -> dict:
    return {
        "baseCurrency": "NGN",
        "usdRate": 1600,
        "products": [
            {"id": "a", "name": "Cap", "quantity": 2, "unitSellPrice": 3000},
            {"id": "b", "name": "Shirt", "quantity": 1, "unitSellPrice": 9000, "markupPct": 15},
        ],
        "extras": [{"kind": "percent", "percent": 5, "currency": "USD"}],
        "targetMarginPct": 25,
    }


class TestDetectSchemaVersion:
    def test_products_list_means_current(self, current_state):
        assert detect_schema_version(current_state) == CURRENT_SCHEMA_VERSION

    def test_flat_fields_mean_legacy(self, legacy_state):
        assert detect_schema_version(legacy_state) == LEGACY_SCHEMA_VERSION

    def test_empty_products_means_legacy(self):
        assert detect_schema_version({"products": []}) == LEGACY_SCHEMA_VERSION

    def test_non_mapping(self):
        assert detect_schema_version(None) == LEGACY_SCHEMA_VERSION


class TestNormalizeCalcState:
    def test_legacy_becomes_single_product(self, legacy_state):
        calc = normalize_calc_state(legacy_state)
        assert calc.base_currency == Currency.USD
        assert calc.usd_rate == 1500
        assert len(calc.products) == 1
        product = calc.products[0]
        assert product.name == "Mug"
        assert product.quantity == 4
        assert product.unit_sell_price == 12
        assert product.unit_supplier_cost == 5
        assert product.unit_production_overhead == 1
        assert calc.target_margin_pct == 30

    def test_legacy_extra_currency_defaults_to_base(self, legacy_state):
        calc = normalize_calc_state(legacy_state)
        extra = calc.extras[0]
        assert extra.label == "Freight"
        assert extra.currency == Currency.USD
        assert extra.allocation == Allocation.PER_ORDER

    def test_current_keeps_products(self, current_state):
        calc = normalize_calc_state(current_state)
        assert [p.id for p in calc.products] == ["a", "b"]
        assert calc.products[1].markup_pct == 15
        assert calc.products[0].unit_supplier_cost == 0
        assert calc.extras[0].kind == ExtraCostKind.PERCENT
        assert calc.extras[0].currency == Currency.USD

    def test_empty_products_falls_back_to_legacy_fields(self, legacy_state):
        legacy_state["products"] = []
        calc = normalize_calc_state(legacy_state, schema_version=CURRENT_SCHEMA_VERSION)
        assert calc.products[0].name == "Mug"

    def test_unsupported_version(self, current_state):
        with pytest.raises(UnsupportedSchemaVersionError) as exc_info:
            normalize_calc_state(current_state, schema_version=3)
        assert exc_info.value.details["supported"] == [1, 2]

    def test_non_mapping_gives_default(self):
        ignore_ids = {"products": {"__all__": {"id"}}}
        calc = normalize_calc_state("garbage")
        assert calc.model_dump(exclude=ignore_ids) == default_calc_state().model_dump(exclude=ignore_ids)
        assert len(calc.products) == 1

    def test_bad_values_are_sanitized(self):
        calc = normalize_calc_state(
            {
                "baseCurrency": "EUR",
                "usdRate": -1,
                "quantity": math.nan,
                "unitSellPrice": "12",
                "extras": [{"kind": "bogus", "allocation": "weekly", "amount": None}, "junk"],
                "targetMarginPct": None,
            }
        )
        assert calc.base_currency == Currency.NGN
        assert calc.usd_rate == 1
        assert calc.products[0].quantity == 0
        assert calc.products[0].unit_sell_price == 0
        assert len(calc.extras) == 1
        assert calc.extras[0].kind == ExtraCostKind.AMOUNT
        assert calc.extras[0].allocation == Allocation.PER_ORDER
        assert calc.extras[0].amount is None
        assert calc.target_margin_pct == 0

    def test_default_state(self):
        calc = default_calc_state()
        assert calc.base_currency == Currency.NGN
        assert calc.usd_rate == 1
        assert calc.extras == []
        assert len(calc.products) == 1
        blank = calc.products[0]
        assert blank.id
        assert blank.name == ""
        assert (blank.quantity, blank.unit_sell_price, blank.unit_supplier_cost) == (0, 0, 0)
        assert (blank.unit_production_overhead, blank.markup_pct) == (0, 0)

    def test_default_state_ids_are_fresh(self):
        assert default_calc_state().products[0].id != default_calc_state().products[0].id
