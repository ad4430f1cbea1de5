"""Tests for currency conversion and formatting."""

import math

import pytest

from marginbook.core.entities import Currency
from marginbook.core.services import format_amount, format_with_conversion, to_base


class TestToBase:
    def test_same_currency_is_identity(self):
        assert to_base(100, Currency.NGN, Currency.NGN, 1500) == 100
        assert to_base(100, Currency.USD, Currency.USD, 1500) == 100

    def test_usd_into_ngn(self):
        assert to_base(10, Currency.USD, Currency.NGN, 1500) == 15000

    def test_ngn_into_usd(self):
        assert to_base(15000, Currency.NGN, Currency.USD, 1500) == pytest.approx(10)

    def test_no_source_currency_returns_amount(self):
        assert to_base(42, None, Currency.USD, 1500) == 42

    @pytest.mark.parametrize("rate", [0, -5, math.nan, None])
    def test_bad_rate_counts_as_one(self, rate):
        assert to_base(10, Currency.USD, Currency.NGN, rate) == 10

    def test_bad_amount_counts_as_zero(self):
        assert to_base(math.nan, Currency.USD, Currency.NGN, 1500) == 0


class TestFormatting:
    def test_format_amount(self):
        assert format_amount(1234567.5) == "1,234,567.5"
        assert format_amount(1000) == "1,000"
        assert format_amount(2.50) == "2.5"
        assert format_amount(0) == "0"

    def test_usd_shows_ngn_equivalent(self):
        assert format_with_conversion(Currency.USD, 10, 1500) == "USD 10 (NGN 15,000)"

    def test_usd_without_rate(self):
        assert format_with_conversion(Currency.USD, 10, 0) == "USD 10"

    def test_ngn_plain(self):
        assert format_with_conversion(Currency.NGN, 2500, 1500) == "NGN 2,500"
