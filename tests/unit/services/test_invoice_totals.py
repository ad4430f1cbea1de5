"""Tests for invoice totals."""

import functools
import math
import operator

import pytest

from marginbook.core.entities import InvoiceData, InvoiceItem
from marginbook.core.services.invoice_totals import compute_invoice_totals, line_amount


class TestComputeInvoiceTotals:
    def test_discount_tax_and_shipping(self, sample_invoice_data):
        totals = compute_invoice_totals(InvoiceData.model_validate(sample_invoice_data))
        assert totals.subtotal == 600
        assert totals.discount == pytest.approx(60)
        assert totals.taxable == pytest.approx(540)
        assert totals.tax == pytest.approx(27)
        assert totals.shipping == 20
        assert totals.total == pytest.approx(587)

    def test_empty_invoice(self):
        totals = compute_invoice_totals(InvoiceData())
        assert totals.model_dump() == {
            "subtotal": 0.0,
            "discount": 0.0,
            "taxable": 0.0,
            "tax": 0.0,
            "shipping": 0.0,
            "total": 0.0,
        }

    def test_negative_and_nan_values_clamped(self):
        invoice = InvoiceData(
            discount_pct=-10,
            tax_pct=math.nan,
            shipping=-5,
            items=[
                InvoiceItem(quantity=-1, unit_price=100),
                InvoiceItem(quantity=2, unit_price=math.inf),
                InvoiceItem(quantity=2, unit_price=25),
            ],
        )
        totals = compute_invoice_totals(invoice)
        assert totals.subtotal == 50
        assert totals.discount == 0
        assert totals.tax == 0
        assert totals.shipping == 0
        assert totals.total == 50

    def test_full_discount_floors_taxable_at_zero(self):
        invoice = InvoiceData(discount_pct=150, tax_pct=10, shipping=5, items=[InvoiceItem(quantity=1, unit_price=100)])
        totals = compute_invoice_totals(invoice)
        assert totals.taxable == 0
        assert totals.tax == 0
        assert totals.total == 5

    def test_shipping_is_not_taxed(self):
        invoice = InvoiceData(tax_pct=10, shipping=100, items=[InvoiceItem(quantity=1, unit_price=100)])
        assert compute_invoice_totals(invoice).total == pytest.approx(210)

    def test_subtotal_adds_lines_in_order(self):
        items = [InvoiceItem(quantity=1, unit_price=0.1) for _ in range(10)]

        totals = compute_invoice_totals(InvoiceData(items=items))

        assert totals.subtotal == functools.reduce(operator.add, [0.1] * 10, 0.0)
        assert totals.total == totals.subtotal


class TestLineAmount:
    def test_line_amount(self):
        assert line_amount(InvoiceItem(quantity=3, unit_price=2.5)) == 7.5
