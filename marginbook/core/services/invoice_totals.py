"""Invoice totals: subtotal, discount, tax and shipping."""

from marginbook.core.entities.invoice import InvoiceData, InvoiceItem, InvoiceTotals
from marginbook.core.services.numeric import non_negative, running_total


def line_amount(item: InvoiceItem) -> float:
    return non_negative(item.quantity) * non_negative(item.unit_price)


def compute_invoice_totals(invoice: InvoiceData) -> InvoiceTotals:
    """
    Compute totals for an invoice.

    Quantities, prices, percentages and shipping are clamped to >= 0 and
    non-finite values count as 0. Tax applies after the discount; shipping
    is added untaxed.
    """
    subtotal = running_total(line_amount(item) for item in invoice.items)

    discount_pct = non_negative(invoice.discount_pct)
    tax_pct = non_negative(invoice.tax_pct)
    shipping = non_negative(invoice.shipping)

    discount = subtotal * (discount_pct / 100)
    taxable = max(subtotal - discount, 0.0)
    tax = taxable * (tax_pct / 100)

    return InvoiceTotals(
        subtotal=subtotal,
        discount=discount,
        taxable=taxable,
        tax=tax,
        shipping=shipping,
        total=taxable + tax + shipping,
    )
