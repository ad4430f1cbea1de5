"""Single-rate conversion between NGN and USD."""

from marginbook.core.entities.calculation import Currency
from marginbook.core.services.numeric import positive_rate, sanitize_number


def to_base(
    amount: float,
    source_currency: Currency | None,
    base_currency: Currency,
    usd_rate: float,
) -> float:
    """
    Convert ``amount`` from ``source_currency`` into ``base_currency``.

    ``usd_rate`` is the number of NGN per USD. A non-finite amount counts as
    0, a non-finite or non-positive rate counts as 1, and an amount with no
    source currency is returned unconverted. Never raises.
    """
    value = sanitize_number(amount)
    rate = positive_rate(usd_rate)
    if source_currency is None:
        return value
    if base_currency == Currency.NGN:
        return value if source_currency == Currency.NGN else value * rate
    return value if source_currency == Currency.USD else value / rate


def format_amount(value: float) -> str:
    """Group thousands, at most two fraction digits, no trailing zeros."""
    text = f"{sanitize_number(value):,.2f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_with_conversion(currency: Currency, amount: float, usd_rate: float) -> str:
    """
    Render an amount with its currency code.

    USD amounts also show their NGN equivalent when a valid rate is known,
    e.g. ``USD 10 (NGN 15,000)``.
    """
    value = sanitize_number(amount)
    primary = f"{currency.value} {format_amount(value)}"
    rate = sanitize_number(usd_rate)
    if currency == Currency.USD and rate > 0:
        return f"{primary} (NGN {format_amount(value * rate)})"
    return primary
