"""
Numeric input sanitation shared by every compute function.

Calculators never raise on bad numbers: anything that is not a finite real
number is replaced by a fallback before it reaches the arithmetic.
"""

import math
from collections.abc import Iterable
from decimal import Decimal
from typing import Any


def sanitize_number(value: Any, fallback: float = 0.0) -> float:
    """
    Return ``value`` as a float if it is a finite real number, else ``fallback``.

    None, NaN, infinities, booleans, strings and other objects all fall back.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return fallback
    number = float(value)
    if not math.isfinite(number):
        return fallback
    return number


def non_negative(value: Any) -> float:
    """Sanitize and clamp to >= 0."""
    return max(sanitize_number(value), 0.0)


def positive_rate(value: Any) -> float:
    """Exchange rates must be finite and > 0; anything else becomes 1."""
    rate = sanitize_number(value, fallback=1.0)
    return rate if rate > 0 else 1.0


def running_total(values: Iterable[float]) -> float:
    """
    Plain left-to-right float addition.

    Same result on every interpreter; ``sum()`` of floats is compensated
    from Python 3.12 on.
    """
    total = 0.0
    for value in values:
        total += value
    return total
