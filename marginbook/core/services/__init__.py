"""
Core business logic services.

Layer-pure services that depend only on:
- marginbook/core/entities/*
- marginbook/core/exceptions.py

NO infrastructure imports. Compute functions are pure and synchronous.
"""

from marginbook.core.services.calc_state import (
    CURRENT_SCHEMA_VERSION,
    default_calc_state,
    detect_schema_version,
    normalize_calc_state,
)
from marginbook.core.services.currency import format_amount, format_with_conversion, to_base
from marginbook.core.services.invoice_totals import compute_invoice_totals
from marginbook.core.services.margin_calculator import (
    NET_REVENUE_SHARE,
    WITHHOLDING_RATE,
    compute_calculator,
)
from marginbook.core.services.numeric import (
    non_negative,
    positive_rate,
    running_total,
    sanitize_number,
)
from marginbook.core.services.sequence_assigner import SequenceAssigner, format_sequence_number

__all__ = [
    # Numeric
    "sanitize_number",
    "non_negative",
    "positive_rate",
    "running_total",
    # Currency
    "to_base",
    "format_amount",
    "format_with_conversion",
    # Margin Calculator
    "compute_calculator",
    "WITHHOLDING_RATE",
    "NET_REVENUE_SHARE",
    # Invoice Totals
    "compute_invoice_totals",
    # Calculation state
    "normalize_calc_state",
    "detect_schema_version",
    "default_calc_state",
    "CURRENT_SCHEMA_VERSION",
    # Numbering
    "SequenceAssigner",
    "format_sequence_number",
]
