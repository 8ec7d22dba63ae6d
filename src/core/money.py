"""Monetary rounding shared by every amount the system computes."""

from decimal import ROUND_HALF_UP, Decimal

VAT_RATE = 0.05

# Input limits for priced lines and document totals
MAX_QUANTITY = 1_000_000
MAX_RATE = 1_000_000_000
MAX_DOCUMENT_TOTAL = 999_999_999_999.99

_CENT = Decimal("0.01")


def round2(value: float) -> float:
    """Round half-up to 2 decimal places.

    Goes through the shortest decimal repr of the float so that values such
    as 1.005 round to 1.01 rather than following their binary expansion.
    """
    return float(Decimal(repr(float(value))).quantize(_CENT, rounding=ROUND_HALF_UP))


def compute_amount(quantity: float, rate: float) -> float:
    """Line amount for a quantity at a unit rate."""
    return round2(quantity * rate)
