"""Outstanding balance rule for invoices.

Storage enforces the same rule as a generated column; this is the in-memory
form used by the entity.
"""

from src.core.money import round2


def outstanding_balance(total_amount: float, amount_paid: float) -> float:
    """balance = total_amount - amount_paid, rounded to cents."""
    return round2(total_amount - amount_paid)
