"""
English amount-in-words rendering for printed quotations and invoices.

Example: 1500.50 in UAE -> "One Thousand Five Hundred Dirhams and Fifty Fils Only".
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from src.core.services.currency import currency_names

ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

# Short scale, smallest first
SCALES = ["", "Thousand", "Million", "Billion", "Trillion"]
LARGEST_SCALE = 1000 ** (len(SCALES) - 1)


def _below_thousand(n: int) -> str:
    if n == 0:
        return ""
    if n < 20:
        return ONES[n]
    if n < 100:
        return TENS[n // 10] + (" " + ONES[n % 10] if n % 10 else "")
    rest = _below_thousand(n % 100)
    return ONES[n // 100] + " Hundred" + (" " + rest if rest else "")


def integer_to_words(n: int) -> str:
    """Render a non-negative integer; zero renders as ``Zero``."""
    if n == 0:
        return "Zero"
    if n >= LARGEST_SCALE * 1000:
        # Beyond the named scales: "One Thousand Trillion" and so on
        high, low = divmod(n, LARGEST_SCALE)
        head = f"{integer_to_words(high)} {SCALES[-1]}"
        return f"{head} {integer_to_words(low)}" if low else head

    groups: list[str] = []
    scale = 0
    while n > 0:
        n, chunk = divmod(n, 1000)
        if chunk:
            words = _below_thousand(chunk)
            groups.append(f"{words} {SCALES[scale]}".strip())
        scale += 1
    return " ".join(reversed(groups))


def to_words(amount: float, region: object) -> str:
    """Render a monetary amount in words using the region's unit names."""
    if not math.isfinite(amount):
        raise ValueError("non-finite amounts cannot be rendered in words")
    if amount < 0:
        raise ValueError("negative amounts cannot be rendered in words")

    with localcontext() as ctx:
        # Wide enough for the integer digits of any finite float
        ctx.prec = 400
        cents_total = int(
            (Decimal(repr(float(amount))) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        )
    whole, cents = divmod(cents_total, 100)
    names = currency_names(region)

    result = f"{integer_to_words(whole)} {names.main}"
    if cents > 0:
        result += f" and {integer_to_words(cents)} {names.sub}"
    return result + " Only"
