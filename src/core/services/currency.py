"""Region to currency mapping for display and amount-in-words rendering."""

from typing import NamedTuple


class CurrencyNames(NamedTuple):
    """Major and minor unit names used in amount-in-words text."""

    main: str
    sub: str


CURRENCY_CODES: dict[str, str] = {
    "UAE": "AED",
    "SAUDI": "SAR",
}

CURRENCY_NAMES: dict[str, CurrencyNames] = {
    "UAE": CurrencyNames("Dirhams", "Fils"),
    "SAUDI": CurrencyNames("Riyals", "Halalas"),
}

DEFAULT_REGION = "UAE"


def _region_key(region: object) -> str:
    # Accepts Region enum members as well as raw strings
    return getattr(region, "value", region)  # type: ignore[return-value]


def currency_code(region: object) -> str:
    """ISO currency code for a region; unknown regions fall back to AED."""
    return CURRENCY_CODES.get(_region_key(region), CURRENCY_CODES[DEFAULT_REGION])


def currency_names(region: object) -> CurrencyNames:
    """Unit names for a region; unknown regions fall back to UAE names."""
    return CURRENCY_NAMES.get(_region_key(region), CURRENCY_NAMES[DEFAULT_REGION])


def format_currency(amount: float, region: object) -> str:
    """Format as ``1,234.50 AED``."""
    return f"{amount:,.2f} {currency_code(region)}"
