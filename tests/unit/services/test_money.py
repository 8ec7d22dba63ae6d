"""Tests for rounding, currency and amount-in-words."""

import pytest

from src.core.entities import Region
from src.core.money import compute_amount, round2
from src.core.services.amount_in_words import integer_to_words, to_words
from src.core.services.currency import currency_code, currency_names, format_currency


class TestRounding:
    @pytest.mark.parametrize(
        "value,expected",
        [(1.005, 1.01), (2.675, 2.68), (0.125, 0.13), (10.0, 10.0), (-1.005, -1.01)],
    )
    def test_round_half_up(self, value, expected):
        assert round2(value) == expected

    def test_compute_amount(self):
        assert compute_amount(3, 33.333) == 100.0


class TestCurrency:
    def test_codes(self):
        assert currency_code(Region.UAE) == "AED"
        assert currency_code("SAUDI") == "SAR"

    def test_unknown_region_falls_back(self):
        assert currency_code("QATAR") == "AED"
        assert currency_names("QATAR").main == "Dirhams"

    def test_format_currency(self):
        assert format_currency(1234.5, Region.UAE) == "1,234.50 AED"
        assert format_currency(0, Region.SAUDI) == "0.00 SAR"


class TestAmountInWords:
    def test_zero(self):
        assert to_words(0, Region.UAE) == "Zero Dirhams Only"

    def test_with_fils(self):
        assert (
            to_words(1500.50, Region.UAE)
            == "One Thousand Five Hundred Dirhams and Fifty Fils Only"
        )

    def test_saudi_millions(self):
        assert to_words(2_000_000, Region.SAUDI) == "Two Million Riyals Only"

    def test_fraction_only(self):
        assert to_words(0.5, Region.UAE) == "Zero Dirhams and Fifty Fils Only"

    def test_halalas(self):
        assert to_words(1.01, "SAUDI") == "One Riyals and One Halalas Only"

    def test_skips_empty_groups(self):
        assert integer_to_words(1_000_005) == "One Million Five"

    def test_teens_and_tens(self):
        assert integer_to_words(919) == "Nine Hundred Nineteen"
        assert integer_to_words(40) == "Forty"
        assert integer_to_words(346) == "Three Hundred Forty Six"

    def test_billions(self):
        assert integer_to_words(3_000_000_001) == "Three Billion One"

    def test_trillions(self):
        assert integer_to_words(2_000_000_000_007) == "Two Trillion Seven"

    def test_beyond_named_scales(self):
        assert integer_to_words(1_000_000_000_000_000) == "One Thousand Trillion"
        assert integer_to_words(5 * 10**24 + 3) == "Five Trillion Trillion Three"

    def test_totals_past_the_input_limit_render(self):
        words = to_words(10_500_000_000_000.0, Region.UAE)
        assert words == "Ten Trillion Five Hundred Billion Dirhams Only"
        assert to_words(1e300, Region.UAE).endswith("Dirhams Only")

    @pytest.mark.parametrize("amount", [float("inf"), float("nan")])
    def test_non_finite_raises(self, amount):
        with pytest.raises(ValueError, match="non-finite"):
            to_words(amount, Region.UAE)

    def test_negative_raises(self):
        with pytest.raises(ValueError, match="negative"):
            to_words(-1, Region.UAE)
