"""Tests for amount-in-words and lakh/crore formatting."""

from decimal import Decimal

import pytest

from solarbooks.core.services.indian_currency import (
    ZERO_WORDS,
    amount_in_words,
    format_indian_number,
    format_inr,
    number_to_words,
)


class TestAmountInWords:
    @pytest.mark.parametrize(
        "amount,words",
        [
            (2124, "Two Thousand One Hundred Twenty Four Rupees Only"),
            (101, "One Hundred One Rupees Only"),
            (Decimal("1250000.50"), "Twelve Lakh Fifty Thousand Rupees and Fifty Paise Only"),
            (100000000, "Ten Crore Rupees Only"),
            (10000000000, "One Thousand Crore Rupees Only"),
            (Decimal("0.5"), "Zero Rupees and Fifty Paise Only"),
            (-500, "Minus Five Hundred Rupees Only"),
        ],
    )
    def test_words(self, amount, words):
        assert amount_in_words(amount) == words

    @pytest.mark.parametrize("amount", [0, None, "abc", float("nan"), Decimal("0.001")])
    def test_zero_and_invalid(self, amount):
        assert amount_in_words(amount) == ZERO_WORDS

    def test_number_to_words_zero_is_empty(self):
        assert number_to_words(0) == ""
        assert number_to_words(19) == "Nineteen"
        assert number_to_words(90) == "Ninety"


class TestFormatting:
    def test_lakh_grouping(self):
        assert format_indian_number(Decimal("12345678.9")) == "1,23,45,678.90"
        assert format_indian_number(999) == "999.00"
        assert format_indian_number(100000, 0) == "1,00,000"

    def test_inr(self):
        assert format_inr(Decimal("1234567.891")) == "₹12,34,567.89"
        assert format_inr(-1500) == "-₹1,500.00"
        assert format_inr(2124, 0, symbol="Rs. ") == "Rs. 2,124"

    def test_invalid_formats_as_zero(self):
        assert format_indian_number("abc") == "0.00"
