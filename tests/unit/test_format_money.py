# PATH: tests/unit/test_format_money.py
"""
Unit tests for format_money module.
"""

import unittest
from decimal import Decimal

from core.format_money import (
    format_money,
    format_pct,
    format_signed,
    format_usd,
)


class TestFormatMoney(unittest.TestCase):
    """Tests for format_money function."""

    def test_format_string_input(self):
        self.assertEqual(format_money("123.456789"), "123.456789")
        self.assertEqual(format_money("0"), "0.000000")
        self.assertEqual(format_money("1000"), "1000.000000")

    def test_format_decimal_input(self):
        self.assertEqual(format_money(Decimal("510.123456")), "510.123456")

    def test_format_int_input(self):
        self.assertEqual(format_money(100), "100.000000")

    def test_rounds_half_up(self):
        self.assertEqual(format_money("0.005", 2), "0.01")
        self.assertEqual(format_money("1.0000005"), "1.000001")

    def test_high_precision_input(self):
        """18-decimal amounts keep their integer part intact."""
        self.assertEqual(
            format_money(Decimal("123456789012345678.000000000000000001"), 2),
            "123456789012345678.00",
        )

    def test_none_and_empty(self):
        self.assertEqual(format_money(None), "0.000000")
        self.assertEqual(format_money("   "), "0.000000")
        self.assertEqual(format_money(None, 0), "0")

    def test_unparseable_falls_back_to_zero(self):
        self.assertEqual(format_money("abc", 2), "0.00")
        self.assertEqual(format_money("NaN", 2), "0.00")


class TestSignedAndUsd(unittest.TestCase):
    """Tests for signed, dollar and percent helpers."""

    def test_positive_gets_plus(self):
        self.assertEqual(format_signed(Decimal("10.123456")), "+10.12")

    def test_negative_keeps_minus(self):
        self.assertEqual(format_signed(Decimal("-3.2")), "-3.20")

    def test_zero_has_no_sign(self):
        self.assertEqual(format_signed(Decimal("0")), "0.00")

    def test_signed_with_six_decimals(self):
        self.assertEqual(format_signed(Decimal("10.123456"), 6), "+10.123456")

    def test_usd(self):
        self.assertEqual(format_usd(Decimal("40")), "$40.00")
        self.assertEqual(format_usd(Decimal("-3.2")), "-$3.20")

    def test_pct(self):
        self.assertEqual(format_pct(Decimal("8")), "8.00%")


if __name__ == "__main__":
    unittest.main()
