"""
tests/unit/test_math.py - Tests for core/math.py

Critical tests for:
- No-float enforcement
- Raw unit / decimal conversions at high precision
- Truncation when re-encoding between precisions
"""

import pytest
from decimal import Decimal

from core.constants import ErrorCode
from core.exceptions import ConfigurationInvalid, MalformedAmountError
from core.math import (
    bridge_raw_amount,
    calculate_profit,
    calculate_roi_pct,
    safe_decimal,
    to_decimal,
    to_raw_units,
)


class TestNoFloatEnforcement:
    """Floats never enter money arithmetic."""

    def test_safe_decimal_rejects_float(self):
        with pytest.raises(MalformedAmountError) as exc_info:
            safe_decimal(1.5)
        assert "Float values are not allowed" in str(exc_info.value)

    def test_safe_decimal_accepts_int_str_decimal(self):
        assert safe_decimal(100) == Decimal("100")
        assert safe_decimal(" 123.456 ") == Decimal("123.456")
        assert safe_decimal(Decimal("99.99")) == Decimal("99.99")

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity"])
    def test_safe_decimal_rejects_non_finite(self, value):
        with pytest.raises(MalformedAmountError):
            safe_decimal(value)


class TestToDecimal:
    """Raw integer amount -> normalized Decimal."""

    def test_usdc_six_decimals(self):
        assert to_decimal("1000000", 6) == Decimal("1")

    def test_eighteen_decimals_exact(self):
        # 1.000000000000000001 cannot be represented as a float
        assert to_decimal("1000000000000000001", 18) == Decimal("1.000000000000000001")

    def test_zero_decimals(self):
        assert to_decimal("42", 0) == Decimal("42")

    def test_large_uint256_amount(self):
        raw = str(2**256 - 1)
        assert to_decimal(raw, 18) == Decimal(raw[:-18] + "." + raw[-18:])

    def test_accepts_int(self):
        assert to_decimal(510123456, 6) == Decimal("510.123456")

    @pytest.mark.parametrize("raw", ["", "abc", "12x", None])
    def test_malformed_raises(self, raw):
        with pytest.raises(MalformedAmountError) as exc_info:
            to_decimal(raw, 6)
        assert exc_info.value.code == ErrorCode.MALFORMED_AMOUNT

    @pytest.mark.parametrize("decimals", [-1, 37])
    def test_invalid_decimals_raises(self, decimals):
        with pytest.raises(ConfigurationInvalid):
            to_decimal("1", decimals)


class TestToRawUnits:
    """Normalized Decimal -> raw integer string, truncating."""

    def test_whole_amount(self):
        assert to_raw_units(Decimal("500"), 18) == "500000000000000000000"

    def test_truncates_never_rounds_up(self):
        assert to_raw_units(Decimal("1.2345679"), 6) == "1234567"
        assert to_raw_units(Decimal("0.9999999"), 6) == "999999"

    def test_below_smallest_unit_is_zero(self):
        assert to_raw_units(Decimal("0.0000001"), 6) == "0"

    def test_returns_plain_integer_string(self):
        # No exponent notation, even for round numbers
        assert to_raw_units(Decimal("1E+3"), 6) == "1000000000"

    def test_accepts_str(self):
        assert to_raw_units("500", 6) == "500000000"

    def test_rejects_float(self):
        with pytest.raises(MalformedAmountError):
            to_raw_units(0.1, 6)


class TestRoundTrip:
    """to_raw_units(to_decimal(r, d), d) never overshoots r."""

    @pytest.mark.parametrize("raw", ["0", "1", "999999", "510123456", "1000000000000000001", str(10**30 + 7)])
    @pytest.mark.parametrize("decimals", [0, 6, 9, 18])
    def test_integral_raw_amounts_round_trip_exactly(self, raw, decimals):
        assert to_raw_units(to_decimal(raw, decimals), decimals) == raw

    def test_fractional_raw_amount_truncates(self):
        # A raw amount is integral by definition; anything finer is dropped
        assert int(to_raw_units(to_decimal("12.9", 0), 0)) <= 12


class TestBridgeRawAmount:
    """Same token, different precision per venue."""

    def test_narrowing_truncates(self):
        assert bridge_raw_amount("1234567891", 9, 6) == "1234567"

    def test_widening_is_exact(self):
        assert bridge_raw_amount("1000000000", 9, 18) == "1000000000000000000"

    def test_eighteen_to_nine(self):
        # 1.000000000999999999 tokens -> 1.000000000 on a 9-decimal venue
        assert bridge_raw_amount("1000000000999999999", 18, 9) == "1000000000"


class TestProfit:
    def test_profit_is_exact_difference(self):
        assert calculate_profit(Decimal("510.123456"), Decimal("500")) == Decimal("10.123456")

    def test_negative_profit(self):
        assert calculate_profit(Decimal("497.5"), Decimal("500")) == Decimal("-2.5")

    def test_roi_pct(self):
        assert calculate_roi_pct(Decimal("40"), Decimal("500")) == Decimal("8")

    def test_roi_pct_zero_initial(self):
        assert calculate_roi_pct(Decimal("40"), Decimal("0")) == Decimal("0")
