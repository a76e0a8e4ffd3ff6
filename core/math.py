# PATH: core/math.py
"""
core/math.py - Decimal normalization between raw token units and amounts.

CRITICAL: No float allowed in quoting/price/PnL.
Raw amounts travel as integer strings, normalized amounts as Decimal.
Conversions toward raw units truncate, so a cross-venue re-encoding never
asks for more than the previous leg produced.
"""

from decimal import Decimal, ROUND_FLOOR, InvalidOperation, localcontext

from core.constants import DECIMAL_CONTEXT_PRECISION, MAX_TOKEN_DECIMALS
from core.exceptions import ConfigurationInvalid, MalformedAmountError


# =============================================================================
# SAFE CONVERSIONS (NO FLOAT)
# =============================================================================

def safe_decimal(value: int | str | Decimal) -> Decimal:
    """
    Safely convert value to a finite Decimal.

    Raises MalformedAmountError if a float is passed, conversion fails,
    or the result is NaN/Infinity.
    """
    if isinstance(value, float):
        raise MalformedAmountError(
            "Float values are not allowed. Use int, str, or Decimal.",
            details={"value": value, "type": type(value).__name__},
        )
    if isinstance(value, str):
        value = value.strip()

    try:
        result = Decimal(value)
    except (InvalidOperation, ValueError, TypeError) as e:
        raise MalformedAmountError(
            f"Cannot convert to Decimal: {value!r}",
            details={"value": value, "type": type(value).__name__, "error": str(e)},
        )

    if not result.is_finite():
        raise MalformedAmountError(
            f"Amount is not finite: {value!r}",
            details={"value": str(value)},
        )
    return result


def _check_decimals(decimals: int) -> None:
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise ConfigurationInvalid(
            f"Token decimals must be an int, got {type(decimals).__name__}",
            details={"decimals": decimals},
        )
    if decimals < 0 or decimals > MAX_TOKEN_DECIMALS:
        raise ConfigurationInvalid(
            f"Invalid decimals: {decimals}",
            details={"decimals": decimals},
        )


# =============================================================================
# RAW UNIT CONVERSIONS
# =============================================================================

def to_decimal(raw_amount: str | int, decimals: int) -> Decimal:
    """
    Convert a raw integer token amount to a normalized Decimal.

    Example: to_decimal("1000000", 6) -> Decimal('1.000000')  # 1 USDC

    Args:
        raw_amount: Amount in the token's smallest denomination
        decimals: Token decimals on the venue the amount came from

    Returns:
        raw_amount / 10**decimals, exact

    Raises:
        MalformedAmountError: raw_amount is not numeric
    """
    _check_decimals(decimals)
    amount = safe_decimal(raw_amount)
    with localcontext() as ctx:
        ctx.prec = DECIMAL_CONTEXT_PRECISION
        return amount.scaleb(-decimals)


def to_raw_units(amount: Decimal | int | str, decimals: int) -> str:
    """
    Convert a normalized amount to raw integer units, truncating.

    Example: to_raw_units(Decimal("1.2345678"), 6) -> '1234567'

    Args:
        amount: Normalized amount
        decimals: Token decimals on the venue the amount is sent to

    Returns:
        floor(amount * 10**decimals) as an integer string
    """
    _check_decimals(decimals)
    value = safe_decimal(amount)
    with localcontext() as ctx:
        ctx.prec = DECIMAL_CONTEXT_PRECISION
        scaled = value.scaleb(decimals).to_integral_value(rounding=ROUND_FLOOR)
    return str(int(scaled))


def bridge_raw_amount(raw_amount: str | int, from_decimals: int, to_decimals: int) -> str:
    """
    Re-encode a raw amount from one precision to another.

    Same logical token, different venue. Truncates when narrowing:
    bridge_raw_amount("1234567891", 9, 6) -> '1234567'
    """
    return to_raw_units(to_decimal(raw_amount, from_decimals), to_decimals)


# =============================================================================
# PNL
# =============================================================================

def calculate_profit(final_amount: Decimal, initial_amount: Decimal) -> Decimal:
    """Signed profit, nothing deducted beyond what the quotes encode."""
    with localcontext() as ctx:
        ctx.prec = DECIMAL_CONTEXT_PRECISION
        return final_amount - initial_amount


def calculate_roi_pct(profit: Decimal, initial_amount: Decimal) -> Decimal:
    """
    Return on investment in percent.

    Returns Decimal("0") for a zero initial amount.
    """
    if initial_amount == 0:
        return Decimal("0")
    return (profit / initial_amount) * Decimal("100")
