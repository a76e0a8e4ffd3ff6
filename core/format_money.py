# PATH: core/format_money.py
"""
Money formatting for log and console output.

All money values are Decimal or str. Formatting never raises on
numeric input.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Union

from core.constants import DECIMAL_CONTEXT_PRECISION, DISPLAY_DECIMALS

MoneyLike = Union[str, Decimal, int, None]


def format_money(value: MoneyLike, decimals: int = DISPLAY_DECIMALS) -> str:
    """
    Format a money value with a fixed number of decimal places.

    Uses ROUND_HALF_UP (display only, never fed back into quoting).

    Example:
        >>> format_money("510.1234564")
        '510.123456'
        >>> format_money(None, 2)
        '0.00'
    """
    zero = f"0.{'0' * decimals}" if decimals > 0 else "0"
    if value is None:
        return zero

    try:
        if isinstance(value, bool):
            dec_value = Decimal(1 if value else 0)
        elif isinstance(value, str):
            if not value.strip():
                return zero
            dec_value = Decimal(value.strip())
        else:
            dec_value = Decimal(value)

        if not dec_value.is_finite():
            return zero

        with localcontext() as ctx:
            ctx.prec = DECIMAL_CONTEXT_PRECISION
            quantize_str = "0." + "0" * decimals if decimals > 0 else "0"
            rounded = dec_value.quantize(Decimal(quantize_str), rounding=ROUND_HALF_UP)

        return f"{rounded:f}"

    except (InvalidOperation, ValueError, TypeError):
        return zero


def format_signed(value: MoneyLike, decimals: int = 2) -> str:
    """
    Format with an explicit '+' for positive values.

    Example: format_signed(Decimal("10.123456")) -> '+10.12'
    """
    text = format_money(value, decimals)
    if value is not None and not text.startswith("-") and Decimal(text) > 0:
        return f"+{text}"
    return text


def format_usd(value: MoneyLike, decimals: int = 2) -> str:
    """Format as a dollar amount, e.g. '$40.00'."""
    text = format_money(value, decimals)
    if text.startswith("-"):
        return f"-${text[1:]}"
    return f"${text}"


def format_pct(value: MoneyLike) -> str:
    """Format a percentage value with two decimals, e.g. '8.00%'."""
    return f"{format_money(value, 2)}%"
