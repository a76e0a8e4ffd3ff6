# PATH: core/constants.py
"""
Constants for XARB.

Contains enums, defaults, and configuration constants.
"""

from decimal import Decimal
from enum import Enum
from typing import Final


# =============================================================================
# QUOTE SERVICE
# =============================================================================

OKX_BASE_URL: Final[str] = "https://web3.okx.com"
OKX_QUOTE_PATH: Final[str] = "/api/v5/dex/aggregator/quote"

# Quotes are observation-only, no wallet is ever attached
ZERO_WALLET_ADDRESS: Final[str] = "0x0000000000000000000000000000000000000000"

DEFAULT_HTTP_TIMEOUT_SECONDS = 10


# =============================================================================
# RUN DEFAULTS
# =============================================================================

DEFAULT_INITIAL_AMOUNT_USD: Final[Decimal] = Decimal("500")
DEFAULT_PROFIT_THRESHOLD_USD: Final[Decimal] = Decimal("30")
DEFAULT_SLIPPAGE_TOLERANCE_PCT: Final[Decimal] = Decimal("1.0")
DEFAULT_MONITORING_INTERVAL_SECONDS: Final[Decimal] = Decimal("30")
DEFAULT_INTER_CALL_DELAY_MS = 1000

# Decimal precision per venue when env does not override it
# (token1 = base token, token2 = quote token)
DEFAULT_TOKEN_DECIMALS: Final[dict[tuple[str, int], int]] = {
    ("bsc", 1): 18,
    ("solana", 1): 9,
    ("bsc", 2): 18,
    ("solana", 2): 6,
}

# Exact arithmetic is guaranteed up to 18 decimals; the context is sized
# for any uint256 raw amount
MAX_TOKEN_DECIMALS = 36
DECIMAL_CONTEXT_PRECISION = 78

# Display precision for normalized token amounts
DISPLAY_DECIMALS = 6


class ErrorCode(str, Enum):
    """Error codes surfaced in logs and in per-path failure markers."""
    MALFORMED_AMOUNT = "MALFORMED_AMOUNT"
    QUOTE_UNAVAILABLE = "QUOTE_UNAVAILABLE"
    CONFIGURATION_INVALID = "CONFIGURATION_INVALID"
    UNKNOWN = "UNKNOWN"


class Classification(str, Enum):
    """Outcome of one evaluation cycle."""
    QUALIFYING = "QUALIFYING"
    MARGINAL = "MARGINAL"
    NONE = "NONE"
