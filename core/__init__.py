"""
core - Core utilities and models for XARB.

This package contains:
- models.py: Data models (Venue, TokenDescriptor, QuoteResult, PathOutcome, Decision)
- constants.py: Enums and defaults
- exceptions.py: Typed exceptions with error codes
- math.py: Decimal normalization between raw units and amounts (no float)
- format_money.py: Money formatting for output
- logging.py: Structured JSON logging
"""

from core.constants import Classification, ErrorCode
from core.exceptions import (
    ConfigurationInvalid,
    MalformedAmountError,
    QuoteError,
    QuoteUnavailableError,
    XarbError,
)
from core.logging import get_logger, setup_logging
from core.math import bridge_raw_amount, to_decimal, to_raw_units
from core.models import (
    Decision,
    Direction,
    LegOutcome,
    PathOutcome,
    PathResult,
    QuoteResult,
    RunParameters,
    TokenDescriptor,
    Venue,
)

__all__ = [
    # Constants
    "Classification",
    "ErrorCode",
    # Exceptions
    "ConfigurationInvalid",
    "MalformedAmountError",
    "QuoteError",
    "QuoteUnavailableError",
    "XarbError",
    # Math
    "bridge_raw_amount",
    "to_decimal",
    "to_raw_units",
    # Models
    "Decision",
    "Direction",
    "LegOutcome",
    "PathOutcome",
    "PathResult",
    "QuoteResult",
    "RunParameters",
    "TokenDescriptor",
    "Venue",
    # Logging
    "get_logger",
    "setup_logging",
]
