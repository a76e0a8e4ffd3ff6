# PATH: core/exceptions.py
"""
Typed exceptions for XARB.

Quote failures are absorbed per path; configuration failures are fatal.
"""

from typing import Optional

from core.constants import ErrorCode


class XarbError(Exception):
    """Base exception for XARB."""

    default_code = ErrorCode.UNKNOWN

    def __init__(
        self,
        message: str = "",
        code: Optional[ErrorCode] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

    def __str__(self):
        return f"[{self.code.value}] {self.message}"


class QuoteError(XarbError):
    """
    A single leg could not be quoted.

    Collapses the whole path to "no result" for the current cycle.
    """
    pass


class QuoteUnavailableError(QuoteError):
    """Transport error, non-2xx status, error payload or empty result set."""

    default_code = ErrorCode.QUOTE_UNAVAILABLE


class MalformedAmountError(QuoteError):
    """An amount could not be parsed as a finite number."""

    default_code = ErrorCode.MALFORMED_AMOUNT


class ConfigurationInvalid(XarbError):
    """Missing or invalid run parameters, token descriptors or venues."""

    default_code = ErrorCode.CONFIGURATION_INVALID
