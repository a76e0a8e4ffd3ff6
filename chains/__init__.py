"""
chains/ - Quote source layer.

Modules:
- quote_source: QuoteSource protocol consumed by the path calculator
- okx_client: OKX DEX aggregator implementation
"""

from chains.okx_client import (
    OkxCredentials,
    OkxQuoteClient,
    QuoteStats,
    parse_quote_response,
    sign_request,
)
from chains.quote_source import QuoteSource

__all__ = [
    "OkxCredentials",
    "OkxQuoteClient",
    "QuoteSource",
    "QuoteStats",
    "parse_quote_response",
    "sign_request",
]
