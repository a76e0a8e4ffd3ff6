"""
chains/quote_source.py - Quote source interface.

Anything that can price a single-venue swap. The path calculator only
depends on this protocol, so tests drive it with scripted fakes.
"""

from typing import Protocol, runtime_checkable

from core.models import QuoteResult


@runtime_checkable
class QuoteSource(Protocol):
    """
    Prices one swap on one venue.

    Implementations raise QuoteError (QuoteUnavailableError,
    MalformedAmountError) instead of returning a partial result.
    Calls may be rate-limited; callers space consecutive calls.
    """

    async def get_quote(
        self,
        chain_id: str,
        from_token_address: str,
        to_token_address: str,
        raw_amount: str,
    ) -> QuoteResult:
        ...
