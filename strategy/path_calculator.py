"""
strategy/path_calculator.py - Two-leg cross-venue path calculation.

One implementation for both directions: the Direction value decides which
venue is the origin and which the destination.

    origin:      quote token -> base token
    destination: base token  -> quote token

Amounts between legs are carried as normalized Decimals and re-encoded
with the destination venue's precision (truncating), because the same
logical token can have different decimals on each venue.
"""

import asyncio
from decimal import Decimal
from typing import Awaitable, Callable, Optional

from chains.quote_source import QuoteSource
from core.constants import DISPLAY_DECIMALS
from core.exceptions import QuoteError, QuoteUnavailableError
from core.format_money import format_money, format_signed
from core.logging import get_logger, log_leg
from core.math import bridge_raw_amount, calculate_profit, to_decimal, to_raw_units
from core.models import (
    Direction,
    LegOutcome,
    PathOutcome,
    PathResult,
    QuoteResult,
    TokenDescriptor,
)

logger = get_logger("xarb.strategy.path")

Sleep = Callable[[float], Awaitable[None]]


class PathCalculator:
    """
    Computes the round trip for one direction.

    Usage:
        calculator = PathCalculator(source, base_token, quote_token, delay_seconds=Decimal("1"))
        outcome = await calculator.compute_path(direction, Decimal("500"))
    """

    def __init__(
        self,
        source: QuoteSource,
        base_token: TokenDescriptor,
        quote_token: TokenDescriptor,
        delay_seconds: Decimal = Decimal("1"),
        sleep: Optional[Sleep] = None,
    ):
        self.source = source
        self.base_token = base_token
        self.quote_token = quote_token
        self.delay_seconds = delay_seconds
        self._sleep = sleep or asyncio.sleep

    async def compute_path(
        self,
        direction: Direction,
        initial_amount: Decimal,
    ) -> Optional[PathOutcome]:
        """
        Compute one direction.

        Returns:
            PathOutcome, or None if either leg failed
        """
        result = await self.compute_path_result(direction, initial_amount)
        return result.outcome

    async def compute_path_result(
        self,
        direction: Direction,
        initial_amount: Decimal,
    ) -> PathResult:
        """
        Compute one direction, keeping the failure code when it fails.

        Quote failures never propagate: the path collapses to a PathResult
        without outcome and the caller moves on.
        """
        try:
            outcome = await self._run_legs(direction, initial_amount)
        except QuoteError as e:
            logger.warning(
                f"Failed to calculate {direction.label}: {e}",
                extra={
                    "context": {
                        "path": direction.label,
                        "error_code": e.code.value,
                        **e.details,
                    }
                },
            )
            return PathResult(direction=direction.label, error_code=e.code)

        return PathResult(direction=direction.label, outcome=outcome)

    async def _run_legs(self, direction: Direction, initial_amount: Decimal) -> PathOutcome:
        origin, destination = direction.origin, direction.destination
        base, quote = self.base_token, self.quote_token
        label = direction.label

        logger.info(
            f"Path: {origin.name} {initial_amount} {quote.symbol} -> {base.symbol} "
            f"-> {destination.name} {quote.symbol}",
            extra={"context": {"path": label, "initial_amount": str(initial_amount)}},
        )

        # Leg 1: quote -> base on origin
        raw_in = to_raw_units(initial_amount, quote.decimals_on(origin))
        leg1 = await self._quote_leg(
            1, origin.chain_id, quote.address_on(origin), base.address_on(origin), raw_in
        )
        base_amount = to_decimal(leg1.to_token_amount, base.decimals_on(origin))
        log_leg(
            logger, 1, label, origin.name,
            str(initial_amount), quote.symbol,
            format_money(base_amount, DISPLAY_DECIMALS), base.symbol,
        )

        # Same token, destination precision
        raw_bridged = bridge_raw_amount(
            leg1.to_token_amount, base.decimals_on(origin), base.decimals_on(destination)
        )

        await self._sleep(float(self.delay_seconds))

        # Leg 2: base -> quote on destination
        leg2 = await self._quote_leg(
            2, destination.chain_id,
            base.address_on(destination), quote.address_on(destination), raw_bridged,
        )
        final_amount = to_decimal(leg2.to_token_amount, quote.decimals_on(destination))
        log_leg(
            logger, 2, label, destination.name,
            format_money(base_amount, DISPLAY_DECIMALS), base.symbol,
            format_money(final_amount, DISPLAY_DECIMALS), quote.symbol,
        )

        profit = calculate_profit(final_amount, initial_amount)
        logger.info(
            f"Net result: {format_money(final_amount, DISPLAY_DECIMALS)} {quote.symbol} "
            f"({format_signed(profit, DISPLAY_DECIMALS)} profit)",
            extra={"context": {"path": label, "final_amount": str(final_amount), "profit": str(profit)}},
        )

        return PathOutcome(
            path=label,
            initial_amount=initial_amount,
            final_amount=final_amount,
            profit=profit,
            legs=(
                LegOutcome(
                    venue=origin.name,
                    from_symbol=quote.symbol,
                    to_symbol=base.symbol,
                    amount=base_amount,
                ),
                LegOutcome(
                    venue=destination.name,
                    from_symbol=base.symbol,
                    to_symbol=quote.symbol,
                    amount=final_amount,
                ),
            ),
        )

    async def _quote_leg(
        self,
        step: int,
        chain_id: str,
        from_address: str,
        to_address: str,
        raw_amount: str,
    ) -> QuoteResult:
        try:
            quote = await self.source.get_quote(chain_id, from_address, to_address, raw_amount)
            if quote is None:
                raise QuoteUnavailableError("Quote source returned no result")
            return quote
        except QuoteError as e:
            e.details.setdefault("step", step)
            e.details.setdefault("chain_id", chain_id)
            raise
