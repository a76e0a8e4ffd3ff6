"""
strategy/selector.py - Opportunity selection across both directions.

Runs A->B then B->A, strictly sequentially, and classifies the cycle:

    QUALIFYING  best profit > threshold
    MARGINAL    0 < best profit <= threshold
    NONE        no path, or no positive profit

Profit and threshold are both in quote-token units, read as USD.
"""

import asyncio
from decimal import Decimal
from typing import Iterable, Optional

from core.constants import Classification
from core.logging import get_logger
from core.models import (
    Decision,
    Direction,
    PathOutcome,
    RunParameters,
    Venue,
)
from strategy.path_calculator import PathCalculator, Sleep

logger = get_logger("xarb.strategy.selector")


def select_best(outcomes: Iterable[Optional[PathOutcome]]) -> Optional[PathOutcome]:
    """
    Pick the most profitable outcome.

    The baseline is zero profit, so a non-positive outcome is never best.
    Only a strictly greater profit replaces the current best, so on a tie
    the outcome seen first wins.
    """
    best = None
    max_profit = Decimal("0")
    for outcome in outcomes:
        if outcome is not None and outcome.profit > max_profit:
            max_profit = outcome.profit
            best = outcome
    return best


def classify(best: Optional[PathOutcome], threshold: Decimal) -> Classification:
    """Classify a cycle from its best outcome."""
    if best is None or best.profit <= 0:
        return Classification.NONE
    if best.profit > threshold:
        return Classification.QUALIFYING
    return Classification.MARGINAL


class OpportunitySelector:
    """
    Evaluates both directions once per cycle.

    Usage:
        selector = OpportunitySelector(calculator, params, (solana, bsc))
        decision = await selector.evaluate(cycle=1)
    """

    def __init__(
        self,
        calculator: PathCalculator,
        params: RunParameters,
        venues: tuple[Venue, Venue],
        sleep: Optional[Sleep] = None,
    ):
        self.calculator = calculator
        self.params = params
        self.forward = Direction(origin=venues[0], destination=venues[1])
        self.backward = self.forward.reversed()
        self._sleep = sleep or asyncio.sleep

    @property
    def directions(self) -> tuple[Direction, Direction]:
        return self.forward, self.backward

    async def evaluate(self, cycle: int = 0) -> Decision:
        """
        Run one evaluation cycle.

        Never raises on quote failures; a cycle where both paths failed
        yields a Decision with classification NONE.
        """
        initial = self.params.initial_amount_usd

        first = await self.calculator.compute_path_result(self.forward, initial)
        await self._sleep(float(self.params.inter_call_delay_seconds))
        second = await self.calculator.compute_path_result(self.backward, initial)

        best = select_best([first.outcome, second.outcome])
        classification = classify(best, self.params.profit_threshold_usd)

        decision = Decision(
            cycle=cycle,
            results=(first, second),
            best=best,
            classification=classification,
            threshold=self.params.profit_threshold_usd,
        )
        logger.debug(
            "Cycle evaluated",
            extra={"context": {"cycle": cycle, "classification": classification.value}},
        )
        return decision
