"""
strategy/monitor.py - Evaluation loop with an explicit cancellation token.

One cycle at a time: the next cycle starts only after the previous one
returned its Decision and the interval elapsed. stop() is honoured
between cycles and during the interval wait; a running cycle always
completes.
"""

import asyncio
from decimal import Decimal
from typing import Callable, Optional

from core.logging import get_logger
from core.models import Decision
from strategy.selector import OpportunitySelector

logger = get_logger("xarb.strategy.monitor")

DecisionHandler = Callable[[Decision], None]


class MonitorScheduler:
    """
    Drives the selector on a fixed interval.

    Usage:
        scheduler = MonitorScheduler(selector, interval_seconds=Decimal("30"), on_decision=report)
        await scheduler.run_forever()
        # elsewhere: scheduler.stop()
    """

    def __init__(
        self,
        selector: OpportunitySelector,
        interval_seconds: Decimal,
        on_decision: Optional[DecisionHandler] = None,
    ):
        self.selector = selector
        self.interval_seconds = interval_seconds
        self.on_decision = on_decision
        self.cycle_count = 0
        self.failed_cycles = 0
        self._stop_event = asyncio.Event()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def stop(self) -> None:
        """Request shutdown after the current cycle."""
        if not self._stop_event.is_set():
            logger.info("Stop requested", extra={"context": {"cycle": self.cycle_count}})
        self._stop_event.set()

    async def run_once(self) -> Decision:
        """Run exactly one cycle and hand the Decision to on_decision."""
        self.cycle_count += 1
        decision = await self.selector.evaluate(cycle=self.cycle_count)
        if self.on_decision is not None:
            self.on_decision(decision)
        return decision

    async def run_forever(self, max_cycles: Optional[int] = None) -> None:
        """
        Run cycles until stop() is called or max_cycles is reached.

        The first cycle starts immediately. An unexpected error inside a
        cycle is logged and the loop carries on with the next one.
        """
        logger.info(
            "Monitoring started",
            extra={"context": {"interval_seconds": str(self.interval_seconds), "max_cycles": max_cycles}},
        )

        while not self.stopped:
            try:
                await self.run_once()
            except Exception as e:
                self.failed_cycles += 1
                logger.error(
                    f"Error during arbitrage analysis: {e}",
                    extra={"context": {"cycle": self.cycle_count, "error": str(e)}},
                    exc_info=True,
                )

            if max_cycles is not None and self.cycle_count >= max_cycles:
                break

            await self._wait_interval()

        logger.info(
            "Monitoring stopped",
            extra={"context": {"cycles": self.cycle_count, "failed_cycles": self.failed_cycles}},
        )

    async def _wait_interval(self) -> None:
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=float(self.interval_seconds))
        except asyncio.TimeoutError:
            pass
