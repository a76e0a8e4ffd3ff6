#!/usr/bin/env python3
"""
strategy/jobs/run_monitor.py - CLI entrypoint for the cross-chain monitor.

Usage:
    python -m strategy.jobs.run_monitor
    python -m strategy.jobs.run_monitor --once --no-json-logs
    xarb-monitor --env-file .env --max-cycles 10
"""

import asyncio
import signal
import sys
from pathlib import Path

import click

from chains.okx_client import OkxQuoteClient
from config import Settings, load_settings
from core.exceptions import ConfigurationInvalid
from core.format_money import format_usd
from core.logging import get_logger, setup_logging, set_global_context
from core.models import Decision
from strategy.monitor import MonitorScheduler
from strategy.path_calculator import PathCalculator
from strategy.report import log_decision, render_decision
from strategy.selector import OpportunitySelector

logger = get_logger("xarb.monitor")

SETUP_HINTS = [
    "Please make sure to:",
    "  1. Copy .env.example to .env",
    "  2. Fill in your OKX API credentials and token configurations",
    "  3. Adjust trading parameters as needed",
]


def build_scheduler(settings: Settings, client: OkxQuoteClient, echo: bool = True) -> MonitorScheduler:
    """Wire calculator, selector and scheduler from validated settings."""
    params = settings.params
    calculator = PathCalculator(
        source=client,
        base_token=settings.base_token,
        quote_token=settings.quote_token,
        delay_seconds=params.inter_call_delay_seconds,
    )
    selector = OpportunitySelector(calculator, params, settings.venues)

    def report(decision: Decision) -> None:
        log_decision(logger, decision)
        if echo:
            for line in render_decision(decision):
                click.echo(line)

    return MonitorScheduler(selector, params.monitoring_interval_seconds, on_decision=report)


async def run_monitor(settings: Settings, max_cycles: int | None, echo: bool) -> None:
    """Run the monitor until a signal arrives or max_cycles is reached."""
    client = OkxQuoteClient(settings.credentials, slippage_pct=settings.params.slippage_tolerance_pct)
    scheduler = build_scheduler(settings, client, echo=echo)

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, scheduler.stop)
        except NotImplementedError:
            # Windows event loops have no signal handler support
            signal.signal(sig, lambda signum, frame: scheduler.stop())

    try:
        await scheduler.run_forever(max_cycles=max_cycles)
    finally:
        await client.close()
        logger.info("Quote client closed", extra={"context": client.get_stats_summary()})


def log_startup(settings: Settings) -> None:
    params = settings.params
    logger.info(
        "Configuration loaded",
        extra={
            "context": {
                "pair": settings.pair,
                "venues": [v.name for v in settings.venues],
                "initial_amount_usd": str(params.initial_amount_usd),
                "profit_threshold_usd": str(params.profit_threshold_usd),
                "monitoring_interval_seconds": str(params.monitoring_interval_seconds),
                "slippage_tolerance_pct": str(params.slippage_tolerance_pct),
            }
        },
    )
    click.echo(f"Token Pair: {settings.pair}")
    click.echo(f"Initial Amount: {format_usd(params.initial_amount_usd)} USD")
    click.echo(f"Profit Threshold: {format_usd(params.profit_threshold_usd)} USD")
    click.echo(f"Monitoring Interval: {params.monitoring_interval_seconds} seconds")
    click.echo(f"Slippage Tolerance: {params.slippage_tolerance_pct}%")


@click.command()
@click.option(
    "--env-file",
    "-e",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to a .env file (default: search from the working directory)",
)
@click.option(
    "--venues-file",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Venue catalogue YAML (default: bundled config/venues.yaml)",
)
@click.option(
    "--max-cycles",
    "-n",
    default=None,
    type=click.IntRange(min=1),
    help="Stop after this many cycles (default: run until interrupted)",
)
@click.option(
    "--once",
    is_flag=True,
    default=False,
    help="Run a single cycle and exit",
)
@click.option(
    "--log-level",
    "-l",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Log level",
)
@click.option(
    "--json-logs/--no-json-logs",
    default=True,
    help="Use JSON log format",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Do not print the results block, logs only",
)
def main(
    env_file: Path | None,
    venues_file: Path | None,
    max_cycles: int | None,
    once: bool,
    log_level: str,
    json_logs: bool,
    quiet: bool,
) -> None:
    """
    XARB cross-chain arbitrage monitor.

    Quotes a round trip in both directions between two venues and reports
    when the better one beats the profit threshold. Never trades.
    """
    setup_logging(level=log_level, json_output=json_logs)
    set_global_context(service="xarb-monitor", version="0.1.0")

    try:
        settings = load_settings(env_file=env_file, venues_file=venues_file)
    except ConfigurationInvalid as e:
        logger.error(
            f"Failed to initialize arbitrage monitor: {e}",
            extra={"context": {"error_code": e.code.value, **e.details}},
        )
        for line in SETUP_HINTS:
            click.echo(line, err=True)
        sys.exit(1)

    set_global_context(pair=settings.pair)
    log_startup(settings)

    if once:
        max_cycles = 1

    try:
        asyncio.run(run_monitor(settings, max_cycles, echo=not quiet))
    except KeyboardInterrupt:
        logger.info("Monitor interrupted")
    except Exception as e:
        logger.error(
            f"Monitor error: {e}",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        sys.exit(1)


if __name__ == "__main__":
    main()
