# PATH: tests/conftest.py
"""
Pytest configuration and fixtures for XARB tests.

FakeQuoteSource replays scripted quotes (or exceptions) in call order,
so path and selector tests run without network access or wall-clock waits.
"""

import sys
from decimal import Decimal
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.models import QuoteResult, RunParameters, TokenDescriptor, Venue  # noqa: E402


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


def make_quote(raw_amount: str, from_symbol: str = "USDT", to_symbol: str = "WBNB") -> QuoteResult:
    """QuoteResult with only the amount mattering."""
    return QuoteResult(
        to_token_amount=raw_amount,
        to_token_price_usd="1.0",
        estimated_gas="21000",
        from_token_symbol=from_symbol,
        to_token_symbol=to_symbol,
    )


class FakeQuoteSource:
    """
    Scripted quote source.

    Each entry of `script` is a QuoteResult to return, an exception to
    raise, or None. Calls are recorded as
    (chain_id, from_token_address, to_token_address, raw_amount).
    """

    def __init__(self, script=None):
        self.script = list(script or [])
        self.calls: list[tuple[str, str, str, str]] = []

    async def get_quote(self, chain_id, from_token_address, to_token_address, raw_amount):
        self.calls.append((chain_id, from_token_address, to_token_address, raw_amount))
        if not self.script:
            raise AssertionError(f"Unexpected quote call #{len(self.calls)}")
        item = self.script.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class SleepRecorder:
    """Replacement for asyncio.sleep that records delays and returns at once."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def solana():
    return Venue(key="solana", name="Solana", chain_id="501")


@pytest.fixture
def bsc():
    return Venue(key="bsc", name="BSC", chain_id="56")


@pytest.fixture
def venues(solana, bsc):
    """Venues in evaluation order, as in config/venues.yaml."""
    return (solana, bsc)


@pytest.fixture
def base_token():
    """Token 1: 18 decimals on BSC, 9 on Solana."""
    return TokenDescriptor(
        symbol="WBNB",
        addresses={"bsc": "0xbase_bsc", "solana": "BaseSoLMint"},
        decimals={"bsc": 18, "solana": 9},
    )


@pytest.fixture
def quote_token():
    """Token 2: 18 decimals on BSC, 6 on Solana."""
    return TokenDescriptor(
        symbol="USDT",
        addresses={"bsc": "0xquote_bsc", "solana": "QuoteSoLMint"},
        decimals={"bsc": 18, "solana": 6},
    )


@pytest.fixture
def params():
    return RunParameters(
        initial_amount_usd=Decimal("500"),
        profit_threshold_usd=Decimal("30"),
        slippage_tolerance_pct=Decimal("1.0"),
        inter_call_delay_seconds=Decimal("1"),
        monitoring_interval_seconds=Decimal("30"),
    )


@pytest.fixture
def sleep():
    return SleepRecorder()
