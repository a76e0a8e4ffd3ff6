# PATH: core/models.py
"""
core/models.py - Core data models.

All monetary values are Decimal. NO FLOATS.
Raw token amounts are integer strings so they survive any precision.

Models are frozen: a PathOutcome or Decision is built once per cycle,
reported, and discarded.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from core.constants import Classification, ErrorCode
from core.exceptions import ConfigurationInvalid
from core.math import calculate_roi_pct


# =============================================================================
# CONFIGURATION MODELS
# =============================================================================

@dataclass(frozen=True)
class Venue:
    """A blockchain network on which swap quotes are requested."""

    key: str
    name: str
    chain_id: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class TokenDescriptor:
    """
    One logical token as deployed on every venue.

    Decimals can differ between venues for the same token
    (e.g. 18 on BSC, 9 on Solana).
    """

    symbol: str
    addresses: dict[str, str] = field(default_factory=dict)
    decimals: dict[str, int] = field(default_factory=dict)

    def address_on(self, venue: Venue) -> str:
        try:
            return self.addresses[venue.key]
        except KeyError:
            raise ConfigurationInvalid(
                f"{self.symbol} has no address on {venue.name}",
                details={"symbol": self.symbol, "venue": venue.key},
            )

    def decimals_on(self, venue: Venue) -> int:
        try:
            return self.decimals[venue.key]
        except KeyError:
            raise ConfigurationInvalid(
                f"{self.symbol} has no decimals on {venue.name}",
                details={"symbol": self.symbol, "venue": venue.key},
            )


@dataclass(frozen=True)
class RunParameters:
    """Run parameters, immutable for the process lifetime."""

    initial_amount_usd: Decimal
    profit_threshold_usd: Decimal
    slippage_tolerance_pct: Decimal
    inter_call_delay_seconds: Decimal
    monitoring_interval_seconds: Decimal

    def validate(self) -> "RunParameters":
        """Raise ConfigurationInvalid on any out-of-range value."""
        checks = [
            ("initial_amount_usd", self.initial_amount_usd, False),
            ("profit_threshold_usd", self.profit_threshold_usd, True),
            ("slippage_tolerance_pct", self.slippage_tolerance_pct, True),
            ("inter_call_delay_seconds", self.inter_call_delay_seconds, True),
            ("monitoring_interval_seconds", self.monitoring_interval_seconds, False),
        ]
        for name, value, zero_ok in checks:
            if not isinstance(value, Decimal) or not value.is_finite():
                raise ConfigurationInvalid(
                    f"{name} must be a finite Decimal",
                    details={name: str(value)},
                )
            if value < 0 or (value == 0 and not zero_ok):
                bound = "non-negative" if zero_ok else "positive"
                raise ConfigurationInvalid(
                    f"{name} must be {bound}, got {value}",
                    details={name: str(value)},
                )
        return self


# =============================================================================
# QUOTES
# =============================================================================

@dataclass(frozen=True)
class QuoteResult:
    """One successful quote; consumed immediately, never retained."""

    to_token_amount: str
    to_token_price_usd: str
    estimated_gas: str
    from_token_symbol: str
    to_token_symbol: str


# =============================================================================
# PATHS
# =============================================================================

@dataclass(frozen=True)
class Direction:
    """Ordered choice of origin and destination venue for a two-leg path."""

    origin: Venue
    destination: Venue

    @property
    def label(self) -> str:
        return f"{self.origin.name}->{self.destination.name}"

    def reversed(self) -> "Direction":
        return Direction(origin=self.destination, destination=self.origin)


@dataclass(frozen=True)
class LegOutcome:
    """One single-venue swap within a path."""

    venue: str
    from_symbol: str
    to_symbol: str
    amount: Decimal


@dataclass(frozen=True)
class PathOutcome:
    """
    Result of a two-leg round trip.

    Only built when both legs succeeded.
    """

    path: str
    initial_amount: Decimal
    final_amount: Decimal
    profit: Decimal
    legs: tuple[LegOutcome, LegOutcome]

    def __post_init__(self):
        if len(self.legs) != 2:
            raise ValueError(f"PathOutcome needs exactly 2 legs, got {len(self.legs)}")

    @property
    def roi_pct(self) -> Decimal:
        return calculate_roi_pct(self.profit, self.initial_amount)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "initial_amount": str(self.initial_amount),
            "final_amount": str(self.final_amount),
            "profit": str(self.profit),
            "steps": [
                {
                    "venue": leg.venue,
                    "from": leg.from_symbol,
                    "to": leg.to_symbol,
                    "amount": str(leg.amount),
                }
                for leg in self.legs
            ],
        }


@dataclass(frozen=True)
class PathResult:
    """Per-direction outcome, or the failure marker that replaced it."""

    direction: str
    outcome: Optional[PathOutcome] = None
    error_code: Optional[ErrorCode] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is not None


# =============================================================================
# DECISION
# =============================================================================

@dataclass(frozen=True)
class Decision:
    """Per-cycle output of the opportunity selector."""

    cycle: int
    results: tuple[PathResult, ...]
    best: Optional[PathOutcome]
    classification: Classification
    threshold: Decimal
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def best_profit(self) -> Optional[Decimal]:
        return self.best.profit if self.best is not None else None

    @property
    def is_qualifying(self) -> bool:
        return self.classification == Classification.QUALIFYING

    def to_dict(self) -> dict[str, Any]:
        return {
            "cycle": self.cycle,
            "timestamp": self.timestamp.isoformat(),
            "classification": self.classification.value,
            "threshold": str(self.threshold),
            "best_path": self.best.path if self.best else None,
            "best_profit": str(self.best_profit) if self.best else None,
            "paths": {
                r.direction: (
                    r.outcome.to_dict() if r.outcome
                    else {"error_code": r.error_code.value if r.error_code else None}
                )
                for r in self.results
            },
        }
