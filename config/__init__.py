# PATH: config/__init__.py
"""
Configuration loading utilities for XARB.

Venues come from a YAML catalogue, everything else from environment
variables (optionally seeded from a .env file). Any missing or invalid
value raises ConfigurationInvalid before the first cycle runs.
"""

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import load_dotenv

from chains.okx_client import OkxCredentials
from core.constants import (
    DEFAULT_INITIAL_AMOUNT_USD,
    DEFAULT_INTER_CALL_DELAY_MS,
    DEFAULT_MONITORING_INTERVAL_SECONDS,
    DEFAULT_PROFIT_THRESHOLD_USD,
    DEFAULT_SLIPPAGE_TOLERANCE_PCT,
    DEFAULT_TOKEN_DECIMALS,
    MAX_TOKEN_DECIMALS,
)
from core.exceptions import ConfigurationInvalid
from core.models import RunParameters, TokenDescriptor, Venue


CONFIG_DIR = Path(__file__).parent
DEFAULT_VENUES_FILE = CONFIG_DIR / "venues.yaml"


@dataclass(frozen=True)
class Settings:
    """Everything the monitor needs, validated."""
    credentials: OkxCredentials
    venues: tuple[Venue, Venue]
    base_token: TokenDescriptor
    quote_token: TokenDescriptor
    params: RunParameters

    @property
    def pair(self) -> str:
        return f"{self.base_token.symbol}/{self.quote_token.symbol}"


def load_yaml(filepath: Path) -> Any:
    """
    Load a YAML configuration file.

    Args:
        filepath: Path to the file

    Returns:
        Parsed YAML document ({} when empty)
    """
    if not filepath.exists():
        raise ConfigurationInvalid(
            f"Config file not found: {filepath}",
            details={"path": str(filepath)},
        )

    try:
        with open(filepath, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationInvalid(
            f"Config file is not valid YAML: {filepath}",
            details={"path": str(filepath), "error": str(e)},
        )


# =============================================================================
# ENVIRONMENT HELPERS
# =============================================================================

def get_required_env(environ: Mapping[str, str], key: str) -> str:
    """Return a required variable, raising ConfigurationInvalid if missing or empty."""
    value = environ.get(key)
    if not value:
        raise ConfigurationInvalid(
            f"Required environment variable {key} is missing",
            details={"key": key},
        )
    return value


def get_decimal_env(environ: Mapping[str, str], key: str, default: Decimal) -> Decimal:
    value = environ.get(key)
    if not value:
        return default
    try:
        result = Decimal(value.strip())
    except InvalidOperation:
        raise ConfigurationInvalid(
            f"Environment variable {key} is not a number: {value!r}",
            details={"key": key, "value": value},
        )
    if not result.is_finite():
        raise ConfigurationInvalid(
            f"Environment variable {key} is not finite: {value!r}",
            details={"key": key, "value": value},
        )
    return result


def get_int_env(environ: Mapping[str, str], key: str, default: Optional[int]) -> int:
    value = environ.get(key)
    if not value:
        if default is None:
            raise ConfigurationInvalid(
                f"Required environment variable {key} is missing",
                details={"key": key},
            )
        return default
    try:
        return int(value.strip())
    except ValueError:
        raise ConfigurationInvalid(
            f"Environment variable {key} is not an integer: {value!r}",
            details={"key": key, "value": value},
        )


# =============================================================================
# LOADERS
# =============================================================================

def load_venues(venues_file: Optional[Path] = None) -> tuple[tuple[Venue, Venue], dict[str, str]]:
    """
    Load the venue catalogue.

    Returns:
        (venues in evaluation order, env prefix per venue key)
    """
    path = venues_file or DEFAULT_VENUES_FILE
    data = load_yaml(path)
    if not isinstance(data, dict):
        raise ConfigurationInvalid(
            f"Venue catalogue must be a mapping with a 'venues' list: {path}",
            details={"path": str(path), "type": type(data).__name__},
        )

    entries = data.get("venues") or []
    if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
        raise ConfigurationInvalid(
            f"'venues' must be a list of mappings: {path}",
            details={"path": str(path)},
        )

    if len(entries) != 2:
        raise ConfigurationInvalid(
            f"Exactly two venues are required, got {len(entries)}",
            details={"count": len(entries)},
        )

    venues = []
    prefixes = {}
    for entry in entries:
        try:
            venue = Venue(
                key=str(entry["key"]),
                name=str(entry["name"]),
                chain_id=str(entry["chain_id"]),
            )
        except (KeyError, TypeError) as e:
            raise ConfigurationInvalid(
                f"Venue entry is incomplete: {entry!r}",
                details={"missing": str(e)},
            )
        venues.append(venue)
        prefixes[venue.key] = str(entry.get("env_prefix", venue.key.upper()))

    if venues[0].key == venues[1].key:
        raise ConfigurationInvalid(
            f"Venues must be distinct, got {venues[0].key} twice",
            details={"key": venues[0].key},
        )

    return (venues[0], venues[1]), prefixes


def load_token_descriptor(
    environ: Mapping[str, str],
    index: int,
    venues: tuple[Venue, Venue],
    prefixes: dict[str, str],
) -> TokenDescriptor:
    """
    Load token 1 (base) or token 2 (quote) from the environment.

    Args:
        environ: Environment mapping
        index: 1 or 2
        venues: Configured venues
        prefixes: Env prefix per venue key
    """
    symbol = get_required_env(environ, f"TOKEN_{index}_SYMBOL")
    addresses = {}
    decimals = {}

    for venue in venues:
        prefix = prefixes[venue.key]
        addresses[venue.key] = get_required_env(environ, f"{prefix}_TOKEN_{index}_ADDRESS")

        key = f"{prefix}_TOKEN_{index}_DECIMALS"
        value = get_int_env(environ, key, DEFAULT_TOKEN_DECIMALS.get((venue.key, index)))
        if value < 0 or value > MAX_TOKEN_DECIMALS:
            raise ConfigurationInvalid(
                f"{key} must be between 0 and {MAX_TOKEN_DECIMALS}, got {value}",
                details={"key": key, "value": value},
            )
        decimals[venue.key] = value

    return TokenDescriptor(symbol=symbol, addresses=addresses, decimals=decimals)


def load_run_parameters(environ: Mapping[str, str]) -> RunParameters:
    """Load and validate run parameters."""
    delay_ms = get_decimal_env(environ, "INTER_CALL_DELAY_MS", Decimal(DEFAULT_INTER_CALL_DELAY_MS))
    params = RunParameters(
        initial_amount_usd=get_decimal_env(environ, "INITIAL_AMOUNT_USD", DEFAULT_INITIAL_AMOUNT_USD),
        profit_threshold_usd=get_decimal_env(environ, "PROFIT_THRESHOLD_USD", DEFAULT_PROFIT_THRESHOLD_USD),
        slippage_tolerance_pct=get_decimal_env(environ, "SLIPPAGE_TOLERANCE", DEFAULT_SLIPPAGE_TOLERANCE_PCT),
        inter_call_delay_seconds=delay_ms / Decimal("1000"),
        monitoring_interval_seconds=get_decimal_env(
            environ, "MONITORING_INTERVAL_SECONDS", DEFAULT_MONITORING_INTERVAL_SECONDS
        ),
    )
    return params.validate()


def load_credentials(environ: Mapping[str, str]) -> OkxCredentials:
    """Load OKX API credentials."""
    return OkxCredentials(
        api_key=get_required_env(environ, "OKX_API_KEY"),
        secret_key=get_required_env(environ, "OKX_SECRET_KEY"),
        passphrase=get_required_env(environ, "OKX_PASS_PHRASE"),
    )


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[Path] = None,
    venues_file: Optional[Path] = None,
) -> Settings:
    """
    Load the full configuration.

    Args:
        environ: Environment mapping (default: os.environ after loading .env)
        env_file: Optional .env path (default: search from the working directory)
        venues_file: Optional venue catalogue (default: config/venues.yaml)

    Raises:
        ConfigurationInvalid: on any missing or invalid value
    """
    if environ is None:
        load_dotenv(dotenv_path=env_file)
        environ = os.environ

    venues, prefixes = load_venues(venues_file)
    return Settings(
        credentials=load_credentials(environ),
        venues=venues,
        base_token=load_token_descriptor(environ, 1, venues, prefixes),
        quote_token=load_token_descriptor(environ, 2, venues, prefixes),
        params=load_run_parameters(environ),
    )
