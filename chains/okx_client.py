"""
chains/okx_client.py - OKX DEX aggregator quote client.

Provides signed quote requests with:
- HMAC-SHA256 request signing
- Request timeout handling
- Connection reuse
- Latency tracking

Every non-success outcome is raised as a QuoteError subclass so the
path calculator can collapse the path without inspecting transport details.
"""

import base64
import hashlib
import hmac
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable
from urllib.parse import urlencode

import httpx

from core.constants import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    OKX_BASE_URL,
    OKX_QUOTE_PATH,
    ZERO_WALLET_ADDRESS,
)
from core.exceptions import MalformedAmountError, QuoteUnavailableError
from core.logging import get_logger
from core.math import safe_decimal
from core.models import QuoteResult

logger = get_logger("xarb.chains.okx")


@dataclass(frozen=True)
class OkxCredentials:
    """API credentials for the OKX Web3 API."""
    api_key: str
    secret_key: str
    passphrase: str

    def __repr__(self) -> str:
        return f"OkxCredentials(api_key={self.api_key[:4]}...)"


@dataclass
class QuoteStats:
    """Request statistics for the quote endpoint."""
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_latency_ms: int = 0
    last_error: str | None = None

    @property
    def avg_latency_ms(self) -> int:
        if self.successful_requests == 0:
            return 0
        return self.total_latency_ms // self.successful_requests

    @property
    def success_rate(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.successful_requests / self.total_requests


def okx_timestamp(now: datetime) -> str:
    """ISO-8601 UTC with milliseconds and a 'Z' suffix."""
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def sign_request(
    secret_key: str,
    timestamp: str,
    method: str,
    request_path: str,
    body: str = "",
) -> str:
    """
    Sign a request the way the OKX API expects.

    Returns:
        base64(HMAC-SHA256(secret, timestamp + method + request_path + body))
    """
    message = f"{timestamp}{method}{request_path}{body}"
    digest = hmac.new(secret_key.encode(), message.encode(), hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


def _pick(item: dict, flat_key: str, nested_key: str, nested_field: str) -> Any:
    # Older payloads are flat, newer ones nest token info under fromToken/toToken
    if flat_key in item:
        return item[flat_key]
    nested = item.get(nested_key)
    if isinstance(nested, dict):
        return nested.get(nested_field)
    return None


def parse_quote_response(payload: Any) -> QuoteResult:
    """
    Parse a quote response body into a QuoteResult.

    Raises:
        QuoteUnavailableError: error code or empty data
        MalformedAmountError: missing or non-integer toTokenAmount
    """
    if not isinstance(payload, dict):
        raise QuoteUnavailableError(
            "Quote response is not a JSON object",
            details={"type": type(payload).__name__},
        )

    code = str(payload.get("code", "0"))
    if code != "0":
        raise QuoteUnavailableError(
            f"Quote service error {code}: {payload.get('msg', '')}",
            details={"okx_code": code, "msg": payload.get("msg")},
        )

    data = payload.get("data")
    if not data:
        raise QuoteUnavailableError("Quote response has no data")
    if not isinstance(data, list) or not isinstance(data[0], dict):
        raise QuoteUnavailableError(
            "Quote response data is not a list of routes",
            details={"type": type(data).__name__},
        )

    item = data[0]
    raw_amount = item.get("toTokenAmount")
    if raw_amount is None:
        raise MalformedAmountError("Quote response has no toTokenAmount")

    amount = safe_decimal(str(raw_amount))
    if amount != amount.to_integral_value() or amount < 0:
        raise MalformedAmountError(
            f"toTokenAmount is not a raw integer amount: {raw_amount!r}",
            details={"toTokenAmount": str(raw_amount)},
        )

    return QuoteResult(
        to_token_amount=str(raw_amount).strip(),
        to_token_price_usd=str(_pick(item, "toTokenPriceUsd", "toToken", "tokenUnitPrice") or "0"),
        estimated_gas=str(item.get("estimatedGas", item.get("estimateGasFee", "0"))),
        from_token_symbol=str(_pick(item, "fromTokenSymbol", "fromToken", "tokenSymbol") or ""),
        to_token_symbol=str(_pick(item, "toTokenSymbol", "toToken", "tokenSymbol") or ""),
    )


class OkxQuoteClient:
    """
    Quote source backed by the OKX DEX aggregator.

    Usage:
        client = OkxQuoteClient(credentials, slippage_pct=Decimal("1.0"))
        quote = await client.get_quote("56", usdt, wbnb, "500000000000000000000")
        await client.close()
    """

    def __init__(
        self,
        credentials: OkxCredentials,
        slippage_pct: Decimal,
        base_url: str = OKX_BASE_URL,
        wallet_address: str = ZERO_WALLET_ADDRESS,
        timeout_seconds: int = DEFAULT_HTTP_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.credentials = credentials
        self.slippage_pct = slippage_pct
        self.base_url = base_url.rstrip("/")
        self.wallet_address = wallet_address
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._client: httpx.AsyncClient | None = None
        self.stats = QuoteStats()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout_seconds),
                limits=httpx.Limits(max_connections=4),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def build_headers(self, timestamp: str, method: str, request_path: str) -> dict[str, str]:
        """Authentication headers for one request."""
        return {
            "OK-ACCESS-KEY": self.credentials.api_key,
            "OK-ACCESS-SIGN": sign_request(
                self.credentials.secret_key, timestamp, method, request_path
            ),
            "OK-ACCESS-TIMESTAMP": timestamp,
            "OK-ACCESS-PASSPHRASE": self.credentials.passphrase,
            "Content-Type": "application/json",
        }

    def build_query(
        self,
        chain_id: str,
        from_token_address: str,
        to_token_address: str,
        raw_amount: str,
    ) -> str:
        """Query string, including the leading '?', exactly as signed."""
        params = {
            "chainId": chain_id,
            "amount": raw_amount,
            "fromTokenAddress": from_token_address,
            "toTokenAddress": to_token_address,
            "slippage": str(self.slippage_pct),
            "userWalletAddress": self.wallet_address,
        }
        return "?" + urlencode(params)

    async def get_quote(
        self,
        chain_id: str,
        from_token_address: str,
        to_token_address: str,
        raw_amount: str,
    ) -> QuoteResult:
        """
        Request one quote.

        Args:
            chain_id: Venue chain id ("56" for BSC, "501" for Solana)
            from_token_address: Source token address / mint
            to_token_address: Destination token address / mint
            raw_amount: Source amount in raw units

        Returns:
            QuoteResult for the first route returned

        Raises:
            QuoteUnavailableError: transport error, non-2xx, error payload, empty data
            MalformedAmountError: unparseable amount in the response
        """
        client = await self._get_client()
        query = self.build_query(chain_id, from_token_address, to_token_address, raw_amount)
        request_path = OKX_QUOTE_PATH + query
        headers = self.build_headers(okx_timestamp(self._clock()), "GET", request_path)

        self.stats.total_requests += 1
        context = {"chain_id": chain_id, "amount": raw_amount}
        start_ms = int(time.time() * 1000)

        try:
            resp = await client.get(f"{self.base_url}{request_path}", headers=headers)
            latency_ms = int(time.time() * 1000) - start_ms

            if resp.status_code < 200 or resp.status_code >= 300:
                raise QuoteUnavailableError(
                    f"Quote request failed with HTTP {resp.status_code}",
                    details={**context, "status": resp.status_code, "body": resp.text[:500]},
                )

            try:
                payload = resp.json()
            except ValueError:
                raise QuoteUnavailableError(
                    "Quote response is not valid JSON",
                    details={**context, "body": resp.text[:500]},
                )

            quote = parse_quote_response(payload)

        except httpx.TimeoutException as e:
            self._record_failure(f"Timeout: {e}")
            raise QuoteUnavailableError(
                f"Quote request timed out after {self.timeout_seconds}s",
                details=context,
            ) from e

        except httpx.HTTPError as e:
            self._record_failure(str(e))
            raise QuoteUnavailableError(
                f"Quote request failed: {e}",
                details=context,
            ) from e

        except (QuoteUnavailableError, MalformedAmountError) as e:
            self._record_failure(str(e))
            raise

        self.stats.successful_requests += 1
        self.stats.total_latency_ms += latency_ms
        logger.debug(
            "Quote received",
            extra={"context": {**context, "latency_ms": latency_ms, "to_amount": quote.to_token_amount}},
        )
        return quote

    def _record_failure(self, error: str) -> None:
        self.stats.failed_requests += 1
        self.stats.last_error = error
        logger.debug("Quote failed", extra={"context": {"error": error}})

    def get_stats_summary(self) -> dict:
        """Statistics summary for the quote endpoint."""
        return {
            "total_requests": self.stats.total_requests,
            "success_rate": round(self.stats.success_rate, 3),
            "avg_latency_ms": self.stats.avg_latency_ms,
            "last_error": self.stats.last_error,
        }
