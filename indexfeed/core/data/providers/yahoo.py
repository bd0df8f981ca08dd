"""Yahoo Finance chart API client for index price history."""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import datetime
from typing import Any

import httpx
from loguru import logger

from indexfeed.core.config import ProviderConfig
from indexfeed.core.data.parsing import parse_chart_response
from indexfeed.core.exceptions import DataValidationError, NetworkError, ProviderError, RetryExhaustedError
from indexfeed.core.models import HistoryRequest, RawPriceSeries
from indexfeed.core.patterns import FixedDelayRetry, RetryConfig


def to_unix_seconds(value: datetime) -> int:
    """Whole UNIX seconds for an aware (or UTC-naive) datetime."""

    return int(value.timestamp())


class YahooIndexPriceClient:
    """Fetches daily index prices from the chart endpoint with bounded retries.

    One ``httpx.Client`` is created lazily and reused for every request, so an
    instance must not be shared between threads. Every failed attempt (bad
    status, transport error, undecodable body, empty payload) is retried the
    same way until the retry policy runs out, after which :meth:`fetch`
    returns ``None``.
    """

    provider_name = "yahoo"
    INDEX_SYMBOL_PREFIX = "^"
    DAILY_INTERVAL = "1d"

    def __init__(
        self,
        config: ProviderConfig | None = None,
        *,
        retry: FixedDelayRetry | None = None,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config or ProviderConfig()
        self.retry = retry or FixedDelayRetry(
            RetryConfig(max_retries=self.config.max_retries, delay=self.config.retry_delay),
            sleep=sleep,
        )
        self._transport = transport
        self._client: httpx.Client | None = None
        self._log = logger.bind(provider=self.provider_name)

    @property
    def client(self) -> httpx.Client:
        """HTTP client instance (lazy initialization)."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.config.base_url,
                timeout=httpx.Timeout(self.config.timeout),
                follow_redirects=True,
                headers={"User-Agent": self.config.user_agent},
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close HTTP client and cleanup resources."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "YahooIndexPriceClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def remote_symbol(self, request: HistoryRequest) -> str:
        return f"{self.INDEX_SYMBOL_PREFIX}{request.symbol}"

    def build_request_url(self, request: HistoryRequest) -> str:
        return f"chart/{self.remote_symbol(request)}"

    def build_request_params(self, request: HistoryRequest) -> dict[str, str]:
        return {
            "period1": str(to_unix_seconds(request.start_time_utc)),
            "period2": str(to_unix_seconds(request.end_time_utc)),
            "interval": self.DAILY_INTERVAL,
            "includePrePost": str(request.include_extended_market_hours),
        }

    def fetch(self, request: HistoryRequest) -> RawPriceSeries | None:
        """Return the parsed series for ``request`` or ``None`` when unavailable."""

        self._log.info(
            f"Fetching history for {request.description} "
            f"from {request.start_time_utc} to {request.end_time_utc}."
        )
        try:
            return self.retry.execute(self._attempt, request, description=request.description)
        except RetryExhaustedError as exc:
            self._log.bind(error_code=exc.error_code).error(
                f"Giving up on {self.remote_symbol(request)} after {exc.attempts} attempts."
            )
            return None

    def _attempt(self, request: HistoryRequest) -> RawPriceSeries:
        symbol = self.remote_symbol(request)
        try:
            response = self.client.get(self.build_request_url(request), params=self.build_request_params(request))
        except httpx.HTTPError as exc:
            self._log.error(f"Failed to get history for {symbol}. Exception: {exc!r}")
            raise NetworkError(f"Request for {symbol} failed: {exc}", self.provider_name) from exc

        if response.status_code != httpx.codes.OK:
            self._log.error(f"Failed to get history for {symbol}. Status code: {response.status_code}.")
            raise NetworkError(
                f"Unexpected status {response.status_code} for {symbol}",
                self.provider_name,
                status_code=response.status_code,
            )

        self._log.debug(f"Response content for {request.description}: {response.text}")

        try:
            series = parse_chart_response(response.content)
        except DataValidationError as exc:
            self._log.error(f"Failed to parse response for {symbol}. Exception: {exc}")
            raise

        if series is None:
            self._log.error(f"Failed to deserialize response for {symbol}.")
            raise ProviderError(f"Empty chart payload for {symbol}", self.provider_name)
        return series


__all__ = ["YahooIndexPriceClient", "to_unix_seconds"]
