"""Shared builders for indexfeed tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import UTC, date, datetime, time
from typing import Any

import httpx

from indexfeed.core.models import ExchangeHours, HistoryRequest

US_HOURS = ExchangeHours(
    time_zone="America/New_York",
    market_open=time(9, 30),
    market_close=time(16, 0),
    early_closes={date(2024, 7, 3): time(13, 0)},
    holidays=frozenset({date(2024, 7, 4)}),
)


def make_request(symbol: str = "SPX", **overrides: Any) -> HistoryRequest:
    fields: dict[str, Any] = {
        "symbol": symbol,
        "start_time_utc": datetime(2024, 3, 1, tzinfo=UTC),
        "end_time_utc": datetime(2024, 3, 8, tzinfo=UTC),
        "exchange_hours": US_HOURS,
    }
    fields.update(overrides)
    return HistoryRequest(**fields)


def chart_payload(
    timestamps: list[int],
    closes: list[float] | None = None,
    *,
    opens: list[float] | None = None,
    volumes: list[float] | None = None,
) -> dict[str, Any]:
    """Build a chart API body with the quote arrays the endpoint returns."""

    closes = closes if closes is not None else [4000.0 + index for index in range(len(timestamps))]
    opens = opens if opens is not None else [value - 5 for value in closes]
    return {
        "chart": {
            "result": [
                {
                    "meta": {"symbol": "^SPX", "exchangeTimezoneName": "America/New_York"},
                    "timestamp": timestamps,
                    "indicators": {
                        "quote": [
                            {
                                "open": opens,
                                "high": [value + 10 for value in closes],
                                "low": [value - 10 for value in closes],
                                "close": closes,
                                "volume": volumes if volumes is not None else [1_000_000] * len(timestamps),
                            }
                        ]
                    },
                }
            ],
            "error": None,
        }
    }


class ScriptedTransport(httpx.BaseTransport):
    """Returns queued responses in order and records each request."""

    def __init__(self, responses: list[httpx.Response | Exception] | Callable[[httpx.Request], httpx.Response]):
        self._responses = responses
        self.requests: list[httpx.Request] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if callable(self._responses):
            return self._responses(request)
        outcome = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(outcome, Exception):
            raise outcome
        return httpx.Response(outcome.status_code, headers=outcome.headers, content=outcome.content)


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))
