"""Chart API response parsing."""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from indexfeed.core.exceptions import DataValidationError
from indexfeed.core.models import RawPriceSeries


def parse_chart_response(content: bytes | str) -> RawPriceSeries | None:
    """Deserialize a chart API body into a :class:`RawPriceSeries`.

    Returns ``None`` when the body is a well-formed but empty payload
    (``null``, no ``chart`` object, or a null/empty ``chart.result``).
    Raises :class:`DataValidationError` when the body cannot be decoded or the
    series are missing or misaligned.
    """

    try:
        payload = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DataValidationError(
            "Chart response is not valid JSON",
            details={"error": str(exc)},
        ) from exc

    if payload is None:
        return None
    if not isinstance(payload, dict):
        raise DataValidationError(
            "Chart response must be a JSON object",
            details={"type": type(payload).__name__},
        )

    chart = payload.get("chart")
    if not chart:
        return None
    if not isinstance(chart, dict):
        raise DataValidationError(
            "Chart response has a malformed chart object",
            validation_errors={"chart": type(chart).__name__},
        )
    results = chart.get("result")
    if not results:
        return None
    if not isinstance(results, list):
        raise DataValidationError(
            "Chart response has a malformed result list",
            validation_errors={"chart.result": type(results).__name__},
        )
    if results[0] is None:
        return None
    if not isinstance(results[0], dict):
        raise DataValidationError(
            "Chart result must be a JSON object",
            validation_errors={"chart.result.0": type(results[0]).__name__},
        )

    return _series_from_result(results[0])


def _series_from_result(result: dict[str, Any]) -> RawPriceSeries:
    indicators = result.get("indicators") or {}
    if not isinstance(indicators, dict):
        raise DataValidationError(
            "Chart result has malformed indicators",
            validation_errors={"indicators": type(indicators).__name__},
        )
    quotes = indicators.get("quote") or []
    if not isinstance(quotes, list) or not quotes or not isinstance(quotes[0], dict):
        raise DataValidationError(
            "Chart result has no quote block",
            validation_errors={"indicators.quote": "missing"},
        )
    quote = quotes[0]

    try:
        return RawPriceSeries(
            timestamps=result.get("timestamp") or [],
            open=quote.get("open") or [],
            high=quote.get("high") or [],
            low=quote.get("low") or [],
            close=quote.get("close") or [],
            volume=quote.get("volume") or [],
        )
    except ValidationError as exc:
        raise DataValidationError(
            "Chart result failed structural validation",
            validation_errors={
                ".".join(str(part) for part in error["loc"]) or "series": error["msg"]
                for error in exc.errors()
            },
        ) from exc


__all__ = ["parse_chart_response"]
