from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest
from support import US_HOURS, make_request

from indexfeed.core.exceptions import DataIntegrityError
from indexfeed.core.models import TradeBar
from indexfeed.core.services import SliceAggregator


def _bar(symbol: str, day: date, close: str = "100") -> TradeBar:
    return TradeBar(
        symbol=symbol,
        time=US_HOURS.midnight(day),
        end_time=US_HOURS.midnight(day + timedelta(days=1)),
        open=Decimal(close),
        high=Decimal(close),
        low=Decimal(close),
        close=Decimal(close),
    )


def test_bars_with_same_end_time_share_a_slice() -> None:
    aggregator = SliceAggregator()
    aggregator.add_subscription(make_request("SPX"), [_bar("SPX", date(2024, 3, 4)), _bar("SPX", date(2024, 3, 5))])
    aggregator.add_subscription(make_request("NDX"), [_bar("NDX", date(2024, 3, 5)), _bar("NDX", date(2024, 3, 6))])

    slices = list(aggregator)

    assert len(aggregator) == 2
    assert [sorted(item.bars) for item in slices] == [["SPX"], ["NDX", "SPX"], ["NDX"]]
    assert slices[0].time == datetime(2024, 3, 5, 5, 0, tzinfo=UTC)
    assert "NDX" in slices[1]
    assert slices[1]["SPX"].time == US_HOURS.midnight(date(2024, 3, 5))


def test_duplicate_symbol_keeps_later_subscription() -> None:
    aggregator = SliceAggregator()
    aggregator.add_subscription(make_request("SPX"), [_bar("SPX", date(2024, 3, 4), close="100")])
    aggregator.add_subscription(make_request("SPX"), [_bar("SPX", date(2024, 3, 4), close="200")])

    (only,) = list(aggregator)

    assert list(only.bars) == ["SPX"]
    assert only["SPX"].close == Decimal("200")


def test_slice_times_use_requested_zone() -> None:
    aggregator = SliceAggregator(ZoneInfo("Asia/Tokyo"))
    aggregator.add_subscription(make_request("SPX"), [_bar("SPX", date(2024, 3, 4))])

    (only,) = list(aggregator)

    assert only.time == datetime(2024, 3, 5, 14, 0, tzinfo=ZoneInfo("Asia/Tokyo"))


def test_requests_are_kept_in_subscription_order() -> None:
    aggregator = SliceAggregator("UTC")
    first, second = make_request("SPX"), make_request("VIX")
    aggregator.add_subscription(first, [])
    aggregator.add_subscription(second, [])

    assert aggregator.requests == [first, second]
    assert list(aggregator) == []


def test_stream_errors_stop_iteration_when_reached() -> None:
    def failing() -> Iterator[TradeBar]:
        yield _bar("SPX", date(2024, 3, 4))
        raise DataIntegrityError("Invalid data for SPX", symbol="SPX", time=None)

    aggregator = SliceAggregator()
    aggregator.add_subscription(make_request("SPX"), failing())
    slices = iter(aggregator)

    with pytest.raises(DataIntegrityError):
        next(slices)
