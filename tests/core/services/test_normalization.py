from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest
from support import US_HOURS

from indexfeed.core.exceptions import DataIntegrityError
from indexfeed.core.models import RawPriceSeries
from indexfeed.core.services import BarNormalizer

NEW_YORK = ZoneInfo("America/New_York")

# 2024-03-04 15:30 America/New_York
MARCH_4_1530 = 1709584200
# 2024-03-04 16:00 America/New_York
MARCH_4_CLOSE = 1709586000
# 2024-07-03 09:30 America/New_York, an early close day
JULY_3_OPEN = 1720013400


def _series(timestamps: list[int], closes: list[float] | None = None) -> RawPriceSeries:
    closes = closes or [5000.0 + index for index in range(len(timestamps))]
    return RawPriceSeries(
        timestamps=timestamps,
        open=[value - 1 for value in closes],
        high=[value + 2 for value in closes],
        low=[value - 2 for value in closes],
        close=closes,
        volume=[0.0] * len(timestamps),
    )


def test_calendar_mode_spans_local_midnights() -> None:
    bars = list(BarNormalizer().normalize("SPX", _series([MARCH_4_1530]), US_HOURS))

    assert len(bars) == 1
    bar = bars[0]
    assert bar.symbol == "SPX"
    assert bar.time == datetime(2024, 3, 4, tzinfo=NEW_YORK)
    assert bar.end_time == datetime(2024, 3, 5, tzinfo=NEW_YORK)
    assert bar.time.utcoffset() == bar.end_time.utcoffset()


def test_prices_become_exact_decimals() -> None:
    bar = next(BarNormalizer().normalize("SPX", _series([MARCH_4_1530], [5130.95]), US_HOURS))

    assert bar.close == Decimal("5130.95")
    assert bar.open == Decimal("5129.95")
    assert bar.volume == Decimal("0.0")


def test_precise_mode_ends_at_session_close() -> None:
    bar = next(BarNormalizer(daily_precise_end_time=True).normalize("SPX", _series([MARCH_4_1530]), US_HOURS))

    assert bar.time == datetime(2024, 3, 4, 15, 30, tzinfo=NEW_YORK)
    assert bar.end_time == datetime(2024, 3, 4, 16, 0, tzinfo=NEW_YORK)


def test_precise_mode_honors_early_close() -> None:
    bar = next(BarNormalizer(daily_precise_end_time=True).normalize("SPX", _series([JULY_3_OPEN]), US_HOURS))

    assert bar.time == datetime(2024, 7, 3, 9, 30, tzinfo=NEW_YORK)
    assert bar.end_time == datetime(2024, 7, 3, 13, 0, tzinfo=NEW_YORK)


def test_precise_mode_after_close_rolls_to_next_midnight() -> None:
    bar = next(BarNormalizer(daily_precise_end_time=True).normalize("SPX", _series([MARCH_4_CLOSE]), US_HOURS))

    assert bar.end_time == datetime(2024, 3, 5, tzinfo=NEW_YORK)


def test_bars_follow_series_order() -> None:
    timestamps = [MARCH_4_1530, MARCH_4_1530 + 86400, MARCH_4_1530 + 2 * 86400]

    bars = list(BarNormalizer().normalize("NDX", _series(timestamps), US_HOURS))

    assert [bar.time.day for bar in bars] == [4, 5, 6]
    assert all(bar.end_time > bar.time for bar in bars)


def test_zero_price_raises_after_earlier_bars() -> None:
    timestamps = [MARCH_4_1530, MARCH_4_1530 + 86400, MARCH_4_1530 + 2 * 86400]
    series = _series(timestamps, [5000.0, 5010.0, 5020.0])
    broken = series.model_copy(update={"close": [5000.0, 0.0, 5020.0]})
    bars = BarNormalizer().normalize("SPX", broken, US_HOURS)

    first = next(bars)
    assert first.close == Decimal("5000.0")

    with pytest.raises(DataIntegrityError) as exc_info:
        next(bars)

    error = exc_info.value
    assert error.error_code == "DATA_INTEGRITY_ERROR"
    assert error.details["symbol"] == "SPX"
    assert error.details["close"] == 0.0
    assert str(error).startswith("Invalid data for SPX at 2024-03-05 00:00:00-05:00. Open: 5009.0,")


def test_integrity_error_is_deferred_until_iteration() -> None:
    series = _series([MARCH_4_1530]).model_copy(update={"open": [0.0]})

    bars = BarNormalizer().normalize("SPX", series, US_HOURS)

    with pytest.raises(DataIntegrityError):
        list(bars)


def test_zero_volume_is_accepted() -> None:
    bars = list(BarNormalizer().normalize("SPX", _series([MARCH_4_1530]), US_HOURS))

    assert bars[0].volume == 0
