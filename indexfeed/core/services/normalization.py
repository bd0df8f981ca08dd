"""Conversion of raw chart series into daily trade bars."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import timedelta
from decimal import Decimal

from indexfeed.core.exceptions import DataIntegrityError
from indexfeed.core.models import ExchangeHours, RawPriceSeries, TradeBar


def _to_decimal(value: float) -> Decimal:
    return Decimal(str(value))


class BarNormalizer:
    """Builds :class:`TradeBar` records from a :class:`RawPriceSeries`.

    With ``daily_precise_end_time`` off, bars run from local midnight to the
    next local midnight. With it on, a bar keeps its exchange-local start and
    ends at the session close reported by the exchange hours.
    """

    def __init__(self, daily_precise_end_time: bool = False) -> None:
        self.daily_precise_end_time = daily_precise_end_time

    def normalize(self, symbol: str, series: RawPriceSeries, exchange_hours: ExchangeHours) -> Iterator[TradeBar]:
        """Lazily yield one bar per series position, in series order.

        The returned iterator is single-use. A zero open, high, low or close
        raises :class:`DataIntegrityError` when that position is reached;
        earlier bars have already been yielded by then.
        """

        for index, timestamp in enumerate(series.timestamps):
            time = exchange_hours.from_unix(timestamp)
            if self.daily_precise_end_time:
                end_time = exchange_hours.next_daily_end_time(time)
            else:
                time = exchange_hours.midnight(time.date())
                end_time = exchange_hours.midnight(time.date() + timedelta(days=1))

            open_ = series.open[index]
            high = series.high[index]
            low = series.low[index]
            close = series.close[index]
            volume = series.volume[index]

            if open_ == 0 or high == 0 or low == 0 or close == 0:
                raise DataIntegrityError(
                    f"Invalid data for {symbol} at {time}. "
                    f"Open: {open_}, High: {high}, Low: {low}, Close: {close}, Volume: {volume}.",
                    symbol=symbol,
                    time=time,
                    values={"open": open_, "high": high, "low": low, "close": close, "volume": volume},
                )

            yield TradeBar(
                symbol=symbol,
                time=time,
                end_time=end_time,
                open=_to_decimal(open_),
                high=_to_decimal(high),
                low=_to_decimal(low),
                close=_to_decimal(close),
                volume=_to_decimal(volume),
            )


__all__ = ["BarNormalizer"]
