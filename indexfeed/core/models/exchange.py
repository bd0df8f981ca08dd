"""Exchange hours model: timezone, sessions, holidays and early closes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from indexfeed.core.exceptions import ConfigurationError

DEFAULT_WEEKEND = frozenset({5, 6})


@dataclass(frozen=True)
class ExchangeHours:
    """Trading hours of one exchange, expressed in the exchange's local time.

    ``early_closes`` maps a trading date to the time the regular session ends
    on that date when it differs from ``market_close``.
    """

    time_zone: str
    market_open: time = time(9, 30)
    market_close: time = time(16, 0)
    extended_open: time | None = None
    extended_close: time | None = None
    weekend_days: frozenset[int] = DEFAULT_WEEKEND
    holidays: frozenset[date] = frozenset()
    early_closes: Mapping[date, time] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        try:
            ZoneInfo(self.time_zone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigurationError(f"Unknown time zone '{self.time_zone}'", "time_zone") from exc
        if self.market_close <= self.market_open:
            raise ConfigurationError("market_close must be after market_open", "market_close")

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.time_zone)

    def localize(self, value: datetime) -> datetime:
        """Attach the exchange zone to naive values, convert aware ones."""

        if value.tzinfo is None:
            return value.replace(tzinfo=self.tz)
        return value.astimezone(self.tz)

    def from_unix(self, timestamp: int | float) -> datetime:
        """Convert UNIX seconds to exchange local time."""

        return datetime.fromtimestamp(timestamp, tz=UTC).astimezone(self.tz)

    def midnight(self, day: date) -> datetime:
        return datetime.combine(day, time(), tzinfo=self.tz)

    def is_trading_day(self, day: date) -> bool:
        return day.weekday() not in self.weekend_days and day not in self.holidays

    def market_open_on(self, day: date) -> datetime | None:
        if not self.is_trading_day(day):
            return None
        return datetime.combine(day, self.market_open, tzinfo=self.tz)

    def market_close_on(self, day: date) -> datetime | None:
        """Regular session close for ``day``, honoring early closes."""

        if not self.is_trading_day(day):
            return None
        close = self.early_closes.get(day, self.market_close)
        return datetime.combine(day, close, tzinfo=self.tz)

    def is_open(self, local_time: datetime, extended_market_hours: bool = False) -> bool:
        local_time = self.localize(local_time)
        day = local_time.date()
        open_at = self.market_open_on(day)
        close_at = self.market_close_on(day)
        if open_at is None or close_at is None:
            return False
        if extended_market_hours:
            if self.extended_open is not None:
                open_at = min(open_at, datetime.combine(day, self.extended_open, tzinfo=self.tz))
            if self.extended_close is not None and day not in self.early_closes:
                close_at = max(close_at, datetime.combine(day, self.extended_close, tzinfo=self.tz))
        return open_at <= local_time < close_at

    def next_daily_end_time(self, local_time: datetime) -> datetime:
        """End time of the daily bar that starts at ``local_time``.

        This is the session close of that date when the session has not closed
        yet, otherwise the next local midnight.
        """

        local_time = self.localize(local_time)
        next_midnight = self.midnight(local_time.date() + timedelta(days=1))
        close_at = self.market_close_on(local_time.date())
        if close_at is None or local_time >= close_at:
            return next_midnight
        return close_at


__all__ = ["DEFAULT_WEEKEND", "ExchangeHours"]
