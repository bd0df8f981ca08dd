"""Built-in exchange hours keyed by market identifiers."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from datetime import date, time

from indexfeed.core.models import ExchangeHours


def normalize_market(market: str) -> str:
    """Normalize market identifiers for exchange hours lookups."""

    return market.strip().lower()


# A representative slice of the NYSE calendar; callers with full calendars
# construct their own ExchangeHours.
US_HOLIDAYS = frozenset(
    {
        date(2024, 1, 1),
        date(2024, 1, 15),
        date(2024, 2, 19),
        date(2024, 3, 29),
        date(2024, 5, 27),
        date(2024, 6, 19),
        date(2024, 7, 4),
        date(2024, 9, 2),
        date(2024, 11, 28),
        date(2024, 12, 25),
        date(2025, 1, 1),
        date(2025, 1, 9),
        date(2025, 1, 20),
        date(2025, 2, 17),
        date(2025, 4, 18),
        date(2025, 5, 26),
        date(2025, 6, 19),
        date(2025, 7, 4),
        date(2025, 9, 1),
        date(2025, 11, 27),
        date(2025, 12, 25),
    }
)

US_EARLY_CLOSES = {
    date(2024, 7, 3): time(13, 0),
    date(2024, 11, 29): time(13, 0),
    date(2024, 12, 24): time(13, 0),
    date(2025, 7, 3): time(13, 0),
    date(2025, 11, 28): time(13, 0),
    date(2025, 12, 24): time(13, 0),
}


def builtin_exchange_hours() -> dict[str, tuple[ExchangeHours, frozenset[str]]]:
    """Construct built-in exchange hours with their aliases."""

    us_hours = ExchangeHours(
        time_zone="America/New_York",
        market_open=time(9, 30),
        market_close=time(16, 0),
        extended_open=time(4, 0),
        extended_close=time(20, 0),
        holidays=US_HOLIDAYS,
        early_closes=US_EARLY_CLOSES,
    )
    return {
        "us": (us_hours, frozenset({"usa", "nyse", "nasdaq", "cboe"})),
        "uk": (
            ExchangeHours(time_zone="Europe/London", market_open=time(8, 0), market_close=time(16, 30)),
            frozenset({"lse", "gb"}),
        ),
        "jp": (
            ExchangeHours(time_zone="Asia/Tokyo", market_open=time(9, 0), market_close=time(15, 0)),
            frozenset({"tse", "japan"}),
        ),
        "hk": (
            ExchangeHours(time_zone="Asia/Hong_Kong", market_open=time(9, 30), market_close=time(16, 0)),
            frozenset({"sehk", "hkex"}),
        ),
    }


class ExchangeHoursProvider:
    """Provides exchange hours keyed by market identifiers and aliases."""

    def __init__(
        self,
        market_hours: Mapping[str, tuple[ExchangeHours, frozenset[str]]] | None = None,
        default_hours: ExchangeHours | None = None,
    ) -> None:
        source = market_hours or builtin_exchange_hours()
        self._hours: MutableMapping[str, ExchangeHours] = {}
        for key, (hours, aliases) in source.items():
            self._hours[normalize_market(key)] = hours
            for alias in aliases:
                self._hours[normalize_market(alias)] = hours

        self._default_hours = default_hours or ExchangeHours(time_zone="UTC")

    def get(self, market: str) -> ExchangeHours:
        """Return the matching exchange hours or fallback to default."""

        return self._hours.get(normalize_market(market), self._default_hours)

    def markets(self) -> list[str]:
        return sorted(self._hours)


__all__ = [
    "ExchangeHoursProvider",
    "US_EARLY_CLOSES",
    "US_HOLIDAYS",
    "builtin_exchange_hours",
    "normalize_market",
]
