"""Merging per-request bar streams into time-ordered slices."""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Iterable, Iterator
from typing import Protocol
from zoneinfo import ZoneInfo

from indexfeed.core.models import HistoryRequest, Slice, TradeBar


class Aggregator(Protocol):
    """Receives per-request bar streams and iterates merged slices."""

    def add_subscription(self, request: HistoryRequest, bars: Iterable[TradeBar]) -> None: ...

    def __len__(self) -> int: ...

    def __iter__(self) -> Iterator[Slice]: ...


class SliceAggregator:
    """Merges chronological bar streams into :class:`Slice` objects.

    Bars that share an end time land in the same slice, stamped with that end
    time in ``slice_time_zone``. Streams are pulled lazily, so an error raised
    by one stream stops iteration at the bar that raised it.

    A slice holds one bar per symbol. When two subscriptions for the same
    symbol produce bars with the same end time, the bar from the subscription
    registered last is kept.
    """

    def __init__(self, slice_time_zone: str | ZoneInfo = "UTC") -> None:
        self.slice_time_zone = slice_time_zone if isinstance(slice_time_zone, ZoneInfo) else ZoneInfo(slice_time_zone)
        self._subscriptions: list[tuple[HistoryRequest, Iterable[TradeBar]]] = []

    def add_subscription(self, request: HistoryRequest, bars: Iterable[TradeBar]) -> None:
        self._subscriptions.append((request, bars))

    @property
    def requests(self) -> list[HistoryRequest]:
        return [request for request, _ in self._subscriptions]

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __iter__(self) -> Iterator[Slice]:
        merged = heapq.merge(*(bars for _, bars in self._subscriptions), key=lambda bar: bar.end_time)
        for end_time, group in itertools.groupby(merged, key=lambda bar: bar.end_time):
            yield Slice(
                time=end_time.astimezone(self.slice_time_zone),
                bars={bar.symbol: bar for bar in group},
            )


__all__ = ["Aggregator", "SliceAggregator"]
