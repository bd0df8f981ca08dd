"""Index history provider: the request-to-slices pipeline."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any
from zoneinfo import ZoneInfo

from loguru import logger

from indexfeed.core.config import HistoryConfig, IndexFeedConfig
from indexfeed.core.data.providers import YahooIndexPriceClient
from indexfeed.core.logging import log_context
from indexfeed.core.models import HistoryRequest, Slice, TradeBar
from indexfeed.core.services.aggregation import Aggregator, SliceAggregator
from indexfeed.core.services.normalization import BarNormalizer
from indexfeed.core.services.validation import RequestValidator


class IndexHistoryProvider:
    """Index history provider backed by the Yahoo Finance chart API.

    Requests are processed one at a time in input order: ineligible requests
    and requests whose fetch is exhausted are skipped, every other request
    contributes a lazy bar stream to the aggregator. The provider, its
    validator and its HTTP client are not meant to be shared across threads;
    concurrent batches each need their own instance.
    """

    def __init__(
        self,
        client: YahooIndexPriceClient | None = None,
        *,
        daily_precise_end_time: bool = False,
        validator: RequestValidator | None = None,
        aggregator_factory: Callable[[str | ZoneInfo], Aggregator] = SliceAggregator,
    ) -> None:
        self.client = client or YahooIndexPriceClient()
        self.validator = validator or RequestValidator(type(self).__name__)
        self.normalizer = BarNormalizer(daily_precise_end_time)
        self._aggregator_factory = aggregator_factory
        self.data_point_count = 0

    @classmethod
    def from_config(cls, config: IndexFeedConfig, **kwargs: Any) -> "IndexHistoryProvider":
        """Build a provider and its client from an :class:`IndexFeedConfig`."""

        client = kwargs.pop("client", None) or YahooIndexPriceClient(config.providers)
        return cls(client, daily_precise_end_time=config.history.daily_precise_end_time, **kwargs)

    def initialize(self, settings: HistoryConfig) -> None:
        """Adopt the engine's end time policy for every bar produced from now on."""

        self.normalizer = BarNormalizer(settings.daily_precise_end_time)

    @property
    def daily_precise_end_time(self) -> bool:
        return self.normalizer.daily_precise_end_time

    def get_history(
        self,
        requests: Iterable[HistoryRequest],
        slice_time_zone: str | ZoneInfo = "UTC",
    ) -> Iterator[Slice] | None:
        """Gets the history for the requested securities.

        Args:
            requests: The historical data requests
            slice_time_zone: The time zone used when time stamping the slices

        Returns:
            An iterator of slices covering every request that produced data,
            or ``None`` when no request did.
        """
        aggregator = self._aggregator_factory(slice_time_zone)
        with log_context(component=type(self).__name__):
            for request in requests:
                history = self.get_history_for(request)
                if history is None:
                    continue
                aggregator.add_subscription(request, history)

        if len(aggregator) == 0:
            logger.warning("No history request produced data.")
            return None
        return iter(aggregator)

    def get_history_for(self, request: HistoryRequest) -> Iterator[TradeBar] | None:
        """Gets the history for one request.

        The fetch happens immediately; bars are built while the returned
        iterator is consumed and may raise :class:`DataIntegrityError` part
        way through. Returns ``None`` when the request is ineligible or the
        remote data is unavailable.
        """
        if self.validator.check(request) is not None:
            return None

        series = self.client.fetch(request)
        if series is None:
            return None

        return self._count(self.normalizer.normalize(request.symbol, series, request.exchange_hours))

    def _count(self, bars: Iterator[TradeBar]) -> Iterator[TradeBar]:
        for bar in bars:
            self.data_point_count += 1
            yield bar

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "IndexHistoryProvider":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


__all__ = ["IndexHistoryProvider"]
