"""Pipeline services."""

from indexfeed.core.services.aggregation import Aggregator, SliceAggregator
from indexfeed.core.services.calendars import ExchangeHoursProvider
from indexfeed.core.services.history import IndexHistoryProvider
from indexfeed.core.services.normalization import BarNormalizer
from indexfeed.core.services.validation import IneligibilityReason, RequestValidator

__all__ = [
    "Aggregator",
    "BarNormalizer",
    "ExchangeHoursProvider",
    "IndexHistoryProvider",
    "IneligibilityReason",
    "RequestValidator",
    "SliceAggregator",
]
