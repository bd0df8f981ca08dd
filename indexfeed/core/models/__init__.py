"""Data models module."""

from indexfeed.core.models.bar import Slice, TradeBar
from indexfeed.core.models.exchange import DEFAULT_WEEKEND, ExchangeHours
from indexfeed.core.models.market import Resolution, SecurityType, TickType
from indexfeed.core.models.request import HistoryRequest, HistoryRequestBuilder
from indexfeed.core.models.series import RawPriceSeries

__all__ = [
    "DEFAULT_WEEKEND",
    "ExchangeHours",
    "HistoryRequest",
    "HistoryRequestBuilder",
    "RawPriceSeries",
    "Resolution",
    "SecurityType",
    "Slice",
    "TickType",
    "TradeBar",
]
