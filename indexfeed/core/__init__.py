"""indexfeed 核心模块"""

from indexfeed.core.config import ConfigManager, IndexFeedConfig
from indexfeed.core.models import (
    ExchangeHours,
    HistoryRequest,
    RawPriceSeries,
    Resolution,
    SecurityType,
    Slice,
    TickType,
    TradeBar,
)
from indexfeed.core.services import IndexHistoryProvider

__all__ = [
    "ConfigManager",
    "IndexFeedConfig",
    "ExchangeHours",
    "HistoryRequest",
    "IndexHistoryProvider",
    "RawPriceSeries",
    "Resolution",
    "SecurityType",
    "Slice",
    "TickType",
    "TradeBar",
]
