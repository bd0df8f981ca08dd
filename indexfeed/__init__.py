"""indexfeed - 指数历史数据获取库

Fetches daily index prices from the Yahoo Finance chart API and turns them
into exchange-aligned trade bars and time-ordered slices.
"""

from collections.abc import Iterator
from dataclasses import replace
from datetime import date, datetime

from indexfeed.core.config import ConfigManager, HistoryConfig, IndexFeedConfig
from indexfeed.core.exceptions import DataIntegrityError, IndexFeedError
from indexfeed.core.models import (
    ExchangeHours,
    HistoryRequest,
    HistoryRequestBuilder,
    Resolution,
    SecurityType,
    Slice,
    TickType,
    TradeBar,
)
from indexfeed.core.services import ExchangeHoursProvider, IndexHistoryProvider

__version__ = "0.1.0"


def get_history(
    symbols: list[str],
    start: date | datetime,
    end: date | datetime,
    market: str = "us",
    include_extended_market_hours: bool = False,
    daily_precise_end_time: bool | None = None,
    config: IndexFeedConfig | None = None,
) -> Iterator[Slice] | None:
    """同步获取指数日线历史

    Args:
        symbols: 指数代码列表 (不带 ``^`` 前缀, 例如 ``SPX``)
        start: 开始日期
        end: 结束日期
        market: 交易所时间所属市场
        include_extended_market_hours: 是否包含盘前盘后
        daily_precise_end_time: 覆盖配置中的结束时间策略
        config: 配置, 默认从 ``~/.indexfeed/config.toml`` 加载

    Returns:
        按时间排序的切片迭代器; 没有任何数据时返回 ``None``

    Examples:
        >>> import indexfeed
        >>> slices = indexfeed.get_history(["SPX", "NDX"], date(2024, 3, 1), date(2024, 3, 8))
    """
    config = config or ConfigManager().get_config()
    if daily_precise_end_time is not None:
        config = replace(config, history=HistoryConfig(daily_precise_end_time=daily_precise_end_time))

    requests = (
        HistoryRequestBuilder()
        .symbols(symbols)
        .exchange_hours(ExchangeHoursProvider().get(market))
        .extended_hours(include_extended_market_hours)
        .date_range(start, end)
        .build()
    )
    # every fetch completes inside get_history; only bar building is deferred
    with IndexHistoryProvider.from_config(config) as provider:
        return provider.get_history(requests)


__all__ = [
    "ConfigManager",
    "DataIntegrityError",
    "ExchangeHours",
    "ExchangeHoursProvider",
    "HistoryRequest",
    "HistoryRequestBuilder",
    "IndexFeedConfig",
    "IndexFeedError",
    "IndexHistoryProvider",
    "Resolution",
    "SecurityType",
    "Slice",
    "TickType",
    "TradeBar",
    "get_history",
]
