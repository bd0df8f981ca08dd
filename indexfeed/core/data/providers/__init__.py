"""数据提供商实现."""

from indexfeed.core.data.providers.yahoo import YahooIndexPriceClient, to_unix_seconds

__all__ = ["YahooIndexPriceClient", "to_unix_seconds"]
