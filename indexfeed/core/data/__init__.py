"""Remote data access: chart API client and response parsing."""

from indexfeed.core.data.parsing import parse_chart_response
from indexfeed.core.data.providers import YahooIndexPriceClient, to_unix_seconds

__all__ = ["YahooIndexPriceClient", "parse_chart_response", "to_unix_seconds"]
