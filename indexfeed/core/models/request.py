"""History request model."""

from datetime import UTC, date, datetime, timedelta
from datetime import time as dt_time
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from indexfeed.core.models.exchange import ExchangeHours
from indexfeed.core.models.market import Resolution, SecurityType, TickType


class HistoryRequest(BaseModel):
    """单个历史数据请求.

    Start and end are UTC instants; naive values are read as UTC.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    symbol: str
    security_type: SecurityType = SecurityType.INDEX
    resolution: Resolution = Resolution.DAILY
    tick_type: TickType = TickType.TRADE
    start_time_utc: datetime
    end_time_utc: datetime
    include_extended_market_hours: bool = False
    exchange_hours: ExchangeHours

    @field_validator("symbol")
    @classmethod
    def _strip_symbol(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("symbol cannot be empty")
        return value

    @field_validator("start_time_utc", "end_time_utc")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    @model_validator(mode="after")
    def _check_range(self) -> "HistoryRequest":
        if self.end_time_utc < self.start_time_utc:
            raise ValueError("end_time_utc must be on or after start_time_utc")
        return self

    @property
    def description(self) -> str:
        return f"{self.symbol}-{self.resolution.value}-{self.tick_type.value}"


class HistoryRequestBuilder:
    """请求构建器: builds one request per symbol over a shared range."""

    def __init__(self) -> None:
        self._symbols: list[str] = []
        self._fields: dict[str, Any] = {}

    def symbols(self, symbols: list[str]) -> "HistoryRequestBuilder":
        """设置代码列表."""
        self._symbols = list(symbols)
        return self

    def security_type(self, security_type: SecurityType) -> "HistoryRequestBuilder":
        self._fields["security_type"] = security_type
        return self

    def resolution(self, resolution: Resolution) -> "HistoryRequestBuilder":
        self._fields["resolution"] = resolution
        return self

    def tick_type(self, tick_type: TickType) -> "HistoryRequestBuilder":
        self._fields["tick_type"] = tick_type
        return self

    def exchange_hours(self, exchange_hours: ExchangeHours) -> "HistoryRequestBuilder":
        """设置交易所时间."""
        self._fields["exchange_hours"] = exchange_hours
        return self

    def extended_hours(self, include: bool = True) -> "HistoryRequestBuilder":
        self._fields["include_extended_market_hours"] = include
        return self

    def date_range(self, start: datetime | date, end: datetime | date) -> "HistoryRequestBuilder":
        """设置日期范围; dates cover whole UTC days."""
        self._fields["start_time_utc"] = (
            start if isinstance(start, datetime) else datetime.combine(start, dt_time(), UTC)
        )
        self._fields["end_time_utc"] = (
            end if isinstance(end, datetime) else datetime.combine(end + timedelta(days=1), dt_time(), UTC)
        )
        return self

    def build(self) -> list[HistoryRequest]:
        """构建请求对象."""
        return [HistoryRequest(symbol=symbol, **self._fields) for symbol in self._symbols]
