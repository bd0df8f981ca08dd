"""Bar and slice models."""

from datetime import datetime, timedelta
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class TradeBar(BaseModel):
    """Daily OHLCV bar for one instrument."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    time: datetime
    end_time: datetime
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal = Decimal("0")

    @property
    def period(self) -> timedelta:
        return self.end_time - self.time

    @field_serializer("open", "high", "low", "close", "volume", when_used="json")
    def serialize_decimal(self, value: Decimal) -> str:
        """Serialize Decimal to string."""
        return str(value)


class Slice(BaseModel):
    """All bars sharing one end time, keyed by symbol."""

    time: datetime
    bars: dict[str, TradeBar] = Field(default_factory=dict)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.bars

    def __getitem__(self, symbol: str) -> TradeBar:
        return self.bars[symbol]
