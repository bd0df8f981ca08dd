"""Raw price series as delivered by the chart API."""

from pydantic import BaseModel, ConfigDict, model_validator


class RawPriceSeries(BaseModel):
    """Five parallel OHLCV sequences indexed by the same position as ``timestamps``."""

    model_config = ConfigDict(frozen=True)

    timestamps: list[int]
    open: list[float]
    high: list[float]
    low: list[float]
    close: list[float]
    volume: list[float]

    @model_validator(mode="after")
    def _check_alignment(self) -> "RawPriceSeries":
        if not self.timestamps:
            raise ValueError("timestamps cannot be empty")
        expected = len(self.timestamps)
        mismatched = {
            name: len(values)
            for name, values in (
                ("open", self.open),
                ("high", self.high),
                ("low", self.low),
                ("close", self.close),
                ("volume", self.volume),
            )
            if len(values) != expected
        }
        if mismatched:
            raise ValueError(f"series lengths do not match {expected} timestamps: {mismatched}")
        return self

    def __len__(self) -> int:
        return len(self.timestamps)
