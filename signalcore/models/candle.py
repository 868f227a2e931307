"""Candle (OHLCV bar) data models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SourceType(str, Enum):
    """Candle field (or blend of fields) an indicator reads."""

    OPEN = "open"
    HIGH = "high"
    LOW = "low"
    CLOSE = "close"
    HL2 = "hl2"
    HLC3 = "hlc3"
    HLCC4 = "hlcc4"


class Candle(BaseModel):
    """One OHLCV bar over a fixed time interval."""

    model_config = ConfigDict(frozen=True)

    symbol: str = ""
    interval: str = ""
    open_time: datetime
    close_time: datetime | None = None
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0
    is_closed: bool = True

    @property
    def is_bullish(self) -> bool:
        """Check if this is a bullish (white) candle."""
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        """Check if this is a bearish (black) candle."""
        return self.close < self.open

    @property
    def body_high(self) -> float:
        return max(self.open, self.close)

    @property
    def body_low(self) -> float:
        return min(self.open, self.close)

    @property
    def body_size(self) -> float:
        """Get the absolute size of the candle body."""
        return abs(self.close - self.open)

    @property
    def range_size(self) -> float:
        """Get the full range (high - low) of the candle."""
        return self.high - self.low

    def source(self, source_type: SourceType | str = SourceType.CLOSE) -> float:
        """Return the value of this candle for the given source type."""
        source_type = SourceType(source_type)
        if source_type is SourceType.HL2:
            return (self.high + self.low) / 2
        if source_type is SourceType.HLC3:
            return (self.high + self.low + self.close) / 3
        if source_type is SourceType.HLCC4:
            return (self.high + self.low + 2 * self.close) / 4
        return getattr(self, source_type.value)


class CandleBuffer(BaseModel):
    """Bounded window of recent candles for one symbol."""

    symbol: str
    interval: str = ""
    candles: list[Candle] = Field(default_factory=list)
    max_size: int = 500

    def add(self, candle: Candle) -> bool:
        """Add a candle to the buffer, maintaining max size.

        A candle with the same open time as the last one replaces it;
        anything older is ignored.

        Returns:
            True if the candle was appended as a new bar.
        """
        if self.candles and candle.open_time <= self.candles[-1].open_time:
            if candle.open_time == self.candles[-1].open_time:
                self.candles[-1] = candle
            return False

        self.candles.append(candle)
        if len(self.candles) > self.max_size:
            self.candles = self.candles[-self.max_size :]
        return True

    def get_closes(self) -> list[float]:
        """Get list of close prices."""
        return [c.close for c in self.candles]

    def get_highs(self) -> list[float]:
        """Get list of high prices."""
        return [c.high for c in self.candles]

    def get_lows(self) -> list[float]:
        """Get list of low prices."""
        return [c.low for c in self.candles]

    def get_volumes(self) -> list[float]:
        """Get list of volumes."""
        return [c.volume for c in self.candles]

    def __len__(self) -> int:
        return len(self.candles)
