"""Signal, trend and trend-state models."""

from datetime import datetime
from enum import IntEnum

from pydantic import BaseModel, ConfigDict, field_validator


class Signal(IntEnum):
    """Tri-state trading decision. ``NONE`` is falsy."""

    SELL = -1
    NONE = 0
    BUY = 1


class Trend(IntEnum):
    """Trend classification."""

    DOWN = -1
    NEUTRAL = 0
    UP = 1


class SupertrendState(BaseModel):
    """Supertrend memory carried from one bar to the next.

    Holds the trend and the ratcheted bands after consuming a bar, plus
    the close of that bar (the ratchet rule of the next bar needs it).
    ``bar_time`` is the open time of the consumed bar, when known, so a
    state is never stepped twice over the same candle.

    A state belongs to exactly one symbol. Serialise it with
    ``model_dump()`` and restore it with ``model_validate()``.
    """

    model_config = ConfigDict(frozen=True)

    trend: int = 1
    upper_band: float
    lower_band: float
    close: float
    bar_time: datetime | None = None

    @field_validator("trend")
    @classmethod
    def _check_trend(cls, value: int) -> int:
        if value not in (-1, 1):
            raise ValueError(f"trend must be -1 or 1, got {value}")
        return value

    @property
    def is_long(self) -> bool:
        return self.trend == 1
