"""Strategy protocol defining the interface all strategies must implement.

This module provides:
- SignalStrategy: Runtime-checkable Protocol that strategies must satisfy
- CandleWindow: the candle sequence a strategy reads
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from signalcore.models.candle import Candle
from signalcore.models.options import Options
from signalcore.models.signal import Signal

CandleWindow = Sequence[Candle]


@runtime_checkable
class SignalStrategy(Protocol):
    """Protocol that all signal strategies must implement.

    A strategy is a pure function of its candle window and its options:
    it holds no per-symbol state, so one instance can serve any number of
    symbols. It never raises for a conforming window; a window shorter
    than ``min_candles`` reads ``Signal.NONE``.
    """

    @property
    def name(self) -> str:
        """Unique strategy identifier (e.g., 'ma_cross')."""
        ...

    @property
    def options(self) -> Options:
        """Validated option record."""
        ...

    @property
    def min_candles(self) -> int:
        """Shortest window on which the decision rule can fire."""
        ...

    def is_buy_signal(self, window: CandleWindow) -> Signal:
        """Return ``Signal.BUY`` if the buy rule fires on the last candle, else ``Signal.NONE``."""
        ...

    def is_sell_signal(self, window: CandleWindow) -> Signal:
        """Return ``Signal.SELL`` if the sell rule fires on the last candle, else ``Signal.NONE``."""
        ...

    def evaluate(self, window: CandleWindow) -> Signal:
        """Combine both rules: BUY, else SELL, else NONE."""
        ...
