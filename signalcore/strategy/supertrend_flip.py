"""Supertrend flip strategy.

- BUY: trend flips short -> long on the last candle
- SELL: trend flips long -> short on the last candle

The trend is recomputed from the window on each call; callers that need
the trend to persist across windows thread a ``SupertrendState`` through
``signalcore.trend.supertrend_trend`` instead.
"""

from signalcore.indicators.bands import supertrend
from signalcore.models.options import SupertrendFlipOptions
from signalcore.strategy.base import BaseSignalStrategy
from signalcore.strategy.protocol import CandleWindow
from signalcore.strategy.registry import register_strategy


@register_strategy("supertrend_flip")
class SupertrendFlipStrategy(BaseSignalStrategy):
    options_cls = SupertrendFlipOptions

    @property
    def min_candles(self) -> int:
        return self.options.atr_period + 2

    def _last_two(self, window: CandleWindow) -> list[int]:
        trend = supertrend(window, options=self.options).trend
        return trend[-2:]

    def _buy(self, window: CandleWindow) -> bool:
        return self._last_two(window) == [-1, 1]

    def _sell(self, window: CandleWindow) -> bool:
        return self._last_two(window) == [1, -1]
