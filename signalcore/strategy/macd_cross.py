"""MACD crossover strategy.

- BUY: MACD line crosses above its signal line
- SELL: MACD line crosses below its signal line
"""

from signalcore.indicators.crossover import crossed_down, crossed_up
from signalcore.indicators.oscillators import MacdResult, macd
from signalcore.models.options import MacdCrossOptions
from signalcore.strategy.base import BaseSignalStrategy
from signalcore.strategy.protocol import CandleWindow
from signalcore.strategy.registry import register_strategy


@register_strategy("macd_cross")
class MacdCrossStrategy(BaseSignalStrategy):
    """MACD / signal line crossover."""

    options_cls = MacdCrossOptions

    @property
    def min_candles(self) -> int:
        # Two aligned MACD/signal points.
        return max(self.options.fast_period, self.options.slow_period) + self.options.signal_period

    def _macd(self, window: CandleWindow) -> MacdResult:
        return macd(self._source(window), options=self.options)

    def _buy(self, window: CandleWindow) -> bool:
        result = self._macd(window)
        return crossed_up(result.macd, result.signal)

    def _sell(self, window: CandleWindow) -> bool:
        result = self._macd(window)
        return crossed_down(result.macd, result.signal)
