"""Stochastic RSI strategy.

- BUY: K crosses above D while both were below the oversold line
- SELL: K crosses below D while both were above the overbought line
"""

from signalcore.indicators.crossover import crossed_down, crossed_up
from signalcore.indicators.oscillators import StochasticRsiResult, stochastic_rsi
from signalcore.models.options import StochasticRsiOptions
from signalcore.strategy.base import BaseSignalStrategy
from signalcore.strategy.protocol import CandleWindow
from signalcore.strategy.registry import register_strategy


@register_strategy("stochastic_rsi")
class StochasticRsiStrategy(BaseSignalStrategy):
    """K/D crossover from an extreme zone."""

    options_cls = StochasticRsiOptions

    @property
    def min_candles(self) -> int:
        opts = self.options
        # Shortest window that yields two aligned K/D points.
        return opts.rsi_period + opts.stochastic_period + opts.k_period + opts.d_period - 1

    def _stoch(self, window: CandleWindow) -> StochasticRsiResult:
        return stochastic_rsi([c.close for c in window], options=self.options)

    def _buy(self, window: CandleWindow) -> bool:
        result = self._stoch(window)
        if len(result) < 2:
            return False
        level = self.options.oversold
        return result.k[-2] < level and result.d[-2] < level and crossed_up(result.k, result.d)

    def _sell(self, window: CandleWindow) -> bool:
        result = self._stoch(window)
        if len(result) < 2:
            return False
        level = self.options.overbought
        return result.k[-2] > level and result.d[-2] > level and crossed_down(result.k, result.d)
