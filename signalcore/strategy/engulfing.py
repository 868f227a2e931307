"""Engulfing candle strategy with trend and RSI filters.

- BUY: bullish engulfing, close above EMA, midline < RSI < overbought
- SELL: bearish engulfing, close below EMA, oversold < RSI < midline
"""

from signalcore.indicators.moving_averages import ema
from signalcore.indicators.oscillators import rsi
from signalcore.models.options import EngulfingOptions
from signalcore.patterns.engulfing import is_bear_engulfing, is_bull_engulfing
from signalcore.strategy.base import BaseSignalStrategy
from signalcore.strategy.protocol import CandleWindow
from signalcore.strategy.registry import register_strategy


@register_strategy("engulfing")
class EngulfingStrategy(BaseSignalStrategy):
    """Engulfing pattern in the direction of the EMA trend."""

    options_cls = EngulfingOptions

    @property
    def min_candles(self) -> int:
        opts = self.options
        return max(opts.ema_period, opts.rsi_period + 1, opts.body_period + 1)

    def _filters(self, window: CandleWindow) -> tuple[float, float, float]:
        closes = [c.close for c in window]
        return (
            closes[-1],
            ema(closes, self.options.ema_period)[-1],
            rsi(closes, self.options.rsi_period)[-1],
        )

    def _buy(self, window: CandleWindow) -> bool:
        if not is_bull_engulfing(window, self.options.body_period):
            return False
        close, ema_value, rsi_value = self._filters(window)
        opts = self.options
        return close > ema_value and opts.rsi_midline < rsi_value < opts.overbought

    def _sell(self, window: CandleWindow) -> bool:
        if not is_bear_engulfing(window, self.options.body_period):
            return False
        close, ema_value, rsi_value = self._filters(window)
        opts = self.options
        return close < ema_value and opts.oversold < rsi_value < opts.rsi_midline
