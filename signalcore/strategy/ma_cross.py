"""Moving average crossover strategies.

- ma_cross: short MA crosses above long MA -> BUY, below -> SELL
- price_ma_cross: price crosses above its MA -> BUY, below -> SELL

Either MA may be any member of the moving average family.
"""

from signalcore.indicators.crossover import crossed_down, crossed_up
from signalcore.indicators.moving_averages import ma_lookback, moving_average
from signalcore.models.options import MaCrossOptions, PriceMaCrossOptions
from signalcore.strategy.base import BaseSignalStrategy
from signalcore.strategy.protocol import CandleWindow
from signalcore.strategy.registry import register_strategy


@register_strategy("ma_cross")
class MaCrossStrategy(BaseSignalStrategy):
    """Short moving average crossing a long moving average."""

    options_cls = MaCrossOptions

    @property
    def min_candles(self) -> int:
        opts = self.options
        return max(
            ma_lookback(opts.short_period, opts.short_ma_type),
            ma_lookback(opts.long_period, opts.long_ma_type),
        ) + 1

    def _lines(self, window: CandleWindow) -> tuple[list[float], list[float]]:
        values = self._source(window)
        opts = self.options
        short = moving_average(values, opts.short_period, opts.short_ma_type)
        long_ = moving_average(values, opts.long_period, opts.long_ma_type)
        return short, long_

    def _buy(self, window: CandleWindow) -> bool:
        return crossed_up(*self._lines(window))

    def _sell(self, window: CandleWindow) -> bool:
        return crossed_down(*self._lines(window))


@register_strategy("price_ma_cross")
class PriceMaCrossStrategy(BaseSignalStrategy):
    """Price crossing one moving average."""

    options_cls = PriceMaCrossOptions

    @property
    def min_candles(self) -> int:
        return ma_lookback(self.options.ma_period, self.options.ma_type) + 1

    def _lines(self, window: CandleWindow) -> tuple[list[float], list[float]]:
        values = self._source(window)
        return values, moving_average(values, self.options.ma_period, self.options.ma_type)

    def _buy(self, window: CandleWindow) -> bool:
        return crossed_up(*self._lines(window))

    def _sell(self, window: CandleWindow) -> bool:
        return crossed_down(*self._lines(window))
