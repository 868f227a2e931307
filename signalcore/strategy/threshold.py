"""Threshold strategies on bounded oscillators.

These compare the last two points of an oscillator against static
levels:

- rsi_threshold: RSI leaving (or entering) the oversold/overbought zones
- volume_oscillator: volume oscillator rising through a threshold
"""

from typing import Sequence

from signalcore.indicators.oscillators import rsi, volume_oscillator
from signalcore.models.options import RsiThresholdOptions, VolumeOscillatorOptions
from signalcore.strategy.base import BaseSignalStrategy
from signalcore.strategy.protocol import CandleWindow
from signalcore.strategy.registry import register_strategy


def rose_through(values: Sequence[float], level: float) -> bool:
    """Whether the last two points went from below ``level`` to above it."""
    if len(values) < 2:
        return False
    return values[-2] < level < values[-1]


def fell_through(values: Sequence[float], level: float) -> bool:
    """Whether the last two points went from above ``level`` to below it."""
    if len(values) < 2:
        return False
    return values[-2] > level > values[-1]


@register_strategy("rsi_threshold")
class RsiThresholdStrategy(BaseSignalStrategy):
    """RSI crossing the oversold/overbought lines.

    With ``signal_at_breakout`` (default) a BUY is RSI climbing back above
    oversold and a SELL is RSI dropping back below overbought. Without it
    a BUY is RSI dropping below oversold and a SELL is RSI climbing above
    overbought.
    """

    options_cls = RsiThresholdOptions

    @property
    def min_candles(self) -> int:
        # RSI emits from bar `period`; the rule needs two values.
        return self.options.rsi_period + 2

    def _rsi(self, window: CandleWindow) -> list[float]:
        return rsi(self._source(window), self.options.rsi_period)

    def _buy(self, window: CandleWindow) -> bool:
        values = self._rsi(window)
        if self.options.signal_at_breakout:
            return rose_through(values, self.options.oversold)
        return fell_through(values, self.options.oversold)

    def _sell(self, window: CandleWindow) -> bool:
        values = self._rsi(window)
        if self.options.signal_at_breakout:
            return fell_through(values, self.options.overbought)
        return rose_through(values, self.options.overbought)


@register_strategy("volume_oscillator")
class VolumeOscillatorStrategy(BaseSignalStrategy):
    """Volume oscillator rising through its threshold.

    A volume surge carries no direction, so the buy and sell rules are
    the same; ``evaluate`` reports it as BUY.
    """

    options_cls = VolumeOscillatorOptions

    @property
    def min_candles(self) -> int:
        return max(self.options.long_length, self.options.short_length) + 1

    def _surge(self, window: CandleWindow) -> bool:
        values = volume_oscillator(window, options=self.options)
        return rose_through(values, self.options.threshold)

    def _buy(self, window: CandleWindow) -> bool:
        return self._surge(window)

    def _sell(self, window: CandleWindow) -> bool:
        return self._surge(window)
