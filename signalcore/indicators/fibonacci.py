"""Fibonacci retracement and extension levels of the latest swing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from signalcore.models.candle import Candle
from signalcore.models.options import FibonacciOptions, with_options
from signalcore.models.signal import Trend

RETRACEMENT_RATIOS = (0.236, 0.382, 0.5, 0.618, 0.786, 1.0)
EXTENSION_RATIOS = (1.0, 1.236, 1.618, 2.618, 3.618, 4.618)


@dataclass(frozen=True)
class FibonacciLevels:
    """Swing extremes plus levels keyed by Fibonacci ratio."""

    high: float
    low: float
    retracement: dict[float, float] = field(default_factory=dict)
    extension: dict[float, float] = field(default_factory=dict)


def _swing(candles: Sequence[Candle], trend: Trend) -> tuple[float, float]:
    """Highest high and lowest low of the last swing in ``trend``.

    For an up swing the low is found first and the high is searched from
    that bar on; a down swing mirrors it. Ties go to the most recent bar.
    """
    last = len(candles) - 1
    if trend == Trend.UP:
        low_index = min(range(last, -1, -1), key=lambda i: candles[i].low)
        high_index = max(range(last, low_index - 1, -1), key=lambda i: candles[i].high)
    else:
        high_index = max(range(last, -1, -1), key=lambda i: candles[i].high)
        low_index = min(range(last, high_index - 1, -1), key=lambda i: candles[i].low)
    return candles[high_index].high, candles[low_index].low


@with_options(FibonacciOptions)
def fibonacci_levels(
    candles: Sequence[Candle],
    trend: Trend | int = Trend.UP,
    period: int | None = None,
) -> FibonacciLevels:
    """
    Calculate Fibonacci levels over the last ``period`` candles (all when None).

    Up swing: retracements fall from the high, extensions rise above it.
    Down swing: retracements rise from the low, extensions fall below it.

    Raises:
        ValueError: on an empty window or a NEUTRAL trend
    """
    trend = Trend(trend)
    if trend == Trend.NEUTRAL:
        raise ValueError("Fibonacci levels need an UP or DOWN swing")

    window = list(candles[-period:]) if period else list(candles)
    if not window:
        raise ValueError("Fibonacci levels need at least one candle")

    high, low = _swing(window, trend)
    span = high - low

    if trend == Trend.UP:
        retracement = {r: high - span * r for r in RETRACEMENT_RATIOS}
        extension = {e: high + span * (e - 1.0) for e in EXTENSION_RATIOS}
    else:
        retracement = {r: low + span * r for r in RETRACEMENT_RATIOS}
        extension = {e: low - span * (e - 1.0) for e in EXTENSION_RATIOS}

    return FibonacciLevels(high=high, low=low, retracement=retracement, extension=extension)
