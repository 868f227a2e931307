"""Engulfing candle patterns.

A bullish engulfing bar is a long white body that swallows the small
black body before it; the bearish pattern mirrors it. "Long" and "small"
are relative to an EMA of body sizes, aligned bar for bar with the
candles.
"""

from typing import Sequence

from signalcore.indicators.moving_averages import ema
from signalcore.models.candle import Candle


def _body_averages(candles: Sequence[Candle], body_period: int) -> list[float] | None:
    """EMA of body sizes for the last two candles, or None without history."""
    # Both the current and the previous candle need an average.
    if body_period <= 0 or len(candles) < body_period + 1:
        return None
    averages = ema([c.body_size for c in candles], body_period)
    return averages[-2:]


def is_bull_engulfing(candles: Sequence[Candle], body_period: int = 14) -> bool:
    """Whether the last candle completes a bullish engulfing pattern."""
    averages = _body_averages(candles, body_period)
    if averages is None:
        return False

    prev_avg, cur_avg = averages
    prev, cur = candles[-2], candles[-1]
    return (
        cur.is_bullish
        and cur.body_size > cur_avg
        and prev.is_bearish
        and prev.body_size < prev_avg
        and cur.close >= prev.open
        and cur.open <= prev.close
        and (cur.close > prev.open or cur.open < prev.close)
    )


def is_bear_engulfing(candles: Sequence[Candle], body_period: int = 14) -> bool:
    """Whether the last candle completes a bearish engulfing pattern."""
    averages = _body_averages(candles, body_period)
    if averages is None:
        return False

    prev_avg, cur_avg = averages
    prev, cur = candles[-2], candles[-1]
    return (
        cur.is_bearish
        and cur.body_size > cur_avg
        and prev.is_bullish
        and prev.body_size < prev_avg
        and cur.close <= prev.open
        and cur.open >= prev.close
        and (cur.close < prev.open or cur.open > prev.close)
    )
