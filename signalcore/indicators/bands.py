"""Volatility, band and channel indicators.

Range Bands and Supertrend carry values from one bar to the next. The
Supertrend recurrence is exposed as ``supertrend_step`` so the batch
calculation and a caller threading its own ``SupertrendState`` share one
implementation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

import numpy as np

from signalcore.indicators.moving_averages import ema, sma
from signalcore.indicators.series import align_tail, candle_source, highest, lowest, to_array
from signalcore.models.candle import Candle, SourceType
from signalcore.models.options import (
    DEFAULT_ATR_PERIOD,
    DEFAULT_BOLLINGER_MULTIPLIER,
    DEFAULT_BOLLINGER_PERIOD,
    DEFAULT_RANGE_MULTIPLIER,
    DEFAULT_RANGE_PERIOD,
    DEFAULT_SUPERTREND_ATR_PERIOD,
    DEFAULT_SUPERTREND_MULTIPLIER,
    AtrOptions,
    BollingerOptions,
    RangeBandsOptions,
    SupertrendOptions,
    with_options,
)
from signalcore.models.signal import SupertrendState


@dataclass(frozen=True)
class BollingerResult:
    basis: list[float] = field(default_factory=list)
    upper: list[float] = field(default_factory=list)
    lower: list[float] = field(default_factory=list)
    spread: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.basis)


@dataclass(frozen=True)
class RangeBandsResult:
    high_band: list[float] = field(default_factory=list)
    low_band: list[float] = field(default_factory=list)
    filt: list[float] = field(default_factory=list)
    upward: list[int] = field(default_factory=list)
    downward: list[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.filt)


@dataclass(frozen=True)
class SupertrendResult:
    trend: list[int] = field(default_factory=list)
    upper_band: list[float] = field(default_factory=list)
    lower_band: list[float] = field(default_factory=list)
    states: list[SupertrendState] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.trend)


# =============================================================================
# True Range / ATR
# =============================================================================

def true_range(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
) -> list[float]:
    """
    Calculate True Range.

    TR = max(high - low, abs(high - prev_close), abs(low - prev_close));
    the first bar has no previous close and uses high - low.
    """
    n = len(highs)
    if n == 0:
        return []

    result = [float(highs[0]) - float(lows[0])]

    for i in range(1, n):
        hl = float(highs[i]) - float(lows[i])
        hc = abs(float(highs[i]) - float(closes[i - 1]))
        lc = abs(float(lows[i]) - float(closes[i - 1]))
        result.append(max(hl, hc, lc))

    return result


@with_options(AtrOptions)
def atr(candles: Sequence[Candle], period: int = DEFAULT_ATR_PERIOD) -> list[float]:
    """
    Calculate Average True Range (ATR).

    Uses Wilder's smoothing over the true ranges that have a previous
    close (bar 1 onward), seeded with their plain average.

    Returns:
        List of ``len(candles) - period`` ATR values
    """
    if period <= 0 or len(candles) <= period:
        return []

    tr = true_range(
        [c.high for c in candles],
        [c.low for c in candles],
        [c.close for c in candles],
    )[1:]

    result = [sum(tr[:period]) / period]
    for value in tr[period:]:
        result.append((result[-1] * (period - 1) + value) / period)
    return result


# =============================================================================
# Bollinger Bands
# =============================================================================

@with_options(BollingerOptions)
def bollinger_bands(
    candles: Sequence[Candle],
    period: int = DEFAULT_BOLLINGER_PERIOD,
    multiplier: float = DEFAULT_BOLLINGER_MULTIPLIER,
    source_type: SourceType | str = SourceType.CLOSE,
) -> BollingerResult:
    """SMA basis plus/minus ``multiplier`` population standard deviations."""
    values = candle_source(candles, source_type)
    basis = sma(values, period)
    if not basis:
        return BollingerResult()

    arr = to_array(values)
    deviation = [
        multiplier * float(np.std(arr[i - period + 1 : i + 1]))
        for i in range(period - 1, len(arr))
    ]

    return BollingerResult(
        basis=basis,
        upper=[b + d for b, d in zip(basis, deviation)],
        lower=[b - d for b, d in zip(basis, deviation)],
        spread=[2 * d for d in deviation],
    )


# =============================================================================
# Range Bands (trailing range filter)
# =============================================================================

def _pad_front(series: list[float], length: int) -> list[float]:
    return [0.0] * (length - len(series)) + series


@with_options(RangeBandsOptions)
def range_bands(
    values: Sequence[float],
    period: int = DEFAULT_RANGE_PERIOD,
    multiplier: float = DEFAULT_RANGE_MULTIPLIER,
) -> RangeBandsResult:
    """
    Calculate Range Bands around a trailing range filter.

    avg_range is EMA(period) of the absolute bar-to-bar change, the band
    half-width is EMA(2 * period - 1) of avg_range times ``multiplier``
    (0 until it has warmed up). The filter ``filt`` starts at the first
    value and follows price only when price leaves the band around it:

    - price above filt: filt = max(filt, price - half_width)
    - otherwise:        filt = min(filt, price + half_width)

    ``upward`` counts bars while filt is non-decreasing and resets when it
    falls; ``downward`` counts bars while filt falls, resets when it rises
    and holds when it is flat.

    Returns:
        RangeBandsResult with ``len(values) - period`` rows
    """
    n = len(values)
    if period <= 0 or n <= period:
        return RangeBandsResult()

    prices = [float(v) for v in values]
    changes = [0.0] + [abs(prices[i] - prices[i - 1]) for i in range(1, n)]

    avg_range = _pad_front(ema(changes, period), n)
    half_width = [r * multiplier for r in _pad_front(ema(avg_range, 2 * period - 1), n)]

    filt = [prices[0]]
    upward = [0]
    downward = [0]

    for i in range(1, n):
        prev = filt[-1]
        price = prices[i]
        if price > prev:
            current = max(prev, price - half_width[i])
        else:
            current = min(prev, price + half_width[i])
        filt.append(current)

        upward.append(0 if current < prev else upward[-1] + 1)
        if current < prev:
            downward.append(downward[-1] + 1)
        elif current > prev:
            downward.append(0)
        else:
            downward.append(downward[-1])

    return RangeBandsResult(
        high_band=[f + w for f, w in zip(filt[period:], half_width[period:])],
        low_band=[f - w for f, w in zip(filt[period:], half_width[period:])],
        filt=filt[period:],
        upward=upward[period:],
        downward=downward[period:],
    )


# =============================================================================
# Supertrend
# =============================================================================

def supertrend_step(
    state: SupertrendState | None,
    close: float,
    atr_value: float,
    midpoint: float,
    multiplier: float,
    bar_time: datetime | None = None,
) -> SupertrendState:
    """
    Advance the Supertrend recurrence by one bar.

    Raw bands are ``midpoint -/+ multiplier * atr``. Against the previous
    state the lower band only rises while the previous close stayed at or
    above the previous lower band, and the upper band only falls while the
    previous close stayed at or below the previous upper band. A short trend
    flips long when close exceeds the upper band; a long trend flips short
    when close drops below the lower band. The first bar starts long.
    """
    lower_band = midpoint - multiplier * atr_value
    upper_band = midpoint + multiplier * atr_value

    if state is None:
        return SupertrendState(
            trend=1,
            upper_band=upper_band,
            lower_band=lower_band,
            close=close,
            bar_time=bar_time,
        )

    # A long trend always leaves close >= lower band, so the lower band
    # never drops while the trend stays long (and symmetrically for short).
    if state.close >= state.lower_band:
        lower_band = max(lower_band, state.lower_band)
    if state.close <= state.upper_band:
        upper_band = min(upper_band, state.upper_band)

    trend = state.trend
    if trend == -1 and close > upper_band:
        trend = 1
    elif trend == 1 and close < lower_band:
        trend = -1

    return SupertrendState(
        trend=trend,
        upper_band=upper_band,
        lower_band=lower_band,
        close=close,
        bar_time=bar_time,
    )


@dataclass(frozen=True)
class SupertrendInputs:
    """Per-bar inputs of the Supertrend recurrence, end-aligned."""

    closes: list[float]
    atr: list[float]
    midpoints: list[float]
    bar_times: list[datetime]


def supertrend_inputs(
    candles: Sequence[Candle],
    atr_period: int = DEFAULT_SUPERTREND_ATR_PERIOD,
) -> SupertrendInputs:
    """ATR and highest-high/lowest-low midpoint for every bar with an ATR."""
    atr_values = atr(candles, atr_period)
    if not atr_values:
        return SupertrendInputs([], [], [], [])

    hh = highest([c.high for c in candles], atr_period)
    ll = lowest([c.low for c in candles], atr_period)
    closes = [c.close for c in candles]
    times = [c.open_time for c in candles]

    atr_values, hh, ll, closes, times = align_tail(atr_values, hh, ll, closes, times)
    midpoints = [(h + lo) / 2 for h, lo in zip(hh, ll)]
    return SupertrendInputs(closes, atr_values, midpoints, times)


@with_options(SupertrendOptions)
def supertrend(
    candles: Sequence[Candle],
    atr_period: int = DEFAULT_SUPERTREND_ATR_PERIOD,
    atr_multiplier: float = DEFAULT_SUPERTREND_MULTIPLIER,
) -> SupertrendResult:
    """
    Calculate Supertrend over a candle window.

    Folds ``supertrend_step`` over every bar that has an ATR value, so the
    output has ``len(candles) - atr_period`` rows. ``states`` holds the
    state after each bar; the last one can seed a threaded caller.
    """
    inputs = supertrend_inputs(candles, atr_period)

    states: list[SupertrendState] = []
    state = None
    for close, atr_value, mid, bar_time in zip(
        inputs.closes, inputs.atr, inputs.midpoints, inputs.bar_times
    ):
        state = supertrend_step(state, close, atr_value, mid, atr_multiplier, bar_time)
        states.append(state)

    return SupertrendResult(
        trend=[s.trend for s in states],
        upper_band=[s.upper_band for s in states],
        lower_band=[s.lower_band for s in states],
        states=states,
    )
