"""Oscillator indicators built on the moving average family.

Multi-line oscillators return a small result object of parallel,
end-aligned lists. Insufficient history yields empty lists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from signalcore.indicators.bands import true_range
from signalcore.indicators.moving_averages import ema, moving_average, sma
from signalcore.indicators.series import (
    align_tail,
    candle_source,
    highest,
    highest_offset,
    lowest,
    lowest_offset,
)
from signalcore.models.candle import Candle, SourceType
from signalcore.models.options import (
    DEFAULT_ADX_PERIOD,
    DEFAULT_AO_FAST,
    DEFAULT_AO_SLOW,
    DEFAULT_AROON_LENGTH,
    DEFAULT_MACD_FAST,
    DEFAULT_MACD_SIGNAL,
    DEFAULT_MACD_SLOW,
    DEFAULT_RMI_LENGTH,
    DEFAULT_RMI_MOMENTUM,
    DEFAULT_RSI_PERIOD,
    DEFAULT_STOCH_D,
    DEFAULT_STOCH_K,
    DEFAULT_STOCH_PERIOD,
    DEFAULT_TMO_LENGTH,
    DEFAULT_TMO_SMOOTH_LENGTH,
    DEFAULT_TMO_WINDOW,
    DEFAULT_VO_LONG,
    DEFAULT_VO_SHORT,
    AdxOptions,
    AroonOptions,
    MacdOptions,
    MAType,
    RmiOptions,
    RsiOptions,
    SmoothAoOptions,
    SmoothMomentumOptions,
    StochasticRsiIndicatorOptions,
    VolumeOscillatorIndicatorOptions,
    with_options,
)


# =============================================================================
# Result containers
# =============================================================================

@dataclass(frozen=True)
class MacdResult:
    macd: list[float] = field(default_factory=list)
    signal: list[float] = field(default_factory=list)
    histogram: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.macd)


@dataclass(frozen=True)
class StochasticRsiResult:
    k: list[float] = field(default_factory=list)
    d: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.k)


@dataclass(frozen=True)
class SmoothMomentumResult:
    main: list[float] = field(default_factory=list)
    signal: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.main)


@dataclass(frozen=True)
class AroonResult:
    upper: list[float] = field(default_factory=list)
    lower: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.upper)


@dataclass(frozen=True)
class AdxResult:
    adx: list[float] = field(default_factory=list)
    plus_di: list[float] = field(default_factory=list)
    minus_di: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.adx)


# =============================================================================
# RSI family
# =============================================================================

@with_options(RsiOptions)
def rsi(values: Sequence[float], period: int = DEFAULT_RSI_PERIOD) -> list[float]:
    """
    Calculate Relative Strength Index.

    Gains and losses are Wilder-averaged: the first average is the plain
    mean of the first ``period`` changes, then
    ``avg = (avg * (period - 1) + change) / period``.

    A window with no losses reads 100, a window with neither gains nor
    losses reads 50.

    Args:
        values: Sequence of price values
        period: RSI period

    Returns:
        List of ``len(values) - period`` values in [0, 100]
    """
    if period <= 0 or len(values) <= period:
        return []

    changes = [float(values[i]) - float(values[i - 1]) for i in range(1, len(values))]
    gains = [max(c, 0.0) for c in changes]
    losses = [max(-c, 0.0) for c in changes]

    avg_gain = sum(gains[:period]) / period
    avg_loss = sum(losses[:period]) / period
    result = [_rsi_value(avg_gain, avg_loss)]

    for i in range(period, len(changes)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        result.append(_rsi_value(avg_gain, avg_loss))

    return result


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 100.0 if avg_gain > 0 else 50.0
    value = 100.0 - 100.0 / (1.0 + avg_gain / avg_loss)
    return min(max(value, 0.0), 100.0)


@with_options(StochasticRsiIndicatorOptions)
def stochastic_rsi(
    values: Sequence[float],
    rsi_period: int = DEFAULT_RSI_PERIOD,
    stochastic_period: int = DEFAULT_STOCH_PERIOD,
    k_period: int = DEFAULT_STOCH_K,
    d_period: int = DEFAULT_STOCH_D,
) -> StochasticRsiResult:
    """
    Calculate Stochastic RSI.

    stoch = 100 * (rsi - lowest) / (highest - lowest) over
    ``stochastic_period`` RSI values (0 when the window is flat),
    k = SMA(stoch, k_period), d = SMA(k, d_period).
    """
    rsi_values = rsi(values, rsi_period)
    hh = highest(rsi_values, stochastic_period)
    ll = lowest(rsi_values, stochastic_period)
    if not hh:
        return StochasticRsiResult()

    current, hh, ll = align_tail(rsi_values, hh, ll)
    stoch = [
        100.0 * (r - lo) / (hi - lo) if hi != lo else 0.0
        for r, hi, lo in zip(current, hh, ll)
    ]

    k = sma(stoch, k_period)
    d = sma(k, d_period)
    k, d = align_tail(k, d)
    return StochasticRsiResult(k=k, d=d)


@with_options(MacdOptions)
def macd(
    values: Sequence[float],
    fast_period: int = DEFAULT_MACD_FAST,
    slow_period: int = DEFAULT_MACD_SLOW,
    signal_period: int = DEFAULT_MACD_SIGNAL,
    oscillator_ma_type: MAType | str = MAType.EMA,
    signal_ma_type: MAType | str = MAType.EMA,
) -> MacdResult:
    """
    Calculate MACD.

    macd = fast MA - slow MA over their common suffix, signal = MA of
    macd; the oscillator and signal smoothers are chosen independently.

    Returns:
        MacdResult with aligned macd, signal and histogram lines
    """
    fast = moving_average(values, fast_period, oscillator_ma_type)
    slow = moving_average(values, slow_period, oscillator_ma_type)
    if not fast or not slow:
        return MacdResult()

    fast, slow = align_tail(fast, slow)
    line = [f - s for f, s in zip(fast, slow)]

    signal = moving_average(line, signal_period, signal_ma_type)
    if not signal:
        return MacdResult()

    line, signal = align_tail(line, signal)
    histogram = [m - s for m, s in zip(line, signal)]
    return MacdResult(macd=line, signal=signal, histogram=histogram)


@with_options(RmiOptions)
def rmi(
    values: Sequence[float],
    length: int = DEFAULT_RMI_LENGTH,
    momentum: int = DEFAULT_RMI_MOMENTUM,
) -> list[float]:
    """
    Calculate Relative Momentum Index.

    Like RSI, but on lag-``momentum`` changes, each side EMA-smoothed over
    ``length``. When the smoothed downward term is 0 the value is 0.

    Returns:
        List of ``len(values) - momentum - length + 1`` values
    """
    if momentum <= 0 or len(values) <= momentum:
        return []

    up_moves = []
    down_moves = []
    for i in range(momentum, len(values)):
        delta = float(values[i]) - float(values[i - momentum])
        up_moves.append(max(delta, 0.0))
        down_moves.append(max(-delta, 0.0))

    up = ema(up_moves, length)
    down = ema(down_moves, length)
    return [0.0 if d == 0 else 100.0 - 100.0 / (1.0 + u / d) for u, d in zip(up, down)]


# =============================================================================
# Candle-based oscillators
# =============================================================================

@with_options(SmoothMomentumOptions)
def smooth_momentum(
    candles: Sequence[Candle],
    length: int = DEFAULT_TMO_LENGTH,
    smooth_length: int = DEFAULT_TMO_SMOOTH_LENGTH,
    tmo_length: int = DEFAULT_TMO_WINDOW,
) -> SmoothMomentumResult:
    """
    Calculate the smoothed True Momentum Oscillator.

    For every bar from ``tmo_length`` on, compare its close with the opens
    of the previous ``tmo_length - 1`` bars: +1 per open below the close,
    -1 per open above it. The count is EMA(length)-smoothed, then
    EMA(smooth_length)-smoothed into ``main``, and ``main`` smoothed once
    more into ``signal``. ``main`` is trimmed to the length of ``signal``.
    """
    counts = [0.0] * len(candles)
    for i in range(tmo_length, len(candles)):
        close = candles[i].close
        for j in range(1, tmo_length):
            if close > candles[i - j].open:
                counts[i] += 1
            elif close < candles[i - j].open:
                counts[i] -= 1

    averaged = ema(counts, length)
    main = ema(averaged, smooth_length)
    signal = ema(main, smooth_length)
    if not signal:
        return SmoothMomentumResult()

    main, signal = align_tail(main, signal)
    return SmoothMomentumResult(main=main, signal=signal)


@with_options(VolumeOscillatorIndicatorOptions)
def volume_oscillator(
    candles: Sequence[Candle],
    long_length: int = DEFAULT_VO_LONG,
    short_length: int = DEFAULT_VO_SHORT,
) -> list[float]:
    """
    Calculate the volume oscillator.

    ``100 * (shortEMA - longEMA) / longEMA`` on volume, oldest first.
    A zero long EMA reads 0.
    """
    volumes = [c.volume for c in candles]
    long_ema = ema(volumes, long_length)
    short_ema = ema(volumes, short_length)
    if not long_ema or not short_ema:
        return []

    short_ema, long_ema = align_tail(short_ema, long_ema)
    return [
        0.0 if lng == 0 else 100.0 * (shrt - lng) / lng
        for shrt, lng in zip(short_ema, long_ema)
    ]


@with_options(AroonOptions)
def aroon(
    highs: Sequence[float],
    lows: Sequence[float],
    length: int = DEFAULT_AROON_LENGTH,
) -> AroonResult:
    """
    Calculate Aroon up/down.

    Within each trailing window of ``length + 1`` bars, take the offset of
    the extreme (0 = current bar, -length = oldest bar) and scale it with
    ``100 * (offset + length) / length``.

    Returns:
        AroonResult with ``len(highs) - length`` values per line
    """
    if length <= 0:
        return AroonResult()

    highs, lows = align_tail(highs, lows)
    upper = []
    lower = []
    for i in range(length, len(highs)):
        upper.append(100.0 * (highest_offset(highs[i - length : i + 1]) + length) / length)
        lower.append(100.0 * (lowest_offset(lows[i - length : i + 1]) + length) / length)

    return AroonResult(upper=upper, lower=lower)


def _wilder_sums(values: Sequence[float], period: int) -> list[float]:
    """Running Wilder sum: seed with the first ``period`` values, then
    ``total - total / period + value``."""
    result = [sum(values[:period])]
    for value in values[period:]:
        result.append(result[-1] - result[-1] / period + value)
    return result


@with_options(AdxOptions)
def adx(candles: Sequence[Candle], period: int = DEFAULT_ADX_PERIOD) -> AdxResult:
    """
    Calculate the Average Directional Index with its +DI and -DI lines.

    Directional movement and true range start on bar 1 and are
    Wilder-summed over ``period``. DX is ``100 * |+DI - -DI| / (+DI + -DI)``
    (0 when both lines are 0) and ADX is the Wilder average of DX.

    Returns:
        AdxResult with ``len(candles) - 2 * period + 1`` rows
    """
    if period <= 0 or len(candles) < 2 * period:
        return AdxResult()

    plus_dm = []
    minus_dm = []
    for prev, cur in zip(candles, candles[1:]):
        up_move = cur.high - prev.high
        down_move = prev.low - cur.low
        plus_dm.append(up_move if up_move > down_move and up_move > 0 else 0.0)
        minus_dm.append(down_move if down_move > up_move and down_move > 0 else 0.0)

    tr = true_range(
        [c.high for c in candles],
        [c.low for c in candles],
        [c.close for c in candles],
    )[1:]

    plus_di = []
    minus_di = []
    dx = []
    for tr_sum, plus_sum, minus_sum in zip(
        _wilder_sums(tr, period),
        _wilder_sums(plus_dm, period),
        _wilder_sums(minus_dm, period),
    ):
        plus = 100.0 * plus_sum / tr_sum if tr_sum else 0.0
        minus = 100.0 * minus_sum / tr_sum if tr_sum else 0.0
        plus_di.append(plus)
        minus_di.append(minus)
        dx.append(100.0 * abs(plus - minus) / (plus + minus) if plus + minus else 0.0)

    adx_values = [sum(dx[:period]) / period]
    for value in dx[period:]:
        adx_values.append((adx_values[-1] * (period - 1) + value) / period)

    adx_values, plus_di, minus_di = align_tail(adx_values, plus_di, minus_di)
    return AdxResult(adx=adx_values, plus_di=plus_di, minus_di=minus_di)


@with_options(SmoothAoOptions)
def smooth_ao(
    candles: Sequence[Candle],
    fast_length: int = DEFAULT_AO_FAST,
    slow_length: int = DEFAULT_AO_SLOW,
    source_type: SourceType | str = SourceType.HL2,
) -> list[int]:
    """
    Classify the Awesome Oscillator into four momentum states.

    With ``delta = SMA(fast) - SMA(slow)`` each bar reads 1 when delta is
    non-negative and rising, 2 when non-negative and not rising, -1 when
    negative and rising, -2 when negative and not rising.

    Returns:
        List of ``len(candles) - slow_length`` states
    """
    values = candle_source(candles, source_type)
    fast = sma(values, fast_length)
    slow = sma(values, slow_length)
    if not fast or not slow:
        return []

    fast, slow = align_tail(fast, slow)
    delta = [f - s for f, s in zip(fast, slow)]

    states = []
    for prev, cur in zip(delta, delta[1:]):
        rising = cur > prev
        if cur >= 0:
            states.append(1 if rising else 2)
        else:
            states.append(-1 if rising else -2)
    return states
