"""Moving average family.

Every smoother returns a series end-aligned with its input and drops the
warm-up bars. A period that is not positive or exceeds the input length
yields an empty list.

Recursions run left to right in plain float arithmetic and are written in
the ``prev + alpha * (x - prev)`` form, so a constant input stays exactly
constant and repeated runs are bit-identical.
"""

import math
from typing import Sequence

from signalcore.indicators.series import align_tail, candle_source, to_array
from signalcore.models.candle import Candle, SourceType
from signalcore.models.options import (
    DEFAULT_HMA_PERIOD,
    DEFAULT_VWMA_PERIOD,
    HmaOptions,
    MAType,
    MovingAverageOptions,
    VwmaOptions,
    with_options,
)


def _mean(values) -> float:
    """Left-to-right incremental mean (a constant window stays exact)."""
    mean = 0.0
    for k, v in enumerate(values):
        mean += (float(v) - mean) / (k + 1)
    return mean


def _valid(values: Sequence[float], period: int) -> bool:
    return 0 < period <= len(values)


def sma(values: Sequence[float], period: int) -> list[float]:
    """
    Calculate Simple Moving Average.

    Args:
        values: Sequence of price values
        period: SMA period

    Returns:
        List of ``len(values) - period + 1`` SMA values
    """
    if not _valid(values, period):
        return []

    arr = to_array(values)
    return [_mean(arr[i - period + 1 : i + 1]) for i in range(period - 1, len(arr))]


def _recursive(values: Sequence[float], period: int, alpha: float) -> list[float]:
    arr = to_array(values)
    result = [_mean(arr[:period])]
    for x in arr[period:]:
        prev = result[-1]
        result.append(prev + alpha * (float(x) - prev))
    return result


def ema(values: Sequence[float], period: int) -> list[float]:
    """
    Calculate Exponential Moving Average.

    The first output is the plain average of the first ``period`` values;
    each following output moves toward the input by alpha = 2 / (period + 1).

    Args:
        values: Sequence of price values
        period: EMA period

    Returns:
        List of ``len(values) - period + 1`` EMA values
    """
    if not _valid(values, period):
        return []
    return _recursive(values, period, 2.0 / (period + 1))


def wema(values: Sequence[float], period: int) -> list[float]:
    """Wilder's EMA: same seed as ``ema``, alpha = 1 / period."""
    if not _valid(values, period):
        return []
    return _recursive(values, period, 1.0 / period)


def rma(values: Sequence[float], period: int) -> list[float]:
    """Wilder recursion seeded from the first input alone.

    ``out[0] = alpha * x[0]`` and the recursion starts immediately, so the
    output has the same length as the input.
    """
    if not _valid(values, period):
        return []

    alpha = 1.0 / period
    arr = to_array(values)
    result = [alpha * float(arr[0])]
    for x in arr[1:]:
        prev = result[-1]
        result.append(prev + alpha * (float(x) - prev))
    return result


def wma(values: Sequence[float], period: int) -> list[float]:
    """Linearly weighted moving average (weights 1..period, newest heaviest)."""
    if not _valid(values, period):
        return []

    arr = to_array(values)
    result = []
    for i in range(period - 1, len(arr)):
        mean = 0.0
        total_weight = 0
        for weight, x in enumerate(arr[i - period + 1 : i + 1], start=1):
            total_weight += weight
            mean += weight * (float(x) - mean) / total_weight
        result.append(mean)
    return result


@with_options(HmaOptions)
def hma(values: Sequence[float], period: int = DEFAULT_HMA_PERIOD) -> list[float]:
    """
    Calculate Hull Moving Average.

    ``WMA(2 * WMA(period // 2) - WMA(period), round(sqrt(period)))``.

    Returns:
        List of ``len(values) - period - round(sqrt(period)) + 2`` values
    """
    half = wma(values, period // 2)
    full = wma(values, period)
    if not half or not full:
        return []

    half, full = align_tail(half, full)
    raw = [2 * h - f for h, f in zip(half, full)]
    return wma(raw, int(math.sqrt(period) + 0.5))


@with_options(VwmaOptions)
def vwma(
    candles: Sequence[Candle],
    period: int = DEFAULT_VWMA_PERIOD,
    source_type: SourceType | str = SourceType.CLOSE,
) -> list[float]:
    """
    Calculate Volume Weighted Moving Average.

    ``sum(price * volume) / sum(volume)`` over each trailing window; a
    window without volume falls back to the plain average price.
    """
    if not _valid(candles, period):
        return []

    prices = candle_source(candles, source_type)
    volumes = [c.volume for c in candles]
    result = []
    for i in range(period - 1, len(candles)):
        window = slice(i - period + 1, i + 1)
        total_volume = sum(volumes[window])
        if total_volume == 0:
            result.append(_mean(prices[window]))
        else:
            weighted = sum(p * v for p, v in zip(prices[window], volumes[window]))
            result.append(weighted / total_volume)
    return result


_MA_FUNCS = {
    MAType.SMA: sma,
    MAType.EMA: ema,
    MAType.WMA: wma,
    MAType.WEMA: wema,
    MAType.HMA: hma,
}


@with_options(MovingAverageOptions)
def moving_average(
    values: Sequence[float],
    period: int,
    ma_type: MAType | str = MAType.SMA,
) -> list[float]:
    """Dispatch to the moving average selected by ``ma_type``."""
    return _MA_FUNCS[MAType(ma_type)](values, period)


def ma_lookback(period: int, ma_type: MAType | str = MAType.SMA) -> int:
    """Number of input values before the first output of a moving average."""
    if MAType(ma_type) is MAType.HMA:
        return period + int(math.sqrt(period) + 0.5) - 1
    return period
