"""Series utilities shared by every indicator.

All series are end-aligned: the last element of a derived series always
corresponds to the last input bar. Warm-up bars are dropped from the
front rather than padded with NaN.
"""

from typing import Sequence

import numpy as np

from signalcore.models.candle import Candle, SourceType


def align_tail(*series: Sequence) -> tuple[list, ...]:
    """Trim every series from the front to the length of the shortest.

    Since every series ends on the same bar, this pairs values that belong
    to the same bar.
    """
    if not series:
        return ()
    common = min(len(s) for s in series)
    return tuple(list(s[len(s) - common :]) for s in series)


def to_array(values: Sequence[float]) -> np.ndarray:
    """Convert a value sequence to a float64 array."""
    return np.asarray([float(v) for v in values], dtype=np.float64)


def candle_source(
    candles: Sequence[Candle],
    source_type: SourceType | str = SourceType.CLOSE,
) -> list[float]:
    """Extract one value per candle for the given source type."""
    source_type = SourceType(source_type)
    return [c.source(source_type) for c in candles]


def highest(values: Sequence[float], period: int) -> list[float]:
    """Highest value of each trailing window of ``period`` values.

    Args:
        values: Sequence of values (typically highs)
        period: Lookback period

    Returns:
        List of length ``len(values) - period + 1``, empty when the
        period is not positive or exceeds the input.
    """
    if period <= 0 or period > len(values):
        return []

    arr = to_array(values)
    return [float(np.max(arr[i - period + 1 : i + 1])) for i in range(period - 1, len(arr))]


def lowest(values: Sequence[float], period: int) -> list[float]:
    """Lowest value of each trailing window of ``period`` values."""
    if period <= 0 or period > len(values):
        return []

    arr = to_array(values)
    return [float(np.min(arr[i - period + 1 : i + 1])) for i in range(period - 1, len(arr))]


def highest_offset(window: Sequence[float]) -> int:
    """Signed offset of the highest value in ``window``.

    0 means the last element, -1 the one before it, and so on. On ties
    the most recent bar wins.
    """
    arr = to_array(window)
    if arr.size == 0:
        return 0
    # argmax returns the first occurrence, so search the reversed window
    return -int(np.argmax(arr[::-1]))


def lowest_offset(window: Sequence[float]) -> int:
    """Signed offset of the lowest value in ``window`` (see highest_offset)."""
    arr = to_array(window)
    if arr.size == 0:
        return 0
    return -int(np.argmin(arr[::-1]))
