"""Pivot (local extremum) detection and the structures built on pivots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Sequence

import numpy as np

from signalcore.indicators.series import align_tail, to_array
from signalcore.models.options import (
    DEFAULT_PIVOT_LEFT,
    DEFAULT_PIVOT_RIGHT,
    DEFAULT_ZIGZAG_LENGTH,
    DEFAULT_ZIGZAG_MAX_PIVOTS,
    PivotOptions,
    ZigzagOptions,
    with_options,
)


@dataclass(frozen=True)
class ZigzagPoint:
    """A confirmed swing point.

    ``direction`` is 1 for a swing high and -1 for a swing low, doubled
    when the swing goes beyond the previous swing on the same side
    (a higher high or a lower low).
    """

    price: float
    bar: int
    direction: int


@dataclass(frozen=True)
class SupportResistanceResult:
    top: list[float | None] = field(default_factory=list)
    bottom: list[float | None] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.top)


def _pivot_marks(values: Sequence[float], left_bars: int, right_bars: int, high: bool) -> list[bool]:
    arr = to_array(values)
    n = len(arr)
    marks = [False] * n
    if left_bars < 0 or right_bars < 0:
        return marks

    # Only indices with a complete window on both sides can qualify.
    for i in range(left_bars, n - right_bars):
        window = arr[i - left_bars : i + right_bars + 1]
        if high:
            marks[i] = not bool(np.any(window > arr[i]))
        else:
            marks[i] = not bool(np.any(window < arr[i]))
    return marks


@with_options(PivotOptions)
def pivot_highs(
    values: Sequence[float],
    left_bars: int = DEFAULT_PIVOT_LEFT,
    right_bars: int = DEFAULT_PIVOT_RIGHT,
) -> list[bool]:
    """
    Mark pivot highs.

    Index ``i`` is a pivot high when no value in
    ``[i - left_bars, i + right_bars]`` exceeds ``values[i]``. Ties do not
    disqualify; indices without a full window are always False.

    Returns:
        List of booleans, one per input value
    """
    return _pivot_marks(values, left_bars, right_bars, high=True)


@with_options(PivotOptions)
def pivot_lows(
    values: Sequence[float],
    left_bars: int = DEFAULT_PIVOT_LEFT,
    right_bars: int = DEFAULT_PIVOT_RIGHT,
) -> list[bool]:
    """Mark pivot lows (mirror of ``pivot_highs``)."""
    return _pivot_marks(values, left_bars, right_bars, high=False)


@with_options(PivotOptions)
def pivots(
    values: Sequence[float],
    left_bars: int = DEFAULT_PIVOT_LEFT,
    right_bars: int = DEFAULT_PIVOT_RIGHT,
    kind: Literal["high", "low"] = "high",
) -> list[bool]:
    """Mark pivot highs or lows depending on ``kind``."""
    if kind == "high":
        return pivot_highs(values, left_bars, right_bars)
    if kind == "low":
        return pivot_lows(values, left_bars, right_bars)
    raise ValueError(f"Unknown pivot kind '{kind}' (expected 'high' or 'low')")


@with_options(PivotOptions)
def support_resistance(
    highs: Sequence[float],
    lows: Sequence[float],
    left_bars: int = DEFAULT_PIVOT_LEFT,
    right_bars: int = DEFAULT_PIVOT_RIGHT,
) -> SupportResistanceResult:
    """
    Latest confirmed resistance (pivot high) and support (pivot low).

    A pivot is only known ``right_bars`` bars after it formed, so the row
    for bar ``i`` carries the last pivots at or before ``i - right_bars``.
    A side with no pivot yet reads None.

    Returns:
        SupportResistanceResult with ``len(highs) - right_bars`` rows
    """
    highs, lows = align_tail(highs, lows)
    is_high = pivot_highs(highs, left_bars, right_bars)
    is_low = pivot_lows(lows, left_bars, right_bars)

    top = []
    bottom = []
    last_high = None
    last_low = None
    for i in range(len(highs) - right_bars):
        if is_high[i]:
            last_high = float(highs[i])
        if is_low[i]:
            last_low = float(lows[i])
        top.append(last_high)
        bottom.append(last_low)

    return SupportResistanceResult(top=top, bottom=bottom)


@with_options(ZigzagOptions)
def zigzag(
    highs: Sequence[float],
    lows: Sequence[float],
    length: int = DEFAULT_ZIGZAG_LENGTH,
    max_pivots: int = DEFAULT_ZIGZAG_MAX_PIVOTS,
) -> list[ZigzagPoint]:
    """
    Connect alternating swing highs and lows.

    A bar is a swing high when its high is the highest of the last
    ``length + 1`` highs, a swing low likewise on lows; a bar that is both
    keeps the direction of the bar before it. Consecutive swings in the
    same direction collapse into the more extreme one. Only the newest
    ``max_pivots`` points are kept.

    Returns:
        Swing points, oldest first
    """
    highs, lows = align_tail(highs, lows)
    is_high = pivot_highs(highs, length, 0)
    is_low = pivot_lows(lows, length, 0)

    points: list[ZigzagPoint] = []
    direction = 0
    for i in range(len(highs)):
        prev_direction = direction
        if is_high[i] and not is_low[i]:
            direction = 1
        elif is_low[i] and not is_high[i]:
            direction = -1

        if not (is_high[i] or is_low[i]) or direction == 0:
            continue

        price = float(highs[i]) if direction == 1 else float(lows[i])
        bar = i
        if direction == prev_direction and points:
            last = points.pop()
            if price * direction < last.price * direction:
                price, bar = last.price, last.bar

        # points[-2] is the previous swing on the same side
        marker = direction
        if len(points) >= 2 and direction * price > direction * points[-2].price:
            marker = 2 * direction

        points.append(ZigzagPoint(price=price, bar=bar, direction=marker))
        if len(points) > max_pivots:
            points.pop(0)

    return points
