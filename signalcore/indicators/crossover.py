"""Crossover detection between two series.

Both lines are first trimmed to their common end-suffix, so lines of
different lengths compare the values that belong to the same bar.
"""

from typing import Sequence

from signalcore.indicators.series import align_tail


def cross_up(line_a: Sequence[float], line_b: Sequence[float]) -> list[bool]:
    """
    Mark bars where ``line_a`` crosses above ``line_b``.

    ``a[i-1] <= b[i-1] and a[i] > b[i]``. The first aligned bar has no
    predecessor and is always False.
    """
    a, b = align_tail(line_a, line_b)
    if not a:
        return []
    return [False] + [a[i - 1] <= b[i - 1] and a[i] > b[i] for i in range(1, len(a))]


def cross_down(line_a: Sequence[float], line_b: Sequence[float]) -> list[bool]:
    """Mark bars where ``line_a`` crosses below ``line_b``."""
    a, b = align_tail(line_a, line_b)
    if not a:
        return []
    return [False] + [a[i - 1] >= b[i - 1] and a[i] < b[i] for i in range(1, len(a))]


def crossed_up(line_a: Sequence[float], line_b: Sequence[float]) -> bool:
    """Whether ``line_a`` crossed above ``line_b`` on the last bar."""
    a, b = align_tail(line_a, line_b)
    if len(a) < 2:
        return False
    return a[-2] <= b[-2] and a[-1] > b[-1]


def crossed_down(line_a: Sequence[float], line_b: Sequence[float]) -> bool:
    """Whether ``line_a`` crossed below ``line_b`` on the last bar."""
    a, b = align_tail(line_a, line_b)
    if len(a) < 2:
        return False
    return a[-2] >= b[-2] and a[-1] < b[-1]
