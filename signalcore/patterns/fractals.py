"""Williams fractals on the last five candles."""

from typing import Literal, Sequence

from signalcore.models.candle import Candle


def is_williams_fractal(
    candles: Sequence[Candle],
    kind: Literal["bullish", "bearish"] = "bullish",
) -> bool:
    """Whether the third-to-last candle is a Williams fractal.

    Bullish: its low is strictly below the lows of the two candles on
    either side. Bearish: its high is strictly above their highs.
    """
    if kind not in ("bullish", "bearish"):
        raise ValueError(f"Unknown fractal kind '{kind}' (expected 'bullish' or 'bearish')")
    if len(candles) < 5:
        return False

    *before, middle, after1, after2 = candles[-5:]
    neighbours = [*before, after1, after2]
    if kind == "bullish":
        return all(middle.low < c.low for c in neighbours)
    return all(middle.high > c.high for c in neighbours)
