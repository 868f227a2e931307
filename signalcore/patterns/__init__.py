"""Candle pattern detection."""

from signalcore.patterns.engulfing import is_bear_engulfing, is_bull_engulfing
from signalcore.patterns.fractals import is_williams_fractal

__all__ = ["is_bull_engulfing", "is_bear_engulfing", "is_williams_fractal"]
