"""Technical indicators (pure math, no I/O)."""

from signalcore.indicators.series import (
    align_tail,
    candle_source,
    highest,
    lowest,
    highest_offset,
    lowest_offset,
)
from signalcore.indicators.moving_averages import (
    sma,
    ema,
    wema,
    rma,
    wma,
    hma,
    vwma,
    moving_average,
    ma_lookback,
)
from signalcore.indicators.oscillators import (
    rsi,
    stochastic_rsi,
    macd,
    rmi,
    smooth_momentum,
    volume_oscillator,
    aroon,
    adx,
    smooth_ao,
    MacdResult,
    StochasticRsiResult,
    SmoothMomentumResult,
    AroonResult,
    AdxResult,
)
from signalcore.indicators.bands import (
    true_range,
    atr,
    bollinger_bands,
    range_bands,
    supertrend,
    supertrend_inputs,
    supertrend_step,
    BollingerResult,
    RangeBandsResult,
    SupertrendResult,
)
from signalcore.indicators.pivots import (
    pivot_highs,
    pivot_lows,
    pivots,
    support_resistance,
    zigzag,
    SupportResistanceResult,
    ZigzagPoint,
)
from signalcore.indicators.fibonacci import fibonacci_levels, FibonacciLevels
from signalcore.indicators.crossover import cross_up, cross_down, crossed_up, crossed_down

__all__ = [
    "align_tail",
    "candle_source",
    "highest",
    "lowest",
    "highest_offset",
    "lowest_offset",
    "sma",
    "ema",
    "wema",
    "rma",
    "wma",
    "hma",
    "vwma",
    "moving_average",
    "ma_lookback",
    "rsi",
    "stochastic_rsi",
    "macd",
    "rmi",
    "smooth_momentum",
    "volume_oscillator",
    "aroon",
    "adx",
    "smooth_ao",
    "MacdResult",
    "StochasticRsiResult",
    "SmoothMomentumResult",
    "AroonResult",
    "AdxResult",
    "true_range",
    "atr",
    "bollinger_bands",
    "range_bands",
    "supertrend",
    "supertrend_inputs",
    "supertrend_step",
    "BollingerResult",
    "RangeBandsResult",
    "SupertrendResult",
    "pivot_highs",
    "pivot_lows",
    "pivots",
    "support_resistance",
    "zigzag",
    "SupportResistanceResult",
    "ZigzagPoint",
    "fibonacci_levels",
    "FibonacciLevels",
    "cross_up",
    "cross_down",
    "crossed_up",
    "crossed_down",
]
