"""Data models: candles, signals, trend state and option records."""

from signalcore.models.candle import Candle, CandleBuffer, SourceType
from signalcore.models.options import (
    MAType,
    Options,
    resolve_options,
    with_options,
    MovingAverageOptions,
    HmaOptions,
    VwmaOptions,
    RsiOptions,
    StochasticRsiIndicatorOptions,
    MacdOptions,
    RmiOptions,
    SmoothMomentumOptions,
    SmoothAoOptions,
    VolumeOscillatorIndicatorOptions,
    AroonOptions,
    AdxOptions,
    AtrOptions,
    BollingerOptions,
    RangeBandsOptions,
    PivotOptions,
    ZigzagOptions,
    FibonacciOptions,
    SupertrendOptions,
    EmaTrendOptions,
    ThreeEmaTrendOptions,
    MaCrossOptions,
    PriceMaCrossOptions,
    MacdCrossOptions,
    RsiThresholdOptions,
    StochasticRsiOptions,
    EngulfingOptions,
    VolumeOscillatorOptions,
    SupertrendFlipOptions,
)
from signalcore.models.signal import Signal, SupertrendState, Trend

__all__ = [
    "Candle",
    "CandleBuffer",
    "SourceType",
    "MAType",
    "Options",
    "resolve_options",
    "with_options",
    "MovingAverageOptions",
    "HmaOptions",
    "VwmaOptions",
    "RsiOptions",
    "StochasticRsiIndicatorOptions",
    "MacdOptions",
    "RmiOptions",
    "SmoothMomentumOptions",
    "SmoothAoOptions",
    "VolumeOscillatorIndicatorOptions",
    "AroonOptions",
    "AdxOptions",
    "AtrOptions",
    "BollingerOptions",
    "RangeBandsOptions",
    "PivotOptions",
    "ZigzagOptions",
    "FibonacciOptions",
    "SupertrendOptions",
    "EmaTrendOptions",
    "ThreeEmaTrendOptions",
    "MaCrossOptions",
    "PriceMaCrossOptions",
    "MacdCrossOptions",
    "RsiThresholdOptions",
    "StochasticRsiOptions",
    "EngulfingOptions",
    "VolumeOscillatorOptions",
    "SupertrendFlipOptions",
    "Signal",
    "SupertrendState",
    "Trend",
]
