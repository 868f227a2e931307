"""Indicator, trend and strategy option records.

Each record carries named defaults; missing fields take the default and
unknown fields are ignored, so a roster file may carry extra keys.
"""

from __future__ import annotations

import functools
import inspect
from enum import Enum
from typing import Any, Callable, Literal, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from signalcore.models.candle import SourceType
from signalcore.models.signal import Trend


class MAType(str, Enum):
    """Moving average family member."""

    SMA = "SMA"
    EMA = "EMA"
    WMA = "WMA"
    WEMA = "WEMA"
    HMA = "HMA"


# =============================================================================
# Default constants (shared by indicator signatures and option records)
# =============================================================================

DEFAULT_RSI_PERIOD = 14
DEFAULT_RSI_OVERSOLD = 30.0
DEFAULT_RSI_OVERBOUGHT = 70.0

DEFAULT_MACD_FAST = 12
DEFAULT_MACD_SLOW = 26
DEFAULT_MACD_SIGNAL = 9

DEFAULT_STOCH_PERIOD = 14
DEFAULT_STOCH_K = 3
DEFAULT_STOCH_D = 3
DEFAULT_STOCH_OVERSOLD = 20.0
DEFAULT_STOCH_OVERBOUGHT = 80.0

DEFAULT_RMI_LENGTH = 33
DEFAULT_RMI_MOMENTUM = 15

DEFAULT_TMO_LENGTH = 10
DEFAULT_TMO_SMOOTH_LENGTH = 21
DEFAULT_TMO_WINDOW = 3

DEFAULT_VO_LONG = 10
DEFAULT_VO_SHORT = 5
DEFAULT_VO_THRESHOLD = 40.0

DEFAULT_AROON_LENGTH = 14
DEFAULT_ADX_PERIOD = 14

DEFAULT_HMA_PERIOD = 21
DEFAULT_VWMA_PERIOD = 14

DEFAULT_AO_FAST = 6
DEFAULT_AO_SLOW = 16

DEFAULT_ATR_PERIOD = 14
DEFAULT_BOLLINGER_PERIOD = 20
DEFAULT_BOLLINGER_MULTIPLIER = 2.0

DEFAULT_RANGE_PERIOD = 10
DEFAULT_RANGE_MULTIPLIER = 2.0

DEFAULT_PIVOT_LEFT = 5
DEFAULT_PIVOT_RIGHT = 5
DEFAULT_ZIGZAG_LENGTH = 30
DEFAULT_ZIGZAG_MAX_PIVOTS = 100

DEFAULT_SUPERTREND_ATR_PERIOD = 10
DEFAULT_SUPERTREND_MULTIPLIER = 3.0

DEFAULT_TREND_EMA_PERIOD = 200
DEFAULT_TREND_EMA_SHORT = 21
DEFAULT_TREND_EMA_MEDIUM = 50


class Options(BaseModel):
    """Base class for every option record."""

    model_config = ConfigDict(frozen=True, extra="ignore")


OptionsT = TypeVar("OptionsT", bound=Options)


def resolve_options(
    options_cls: type[OptionsT],
    options: OptionsT | Mapping[str, Any] | None,
) -> OptionsT:
    """Coerce ``None``, a mapping or an instance into ``options_cls``."""
    if options is None:
        return options_cls()
    if isinstance(options, options_cls):
        return options
    if isinstance(options, BaseModel):
        return options_cls.model_validate(options.model_dump())
    return options_cls.model_validate(dict(options))


def with_options(options_cls: type[Options]) -> Callable:
    """Let an indicator take its parameters from an option record.

    The wrapped function gains an ``options`` keyword that accepts ``None``,
    a mapping or any option record. Fields fill the parameters of the same
    name the caller did not pass explicitly; fields without a matching
    parameter are ignored, so a strategy record can be handed straight to
    the indicator it drives.
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args, options: Options | Mapping[str, Any] | None = None, **kwargs):
            if options is None:
                return func(*args, **kwargs)

            bound = signature.bind_partial(*args, **kwargs)
            record = resolve_options(options_cls, options)
            for name, value in record:
                if name in signature.parameters and name not in bound.arguments:
                    bound.arguments[name] = value
            return func(*bound.args, **bound.kwargs)

        wrapper.options_cls = options_cls
        return wrapper

    return decorator


# =============================================================================
# Indicator options
# =============================================================================

class MovingAverageOptions(Options):
    period: int = Field(20, gt=0)
    ma_type: MAType = MAType.SMA


class HmaOptions(Options):
    period: int = Field(DEFAULT_HMA_PERIOD, gt=0)


class VwmaOptions(Options):
    period: int = Field(DEFAULT_VWMA_PERIOD, gt=0)
    source_type: SourceType = SourceType.CLOSE


class RsiOptions(Options):
    period: int = Field(DEFAULT_RSI_PERIOD, gt=0)


class StochasticRsiIndicatorOptions(Options):
    rsi_period: int = Field(DEFAULT_RSI_PERIOD, gt=0)
    stochastic_period: int = Field(DEFAULT_STOCH_PERIOD, gt=0)
    k_period: int = Field(DEFAULT_STOCH_K, gt=0)
    d_period: int = Field(DEFAULT_STOCH_D, gt=0)


class MacdOptions(Options):
    fast_period: int = Field(DEFAULT_MACD_FAST, gt=0)
    slow_period: int = Field(DEFAULT_MACD_SLOW, gt=0)
    signal_period: int = Field(DEFAULT_MACD_SIGNAL, gt=0)
    oscillator_ma_type: MAType = MAType.EMA
    signal_ma_type: MAType = MAType.EMA


class RmiOptions(Options):
    length: int = Field(DEFAULT_RMI_LENGTH, gt=0)
    momentum: int = Field(DEFAULT_RMI_MOMENTUM, gt=0)


class SmoothMomentumOptions(Options):
    length: int = Field(DEFAULT_TMO_LENGTH, gt=0)
    smooth_length: int = Field(DEFAULT_TMO_SMOOTH_LENGTH, gt=0)
    tmo_length: int = Field(DEFAULT_TMO_WINDOW, gt=0)


class SmoothAoOptions(Options):
    """Awesome Oscillator on a price source: fast SMA minus slow SMA."""

    fast_length: int = Field(DEFAULT_AO_FAST, gt=0)
    slow_length: int = Field(DEFAULT_AO_SLOW, gt=0)
    source_type: SourceType = SourceType.HL2


class VolumeOscillatorIndicatorOptions(Options):
    long_length: int = Field(DEFAULT_VO_LONG, gt=0)
    short_length: int = Field(DEFAULT_VO_SHORT, gt=0)


class AroonOptions(Options):
    length: int = Field(DEFAULT_AROON_LENGTH, gt=0)


class AdxOptions(Options):
    period: int = Field(DEFAULT_ADX_PERIOD, gt=0)


class AtrOptions(Options):
    period: int = Field(DEFAULT_ATR_PERIOD, gt=0)


class BollingerOptions(Options):
    period: int = Field(DEFAULT_BOLLINGER_PERIOD, gt=0)
    multiplier: float = DEFAULT_BOLLINGER_MULTIPLIER
    source_type: SourceType = SourceType.CLOSE


class RangeBandsOptions(Options):
    period: int = Field(DEFAULT_RANGE_PERIOD, gt=0)
    multiplier: float = DEFAULT_RANGE_MULTIPLIER


class PivotOptions(Options):
    """Bars on each side of a pivot. ``kind`` is read by ``pivots`` only."""

    left_bars: int = Field(DEFAULT_PIVOT_LEFT, ge=0)
    right_bars: int = Field(DEFAULT_PIVOT_RIGHT, ge=0)
    kind: Literal["high", "low"] = "high"


class ZigzagOptions(Options):
    length: int = Field(DEFAULT_ZIGZAG_LENGTH, gt=0)
    max_pivots: int = Field(DEFAULT_ZIGZAG_MAX_PIVOTS, gt=0)


class FibonacciOptions(Options):
    """Swing direction and lookback for Fibonacci levels (None = whole window)."""

    trend: Trend = Trend.UP
    period: int | None = Field(None, gt=0)


# =============================================================================
# Trend options
# =============================================================================

class SupertrendOptions(Options):
    atr_period: int = Field(DEFAULT_SUPERTREND_ATR_PERIOD, gt=0)
    atr_multiplier: float = DEFAULT_SUPERTREND_MULTIPLIER


class EmaTrendOptions(Options):
    ema_period: int = Field(DEFAULT_TREND_EMA_PERIOD, gt=0)


class ThreeEmaTrendOptions(Options):
    ema_short_period: int = Field(DEFAULT_TREND_EMA_SHORT, gt=0)
    ema_medium_period: int = Field(DEFAULT_TREND_EMA_MEDIUM, gt=0)
    ema_long_period: int = Field(DEFAULT_TREND_EMA_PERIOD, gt=0)


# =============================================================================
# Strategy options
# =============================================================================

class MaCrossOptions(Options):
    """Short moving average crossing a long moving average."""

    short_period: int = Field(20, gt=0)
    long_period: int = Field(50, gt=0)
    short_ma_type: MAType = MAType.SMA
    long_ma_type: MAType = MAType.SMA
    source_type: SourceType = SourceType.CLOSE


class PriceMaCrossOptions(Options):
    """Price crossing a single moving average."""

    ma_period: int = Field(20, gt=0)
    ma_type: MAType = MAType.SMA
    source_type: SourceType = SourceType.CLOSE


class MacdCrossOptions(MacdOptions):
    source_type: SourceType = SourceType.CLOSE


class RsiThresholdOptions(Options):
    """RSI threshold rule.

    With ``signal_at_breakout`` a buy fires when RSI climbs back above the
    oversold line and a sell when it drops back below the overbought line.
    Without it the polarity inverts: the buy fires on the drop into the
    oversold zone, the sell on the rise into the overbought zone.
    """

    rsi_period: int = Field(DEFAULT_RSI_PERIOD, gt=0)
    oversold: float = DEFAULT_RSI_OVERSOLD
    overbought: float = DEFAULT_RSI_OVERBOUGHT
    signal_at_breakout: bool = True
    source_type: SourceType = SourceType.CLOSE


class StochasticRsiOptions(StochasticRsiIndicatorOptions):
    oversold: float = DEFAULT_STOCH_OVERSOLD
    overbought: float = DEFAULT_STOCH_OVERBOUGHT


class EngulfingOptions(Options):
    """Engulfing candle filtered by an EMA trend and RSI."""

    ema_period: int = Field(DEFAULT_TREND_EMA_PERIOD, gt=0)
    rsi_period: int = Field(DEFAULT_RSI_PERIOD, gt=0)
    body_period: int = Field(14, gt=0)
    rsi_midline: float = 50.0
    oversold: float = DEFAULT_RSI_OVERSOLD
    overbought: float = DEFAULT_RSI_OVERBOUGHT


class VolumeOscillatorOptions(VolumeOscillatorIndicatorOptions):
    threshold: float = DEFAULT_VO_THRESHOLD


class SupertrendFlipOptions(SupertrendOptions):
    """Supertrend trend flip on the latest bar."""
