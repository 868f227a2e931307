"""Trend classification.

``ema_trend`` and ``three_ema_trend`` are stateless and recompute from the
whole window on every call. ``supertrend_trend`` threads an explicit
``SupertrendState``: the caller owns one state per symbol and passes it
back in on the next call.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from signalcore.indicators.bands import supertrend, supertrend_inputs, supertrend_step
from signalcore.indicators.moving_averages import ema
from signalcore.models.candle import Candle
from signalcore.models.options import (
    EmaTrendOptions,
    SupertrendOptions,
    ThreeEmaTrendOptions,
    resolve_options,
)
from signalcore.models.signal import SupertrendState, Trend


def ema_trend(
    candles: Sequence[Candle],
    options: EmaTrendOptions | Mapping[str, Any] | None = None,
) -> Trend:
    """UP when the last close is above the EMA, DOWN otherwise.

    NEUTRAL until the window is longer than the EMA period.
    """
    opts = resolve_options(EmaTrendOptions, options)
    if len(candles) <= opts.ema_period:
        return Trend.NEUTRAL

    line = ema([c.close for c in candles], opts.ema_period)
    return Trend.UP if candles[-1].close > line[-1] else Trend.DOWN


def three_ema_trend(
    candles: Sequence[Candle],
    options: ThreeEmaTrendOptions | Mapping[str, Any] | None = None,
) -> Trend:
    """Trend from price and three EMAs.

    UP needs close > short > medium > long, DOWN needs
    close < short < medium < long; anything else is NEUTRAL.
    """
    opts = resolve_options(ThreeEmaTrendOptions, options)
    longest = max(opts.ema_short_period, opts.ema_medium_period, opts.ema_long_period)
    if len(candles) <= longest:
        return Trend.NEUTRAL

    closes = [c.close for c in candles]
    close = closes[-1]
    short = ema(closes, opts.ema_short_period)[-1]
    medium = ema(closes, opts.ema_medium_period)[-1]
    long_ = ema(closes, opts.ema_long_period)[-1]

    if close > short > medium > long_:
        return Trend.UP
    if close < short < medium < long_:
        return Trend.DOWN
    return Trend.NEUTRAL


def supertrend_trend(
    candles: Sequence[Candle],
    options: SupertrendOptions | Mapping[str, Any] | None = None,
    state: SupertrendState | None = None,
) -> tuple[SupertrendState | None, Trend]:
    """Stateful Supertrend classification: ``state_in -> (state_out, trend)``.

    Without a state the whole window is folded. With a state only the last
    candle is stepped onto it; a state that already consumed the last
    candle is returned unchanged. To re-apply a corrected last candle,
    pass the state from before that candle (or None to refold).

    Returns:
        The new state (the input state when there is not enough history)
        and the trend it implies (NEUTRAL when there is no state).
    """
    opts = resolve_options(SupertrendOptions, options)

    if state is None:
        result = supertrend(candles, options=opts)
        if not result.states:
            return None, Trend.NEUTRAL
        final = result.states[-1]
        return final, Trend(final.trend)

    last_time = candles[-1].open_time if candles else None
    if state.bar_time is not None and last_time is not None and last_time <= state.bar_time:
        return state, Trend(state.trend)

    inputs = supertrend_inputs(candles, opts.atr_period)
    if not inputs.closes:
        return state, Trend(state.trend)

    new_state = supertrend_step(
        state,
        inputs.closes[-1],
        inputs.atr[-1],
        inputs.midpoints[-1],
        opts.atr_multiplier,
        inputs.bar_times[-1],
    )
    return new_state, Trend(new_state.trend)
