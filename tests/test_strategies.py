"""Tests for the strategy registry and the built-in strategies."""

import pytest
from datetime import datetime, timedelta, timezone

from signalcore.indicators import hma, supertrend
from signalcore.models import Candle, MaCrossOptions, Signal
from signalcore.strategy import (
    BaseSignalStrategy,
    EngulfingStrategy,
    MaCrossStrategy,
    SignalStrategy,
    create_strategy,
    get_strategy_class,
    list_strategies,
    register_strategy,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

START = datetime(2024, 1, 1, tzinfo=timezone.utc)

BUILTIN_STRATEGIES = [
    "engulfing",
    "ma_cross",
    "macd_cross",
    "price_ma_cross",
    "rsi_threshold",
    "stochastic_rsi",
    "supertrend_flip",
    "volume_oscillator",
]


def _make_candle(i: int, close: float, open_: float | None = None, volume: float = 100.0) -> Candle:
    open_ = close if open_ is None else open_
    return Candle(
        symbol="BTCUSDT",
        interval="1h",
        open_time=START + timedelta(hours=i),
        open=open_,
        high=max(open_, close) + 0.5,
        low=min(open_, close) - 0.5,
        close=close,
        volume=volume,
    )


def _make_candles(closes: list[float]) -> list[Candle]:
    return [_make_candle(i, c) for i, c in enumerate(closes)]


def _engulfing_window() -> list[Candle]:
    bodies = [(100, 101), (101, 100)] * 3 + [(100, 101), (101, 100.5), (100.3, 102)]
    return [_make_candle(i, c, open_=o) for i, (o, c) in enumerate(bodies)]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class TestRegistry:
    """Tests for strategy registration and lookup."""

    def test_lists_builtin_strategies(self):
        assert list_strategies() == BUILTIN_STRATEGIES

    def test_create_by_name(self):
        strategy = create_strategy("ma_cross", {"short_period": 5, "long_period": 10})
        assert isinstance(strategy, MaCrossStrategy)
        assert strategy.options.short_period == 5
        assert strategy.name == "ma_cross"

    def test_create_with_defaults(self):
        assert create_strategy("ma_cross").options == MaCrossOptions()

    def test_unknown_name(self):
        with pytest.raises(KeyError, match="Unknown strategy"):
            get_strategy_class("does_not_exist")

    def test_duplicate_registration(self):
        with pytest.raises(ValueError, match="already registered"):
            @register_strategy("ma_cross")
            class Duplicate(BaseSignalStrategy):
                pass

    def test_unknown_option_keys_ignored(self):
        strategy = create_strategy("rsi_threshold", {"rsi_period": 7, "colour": "red"})
        assert strategy.options.rsi_period == 7


# ---------------------------------------------------------------------------
# Protocol conformance
# ---------------------------------------------------------------------------

class TestProtocol:
    """Every built-in strategy satisfies the protocol."""

    @pytest.mark.parametrize("name", BUILTIN_STRATEGIES)
    def test_isinstance(self, name):
        assert isinstance(create_strategy(name), SignalStrategy)

    @pytest.mark.parametrize("name", BUILTIN_STRATEGIES)
    def test_single_candle_reads_none(self, name):
        strategy = create_strategy(name)
        window = _make_candles([100.0])
        assert strategy.evaluate(window) == Signal.NONE
        assert strategy.is_buy_signal(window) == Signal.NONE
        assert strategy.is_sell_signal(window) == Signal.NONE

    @pytest.mark.parametrize("name", BUILTIN_STRATEGIES)
    def test_empty_window_reads_none(self, name):
        assert create_strategy(name).evaluate([]) == Signal.NONE

    @pytest.mark.parametrize("name", BUILTIN_STRATEGIES)
    def test_flat_market_reads_none(self, name):
        strategy = create_strategy(name)
        window = _make_candles([100.0] * (strategy.min_candles + 20))
        assert strategy.evaluate(window) == Signal.NONE


# ---------------------------------------------------------------------------
# Moving average crossovers
# ---------------------------------------------------------------------------

class TestMaCross:
    """Tests for the ma_cross and price_ma_cross strategies."""

    def test_min_candles(self):
        strategy = create_strategy("ma_cross", {"short_period": 9, "long_period": 21})
        assert strategy.min_candles == 22

    def test_min_candles_covers_hma_lag(self):
        strategy = create_strategy(
            "ma_cross", {"short_period": 9, "long_period": 16, "long_ma_type": "HMA"}
        )
        assert strategy.min_candles == 20
        price = create_strategy("price_ma_cross", {"ma_period": 9, "ma_type": "HMA"})
        assert price.min_candles == 12

        closes = [float(i) for i in range(1, 12)]
        assert len(hma(closes, 9)) == 1

    def test_buy_on_cross_up(self):
        strategy = create_strategy("ma_cross", {"short_period": 2, "long_period": 4})
        window = _make_candles([10.0] * 5 + [20.0])

        assert strategy.is_buy_signal(window) == Signal.BUY
        assert strategy.is_sell_signal(window) == Signal.NONE
        assert strategy.evaluate(window) == Signal.BUY

    def test_sell_on_cross_down(self):
        strategy = create_strategy(
            "ma_cross",
            {"short_period": 2, "long_period": 4, "short_ma_type": "EMA", "long_ma_type": "EMA"},
        )
        window = _make_candles([10.0] * 5 + [5.0])
        assert strategy.evaluate(window) == Signal.SELL

    def test_short_window_reads_none(self):
        strategy = create_strategy("ma_cross", {"short_period": 2, "long_period": 4})
        window = _make_candles([10.0] * 3 + [20.0])
        assert strategy.evaluate(window) == Signal.NONE

    def test_price_cross(self):
        strategy = create_strategy("price_ma_cross", {"ma_period": 5})
        assert strategy.evaluate(_make_candles([10.0] * 6 + [11.0])) == Signal.BUY
        assert strategy.evaluate(_make_candles([10.0] * 6 + [9.0])) == Signal.SELL


class TestMacdCross:
    """Tests for the macd_cross strategy."""

    def test_buy_after_flat(self):
        strategy = create_strategy("macd_cross")
        window = _make_candles([50.0] * 50 + [55.0])
        assert strategy.evaluate(window) == Signal.BUY

    def test_sell_after_flat(self):
        strategy = create_strategy("macd_cross")
        window = _make_candles([50.0] * 50 + [45.0])
        assert strategy.evaluate(window) == Signal.SELL

    def test_min_candles(self):
        assert create_strategy("macd_cross").min_candles == 35


# ---------------------------------------------------------------------------
# Threshold strategies
# ---------------------------------------------------------------------------

class TestRsiThreshold:
    """Tests for the rsi_threshold strategy."""

    def test_buy_on_recovery_from_oversold(self):
        closes = [100.0 - i for i in range(30)]
        closes.append(closes[-1] + 20)
        strategy = create_strategy("rsi_threshold")
        assert strategy.evaluate(_make_candles(closes)) == Signal.BUY

    def test_sell_on_drop_from_overbought(self):
        closes = [100.0 + i for i in range(30)]
        closes.append(closes[-1] - 20)
        strategy = create_strategy("rsi_threshold")
        assert strategy.evaluate(_make_candles(closes)) == Signal.SELL

    def test_inverted_polarity(self):
        # Rally then one big drop: RSI falls from 100 to below 70
        closes = [100.0 + i for i in range(30)]
        closes.append(closes[-1] - 20)
        strategy = create_strategy("rsi_threshold", {"signal_at_breakout": False})
        # Dropping below overbought is neither entering oversold nor rising above overbought
        assert strategy.evaluate(_make_candles(closes)) == Signal.NONE

    def test_inverted_buy_on_entering_oversold(self):
        # Mixed series, then a crash that drags RSI below oversold
        closes = [100.0 + (i % 2) for i in range(30)] + [80.0]
        strategy = create_strategy("rsi_threshold", {"signal_at_breakout": False})
        assert strategy.evaluate(_make_candles(closes)) == Signal.BUY

    def test_min_candles(self):
        assert create_strategy("rsi_threshold").min_candles == 16


class TestVolumeOscillator:
    """Tests for the volume_oscillator strategy."""

    def test_surge(self):
        volumes = [100.0] * 15 + [400.0]
        window = [_make_candle(i, 100.0, volume=v) for i, v in enumerate(volumes)]
        strategy = create_strategy(
            "volume_oscillator", {"long_length": 10, "short_length": 5, "threshold": 20}
        )
        assert strategy.evaluate(window) == Signal.BUY
        assert strategy.is_sell_signal(window) == Signal.SELL

    def test_no_surge(self):
        window = [_make_candle(i, 100.0, volume=100.0) for i in range(20)]
        assert create_strategy("volume_oscillator").evaluate(window) == Signal.NONE


# ---------------------------------------------------------------------------
# Pattern and trend strategies
# ---------------------------------------------------------------------------

class TestEngulfingStrategy:
    """Tests for the engulfing strategy."""

    OPTIONS = {"ema_period": 5, "rsi_period": 5, "body_period": 3}

    def test_min_candles(self):
        assert EngulfingStrategy().min_candles == 200
        assert create_strategy("engulfing", self.OPTIONS).min_candles == 6

    def test_buy(self):
        strategy = create_strategy("engulfing", self.OPTIONS)
        assert strategy.evaluate(_engulfing_window()) == Signal.BUY

    def test_sell_on_mirrored_window(self):
        mirrored = [
            _make_candle(i, 202.0 - c.close, open_=202.0 - c.open)
            for i, c in enumerate(_engulfing_window())
        ]
        strategy = create_strategy("engulfing", self.OPTIONS)
        assert strategy.evaluate(mirrored) == Signal.SELL

    def test_rsi_filter_blocks_overbought(self):
        strategy = create_strategy("engulfing", {**self.OPTIONS, "overbought": 60})
        assert strategy.evaluate(_engulfing_window()) == Signal.NONE


class TestSupertrendFlip:
    """Tests for the supertrend_flip strategy."""

    def test_sell_on_flip_bar_only(self):
        closes = [100.0 + i for i in range(30)] + [129.0 - 5 * k for k in range(1, 21)]
        candles = _make_candles(closes)
        trend = supertrend(candles, 10, 3.0).trend
        flip_row = trend.index(-1)
        flip_bar = flip_row + 10

        strategy = create_strategy("supertrend_flip", {"atr_period": 10, "atr_multiplier": 3.0})
        assert strategy.evaluate(candles[: flip_bar + 1]) == Signal.SELL
        assert strategy.evaluate(candles[:flip_bar]) == Signal.NONE
        assert strategy.evaluate(candles[: flip_bar + 2]) == Signal.NONE

    def test_min_candles(self):
        assert create_strategy("supertrend_flip").min_candles == 12


class TestStochasticRsiStrategy:
    """Tests for the stochastic_rsi strategy."""

    def test_min_candles(self):
        assert create_strategy("stochastic_rsi").min_candles == 33

    def test_rising_market_reads_none(self):
        strategy = create_strategy("stochastic_rsi")
        window = _make_candles([100.0 + i for i in range(60)])
        assert strategy.evaluate(window) == Signal.NONE

    def test_buy_on_bounce_from_oversold(self):
        """A steady decline pins K and D at 0; one up bar crosses K over D."""
        strategy = create_strategy("stochastic_rsi")
        decline = [200.0 - i for i in range(60)]

        assert strategy.evaluate(_make_candles(decline)) == Signal.NONE
        assert strategy.evaluate(_make_candles(decline + [146.0])) == Signal.BUY

    def test_sell_on_drop_from_overbought(self):
        """A climb after a decline pins K and D at 100; one down bar crosses K under D."""
        strategy = create_strategy("stochastic_rsi")
        climb = [200.0 - i for i in range(30)] + [171.0 + i for i in range(1, 31)]

        assert strategy.evaluate(_make_candles(climb)) == Signal.NONE
        assert strategy.evaluate(_make_candles(climb + [196.0])) == Signal.SELL
