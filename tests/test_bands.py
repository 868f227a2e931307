"""Tests for volatility bands, Supertrend, pivots, crossovers and patterns."""

import pytest
from datetime import datetime, timedelta, timezone

from signalcore.indicators import (
    atr,
    bollinger_bands,
    cross_down,
    cross_up,
    crossed_down,
    crossed_up,
    fibonacci_levels,
    pivot_highs,
    pivot_lows,
    pivots,
    range_bands,
    support_resistance,
    supertrend,
    supertrend_step,
    true_range,
    zigzag,
    ZigzagPoint,
)
from signalcore.models import AtrOptions, Candle, PivotOptions, SupertrendState, Trend
from signalcore.patterns import is_bear_engulfing, is_bull_engulfing, is_williams_fractal


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _make_candle(i: int, close: float, high: float | None = None, low: float | None = None,
                 open_: float | None = None) -> Candle:
    return Candle(
        symbol="BTCUSDT",
        interval="1h",
        open_time=START + timedelta(hours=i),
        open=close if open_ is None else open_,
        high=close + 1 if high is None else high,
        low=close - 1 if low is None else low,
        close=close,
        volume=100.0,
    )


def _make_candles(closes: list[float]) -> list[Candle]:
    return [_make_candle(i, c) for i, c in enumerate(closes)]


def _rise_then_fall() -> list[Candle]:
    """30 bars rising by 1, then 20 bars falling by 5."""
    closes = [100.0 + i for i in range(30)] + [129.0 - 5 * k for k in range(1, 21)]
    return _make_candles(closes)


def _bull_engulfing_candles() -> list[Candle]:
    """Small black body swallowed by a long white body on the last bar."""
    bodies = [(100, 101), (101, 100)] * 3 + [(100, 101), (101, 100.5), (100.3, 102)]
    return [
        _make_candle(i, c, high=max(o, c) + 0.5, low=min(o, c) - 0.5, open_=o)
        for i, (o, c) in enumerate(bodies)
    ]


def _mirror(candles: list[Candle], pivot: float = 202.0) -> list[Candle]:
    return [
        _make_candle(
            i,
            pivot - c.close,
            high=pivot - c.low,
            low=pivot - c.high,
            open_=pivot - c.open,
        )
        for i, c in enumerate(candles)
    ]


# ---------------------------------------------------------------------------
# True Range / ATR
# ---------------------------------------------------------------------------

class TestATR:
    """Tests for ATR calculation."""

    def test_true_range_first_bar(self):
        result = true_range([12.0, 15.0], [10.0, 13.0], [11.0, 14.0])
        # second bar: max(2, |15-11|, |13-11|) = 4
        assert result == [2.0, 4.0]

    def test_atr_constant_range(self):
        """Test ATR with constant range candles."""
        candles = [_make_candle(i, 101.0, high=102.0, low=100.0) for i in range(20)]
        result = atr(candles, 9)

        assert len(result) == 11
        assert all(v == pytest.approx(2.0) for v in result)

    def test_atr_insufficient_data(self):
        candles = [_make_candle(i, 101.0) for i in range(5)]
        assert atr(candles, 14) == []

    def test_atr_from_options(self):
        candles = _rise_then_fall()
        assert atr(candles, options=AtrOptions(period=9)) == atr(candles, 9)


class TestBollingerBands:
    """Tests for Bollinger Bands."""

    def test_constant_has_zero_spread(self):
        result = bollinger_bands(_make_candles([50.0] * 30), 20, 2.0)

        assert len(result) == 11
        assert all(b == pytest.approx(50.0) for b in result.basis)
        assert all(s == pytest.approx(0.0) for s in result.spread)

    def test_band_order(self):
        closes = [100 + ((i * 7) % 5) for i in range(40)]
        result = bollinger_bands(_make_candles(closes))
        for lo, b, hi in zip(result.lower, result.basis, result.upper):
            assert lo <= b <= hi


class TestRangeBands:
    """Tests for Range Bands."""

    def test_constant_input(self):
        result = range_bands([10.0] * 30, 10, 2.0)

        assert len(result) == 20
        assert all(f == 10.0 for f in result.filt)
        assert all(d == 0 for d in result.downward)
        # Flat filter counts as non-decreasing, so upward grows by 1 per bar
        assert result.upward == list(range(10, 30))

    def test_bands_surround_filter(self):
        values = [100 + ((i * 11) % 7) for i in range(60)]
        result = range_bands(values, 10, 2.0)
        for lo, f, hi in zip(result.low_band, result.filt, result.high_band):
            assert lo <= f <= hi

    def test_falling_input_counts_downward(self):
        result = range_bands([100.0 - i for i in range(40)], 5, 1.0)
        assert result.downward[-1] > result.downward[0]
        assert result.upward[-1] == 0

    def test_insufficient_data(self):
        assert len(range_bands([1.0] * 5, 10)) == 0


# ---------------------------------------------------------------------------
# Supertrend
# ---------------------------------------------------------------------------

class TestSupertrend:
    """Tests for Supertrend."""

    def test_length(self):
        result = supertrend(_make_candles([100.0] * 30), 10, 3.0)
        assert len(result) == 20
        assert len(result.states) == 20

    def test_first_bar_starts_long(self):
        result = supertrend(_make_candles([100.0] * 12), 10, 3.0)
        assert result.trend[0] == 1

    def test_lower_band_ratchets_while_long(self):
        result = supertrend(_make_candles([100.0 + i for i in range(60)]), 10, 3.0)

        assert all(t == 1 for t in result.trend)
        for prev, cur in zip(result.lower_band, result.lower_band[1:]):
            assert cur >= prev

    def test_flips_short_on_sell_off(self):
        result = supertrend(_rise_then_fall(), 10, 3.0)
        assert result.trend[0] == 1
        assert result.trend[-1] == -1

    def test_upper_band_ratchets_while_short(self):
        result = supertrend(_rise_then_fall(), 10, 3.0)
        for i in range(1, len(result)):
            if result.trend[i - 1] == -1 and result.trend[i] == -1:
                assert result.upper_band[i] <= result.upper_band[i - 1]

    def test_step_matches_batch(self):
        candles = _rise_then_fall()
        result = supertrend(candles, 10, 3.0)
        prefix = supertrend(candles[:-1], 10, 3.0)
        assert prefix.states == result.states[:-1]

    def test_step_from_none(self):
        state = supertrend_step(None, 100.0, 2.0, 99.0, 3.0)
        assert state == SupertrendState(trend=1, upper_band=105.0, lower_band=93.0, close=100.0)

    def test_step_flip_long(self):
        state = SupertrendState(trend=-1, upper_band=105.0, lower_band=93.0, close=100.0)
        new_state = supertrend_step(state, 110.0, 2.0, 99.0, 3.0)
        assert new_state.trend == 1


# ---------------------------------------------------------------------------
# Pivots
# ---------------------------------------------------------------------------

class TestPivots:
    """Tests for pivot detection."""

    def test_pivot_highs(self):
        assert pivot_highs([1, 3, 2, 5, 4], 1, 1) == [False, True, False, True, False]

    def test_pivot_lows(self):
        assert pivot_lows([3, 1, 2, 0, 4], 1, 1) == [False, True, False, True, False]

    def test_ties_do_not_disqualify(self):
        assert pivot_highs([1, 3, 3, 1], 1, 1) == [False, True, True, False]

    def test_last_bar_with_full_window(self):
        assert pivot_highs([1, 2, 5], 2, 0) == [False, False, True]

    def test_negation_swaps_highs_and_lows(self):
        values = [3, 7, 2, 9, 4, 4, 1, 8, 5, 6]
        negated = [-v for v in values]
        assert pivot_highs(values, 2, 2) == pivot_lows(negated, 2, 2)

    def test_kind_dispatch(self):
        values = [1, 3, 2, 5, 4]
        assert pivots(values, 1, 1, "high") == pivot_highs(values, 1, 1)
        assert pivots(values, 1, 1, "low") == pivot_lows(values, 1, 1)

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            pivots([1, 2, 3], 1, 1, "middle")

    def test_from_options(self):
        values = [3, 7, 2, 9, 4, 4, 1, 8, 5, 6]
        opts = PivotOptions(left_bars=1, right_bars=2, kind="low")
        assert pivots(values, options=opts) == pivot_lows(values, 1, 2)


class TestSupportResistance:
    """Tests for the latest confirmed support and resistance."""

    def test_levels_lag_by_right_bars(self):
        values = [1, 3, 2, 5, 4, 6, 1]
        result = support_resistance(values, values, 1, 1)

        assert len(result) == 6
        assert result.top == [None, 3.0, 3.0, 5.0, 5.0, 6.0]
        assert result.bottom == [None, None, 2.0, 2.0, 4.0, 4.0]

    def test_defaults(self):
        values = [float(i % 7) for i in range(40)]
        assert len(support_resistance(values, values)) == 35


class TestZigzag:
    """Tests for zigzag swing points."""

    VALUES = [5, 6, 7, 6, 5, 4, 5, 6, 8, 7, 6]

    def test_swings(self):
        points = zigzag(self.VALUES, self.VALUES, length=2)
        assert points == [
            ZigzagPoint(price=7.0, bar=2, direction=1),
            ZigzagPoint(price=4.0, bar=5, direction=-1),
            ZigzagPoint(price=8.0, bar=8, direction=2),
            ZigzagPoint(price=6.0, bar=10, direction=-1),
        ]

    def test_directions_alternate(self):
        points = zigzag(self.VALUES, self.VALUES, length=2)
        signs = [1 if p.direction > 0 else -1 for p in points]
        assert all(a != b for a, b in zip(signs, signs[1:]))

    def test_max_pivots_keeps_newest(self):
        points = zigzag(self.VALUES, self.VALUES, length=2, max_pivots=3)
        assert [p.bar for p in points] == [5, 8, 10]

    def test_flat_has_no_direction(self):
        assert zigzag([1.0] * 10, [1.0] * 10, length=2) == []


# ---------------------------------------------------------------------------
# Crossovers
# ---------------------------------------------------------------------------

class TestCrossover:
    """Tests for crossover detection."""

    def test_cross_up(self):
        assert cross_up([1, 2, 4], [3, 3, 3]) == [False, False, True]

    def test_cross_down(self):
        assert cross_down([4, 3, 2], [3, 3, 3]) == [False, False, True]

    def test_touch_then_cross_counts(self):
        assert crossed_up([1, 3, 4], [3, 3, 3]) is True

    def test_different_lengths_are_aligned(self):
        # b aligns with the last two values of a
        assert crossed_up([9, 9, 1, 5], [2, 3]) is True

    def test_up_and_down_exclusive_and_symmetric(self):
        a = [1, 4, 2, 2, 5, 3, 3, 0]
        b = [2, 2, 2, 3, 3, 3, 1, 1]
        ups = cross_up(a, b)
        downs = cross_down(a, b)

        assert not any(u and d for u, d in zip(ups, downs))
        assert ups == cross_down(b, a)

    def test_too_short(self):
        assert crossed_up([1], [0]) is False
        assert crossed_down([], []) is False
        assert cross_up([], [1, 2]) == []


# ---------------------------------------------------------------------------
# Engulfing patterns
# ---------------------------------------------------------------------------

class TestEngulfing:
    """Tests for engulfing candle patterns."""

    def test_bull_engulfing(self):
        candles = _bull_engulfing_candles()
        assert is_bull_engulfing(candles, body_period=3) is True
        assert is_bear_engulfing(candles, body_period=3) is False

    def test_bear_engulfing(self):
        candles = _mirror(_bull_engulfing_candles())
        assert is_bear_engulfing(candles, body_period=3) is True
        assert is_bull_engulfing(candles, body_period=3) is False

    def test_not_enough_history(self):
        candles = _bull_engulfing_candles()[-3:]
        assert is_bull_engulfing(candles, body_period=3) is False


# ---------------------------------------------------------------------------
# Williams fractals
# ---------------------------------------------------------------------------

class TestWilliamsFractal:
    """Tests for Williams fractals."""

    def _candles(self, lows, highs):
        return [
            _make_candle(i, (lo + hi) / 2, high=hi, low=lo)
            for i, (lo, hi) in enumerate(zip(lows, highs))
        ]

    def test_bullish(self):
        candles = self._candles([10, 9, 8, 9, 10], [11, 11, 11, 11, 11])
        assert is_williams_fractal(candles, "bullish") is True
        assert is_williams_fractal(candles, "bearish") is False

    def test_bearish(self):
        candles = self._candles([9, 9, 9, 9, 9], [10, 11, 12, 11, 10])
        assert is_williams_fractal(candles, "bearish") is True
        assert is_williams_fractal(candles, "bullish") is False

    def test_tie_is_not_a_fractal(self):
        candles = self._candles([10, 8, 8, 9, 10], [11] * 5)
        assert is_williams_fractal(candles, "bullish") is False

    def test_only_last_five_count(self):
        candles = self._candles([1, 10, 9, 8, 9, 10], [11] * 6)
        assert is_williams_fractal(candles, "bullish") is True

    def test_short_window(self):
        assert is_williams_fractal(self._candles([10, 9, 8, 9], [11] * 4)) is False

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            is_williams_fractal(self._candles([1] * 5, [2] * 5), "sideways")


# ---------------------------------------------------------------------------
# Fibonacci levels
# ---------------------------------------------------------------------------

class TestFibonacciLevels:
    """Tests for Fibonacci retracement and extension levels."""

    LOWS = [5, 3, 4, 6, 2, 7, 9, 8]

    def _candles(self):
        return [_make_candle(i, lo + 0.5, high=lo + 1, low=lo) for i, lo in enumerate(self.LOWS)]

    def test_up_swing(self):
        levels = fibonacci_levels(self._candles(), Trend.UP)

        # low 2 at bar 4, highest high after it 10 at bar 6
        assert levels.low == 2
        assert levels.high == 10
        assert levels.retracement[0.5] == pytest.approx(6.0)
        assert levels.retracement[1.0] == pytest.approx(2.0)
        assert levels.extension[1.0] == pytest.approx(10.0)
        assert levels.extension[1.618] == pytest.approx(10 + 8 * 0.618)

    def test_down_swing_uses_low_after_high(self):
        levels = fibonacci_levels(self._candles(), Trend.DOWN)

        # high 10 at bar 6, lowest low after it 8 at bar 7
        assert levels.high == 10
        assert levels.low == 8
        assert levels.retracement[0.5] == pytest.approx(9.0)
        assert levels.extension[2.618] == pytest.approx(8 - 2 * 1.618)

    def test_period_limits_window(self):
        levels = fibonacci_levels(self._candles(), options={"trend": Trend.UP, "period": 3})
        assert levels.low == 7
        assert levels.high == 10

    def test_neutral_rejected(self):
        with pytest.raises(ValueError):
            fibonacci_levels(self._candles(), Trend.NEUTRAL)

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            fibonacci_levels([], Trend.UP)
