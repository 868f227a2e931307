"""Signal engine: per-symbol candle buffers evaluated against a roster.

The engine owns the only mutable state in the package: one ``CandleBuffer``
and one ``SupertrendState`` per symbol/interval key. Strategies stay
stateless and see the buffered window on every closed candle.

Not thread-safe. Run one engine per worker, or partition symbols across
engines.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Mapping, Sequence

from signalcore.models.candle import Candle, CandleBuffer
from signalcore.models.options import SupertrendOptions, resolve_options
from signalcore.models.signal import Signal, SupertrendState, Trend
from signalcore.strategy.protocol import SignalStrategy
from signalcore.trend import supertrend_trend

logger = logging.getLogger(__name__)


@dataclass
class EngineResult:
    """Outcome of processing one closed candle.

    ``revision`` is set when the candle replaced the last buffered bar
    instead of opening a new one.
    """

    symbol: str
    interval: str
    candle_time: datetime
    signals: dict[str, Signal] = field(default_factory=dict)
    trend: Trend = Trend.NEUTRAL
    revision: bool = False

    @property
    def active_signals(self) -> dict[str, Signal]:
        """Signals other than NONE."""
        return {name: s for name, s in self.signals.items() if s != Signal.NONE}


def _key(symbol: str, interval: str) -> str:
    return f"{symbol}_{interval}"


class SignalEngine:
    """Evaluates a roster of strategies on every closed candle per symbol."""

    def __init__(
        self,
        strategies: Sequence[SignalStrategy],
        supertrend_options: SupertrendOptions | Mapping[str, Any] | None = None,
        buffer_size: int = 500,
    ):
        names = [s.name for s in strategies]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate strategy names in roster: {names}")

        self.strategies = list(strategies)
        self.supertrend_options = resolve_options(SupertrendOptions, supertrend_options)
        self.buffer_size = buffer_size

        self._buffers: dict[str, CandleBuffer] = {}
        self._trend_states: dict[str, SupertrendState | None] = {}
        # State before the latest bar, so a corrected bar can be re-stepped.
        self._base_states: dict[str, SupertrendState | None] = {}

    @classmethod
    def from_roster(cls, roster, buffer_size: int = 500) -> "SignalEngine":
        """Build an engine from a ``Roster``."""
        return cls(
            roster.build_strategies(),
            supertrend_options=roster.supertrend,
            buffer_size=buffer_size,
        )

    @property
    def strategy_names(self) -> list[str]:
        return [s.name for s in self.strategies]

    def get_buffer(self, symbol: str, interval: str = "") -> CandleBuffer:
        """Get (or create) the buffer for a symbol/interval."""
        key = _key(symbol, interval)
        if key not in self._buffers:
            self._buffers[key] = CandleBuffer(
                symbol=symbol, interval=interval, max_size=self.buffer_size
            )
        return self._buffers[key]

    def get_state(self, symbol: str, interval: str = "") -> SupertrendState | None:
        return self._trend_states.get(_key(symbol, interval))

    def set_state(self, symbol: str, interval: str, state: SupertrendState | None) -> None:
        """Restore a persisted Supertrend state for a symbol/interval."""
        key = _key(symbol, interval)
        self._trend_states[key] = state
        self._base_states.pop(key, None)

    def reset(self, symbol: str, interval: str = "") -> None:
        """Drop the buffer and trend state of a symbol/interval."""
        key = _key(symbol, interval)
        self._buffers.pop(key, None)
        self._trend_states.pop(key, None)
        self._base_states.pop(key, None)

    def process_candle(self, candle: Candle) -> EngineResult | None:
        """Add a candle to its buffer and evaluate every strategy.

        A candle with the open time of the last buffered bar replaces that
        bar and is re-evaluated as a revision; the Supertrend state is
        re-stepped from the state before the bar. An exact repeat of the
        last bar and a candle older than it change nothing.

        Returns:
            None for candles that are not closed, stale or repeated,
            else the result.
        """
        if not candle.is_closed:
            return None

        key = _key(candle.symbol, candle.interval)
        buffer = self.get_buffer(candle.symbol, candle.interval)
        last = buffer.candles[-1] if buffer.candles else None

        revision = last is not None and candle.open_time == last.open_time
        if last is not None and (candle.open_time < last.open_time or candle == last):
            logger.debug(
                "%s %s: ignoring %s candle %s",
                candle.symbol,
                candle.interval,
                "repeated" if candle == last else "stale",
                candle.open_time.isoformat(),
            )
            return None

        if revision:
            base_state = self._base_states.get(key)
        else:
            base_state = self._trend_states.get(key)
            self._base_states[key] = base_state

        buffer.add(candle)
        window = buffer.candles

        state, trend = supertrend_trend(window, self.supertrend_options, base_state)
        self._trend_states[key] = state

        result = EngineResult(
            symbol=candle.symbol,
            interval=candle.interval,
            candle_time=candle.open_time,
            trend=trend,
            revision=revision,
        )

        for strategy in self.strategies:
            if len(window) < strategy.min_candles:
                logger.debug(
                    "%s %s: %s needs %d candles, have %d",
                    candle.symbol,
                    candle.interval,
                    strategy.name,
                    strategy.min_candles,
                    len(window),
                )
            signal = strategy.evaluate(window)
            result.signals[strategy.name] = signal
            if signal != Signal.NONE:
                logger.info(
                    "%s %s %s: %s %s (trend=%s, close=%s)%s",
                    candle.symbol,
                    candle.interval,
                    candle.open_time.isoformat(),
                    strategy.name,
                    signal.name,
                    trend.name,
                    candle.close,
                    " [revised]" if revision else "",
                )

        return result

    def run(self, candles: Iterable[Candle]) -> list[EngineResult]:
        """Process candles in order, collecting one result per closed candle."""
        results = []
        for candle in candles:
            result = self.process_candle(candle)
            if result is not None:
                results.append(result)
        return results
