"""Base class shared by the built-in strategies.

Subclasses declare their option record in ``options_cls`` and implement
``min_candles``, ``_buy`` and ``_sell``. The base class enforces the
minimum window and maps the rule results onto ``Signal``.
"""

from __future__ import annotations

from typing import Any, ClassVar, Mapping

from signalcore.indicators.series import candle_source
from signalcore.models.options import Options, resolve_options
from signalcore.models.signal import Signal
from signalcore.strategy.protocol import CandleWindow


class BaseSignalStrategy:
    """Stateless strategy: ``(window, options) -> Signal``."""

    strategy_name: ClassVar[str] = ""
    options_cls: ClassVar[type[Options]] = Options
    version: ClassVar[str] = "1.0.0"

    def __init__(self, options: Options | Mapping[str, Any] | None = None):
        self._options = resolve_options(self.options_cls, options)

    @property
    def name(self) -> str:
        return self.strategy_name

    @property
    def options(self) -> Options:
        return self._options

    @property
    def min_candles(self) -> int:
        raise NotImplementedError

    def _buy(self, window: CandleWindow) -> bool:
        raise NotImplementedError

    def _sell(self, window: CandleWindow) -> bool:
        raise NotImplementedError

    def _has_history(self, window: CandleWindow) -> bool:
        return len(window) >= max(self.min_candles, 2)

    def _source(self, window: CandleWindow) -> list[float]:
        return candle_source(window, getattr(self._options, "source_type", "close"))

    def is_buy_signal(self, window: CandleWindow) -> Signal:
        if not self._has_history(window):
            return Signal.NONE
        return Signal.BUY if self._buy(window) else Signal.NONE

    def is_sell_signal(self, window: CandleWindow) -> Signal:
        if not self._has_history(window):
            return Signal.NONE
        return Signal.SELL if self._sell(window) else Signal.NONE

    def evaluate(self, window: CandleWindow) -> Signal:
        return self.is_buy_signal(window) or self.is_sell_signal(window)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._options!r})"
