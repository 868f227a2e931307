"""Technical indicators and trading signal strategies over OHLCV candles.

The indicator, pattern, trend and strategy layers are pure computation with
no I/O. The engine, CSV loader, roster loader and CLI form a thin shell
around them.
"""

from signalcore.engine import EngineResult, SignalEngine
from signalcore.models import Candle, CandleBuffer, Signal, SupertrendState, Trend
from signalcore.strategy import SignalStrategy, create_strategy, list_strategies

__version__ = "1.0.0"

__all__ = [
    "Candle",
    "CandleBuffer",
    "Signal",
    "SupertrendState",
    "Trend",
    "SignalStrategy",
    "create_strategy",
    "list_strategies",
    "EngineResult",
    "SignalEngine",
]
