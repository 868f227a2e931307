"""Strategy plugin system.

Public API:
- SignalStrategy: Protocol that all strategies must implement
- BaseSignalStrategy: Base class of the built-in strategies
- register_strategy: Decorator to register a strategy class
- create_strategy: Factory function to instantiate strategies by name
- list_strategies: Discover all registered strategies
- get_strategy_class: Get strategy class by name without instantiating

Importing this package auto-registers all built-in strategies.
"""

from signalcore.strategy.protocol import CandleWindow, SignalStrategy
from signalcore.strategy.registry import (
    register_strategy,
    create_strategy,
    list_strategies,
    get_strategy_class,
)
from signalcore.strategy.base import BaseSignalStrategy

# Import built-in strategies to trigger auto-registration
from signalcore.strategy.ma_cross import MaCrossStrategy, PriceMaCrossStrategy
from signalcore.strategy.macd_cross import MacdCrossStrategy
from signalcore.strategy.threshold import RsiThresholdStrategy, VolumeOscillatorStrategy
from signalcore.strategy.stochastic_rsi import StochasticRsiStrategy
from signalcore.strategy.engulfing import EngulfingStrategy
from signalcore.strategy.supertrend_flip import SupertrendFlipStrategy

__all__ = [
    "CandleWindow",
    "SignalStrategy",
    "BaseSignalStrategy",
    "register_strategy",
    "create_strategy",
    "list_strategies",
    "get_strategy_class",
    "MaCrossStrategy",
    "PriceMaCrossStrategy",
    "MacdCrossStrategy",
    "RsiThresholdStrategy",
    "VolumeOscillatorStrategy",
    "StochasticRsiStrategy",
    "EngulfingStrategy",
    "SupertrendFlipStrategy",
]
