"""Strategy roster loaded from a YAML file.

Example roster::

    supertrend:
      atr_period: 10
      atr_multiplier: 3.0
    strategies:
      - name: ma_cross
        options: {short_period: 9, long_period: 21, short_ma_type: EMA}
      - name: rsi_threshold
      - name: engulfing
        enabled: false
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from signalcore.errors import RosterError
from signalcore.models.options import SupertrendOptions
from signalcore.strategy import create_strategy, get_strategy_class
from signalcore.strategy.protocol import SignalStrategy

logger = logging.getLogger(__name__)


class StrategyEntry(BaseModel):
    """A single strategy entry in the roster."""

    name: str
    enabled: bool = True
    options: dict[str, Any] = {}

    @field_validator("name")
    @classmethod
    def _known_strategy(cls, value: str) -> str:
        try:
            get_strategy_class(value)
        except KeyError as e:
            raise ValueError(e.args[0]) from e
        return value

    def build(self) -> SignalStrategy:
        return create_strategy(self.name, self.options)


class Roster(BaseModel):
    """Top-level roster configuration."""

    supertrend: SupertrendOptions = SupertrendOptions()
    strategies: list[StrategyEntry] = []

    @classmethod
    def from_names(cls, names: list[str], **kwargs: Any) -> "Roster":
        """Roster of the named strategies with default options."""
        return cls(strategies=[StrategyEntry(name=n) for n in names], **kwargs)

    def build_strategies(self) -> list[SignalStrategy]:
        """Instantiate every enabled strategy, in roster order."""
        return [entry.build() for entry in self.strategies if entry.enabled]


def load_roster(path: str | Path) -> Roster:
    """Load and validate a roster file.

    Raises:
        RosterError: If the file is missing, is not valid YAML, or fails
            validation (including unknown strategy names).
    """
    roster_path = Path(path)
    try:
        with open(roster_path) as f:
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise RosterError(f"Cannot read roster {roster_path}: {e}") from e
    except yaml.YAMLError as e:
        raise RosterError(f"Invalid YAML in roster {roster_path}: {e}") from e

    if not isinstance(raw, dict):
        raise RosterError(f"Roster {roster_path} must be a mapping, got {type(raw).__name__}")

    try:
        roster = Roster(**raw)
        # Bad option records fail here as well.
        roster.build_strategies()
    except ValidationError as e:
        raise RosterError(f"Invalid roster {roster_path}: {e}") from e

    logger.info(
        "Loaded roster %s: %d strategies (%d enabled)",
        roster_path,
        len(roster.strategies),
        sum(1 for s in roster.strategies if s.enabled),
    )
    return roster
