"""CLI entry point: replay a candle CSV through a strategy roster.

Usage:
    python -m signalcore candles.csv
    python -m signalcore candles.csv --symbol BTCUSDT --interval 1h --all-bars
    python -m signalcore candles.csv --strategy ma_cross --strategy engulfing
    python -m signalcore candles.csv --roster roster.yaml
    python -m signalcore --list-strategies
"""

from __future__ import annotations

import argparse
import logging
import sys

from signalcore.config import get_settings
from signalcore.engine import EngineResult, SignalEngine
from signalcore.errors import SignalCoreError
from signalcore.io import load_candles_csv
from signalcore.logging_setup import configure_logging
from signalcore.models.options import SupertrendOptions
from signalcore.roster import Roster, load_roster
from signalcore.strategy import list_strategies

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="python -m signalcore",
        description="Evaluate trading signal strategies over a candle CSV",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m signalcore BTCUSDT-1h.csv --symbol BTCUSDT --interval 1h
  python -m signalcore BTCUSDT-1h.csv --strategy rsi_threshold --all-bars
  python -m signalcore BTCUSDT-1h.csv --roster roster.yaml
        """,
    )
    parser.add_argument(
        "csv",
        nargs="?",
        default=None,
        help="Candle CSV (open_time,open,high,low,close,volume[,close_time])",
    )
    parser.add_argument(
        "--roster",
        type=str,
        default=None,
        help="YAML roster file (default: SIGNALCORE_ROSTER_PATH)",
    )
    parser.add_argument(
        "--strategy",
        action="append",
        default=None,
        help="Strategy to run with default options; repeatable (overrides the roster)",
    )
    parser.add_argument("--symbol", type=str, default="", help="Symbol label for the candles")
    parser.add_argument("--interval", type=str, default="", help="Interval label for the candles")
    parser.add_argument(
        "--all-bars",
        action="store_true",
        help="Print every bar that produced a signal instead of only the last bar",
    )
    parser.add_argument(
        "--list-strategies",
        action="store_true",
        help="List registered strategies and exit",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: SIGNALCORE_LOG_LEVEL)",
    )
    return parser.parse_args(argv)


def build_roster(args: argparse.Namespace) -> Roster:
    """Pick the roster from --strategy, --roster, or settings, in that order."""
    settings = get_settings()
    supertrend = SupertrendOptions(
        atr_period=settings.supertrend_atr_period,
        atr_multiplier=settings.supertrend_atr_multiplier,
    )

    if args.strategy:
        return Roster.from_names(args.strategy, supertrend=supertrend)

    roster_path = args.roster or settings.roster_path
    if roster_path:
        return load_roster(roster_path)

    return Roster.from_names(settings.default_strategies, supertrend=supertrend)


def format_result(result: EngineResult, only_active: bool = True) -> list[str]:
    """Render one engine result as ``symbol time strategy signal`` lines."""
    symbol = result.symbol or "-"
    when = result.candle_time.isoformat()
    signals = result.active_signals if only_active else result.signals
    lines = [f"{symbol} {when} {name} {signal.name}" for name, signal in signals.items()]
    lines.append(f"{symbol} {when} trend {result.trend.name}")
    return lines


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()

    configure_logging(args.log_level or settings.log_level)

    if args.list_strategies:
        for name in list_strategies():
            print(name)
        return 0

    if not args.csv:
        print("Error: a candle CSV is required", file=sys.stderr)
        return 2

    try:
        roster = build_roster(args)
        candles = load_candles_csv(args.csv, symbol=args.symbol, interval=args.interval)
        engine = SignalEngine.from_roster(roster, buffer_size=settings.buffer_size)
    except (SignalCoreError, OSError, KeyError, ValueError) as e:
        logger.error("%s", e)
        return 1

    logger.info("Running %s over %d candles", ", ".join(engine.strategy_names), len(candles))
    results = engine.run(candles)
    if not results:
        print("No closed candles.")
        return 0

    if args.all_bars:
        for result in results:
            if result.active_signals:
                for line in format_result(result):
                    print(line)
    else:
        for line in format_result(results[-1], only_active=False):
            print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
