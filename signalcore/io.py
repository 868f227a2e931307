"""Candle loading from CSV files.

Rows follow the exchange kline dump layout::

    open_time,open,high,low,close,volume[,close_time,...]

Timestamps are epoch milliseconds (microseconds are detected by size) or
ISO-8601 strings. A non-numeric first row is treated as a header. Extra
columns are ignored.
"""

from __future__ import annotations

import csv
import logging
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from signalcore.errors import CandleDataError
from signalcore.models.candle import Candle

logger = logging.getLogger(__name__)

# Epoch values above this are microseconds rather than milliseconds
_MICROSECOND_THRESHOLD = 10**14


def parse_timestamp(value: str) -> datetime:
    """Parse an epoch-ms/us or ISO-8601 timestamp into an aware datetime."""
    value = value.strip()
    if value.isdigit():
        raw = int(value)
        divisor = 1_000_000 if raw >= _MICROSECOND_THRESHOLD else 1000
        return datetime.fromtimestamp(raw / divisor, tz=timezone.utc)

    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _is_header(row: list[str]) -> bool:
    try:
        float(row[1])
    except (IndexError, ValueError):
        return True
    return False


def load_candles_csv(
    path: str | Path,
    symbol: str = "",
    interval: str = "",
) -> list[Candle]:
    """Load candles from a CSV file, sorted ascending by open time.

    Raises:
        CandleDataError: If a data row is short or holds unparsable values.
    """
    candles: list[Candle] = []
    csv_path = Path(path)

    with open(csv_path, newline="") as f:
        for line_no, row in enumerate(csv.reader(f), start=1):
            if not row or not any(cell.strip() for cell in row):
                continue
            if line_no == 1 and _is_header(row):
                continue
            if len(row) < 6:
                raise CandleDataError(
                    f"expected at least 6 columns, got {len(row)}", line=line_no
                )
            try:
                candles.append(
                    Candle(
                        symbol=symbol,
                        interval=interval,
                        open_time=parse_timestamp(row[0]),
                        close_time=parse_timestamp(row[6]) if len(row) > 6 and row[6].strip() else None,
                        open=float(row[1]),
                        high=float(row[2]),
                        low=float(row[3]),
                        close=float(row[4]),
                        volume=float(row[5]),
                    )
                )
            except (ValueError, ValidationError) as e:
                raise CandleDataError(str(e), line=line_no) from e

    candles.sort(key=lambda c: c.open_time)
    logger.info("Loaded %d candles for %s %s from %s", len(candles), symbol or "?", interval or "?", csv_path)
    return candles
