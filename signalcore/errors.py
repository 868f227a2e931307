"""Exceptions raised by the I/O shell.

Indicator and strategy code never raises for conforming candle input;
these cover bad files and bad configuration.
"""


class SignalCoreError(Exception):
    """Base class for signalcore errors."""


class CandleDataError(SignalCoreError):
    """Candle data could not be parsed or is inconsistent."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class RosterError(SignalCoreError):
    """Strategy roster file is invalid or names an unknown strategy."""
