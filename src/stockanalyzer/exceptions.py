"""
Error types raised by the analyzer core.

Both concrete errors also derive from the matching built-in exception
(``KeyError`` / ``ValueError``) so callers that already guard lookups and
argument checks the usual way keep working.
"""


class StockAnalyzerError(Exception):
    """Base class for every error raised by the analyzer."""


class UnknownSymbolError(StockAnalyzerError, KeyError):
    """The requested symbol is not present in the reference table."""

    def __init__(self, symbol: str, available=None):
        self.symbol = symbol
        self.available = list(available or [])
        super().__init__(symbol)

    def __str__(self) -> str:
        if self.available:
            return (
                f"Unknown symbol: {self.symbol!r}. "
                f"Supported: {', '.join(self.available)}"
            )
        return f"Unknown symbol: {self.symbol!r}"


class InvalidParameterError(StockAnalyzerError, ValueError):
    """A generator or indicator received an out-of-range argument."""
