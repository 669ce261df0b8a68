"""Domain errors.

- TradeAnalyticsError: base class for everything raised by the domain layer
- InvalidLotError: malformed lot input (never silently corrected)
- MixedDirectionError: long and short lots combined into one position
"""


class TradeAnalyticsError(Exception):
    """Base exception for trade analytics."""


class InvalidLotError(TradeAnalyticsError, ValueError):
    """Raised when a lot violates its field or exit invariants."""


class MixedDirectionError(TradeAnalyticsError, ValueError):
    """Raised when lots of conflicting direction meet in one position."""

    def __init__(self, ticker: str, expected: str, got: str):
        self.ticker = ticker
        self.expected = expected
        self.got = got
        super().__init__(
            f"Cannot combine {got} lot with {expected} position in {ticker}"
        )
