"""Market Data: Price source interface and implementations.

- MarketDataProvider: interface for current prices and OHLCV history
- StaticPriceProvider: in-memory prices (tests, CLI price overrides)
- CachedMarketDataProvider: wraps a provider with a QuoteCache

Providers raise MarketDataError on failure. Retries and fallbacks are
the caller's decision.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Mapping, Sequence

from trade_analytics.infrastructure.cache import QuoteCache


class MarketDataError(Exception):
    """Exception raised when a price or history lookup fails."""

    def __init__(self, message: str, ticker: str | None = None):
        self.ticker = ticker
        super().__init__(f"{message}" + (f" (ticker: {ticker})" if ticker else ""))


@dataclass(frozen=True, slots=True)
class OHLCV:
    """One daily bar."""
    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int


class MarketDataProvider(ABC):
    """Source of current and historical prices."""

    @abstractmethod
    def get_current_price(self, ticker: str) -> float:
        """Latest price for a ticker.

        Raises:
            MarketDataError: If the price cannot be retrieved
        """
        pass

    @abstractmethod
    def get_historical_series(self, ticker: str, start: date, end: date) -> list[OHLCV]:
        """Daily bars for a ticker between start and end (inclusive).

        Raises:
            MarketDataError: If the series cannot be retrieved
        """
        pass


class StaticPriceProvider(MarketDataProvider):
    """Provider over fixed in-memory data.

    Example:
        >>> provider = StaticPriceProvider({"AAPL": 185.0})
        >>> provider.get_current_price("aapl")
        185.0
    """

    def __init__(
        self,
        prices: Mapping[str, float],
        series: Mapping[str, Sequence[OHLCV]] | None = None,
    ):
        self._prices = {k.upper(): float(v) for k, v in prices.items()}
        self._series = {k.upper(): list(v) for k, v in (series or {}).items()}

    def get_current_price(self, ticker: str) -> float:
        symbol = ticker.upper()
        if symbol not in self._prices:
            raise MarketDataError("No price available", symbol)
        return self._prices[symbol]

    def get_historical_series(self, ticker: str, start: date, end: date) -> list[OHLCV]:
        symbol = ticker.upper()
        if symbol not in self._series:
            raise MarketDataError("No history available", symbol)
        return [bar for bar in self._series[symbol] if start <= bar.date <= end]


class CachedMarketDataProvider(MarketDataProvider):
    """Provider decorator that caches results in QuoteCache instances.

    Quotes are keyed by ticker; series by (ticker, start, end).
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        quote_cache: QuoteCache[float],
        series_cache: QuoteCache[list[OHLCV]] | None = None,
    ):
        self._provider = provider
        self._quotes = quote_cache
        self._series = series_cache or QuoteCache(ttl_seconds=quote_cache.ttl_seconds)

    def get_current_price(self, ticker: str) -> float:
        symbol = ticker.upper()
        return self._quotes.get_or_load(
            symbol, lambda: self._provider.get_current_price(symbol)
        )

    def get_historical_series(self, ticker: str, start: date, end: date) -> list[OHLCV]:
        symbol = ticker.upper()
        return self._series.get_or_load(
            (symbol, start, end),
            lambda: self._provider.get_historical_series(symbol, start, end),
        )
