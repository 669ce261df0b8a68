"""Unit tests for infrastructure/cache.py and infrastructure/market_data.py."""

from datetime import date

import pytest

from trade_analytics.infrastructure.cache import QuoteCache
from trade_analytics.infrastructure.market_data import (
    OHLCV,
    CachedMarketDataProvider,
    MarketDataError,
    StaticPriceProvider,
)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class CountingProvider(StaticPriceProvider):
    """StaticPriceProvider that counts lookups."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = 0

    def get_current_price(self, ticker):
        self.calls += 1
        return super().get_current_price(ticker)


# =============================================================================
# QuoteCache Tests
# =============================================================================

class TestQuoteCache:
    """Tests for QuoteCache."""

    def test_get_set(self):
        cache = QuoteCache(ttl_seconds=90)
        assert cache.get("AAPL") is None
        cache.set("AAPL", 185.0)
        assert cache.get("AAPL") == 185.0
        assert len(cache) == 1

    def test_expiry(self):
        """Entries expire ttl seconds after being written."""
        clock = FakeClock()
        cache = QuoteCache(ttl_seconds=90, clock=clock)
        cache.set("AAPL", 185.0)

        clock.now = 89.9
        assert cache.get("AAPL") == 185.0
        clock.now = 90.0
        assert cache.get("AAPL") is None
        assert len(cache) == 0

    def test_get_or_load(self):
        """Loader runs only on a miss."""
        clock = FakeClock()
        cache = QuoteCache(ttl_seconds=10, clock=clock)
        calls = []

        def loader():
            calls.append(1)
            return 42.0

        assert cache.get_or_load("X", loader) == 42.0
        assert cache.get_or_load("X", loader) == 42.0
        assert len(calls) == 1

        clock.now = 11
        cache.get_or_load("X", loader)
        assert len(calls) == 2

    def test_get_or_load_error_not_cached(self):
        """Loader errors propagate and leave the cache empty."""
        cache = QuoteCache()

        def loader():
            raise MarketDataError("down", "AAPL")

        with pytest.raises(MarketDataError):
            cache.get_or_load("AAPL", loader)
        assert len(cache) == 0

    def test_purge_and_invalidate(self):
        clock = FakeClock()
        cache = QuoteCache(ttl_seconds=5, clock=clock)
        cache.set("A", 1.0)
        clock.now = 3
        cache.set("B", 2.0)
        clock.now = 6

        assert cache.purge_expired() == 1
        assert cache.get("B") == 2.0
        cache.invalidate("B")
        assert len(cache) == 0

    def test_clear(self):
        cache = QuoteCache()
        cache.set("A", 1.0)
        cache.clear()
        assert cache.get("A") is None

    def test_invalid_ttl(self):
        with pytest.raises(ValueError, match="ttl_seconds must be positive"):
            QuoteCache(ttl_seconds=0)


# =============================================================================
# Provider Tests
# =============================================================================

class TestStaticPriceProvider:
    """Tests for StaticPriceProvider."""

    def test_current_price(self):
        provider = StaticPriceProvider({"aapl": 185})
        assert provider.get_current_price("AAPL") == 185.0

    def test_unknown_ticker(self):
        provider = StaticPriceProvider({})
        with pytest.raises(MarketDataError, match="No price available") as exc:
            provider.get_current_price("XYZ")
        assert exc.value.ticker == "XYZ"

    def test_historical_series(self):
        bars = [
            OHLCV(date(2024, 1, d), 10.0, 11.0, 9.0, 10.5, 1000)
            for d in range(1, 6)
        ]
        provider = StaticPriceProvider({}, series={"AAPL": bars})

        result = provider.get_historical_series("aapl", date(2024, 1, 2), date(2024, 1, 4))
        assert [b.date.day for b in result] == [2, 3, 4]

        with pytest.raises(MarketDataError, match="No history"):
            provider.get_historical_series("MSFT", date(2024, 1, 1), date(2024, 1, 2))


class TestCachedMarketDataProvider:
    """Tests for CachedMarketDataProvider."""

    def test_quotes_cached(self):
        clock = FakeClock()
        inner = CountingProvider({"AAPL": 185.0})
        provider = CachedMarketDataProvider(inner, QuoteCache(ttl_seconds=90, clock=clock))

        assert provider.get_current_price("aapl") == 185.0
        assert provider.get_current_price("AAPL") == 185.0
        assert inner.calls == 1

        clock.now = 91
        provider.get_current_price("AAPL")
        assert inner.calls == 2

    def test_series_cached_by_range(self):
        bars = [OHLCV(date(2024, 1, 1), 1.0, 1.0, 1.0, 1.0, 1)]
        provider = CachedMarketDataProvider(
            StaticPriceProvider({}, series={"AAPL": bars}), QuoteCache()
        )
        first = provider.get_historical_series("AAPL", date(2024, 1, 1), date(2024, 1, 31))
        second = provider.get_historical_series("AAPL", date(2024, 1, 1), date(2024, 1, 31))
        assert first is second
