"""Portfolio Service: Open positions valued at current prices.

Builds positions from the open lots of a TradeStore and values them with
prices from a MarketDataProvider. Prices are fetched in small concurrent
batches with a pause between batches to stay within provider rate
limits. A ticker whose price cannot be fetched is valued at its average
entry price (zero unrealized P&L) and a warning is logged.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Sequence

from trade_analytics.domain.positions import (
    Position,
    PositionView,
    aggregate,
    aggregate_ticker,
    with_current_price,
)
from trade_analytics.infrastructure.cache import QuoteCache
from trade_analytics.infrastructure.config import AnalysisConfig, DEFAULT_CONFIG
from trade_analytics.infrastructure.market_data import MarketDataError, MarketDataProvider
from trade_analytics.infrastructure.repositories.base import TradeStore

logger = logging.getLogger(__name__)


class PortfolioService:
    """Service for open positions and their unrealized P&L.

    Example:
        >>> service = PortfolioService(LotRepository(path), StaticPriceProvider(prices))
        >>> for view in service.valued_positions():
        ...     print(view.ticker, view.unrealized_pnl)
    """

    def __init__(
        self,
        store: TradeStore,
        provider: MarketDataProvider,
        config: AnalysisConfig = DEFAULT_CONFIG,
        cache: QuoteCache[float] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the service.

        Args:
            store: Source of lots
            provider: Source of current prices
            config: Batch size, batch delay and quote TTL
            cache: Quote cache shared with other callers (one is created
                from config.quote_ttl_seconds if omitted)
            sleep: Pause function between batches
        """
        if config.price_batch_size < 1:
            raise ValueError(f"price_batch_size must be >= 1, got: {config.price_batch_size}")
        self._store = store
        self._provider = provider
        self._config = config
        self._cache = cache if cache is not None else QuoteCache(config.quote_ttl_seconds)
        self._sleep = sleep

    # --- Positions ---

    def positions(self) -> list[Position]:
        """All open positions, sorted by ticker.

        Raises:
            MixedDirectionError: If a ticker has open long and short lots
        """
        return aggregate(self._store.list_trades(status="open"))

    def get_position(self, ticker: str) -> Position | None:
        """Open position for one ticker, or None if it has no open lots."""
        lots = self._store.list_trades(ticker=ticker, status="open")
        return aggregate_ticker(lots, ticker)

    # --- Prices ---

    def _fetch(self, ticker: str) -> float:
        return self._cache.get_or_load(
            ticker, lambda: self._provider.get_current_price(ticker)
        )

    def resolve_prices(self, tickers: Sequence[str]) -> dict[str, float | None]:
        """Fetch current prices in batches.

        Args:
            tickers: Tickers to price (duplicates are fetched once)

        Returns:
            Dict of ticker to price, or None where the lookup failed
        """
        unique = list(dict.fromkeys(t.upper() for t in tickers))
        size = self._config.price_batch_size
        batches = [unique[i:i + size] for i in range(0, len(unique), size)]

        prices: dict[str, float | None] = {}
        with ThreadPoolExecutor(max_workers=size) as pool:
            for n, batch in enumerate(batches):
                if n > 0 and self._config.price_batch_delay_seconds > 0:
                    self._sleep(self._config.price_batch_delay_seconds)
                futures = {ticker: pool.submit(self._fetch, ticker) for ticker in batch}
                for ticker, future in futures.items():
                    try:
                        prices[ticker] = future.result()
                    except MarketDataError as e:
                        logger.warning("Price lookup failed for %s: %s", ticker, e)
                        prices[ticker] = None

        logger.debug("Resolved %d prices in %d batches", len(prices), len(batches))
        return prices

    def valued_positions(self) -> list[PositionView]:
        """Open positions valued at current prices.

        Positions whose price lookup failed are valued at their average
        entry price.
        """
        positions = self.positions()
        prices = self.resolve_prices([p.ticker for p in positions])

        views = []
        for position in positions:
            price = prices.get(position.ticker)
            if price is None:
                logger.warning(
                    "Using average entry price %.4f for %s",
                    position.average_entry_price, position.ticker,
                )
                price = position.average_entry_price
            views.append(with_current_price(position, price))
        return views
