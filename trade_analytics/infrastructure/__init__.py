"""Infrastructure layer for trade analytics.

Contains:
- config: Data paths and analysis configuration
- cache: TTL quote cache
- market_data: Price provider interface and implementations
- repositories: Lot storage
"""

from trade_analytics.infrastructure.config import (
    DataPaths,
    AnalysisConfig,
    DEFAULT_PATHS,
    DEFAULT_CONFIG,
)
from trade_analytics.infrastructure.cache import QuoteCache
from trade_analytics.infrastructure.market_data import (
    OHLCV,
    MarketDataError,
    MarketDataProvider,
    StaticPriceProvider,
    CachedMarketDataProvider,
)
from trade_analytics.infrastructure.repositories import (
    Repository,
    RepositoryError,
    TradeStore,
    LotRepository,
)

__all__ = [
    # Config
    "DataPaths",
    "AnalysisConfig",
    "DEFAULT_PATHS",
    "DEFAULT_CONFIG",
    # Cache
    "QuoteCache",
    # Market data
    "OHLCV",
    "MarketDataError",
    "MarketDataProvider",
    "StaticPriceProvider",
    "CachedMarketDataProvider",
    # Repositories
    "Repository",
    "RepositoryError",
    "TradeStore",
    "LotRepository",
]
