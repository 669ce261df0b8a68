"""Data repositories for trade analytics.

Provides abstracted data access through the Repository pattern:
- TradeStore: interface for reading and writing lots
- LotRepository: CSV/Parquet-backed TradeStore
"""

from trade_analytics.infrastructure.repositories.base import (
    LotStatus,
    Repository,
    RepositoryError,
    TradeStore,
)
from trade_analytics.infrastructure.repositories.lot_repo import LotRepository

__all__ = [
    "LotStatus",
    "Repository",
    "RepositoryError",
    "TradeStore",
    "LotRepository",
]
