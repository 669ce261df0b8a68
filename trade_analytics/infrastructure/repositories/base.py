"""Base Repository: Abstract interfaces for data access.

- Repository: cached access to a complete dataset
- TradeStore: source and sink of Lot records
- RepositoryError: raised on any storage failure
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Generic, Literal, TypeVar

from trade_analytics.domain.models import Lot

T = TypeVar("T")

LotStatus = Literal["all", "open", "closed"]


class Repository(ABC, Generic[T]):
    """Abstract base class for repositories.

    All repositories should:
    1. Provide a get_all() method
    2. Handle caching internally
    3. Raise RepositoryError on failures
    """

    @abstractmethod
    def get_all(self) -> T:
        """Retrieve all data from the repository.

        Raises:
            RepositoryError: If data cannot be loaded
        """
        pass

    @abstractmethod
    def clear_cache(self) -> None:
        """Clear any cached data."""
        pass


class TradeStore(ABC):
    """Persistence boundary for lots.

    The analytics core only reads and writes Lot records through this
    interface; schema details stay behind it.
    """

    @abstractmethod
    def list_trades(
        self,
        ticker: str | None = None,
        status: LotStatus = "all",
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Lot]:
        """List lots matching the filter, ordered by entry date."""
        pass

    @abstractmethod
    def create_trade(self, lot: Lot) -> Lot:
        """Store a new lot, returning it with its assigned id."""
        pass

    @abstractmethod
    def close_trade(self, lot_id: int, exit_date: datetime, exit_price: float) -> Lot:
        """Record an exit for a stored lot, returning the closed lot."""
        pass

    @abstractmethod
    def delete_trade(self, lot_id: int) -> bool:
        """Remove a lot. Returns False if the id was unknown."""
        pass


class RepositoryError(Exception):
    """Exception raised when repository operations fail."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(f"{message}" + (f" (path: {path})" if path else ""))
