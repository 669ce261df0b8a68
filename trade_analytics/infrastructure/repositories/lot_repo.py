"""Lot Repository: File-backed TradeStore.

Reads and writes a lot table in CSV or Parquet (chosen by file suffix).

Columns:
    id, ticker, direction, entry_date, entry_price, quantity, fees,
    exit_date, exit_price

`id` and `fees` are optional on read; missing ids are assigned in file
order and missing fees default to 0. Open lots have empty exit columns.
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Iterable

import polars as pl

from trade_analytics.domain.errors import InvalidLotError
from trade_analytics.domain.models import Lot
from trade_analytics.infrastructure.config import DataPaths, DEFAULT_PATHS
from trade_analytics.infrastructure.repositories.base import (
    LotStatus,
    Repository,
    RepositoryError,
    TradeStore,
)

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("ticker", "direction", "entry_date", "entry_price", "quantity")

SCHEMA = {
    "id": pl.Int64,
    "ticker": pl.Utf8,
    "direction": pl.Utf8,
    "entry_date": pl.Datetime("us"),
    "entry_price": pl.Float64,
    "quantity": pl.Float64,
    "fees": pl.Float64,
    "exit_date": pl.Datetime("us"),
    "exit_price": pl.Float64,
}


def _to_datetime(value) -> datetime | None:
    """Coerce a cell value (datetime, date, ISO string or null) to datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(str(value))


def _to_float(value) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


def _row_to_lot(row: dict, lot_id: int) -> Lot:
    fees = _to_float(row.get("fees"))
    return Lot(
        id=lot_id,
        ticker=str(row["ticker"]),
        direction=str(row["direction"]).strip().lower(),
        entry_date=_to_datetime(row["entry_date"]),
        entry_price=_to_float(row["entry_price"]),
        quantity=_to_float(row["quantity"]),
        fees=fees if fees is not None else 0.0,
        exit_date=_to_datetime(row.get("exit_date")),
        exit_price=_to_float(row.get("exit_price")),
    )


class LotRepository(Repository[list[Lot]], TradeStore):
    """Repository for trade lots.

    Loads lots lazily from `path` and keeps them cached; mutations apply
    to the cache and are written back by save(). A repository without a
    path is purely in-memory.

    Example:
        >>> repo = LotRepository(Path("data/lots.csv"))
        >>> open_lots = repo.list_trades(status="open")
        >>> closed = repo.close_trade(3, datetime(2024, 3, 1), 120.0)
        >>> repo.save()
    """

    def __init__(self, path: Path | None = None, paths: DataPaths = DEFAULT_PATHS):
        self._path = path if path is not None else paths.lots_file
        self._cache: list[Lot] | None = None

    @classmethod
    def from_lots(cls, lots: Iterable[Lot]) -> "LotRepository":
        """In-memory repository seeded with lots (ids assigned if missing)."""
        repo = cls.__new__(cls)
        repo._path = None
        repo._cache = []
        for lot in lots:
            repo.create_trade(lot)
        return repo

    @property
    def path(self) -> Path | None:
        return self._path

    # --- Loading ---

    def get_all(self) -> list[Lot]:
        """Load all lots in file order.

        Raises:
            RepositoryError: If the file is missing, unreadable, lacks
                required columns or contains an invalid lot
        """
        if self._cache is not None:
            return self._cache

        if self._path is None:
            self._cache = []
            return self._cache

        path = self._path
        if not path.exists():
            raise RepositoryError("Lot file not found", str(path))

        try:
            if path.suffix == ".parquet":
                df = pl.read_parquet(path)
            else:
                df = pl.read_csv(path, try_parse_dates=True)
        except Exception as e:
            raise RepositoryError(f"Failed to read lots: {e}", str(path))

        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise RepositoryError(f"Missing required columns: {missing}", str(path))

        lots = []
        next_id = 1
        if "id" in df.columns and df["id"].null_count() < len(df):
            next_id = int(df["id"].max()) + 1

        for i, row in enumerate(df.iter_rows(named=True), start=1):
            lot_id = row.get("id")
            if lot_id is None:
                lot_id = next_id
                next_id += 1
            try:
                lots.append(_row_to_lot(row, int(lot_id)))
            except (InvalidLotError, ValueError, TypeError) as e:
                raise RepositoryError(f"Invalid lot on row {i}: {e}", str(path))

        logger.debug("Loaded %d lots from %s", len(lots), path)
        self._cache = lots
        return self._cache

    def get_by_id(self, lot_id: int) -> Lot:
        """Get a single lot.

        Raises:
            RepositoryError: If no lot has this id
        """
        for lot in self.get_all():
            if lot.id == lot_id:
                return lot
        raise RepositoryError(f"Lot {lot_id} not found", str(self._path) if self._path else None)

    def list_tickers(self) -> list[str]:
        """Sorted list of tickers with any lot."""
        return sorted({lot.ticker for lot in self.get_all()})

    # --- TradeStore ---

    def list_trades(
        self,
        ticker: str | None = None,
        status: LotStatus = "all",
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Lot]:
        """List lots matching the filter, ordered by entry date.

        Args:
            ticker: Restrict to one ticker (case-insensitive)
            status: "open", "closed" or "all"
            start: Earliest entry date (inclusive)
            end: Latest entry date (inclusive)
        """
        if status not in ("all", "open", "closed"):
            raise ValueError(f"status must be 'all', 'open' or 'closed', got: {status}")

        symbol = ticker.strip().upper() if ticker else None
        selected = []
        for lot in self.get_all():
            if symbol and lot.ticker != symbol:
                continue
            if status == "open" and not lot.is_open:
                continue
            if status == "closed" and lot.is_open:
                continue
            if start and lot.entry_date < start:
                continue
            if end and lot.entry_date > end:
                continue
            selected.append(lot)

        return sorted(selected, key=lambda lot: lot.entry_date)

    def create_trade(self, lot: Lot) -> Lot:
        lots = self.get_all()
        next_id = max((x.id for x in lots if x.id is not None), default=0) + 1
        stored = lot if lot.id is not None and all(x.id != lot.id for x in lots) else lot.with_id(next_id)
        lots.append(stored)
        return stored

    def close_trade(self, lot_id: int, exit_date: datetime, exit_price: float) -> Lot:
        lots = self.get_all()
        for i, lot in enumerate(lots):
            if lot.id == lot_id:
                closed = lot.close(exit_date, exit_price)
                lots[i] = closed
                return closed
        raise RepositoryError(f"Lot {lot_id} not found", str(self._path) if self._path else None)

    def delete_trade(self, lot_id: int) -> bool:
        lots = self.get_all()
        for i, lot in enumerate(lots):
            if lot.id == lot_id:
                del lots[i]
                return True
        return False

    # --- Persistence ---

    def to_dataframe(self) -> pl.DataFrame:
        """Current lots as a polars DataFrame."""
        rows = [
            {
                "id": lot.id,
                "ticker": lot.ticker,
                "direction": lot.direction,
                "entry_date": lot.entry_date,
                "entry_price": lot.entry_price,
                "quantity": lot.quantity,
                "fees": lot.fees,
                "exit_date": lot.exit_date,
                "exit_price": lot.exit_price,
            }
            for lot in self.get_all()
        ]
        return pl.DataFrame(rows, schema=SCHEMA)

    def save(self, path: Path | None = None) -> Path:
        """Write lots to `path` (default: the path they were loaded from).

        Raises:
            RepositoryError: If there is no target path or the write fails
        """
        target = path or self._path
        if target is None:
            raise RepositoryError("In-memory repository has no path to save to")

        df = self.to_dataframe()
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            if target.suffix == ".parquet":
                df.write_parquet(target)
            else:
                df.write_csv(target)
        except Exception as e:
            raise RepositoryError(f"Failed to write lots: {e}", str(target))

        logger.debug("Saved %d lots to %s", len(df), target)
        return target

    def clear_cache(self) -> None:
        """Clear cached data (unsaved changes are lost)."""
        if self._path is not None:
            self._cache = None
