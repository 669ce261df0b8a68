"""Breakdown Service: Closed-trade performance grouped by ticker and period.

Produces polars DataFrames for reporting:
- ticker_performance: one row per ticker, sorted by total P&L (descending)
- monthly_performance: one row per exit month ("YYYY-MM")
- yearly_performance: one row per exit year

Win rates are fractions (0-1) like the engine's; average_pnl is the mean
realized P&L per trade in currency units.
"""

import logging
from pathlib import Path
from typing import Iterable

import polars as pl

from trade_analytics.domain.lot_metrics import LotView, closed_views

logger = logging.getLogger(__name__)

TRADE_SCHEMA = {
    "ticker": pl.Utf8,
    "exit_date": pl.Datetime("us"),
    "profit_loss": pl.Float64,
    "profit_loss_percentage": pl.Float64,
    "entry_value": pl.Float64,
}


def _period_stats() -> list[pl.Expr]:
    """Aggregations shared by every breakdown."""
    return [
        pl.col("profit_loss").sum().alias("total_pnl"),
        pl.len().alias("total_trades"),
        (pl.col("profit_loss") > 0).sum().alias("winning_trades"),
        (pl.col("profit_loss") < 0).sum().alias("losing_trades"),
        (pl.col("profit_loss") > 0).mean().alias("win_rate"),
        pl.col("profit_loss").mean().alias("average_pnl"),
        pl.col("profit_loss_percentage").mean().alias("average_return"),
    ]


class PerformanceBreakdown:
    """Grouped performance tables over closed lots.

    Example:
        >>> breakdown = PerformanceBreakdown(compute_all(repo.get_all()))
        >>> df = breakdown.ticker_performance()
        >>> breakdown.save(df, Path("reports/by_ticker.csv"))
    """

    def __init__(self, views: Iterable[LotView]):
        closed = closed_views(views)
        self._trades = pl.DataFrame(
            [
                {
                    "ticker": v.ticker,
                    "exit_date": v.exit_date,
                    "profit_loss": v.profit_loss,
                    "profit_loss_percentage": v.profit_loss_percentage,
                    "entry_value": v.entry_value,
                }
                for v in closed
            ],
            schema=TRADE_SCHEMA,
        )
        logger.debug("Breakdown over %d closed trades", len(self._trades))

    @property
    def trades(self) -> pl.DataFrame:
        return self._trades

    def ticker_performance(self) -> pl.DataFrame:
        """Per-ticker totals, best and worst trade, and traded volume."""
        return (
            self._trades.group_by("ticker")
            .agg(
                *_period_stats(),
                pl.col("entry_value").sum().alias("total_volume"),
                pl.col("profit_loss").max().alias("best_trade"),
                pl.col("profit_loss").min().alias("worst_trade"),
            )
            .sort(["total_pnl", "ticker"], descending=[True, False])
        )

    def monthly_performance(self, year: int | None = None) -> pl.DataFrame:
        """Per-month totals, optionally restricted to one exit year."""
        df = self._trades
        if year is not None:
            df = df.filter(pl.col("exit_date").dt.year() == year)
        return (
            df.with_columns(
                pl.col("exit_date").dt.strftime("%Y-%m").alias("month"),
                pl.col("exit_date").dt.year().alias("year"),
            )
            .group_by(["month", "year"])
            .agg(*_period_stats())
            .sort("month")
        )

    def yearly_performance(self) -> pl.DataFrame:
        """Per-year totals."""
        return (
            self._trades.with_columns(pl.col("exit_date").dt.year().alias("year"))
            .group_by("year")
            .agg(*_period_stats())
            .sort("year")
        )

    @staticmethod
    def save(df: pl.DataFrame, path: Path) -> Path:
        """Write a breakdown table as CSV or Parquet (by file suffix)."""
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix == ".parquet":
            df.write_parquet(path)
        else:
            df.write_csv(path)
        return path
