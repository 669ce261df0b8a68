"""Command Line Interface for Trade Analytics.

Provides CLI access to analytics functions:
- metrics: Advanced performance metrics for closed lots
- insights: Rule-based insights from those metrics
- positions: Open positions with unrealized P&L
- breakdown: Performance by ticker, month or year

Usage:
    python -m trade_analytics metrics [LOTS] [--json]
    python -m trade_analytics insights [LOTS]
    python -m trade_analytics positions [LOTS] [--price AAPL=185.2 ...]
    python -m trade_analytics breakdown [LOTS] [--by ticker|month|year] [--year Y] [--output FILE]
"""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from trade_analytics import __version__
from trade_analytics.domain import TradeAnalyticsError, compute_all
from trade_analytics.infrastructure import (
    DEFAULT_CONFIG,
    DEFAULT_PATHS,
    LotRepository,
    RepositoryError,
    StaticPriceProvider,
)
from trade_analytics.application import (
    InsightGenerator,
    PerformanceAnalyticsEngine,
    PerformanceBreakdown,
    PortfolioService,
)

logger = logging.getLogger(__name__)


def _parse_price(value: str) -> tuple[str, float]:
    """Parse TICKER=PRICE."""
    ticker, sep, price = value.partition("=")
    if not sep or not ticker.strip():
        raise argparse.ArgumentTypeError(f"expected TICKER=PRICE, got: {value}")
    try:
        return ticker.strip().upper(), float(price)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid price in: {value}")


def _load(args: argparse.Namespace) -> LotRepository:
    repo = LotRepository(Path(args.lots))
    repo.get_all()
    return repo


def cmd_metrics(args: argparse.Namespace) -> int:
    """Show advanced performance metrics."""
    repo = _load(args)
    metrics = PerformanceAnalyticsEngine().calculate_from_lots(repo.list_trades(status="closed"))

    if args.json:
        print(json.dumps(metrics.to_dict(), indent=2))
        return 0

    basic, risk = metrics.basic, metrics.risk
    print(f"Trade Analytics v{__version__}")
    print("=" * 50)
    print()

    print("[Performance]")
    print(f"  Closed trades:   {basic.total_trades:,}")
    print(f"  Winning/Losing:  {basic.winning_trades} / {basic.losing_trades}")
    print(f"  Win rate:        {basic.win_rate * 100:.1f}%")
    print(f"  Total P&L:       {basic.total_pnl:+,.2f}")
    print(f"  Average return:  {basic.average_return:+.2f}%")
    print(f"  Profit factor:   {basic.profit_factor:.2f}")
    print()

    print("[Risk]")
    print(f"  Volatility:      {risk.volatility:.2f}")
    print(f"  Max drawdown:    {risk.max_drawdown:.2f}")
    print(f"  Sharpe ratio:    {risk.sharpe_ratio:.2f}")
    print(f"  Sortino ratio:   {risk.sortino_ratio:.2f}")
    print(f"  Calmar ratio:    {risk.calmar_ratio:.2f}")
    print()

    print("[Benchmark]")
    bench = metrics.benchmark
    print(f"  Excess return:   {bench.excess_return:+.2f}")
    print(f"  Beta / Alpha:    {bench.beta:.2f} / {bench.alpha:+.2f}")

    rolling = metrics.rolling
    if rolling.periods:
        print()
        print(f"[Rolling, window {rolling.window_size}]")
        print(f"  Best period:     {rolling.best_period.period_return:+.2f}%")
        print(f"  Worst period:    {rolling.worst_period.period_return:+.2f}%")

    return 0


def cmd_insights(args: argparse.Namespace) -> int:
    """Show generated insights."""
    repo = _load(args)
    metrics = PerformanceAnalyticsEngine().calculate_from_lots(repo.list_trades(status="closed"))
    insights = InsightGenerator().generate(metrics)

    if not insights:
        print("No insights for this trade history")
        return 0

    for insight in insights:
        print(f"[{insight.impact}] {insight.title} ({insight.confidence}%)")
        print(f"  {insight.description}")
        if insight.recommendation:
            print(f"  -> {insight.recommendation}")
        print()

    return 0


def cmd_positions(args: argparse.Namespace) -> int:
    """Show open positions."""
    repo = _load(args)
    prices = dict(args.price or [])
    # Static prices need no rate limiting
    config = replace(DEFAULT_CONFIG, price_batch_delay_seconds=0.0)
    service = PortfolioService(repo, StaticPriceProvider(prices), config=config)
    views = service.valued_positions()

    if not views:
        print("No open positions")
        return 0

    print(f"{'Ticker':<8} {'Side':<6} {'Qty':>10} {'Avg Cost':>10} {'Price':>10} {'Unrealized':>12} {'%':>8}")
    print("-" * 70)
    for v in views:
        p = v.position
        print(f"{p.ticker:<8} {p.direction:<6} {p.total_quantity:>10,.2f} "
              f"{p.average_entry_price:>10.2f} {v.current_price:>10.2f} "
              f"{v.unrealized_pnl:>+12,.2f} {v.unrealized_pnl_percentage:>+7.2f}%")

    return 0


def cmd_breakdown(args: argparse.Namespace) -> int:
    """Show or export a performance breakdown."""
    repo = _load(args)
    breakdown = PerformanceBreakdown(compute_all(repo.list_trades(status="closed")))

    if args.by == "ticker":
        df = breakdown.ticker_performance()
    elif args.by == "month":
        df = breakdown.monthly_performance(year=args.year)
    else:
        df = breakdown.yearly_performance()

    if args.output:
        saved = breakdown.save(df, Path(args.output))
        print(f"Saved: {saved}")
        return 0

    if len(df) == 0:
        print("No closed trades")
        return 0

    print(df)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        prog="trade_analytics",
        description="Trade Analytics - Portfolio Performance Analysis",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    def add_lots_arg(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "lots",
            nargs="?",
            default=str(DEFAULT_PATHS.lots_file),
            help=f"Lot file, CSV or Parquet (default: {DEFAULT_PATHS.lots_file})",
        )

    # metrics command
    metrics_parser = subparsers.add_parser("metrics", help="Show performance metrics")
    add_lots_arg(metrics_parser)
    metrics_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full metrics as JSON",
    )

    # insights command
    insights_parser = subparsers.add_parser("insights", help="Show insights")
    add_lots_arg(insights_parser)

    # positions command
    positions_parser = subparsers.add_parser("positions", help="Show open positions")
    add_lots_arg(positions_parser)
    positions_parser.add_argument(
        "--price",
        type=_parse_price,
        action="append",
        metavar="TICKER=PRICE",
        help="Current price for a ticker (repeatable); unpriced tickers use average cost",
    )

    # breakdown command
    breakdown_parser = subparsers.add_parser("breakdown", help="Show performance breakdown")
    add_lots_arg(breakdown_parser)
    breakdown_parser.add_argument(
        "--by",
        choices=["ticker", "month", "year"],
        default="ticker",
        help="Grouping (default: ticker)",
    )
    breakdown_parser.add_argument(
        "--year",
        type=int,
        help="Restrict the monthly breakdown to one exit year",
    )
    breakdown_parser.add_argument(
        "-o", "--output",
        help="Write the table to FILE (.csv or .parquet)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "metrics": cmd_metrics,
        "insights": cmd_insights,
        "positions": cmd_positions,
        "breakdown": cmd_breakdown,
    }

    try:
        return commands[args.command](args)
    except (RepositoryError, TradeAnalyticsError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
