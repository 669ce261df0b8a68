"""Entry point for running trade_analytics as a module.

Usage:
    python -m trade_analytics [command] [options]

Commands:
    metrics     Advanced performance metrics
    insights    Rule-based insights
    positions   Open positions with unrealized P&L
    breakdown   Performance by ticker, month or year

Examples:
    python -m trade_analytics metrics data/lots.csv --json
    python -m trade_analytics positions --price AAPL=185.2 --price MSFT=410
    python -m trade_analytics breakdown --by month --year 2024
"""

import sys

from trade_analytics.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
