"""Benchmark Comparison: Returns relative to a fixed benchmark.

    excess_return     = mean - benchmark
    tracking_error    = sqrt(mean((r - benchmark)^2))
    information_ratio = excess_return / tracking_error
    beta              = correlation * (volatility / market_volatility)
    alpha             = excess_return - beta * (benchmark - risk_free)

Beta uses an assumed market correlation and volatility rather than a
market return series.
"""

from dataclasses import dataclass, asdict
from typing import Sequence

from trade_analytics.domain.metrics.statistics import mean, population_std, safe_divide

DEFAULT_MARKET_VOLATILITY = 15.0
DEFAULT_MARKET_CORRELATION = 0.7


@dataclass(frozen=True, slots=True)
class BenchmarkComparison:
    """Benchmark-relative statistics (percentage points)."""
    benchmark_return: float = 0.0
    excess_return: float = 0.0
    tracking_error: float = 0.0
    information_ratio: float = 0.0
    beta: float = 0.0
    alpha: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


def calculate_beta(
    returns: Sequence[float],
    market_volatility: float = DEFAULT_MARKET_VOLATILITY,
    market_correlation: float = DEFAULT_MARKET_CORRELATION,
) -> float:
    """Simplified beta: correlation * portfolio vol / market vol."""
    return market_correlation * safe_divide(population_std(returns), market_volatility)


def calculate_benchmark_comparison(
    returns: Sequence[float],
    benchmark_return: float = 10.0,
    risk_free_rate: float = 2.0,
    market_volatility: float = DEFAULT_MARKET_VOLATILITY,
    market_correlation: float = DEFAULT_MARKET_CORRELATION,
) -> BenchmarkComparison:
    """Compare a return series with the benchmark.

    Args:
        returns: Per-trade returns in percentage points
        benchmark_return: Benchmark return in percentage points
        risk_free_rate: Risk-free rate in percentage points
        market_volatility: Assumed market volatility in percentage points
        market_correlation: Assumed correlation with the market

    Returns:
        BenchmarkComparison (all zero for an empty series)
    """
    if not returns:
        return BenchmarkComparison()

    excess = mean(returns) - benchmark_return
    tracking_error = population_std(returns, center=benchmark_return)
    beta = calculate_beta(returns, market_volatility, market_correlation)

    return BenchmarkComparison(
        benchmark_return=benchmark_return,
        excess_return=excess,
        tracking_error=tracking_error,
        information_ratio=safe_divide(excess, tracking_error),
        beta=beta,
        alpha=excess - beta * (benchmark_return - risk_free_rate),
    )
