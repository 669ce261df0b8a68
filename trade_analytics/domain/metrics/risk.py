"""Risk-Adjusted Returns: Volatility, drawdown and return ratios.

All inputs are the chronologically ordered per-trade return series in
percentage points. The risk-free rate and benchmark return use the same
units (2.0 means 2%).

Formulas:
    sharpe      = (mean - risk_free) / volatility
    sortino     = (mean - risk_free) / downside_deviation
    calmar      = mean / (max_drawdown / 100)
    information = (mean - benchmark) / volatility

Every zero denominator yields 0.
"""

from dataclasses import dataclass, asdict
from typing import Sequence

from trade_analytics.domain.metrics.statistics import (
    downside_deviation,
    max_drawdown,
    mean,
    population_std,
    safe_divide,
    sharpe,
)

DEFAULT_RISK_FREE_RATE = 2.0
DEFAULT_BENCHMARK_RETURN = 10.0


@dataclass(frozen=True, slots=True)
class RiskAdjustedMetrics:
    """Risk and risk-adjusted return statistics.

    Attributes:
        volatility: Population standard deviation of returns
        downside_deviation: Deviation of below-mean returns
        max_drawdown: Worst decline of cumulative return (percentage points, >= 0)
        max_drawdown_percentage: max_drawdown / 100
        sharpe_ratio: Excess return over risk-free per unit volatility
        sortino_ratio: Excess return over risk-free per unit downside deviation
        calmar_ratio: Mean return per unit drawdown
        information_ratio: Excess return over benchmark per unit volatility
    """
    volatility: float = 0.0
    downside_deviation: float = 0.0
    max_drawdown: float = 0.0
    max_drawdown_percentage: float = 0.0
    sharpe_ratio: float = 0.0
    sortino_ratio: float = 0.0
    calmar_ratio: float = 0.0
    information_ratio: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


def calculate_risk_adjusted(
    returns: Sequence[float],
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
    benchmark_return: float = DEFAULT_BENCHMARK_RETURN,
) -> RiskAdjustedMetrics:
    """Calculate risk-adjusted metrics for a return series.

    Args:
        returns: Per-trade returns in percentage points, ordered by entry date
        risk_free_rate: Risk-free rate in percentage points
        benchmark_return: Benchmark return in percentage points

    Returns:
        RiskAdjustedMetrics (all zero for an empty series)

    Example:
        >>> m = calculate_risk_adjusted([5.0, 5.0, 5.0])
        >>> m.volatility, m.sharpe_ratio
        (0.0, 0.0)
    """
    if not returns:
        return RiskAdjustedMetrics()

    mu = mean(returns)
    volatility = population_std(returns)
    downside = downside_deviation(returns)
    drawdown = max_drawdown(returns)
    drawdown_pct = drawdown / 100

    return RiskAdjustedMetrics(
        volatility=volatility,
        downside_deviation=downside,
        max_drawdown=drawdown,
        max_drawdown_percentage=drawdown_pct,
        sharpe_ratio=sharpe(mu, volatility, risk_free_rate),
        sortino_ratio=safe_divide(mu - risk_free_rate, downside),
        calmar_ratio=safe_divide(mu, drawdown_pct),
        information_ratio=safe_divide(mu - benchmark_return, volatility),
    )
