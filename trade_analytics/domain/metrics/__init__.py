"""Performance metrics over closed lots.

This package provides the metric families used by the analytics engine:

- Basic: counts, totals, win rate, average win/loss
- Risk: volatility, drawdown, Sharpe / Sortino / Calmar / information ratios
- Factors: timing, selection, sector, size and momentum contributions
- Rolling: sliding-window statistics
- Behavioral: holding period, frequency, sizing, tolerance, emotional control
- Benchmark: excess return, tracking error, beta, alpha

Usage:
    from trade_analytics.domain.metrics import (
        calculate_basic_metrics,
        calculate_risk_adjusted,
        calculate_rolling_performance,
    )
"""

# Statistics
from trade_analytics.domain.metrics.statistics import (
    ZERO_TOLERANCE,
    safe_divide,
    mean,
    population_std,
    downside_deviation,
    max_drawdown,
    sharpe,
)

# Basic
from trade_analytics.domain.metrics.basic import (
    BasicMetrics,
    calculate_basic_metrics,
)

# Risk
from trade_analytics.domain.metrics.risk import (
    RiskAdjustedMetrics,
    calculate_risk_adjusted,
)

# Factors
from trade_analytics.domain.metrics.factors import (
    FactorAnalysis,
    calculate_factor_analysis,
)

# Rolling
from trade_analytics.domain.metrics.rolling import (
    RollingPeriod,
    RollingPerformance,
    EMPTY_PERIOD,
    rolling_window_size,
    calculate_rolling_performance,
)

# Behavioral
from trade_analytics.domain.metrics.behavioral import (
    BehavioralMetrics,
    calculate_behavioral_metrics,
)

# Benchmark
from trade_analytics.domain.metrics.benchmark import (
    BenchmarkComparison,
    calculate_beta,
    calculate_benchmark_comparison,
)

__all__ = [
    # Statistics
    "ZERO_TOLERANCE",
    "safe_divide",
    "mean",
    "population_std",
    "downside_deviation",
    "max_drawdown",
    "sharpe",
    # Basic
    "BasicMetrics",
    "calculate_basic_metrics",
    # Risk
    "RiskAdjustedMetrics",
    "calculate_risk_adjusted",
    # Factors
    "FactorAnalysis",
    "calculate_factor_analysis",
    # Rolling
    "RollingPeriod",
    "RollingPerformance",
    "EMPTY_PERIOD",
    "rolling_window_size",
    "calculate_rolling_performance",
    # Behavioral
    "BehavioralMetrics",
    "calculate_behavioral_metrics",
    # Benchmark
    "BenchmarkComparison",
    "calculate_beta",
    "calculate_benchmark_comparison",
]
