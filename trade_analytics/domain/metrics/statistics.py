"""Statistical primitives shared by the performance metrics.

All functions accept plain sequences of floats and never return NaN or
Infinity: empty input and zero denominators yield 0.0.

Conventions:
- Standard deviation is the population form (divide by n)
- Returns are per-trade percentage points (5.0 means +5%)
"""

import math
from typing import Sequence

# Denominators below this are float noise from identical inputs
ZERO_TOLERANCE = 1e-12


def safe_divide(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is (near) zero."""
    if abs(denominator) < ZERO_TOLERANCE:
        return 0.0
    result = numerator / denominator
    return result if math.isfinite(result) else 0.0


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0.0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def population_std(values: Sequence[float], center: float | None = None) -> float:
    """Population standard deviation around `center` (default: the mean).

    Example:
        >>> population_std([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0])
        2.0
    """
    if not values:
        return 0.0
    mu = mean(values) if center is None else center
    variance = sum((v - mu) ** 2 for v in values) / len(values)
    return math.sqrt(variance)


def downside_deviation(values: Sequence[float]) -> float:
    """Deviation of the below-mean returns, measured from the full-series mean.

    Only values strictly below the mean contribute; the divisor is their
    count.
    """
    mu = mean(values)
    below = [v for v in values if v < mu]
    return population_std(below, center=mu)


def max_drawdown(returns: Sequence[float]) -> float:
    """Largest peak-to-trough decline of the cumulative return walk.

    Walks the series accumulating returns; the running peak starts at 0.
    The result is always >= 0 and is 0 for a non-decreasing cumulative path.

    Example:
        >>> max_drawdown([10.0, -5.0, -10.0, 20.0])
        15.0
    """
    peak = 0.0
    cumulative = 0.0
    worst = 0.0

    for r in returns:
        cumulative += r
        if cumulative > peak:
            peak = cumulative
        drawdown = peak - cumulative
        if drawdown > worst:
            worst = drawdown

    return worst


def sharpe(mean_return: float, volatility: float, risk_free_rate: float) -> float:
    """(mean - risk_free) / volatility, 0.0 when volatility is zero."""
    return safe_divide(mean_return - risk_free_rate, volatility)
