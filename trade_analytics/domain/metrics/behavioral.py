"""Behavioral Metrics: Habits inferred from closed trades.

- average_holding_period: mean holding days
- trade_frequency: trades per 30-day month across the entry-date span
- position_sizing_consistency: max(0, 1 - cv(entry_value))
- risk_tolerance: min(1, mean |loss| / mean win)
- emotional_control: max(0, 1 - min(1, std(returns) / |mean(returns)|))

Scores other than holding period and frequency lie in [0, 1].
"""

from dataclasses import dataclass, asdict
from datetime import timedelta
from typing import Sequence

from trade_analytics.domain.lot_metrics import LotView
from trade_analytics.domain.metrics.statistics import (
    ZERO_TOLERANCE,
    mean,
    population_std,
    safe_divide,
)

DAYS_PER_MONTH = 30

# Score for an all-break-even history, between the insight thresholds
NEUTRAL_EMOTIONAL_CONTROL = 0.5


@dataclass(frozen=True, slots=True)
class BehavioralMetrics:
    """Behavioral trading scores."""
    average_holding_period: float = 0.0
    trade_frequency: float = 0.0
    position_sizing_consistency: float = 0.0
    risk_tolerance: float = 0.0
    emotional_control: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


def _emotional_control(returns: Sequence[float]) -> float:
    mu = mean(returns)
    sigma = population_std(returns)
    if abs(mu) < ZERO_TOLERANCE:
        # Zero mean: no signal without dispersion, erratic with it
        return NEUTRAL_EMOTIONAL_CONTROL if sigma < ZERO_TOLERANCE else 0.0
    return max(0.0, 1 - min(1.0, sigma / abs(mu)))


def calculate_behavioral_metrics(trades: Sequence[LotView]) -> BehavioralMetrics:
    """Calculate behavioral metrics for closed lots.

    Args:
        trades: Closed lot views, ordered by entry date

    Returns:
        BehavioralMetrics (all zero for an empty sequence)
    """
    if not trades:
        return BehavioralMetrics()

    avg_holding = mean([t.holding_period_days for t in trades])

    span_days = (trades[-1].entry_date - trades[0].entry_date) / timedelta(days=1)
    frequency = safe_divide(len(trades), span_days / DAYS_PER_MONTH)

    sizes = [t.entry_value for t in trades]
    sizing = max(0.0, 1 - safe_divide(population_std(sizes), mean(sizes)))

    wins = [t.profit_loss for t in trades if t.profit_loss > 0]
    losses = [abs(t.profit_loss) for t in trades if t.profit_loss < 0]
    tolerance = min(1.0, safe_divide(mean(losses), mean(wins)))

    returns = [t.profit_loss_percentage for t in trades]

    return BehavioralMetrics(
        average_holding_period=avg_holding,
        trade_frequency=frequency,
        position_sizing_consistency=sizing,
        risk_tolerance=tolerance,
        emotional_control=_emotional_control(returns),
    )
