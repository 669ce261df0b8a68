"""Factor Analysis: Heuristic decomposition of per-trade returns.

Factors:
- market_timing:     (mean long return - mean short return) / 100
- stock_selection:   (mean return - selection benchmark) / 100
- sector_allocation: (mean tech return - mean non-tech return) / 100
- size_factor:       (mean small-cap return - mean large-cap return) / 100
- momentum_factor:   max(0, 1 - average holding period / horizon)

Sector and size groups come from a SecurityClassifier, so a real
classification source can replace the default ticker table. A group with
no trades contributes a mean of 0.
"""

from dataclasses import dataclass, asdict
from typing import Sequence

from trade_analytics.domain.classification import (
    DefaultSecurityClassifier,
    SecurityClassifier,
)
from trade_analytics.domain.lot_metrics import LotView
from trade_analytics.domain.metrics.statistics import mean

DEFAULT_SELECTION_BENCHMARK = 5.0
DEFAULT_MOMENTUM_HORIZON_DAYS = 30


@dataclass(frozen=True, slots=True)
class FactorAnalysis:
    """Factor contributions (roughly within [-1, 1] for typical returns)."""
    market_timing: float = 0.0
    stock_selection: float = 0.0
    sector_allocation: float = 0.0
    size_factor: float = 0.0
    momentum_factor: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


def _group_spread(
    trades: Sequence[LotView],
    in_group: Sequence[bool],
) -> float:
    """Mean return inside the group minus mean return outside it."""
    inside = [t.profit_loss_percentage for t, flag in zip(trades, in_group) if flag]
    outside = [t.profit_loss_percentage for t, flag in zip(trades, in_group) if not flag]
    return mean(inside) - mean(outside)


def calculate_factor_analysis(
    trades: Sequence[LotView],
    classifier: SecurityClassifier | None = None,
    selection_benchmark: float = DEFAULT_SELECTION_BENCHMARK,
    momentum_horizon_days: int = DEFAULT_MOMENTUM_HORIZON_DAYS,
) -> FactorAnalysis:
    """Decompose closed-lot returns into heuristic factors.

    Args:
        trades: Closed lot views
        classifier: Sector/size source (defaults to DefaultSecurityClassifier)
        selection_benchmark: Reference return for stock selection (percentage points)
        momentum_horizon_days: Holding period at which momentum reaches 0

    Returns:
        FactorAnalysis (all zero for an empty sequence)
    """
    if not trades:
        return FactorAnalysis()

    classifier = classifier or DefaultSecurityClassifier()
    classes = {t.ticker: classifier.classify(t.ticker) for t in trades}

    longs = [t.profit_loss_percentage for t in trades if t.direction == "long"]
    shorts = [t.profit_loss_percentage for t in trades if t.direction == "short"]
    market_timing = (mean(longs) - mean(shorts)) / 100

    all_returns = [t.profit_loss_percentage for t in trades]
    stock_selection = (mean(all_returns) - selection_benchmark) / 100

    is_tech = [classes[t.ticker].is_tech for t in trades]
    sector_allocation = _group_spread(trades, is_tech) / 100

    is_small = [not classes[t.ticker].is_large_cap for t in trades]
    size_factor = _group_spread(trades, is_small) / 100

    avg_holding = mean([t.holding_period_days for t in trades])
    momentum = max(0.0, 1 - avg_holding / momentum_horizon_days)

    return FactorAnalysis(
        market_timing=market_timing,
        stock_selection=stock_selection,
        sector_allocation=sector_allocation,
        size_factor=size_factor,
        momentum_factor=momentum,
    )
