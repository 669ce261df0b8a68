"""Basic Metrics: Counts, totals and win/loss averages over closed lots.

A trade wins when profit_loss > 0 and loses when profit_loss < 0;
break-even trades count toward the total only.
"""

from dataclasses import dataclass, asdict
from typing import Sequence

from trade_analytics.domain.lot_metrics import LotView
from trade_analytics.domain.metrics.statistics import mean, safe_divide


@dataclass(frozen=True, slots=True)
class BasicMetrics:
    """Basic performance statistics.

    Attributes:
        total_trades: Number of closed lots
        winning_trades: Lots with profit_loss > 0
        losing_trades: Lots with profit_loss < 0
        total_pnl: Σ profit_loss
        total_pnl_percentage: Σ profit_loss_percentage
        win_rate: winning_trades / total_trades, in [0, 1]
        average_return: Mean profit_loss_percentage
        average_win: Mean profit_loss of winners (0 if none)
        average_loss: Mean profit_loss of losers, negative (0 if none)
        profit_factor: Gross wins / |gross losses| (0 if no losses)
        largest_win: Best single profit_loss (0 if no winners)
        largest_loss: Worst single profit_loss, negative (0 if no losers)
    """
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    total_pnl: float = 0.0
    total_pnl_percentage: float = 0.0
    win_rate: float = 0.0
    average_return: float = 0.0
    average_win: float = 0.0
    average_loss: float = 0.0
    profit_factor: float = 0.0
    largest_win: float = 0.0
    largest_loss: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


def calculate_basic_metrics(trades: Sequence[LotView]) -> BasicMetrics:
    """Calculate basic metrics for closed lots.

    Args:
        trades: Closed lot views

    Returns:
        BasicMetrics (all zero for an empty sequence)
    """
    if not trades:
        return BasicMetrics()

    pnls = [t.profit_loss for t in trades]
    returns = [t.profit_loss_percentage for t in trades]

    wins = [p for p in pnls if p > 0]
    losses = [p for p in pnls if p < 0]

    total = len(trades)
    gross_wins = sum(wins)
    gross_losses = abs(sum(losses))

    return BasicMetrics(
        total_trades=total,
        winning_trades=len(wins),
        losing_trades=len(losses),
        total_pnl=sum(pnls),
        total_pnl_percentage=sum(returns),
        win_rate=len(wins) / total,
        average_return=mean(returns),
        average_win=mean(wins),
        average_loss=mean(losses),
        profit_factor=safe_divide(gross_wins, gross_losses),
        largest_win=max(wins) if wins else 0.0,
        largest_loss=min(losses) if losses else 0.0,
    )
