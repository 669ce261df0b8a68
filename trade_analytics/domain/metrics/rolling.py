"""Rolling Performance: Statistics over sliding windows of trades.

Window size:
    w = min(max_window, floor(n / 3))

A window of w consecutive trades (ordered by entry date) slides across
the series with step 1, giving n - w + 1 periods. Each period reports
its mean return, volatility, Sharpe ratio and max drawdown. With fewer
than three trades w is 0 and no periods are produced.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from trade_analytics.domain.lot_metrics import LotView
from trade_analytics.domain.metrics.statistics import max_drawdown, sharpe

DEFAULT_MAX_WINDOW = 10


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True, slots=True)
class RollingPeriod:
    """Statistics for one window of consecutive trades.

    Attributes:
        start_date: Entry date of the first trade in the window
        end_date: Entry date of the last trade in the window
        period_return: Mean return (percentage points)
        volatility: Population standard deviation of returns
        sharpe_ratio: (period_return - risk_free) / volatility
        max_drawdown: Max drawdown within the window
        trade_count: Number of trades in the window
    """
    start_date: datetime | None
    end_date: datetime | None
    period_return: float
    volatility: float
    sharpe_ratio: float
    max_drawdown: float
    trade_count: int

    def to_dict(self) -> dict:
        return {
            "start_date": self.start_date.isoformat() if self.start_date else "",
            "end_date": self.end_date.isoformat() if self.end_date else "",
            "return": self.period_return,
            "volatility": self.volatility,
            "sharpe_ratio": self.sharpe_ratio,
            "max_drawdown": self.max_drawdown,
            "trade_count": self.trade_count,
        }


EMPTY_PERIOD = RollingPeriod(
    start_date=None,
    end_date=None,
    period_return=0.0,
    volatility=0.0,
    sharpe_ratio=0.0,
    max_drawdown=0.0,
    trade_count=0,
)


@dataclass(frozen=True, slots=True)
class RollingPerformance:
    """All rolling periods plus the best and worst by return."""
    periods: tuple[RollingPeriod, ...] = ()
    best_period: RollingPeriod = EMPTY_PERIOD
    worst_period: RollingPeriod = EMPTY_PERIOD
    window_size: int = 0

    def to_dict(self) -> dict:
        return {
            "window_size": self.window_size,
            "periods": [p.to_dict() for p in self.periods],
            "best_period": self.best_period.to_dict(),
            "worst_period": self.worst_period.to_dict(),
        }


# =============================================================================
# Calculation
# =============================================================================

def rolling_window_size(n_trades: int, max_window: int = DEFAULT_MAX_WINDOW) -> int:
    """Window size for n trades: min(max_window, n // 3)."""
    return min(max_window, n_trades // 3)


def calculate_rolling_performance(
    trades: Sequence[LotView],
    risk_free_rate: float = 2.0,
    max_window: int = DEFAULT_MAX_WINDOW,
) -> RollingPerformance:
    """Calculate rolling-window statistics.

    Args:
        trades: Closed lot views, ordered by entry date
        risk_free_rate: Risk-free rate in percentage points
        max_window: Upper bound on window size

    Returns:
        RollingPerformance with n - w + 1 periods (none when w == 0)
    """
    w = rolling_window_size(len(trades), max_window)
    if w < 1:
        return RollingPerformance()

    returns = np.asarray([t.profit_loss_percentage for t in trades], dtype=float)
    windows = sliding_window_view(returns, w)

    means = windows.mean(axis=1)
    vols = windows.std(axis=1)  # population (ddof=0)

    periods = []
    for i, window in enumerate(windows):
        period_return = float(means[i])
        volatility = float(vols[i])
        periods.append(RollingPeriod(
            start_date=trades[i].entry_date,
            end_date=trades[i + w - 1].entry_date,
            period_return=period_return,
            volatility=volatility,
            sharpe_ratio=sharpe(period_return, volatility, risk_free_rate),
            max_drawdown=max_drawdown(window.tolist()),
            trade_count=w,
        ))

    # argmax/argmin take the first occurrence on ties
    best = periods[int(np.argmax(means))]
    worst = periods[int(np.argmin(means))]

    return RollingPerformance(
        periods=tuple(periods),
        best_period=best,
        worst_period=worst,
        window_size=w,
    )
