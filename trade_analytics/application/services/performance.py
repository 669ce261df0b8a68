"""Performance Analytics Service: Advanced metrics over closed lots.

Orchestrates the calculation of every metric family:
- Basic statistics (counts, totals, win rate)
- Risk-adjusted returns (volatility, drawdown, Sharpe / Sortino / Calmar)
- Factor analysis (timing, selection, sector, size, momentum)
- Rolling-window performance
- Behavioral metrics
- Benchmark comparison

The engine sorts trades by entry date (stable, so ties keep input order)
before computing anything. An empty trade set yields the all-zero result.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from trade_analytics.domain.classification import (
    DefaultSecurityClassifier,
    SecurityClassifier,
)
from trade_analytics.domain.lot_metrics import LotView, closed_views, compute_all
from trade_analytics.domain.models import Lot
from trade_analytics.domain.metrics import (
    BasicMetrics,
    BehavioralMetrics,
    BenchmarkComparison,
    FactorAnalysis,
    RiskAdjustedMetrics,
    RollingPerformance,
    calculate_basic_metrics,
    calculate_behavioral_metrics,
    calculate_benchmark_comparison,
    calculate_factor_analysis,
    calculate_risk_adjusted,
    calculate_rolling_performance,
)
from trade_analytics.infrastructure.config import AnalysisConfig, DEFAULT_CONFIG

logger = logging.getLogger(__name__)


# =============================================================================
# Result Data Class
# =============================================================================

@dataclass(frozen=True, slots=True)
class AdvancedPerformanceMetrics:
    """Complete performance analysis for a set of closed lots.

    Basic and risk-adjusted fields are exposed flat by to_dict(); the
    other families are nested under their own keys.
    """
    basic: BasicMetrics = field(default_factory=BasicMetrics)
    risk: RiskAdjustedMetrics = field(default_factory=RiskAdjustedMetrics)
    factors: FactorAnalysis = field(default_factory=FactorAnalysis)
    rolling: RollingPerformance = field(default_factory=RollingPerformance)
    behavioral: BehavioralMetrics = field(default_factory=BehavioralMetrics)
    benchmark: BenchmarkComparison = field(default_factory=BenchmarkComparison)

    # --- Shortcuts used by reports and insights ---

    @property
    def total_trades(self) -> int:
        return self.basic.total_trades

    @property
    def win_rate(self) -> float:
        return self.basic.win_rate

    @property
    def total_pnl(self) -> float:
        return self.basic.total_pnl

    @property
    def sharpe_ratio(self) -> float:
        return self.risk.sharpe_ratio

    @property
    def max_drawdown(self) -> float:
        return self.risk.max_drawdown

    def to_dict(self) -> dict:
        """Convert to a JSON-compatible dictionary."""
        return {
            **self.basic.to_dict(),
            **self.risk.to_dict(),
            "factor_analysis": self.factors.to_dict(),
            "rolling_performance": self.rolling.to_dict(),
            "behavioral_metrics": self.behavioral.to_dict(),
            "benchmark_comparison": self.benchmark.to_dict(),
        }


# =============================================================================
# Engine
# =============================================================================

class PerformanceAnalyticsEngine:
    """Computes AdvancedPerformanceMetrics from closed lots.

    Stateless apart from its configuration; one engine can be reused for
    any number of trade sets.

    Example:
        >>> engine = PerformanceAnalyticsEngine()
        >>> metrics = engine.calculate_from_lots(repo.list_trades(status="closed"))
        >>> metrics.sharpe_ratio
        0.84
    """

    def __init__(
        self,
        config: AnalysisConfig = DEFAULT_CONFIG,
        classifier: SecurityClassifier | None = None,
    ):
        """Initialize the engine.

        Args:
            config: Rates and constants for the calculations
            classifier: Sector/size source for factor analysis
                (defaults to the built-in ticker tables)
        """
        self._config = config
        self._classifier = classifier or DefaultSecurityClassifier()

    @property
    def config(self) -> AnalysisConfig:
        return self._config

    def calculate(self, views: Iterable[LotView]) -> AdvancedPerformanceMetrics:
        """Calculate all metrics over lot views.

        Open views are ignored. Trades are ordered by entry date first.

        Args:
            views: Lot views (typically from lot_metrics.compute_all)

        Returns:
            AdvancedPerformanceMetrics (all zero when there are no closed trades)
        """
        trades = sorted(closed_views(views), key=lambda v: v.entry_date)
        if not trades:
            logger.debug("No closed trades; returning empty metrics")
            return AdvancedPerformanceMetrics()

        cfg = self._config
        returns = [t.profit_loss_percentage for t in trades]

        basic = calculate_basic_metrics(trades)
        risk = calculate_risk_adjusted(
            returns,
            risk_free_rate=cfg.risk_free_rate,
            benchmark_return=cfg.benchmark_return,
        )
        factors = calculate_factor_analysis(
            trades,
            classifier=self._classifier,
            selection_benchmark=cfg.stock_selection_benchmark,
            momentum_horizon_days=cfg.momentum_horizon_days,
        )
        rolling = calculate_rolling_performance(
            trades,
            risk_free_rate=cfg.risk_free_rate,
            max_window=cfg.max_rolling_window,
        )
        behavioral = calculate_behavioral_metrics(trades)
        benchmark = calculate_benchmark_comparison(
            returns,
            benchmark_return=cfg.benchmark_return,
            risk_free_rate=cfg.risk_free_rate,
            market_volatility=cfg.market_volatility,
            market_correlation=cfg.market_correlation,
        )

        logger.debug(
            "Computed metrics for %d trades (rolling window %d, %d periods)",
            len(trades), rolling.window_size, len(rolling.periods),
        )

        return AdvancedPerformanceMetrics(
            basic=basic,
            risk=risk,
            factors=factors,
            rolling=rolling,
            behavioral=behavioral,
            benchmark=benchmark,
        )

    def calculate_from_lots(self, lots: Sequence[Lot]) -> AdvancedPerformanceMetrics:
        """Compute lot views and calculate metrics over the closed ones."""
        return self.calculate(compute_all(lot for lot in lots if not lot.is_open))
