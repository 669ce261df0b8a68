"""Unit tests for domain/metrics/ module.

Uses a three-trade fixture whose values are easy to verify by hand:

    AAPL long   entry 01-01  exit 01-11   +10%   P&L +100
    XOM  long   entry 01-05  exit 01-25    -5%   P&L  -50
    NVDA short  entry 01-10  exit 01-16    +4%   P&L  +40

Returns in entry order: [10, -5, 4], mean 3, population variance 38.
"""

import math
import random
from datetime import datetime, timedelta

import pytest

from trade_analytics.domain.classification import (
    DefaultSecurityClassifier,
    MappingSecurityClassifier,
    SecurityClassification,
)
from trade_analytics.domain.lot_metrics import compute_all
from trade_analytics.domain.models import Lot
from trade_analytics.domain.metrics import (
    EMPTY_PERIOD,
    calculate_basic_metrics,
    calculate_behavioral_metrics,
    calculate_benchmark_comparison,
    calculate_beta,
    calculate_factor_analysis,
    calculate_risk_adjusted,
    calculate_rolling_performance,
    downside_deviation,
    max_drawdown,
    mean,
    population_std,
    rolling_window_size,
    safe_divide,
    sharpe,
)

VOL = math.sqrt(38)


@pytest.fixture
def trades():
    return compute_all([
        Lot("AAPL", "long", datetime(2024, 1, 1), 100.0, 10,
            exit_date=datetime(2024, 1, 11), exit_price=110.0),
        Lot("XOM", "long", datetime(2024, 1, 5), 100.0, 10,
            exit_date=datetime(2024, 1, 25), exit_price=95.0),
        Lot("NVDA", "short", datetime(2024, 1, 10), 100.0, 10,
            exit_date=datetime(2024, 1, 16), exit_price=96.0),
    ])


def views_with_returns(returns):
    """Closed long lots (entry 100, qty 1, no fees) with the given returns, one per day."""
    start = datetime(2024, 1, 1)
    return compute_all([
        Lot("XYZ", "long", start + timedelta(days=i), 100.0, 1,
            exit_date=start + timedelta(days=i + 1), exit_price=100.0 + r)
        for i, r in enumerate(returns)
    ])


# =============================================================================
# Statistics
# =============================================================================

class TestStatistics:
    """Tests for statistical primitives."""

    def test_safe_divide(self):
        """Zero denominators yield 0, never inf or NaN."""
        assert safe_divide(1.0, 4.0) == 0.25
        assert safe_divide(1.0, 0.0) == 0.0
        assert safe_divide(0.0, 0.0) == 0.0
        assert safe_divide(1.0, 1e-15) == 0.0

    def test_mean_empty(self):
        assert mean([]) == 0.0

    def test_population_std(self):
        """Population standard deviation divides by n."""
        assert population_std([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]) == pytest.approx(2.0)
        assert population_std([]) == 0.0
        assert population_std([5.0]) == 0.0

    def test_downside_deviation(self):
        """Only below-mean values count, measured from the full mean."""
        assert downside_deviation([10.0, -5.0, 4.0]) == pytest.approx(8.0)
        assert downside_deviation([3.0, 3.0]) == 0.0

    def test_max_drawdown(self):
        """Peak-to-trough decline of the cumulative walk."""
        assert max_drawdown([10.0, -5.0, -10.0, 20.0]) == pytest.approx(15.0)

    def test_max_drawdown_monotonic(self):
        """Drawdown is 0 when increasing and the full loss when decreasing."""
        assert max_drawdown([1.0, 2.0, 3.0]) == 0.0
        assert max_drawdown([-1.0, -2.0, -3.0]) == pytest.approx(6.0)
        assert max_drawdown([]) == 0.0

    def test_sharpe(self):
        """Excess return over volatility, 0 when volatility is zero."""
        assert sharpe(3.0, 2.0, 1.0) == pytest.approx(1.0)
        assert sharpe(3.0, 0.0, 1.0) == 0.0

    def test_max_drawdown_non_negative(self):
        """Drawdown is never negative."""
        rng = random.Random(3)
        for _ in range(100):
            series = [rng.uniform(-20, 20) for _ in range(rng.randint(0, 30))]
            assert max_drawdown(series) >= 0.0


# =============================================================================
# Basic Metrics
# =============================================================================

class TestBasicMetrics:
    """Tests for calculate_basic_metrics."""

    def test_values(self, trades):
        m = calculate_basic_metrics(trades)

        assert m.total_trades == 3
        assert m.winning_trades == 2
        assert m.losing_trades == 1
        assert m.total_pnl == pytest.approx(90.0)
        assert m.total_pnl_percentage == pytest.approx(9.0)
        assert m.win_rate == pytest.approx(2 / 3)
        assert m.average_return == pytest.approx(3.0)
        assert m.average_win == pytest.approx(70.0)
        assert m.average_loss == pytest.approx(-50.0)
        assert m.profit_factor == pytest.approx(2.8)
        assert m.largest_win == pytest.approx(100.0)
        assert m.largest_loss == pytest.approx(-50.0)

    def test_empty(self):
        """Empty input returns all zeros."""
        m = calculate_basic_metrics([])
        assert m.total_trades == 0
        assert m.win_rate == 0.0
        assert m.profit_factor == 0.0

    def test_all_winning(self):
        """All winners: win rate 1, no losses, profit factor 0."""
        m = calculate_basic_metrics(views_with_returns([1.0, 2.0, 3.0]))
        assert m.win_rate == 1.0
        assert m.average_loss == 0.0
        assert m.profit_factor == 0.0

    def test_all_losing(self):
        """All losers: win rate exactly 0."""
        m = calculate_basic_metrics(views_with_returns([-1.0, -2.0]))
        assert m.win_rate == 0.0
        assert m.average_win == 0.0

    def test_breakeven_trade(self):
        """A zero-P&L trade is neither a win nor a loss."""
        m = calculate_basic_metrics(views_with_returns([0.0, 1.0]))
        assert m.winning_trades == 1
        assert m.losing_trades == 0


# =============================================================================
# Risk-Adjusted Metrics
# =============================================================================

class TestRiskAdjusted:
    """Tests for calculate_risk_adjusted."""

    def test_values(self):
        m = calculate_risk_adjusted([10.0, -5.0, 4.0])

        assert m.volatility == pytest.approx(VOL)
        assert m.downside_deviation == pytest.approx(8.0)
        assert m.max_drawdown == pytest.approx(5.0)
        assert m.max_drawdown_percentage == pytest.approx(0.05)
        assert m.sharpe_ratio == pytest.approx((3.0 - 2.0) / VOL)
        assert m.sortino_ratio == pytest.approx(0.125)
        assert m.calmar_ratio == pytest.approx(60.0)
        assert m.information_ratio == pytest.approx((3.0 - 10.0) / VOL)

    def test_custom_rates(self):
        """Rates are percentage points like the returns."""
        m = calculate_risk_adjusted([10.0, -5.0, 4.0], risk_free_rate=0.0, benchmark_return=3.0)
        assert m.sharpe_ratio == pytest.approx(3.0 / VOL)
        assert m.information_ratio == pytest.approx(0.0)

    def test_single_trade(self):
        """A single trade has zero volatility and zero ratios."""
        m = calculate_risk_adjusted([7.0])
        assert m.volatility == 0.0
        assert m.sharpe_ratio == 0.0
        assert m.sortino_ratio == 0.0
        assert m.calmar_ratio == 0.0

    def test_identical_returns(self):
        """Identical returns give Sharpe 0, not NaN."""
        m = calculate_risk_adjusted([0.1] * 7)
        assert m.sharpe_ratio == 0.0
        assert m.information_ratio == 0.0
        assert not math.isnan(m.sharpe_ratio)

    def test_empty(self):
        m = calculate_risk_adjusted([])
        assert m.volatility == 0.0
        assert m.max_drawdown == 0.0


# =============================================================================
# Factor Analysis
# =============================================================================

class TestFactorAnalysis:
    """Tests for calculate_factor_analysis."""

    def test_values(self, trades):
        f = calculate_factor_analysis(trades)

        assert f.market_timing == pytest.approx(-0.015)
        assert f.stock_selection == pytest.approx(-0.02)
        assert f.sector_allocation == pytest.approx(0.12)
        assert f.size_factor == pytest.approx(-0.105)
        assert f.momentum_factor == pytest.approx(0.6)

    def test_custom_classifier(self, trades):
        """A substituted classifier changes the sector split."""
        classifier = MappingSecurityClassifier({
            "XOM": SecurityClassification("technology", "large"),
        })
        f = calculate_factor_analysis(trades, classifier=classifier)

        # tech: XOM (-5); other: AAPL, NVDA (mean 7)
        assert f.sector_allocation == pytest.approx(-0.12)
        # small: AAPL, NVDA (mean 7); large: XOM (-5)
        assert f.size_factor == pytest.approx(0.12)

    def test_momentum_floor(self):
        """Momentum never goes below 0 for long holding periods."""
        trades = compute_all([
            Lot("XYZ", "long", datetime(2024, 1, 1), 100.0, 1,
                exit_date=datetime(2024, 4, 1), exit_price=101.0),
        ])
        assert calculate_factor_analysis(trades).momentum_factor == 0.0

    def test_empty(self):
        f = calculate_factor_analysis([])
        assert f.market_timing == 0.0
        assert f.momentum_factor == 0.0

    def test_default_classifier(self):
        """Default table: NVDA is tech but not large-cap."""
        c = DefaultSecurityClassifier().classify("nvda")
        assert c.is_tech
        assert not c.is_large_cap
        assert not DefaultSecurityClassifier().classify("XOM").is_tech


# =============================================================================
# Rolling Performance
# =============================================================================

class TestRollingPerformance:
    """Tests for calculate_rolling_performance."""

    @pytest.mark.parametrize("n, expected", [
        (0, 0), (2, 0), (3, 1), (6, 2), (29, 9), (30, 10), (100, 10),
    ])
    def test_window_size(self, n, expected):
        """w = min(10, floor(n / 3))."""
        assert rolling_window_size(n) == expected

    def test_periods(self):
        """n - w + 1 windows of mean return."""
        r = calculate_rolling_performance(views_with_returns([1.0, 2.0, 3.0, 4.0, 5.0, 6.0]))

        assert r.window_size == 2
        assert len(r.periods) == 5
        assert [p.period_return for p in r.periods] == pytest.approx([1.5, 2.5, 3.5, 4.5, 5.5])
        assert all(p.trade_count == 2 for p in r.periods)
        assert r.periods[0].volatility == pytest.approx(0.5)
        assert r.periods[0].sharpe_ratio == pytest.approx((1.5 - 2.0) / 0.5)
        assert r.best_period.period_return == pytest.approx(5.5)
        assert r.worst_period.period_return == pytest.approx(1.5)
        assert r.periods[0].start_date == datetime(2024, 1, 1)
        assert r.periods[0].end_date == datetime(2024, 1, 2)

    def test_window_drawdown(self):
        """Each window reports its own drawdown."""
        r = calculate_rolling_performance(views_with_returns([10.0, -5.0, 4.0]))

        assert r.window_size == 1
        assert [p.max_drawdown for p in r.periods] == pytest.approx([0.0, 5.0, 0.0])
        assert r.best_period.period_return == pytest.approx(10.0)
        assert r.worst_period.period_return == pytest.approx(-5.0)

    def test_too_few_trades(self):
        """Fewer than three trades: no periods, empty best/worst."""
        r = calculate_rolling_performance(views_with_returns([1.0, 2.0]))
        assert r.periods == ()
        assert r.best_period == EMPTY_PERIOD
        assert r.worst_period == EMPTY_PERIOD

    def test_best_not_below_worst(self):
        """best.return >= worst.return and period count matches for many sizes."""
        rng = random.Random(11)
        for n in range(3, 45):
            r = calculate_rolling_performance(
                views_with_returns([rng.uniform(-30, 30) for _ in range(n)])
            )
            w = rolling_window_size(n)
            assert len(r.periods) == max(0, n - w + 1)
            assert r.best_period.period_return >= r.worst_period.period_return

    def test_to_dict(self):
        r = calculate_rolling_performance(views_with_returns([1.0, 2.0, 3.0]))
        d = r.to_dict()
        assert d["window_size"] == 1
        assert d["best_period"]["return"] == pytest.approx(3.0)
        assert len(d["periods"]) == 3


# =============================================================================
# Behavioral Metrics
# =============================================================================

class TestBehavioralMetrics:
    """Tests for calculate_behavioral_metrics."""

    def test_values(self, trades):
        b = calculate_behavioral_metrics(trades)

        assert b.average_holding_period == pytest.approx(12.0)
        # 3 trades over 9 days of entries
        assert b.trade_frequency == pytest.approx(10.0)
        assert b.position_sizing_consistency == pytest.approx(1.0)
        assert b.risk_tolerance == pytest.approx(50.0 / 70.0)
        assert b.emotional_control == 0.0

    def test_steady_returns(self):
        """Low dispersion relative to the mean means high emotional control."""
        b = calculate_behavioral_metrics(views_with_returns([5.0, 5.0, 5.0]))
        assert b.emotional_control == pytest.approx(1.0)

    def test_all_break_even(self):
        """Zero returns with no dispersion score neutral, between the insight thresholds."""
        b = calculate_behavioral_metrics(views_with_returns([0.0, 0.0, 0.0]))
        assert b.emotional_control == pytest.approx(0.5)

    def test_zero_mean_with_dispersion(self):
        """Zero mean return with dispersion scores 0."""
        b = calculate_behavioral_metrics(views_with_returns([5.0, -5.0]))
        assert b.emotional_control == 0.0

    def test_single_day_span(self):
        """Trades entered on one day have frequency 0, not infinity."""
        trades = compute_all([
            Lot("A", "long", datetime(2024, 1, 1), 100.0, 1,
                exit_date=datetime(2024, 1, 2), exit_price=101.0),
        ])
        assert calculate_behavioral_metrics(trades).trade_frequency == 0.0

    def test_risk_tolerance_capped(self):
        """Losses larger than wins cap tolerance at 1."""
        b = calculate_behavioral_metrics(views_with_returns([1.0, -10.0]))
        assert b.risk_tolerance == 1.0

    def test_empty(self):
        b = calculate_behavioral_metrics([])
        assert b.average_holding_period == 0.0
        assert b.emotional_control == 0.0


# =============================================================================
# Benchmark Comparison
# =============================================================================

class TestBenchmarkComparison:
    """Tests for calculate_benchmark_comparison."""

    def test_values(self):
        b = calculate_benchmark_comparison([10.0, -5.0, 4.0])
        beta = 0.7 * VOL / 15

        assert b.benchmark_return == 10.0
        assert b.excess_return == pytest.approx(-7.0)
        assert b.tracking_error == pytest.approx(math.sqrt(87.0))
        assert b.information_ratio == pytest.approx(-7.0 / math.sqrt(87.0))
        assert b.beta == pytest.approx(beta)
        assert b.alpha == pytest.approx(-7.0 - beta * 8.0)

    def test_beta(self):
        assert calculate_beta([10.0, -5.0, 4.0], market_volatility=15, market_correlation=1.0) == pytest.approx(VOL / 15)
        assert calculate_beta([3.0, 3.0]) == 0.0

    def test_empty(self):
        b = calculate_benchmark_comparison([])
        assert b.benchmark_return == 0.0
        assert b.tracking_error == 0.0
