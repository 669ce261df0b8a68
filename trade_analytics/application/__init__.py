"""Application Layer: Use cases and service orchestration.

This layer contains:
- services/: Business logic orchestration
  - performance.py: Advanced performance metrics
  - insights.py: Threshold-based insights
  - portfolio.py: Open positions and price resolution
  - breakdown.py: Ticker / monthly / yearly tables
"""

from trade_analytics.application.services import (
    PerformanceAnalyticsEngine,
    AdvancedPerformanceMetrics,
    InsightGenerator,
    PerformanceInsight,
    PortfolioService,
    PerformanceBreakdown,
)

__all__ = [
    "PerformanceAnalyticsEngine",
    "AdvancedPerformanceMetrics",
    "InsightGenerator",
    "PerformanceInsight",
    "PortfolioService",
    "PerformanceBreakdown",
]
