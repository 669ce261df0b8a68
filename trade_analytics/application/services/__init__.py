"""Application Services for Trade Analytics.

Services combine repositories, market data and domain calculations into
use cases.

Available services:
- PerformanceAnalyticsEngine: Advanced metrics over closed lots
- InsightGenerator: Threshold-based insights from those metrics
- PortfolioService: Open positions valued at current prices
- PerformanceBreakdown: Ticker / monthly / yearly tables
"""

from trade_analytics.application.services.performance import (
    PerformanceAnalyticsEngine,
    AdvancedPerformanceMetrics,
)
from trade_analytics.application.services.insights import (
    InsightGenerator,
    PerformanceInsight,
)
from trade_analytics.application.services.portfolio import PortfolioService
from trade_analytics.application.services.breakdown import PerformanceBreakdown

__all__ = [
    "PerformanceAnalyticsEngine",
    "AdvancedPerformanceMetrics",
    "InsightGenerator",
    "PerformanceInsight",
    "PortfolioService",
    "PerformanceBreakdown",
]
