"""Trade Analytics: Portfolio trade performance analysis.

A modular system for analyzing a trading history of lots, including
per-lot P&L, position aggregation, risk-adjusted metrics, factor and
behavioral analysis, and rule-based insights.

Architecture:
- domain/: Core business logic (models, calculations)
- infrastructure/: I/O and external dependencies
- application/: Use cases and services
- interfaces/: CLI
"""

__version__ = "0.1.0"

from trade_analytics.domain import (
    Lot,
    LotView,
    Position,
    PositionView,
    InvalidLotError,
    MixedDirectionError,
)
from trade_analytics.infrastructure import (
    DataPaths,
    AnalysisConfig,
    DEFAULT_PATHS,
    DEFAULT_CONFIG,
    RepositoryError,
)

__all__ = [
    # Version
    "__version__",
    # Domain models
    "Lot",
    "LotView",
    "Position",
    "PositionView",
    "InvalidLotError",
    "MixedDirectionError",
    # Infrastructure
    "DataPaths",
    "AnalysisConfig",
    "DEFAULT_PATHS",
    "DEFAULT_CONFIG",
    "RepositoryError",
]
