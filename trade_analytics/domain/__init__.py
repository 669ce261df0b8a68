"""Domain Layer: Core business logic and entities.

This layer contains:
- models.py: Lot (the atomic trade record)
- lot_metrics.py: Per-lot value, P&L and holding period
- positions.py: Weighted-average aggregation of open lots
- classification.py: Sector/size classification for factor analysis
- metrics/: Performance metric families
- errors.py: Domain exceptions
"""

from trade_analytics.domain.errors import (
    TradeAnalyticsError,
    InvalidLotError,
    MixedDirectionError,
)
from trade_analytics.domain.models import Lot, Direction
from trade_analytics.domain.lot_metrics import (
    LotView,
    compute,
    compute_all,
    closed_views,
    realized_profit_loss,
)
from trade_analytics.domain.positions import (
    Position,
    PositionView,
    aggregate,
    aggregate_ticker,
    add_lot,
    with_current_price,
)
from trade_analytics.domain.classification import (
    SecurityClassification,
    SecurityClassifier,
    DefaultSecurityClassifier,
    MappingSecurityClassifier,
)

__all__ = [
    # Errors
    "TradeAnalyticsError",
    "InvalidLotError",
    "MixedDirectionError",
    # Models
    "Lot",
    "Direction",
    # Lot metrics
    "LotView",
    "compute",
    "compute_all",
    "closed_views",
    "realized_profit_loss",
    # Positions
    "Position",
    "PositionView",
    "aggregate",
    "aggregate_ticker",
    "add_lot",
    "with_current_price",
    # Classification
    "SecurityClassification",
    "SecurityClassifier",
    "DefaultSecurityClassifier",
    "MappingSecurityClassifier",
]
