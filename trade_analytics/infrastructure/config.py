"""Configuration: Centralized paths and settings.

This module provides:
- DataPaths: File locations for lot data and reports
- AnalysisConfig: Constants for the analytics engine and price resolution

Units:
    Rates and returns are percentage points, the same units as
    LotView.profit_loss_percentage (2.0 means 2%).

Directory Structure:
    data/
    └── lots.csv                 # Trade lots (CSV or Parquet)
    reports/                     # Exported breakdown tables
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DataPaths:
    """File paths for data sources.

    Attributes:
        root: Project root directory
    """

    root: Path = Path(".")

    # --- Directories ---

    @property
    def data_dir(self) -> Path:
        """Main data directory."""
        return self.root / "data"

    @property
    def reports_dir(self) -> Path:
        """Exported reports."""
        return self.root / "reports"

    # --- Files ---

    @property
    def lots_file(self) -> Path:
        """Default lot file."""
        return self.data_dir / "lots.csv"

    # --- Helper Methods ---

    def report_path(self, name: str, fmt: str = "csv") -> Path:
        """Path to a named report in the given format."""
        return self.reports_dir / f"{name}.{fmt}"

    def validate(self) -> list[str]:
        """Check which required paths are missing.

        Returns:
            List of missing paths (empty if all exist)
        """
        missing = []
        if not self.data_dir.exists():
            missing.append(str(self.data_dir))
        if not self.lots_file.exists():
            missing.append(str(self.lots_file))
        return missing

    def ensure_dirs(self) -> None:
        """Create all required directories."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.reports_dir.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for the analytics engine.

    Attributes:
        risk_free_rate: Annual risk-free rate (percentage points)
        benchmark_return: Annual benchmark return (percentage points)
        stock_selection_benchmark: Reference return for the selection factor
        market_volatility: Assumed market volatility for beta
        market_correlation: Assumed portfolio/market correlation for beta
        max_rolling_window: Upper bound on rolling window size (trades)
        momentum_horizon_days: Holding period at which momentum reaches 0
        quote_ttl_seconds: Lifetime of cached quotes
        price_batch_size: Concurrent price lookups per batch
        price_batch_delay_seconds: Pause between lookup batches
    """

    risk_free_rate: float = 2.0
    benchmark_return: float = 10.0
    stock_selection_benchmark: float = 5.0
    market_volatility: float = 15.0
    market_correlation: float = 0.7
    max_rolling_window: int = 10
    momentum_horizon_days: int = 30
    quote_ttl_seconds: float = 90.0
    price_batch_size: int = 3
    price_batch_delay_seconds: float = 0.25


# Default instances
DEFAULT_PATHS = DataPaths()
DEFAULT_CONFIG = AnalysisConfig()
