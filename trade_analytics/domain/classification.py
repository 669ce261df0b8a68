"""Security classification for factor analysis.

Factor analysis splits trades into reference groups (sector, size tier).
The classification source is pluggable: anything implementing
SecurityClassifier can be handed to the engine. The default classifier
uses a fixed ticker table.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal, Mapping

SizeTier = Literal["large", "small"]

# Reference tables for the default heuristic
TECH_TICKERS: frozenset[str] = frozenset({"AAPL", "GOOGL", "MSFT", "AMZN", "NVDA"})
LARGE_CAP_TICKERS: frozenset[str] = frozenset({"AAPL", "GOOGL", "MSFT", "AMZN"})

TECH_SECTOR = "technology"
OTHER_SECTOR = "other"


@dataclass(frozen=True, slots=True)
class SecurityClassification:
    """Sector and size tier for one ticker."""
    sector: str
    size_tier: SizeTier

    @property
    def is_tech(self) -> bool:
        return self.sector == TECH_SECTOR

    @property
    def is_large_cap(self) -> bool:
        return self.size_tier == "large"


class SecurityClassifier(ABC):
    """Maps a ticker to its sector and size tier."""

    @abstractmethod
    def classify(self, ticker: str) -> SecurityClassification:
        """Classify a ticker.

        Args:
            ticker: Instrument symbol (upper-case)

        Returns:
            SecurityClassification for the ticker
        """
        pass


class DefaultSecurityClassifier(SecurityClassifier):
    """Classifier backed by literal ticker tables.

    Example:
        >>> clf = DefaultSecurityClassifier()
        >>> clf.classify("NVDA")
        SecurityClassification(sector='technology', size_tier='small')
    """

    def __init__(
        self,
        tech_tickers: frozenset[str] = TECH_TICKERS,
        large_cap_tickers: frozenset[str] = LARGE_CAP_TICKERS,
    ):
        self._tech = frozenset(t.upper() for t in tech_tickers)
        self._large = frozenset(t.upper() for t in large_cap_tickers)

    def classify(self, ticker: str) -> SecurityClassification:
        symbol = ticker.upper()
        return SecurityClassification(
            sector=TECH_SECTOR if symbol in self._tech else OTHER_SECTOR,
            size_tier="large" if symbol in self._large else "small",
        )


class MappingSecurityClassifier(SecurityClassifier):
    """Classifier over an explicit ticker -> classification mapping.

    Tickers missing from the mapping fall back to `default`.
    """

    def __init__(
        self,
        mapping: Mapping[str, SecurityClassification],
        default: SecurityClassification = SecurityClassification(OTHER_SECTOR, "small"),
    ):
        self._mapping = {k.upper(): v for k, v in mapping.items()}
        self._default = default

    def classify(self, ticker: str) -> SecurityClassification:
        return self._mapping.get(ticker.upper(), self._default)
