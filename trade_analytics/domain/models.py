"""Domain Models: Core trade record.

- Lot: One entry (and optional matching exit) in an instrument
- Direction: Literal type for trade direction

Design Principles:
- Immutable (frozen dataclass); recording an exit returns a new Lot
- Validation in __post_init__, raising InvalidLotError
- Derived values (P&L, holding period) live in lot_metrics, not here
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Literal

from trade_analytics.domain.errors import InvalidLotError

# Type alias for trade direction
Direction = Literal["long", "short"]

DIRECTIONS: tuple[str, ...] = ("long", "short")


def _validate_positive(value: float, field_name: str) -> None:
    """Validate that value is a finite positive number."""
    if not math.isfinite(value) or value <= 0:
        raise InvalidLotError(f"{field_name} must be positive, got: {value}")


def _validate_non_negative(value: float, field_name: str) -> None:
    """Validate that value is a finite non-negative number."""
    if not math.isfinite(value) or value < 0:
        raise InvalidLotError(f"{field_name} must be non-negative, got: {value}")


@dataclass(frozen=True, slots=True)
class Lot:
    """A single entry in an instrument, optionally matched with an exit.

    A lot is either fully open (no exit fields) or fully closed (both
    exit_date and exit_price set). Partial exits are separate lots.

    Attributes:
        ticker: Instrument symbol, upper-cased on construction
        direction: "long" or "short"
        entry_date: Timestamp of entry
        entry_price: Price per unit at entry (must be positive)
        quantity: Number of units (must be positive)
        fees: Total fees for the round trip (must be non-negative)
        exit_date: Timestamp of exit, None while open
        exit_price: Price per unit at exit, None while open
        id: Store-assigned identifier (optional)

    Example:
        >>> lot = Lot(ticker="aapl", direction="long",
        ...           entry_date=datetime(2024, 1, 15), entry_price=100.0,
        ...           quantity=10)
        >>> lot.ticker
        'AAPL'
        >>> lot.entry_value
        1000.0
    """

    ticker: str
    direction: Direction
    entry_date: datetime
    entry_price: float
    quantity: float
    fees: float = 0.0
    exit_date: datetime | None = None
    exit_price: float | None = None
    id: int | None = None

    def __post_init__(self) -> None:
        """Validate all fields after initialization."""
        if not self.ticker or not self.ticker.strip():
            raise InvalidLotError("ticker cannot be empty")
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "ticker", self.ticker.strip().upper())

        if self.direction not in DIRECTIONS:
            raise InvalidLotError(
                f"direction must be 'long' or 'short', got: {self.direction}"
            )
        if self.entry_date is None:
            raise InvalidLotError("entry_date cannot be empty")
        _validate_positive(self.entry_price, "entry_price")
        _validate_positive(self.quantity, "quantity")
        _validate_non_negative(self.fees, "fees")

        if (self.exit_date is None) != (self.exit_price is None):
            raise InvalidLotError(
                "exit_date and exit_price must both be set or both be empty"
            )
        if self.exit_price is not None:
            _validate_positive(self.exit_price, "exit_price")
            if (self.entry_date.tzinfo is None) != (self.exit_date.tzinfo is None):
                raise InvalidLotError(
                    "entry_date and exit_date must both be timezone-aware or both naive"
                )
            if self.exit_date < self.entry_date:
                raise InvalidLotError(
                    f"exit_date {self.exit_date.isoformat()} is before "
                    f"entry_date {self.entry_date.isoformat()}"
                )

    @property
    def is_open(self) -> bool:
        """True while no exit has been recorded."""
        return self.exit_date is None

    @property
    def is_short(self) -> bool:
        return self.direction == "short"

    @property
    def entry_value(self) -> float:
        """Cost of the lot at entry (entry_price * quantity)."""
        return self.entry_price * self.quantity

    def close(self, exit_date: datetime, exit_price: float) -> Lot:
        """Record an exit, returning the closed lot.

        Entry fields are carried over unchanged.

        Raises:
            InvalidLotError: If the lot is already closed or the exit is invalid
        """
        if not self.is_open:
            raise InvalidLotError(f"Lot {self.id} in {self.ticker} is already closed")
        return replace(self, exit_date=exit_date, exit_price=exit_price)

    def with_id(self, lot_id: int) -> Lot:
        return replace(self, id=lot_id)
