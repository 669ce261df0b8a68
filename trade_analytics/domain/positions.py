"""Positions: Weighted-average aggregation of open lots.

A Position is the aggregate of all currently open lots for one ticker:

    total_quantity      = Σ quantity
    total_cost          = Σ (entry_price * quantity)
    average_entry_price = total_cost / total_quantity
    total_fees          = Σ fees

The average is cost-weighted, and add_lot() gives the same totals as
re-aggregating the full lot set. All lots in a position share one
direction; mixing raises MixedDirectionError.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Sequence

from trade_analytics.domain.errors import InvalidLotError, MixedDirectionError
from trade_analytics.domain.models import Direction, Lot


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True, slots=True)
class Position:
    """Aggregate of the open lots in one ticker.

    Attributes:
        ticker: Instrument symbol
        direction: Shared direction of every constituent lot
        total_quantity: Σ quantity
        total_cost: Σ entry_price * quantity
        total_fees: Σ fees
        lots: Constituent open lots, in the order they were added
    """
    ticker: str
    direction: Direction
    total_quantity: float
    total_cost: float
    total_fees: float
    lots: tuple[Lot, ...] = ()

    @property
    def average_entry_price(self) -> float:
        """Cost-weighted mean entry price."""
        if self.total_quantity <= 0:
            return 0.0
        return self.total_cost / self.total_quantity

    @property
    def is_short(self) -> bool:
        return self.direction == "short"

    @property
    def open_date(self) -> datetime | None:
        """Earliest entry date among constituent lots."""
        if not self.lots:
            return None
        return min(lot.entry_date for lot in self.lots)

    @property
    def lot_count(self) -> int:
        return len(self.lots)

    def to_dict(self) -> dict:
        return {
            "ticker": self.ticker,
            "direction": self.direction,
            "total_quantity": self.total_quantity,
            "total_cost": self.total_cost,
            "average_entry_price": self.average_entry_price,
            "total_fees": self.total_fees,
            "lot_count": self.lot_count,
            "open_date": self.open_date.isoformat() if self.open_date else None,
            "lot_ids": [lot.id for lot in self.lots],
        }


@dataclass(frozen=True, slots=True)
class PositionView:
    """A position valued at an externally supplied current price."""
    position: Position
    current_price: float
    current_value: float
    unrealized_pnl: float
    unrealized_pnl_percentage: float

    @property
    def ticker(self) -> str:
        return self.position.ticker

    def to_dict(self) -> dict:
        d = self.position.to_dict()
        d.update({
            "current_price": self.current_price,
            "current_value": self.current_value,
            "unrealized_pnl": self.unrealized_pnl,
            "unrealized_pnl_percentage": self.unrealized_pnl_percentage,
        })
        return d


# =============================================================================
# Aggregation
# =============================================================================

def _require_open(lot: Lot) -> None:
    if not lot.is_open:
        raise InvalidLotError(
            f"Lot {lot.id} in {lot.ticker} is closed and cannot join a position"
        )


def _build(ticker: str, lots: Sequence[Lot]) -> Position:
    """Aggregate one ticker group from scratch."""
    direction = lots[0].direction
    for lot in lots:
        _require_open(lot)
        if lot.direction != direction:
            raise MixedDirectionError(ticker, direction, lot.direction)

    return Position(
        ticker=ticker,
        direction=direction,
        total_quantity=sum(lot.quantity for lot in lots),
        total_cost=sum(lot.entry_value for lot in lots),
        total_fees=sum(lot.fees for lot in lots),
        lots=tuple(lots),
    )


def aggregate(open_lots: Iterable[Lot]) -> list[Position]:
    """Group open lots by ticker into positions.

    Positions are returned sorted by ticker; lots within a position keep
    their input order.

    Args:
        open_lots: Open lots in any order

    Returns:
        One Position per ticker

    Raises:
        MixedDirectionError: If a ticker has both long and short lots
        InvalidLotError: If any lot is closed
    """
    groups: dict[str, list[Lot]] = {}
    for lot in open_lots:
        groups.setdefault(lot.ticker, []).append(lot)

    return [_build(ticker, groups[ticker]) for ticker in sorted(groups)]


def aggregate_ticker(open_lots: Iterable[Lot], ticker: str) -> Position | None:
    """Aggregate the open lots of a single ticker, None if there are none."""
    ticker = ticker.strip().upper()
    lots = [lot for lot in open_lots if lot.ticker == ticker]
    if not lots:
        return None
    return _build(ticker, lots)


def add_lot(position: Position, new_lot: Lot) -> Position:
    """Fold a newly opened lot into an existing position.

    Returns a new Position; `position` is not modified.

        total_quantity' = total_quantity + new_lot.quantity
        total_cost'     = total_cost + new_lot.entry_value

    Raises:
        MixedDirectionError: If new_lot's direction differs from the position's
        InvalidLotError: If new_lot is closed or belongs to another ticker
    """
    _require_open(new_lot)
    if new_lot.ticker != position.ticker:
        raise InvalidLotError(
            f"Cannot add {new_lot.ticker} lot to {position.ticker} position"
        )
    if new_lot.direction != position.direction:
        raise MixedDirectionError(position.ticker, position.direction, new_lot.direction)

    return Position(
        ticker=position.ticker,
        direction=position.direction,
        total_quantity=position.total_quantity + new_lot.quantity,
        total_cost=position.total_cost + new_lot.entry_value,
        total_fees=position.total_fees + new_lot.fees,
        lots=position.lots + (new_lot,),
    )


def with_current_price(position: Position, current_price: float) -> PositionView:
    """Value a position at a price resolved by the caller.

        current_value = current_price * total_quantity
        unrealized    = current_value - total_cost   (long)
                      = total_cost - current_value   (short)
    """
    current_value = current_price * position.total_quantity
    if position.direction == "long":
        unrealized = current_value - position.total_cost
    else:  # short
        unrealized = position.total_cost - current_value

    pct = unrealized / position.total_cost * 100 if position.total_cost > 0 else 0.0

    return PositionView(
        position=position,
        current_price=current_price,
        current_value=current_value,
        unrealized_pnl=unrealized,
        unrealized_pnl_percentage=pct,
    )
