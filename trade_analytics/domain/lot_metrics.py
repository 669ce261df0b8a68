"""Lot Metrics: Per-lot derived values.

For a closed lot:
    gross_delta = exit_price - entry_price      (long)
                = entry_price - exit_price      (short)
    profit_loss = gross_delta * quantity - fees
    profit_loss_percentage = profit_loss / entry_value * 100
    holding_period_days = ceil((exit_date - entry_date) / 1 day)

For an open lot profit_loss and profit_loss_percentage are None (undefined,
not zero). The holding period runs up to `now` and is for display only;
realized-performance math never reads it.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable

from trade_analytics.domain.errors import InvalidLotError
from trade_analytics.domain.models import Lot

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True, slots=True)
class LotView:
    """A lot together with its derived values.

    Attributes:
        lot: The source lot (source of truth)
        entry_value: entry_price * quantity
        exit_value: exit_price * quantity, None while open
        profit_loss: Realized P&L net of fees, None while open
        profit_loss_percentage: P&L as a percentage of entry value, None while open
        holding_period_days: Whole days held (rounded up)
    """
    lot: Lot
    entry_value: float
    exit_value: float | None
    profit_loss: float | None
    profit_loss_percentage: float | None
    holding_period_days: int

    @property
    def is_open(self) -> bool:
        return self.lot.is_open

    @property
    def ticker(self) -> str:
        return self.lot.ticker

    @property
    def direction(self) -> str:
        return self.lot.direction

    @property
    def entry_date(self) -> datetime:
        return self.lot.entry_date

    @property
    def exit_date(self) -> datetime | None:
        return self.lot.exit_date

    def to_dict(self) -> dict:
        """Convert to a JSON-compatible dictionary."""
        lot = self.lot
        return {
            "id": lot.id,
            "ticker": lot.ticker,
            "direction": lot.direction,
            "entry_date": lot.entry_date.isoformat(),
            "entry_price": lot.entry_price,
            "quantity": lot.quantity,
            "fees": lot.fees,
            "exit_date": lot.exit_date.isoformat() if lot.exit_date else None,
            "exit_price": lot.exit_price,
            "entry_value": self.entry_value,
            "exit_value": self.exit_value,
            "profit_loss": self.profit_loss,
            "profit_loss_percentage": self.profit_loss_percentage,
            "holding_period_days": self.holding_period_days,
            "is_open": self.is_open,
        }


def holding_period_days(start: datetime, end: datetime) -> int:
    """Whole days between two timestamps, rounded up."""
    return math.ceil((end - start) / ONE_DAY)


def realized_profit_loss(lot: Lot) -> float:
    """Realized P&L of a closed lot, net of fees.

    Raises:
        InvalidLotError: If the lot is still open
    """
    if lot.exit_price is None:
        raise InvalidLotError(f"Lot in {lot.ticker} has no exit; P&L is undefined")

    if lot.direction == "long":
        gross_delta = lot.exit_price - lot.entry_price
    else:  # short
        gross_delta = lot.entry_price - lot.exit_price
    return gross_delta * lot.quantity - lot.fees


def compute(lot: Lot, now: datetime | None = None) -> LotView:
    """Derive value, P&L and holding period for a lot.

    Pure function; `lot` is not modified.

    Args:
        lot: Lot to evaluate. Lot construction enforces the field
             invariants, so malformed input surfaces as InvalidLotError
             before this point.
        now: Reference time for the open-lot holding period
             (defaults to the current time in the entry's timezone)

    Returns:
        LotView with all derived fields

    Example:
        >>> lot = Lot("AAPL", "long", datetime(2024, 1, 1), 100.0, 10,
        ...           fees=10.0, exit_date=datetime(2024, 1, 11), exit_price=120.0)
        >>> view = compute(lot)
        >>> view.profit_loss, view.profit_loss_percentage
        (190.0, 19.0)
    """
    entry_value = lot.entry_value

    if lot.is_open:
        reference = now if now is not None else datetime.now(lot.entry_date.tzinfo)
        return LotView(
            lot=lot,
            entry_value=entry_value,
            exit_value=None,
            profit_loss=None,
            profit_loss_percentage=None,
            holding_period_days=max(0, holding_period_days(lot.entry_date, reference)),
        )

    profit_loss = realized_profit_loss(lot)
    return LotView(
        lot=lot,
        entry_value=entry_value,
        exit_value=lot.exit_price * lot.quantity,
        profit_loss=profit_loss,
        profit_loss_percentage=profit_loss / entry_value * 100,
        holding_period_days=holding_period_days(lot.entry_date, lot.exit_date),
    )


def compute_all(lots: Iterable[Lot], now: datetime | None = None) -> list[LotView]:
    """Compute views for many lots, preserving input order."""
    return [compute(lot, now=now) for lot in lots]


def closed_views(views: Iterable[LotView]) -> list[LotView]:
    """Filter to closed lots (the input set for performance analytics)."""
    return [v for v in views if not v.is_open]
