"""Trade (single execution) data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class TradeSide(Enum):
    """Taker side of a trade."""

    BUY = "BUY"
    SELL = "SELL"

    @classmethod
    def parse(cls, value: str) -> TradeSide:
        """Parse ``"buy"``/``"SELL"`` etc. into a side, case-insensitively."""
        return cls(value.strip().upper())


@dataclass(frozen=True)
class Trade:
    """One executed trade.

    Attributes:
        price: Execution price.
        quantity: Executed quantity, strictly positive.
        side: Taker side (informational only).
        id: Exchange trade id.
        timestamp: Execution time.
        instrument: Instrument name.
    """

    price: Decimal
    quantity: Decimal
    side: TradeSide
    id: int
    timestamp: datetime
    instrument: str

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError(f"Trade quantity must be positive, got {self.quantity}")
        if self.timestamp.tzinfo is None:
            raise ValueError("Trade timestamp must be timezone-aware")
