"""Bar (OHLCV candlestick) data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from candlecheck.intervals import parse_interval


@dataclass(frozen=True)
class Bar:
    """Single price bar covering the window ``(start_time, end_time]``.

    Attributes:
        instrument: Instrument name, e.g. ``"BTC_USDT"``.
        start_time: Start of the window (exclusive).
        end_time: End of the window (inclusive), as reported by the exchange.
        open: Opening price.
        high: High price.
        low: Low price.
        close: Closing price.
        volume: Traded quantity.
    """

    instrument: str
    start_time: datetime
    end_time: datetime
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal

    def __post_init__(self) -> None:
        if not self.instrument:
            raise ValueError("Bar instrument must not be empty")
        for name in ("start_time", "end_time"):
            if getattr(self, name).tzinfo is None:
                raise ValueError(f"Bar {name} must be timezone-aware")
        if self.start_time >= self.end_time:
            raise ValueError(
                f"Bar start_time {self.start_time} must be before end_time {self.end_time}"
            )

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time

    @classmethod
    def from_end_time(
        cls,
        instrument: str,
        end_time: datetime,
        interval: str,
        open: Decimal,
        high: Decimal,
        low: Decimal,
        close: Decimal,
        volume: Decimal,
    ) -> Bar:
        """Build a bar from the exchange's end timestamp and its interval code."""
        return cls(
            instrument=instrument,
            start_time=end_time - parse_interval(interval),
            end_time=end_time,
            open=open,
            high=high,
            low=low,
            close=close,
            volume=volume,
        )
