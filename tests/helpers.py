"""Builders for bars and trades used across the test modules."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from candlecheck.models.bar import Bar
from candlecheck.models.trade import Trade, TradeSide

INSTRUMENT = "BTC_USDT"


def utc(hour: int, minute: int, second: int = 0) -> datetime:
    return datetime(2021, 6, 3, hour, minute, second, tzinfo=timezone.utc)


def make_trade(
    ts: datetime,
    price: str = "1",
    quantity: str = "5",
    instrument: str = INSTRUMENT,
    trade_id: int = 1,
    side: TradeSide = TradeSide.BUY,
) -> Trade:
    return Trade(
        price=Decimal(price),
        quantity=Decimal(quantity),
        side=side,
        id=trade_id,
        timestamp=ts,
        instrument=instrument,
    )


def make_bar(
    start: datetime = utc(14, 0),
    end: datetime = utc(14, 30),
    instrument: str = INSTRUMENT,
    **prices: str,
) -> Bar:
    values = dict(open="1", high="1", low="1", close="1", volume="5")
    values.update(prices)
    return Bar(
        instrument=instrument,
        start_time=start,
        end_time=end,
        **{k: Decimal(v) for k, v in values.items()},
    )
