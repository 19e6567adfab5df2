"""Candle check models."""

from candlecheck.models.bar import Bar
from candlecheck.models.trade import Trade, TradeSide

__all__ = [
    "Bar",
    "Trade",
    "TradeSide",
]
