"""Mock provider for testing and CI — no network access required."""

from __future__ import annotations

from candlecheck.intervals import parse_interval
from candlecheck.models.bar import Bar
from candlecheck.models.trade import Trade
from candlecheck.providers.base import BaseExchangeProvider


class MockProvider(BaseExchangeProvider):
    """In-memory provider that returns pre-loaded bars and trades.

    Use ``set_bars`` and ``set_trades`` to pre-load data. Unknown
    instruments return empty lists, like an exchange with no activity.
    """

    def __init__(self) -> None:
        self._bars: dict[tuple[str, str], list[Bar]] = {}
        self._trades: list[Trade] = []

    # --- Pre-load helpers ---

    def set_bars(self, instrument: str, interval: str, bars: list[Bar]) -> None:
        parse_interval(interval)
        self._bars[(instrument, interval)] = list(bars)

    def set_trades(self, trades: list[Trade]) -> None:
        self._trades = list(trades)

    # --- Provider implementation ---

    def get_bars(self, instrument: str, interval: str) -> list[Bar]:
        if not instrument:
            raise ValueError("You need to specify an instrument name")
        parse_interval(interval)
        return list(self._bars.get((instrument, interval), []))

    def get_trades(self, instrument: str | None = None) -> list[Trade]:
        if not instrument:
            return list(self._trades)
        return [t for t in self._trades if t.instrument == instrument]
