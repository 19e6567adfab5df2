"""Abstract base class for exchange providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from candlecheck.models.bar import Bar
from candlecheck.models.trade import Trade


class BaseExchangeProvider(ABC):
    """Abstract base for exchange data providers.

    Providers raise ``FetchError`` on transport or decoding failures and
    return an empty list when the exchange answers without data.
    """

    @abstractmethod
    def get_bars(self, instrument: str, interval: str) -> list[Bar]:
        """Fetch the bars the exchange currently publishes.

        Args:
            instrument: Instrument name, e.g. ``"BTC_USDT"``.
            interval: Interval code, one of ``ALLOWED_INTERVALS``.

        Returns:
            List of Bar objects whose start time is derived from the
            interval.
        """
        ...

    @abstractmethod
    def get_trades(self, instrument: str | None = None) -> list[Trade]:
        """Fetch recent trades, for every instrument when ``instrument`` is None."""
        ...

    def capabilities(self) -> set[str]:
        """Return the set of supported features (``bars``, ``trades``)."""
        return {"bars", "trades"}
