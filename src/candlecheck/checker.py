"""CandleChecker — fetch bars and trades from an exchange and reconcile them."""

from __future__ import annotations

import logging
from typing import Any

from candlecheck.config import CandleCheckConfig, ExchangeProviderType
from candlecheck.intervals import list_allowed_intervals
from candlecheck.models.bar import Bar
from candlecheck.models.trade import Trade
from candlecheck.providers import create_provider
from candlecheck.providers.base import BaseExchangeProvider
from candlecheck.reconcile import BarReconciliation, reconcile, reconcile_report

logger = logging.getLogger(__name__)


class CandleChecker:
    """Central orchestrator: provider -> bars + trades -> reconcile.

    Usage::

        from candlecheck import create_checker_from_env
        checker = create_checker_from_env()
        valid = checker.get_valid_bars("BTC_USDT", "1m")

    ``FetchError`` raised by the provider is propagated unchanged.
    """

    def __init__(
        self,
        config: CandleCheckConfig,
        provider: BaseExchangeProvider | None = None,
    ) -> None:
        self.config = config

        if provider is None:
            kwargs: dict[str, Any] = {}
            if config.provider is ExchangeProviderType.CRYPTOCOM:
                kwargs["base_url"] = config.base_url
                kwargs["timeout"] = config.timeout_seconds
            provider = create_provider(config.provider, **kwargs)
        self.provider = provider

    def allowed_intervals(self) -> list[str]:
        return list_allowed_intervals()

    # ----------------------------------------------------------------- fetch

    def get_bars(self, instrument: str, interval: str) -> list[Bar]:
        return self.provider.get_bars(instrument, interval) or []

    def get_trades(self, instrument: str | None = None) -> list[Trade]:
        """Get trades for one instrument, or for all of them when None."""
        return self.provider.get_trades(instrument) or []

    # ------------------------------------------------------------- reconcile

    def get_valid_bars(self, instrument: str, interval: str) -> list[Bar]:
        """Fetch bars and trades for ``instrument`` and keep the consistent bars."""
        bars = self.get_bars(instrument, interval)
        trades = self.get_trades(instrument)
        valid = reconcile(trades, bars, max_workers=self.config.max_workers)
        logger.info(
            "%s %s: %d of %d bars consistent with %d trades",
            instrument, interval, len(valid), len(bars), len(trades),
        )
        return valid

    def check(self, instrument: str, interval: str) -> list[BarReconciliation]:
        """Like ``get_valid_bars`` but returns the per-bar report."""
        bars = self.get_bars(instrument, interval)
        trades = self.get_trades(instrument)
        return reconcile_report(trades, bars, max_workers=self.config.max_workers)
