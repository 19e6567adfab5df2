"""candlecheck — verify exchange candlesticks against the trades behind them.

Fetches bars and trades from the Crypto.com public API and keeps only the
bars whose open/high/low/close/volume are reproduced exactly by the trades
inside each bar's window.

Quick start::

    from candlecheck import create_checker_from_env
    checker = create_checker_from_env()
    valid = checker.get_valid_bars("BTC_USDT", "1m")
"""

from __future__ import annotations

import os

from candlecheck.checker import CandleChecker
from candlecheck.config import DEFAULT_CRYPTOCOM_URL, CandleCheckConfig, ExchangeProviderType
from candlecheck.errors import (
    CandleCheckError,
    CandleCheckErrorCode,
    FetchError,
    InvalidIntervalError,
)
from candlecheck.frames import bars_to_frame, report_to_frame, trades_to_frame
from candlecheck.intervals import ALLOWED_INTERVALS, list_allowed_intervals, parse_interval
from candlecheck.models.bar import Bar
from candlecheck.models.trade import Trade, TradeSide
from candlecheck.reconcile import (
    BarReconciliation,
    ValidationCheck,
    ValidationResult,
    filter_trades_for_bar,
    is_bar_valid,
    is_trade_in_window,
    reconcile,
    reconcile_report,
    validate_bar,
)

__version__ = "0.1.0"

__all__ = [
    # Checker
    "CandleChecker",
    "create_checker_from_env",
    # Config
    "CandleCheckConfig",
    "ExchangeProviderType",
    # Errors
    "CandleCheckError",
    "CandleCheckErrorCode",
    "FetchError",
    "InvalidIntervalError",
    # Models
    "Bar",
    "Trade",
    "TradeSide",
    # Intervals
    "ALLOWED_INTERVALS",
    "list_allowed_intervals",
    "parse_interval",
    # Reconciliation
    "BarReconciliation",
    "ValidationCheck",
    "ValidationResult",
    "is_trade_in_window",
    "filter_trades_for_bar",
    "validate_bar",
    "is_bar_valid",
    "reconcile",
    "reconcile_report",
    # DataFrame views
    "bars_to_frame",
    "trades_to_frame",
    "report_to_frame",
]


def create_checker_from_env() -> CandleChecker:
    """Zero-config factory — reads provider and API settings from env vars.

    Environment variables:
        CANDLECHECK_PROVIDER: "cryptocom" or "mock" (default: "cryptocom").
        CRYPTOCOM_API_URL: Exchange REST root (default: "https://api.crypto.com/v2").
        CANDLECHECK_TIMEOUT: HTTP timeout in seconds (default: 10).
        CANDLECHECK_MAX_WORKERS: Reconciliation threads (default: serial).
    """
    workers = os.getenv("CANDLECHECK_MAX_WORKERS")
    config = CandleCheckConfig(
        provider=ExchangeProviderType(os.getenv("CANDLECHECK_PROVIDER", "cryptocom").strip()),
        base_url=os.getenv("CRYPTOCOM_API_URL", DEFAULT_CRYPTOCOM_URL),
        timeout_seconds=float(os.getenv("CANDLECHECK_TIMEOUT", "10")),
        max_workers=int(workers) if workers else None,
    )
    return CandleChecker(config)
