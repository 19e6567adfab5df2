"""Bar/trade reconciliation.

A bar is valid when the trades inside its window reproduce it exactly:

    open   = price of the first trade
    close  = price of the last trade
    high   = max trade price
    low    = min trade price
    volume = sum of trade quantities

All comparisons are exact ``Decimal`` equality.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from decimal import Decimal

from candlecheck.models.bar import Bar
from candlecheck.models.trade import Trade

logger = logging.getLogger(__name__)


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result for one bar."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return bool(self.checks) and all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]


@dataclass(frozen=True)
class BarReconciliation:
    """A bar together with the outcome of checking it against its trades."""

    bar: Bar
    result: ValidationResult

    @property
    def valid(self) -> bool:
        return self.result.passed

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return self.result.failed_checks


# ------------------------------------------------------------------ window


def is_trade_in_window(trade: Trade, bar: Bar) -> bool:
    """True if ``trade`` belongs to ``bar``.

    The window is ``(start_time, end_time]``: a trade stamped exactly at a
    boundary shared by two adjacent bars belongs to the earlier one.
    """
    return (
        trade.instrument == bar.instrument
        and bar.start_time < trade.timestamp <= bar.end_time
    )


def filter_trades_for_bar(trades: Iterable[Trade], bar: Bar) -> list[Trade]:
    """Trades inside the bar's window, oldest first (ties keep input order)."""
    matched = [t for t in trades if is_trade_in_window(t, bar)]
    return sorted(matched, key=lambda t: t.timestamp)


# --------------------------------------------------------------- validator


def _compare(name: str, expected: Decimal, actual: Decimal) -> ValidationCheck:
    if expected == actual:
        return ValidationCheck(name, True)
    return ValidationCheck(name, False, f"expected {expected} from trades, bar has {actual}")


def validate_bar(trades: Iterable[Trade], bar: Bar) -> ValidationResult:
    """Check a bar against the trades in its window.

    Checks:
        1. At least one trade in the window
        2. Volume equals the summed trade quantities
        3. Open equals the first trade price
        4. Close equals the last trade price
        5. High equals the max trade price
        6. Low equals the min trade price
    """
    result = ValidationResult()
    logger.debug("Analyzing bar: %s", bar)

    filtered = filter_trades_for_bar(trades, bar)
    if not filtered:
        logger.debug("No trade found to match %s bar ending %s", bar.instrument, bar.end_time)
        result.checks.append(ValidationCheck("has_trades", False, "No trades in bar window"))
        return result
    result.checks.append(ValidationCheck("has_trades", True, f"{len(filtered)} trades"))

    prices = [t.price for t in filtered]
    volume = sum((t.quantity for t in filtered), Decimal(0))

    result.checks.append(_compare("volume", volume, bar.volume))
    result.checks.append(_compare("open", filtered[0].price, bar.open))
    result.checks.append(_compare("close", filtered[-1].price, bar.close))
    result.checks.append(_compare("high", max(prices), bar.high))
    result.checks.append(_compare("low", min(prices), bar.low))

    for check in result.failed_checks:
        logger.debug("%s does not match: %s", check.name.capitalize(), check.message)
    if result.passed:
        logger.debug("Bar is consistent.")
    return result


def is_bar_valid(trades: Iterable[Trade], bar: Bar) -> bool:
    """True if every reconciliation check passes for ``bar``."""
    return validate_bar(trades, bar).passed


# ------------------------------------------------------------------ runner


def reconcile_report(
    trades: Iterable[Trade],
    bars: Sequence[Bar],
    max_workers: int | None = None,
) -> list[BarReconciliation]:
    """Validate every bar and return one record per bar, in input order.

    Bars are independent, so with ``max_workers > 1`` they are checked on a
    thread pool. ``Executor.map`` yields results in submission order.
    """
    trades = list(trades)

    def _check(bar: Bar) -> BarReconciliation:
        return BarReconciliation(bar, validate_bar(trades, bar))

    if max_workers is not None and max_workers > 1 and len(bars) > 1:
        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="reconcile") as pool:
            return list(pool.map(_check, bars))
    return [_check(bar) for bar in bars]


def reconcile(
    trades: Iterable[Trade],
    bars: Sequence[Bar],
    max_workers: int | None = None,
) -> list[Bar]:
    """Return the bars that are consistent with ``trades``, in input order."""
    report = reconcile_report(trades, bars, max_workers=max_workers)
    valid = [r.bar for r in report if r.valid]
    logger.debug("%d of %d bars reconciled", len(valid), len(report))
    return valid
