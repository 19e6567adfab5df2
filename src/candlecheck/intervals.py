"""Bar interval codes and their durations."""

from __future__ import annotations

from datetime import timedelta

from candlecheck.errors import InvalidIntervalError

ALLOWED_INTERVALS: tuple[str, ...] = (
    "1m", "5m", "15m", "30m", "1h", "4h", "6h", "12h", "1D", "7D", "14D", "1M",
)

# A month is a flat 30 days, not a calendar month.
_UNITS: dict[str, timedelta] = {
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "D": timedelta(days=1),
    "M": timedelta(days=30),
}


def _to_duration(code: str) -> timedelta:
    amount, unit = code[:-1], code[-1]
    if unit not in _UNITS or not amount.isdigit():
        raise InvalidIntervalError(f"Interval could not be parsed: {code!r}")
    return int(amount) * _UNITS[unit]


INTERVAL_DURATIONS: dict[str, timedelta] = {
    code: _to_duration(code) for code in ALLOWED_INTERVALS
}


def list_allowed_intervals() -> list[str]:
    """Supported interval codes, shortest first."""
    return list(ALLOWED_INTERVALS)


def parse_interval(code: str | None) -> timedelta:
    """Convert an interval code such as ``"4h"`` or ``"1M"`` into a duration.

    Raises:
        InvalidIntervalError: If ``code`` is None, empty, or not one of
            ``ALLOWED_INTERVALS``.
    """
    if not code or code not in INTERVAL_DURATIONS:
        raise InvalidIntervalError(
            f"Interval must be one of these values: {list(ALLOWED_INTERVALS)}"
        )
    return INTERVAL_DURATIONS[code]
