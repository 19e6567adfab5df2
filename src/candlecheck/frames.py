"""DataFrame views of bars, trades and reconciliation reports.

Price and quantity columns keep their ``Decimal`` values (object dtype);
converting to float would reintroduce the drift the exact checks avoid.
"""

from __future__ import annotations

import pandas as pd

from candlecheck.models.bar import Bar
from candlecheck.models.trade import Trade
from candlecheck.reconcile import BarReconciliation

BAR_COLUMNS = [
    "instrument", "start_time", "end_time", "open", "high", "low", "close", "volume",
]
TRADE_COLUMNS = ["id", "instrument", "timestamp", "side", "price", "quantity"]
REPORT_COLUMNS = BAR_COLUMNS + ["valid", "failed_checks"]


def _bar_record(b: Bar) -> dict:
    return {
        "instrument": b.instrument,
        "start_time": b.start_time,
        "end_time": b.end_time,
        "open": b.open,
        "high": b.high,
        "low": b.low,
        "close": b.close,
        "volume": b.volume,
    }


def bars_to_frame(bars: list[Bar]) -> pd.DataFrame:
    if not bars:
        return pd.DataFrame(columns=BAR_COLUMNS)
    return pd.DataFrame([_bar_record(b) for b in bars], columns=BAR_COLUMNS)


def trades_to_frame(trades: list[Trade]) -> pd.DataFrame:
    if not trades:
        return pd.DataFrame(columns=TRADE_COLUMNS)

    records = []
    for t in trades:
        records.append(
            {
                "id": t.id,
                "instrument": t.instrument,
                "timestamp": t.timestamp,
                "side": t.side.value,
                "price": t.price,
                "quantity": t.quantity,
            }
        )
    return pd.DataFrame(records, columns=TRADE_COLUMNS)


def report_to_frame(report: list[BarReconciliation]) -> pd.DataFrame:
    """One row per bar with its validity and the names of failed checks."""
    if not report:
        return pd.DataFrame(columns=REPORT_COLUMNS)

    records = []
    for r in report:
        record = _bar_record(r.bar)
        record["valid"] = r.valid
        record["failed_checks"] = ",".join(c.name for c in r.failed_checks)
        records.append(record)
    return pd.DataFrame(records, columns=REPORT_COLUMNS)
