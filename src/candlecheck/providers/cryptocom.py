"""Crypto.com Exchange public REST provider.

Endpoints used:
    GET {base_url}/public/get-candlestick?instrument_name=..&timeframe=..
    GET {base_url}/public/get-trades[?instrument_name=..]
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

import requests

from candlecheck.config import DEFAULT_CRYPTOCOM_URL
from candlecheck.errors import CandleCheckErrorCode, FetchError
from candlecheck.intervals import parse_interval
from candlecheck.models.bar import Bar
from candlecheck.models.trade import Trade, TradeSide
from candlecheck.providers.base import BaseExchangeProvider

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class CryptoComProvider(BaseExchangeProvider):
    """Fetch candlesticks and trades from the Crypto.com public API.

    Numbers are decoded straight into ``Decimal`` so that volumes and prices
    compare exactly against summed trade quantities.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_CRYPTOCOM_URL,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------ bars

    def get_bars(self, instrument: str, interval: str) -> list[Bar]:
        if not instrument:
            raise ValueError("You need to specify an instrument name")
        parse_interval(interval)

        result = self._get(
            "/public/get-candlestick",
            {"instrument_name": instrument, "timeframe": interval},
        )
        if not result:
            return []

        reported = result.get("interval")
        if reported and reported != interval:
            raise FetchError(
                f"Requested {interval} candlesticks for {instrument}, exchange returned {reported}",
                code=CandleCheckErrorCode.INCONSISTENT_RESPONSE,
            )

        try:
            bars = [self._to_bar(instrument, interval, row) for row in result.get("data") or []]
        except (AttributeError, KeyError, TypeError, ValueError, InvalidOperation) as exc:
            raise FetchError(
                f"Malformed candlestick payload: {exc}",
                code=CandleCheckErrorCode.INCONSISTENT_RESPONSE,
            ) from exc

        logger.info("Fetched %d %s bars for %s", len(bars), interval, instrument)
        return bars

    @staticmethod
    def _to_bar(instrument: str, interval: str, row: dict[str, Any]) -> Bar:
        return Bar.from_end_time(
            instrument=instrument,
            end_time=_from_millis(row["t"]),
            interval=interval,
            open=_to_decimal(row["o"]),
            high=_to_decimal(row["h"]),
            low=_to_decimal(row["l"]),
            close=_to_decimal(row["c"]),
            volume=_to_decimal(row["v"]),
        )

    # ---------------------------------------------------------------- trades

    def get_trades(self, instrument: str | None = None) -> list[Trade]:
        params = {"instrument_name": instrument} if instrument else {}
        result = self._get("/public/get-trades", params)
        if not result:
            return []

        try:
            trades = [self._to_trade(row) for row in result.get("data") or []]
        except (AttributeError, KeyError, TypeError, ValueError, InvalidOperation) as exc:
            raise FetchError(
                f"Malformed trades payload: {exc}",
                code=CandleCheckErrorCode.INCONSISTENT_RESPONSE,
            ) from exc

        logger.info("Fetched %d trades for %s", len(trades), instrument or "all instruments")
        return trades

    @staticmethod
    def _to_trade(row: dict[str, Any]) -> Trade:
        return Trade(
            price=_to_decimal(row["p"]),
            quantity=_to_decimal(row["q"]),
            side=TradeSide.parse(row["s"]),
            id=int(row["d"]),
            timestamp=_from_millis(row["t"]),
            instrument=row["i"],
        )

    # -------------------------------------------------------------- internal

    def _get(self, path: str, params: dict[str, str]) -> dict[str, Any] | None:
        """GET an endpoint and return its ``result`` object (None if absent)."""
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout as exc:
            raise FetchError(
                f"Request to {url} timed out",
                code=CandleCheckErrorCode.TIMEOUT,
                retryable=True,
            ) from exc
        except requests.RequestException as exc:
            raise FetchError(
                f"Request to {url} failed: {exc}",
                code=CandleCheckErrorCode.PROVIDER_ERROR,
                retryable=True,
            ) from exc

        self._check_response(resp)
        if not resp.content:
            return None
        try:
            body = resp.json(parse_float=Decimal)
        except ValueError as exc:
            raise FetchError(
                f"Invalid JSON from {url}: {exc}",
                code=CandleCheckErrorCode.INCONSISTENT_RESPONSE,
            ) from exc
        if not isinstance(body, dict):
            return None
        code = body.get("code")
        if code not in (None, 0):
            raise FetchError(
                f"Crypto.com error {code}: {body.get('message', '')}",
                code=CandleCheckErrorCode.PROVIDER_ERROR,
            )
        result = body.get("result")
        return result if isinstance(result, dict) else None

    @staticmethod
    def _check_response(resp: Any) -> None:
        if resp.status_code == 429:
            raise FetchError(
                "Crypto.com rate limited",
                code=CandleCheckErrorCode.RATE_LIMITED,
                retryable=True,
            )
        if resp.status_code >= 400:
            raise FetchError(
                f"Crypto.com returned HTTP {resp.status_code}",
                code=CandleCheckErrorCode.PROVIDER_ERROR,
                retryable=resp.status_code >= 500,
            )


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _from_millis(value: Any) -> datetime:
    return _EPOCH + timedelta(milliseconds=int(value))
