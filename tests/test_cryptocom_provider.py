"""Tests for CryptoComProvider payload decoding and error mapping.

The HTTP session is replaced by a MagicMock returning canned
``requests.Response`` objects, so no network access is needed.
"""

from __future__ import annotations

import json
from datetime import timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from candlecheck.errors import CandleCheckErrorCode, FetchError, InvalidIntervalError
from candlecheck.models.trade import TradeSide
from candlecheck.providers.cryptocom import CryptoComProvider
from candlecheck.reconcile import reconcile

from helpers import utc


def _millis(ts) -> int:
    return int(ts.timestamp()) * 1000


def _response(body, status: int = 200) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.encoding = "utf-8"
    if body is None:
        resp._content = b""
    elif isinstance(body, str):
        resp._content = body.encode()
    else:
        resp._content = json.dumps(body).encode()
    return resp


def _provider(*responses) -> tuple[CryptoComProvider, MagicMock]:
    session = MagicMock()
    session.get.side_effect = list(responses)
    return CryptoComProvider(base_url="https://example.test/v2/", session=session), session


CANDLES_BODY = """{
  "code": 0,
  "method": "public/get-candlestick",
  "result": {
    "instrument_name": "BTC_USDT",
    "interval": "30m",
    "data": [
      {"t": %d, "o": 1, "h": 2, "l": 1, "c": 2, "v": 8},
      {"t": %d, "o": 0.1, "h": 0.3, "l": 0.1, "c": 0.2, "v": 0.3}
    ]
  }
}""" % (_millis(utc(14, 30)), _millis(utc(15, 0)))

TRADES_BODY = {
    "code": 0,
    "method": "public/get-trades",
    "result": {
        "data": [
            {"p": "1", "q": "5", "s": "BUY", "d": 101, "t": _millis(utc(14, 8, 24)), "i": "BTC_USDT"},
            {"p": "2", "q": "3", "s": "sell", "d": 102, "t": _millis(utc(14, 9, 24)), "i": "BTC_USDT"},
        ]
    },
}


class TestCryptoComBars:
    def test_decodes_candlesticks(self):
        provider, session = _provider(_response(CANDLES_BODY))
        bars = provider.get_bars("BTC_USDT", "30m")

        assert len(bars) == 2
        first = bars[0]
        assert first.instrument == "BTC_USDT"
        assert first.end_time == utc(14, 30)
        assert first.start_time == utc(14, 0)
        assert first.duration == timedelta(minutes=30)
        assert (first.open, first.high, first.low, first.close, first.volume) == (
            Decimal(1), Decimal(2), Decimal(1), Decimal(2), Decimal(8),
        )

    def test_fractional_values_stay_exact(self):
        provider, _ = _provider(_response(CANDLES_BODY))
        second = provider.get_bars("BTC_USDT", "30m")[1]
        assert second.volume == Decimal("0.3")
        assert isinstance(second.open, Decimal)
        assert str(second.low) == "0.1"

    def test_request_parameters(self):
        provider, session = _provider(_response(CANDLES_BODY))
        provider.get_bars("BTC_USDT", "30m")
        args, kwargs = session.get.call_args
        assert args[0] == "https://example.test/v2/public/get-candlestick"
        assert kwargs["params"] == {"instrument_name": "BTC_USDT", "timeframe": "30m"}
        assert kwargs["timeout"] == 10.0

    def test_empty_body(self):
        provider, _ = _provider(_response(None))
        assert provider.get_bars("BTC_USDT", "30m") == []

    def test_missing_result(self):
        provider, _ = _provider(_response({"code": 0}))
        assert provider.get_bars("BTC_USDT", "30m") == []

    def test_null_data(self):
        provider, _ = _provider(_response({"result": {"interval": "30m", "data": None}}))
        assert provider.get_bars("BTC_USDT", "30m") == []

    def test_invalid_interval_before_request(self):
        provider, session = _provider()
        with pytest.raises(InvalidIntervalError):
            provider.get_bars("BTC_USDT", "1Y")
        session.get.assert_not_called()

    def test_empty_instrument(self):
        provider, session = _provider()
        with pytest.raises(ValueError):
            provider.get_bars("", "1m")
        session.get.assert_not_called()

    def test_interval_mismatch(self):
        provider, _ = _provider(_response(CANDLES_BODY))
        with pytest.raises(FetchError) as exc_info:
            provider.get_bars("BTC_USDT", "1h")
        assert exc_info.value.code == CandleCheckErrorCode.INCONSISTENT_RESPONSE

    def test_malformed_row(self):
        body = {"result": {"interval": "1m", "data": [{"t": 1, "o": 1}]}}
        provider, _ = _provider(_response(body))
        with pytest.raises(FetchError) as exc_info:
            provider.get_bars("BTC_USDT", "1m")
        assert exc_info.value.code == CandleCheckErrorCode.INCONSISTENT_RESPONSE


class TestCryptoComTrades:
    def test_decodes_trades(self):
        provider, _ = _provider(_response(TRADES_BODY))
        trades = provider.get_trades("BTC_USDT")

        assert [t.id for t in trades] == [101, 102]
        assert trades[0].price == Decimal("1")
        assert trades[0].quantity == Decimal("5")
        assert trades[0].side is TradeSide.BUY
        assert trades[1].side is TradeSide.SELL
        assert trades[0].timestamp == utc(14, 8, 24)
        assert trades[0].instrument == "BTC_USDT"

    def test_all_instruments_sends_no_filter(self):
        provider, session = _provider(_response(TRADES_BODY))
        provider.get_trades()
        args, kwargs = session.get.call_args
        assert args[0] == "https://example.test/v2/public/get-trades"
        assert kwargs["params"] == {}

    def test_instrument_filter(self):
        provider, session = _provider(_response(TRADES_BODY))
        provider.get_trades("BTC_USDT")
        assert session.get.call_args.kwargs["params"] == {"instrument_name": "BTC_USDT"}

    def test_empty_body(self):
        provider, _ = _provider(_response(None))
        assert provider.get_trades() == []

    def test_json_null(self):
        provider, _ = _provider(_response("null"))
        assert provider.get_trades() == []

    def test_fetched_data_reconciles(self):
        provider, _ = _provider(_response(CANDLES_BODY), _response(TRADES_BODY))
        bars = provider.get_bars("BTC_USDT", "30m")
        trades = provider.get_trades("BTC_USDT")
        assert reconcile(trades, bars) == [bars[0]]


class TestCryptoComErrors:
    def test_rate_limited(self):
        provider, _ = _provider(_response({}, status=429))
        with pytest.raises(FetchError) as exc_info:
            provider.get_trades()
        assert exc_info.value.code == CandleCheckErrorCode.RATE_LIMITED
        assert exc_info.value.retryable

    def test_server_error_retryable(self):
        provider, _ = _provider(_response({}, status=503))
        with pytest.raises(FetchError) as exc_info:
            provider.get_trades()
        assert exc_info.value.code == CandleCheckErrorCode.PROVIDER_ERROR
        assert exc_info.value.retryable

    def test_client_error_not_retryable(self):
        provider, _ = _provider(_response({}, status=400))
        with pytest.raises(FetchError) as exc_info:
            provider.get_bars("BTC_USDT", "1m")
        assert not exc_info.value.retryable

    def test_timeout(self):
        provider, _ = _provider(requests.Timeout("slow"))
        with pytest.raises(FetchError) as exc_info:
            provider.get_trades()
        assert exc_info.value.code == CandleCheckErrorCode.TIMEOUT
        assert exc_info.value.retryable

    def test_connection_error(self):
        provider, _ = _provider(requests.ConnectionError("refused"))
        with pytest.raises(FetchError) as exc_info:
            provider.get_trades()
        assert exc_info.value.code == CandleCheckErrorCode.PROVIDER_ERROR

    def test_invalid_json(self):
        provider, _ = _provider(_response("<html>oops</html>"))
        with pytest.raises(FetchError) as exc_info:
            provider.get_trades()
        assert exc_info.value.code == CandleCheckErrorCode.INCONSISTENT_RESPONSE

    def test_exchange_error_code(self):
        body = {"id": -1, "code": 10004, "message": "BAD_REQUEST"}
        provider, _ = _provider(_response(body))
        with pytest.raises(FetchError) as exc_info:
            provider.get_trades("NOPE_USDT")
        assert exc_info.value.code == CandleCheckErrorCode.PROVIDER_ERROR
        assert "10004" in str(exc_info.value)
        assert "BAD_REQUEST" in str(exc_info.value)

    def test_exchange_error_code_on_bars(self):
        provider, _ = _provider(_response({"code": 40003, "message": "INVALID_REQUEST"}))
        with pytest.raises(FetchError):
            provider.get_bars("BTC_USDT", "1m")
