"""Shared fixtures for candlecheck tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure src/ and the test helpers are on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from candlecheck.models.bar import Bar
from candlecheck.models.trade import Trade, TradeSide
from candlecheck.providers.mock import MockProvider

from helpers import make_bar, make_trade, utc


@pytest.fixture
def mock_provider() -> MockProvider:
    return MockProvider()


@pytest.fixture
def two_trades() -> list[Trade]:
    """Two trades inside the 14:00-14:30 window."""
    return [
        make_trade(utc(14, 8, 24), price="1", quantity="5", trade_id=1),
        make_trade(utc(14, 9, 24), price="2", quantity="3", trade_id=2, side=TradeSide.SELL),
    ]


@pytest.fixture
def two_trade_bar() -> Bar:
    """Bar consistent with ``two_trades``."""
    return make_bar(open="1", high="2", low="1", close="2", volume="8")
