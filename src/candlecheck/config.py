"""Candle check configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_CRYPTOCOM_URL = "https://api.crypto.com/v2"


class ExchangeProviderType(Enum):
    """Supported exchange backends."""

    CRYPTOCOM = "cryptocom"
    MOCK = "mock"


@dataclass
class CandleCheckConfig:
    """Configuration for CandleChecker.

    Attributes:
        provider: Exchange backend to fetch bars and trades from.
        base_url: REST API root of the exchange, without trailing slash.
        timeout_seconds: HTTP timeout per request.
        max_workers: Thread pool size for reconciliation (None = serial).
    """

    provider: ExchangeProviderType = ExchangeProviderType.CRYPTOCOM
    base_url: str = DEFAULT_CRYPTOCOM_URL
    timeout_seconds: float = 10.0
    max_workers: int | None = None
