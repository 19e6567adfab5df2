"""Exchange provider registry."""

from __future__ import annotations

from candlecheck.config import ExchangeProviderType
from candlecheck.providers.base import BaseExchangeProvider

# Dotted paths, resolved in create_provider; the mock needs no requests import.
PROVIDER_CLASSES: dict[ExchangeProviderType, str] = {
    ExchangeProviderType.CRYPTOCOM: "candlecheck.providers.cryptocom.CryptoComProvider",
    ExchangeProviderType.MOCK: "candlecheck.providers.mock.MockProvider",
}


def create_provider(
    provider_type: ExchangeProviderType,
    **kwargs,
) -> BaseExchangeProvider:
    """Instantiate a provider by type, forwarding kwargs to its constructor."""
    import importlib

    dotted = PROVIDER_CLASSES[provider_type]
    module_path, cls_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls = getattr(module, cls_name)
    return cls(**kwargs)


__all__ = ["BaseExchangeProvider", "PROVIDER_CLASSES", "create_provider"]
