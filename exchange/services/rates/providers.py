from __future__ import annotations

"""Concrete rate providers and factory.

'apilayer' queries the currency_data/live endpoint; 'static' serves fixed
placeholder rates so the service can run offline (local dev, smoke scripts).
"""
import logging
import time
from typing import Dict, Optional

import httpx
from pydantic import ValidationError

from exchange.core.config import Settings
from exchange.core.errors import DecodeError
from exchange.models.constants import CurrencyCode
from exchange.models.quote import CurrencyPair, RateQuote
from exchange.services.http_client import get_json
from .base import RateProvider

logger = logging.getLogger("exchange.rates")

# Units of each currency per 1 USD; cross rates go through USD.
_STATIC_USD_RATES: Dict[CurrencyCode, float] = {
    CurrencyCode.USD: 1.0,
    CurrencyCode.KRW: 1300.0,
    CurrencyCode.JPY: 150.0,
    CurrencyCode.PHP: 56.0,
}


class StaticRateProvider(RateProvider):
    name = "static"

    def __init__(self, rates: Optional[Dict[CurrencyCode, float]] = None):
        self._rates = dict(rates or _STATIC_USD_RATES)

    async def fetch_quote(self, pair: CurrencyPair) -> RateQuote:
        rate = self._rates[pair.destination] / self._rates[pair.source]
        return RateQuote(
            quotes={pair.code: rate},
            source=pair.source.value,
            success=True,
            timestamp=time.time(),
        )


class ApilayerRateProvider(RateProvider):
    """Live quotes from apilayer's currency_data API.

    GET <base_url>?source=USD&currencies=KRW with header apiKey: <key>.
    """

    name = "apilayer"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport
        if not api_key:
            logger.warning("EXCHANGE_API_KEY is not set; upstream will reject requests")

    async def fetch_quote(self, pair: CurrencyPair) -> RateQuote:
        data = await get_json(
            self._base_url,
            params={"source": pair.source.value, "currencies": pair.destination.value},
            headers={"apiKey": self._api_key},
            timeout=self._timeout,
            transport=self._transport,
        )
        try:
            return RateQuote.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"Unexpected quote document for {pair}: {e.error_count()} errors") from e


_PROVIDER_REGISTRY = {
    "static": StaticRateProvider,
    "apilayer": ApilayerRateProvider,
}


def make_rate_provider(
    kind: str,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> RateProvider:
    cls = _PROVIDER_REGISTRY.get(kind)
    if not cls:
        raise ValueError(f"Unknown rate provider kind '{kind}'")
    if cls is ApilayerRateProvider:
        return ApilayerRateProvider(
            base_url=str(settings.exchange_api_base_url),
            api_key=settings.api_key,
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )
    return cls()
