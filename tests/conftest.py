from __future__ import annotations

from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from exchange.core.config import Settings
from exchange.core.errors import ExchangeError
from exchange.main import create_app
from exchange.models.quote import CurrencyPair, RateQuote
from exchange.services.rates.base import RateProvider

FIXED_TIMESTAMP = 1700000000


class FakeRateProvider(RateProvider):
    """Serves canned quotes keyed by pair code, or raises a canned error."""

    name = "fake"

    def __init__(self, rates: Optional[Dict[str, float]] = None, error: Optional[ExchangeError] = None):
        self.rates = dict(rates or {"USDKRW": 1300.0})
        self.error = error
        self.calls: List[str] = []

    async def fetch_quote(self, pair: CurrencyPair) -> RateQuote:
        self.calls.append(pair.code)
        if self.error is not None:
            raise self.error
        quotes = {pair.code: self.rates[pair.code]} if pair.code in self.rates else {}
        return RateQuote(
            quotes=quotes, source=pair.source.value, success=True, timestamp=FIXED_TIMESTAMP
        )


@pytest.fixture
def settings() -> Settings:
    s = Settings(_env_file=None, exchange_rate_provider="static", exchange_api_key="test-key")
    s.init_post_load()
    return s


@pytest.fixture
def provider() -> FakeRateProvider:
    return FakeRateProvider(
        {"USDKRW": 1300.0, "USDJPY": 150.0, "JPYPHP": 0.37, "KRWUSD": 0.00077}
    )


@pytest.fixture
def client(settings: Settings, provider: FakeRateProvider) -> TestClient:
    app = create_app(settings_override=settings, provider_override=provider)
    return TestClient(app)
