from __future__ import annotations

"""Rate fetching with typed outcomes.

`RateFetcher.fetch` never raises for upstream problems; it returns either a
FetchSuccess or a FetchFailure tagged with the screen generation that asked
for it, so late answers can be told apart from current ones.
"""
import logging
import math
from dataclasses import dataclass
from typing import Union

from exchange.core.errors import DecodeError, ExchangeError, NetworkError
from exchange.models.quote import CurrencyPair, RateQuote
from .base import RateProvider

logger = logging.getLogger("exchange.rates.fetcher")


@dataclass(frozen=True)
class FetchSuccess:
    generation: int
    pair: CurrencyPair
    quote: RateQuote
    rate: float

    @property
    def timestamp(self) -> float:
        return self.quote.timestamp


@dataclass(frozen=True)
class FetchFailure:
    generation: int
    pair: CurrencyPair
    error: ExchangeError

    @property
    def message(self) -> str:
        return str(self.error)


FetchResult = Union[FetchSuccess, FetchFailure]


def extract_rate(quote: RateQuote, pair: CurrencyPair) -> float:
    """Look the rate up by pair code (e.g. 'USDKRW')."""
    rate = quote.rate_for(pair)
    if rate is None:
        raise DecodeError(f"Quote has no entry for {pair.code}; got {sorted(quote.quotes)}")
    if not math.isfinite(rate) or rate <= 0:
        raise DecodeError(f"Quote for {pair.code} is not a positive number: {rate}")
    return rate


class RateFetcher:
    def __init__(self, provider: RateProvider):
        self._provider = provider

    @property
    def provider(self) -> RateProvider:
        return self._provider

    async def fetch(self, pair: CurrencyPair, generation: int = 0) -> FetchResult:
        ctx = {"pair": pair.code, "generation": generation, "provider": self._provider.name}
        logger.info("fetching quote", extra=ctx)
        try:
            quote = await self._provider.fetch_quote(pair)
            rate = extract_rate(quote, pair)
        except (NetworkError, DecodeError) as e:
            logger.warning("quote fetch failed: %s", e, extra=ctx)
            return FetchFailure(generation=generation, pair=pair, error=e)
        return FetchSuccess(generation=generation, pair=pair, quote=quote, rate=rate)

    async def fetch_or_raise(self, pair: CurrencyPair) -> FetchSuccess:
        result = await self.fetch(pair)
        if isinstance(result, FetchFailure):
            raise result.error
        return result
