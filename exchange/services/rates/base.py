from __future__ import annotations

"""Rate provider abstraction.

A provider turns a currency pair into a decoded RateQuote. Transport and
decoding failures are raised as NetworkError / DecodeError; turning those into
screen state is the fetcher's job.
"""
from abc import ABC, abstractmethod

from exchange.models.quote import CurrencyPair, RateQuote


class RateProvider(ABC):
    name: str = "abstract"

    @abstractmethod
    async def fetch_quote(self, pair: CurrencyPair) -> RateQuote:
        """Return the live quote document for `pair`."""
        raise NotImplementedError
