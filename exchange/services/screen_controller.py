from __future__ import annotations

"""Async view-model for the exchange screen.

Holds the current ScreenState, feeds actions through the reducer and runs the
quote fetch that loading states ask for. Fetches are not cancelled; a result
that arrives for an older generation is dropped by the reducer.
"""
import logging
from typing import Optional

from exchange.core.config import Settings
from exchange.models.constants import CurrencyCode
from exchange.models.quote import CurrencyPair
from exchange.services.rates.fetcher import FetchSuccess, RateFetcher
from exchange.services.screen import (
    Action,
    Appear,
    Compute,
    DismissAlert,
    EditAmount,
    QuoteFailed,
    QuoteLoaded,
    Retry,
    ScreenState,
    ScreenStatus,
    SelectPair,
    initial_state,
    reduce,
)

logger = logging.getLogger("exchange.screen")


class ScreenController:
    def __init__(
        self,
        fetcher: RateFetcher,
        settings: Settings,
        pair: Optional[CurrencyPair] = None,
    ):
        self._fetcher = fetcher
        self._ceiling = settings.amount_ceiling
        self.min_grouping_digits = settings.min_grouping_digits
        self._state = initial_state(
            pair
            or CurrencyPair(
                source=settings.default_source, destination=settings.default_destination
            )
        )

    @property
    def state(self) -> ScreenState:
        return self._state

    def dispatch(self, action: Action) -> ScreenState:
        self._state = reduce(self._state, action, ceiling=self._ceiling)
        return self._state

    async def _load(self, before: ScreenState) -> ScreenState:
        after = self._state
        if after.status is not ScreenStatus.LOADING or after.generation == before.generation:
            return after
        result = await self._fetcher.fetch(after.pair, generation=after.generation)
        if isinstance(result, FetchSuccess):
            return self.dispatch(
                QuoteLoaded(generation=result.generation, rate=result.rate, timestamp=result.timestamp)
            )
        return self.dispatch(QuoteFailed(generation=result.generation, message=result.message))

    async def appear(self) -> ScreenState:
        before = self._state
        self.dispatch(Appear())
        return await self._load(before)

    async def select_pair(self, source: CurrencyCode, destination: CurrencyCode) -> ScreenState:
        pair = CurrencyPair(source=source, destination=destination)
        before = self._state
        self.dispatch(SelectPair(pair))
        return await self._load(before)

    async def retry(self) -> ScreenState:
        before = self._state
        self.dispatch(Retry())
        return await self._load(before)

    def edit_amount(self, text: str) -> ScreenState:
        return self.dispatch(EditAmount(text))

    def compute(self) -> ScreenState:
        return self.dispatch(Compute())

    def dismiss_alert(self) -> ScreenState:
        return self.dispatch(DismissAlert())
