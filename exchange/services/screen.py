r"""Exchange screen state model.

The whole screen is one immutable `ScreenState` value. Every change goes
through `reduce(state, action)`, which returns a new state, so each
transition can be exercised without any HTTP or UI in the way.

Status flow:
    IDLE --Appear--> LOADING --QuoteLoaded--> READY
                        |  \--QuoteFailed--> ERROR --Retry--> LOADING
    any --SelectPair--> LOADING

Inside READY the result is either hidden or visible; editing the amount or
changing the pair hides it again.

Fetch outcomes carry the generation they were started for. A QuoteLoaded or
QuoteFailed whose generation is not the current one is dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from exchange.core.errors import AmountValidationError, ScreenStateError
from exchange.models.constants import LOADING_TEXT
from exchange.models.quote import CurrencyPair
from exchange.services.input_filter import filter_amount_text
from exchange.services.money import format_grouped, format_timestamp
from exchange.services.rates.conversion import AMOUNT_CEILING, compute_conversion

logger = logging.getLogger("exchange.screen")


class ScreenStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class Alert(str, Enum):
    CONNECTION_ERROR = "connection_error"
    WRONG_VALUE = "wrong_value"


ALERT_MESSAGES = {
    Alert.CONNECTION_ERROR: "Cannot connect to the server",
    Alert.WRONG_VALUE: "The amount is not valid",
}


@dataclass(frozen=True)
class ScreenState:
    pair: CurrencyPair
    status: ScreenStatus = ScreenStatus.IDLE
    generation: int = 0
    rate: Optional[float] = None
    fetched_at: Optional[float] = None
    amount: str = "0"
    result: Optional[float] = None
    alert: Optional[Alert] = None
    error_message: Optional[str] = None

    @property
    def result_visible(self) -> bool:
        return self.result is not None

    @property
    def can_compute(self) -> bool:
        return self.status is ScreenStatus.READY and self.rate is not None

    # Display strings ------------------------------------------
    def balance_string(self, min_grouping_digits: int = 2) -> str:
        if self.rate is None:
            return LOADING_TEXT
        grouped = format_grouped(self.rate, min_grouping_digits)
        return f"{grouped} {self.pair.destination.value} / {self.pair.source.value}"

    def time_string(self) -> str:
        if self.fetched_at is None:
            return LOADING_TEXT
        return format_timestamp(self.fetched_at)

    def result_string(self, min_grouping_digits: int = 2) -> Optional[str]:
        if self.result is None:
            return None
        return f"{format_grouped(self.result, min_grouping_digits)} {self.pair.destination.value}"


# Actions ------------------------------------------------------
@dataclass(frozen=True)
class Appear:
    pass


@dataclass(frozen=True)
class SelectPair:
    pair: CurrencyPair


@dataclass(frozen=True)
class QuoteLoaded:
    generation: int
    rate: float
    timestamp: float


@dataclass(frozen=True)
class QuoteFailed:
    generation: int
    message: str


@dataclass(frozen=True)
class EditAmount:
    text: str


@dataclass(frozen=True)
class Compute:
    pass


@dataclass(frozen=True)
class DismissAlert:
    pass


@dataclass(frozen=True)
class Retry:
    pass


Action = Union[
    Appear, SelectPair, QuoteLoaded, QuoteFailed, EditAmount, Compute, DismissAlert, Retry
]


def _start_loading(state: ScreenState, pair: CurrencyPair) -> ScreenState:
    return replace(
        state,
        pair=pair,
        status=ScreenStatus.LOADING,
        generation=state.generation + 1,
        rate=None,
        fetched_at=None,
        amount="0",
        result=None,
        alert=None,
        error_message=None,
    )


def reduce(state: ScreenState, action: Action, ceiling: float = AMOUNT_CEILING) -> ScreenState:
    if isinstance(action, Appear):
        if state.status is ScreenStatus.IDLE:
            return _start_loading(state, state.pair)
        return state

    if isinstance(action, SelectPair):
        # re-selecting the current pair refreshes the quote as well
        return _start_loading(state, action.pair)

    if isinstance(action, (QuoteLoaded, QuoteFailed)):
        if action.generation != state.generation or state.status is not ScreenStatus.LOADING:
            logger.info(
                "discarding stale quote result",
                extra={"generation": action.generation, "current": state.generation},
            )
            return state
        if isinstance(action, QuoteLoaded):
            return replace(
                state,
                status=ScreenStatus.READY,
                rate=action.rate,
                fetched_at=action.timestamp,
                error_message=None,
            )
        return replace(
            state,
            status=ScreenStatus.ERROR,
            alert=Alert.CONNECTION_ERROR,
            error_message=action.message,
        )

    if isinstance(action, EditAmount):
        return replace(state, amount=filter_amount_text(action.text), result=None)

    if isinstance(action, Compute):
        if not state.can_compute:
            raise ScreenStateError(f"cannot compute while {state.status.value}")
        try:
            conversion = compute_conversion(state.amount, state.rate, ceiling=ceiling)
        except AmountValidationError as e:
            logger.info("rejected amount %r: %s", state.amount, e)
            return replace(state, result=None, alert=Alert.WRONG_VALUE, error_message=str(e))
        return replace(state, result=conversion.value, alert=None, error_message=None)

    if isinstance(action, DismissAlert):
        if state.status is ScreenStatus.ERROR:
            # error_message stays so the retry prompt can still show it
            return replace(state, alert=None)
        return replace(state, alert=None, error_message=None)

    if isinstance(action, Retry):
        if state.status is not ScreenStatus.ERROR:
            raise ScreenStateError(f"nothing to retry while {state.status.value}")
        return _start_loading(state, state.pair)

    raise TypeError(f"unknown screen action {action!r}")


def initial_state(pair: CurrencyPair) -> ScreenState:
    return ScreenState(pair=pair)
