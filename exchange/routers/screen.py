from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field, model_validator

from exchange.models.constants import CurrencyCode
from exchange.services.screen import ALERT_MESSAGES, Alert, ScreenStatus
from exchange.services.screen_controller import ScreenController

"""Screen router: the calculator screen as a JSON state document.

Endpoints:
    - GET  /screen          -> current state
    - POST /screen/appear   -> initial quote load
    - PUT  /screen/pair     -> select currencies {source, destination}
    - PUT  /screen/amount   -> edit amount text {text}
    - POST /screen/compute  -> compute the converted amount (409 without a quote)
    - POST /screen/dismiss  -> dismiss the current alert
    - POST /screen/retry    -> reload after a connection error (409 otherwise)

One in-memory screen per application instance; restart resets it.
"""

router = APIRouter(prefix="/screen", tags=["screen"])


def get_screen(request: Request) -> ScreenController:
    return request.app.state.screen


class PairIn(BaseModel):
    source: CurrencyCode
    destination: CurrencyCode

    @model_validator(mode="after")
    def not_same(self) -> "PairIn":
        if self.source == self.destination:
            raise ValueError("destination cannot equal source")
        return self


class AmountIn(BaseModel):
    text: str = Field(..., description="Raw amount text; characters other than digits and '.' are dropped")


class ScreenOut(BaseModel):
    status: ScreenStatus
    source: CurrencyCode
    destination: CurrencyCode
    generation: int
    amount: str
    rate: Optional[float]
    fetched_at: Optional[float]
    balance: str
    time: str
    can_compute: bool
    result: Optional[float]
    result_text: Optional[str]
    alert: Optional[Alert]
    alert_message: Optional[str]
    error: Optional[str]

    @classmethod
    def from_controller(cls, screen: ScreenController) -> "ScreenOut":
        state = screen.state
        grouping = screen.min_grouping_digits
        return cls(
            status=state.status,
            source=state.pair.source,
            destination=state.pair.destination,
            generation=state.generation,
            amount=state.amount,
            rate=state.rate,
            fetched_at=state.fetched_at,
            balance=state.balance_string(grouping),
            time=state.time_string(),
            can_compute=state.can_compute,
            result=state.result,
            result_text=state.result_string(grouping),
            alert=state.alert,
            alert_message=ALERT_MESSAGES.get(state.alert) if state.alert else None,
            error=state.error_message,
        )


@router.get("", response_model=ScreenOut, summary="Current screen state")
async def get_state(screen: ScreenController = Depends(get_screen)):
    return ScreenOut.from_controller(screen)


@router.post("/appear", response_model=ScreenOut, summary="Load the first quote")
async def appear(screen: ScreenController = Depends(get_screen)):
    await screen.appear()
    return ScreenOut.from_controller(screen)


@router.put("/pair", response_model=ScreenOut, summary="Select the currency pair")
async def select_pair(payload: PairIn, screen: ScreenController = Depends(get_screen)):
    await screen.select_pair(payload.source, payload.destination)
    return ScreenOut.from_controller(screen)


@router.put("/amount", response_model=ScreenOut, summary="Edit the amount text")
async def edit_amount(payload: AmountIn, screen: ScreenController = Depends(get_screen)):
    screen.edit_amount(payload.text)
    return ScreenOut.from_controller(screen)


@router.post("/compute", response_model=ScreenOut, summary="Compute the converted amount")
async def compute(screen: ScreenController = Depends(get_screen)):
    screen.compute()
    return ScreenOut.from_controller(screen)


@router.post("/dismiss", response_model=ScreenOut, summary="Dismiss the current alert")
async def dismiss(screen: ScreenController = Depends(get_screen)):
    screen.dismiss_alert()
    return ScreenOut.from_controller(screen)


@router.post("/retry", response_model=ScreenOut, summary="Reload the quote after an error")
async def retry(screen: ScreenController = Depends(get_screen)):
    await screen.retry()
    return ScreenOut.from_controller(screen)
