from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, ValidationError

from exchange.models.constants import CurrencyCode
from exchange.models.quote import CurrencyPair
from exchange.services.money import format_grouped, format_timestamp
from exchange.services.rates.fetcher import RateFetcher

"""Rates router: one-shot live quote lookup for a currency pair.

    - GET /rates/{source}/{destination} -> rate, timestamp and display strings

Upstream failures propagate as NetworkError / DecodeError and are rendered
by the exception handlers registered in create_app (502).
"""

router = APIRouter(prefix="/rates", tags=["rates"])


def get_fetcher(request: Request) -> RateFetcher:
    return request.app.state.fetcher


def build_pair(source: CurrencyCode, destination: CurrencyCode) -> CurrencyPair:
    try:
        return CurrencyPair(source=source, destination=destination)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail="destination cannot equal source") from e


class RateOut(BaseModel):
    pair: str
    source: CurrencyCode
    destination: CurrencyCode
    rate: float
    timestamp: float
    balance: str
    time: str


@router.get(
    "/{source}/{destination}",
    response_model=RateOut,
    summary="Fetch the live rate for a currency pair",
)
async def get_rate(
    source: CurrencyCode,
    destination: CurrencyCode,
    request: Request,
    fetcher: RateFetcher = Depends(get_fetcher),
):
    pair = build_pair(source, destination)
    result = await fetcher.fetch_or_raise(pair)
    grouping = request.app.state.settings.min_grouping_digits
    return RateOut(
        pair=pair.code,
        source=pair.source,
        destination=pair.destination,
        rate=result.rate,
        timestamp=result.timestamp,
        balance=f"{format_grouped(result.rate, grouping)} {destination.value} / {source.value}",
        time=format_timestamp(result.timestamp),
    )
