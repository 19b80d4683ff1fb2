from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from exchange.models.constants import CurrencyCode
from exchange.models.quote import CurrencyPair
from exchange.services.input_filter import filter_amount_text
from exchange.services.money import format_grouped
from exchange.services.rates.conversion import compute_conversion, validate_amount
from exchange.services.rates.fetcher import RateFetcher
from .rates import build_pair, get_fetcher

router = APIRouter(prefix="/convert", tags=["convert"])


class ConvertIn(BaseModel):
    source: CurrencyCode
    destination: CurrencyCode
    amount: str = Field(..., description="Amount text; characters other than digits and '.' are dropped")


class ConvertOut(BaseModel):
    pair: str
    amount: float
    rate: float
    value: float
    value_text: str
    timestamp: float


@router.post("/", response_model=ConvertOut, summary="Fetch the live rate and convert an amount")
async def convert(
    payload: ConvertIn,
    request: Request,
    fetcher: RateFetcher = Depends(get_fetcher),
):
    pair: CurrencyPair = build_pair(payload.source, payload.destination)
    settings = request.app.state.settings
    amount_text = filter_amount_text(payload.amount)
    # amount is checked before any quote is requested
    validate_amount(amount_text, ceiling=settings.amount_ceiling)
    result = await fetcher.fetch_or_raise(pair)
    conversion = compute_conversion(amount_text, result.rate, ceiling=settings.amount_ceiling)
    return ConvertOut(
        pair=pair.code,
        amount=conversion.amount,
        rate=conversion.rate,
        value=conversion.value,
        value_text=f"{format_grouped(conversion.value, settings.min_grouping_digits)} {pair.destination.value}",
        timestamp=result.timestamp,
    )
