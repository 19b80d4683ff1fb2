from __future__ import annotations
from typing import Dict
from pydantic import BaseModel, ConfigDict, Field, FiniteFloat, model_validator

from .constants import CurrencyCode

MAX_TIMESTAMP = 253402300799


class CurrencyPair(BaseModel):
    """Ordered (source, destination) selection; the two sides never match."""

    model_config = ConfigDict(frozen=True)

    source: CurrencyCode
    destination: CurrencyCode

    @model_validator(mode="after")
    def not_same(self) -> "CurrencyPair":
        if self.source == self.destination:
            raise ValueError("destination cannot equal source")
        return self

    @property
    def code(self) -> str:
        return f"{self.source.value}{self.destination.value}"

    def __str__(self) -> str:
        return f"{self.source.value}/{self.destination.value}"


class RateQuote(BaseModel):
    """Decoded body of the live quote endpoint."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    quotes: Dict[str, FiniteFloat]
    source: str
    success: bool
    # unix seconds, capped at 9999-12-31T23:59:59Z
    timestamp: float = Field(..., ge=0, le=MAX_TIMESTAMP)

    def rate_for(self, pair: CurrencyPair) -> float | None:
        return self.quotes.get(pair.code)
