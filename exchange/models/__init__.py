"""Pydantic domain models for the exchange calculator."""

from .constants import CURRENCY_LABELS, CurrencyCode  # re-export
from .quote import CurrencyPair, RateQuote

__all__ = [
    "CURRENCY_LABELS",
    "CurrencyCode",
    "CurrencyPair",
    "RateQuote",
]
