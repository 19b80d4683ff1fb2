from __future__ import annotations

import re
from dataclasses import dataclass

from exchange.core.errors import AmountParseError, AmountValidationError

"""Amount parsing and conversion.

Parsing is explicit and fallible: anything that is not plain digits with at
most one period raises AmountParseError, which is an AmountValidationError so
callers handle both as a "wrong value" and never crash on odd input.
"""

AMOUNT_CEILING: float = 10000

_AMOUNT_RE = re.compile(r"[0-9]+\.?[0-9]*|\.[0-9]+")


@dataclass(frozen=True)
class ConversionResult:
    amount: float
    rate: float
    value: float


def parse_amount(text: str) -> float:
    if not _AMOUNT_RE.fullmatch(text):
        raise AmountParseError(f"'{text}' is not a valid amount")
    return float(text)


def validate_amount(amount_text: str, ceiling: float = AMOUNT_CEILING) -> float:
    amount = parse_amount(amount_text)
    if amount == 0:
        raise AmountValidationError("amount must be greater than 0")
    if amount > ceiling:
        raise AmountValidationError(f"amount must not exceed {ceiling:g}")
    return amount


def compute_conversion(
    amount_text: str, rate: float | None, ceiling: float = AMOUNT_CEILING
) -> ConversionResult:
    if rate is None or rate <= 0:
        raise ValueError("a positive rate is required before computing")
    amount = validate_amount(amount_text, ceiling)
    return ConversionResult(amount=amount, rate=rate, value=amount * rate)
