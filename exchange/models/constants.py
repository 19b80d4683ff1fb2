"""Domain constants and enumerations for validation.

The calculator screen only offers a fixed set of four currencies.
"""

from enum import Enum
from typing import Dict


class CurrencyCode(str, Enum):
    KRW = "KRW"
    USD = "USD"
    JPY = "JPY"
    PHP = "PHP"

    @property
    def label(self) -> str:
        return CURRENCY_LABELS[self]


CURRENCY_LABELS: Dict[CurrencyCode, str] = {
    CurrencyCode.KRW: "Korea (KRW)",
    CurrencyCode.USD: "United States (USD)",
    CurrencyCode.JPY: "Japan (JPY)",
    CurrencyCode.PHP: "Philippines (PHP)",
}

LOADING_TEXT = "Loading..."
