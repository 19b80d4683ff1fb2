"""Money / display formatting helpers.

Centralized so the rates endpoints and the screen state render numbers and
timestamps identically.
"""

from __future__ import annotations
import math
from datetime import datetime, timezone, tzinfo
from decimal import Context, Decimal, ROUND_FLOOR

TIME_FORMAT = "%Y-%m-%d / %H:%M:%S"

# Wide enough to quantize any finite float to cents.
_WIDE = Context(prec=400)


def floor2(value: float) -> Decimal:
    if not math.isfinite(value):
        raise ValueError(f"cannot format non-finite value {value!r}")
    return Decimal(str(value)).quantize(
        Decimal("0.01"), rounding=ROUND_FLOOR, context=_WIDE
    )


def format_grouped(value: float, min_grouping_digits: int = 2) -> str:
    """Render `value` floored to two decimals with ',' thousands grouping.

    Grouping only kicks in once the integer part has at least
    3 + min_grouping_digits digits, so 1300 stays '1300.00' while
    13000000 becomes '13,000,000.00'. Pass 1 for grouping from 1,000 up.
    """
    floored = floor2(value)
    sign = "-" if floored < 0 else ""
    integer, _, fraction = f"{abs(floored):.2f}".partition(".")
    if len(integer) >= 3 + max(min_grouping_digits, 1):
        integer = f"{int(integer):,}"
    return f"{sign}{integer}.{fraction}"


def format_timestamp(unix_seconds: float, tz: tzinfo | None = None) -> str:
    if not math.isfinite(unix_seconds):
        raise ValueError(f"cannot format non-finite timestamp {unix_seconds!r}")
    try:
        moment = datetime.fromtimestamp(unix_seconds, tz=tz or timezone.utc)
    except (OverflowError, OSError) as e:
        raise ValueError(f"timestamp {unix_seconds!r} is out of range") from e
    return moment.strftime(TIME_FORMAT)
