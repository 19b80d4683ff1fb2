"""Amount text filtering.

The amount field only ever holds ASCII digits and '.'. Anything else typed or
pasted is dropped silently rather than rejected. The number of periods is not
limited here; parsing (see rates.conversion.parse_amount) reports that case.
"""

from __future__ import annotations

_ALLOWED = frozenset("0123456789.")


def filter_amount_text(raw: str) -> str:
    return "".join(ch for ch in raw if ch in _ALLOWED)

