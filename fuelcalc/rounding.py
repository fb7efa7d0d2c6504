from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

MONEY_PLACES = 5
_QUANTUM = Decimal(1).scaleb(-MONEY_PLACES)


def round5(value: float) -> float:
    """Round half-up to five decimal places; non-finite values pass through."""
    if not math.isfinite(value):
        return value
    return float(Decimal(repr(value)).quantize(_QUANTUM, rounding=ROUND_HALF_UP))


def round2(value: float) -> float:
    if not math.isfinite(value):
        return value
    return float(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
