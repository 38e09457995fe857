from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Sequence


# Enough digits to quantize any finite float without overflowing the context.
_FIXED_CONTEXT = Context(prec=400)


def average(values: Sequence[float]) -> float:
    """Arithmetic mean. Callers must not pass an empty sequence."""
    return sum(values) / len(values)


def percent_change(current: float, previous: float) -> float:
    """Percent change from ``previous`` to ``current``. ``previous`` must be non-zero."""
    return (current - previous) / previous * 100


def average_or(values: Sequence[float], fallback: float) -> float:
    return average(values) if len(values) else fallback


def to_fixed(value: float, digits: int) -> str:
    """Format like JavaScript's toFixed: half away from zero on the exact binary value.

    Infinity and NaN format as zero.
    """
    if not math.isfinite(value):
        value = 0.0
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_FIXED_CONTEXT))
