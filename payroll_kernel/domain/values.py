"""
Values -- Decimal helpers for whole-won payroll arithmetic.

Responsibility:
    Converts external numbers into ``Decimal`` and rounds monetary results
    to whole currency units.  Payroll amounts in this system are KRW, which
    has no minor unit, so every paid amount is an integral ``Decimal``.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Decimal-only arithmetic: floats are converted through ``str`` so the
      decimal value matches what the caller typed, never its binary
      approximation.
    - Rounding is half-up (ties away from zero for the non-negative amounts
      the engine produces).

Failure modes:
    - ValueError from ``to_decimal`` when the value is not numeric.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")
WON = Decimal("1")
CENT = Decimal("0.01")


def to_decimal(value: Any, default: Decimal | None = None) -> Decimal:
    """
    Convert an external numeric value to ``Decimal``.

    ``None`` and empty strings return ``default`` when one is given.

    Raises:
        ValueError: if the value is not numeric (or is missing with no default).
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is not None:
            return default
        raise ValueError("Missing numeric value")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert {value!r} to Decimal")
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Cannot convert {value!r} to Decimal") from exc
    if not result.is_finite():
        raise ValueError(f"Cannot convert {value!r} to Decimal")
    return result


def round_won(value: Decimal) -> Decimal:
    """Round to the nearest whole won (half-up)."""
    return value.quantize(WON, rounding=ROUND_HALF_UP)


def round_won_two_stage(value: Decimal) -> Decimal:
    """
    Round to two decimals first, then to the nearest whole won.

    Hourly wage components are settled this way so that a product such as
    ``7.5 h x 10,030`` lands on the same won a payroll clerk computes by hand.
    """
    return round_won(value.quantize(CENT, rounding=ROUND_HALF_UP))
