"""
Work-hours aggregator.

Sums worked hours over a set of shifts.  Shift hours are already net of
break time, so break time is reported separately as zero.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from payroll_kernel.domain.values import ZERO
from payroll_modules.workforce.models import Shift


@dataclass(frozen=True)
class WorkHours:
    total_work_hours: Decimal = ZERO
    total_break_time: Decimal = ZERO
    actual_work_hours: Decimal = ZERO


def sum_hours(shifts: Iterable[Shift]) -> Decimal:
    return sum((s.hours for s in shifts), ZERO)


def aggregate_work_hours(shifts: Iterable[Shift]) -> WorkHours:
    """Total and actual worked hours for the given shifts (0 when empty)."""
    total = sum_hours(shifts)
    return WorkHours(
        total_work_hours=total,
        total_break_time=ZERO,
        actual_work_hours=total,
    )
