"""
Probation splitter.

Partitions worked hours into probation-rate hours and full-rate hours by
comparing each shift's calendar date with the employee's inclusive
probation range.  Also answers whether a whole pay period lies inside the
probation range, which decides the monthly rate when no shifts exist to
prorate against.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from payroll_kernel.domain.values import ZERO
from payroll_modules.workforce.models import PayPeriod, Shift


@dataclass(frozen=True)
class ProbationSplit:
    probation_hours: Decimal = ZERO
    regular_hours: Decimal = ZERO

    @property
    def total_hours(self) -> Decimal:
        return self.probation_hours + self.regular_hours


def split_probation_hours(
    shifts: Iterable[Shift],
    probation_start: date | None,
    probation_end: date | None,
) -> ProbationSplit:
    """
    Split worked hours around the closed interval [start, end].

    Without both bounds every hour is regular.
    """
    probation = ZERO
    regular = ZERO
    has_range = probation_start is not None and probation_end is not None

    for shift in shifts:
        if has_range and probation_start <= shift.calendar_date <= probation_end:
            probation += shift.hours
        else:
            regular += shift.hours

    return ProbationSplit(probation_hours=probation, regular_hours=regular)


def is_period_in_probation(
    period: PayPeriod | None,
    probation_start: date | None,
    probation_end: date | None,
) -> bool:
    """True when every day of ``period`` lies inside the probation range."""
    if period is None or probation_start is None or probation_end is None:
        return False
    return probation_start <= period.start and period.end <= probation_end
