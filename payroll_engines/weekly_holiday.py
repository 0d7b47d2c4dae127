"""
Weekly-holiday allowance calculator (주휴수당).

Responsibility:
    Groups shifts into Monday-Sunday weeks, decides which weeks earn the
    paid weekly holiday, and totals the allowance owed for one pay period.

Architecture position:
    Engines -- pure calculation, zero I/O.  Called by the dispatcher for
    hourly workers whose classification receives the allowance.

Invariants enforced:
    - A week earns the allowance only when its worked hours reach the
      rule set's threshold (15 h); allowance hours are worked hours
      divided by the workdays per week (5).
    - A week whose Sunday falls after the period's last day is deferred:
      it contributes nothing to this period, whatever its hours.
    - Only weeks overlapping the period are reported, in week order.

Failure modes:
    - None beyond invalid inputs rejected by the models.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta
from decimal import Decimal

from payroll_config.schema import DEFAULT_RULES, PayrollRuleSet
from payroll_kernel.domain.classification import EmploymentType, PayBasis
from payroll_kernel.domain.values import ZERO, round_won
from payroll_kernel.logging_config import get_logger
from payroll_modules.workforce.models import PayPeriod, Shift
from payroll_modules.workforce.results import WeeklyHolidayResult, WeeklyHolidayWeek

logger = get_logger("engines.weekly_holiday")

REASON_DEFERRED = "deferred to next month"
REASON_INSUFFICIENT = "insufficient hours/attendance"


def week_start_of(day: date) -> date:
    """Monday of the Monday-Sunday week containing ``day``."""
    return day - timedelta(days=day.weekday())


def group_shifts_by_week(shifts: Iterable[Shift]) -> dict[date, list[Shift]]:
    """Bucket shifts by the Monday of their week."""
    weeks: dict[date, list[Shift]] = {}
    for shift in shifts:
        weeks.setdefault(week_start_of(shift.calendar_date), []).append(shift)
    return weeks


def is_weekly_holiday_applicable(
    classification: EmploymentType,
    pay_basis: PayBasis,
    pre_included: bool,
) -> bool:
    """Whether the allowance is computed at all for this worker."""
    return (
        classification.receives_weekly_holiday
        and pay_basis is PayBasis.HOURLY
        and not pre_included
    )


def evaluate_week(
    week_start: date,
    worked_hours: Decimal,
    hourly_rate: Decimal,
    period: PayPeriod,
    rules: PayrollRuleSet = DEFAULT_RULES,
) -> WeeklyHolidayWeek:
    """Allowance outcome for a single week."""
    week_end = week_start + timedelta(days=6)

    if week_end > period.end:
        return WeeklyHolidayWeek(
            week_start=week_start,
            week_end=week_end,
            worked_hours=worked_hours,
            hours=ZERO,
            pay=ZERO,
            eligible=False,
            reason=REASON_DEFERRED,
        )

    if worked_hours < rules.weekly_holiday.min_weekly_hours:
        return WeeklyHolidayWeek(
            week_start=week_start,
            week_end=week_end,
            worked_hours=worked_hours,
            hours=ZERO,
            pay=ZERO,
            eligible=False,
            reason=REASON_INSUFFICIENT,
        )

    allowance_hours = worked_hours / rules.weekly_holiday.workdays_per_week
    return WeeklyHolidayWeek(
        week_start=week_start,
        week_end=week_end,
        worked_hours=worked_hours,
        hours=allowance_hours,
        pay=round_won(allowance_hours * hourly_rate),
        eligible=True,
    )


def calculate_weekly_holiday(
    shifts: Iterable[Shift],
    hourly_rate: Decimal,
    period: PayPeriod,
    rules: PayrollRuleSet = DEFAULT_RULES,
) -> WeeklyHolidayResult:
    """
    Total weekly-holiday allowance for ``period``.

    Weeks that started in the previous month are settled here when their
    Sunday falls inside ``period``; weeks running into the next month are
    listed as deferred.
    """
    grouped = group_shifts_by_week(shifts)
    weeks: list[WeeklyHolidayWeek] = []

    for week_start in sorted(grouped):
        week_end = week_start + timedelta(days=6)
        if week_end < period.start or week_start > period.end:
            continue
        worked = sum((s.hours for s in grouped[week_start]), ZERO)
        weeks.append(evaluate_week(week_start, worked, hourly_rate, period, rules))

    total_pay = sum((w.pay for w in weeks), ZERO)
    total_hours = sum((w.hours for w in weeks), ZERO)

    logger.debug(
        "weekly_holiday_calculated",
        extra={
            "period": period.key,
            "weeks": len(weeks),
            "eligible_weeks": sum(1 for w in weeks if w.eligible),
            "pay": str(total_pay),
        },
    )

    return WeeklyHolidayResult(pay=total_pay, hours=total_hours, weeks=tuple(weeks))
