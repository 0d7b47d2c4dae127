"""
Tests for the weekly-holiday allowance calculator.

March 2025 starts on a Saturday and ends on a Monday, so the first week
(2/24-3/2) is settled in March and the last week (3/31-4/6) is deferred.
"""

from datetime import date
from decimal import Decimal

import pytest

from payroll_engines.weekly_holiday import (
    REASON_DEFERRED,
    REASON_INSUFFICIENT,
    calculate_weekly_holiday,
    group_shifts_by_week,
    is_weekly_holiday_applicable,
    week_start_of,
)
from payroll_kernel.domain.classification import EmploymentType, PayBasis
from payroll_modules.workforce import PayPeriod

RATE = Decimal("10000")


class TestWeekStart:

    @pytest.mark.parametrize(
        "day, monday",
        [
            (date(2025, 3, 3), date(2025, 3, 3)),  # Monday
            (date(2025, 3, 5), date(2025, 3, 3)),  # Wednesday
            (date(2025, 3, 9), date(2025, 3, 3)),  # Sunday closes the week
            (date(2025, 3, 1), date(2025, 2, 24)),  # Saturday
        ],
    )
    def test_monday_of_week(self, day, monday):
        assert week_start_of(day) == monday

    def test_grouping(self, make_shift):
        shifts = [
            make_shift(date(2025, 3, 2)),
            make_shift(date(2025, 3, 3)),
            make_shift(date(2025, 3, 9)),
        ]
        weeks = group_shifts_by_week(shifts)
        assert sorted(weeks) == [date(2025, 2, 24), date(2025, 3, 3)]
        assert len(weeks[date(2025, 3, 3)]) == 2


class TestThreshold:

    def test_below_threshold_pays_nothing(self, make_shift, march):
        shifts = [make_shift(date(2025, 3, 3), "7.49"), make_shift(date(2025, 3, 4), "7.50")]
        result = calculate_weekly_holiday(shifts, RATE, march)

        (week,) = result.weeks
        assert week.worked_hours == Decimal("14.99")
        assert not week.eligible
        assert week.pay == Decimal("0")
        assert week.reason == REASON_INSUFFICIENT
        assert result.pay == Decimal("0")

    def test_exactly_threshold_is_eligible(self, make_shift, march):
        shifts = [make_shift(date(2025, 3, 10), "7.5"), make_shift(date(2025, 3, 11), "7.5")]
        result = calculate_weekly_holiday(shifts, RATE, march)

        (week,) = result.weeks
        assert week.eligible
        assert week.reason is None
        assert week.hours == Decimal("3")
        assert week.pay == Decimal("30000")
        assert result.pay == Decimal("30000")
        assert result.hours == Decimal("3")

    def test_allowance_rounded_to_won(self, make_shift, march):
        shifts = [make_shift(date(2025, 3, 10), "16")]
        result = calculate_weekly_holiday(shifts, Decimal("10030"), march)
        # 16 / 5 = 3.2 h x 10,030 = 32,096
        assert result.pay == Decimal("32096")


class TestMonthBoundary:

    def test_week_ending_after_month_is_deferred(self, make_shift, march):
        shifts = [make_shift(date(2025, 3, 31), "8"), make_shift(date(2025, 4, 1), "8")]
        result = calculate_weekly_holiday(shifts, RATE, march)

        (week,) = result.weeks
        assert week.week_start == date(2025, 3, 31)
        assert week.week_end == date(2025, 4, 6)
        assert not week.eligible
        assert week.reason == REASON_DEFERRED
        assert result.pay == Decimal("0")

    def test_deferred_week_is_paid_next_month(self, make_shift):
        shifts = [make_shift(date(2025, 3, 31), "8"), make_shift(date(2025, 4, 1), "8")]
        result = calculate_weekly_holiday(shifts, RATE, PayPeriod(2025, 4))

        (week,) = result.weeks
        assert week.eligible
        assert week.pay == Decimal("32000")

    def test_short_deferred_week_reports_deferral(self, make_shift, march):
        result = calculate_weekly_holiday([make_shift(date(2025, 3, 31), "4")], RATE, march)
        assert result.weeks[0].reason == REASON_DEFERRED

    def test_week_started_last_month_is_paid_now(self, make_shift, march):
        shifts = [make_shift(date(2025, 2, 26), "8"), make_shift(date(2025, 3, 1), "8")]
        result = calculate_weekly_holiday(shifts, RATE, march)

        (week,) = result.weeks
        assert week.week_start == date(2025, 2, 24)
        assert week.week_end == date(2025, 3, 2)
        assert week.eligible
        assert week.pay == Decimal("32000")

    def test_sunday_on_last_day_is_paid_now(self, make_shift):
        # August 2025 ends on a Sunday.
        shifts = [make_shift(date(2025, 8, 25), "8"), make_shift(date(2025, 8, 31), "8")]
        result = calculate_weekly_holiday(shifts, RATE, PayPeriod(2025, 8))
        assert result.weeks[0].eligible
        assert result.pay == Decimal("32000")

    def test_weeks_outside_period_are_ignored(self, make_shift, march):
        shifts = [make_shift(date(2025, 2, 17), "20"), make_shift(date(2025, 3, 12), "20")]
        result = calculate_weekly_holiday(shifts, RATE, march)
        assert [w.week_start for w in result.weeks] == [date(2025, 3, 10)]


class TestTotals:

    def test_multiple_weeks_sorted_and_summed(self, make_shift, march):
        shifts = [
            make_shift(date(2025, 3, 17), "20"),
            make_shift(date(2025, 3, 3), "15"),
            make_shift(date(2025, 3, 10), "5"),
        ]
        result = calculate_weekly_holiday(shifts, RATE, march)

        assert [w.week_start for w in result.weeks] == [
            date(2025, 3, 3),
            date(2025, 3, 10),
            date(2025, 3, 17),
        ]
        assert [w.eligible for w in result.weeks] == [True, False, True]
        assert result.hours == Decimal("7")
        assert result.pay == Decimal("70000")

    def test_no_shifts(self, march):
        result = calculate_weekly_holiday([], RATE, march)
        assert result.pay == Decimal("0")
        assert result.weeks == ()


class TestApplicability:

    @pytest.mark.parametrize(
        "classification",
        [EmploymentType.WAGE_EARNER, EmploymentType.CONTRACTOR, EmploymentType.FOREIGN_WORKER],
    )
    def test_hourly_classes_receive_it(self, classification):
        assert is_weekly_holiday_applicable(classification, PayBasis.HOURLY, False)

    @pytest.mark.parametrize(
        "classification",
        [EmploymentType.DAILY_WORKER, EmploymentType.UNSPECIFIED],
    )
    def test_other_classes_do_not(self, classification):
        assert not is_weekly_holiday_applicable(classification, PayBasis.HOURLY, False)

    def test_monthly_does_not(self):
        assert not is_weekly_holiday_applicable(EmploymentType.WAGE_EARNER, PayBasis.MONTHLY, False)

    def test_pre_included_does_not(self):
        assert not is_weekly_holiday_applicable(EmploymentType.WAGE_EARNER, PayBasis.HOURLY, True)
