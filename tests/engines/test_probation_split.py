"""Tests for the probation splitter."""

from datetime import date, datetime
from decimal import Decimal

from payroll_engines.probation import is_period_in_probation, split_probation_hours
from payroll_modules.workforce import PayPeriod, Shift


class TestSplitProbationHours:

    def test_no_range_all_regular(self, make_shift):
        shifts = [make_shift(date(2025, 3, 3), "8"), make_shift(date(2025, 3, 4), "4")]
        split = split_probation_hours(shifts, None, None)
        assert split.probation_hours == Decimal("0")
        assert split.regular_hours == Decimal("12")

    def test_missing_one_bound_all_regular(self, make_shift):
        shifts = [make_shift(date(2025, 3, 3), "8")]
        split = split_probation_hours(shifts, date(2025, 3, 1), None)
        assert split.regular_hours == Decimal("8")

    def test_range_is_inclusive(self, make_shift):
        shifts = [
            make_shift(date(2025, 3, 1), "1"),
            make_shift(date(2025, 3, 10), "2"),
            make_shift(date(2025, 3, 11), "4"),
        ]
        split = split_probation_hours(shifts, date(2025, 3, 1), date(2025, 3, 10))
        assert split.probation_hours == Decimal("3")
        assert split.regular_hours == Decimal("4")

    def test_time_of_day_ignored(self):
        late_shift = Shift(work_date=datetime(2025, 3, 10, 23, 30), hours=Decimal("5"))
        split = split_probation_hours([late_shift], date(2025, 3, 1), date(2025, 3, 10))
        assert split.probation_hours == Decimal("5")

    def test_parts_sum_to_total(self, make_shift):
        shifts = [make_shift(date(2025, 3, d), "3.5") for d in range(1, 20)]
        split = split_probation_hours(shifts, date(2025, 3, 5), date(2025, 3, 12))
        assert split.total_hours == Decimal("3.5") * 19


class TestIsPeriodInProbation:

    def test_whole_month_inside(self):
        assert is_period_in_probation(PayPeriod(2025, 3), date(2025, 2, 15), date(2025, 4, 15))

    def test_exact_month_bounds(self):
        assert is_period_in_probation(PayPeriod(2025, 3), date(2025, 3, 1), date(2025, 3, 31))

    def test_partial_overlap_is_not_inside(self):
        assert not is_period_in_probation(PayPeriod(2025, 3), date(2025, 3, 2), date(2025, 4, 30))
        assert not is_period_in_probation(PayPeriod(2025, 3), date(2025, 1, 1), date(2025, 3, 30))

    def test_no_range_or_period(self):
        assert not is_period_in_probation(PayPeriod(2025, 3), None, None)
        assert not is_period_in_probation(None, date(2025, 1, 1), date(2025, 12, 31))
