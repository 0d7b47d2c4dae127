"""Tests for the work-hours aggregator and the branch-hours summarizer."""

from datetime import date
from decimal import Decimal

from payroll_engines.branch_hours import summarize_branch_hours
from payroll_engines.work_hours import aggregate_work_hours


class TestAggregateWorkHours:

    def test_empty_is_zero(self):
        hours = aggregate_work_hours([])
        assert hours.total_work_hours == Decimal("0")
        assert hours.actual_work_hours == Decimal("0")
        assert hours.total_break_time == Decimal("0")

    def test_sums_hours(self, make_shift):
        shifts = [
            make_shift(date(2025, 3, 3), "6"),
            make_shift(date(2025, 3, 4), "7.5"),
            make_shift(date(2025, 3, 5), "0.25"),
        ]
        hours = aggregate_work_hours(shifts)
        assert hours.total_work_hours == Decimal("13.75")
        assert hours.actual_work_hours == Decimal("13.75")

    def test_break_time_reported_as_zero(self, make_shift):
        hours = aggregate_work_hours([make_shift(date(2025, 3, 3), "8")])
        assert hours.total_break_time == Decimal("0")


class TestSummarizeBranchHours:

    def test_groups_by_branch_in_first_seen_order(self, make_shift):
        shifts = [
            make_shift(date(2025, 3, 3), "6", "b-east", "동쪽점"),
            make_shift(date(2025, 3, 4), "5", "b-main", "본점"),
            make_shift(date(2025, 3, 5), "4", "b-east", "동쪽점"),
        ]
        branches = summarize_branch_hours(shifts)
        assert [b.branch_id for b in branches] == ["b-east", "b-main"]
        assert branches[0].work_hours == Decimal("10")
        assert branches[1].work_hours == Decimal("5")

    def test_first_seen_name_wins(self, make_shift):
        shifts = [
            make_shift(date(2025, 3, 3), "6", "b-1", "Old Name"),
            make_shift(date(2025, 3, 4), "2", "b-1", "Renamed"),
        ]
        (branch,) = summarize_branch_hours(shifts)
        assert branch.branch_name == "Old Name"
        assert branch.work_hours == Decimal("8")

    def test_empty(self):
        assert summarize_branch_hours([]) == ()
