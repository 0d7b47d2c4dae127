"""Branch-hours summarizer: worked hours per work site."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from payroll_kernel.domain.values import ZERO
from payroll_modules.workforce.models import Shift
from payroll_modules.workforce.results import BranchHours


def summarize_branch_hours(shifts: Iterable[Shift]) -> tuple[BranchHours, ...]:
    """
    Group shifts by branch id and sum their hours.

    The branch name is taken from the first shift seen for each branch;
    branches appear in first-seen order.
    """
    names: dict[str, str] = {}
    hours: dict[str, Decimal] = {}
    for shift in shifts:
        if shift.branch_id not in hours:
            names[shift.branch_id] = shift.branch_name
            hours[shift.branch_id] = ZERO
        hours[shift.branch_id] += shift.hours

    return tuple(
        BranchHours(branch_id=branch_id, branch_name=names[branch_id], work_hours=total)
        for branch_id, total in hours.items()
    )
