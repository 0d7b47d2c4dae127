"""
Workforce Module (``payroll_modules.workforce``).

Responsibility
--------------
Nouns of shift payroll: employees, contracts, shifts, pay periods and the
pay result records the engines return.

Architecture position
---------------------
**Modules layer** -- pure data definitions and document adapters.  No I/O.
"""

from payroll_modules.workforce.models import (
    Contract,
    Employee,
    PayPeriod,
    Shift,
    hours_from_times,
    parse_document_date,
)
from payroll_modules.workforce.results import (
    BasePay,
    BranchHours,
    DeductionBreakdown,
    EditableDeductions,
    InsuranceDetails,
    PayResult,
    TaxDetails,
    WeeklyHolidayResult,
    WeeklyHolidayWeek,
)

__all__ = [
    "BasePay",
    "BranchHours",
    "Contract",
    "DeductionBreakdown",
    "EditableDeductions",
    "Employee",
    "InsuranceDetails",
    "PayPeriod",
    "PayResult",
    "Shift",
    "TaxDetails",
    "WeeklyHolidayResult",
    "WeeklyHolidayWeek",
    "hours_from_times",
    "parse_document_date",
]
