"""
Pay Result Records (``payroll_modules.workforce.results``).

Responsibility
--------------
Frozen dataclass records returned by the payroll engines: the per-employee
``PayResult`` and its nested breakdowns (deductions, branch hours,
weekly-holiday week details).

Invariants enforced
-------------------
* Every field has a zero default; a ``PayResult`` is always fully
  populated, whichever calculation path produced it.
* ``DeductionBreakdown.total == insurance + tax``.
* ``PayResult.gross_pay == base_pay + weekly_holiday_pay`` and
  ``net_pay == gross_pay - deductions.total`` (checked by the engines that
  build results, not re-validated here).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from payroll_kernel.domain.classification import EmploymentType, PayBasis
from payroll_kernel.domain.values import ZERO


@dataclass(frozen=True)
class InsuranceDetails:
    """Employee-side social-insurance premiums."""

    national_pension: Decimal = ZERO
    health_insurance: Decimal = ZERO
    long_term_care: Decimal = ZERO
    employment_insurance: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return (
            self.national_pension
            + self.health_insurance
            + self.long_term_care
            + self.employment_insurance
        )


@dataclass(frozen=True)
class TaxDetails:
    """Withheld taxes.

    Wage earners pay ``income_tax`` + ``local_income_tax``; business-income
    earners pay the flat ``withholding_tax`` instead.
    """

    income_tax: Decimal = ZERO
    local_income_tax: Decimal = ZERO
    withholding_tax: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.income_tax + self.local_income_tax + self.withholding_tax


@dataclass(frozen=True)
class EditableDeductions:
    """The six wage-earner deduction components a clerk may correct by hand."""

    national_pension: Decimal = ZERO
    health_insurance: Decimal = ZERO
    long_term_care: Decimal = ZERO
    employment_insurance: Decimal = ZERO
    income_tax: Decimal = ZERO
    local_income_tax: Decimal = ZERO


@dataclass(frozen=True)
class DeductionBreakdown:
    """Itemized deductions for one pay result."""

    insurance: Decimal = ZERO
    tax: Decimal = ZERO
    total: Decimal = ZERO
    insurance_details: InsuranceDetails = field(default_factory=InsuranceDetails)
    tax_details: TaxDetails = field(default_factory=TaxDetails)
    editable: EditableDeductions = field(default_factory=EditableDeductions)


@dataclass(frozen=True)
class BranchHours:
    """Worked hours at one work site."""

    branch_id: str
    branch_name: str
    work_hours: Decimal


@dataclass(frozen=True)
class WeeklyHolidayWeek:
    """Weekly-holiday outcome for one Monday-Sunday week.

    ``hours`` and ``pay`` are the allowance granted (zero when not
    eligible); ``worked_hours`` is what was worked that week.
    """

    week_start: date
    week_end: date
    worked_hours: Decimal
    hours: Decimal
    pay: Decimal
    eligible: bool
    reason: str | None = None


@dataclass(frozen=True)
class WeeklyHolidayResult:
    """Totals of the weekly-holiday calculation for a period."""

    pay: Decimal = ZERO
    hours: Decimal = ZERO
    weeks: tuple[WeeklyHolidayWeek, ...] = ()


@dataclass(frozen=True)
class BasePay:
    """Base pay split between probation-rate and full-rate components."""

    probation_pay: Decimal = ZERO
    regular_pay: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.probation_pay + self.regular_pay


@dataclass(frozen=True)
class PayResult:
    """
    Pay breakdown for one employee for one period.

    ``period`` is the evaluated month as "YYYY-MM".  It is None only
    when the caller gave no period and there were no shifts to take
    one from; month-level rules were then skipped.
    """

    employee_id: str
    employee_name: str
    employment_type: str
    classification: EmploymentType = EmploymentType.UNSPECIFIED
    pay_basis: PayBasis = PayBasis.HOURLY
    salary_type: str | None = None
    salary_amount: Decimal = ZERO
    weekly_work_hours: Decimal = Decimal("40")
    period: str | None = None
    total_work_hours: Decimal = ZERO
    total_break_time: Decimal = ZERO
    actual_work_hours: Decimal = ZERO
    base_pay: Decimal = ZERO
    gross_pay: Decimal = ZERO
    deductions: DeductionBreakdown = field(default_factory=DeductionBreakdown)
    net_pay: Decimal = ZERO
    branches: tuple[BranchHours, ...] = ()
    probation_hours: Decimal = ZERO
    regular_hours: Decimal = ZERO
    probation_pay: Decimal = ZERO
    regular_pay: Decimal = ZERO
    weekly_holiday_pay: Decimal = ZERO
    weekly_holiday_hours: Decimal = ZERO
    includes_weekly_holiday_in_wage: bool = False
    weekly_holiday_details: tuple[WeeklyHolidayWeek, ...] = ()
    unpaid_leave_days: int = 0
    unpaid_leave_deduction: Decimal = ZERO
    rule_set_id: str = ""
