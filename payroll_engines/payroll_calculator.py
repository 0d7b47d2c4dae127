"""
Payroll Calculator -- dispatcher over classification and pay basis.

Responsibility:
    Turns one employee's contract and worked shifts for a period into a
    fully-populated ``PayResult``: worked hours, probation split, base pay,
    weekly-holiday allowance, gross pay, statutory deductions, net pay and
    per-branch hours.

Architecture position:
    Engines -- pure calculation, zero I/O.  Composes the sibling engines
    (work_hours, probation, weekly_holiday, base_pay, deductions,
    branch_hours).  Contract selection and document loading belong to
    ``payroll_services``.

Calculation paths:
    =================  ===========================  =====================
    Classification     Base pay                     Deductions
    =================  ===========================  =====================
    Wage earner        hourly (+allowance) or       insurance + income
                       monthly prorated             tax + local tax
    Contractor         hourly (+allowance) or       flat 3.3 %
                       monthly prorated
    Foreign worker     as contractor                flat 3.3 %
    Daily worker       hourly, no allowance         none
    Unspecified        as contractor, no allowance  flat 3.3 %
    No contract        nothing paid                 none
    =================  ===========================  =====================

Invariants enforced:
    - ``gross_pay == base_pay + weekly_holiday_pay``.
    - ``net_pay == gross_pay - deductions.total``.
    - ``probation_hours + regular_hours == total_work_hours``.
    - Identical inputs always produce identical results.

Failure modes:
    - Unrecognized classification: never raises; falls back to the
      contractor path and logs ``unknown_employment_type``.
    - Invalid shift hours are rejected when the ``Shift`` is built.

Audit relevance:
    Each ``calculate`` call emits PAYROLL_ENGINE_TRACE with an input
    fingerprint, and a ``payroll_calculated`` record with the amounts.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from payroll_config.schema import DEFAULT_RULES, PayrollRuleSet
from payroll_engines.base_pay import hourly_base_pay, monthly_base_pay
from payroll_engines.branch_hours import summarize_branch_hours
from payroll_engines.deductions import (
    apply_corrections,
    business_income_deductions,
    no_deductions,
    wage_earner_deductions,
)
from payroll_engines.probation import is_period_in_probation, split_probation_hours
from payroll_engines.tracer import traced_engine
from payroll_engines.weekly_holiday import (
    calculate_weekly_holiday,
    is_weekly_holiday_applicable,
)
from payroll_engines.work_hours import aggregate_work_hours
from payroll_kernel.domain.classification import (
    EmploymentType,
    PayBasis,
    classify_employment,
    classify_pay_basis,
    is_known_employment_spelling,
)
from payroll_kernel.logging_config import get_logger
from payroll_modules.workforce.models import Contract, Employee, PayPeriod, Shift
from payroll_modules.workforce.results import (
    BasePay,
    DeductionBreakdown,
    PayResult,
    WeeklyHolidayResult,
)

logger = get_logger("engines.payroll_calculator")


def resolve_period(shifts: tuple[Shift, ...], period: PayPeriod | None) -> PayPeriod | None:
    """The explicit period, else the month of the earliest shift."""
    if period is not None:
        return period
    if not shifts:
        return None
    return PayPeriod.of(min(s.calendar_date for s in shifts))


class PayrollCalculator:
    """
    Pure payroll dispatcher.

    Holds only the rule set; no state is kept between calls, so one
    instance may serve any number of employees.
    """

    def __init__(self, rules: PayrollRuleSet = DEFAULT_RULES):
        self._rules = rules

    @property
    def rules(self) -> PayrollRuleSet:
        return self._rules

    @traced_engine("payroll", "1.0", fingerprint_fields=("employee", "contract", "shifts", "period"))
    def calculate(
        self,
        employee: Employee,
        contract: Contract | None,
        shifts: Iterable[Shift],
        period: PayPeriod | None = None,
    ) -> PayResult:
        """
        Compute the pay breakdown for ``employee`` over ``period``.

        Args:
            employee: Identity and probation range of the worker.
            contract: Effective contract, or None when none exists.
            shifts: Worked shifts already filtered to the period.
            period: Month evaluated.  Derived from the earliest shift when
                omitted; with neither, no month-level rules apply.
        """
        shifts = tuple(shifts)
        period = resolve_period(shifts, period)

        if contract is None:
            logger.info(
                "payroll_no_contract",
                extra={"employee_id": employee.id, "period": str(period) if period else None},
            )
            return self._no_pay_result(employee, shifts, period)

        classification = classify_employment(contract.employment_type)
        if classification is EmploymentType.UNSPECIFIED:
            event = (
                "unspecified_employment_type"
                if is_known_employment_spelling(contract.employment_type)
                else "unknown_employment_type"
            )
            logger.warning(
                event,
                extra={
                    "employee_id": employee.id,
                    "employment_type": contract.employment_type,
                    "fallback": EmploymentType.CONTRACTOR.value,
                },
            )
        pay_basis = classify_pay_basis(contract.salary_type)

        if classification is EmploymentType.DAILY_WORKER:
            base, allowance, deductions = self._daily_worker(employee, contract, shifts)
        elif classification is EmploymentType.WAGE_EARNER:
            base, allowance = self._base_and_allowance(
                employee, contract, shifts, period, classification, pay_basis
            )
            deductions = wage_earner_deductions(base.total + allowance.pay, self._rules)
        else:
            base, allowance = self._base_and_allowance(
                employee, contract, shifts, period, classification, pay_basis
            )
            deductions = business_income_deductions(base.total + allowance.pay, self._rules)

        result = self._assemble(
            employee=employee,
            contract=contract,
            shifts=shifts,
            period=period,
            classification=classification,
            pay_basis=pay_basis,
            base=base,
            allowance=allowance,
            deductions=deductions,
        )

        logger.info(
            "payroll_calculated",
            extra={
                "employee_id": employee.id,
                "period": result.period,
                "classification": classification.value,
                "pay_basis": pay_basis.value,
                "gross_pay": str(result.gross_pay),
                "deductions": str(result.deductions.total),
                "net_pay": str(result.net_pay),
            },
        )
        return result

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def _base_and_allowance(
        self,
        employee: Employee,
        contract: Contract,
        shifts: tuple[Shift, ...],
        period: PayPeriod | None,
        classification: EmploymentType,
        pay_basis: PayBasis,
    ) -> tuple[BasePay, WeeklyHolidayResult]:
        split = split_probation_hours(shifts, employee.probation_start, employee.probation_end)

        if pay_basis is PayBasis.MONTHLY:
            in_probation = is_period_in_probation(
                period, employee.probation_start, employee.probation_end
            )
            base = monthly_base_pay(split, contract.salary_amount, in_probation, self._rules)
            return base, WeeklyHolidayResult()

        base = hourly_base_pay(split, contract.salary_amount, self._rules)
        allowance = WeeklyHolidayResult()
        if period is not None and is_weekly_holiday_applicable(
            classification, pay_basis, self._pre_included(employee, contract)
        ):
            allowance = calculate_weekly_holiday(
                shifts, contract.salary_amount, period, self._rules
            )
        return base, allowance

    def _daily_worker(
        self,
        employee: Employee,
        contract: Contract,
        shifts: tuple[Shift, ...],
    ) -> tuple[BasePay, WeeklyHolidayResult, DeductionBreakdown]:
        # Daily workers are always paid by the hour, whatever the salary type.
        split = split_probation_hours(shifts, employee.probation_start, employee.probation_end)
        base = hourly_base_pay(split, contract.salary_amount, self._rules)
        return base, WeeklyHolidayResult(), no_deductions()

    @staticmethod
    def _pre_included(employee: Employee, contract: Contract) -> bool:
        return employee.includes_weekly_holiday_in_wage or contract.includes_holiday_allowance

    @staticmethod
    def _label(contract: Contract, classification: EmploymentType) -> str:
        if classification is EmploymentType.FOREIGN_WORKER:
            return classification.label
        raw = (contract.employment_type or "").strip()
        return raw or classification.label

    # ------------------------------------------------------------------
    # Result assembly
    # ------------------------------------------------------------------

    def _assemble(
        self,
        *,
        employee: Employee,
        contract: Contract,
        shifts: tuple[Shift, ...],
        period: PayPeriod | None,
        classification: EmploymentType,
        pay_basis: PayBasis,
        base: BasePay,
        allowance: WeeklyHolidayResult,
        deductions: DeductionBreakdown,
    ) -> PayResult:
        hours = aggregate_work_hours(shifts)
        split = split_probation_hours(shifts, employee.probation_start, employee.probation_end)
        gross = base.total + allowance.pay

        return PayResult(
            employee_id=employee.id,
            employee_name=employee.name,
            employment_type=self._label(contract, classification),
            classification=classification,
            pay_basis=pay_basis,
            salary_type=contract.salary_type,
            salary_amount=contract.salary_amount,
            weekly_work_hours=contract.weekly_work_hours,
            period=period.key if period else None,
            total_work_hours=hours.total_work_hours,
            total_break_time=hours.total_break_time,
            actual_work_hours=hours.actual_work_hours,
            base_pay=base.total,
            gross_pay=gross,
            deductions=deductions,
            net_pay=gross - deductions.total,
            branches=summarize_branch_hours(shifts),
            probation_hours=split.probation_hours,
            regular_hours=split.regular_hours,
            probation_pay=base.probation_pay,
            regular_pay=base.regular_pay,
            weekly_holiday_pay=allowance.pay,
            weekly_holiday_hours=allowance.hours,
            includes_weekly_holiday_in_wage=self._pre_included(employee, contract),
            weekly_holiday_details=allowance.weeks,
            rule_set_id=self._rules.rule_set_id,
        )

    def _no_pay_result(
        self,
        employee: Employee,
        shifts: tuple[Shift, ...],
        period: PayPeriod | None,
    ) -> PayResult:
        hours = aggregate_work_hours(shifts)
        split = split_probation_hours(shifts, employee.probation_start, employee.probation_end)
        return PayResult(
            employee_id=employee.id,
            employee_name=employee.name,
            employment_type=EmploymentType.UNSPECIFIED.label,
            classification=EmploymentType.UNSPECIFIED,
            period=period.key if period else None,
            total_work_hours=hours.total_work_hours,
            total_break_time=hours.total_break_time,
            actual_work_hours=hours.actual_work_hours,
            branches=summarize_branch_hours(shifts),
            probation_hours=split.probation_hours,
            regular_hours=split.regular_hours,
            includes_weekly_holiday_in_wage=employee.includes_weekly_holiday_in_wage,
            rule_set_id=self._rules.rule_set_id,
        )


def calculate_pay(
    employee: Employee,
    contract: Contract | None,
    shifts: Iterable[Shift],
    period: PayPeriod | None = None,
    rules: PayrollRuleSet = DEFAULT_RULES,
) -> PayResult:
    """Convenience wrapper: ``PayrollCalculator(rules).calculate(...)``."""
    return PayrollCalculator(rules).calculate(employee, contract, shifts, period)


def correct_deductions(result: PayResult, corrections: Mapping[str, Any]) -> PayResult:
    """
    Return ``result`` with hand-corrected deduction components.

    Gross pay is unchanged; deductions totals and net pay are recomputed.
    """
    deductions = apply_corrections(result.deductions, corrections)
    corrected = replace(
        result,
        deductions=deductions,
        net_pay=result.gross_pay - deductions.total,
    )
    logger.info(
        "payroll_deductions_corrected",
        extra={
            "employee_id": result.employee_id,
            "period": result.period,
            "net_pay": str(corrected.net_pay),
        },
    )
    return corrected


__all__ = [
    "PayrollCalculator",
    "calculate_pay",
    "correct_deductions",
    "resolve_period",
]
