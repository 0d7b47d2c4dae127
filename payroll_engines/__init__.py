"""
Module: payroll_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    payroll calculation engines.  This is the import surface for higher
    layers (payroll_services, scripts).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May import payroll_kernel, payroll_config.schema and
    payroll_modules.workforce.  MUST NOT import payroll_services.

Invariants enforced:
    - Purity: engines never read the clock.  Periods are passed in.
    - Decimal-only arithmetic; paid amounts are whole won.
    - Determinism: identical inputs always produce identical outputs.

Audit relevance:
    ``PayrollCalculator.calculate`` is traced via ``@traced_engine``
    (see ``payroll_engines.tracer``), emitting PAYROLL_ENGINE_TRACE records.

Usage:
    from payroll_engines import PayrollCalculator, calculate_pay
    from payroll_engines.weekly_holiday import calculate_weekly_holiday
"""

from payroll_engines.base_pay import hourly_base_pay, monthly_base_pay
from payroll_engines.branch_hours import summarize_branch_hours
from payroll_engines.deductions import (
    EDITABLE_FIELDS,
    apply_corrections,
    business_income_deductions,
    income_tax_for,
    no_deductions,
    wage_earner_deductions,
)
from payroll_engines.payroll_calculator import (
    PayrollCalculator,
    calculate_pay,
    correct_deductions,
    resolve_period,
)
from payroll_engines.probation import (
    ProbationSplit,
    is_period_in_probation,
    split_probation_hours,
)
from payroll_engines.tracer import compute_input_fingerprint, traced_engine
from payroll_engines.weekly_holiday import (
    REASON_DEFERRED,
    REASON_INSUFFICIENT,
    calculate_weekly_holiday,
    evaluate_week,
    group_shifts_by_week,
    is_weekly_holiday_applicable,
    week_start_of,
)
from payroll_engines.work_hours import WorkHours, aggregate_work_hours, sum_hours

__all__ = [
    # base pay
    "hourly_base_pay",
    "monthly_base_pay",
    # branch hours
    "summarize_branch_hours",
    # deductions
    "EDITABLE_FIELDS",
    "apply_corrections",
    "business_income_deductions",
    "income_tax_for",
    "no_deductions",
    "wage_earner_deductions",
    # dispatcher
    "PayrollCalculator",
    "calculate_pay",
    "correct_deductions",
    "resolve_period",
    # probation
    "ProbationSplit",
    "is_period_in_probation",
    "split_probation_hours",
    # tracer
    "compute_input_fingerprint",
    "traced_engine",
    # weekly holiday
    "REASON_DEFERRED",
    "REASON_INSUFFICIENT",
    "calculate_weekly_holiday",
    "evaluate_week",
    "group_shifts_by_week",
    "is_weekly_holiday_applicable",
    "week_start_of",
    # work hours
    "WorkHours",
    "aggregate_work_hours",
    "sum_hours",
]
