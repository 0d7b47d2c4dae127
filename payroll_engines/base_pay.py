"""
Base-pay calculator.

Hourly pay multiplies each hour class by the rate (probation hours at the
probation rate) with two-stage rounding.  Monthly pay prorates the fixed
amount by the probation:regular hour ratio.
"""

from __future__ import annotations

from decimal import Decimal

from payroll_config.schema import DEFAULT_RULES, PayrollRuleSet
from payroll_engines.probation import ProbationSplit
from payroll_kernel.domain.values import ZERO, round_won, round_won_two_stage
from payroll_modules.workforce.results import BasePay


def hourly_base_pay(
    split: ProbationSplit,
    hourly_rate: Decimal,
    rules: PayrollRuleSet = DEFAULT_RULES,
) -> BasePay:
    return BasePay(
        probation_pay=round_won_two_stage(
            split.probation_hours * hourly_rate * rules.probation_pay_rate
        ),
        regular_pay=round_won_two_stage(split.regular_hours * hourly_rate),
    )


def monthly_base_pay(
    split: ProbationSplit,
    monthly_amount: Decimal,
    period_in_probation: bool,
    rules: PayrollRuleSet = DEFAULT_RULES,
) -> BasePay:
    """
    Prorate a monthly amount between probation and regular pay.

    With worked hours, each part is rounded separately and any rounding
    gap is folded into the regular part, so that the parts always sum to
    ``round(amount * (probation_ratio * rate + regular_ratio))``.

    Without worked hours, the whole amount is paid at the probation rate
    when the entire period lies inside probation, otherwise in full.
    """
    if monthly_amount <= 0:
        return BasePay()

    total_hours = split.total_hours
    rate = rules.probation_pay_rate

    if total_hours > 0:
        probation_ratio = split.probation_hours / total_hours
        regular_ratio = split.regular_hours / total_hours

        probation_pay = round_won(monthly_amount * probation_ratio * rate)
        regular_pay = round_won(monthly_amount * regular_ratio)
        target = round_won(monthly_amount * (probation_ratio * rate + regular_ratio))

        regular_pay += target - (probation_pay + regular_pay)
        return BasePay(probation_pay=probation_pay, regular_pay=regular_pay)

    if period_in_probation:
        return BasePay(probation_pay=round_won(monthly_amount * rate), regular_pay=ZERO)
    return BasePay(probation_pay=ZERO, regular_pay=round_won(monthly_amount))
