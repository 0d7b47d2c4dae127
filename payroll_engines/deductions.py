"""
Statutory deduction calculator.

Responsibility:
    Computes the employee-side deductions for a gross amount, by
    classification:

    * Wage earners: four social-insurance premiums, income tax from the
      bracket table and local income tax (10 % of income tax).
    * Contractors and foreign workers: a flat business-income withholding
      (3.3 %), no insurance.
    * Daily workers: nothing withheld.

    Also applies manual corrections to the six editable wage-earner
    components.

Architecture position:
    Engines -- pure calculation, zero I/O.

Invariants enforced:
    - Every component is rounded to a whole won (half-up).
    - Long-term care is computed from the already-rounded health premium.
    - ``total == insurance + tax`` on every breakdown produced here.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from payroll_config.schema import DEFAULT_RULES, IncomeTaxBracket, PayrollRuleSet
from payroll_kernel.domain.values import ZERO, round_won, to_decimal
from payroll_kernel.logging_config import get_logger
from payroll_modules.workforce.results import (
    DeductionBreakdown,
    EditableDeductions,
    InsuranceDetails,
    TaxDetails,
)

logger = get_logger("engines.deductions")

EDITABLE_FIELDS = (
    "national_pension",
    "health_insurance",
    "long_term_care",
    "employment_insurance",
    "income_tax",
    "local_income_tax",
)


def income_tax_for(
    gross: Decimal,
    brackets: tuple[IncomeTaxBracket, ...] = DEFAULT_RULES.income_tax_brackets,
) -> Decimal:
    """Simplified monthly income tax (one dependent) for ``gross``."""
    for bracket in brackets:
        if bracket.upper_bound is None or gross <= bracket.upper_bound:
            return round_won(bracket.base_tax + (gross - bracket.threshold) * bracket.rate)
    return ZERO


def _breakdown(insurance: InsuranceDetails, tax: TaxDetails) -> DeductionBreakdown:
    editable = EditableDeductions(
        national_pension=insurance.national_pension,
        health_insurance=insurance.health_insurance,
        long_term_care=insurance.long_term_care,
        employment_insurance=insurance.employment_insurance,
        income_tax=tax.income_tax,
        local_income_tax=tax.local_income_tax,
    )
    return DeductionBreakdown(
        insurance=insurance.total,
        tax=tax.total,
        total=insurance.total + tax.total,
        insurance_details=insurance,
        tax_details=tax,
        editable=editable,
    )


def wage_earner_deductions(
    gross: Decimal,
    rules: PayrollRuleSet = DEFAULT_RULES,
) -> DeductionBreakdown:
    rates = rules.insurance
    health = round_won(gross * rates.health)
    insurance = InsuranceDetails(
        national_pension=round_won(gross * rates.national_pension),
        health_insurance=health,
        long_term_care=round_won(health * rates.long_term_care),
        employment_insurance=round_won(gross * rates.employment),
    )

    income_tax = income_tax_for(gross, rules.income_tax_brackets)
    tax = TaxDetails(
        income_tax=income_tax,
        local_income_tax=round_won(income_tax * rules.local_income_tax_rate),
    )
    return _breakdown(insurance, tax)


def business_income_deductions(
    gross: Decimal,
    rules: PayrollRuleSet = DEFAULT_RULES,
) -> DeductionBreakdown:
    withholding = round_won(gross * rules.business_withholding_rate)
    return _breakdown(InsuranceDetails(), TaxDetails(withholding_tax=withholding))


def no_deductions() -> DeductionBreakdown:
    return DeductionBreakdown()


def apply_corrections(
    deductions: DeductionBreakdown,
    corrections: Mapping[str, Any],
) -> DeductionBreakdown:
    """
    Replace editable components with hand-entered values.

    Only the six editable fields may be corrected.  A breakdown that
    carries flat withholding accepts no corrections.  Totals are
    recomputed.

    Raises:
        ValueError: Unknown field name, a value that is not numeric
            or is negative, or a correction on a flat-withholding
            breakdown.
    """
    unknown = set(corrections) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValueError(f"Not editable: {', '.join(sorted(unknown))}")
    if corrections and deductions.tax_details.withholding_tax > 0:
        raise ValueError(
            "Wage-earner components cannot be corrected on a flat-withholding breakdown"
        )

    values: dict[str, Decimal] = {}
    for name in EDITABLE_FIELDS:
        current = getattr(deductions.editable, name)
        value = to_decimal(corrections.get(name), default=current)
        if value < 0:
            raise ValueError(f"{name} must be >= 0, got {value}")
        values[name] = value

    insurance = InsuranceDetails(
        national_pension=values["national_pension"],
        health_insurance=values["health_insurance"],
        long_term_care=values["long_term_care"],
        employment_insurance=values["employment_insurance"],
    )
    tax = TaxDetails(
        income_tax=values["income_tax"],
        local_income_tax=values["local_income_tax"],
        withholding_tax=deductions.tax_details.withholding_tax,
    )

    logger.info(
        "deductions_corrected",
        extra={"fields": sorted(corrections), "total": str(insurance.total + tax.total)},
    )
    return _breakdown(insurance, tax)
