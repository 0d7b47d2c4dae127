"""
Payroll rule-set schema.

Defines the statutory parameters the engines compute with: the probation
pay rate, the weekly-holiday thresholds, social-insurance rates, the
income-tax bracket table and the flat business-income withholding rate.

YAML rule sets under ``payroll_config/sets/`` are parsed into these types
by the loader.  ``DEFAULT_RULES`` carries the same values in code so that
the engines work without any configuration files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class IncomeTaxBracket:
    """
    One row of the simplified withholding table.

    Tax for a gross amount ``g`` inside this row is
    ``base_tax + (g - threshold) * rate``.  ``upper_bound`` is inclusive;
    ``None`` marks the open top row.
    """

    upper_bound: Decimal | None
    base_tax: Decimal
    rate: Decimal
    threshold: Decimal = Decimal("0")


@dataclass(frozen=True)
class InsuranceRates:
    """Employee-side social-insurance rates."""

    national_pension: Decimal = Decimal("0.045")
    health: Decimal = Decimal("0.03545")
    long_term_care: Decimal = Decimal("0.1295")  # share of the health premium
    employment: Decimal = Decimal("0.009")


@dataclass(frozen=True)
class WeeklyHolidayRules:
    """Eligibility threshold and divisor for the weekly-holiday allowance."""

    min_weekly_hours: Decimal = Decimal("15")
    workdays_per_week: Decimal = Decimal("5")


DEFAULT_INCOME_TAX_BRACKETS: tuple[IncomeTaxBracket, ...] = (
    IncomeTaxBracket(Decimal("1060000"), Decimal("0"), Decimal("0")),
    IncomeTaxBracket(Decimal("2100000"), Decimal("0"), Decimal("0.02"), Decimal("1060000")),
    IncomeTaxBracket(Decimal("3160000"), Decimal("20800"), Decimal("0.04"), Decimal("2100000")),
    IncomeTaxBracket(Decimal("5000000"), Decimal("63200"), Decimal("0.06"), Decimal("3160000")),
    IncomeTaxBracket(None, Decimal("173600"), Decimal("0.08"), Decimal("5000000")),
)


@dataclass(frozen=True)
class PayrollRuleSet:
    """Complete set of statutory parameters effective over a date range."""

    rule_set_id: str
    effective_from: date
    effective_to: date | None = None
    currency: str = "KRW"
    probation_pay_rate: Decimal = Decimal("0.9")
    weekly_holiday: WeeklyHolidayRules = field(default_factory=WeeklyHolidayRules)
    insurance: InsuranceRates = field(default_factory=InsuranceRates)
    income_tax_brackets: tuple[IncomeTaxBracket, ...] = DEFAULT_INCOME_TAX_BRACKETS
    local_income_tax_rate: Decimal = Decimal("0.1")
    business_withholding_rate: Decimal = Decimal("0.033")
    checksum: str = ""

    def covers(self, as_of_date: date) -> bool:
        """True when ``as_of_date`` lies inside the effective range."""
        if as_of_date < self.effective_from:
            return False
        return self.effective_to is None or as_of_date <= self.effective_to


DEFAULT_RULES = PayrollRuleSet(
    rule_set_id="KR-2025",
    effective_from=date(2025, 1, 1),
)


def validate_rule_set(rules: PayrollRuleSet) -> list[str]:
    """
    Check rule values for ranges the engines rely on.

    Returns:
        List of error messages; empty when the rule set is usable.
    """
    errors: list[str] = []

    if rules.effective_to is not None and rules.effective_to < rules.effective_from:
        errors.append("effective_to precedes effective_from")
    if not Decimal("0") < rules.probation_pay_rate <= Decimal("1"):
        errors.append("probation_pay_rate must be in (0, 1]")
    if rules.weekly_holiday.min_weekly_hours < 0:
        errors.append("weekly_holiday.min_weekly_hours must be >= 0")
    if rules.weekly_holiday.workdays_per_week <= 0:
        errors.append("weekly_holiday.workdays_per_week must be positive")

    for name in ("national_pension", "health", "long_term_care", "employment"):
        rate = getattr(rules.insurance, name)
        if not Decimal("0") <= rate < Decimal("1"):
            errors.append(f"insurance.{name} must be in [0, 1)")

    for name in ("local_income_tax_rate", "business_withholding_rate"):
        if not Decimal("0") <= getattr(rules, name) < Decimal("1"):
            errors.append(f"{name} must be in [0, 1)")

    brackets = rules.income_tax_brackets
    if not brackets:
        errors.append("income_tax_brackets must not be empty")
    else:
        if brackets[-1].upper_bound is not None:
            errors.append("last income tax bracket must be open (no upper_bound)")
        bounds = [b.upper_bound for b in brackets[:-1]]
        if any(b is None for b in bounds):
            errors.append("only the last income tax bracket may omit upper_bound")
        elif bounds != sorted(bounds):
            errors.append("income tax brackets must be ordered by upper_bound")

    return errors
