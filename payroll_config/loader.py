"""
Rule-set Loader (``payroll_config.loader``).

Responsibility
--------------
Loads YAML rule-set files and parses them into the frozen
``payroll_config.schema`` dataclasses.  Runtime callers go through
``payroll_config.get_active_rules()``; this module is the parsing layer
underneath it.

Invariants enforced
-------------------
* Every number is parsed through ``str`` into ``Decimal``; YAML floats
  never reach the engines as binary floats.
* Every parsed rule set has passed ``validate_rule_set``.
* ``compute_checksum`` produces a deterministic SHA-256 hash of the parsed
  document for change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Out-of-range values  -> ``RuleSetValidationError``.
"""

from __future__ import annotations

import hashlib
import json
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from payroll_config.schema import (
    DEFAULT_INCOME_TAX_BRACKETS,
    IncomeTaxBracket,
    InsuranceRates,
    PayrollRuleSet,
    WeeklyHolidayRules,
    validate_rule_set,
)
from payroll_kernel.exceptions import RuleSetValidationError
from payroll_kernel.logging_config import get_logger

logger = get_logger("config.loader")

RULES_FILE_NAME = "rules.yaml"


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def parse_date(value: Any) -> date:
    """
    Parse a date from YAML (string or date object).

    Raises:
        ValueError: if ``value`` is not a valid date representation.
    """
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise ValueError(f"Cannot parse date from {value!r}")


def parse_decimal(value: Any) -> Decimal:
    """Parse a YAML scalar into ``Decimal`` via its string form."""
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Cannot parse decimal from {value!r}")
    return Decimal(str(value))


def parse_bracket(data: dict[str, Any]) -> IncomeTaxBracket:
    """Parse one income tax bracket row."""
    upper = data.get("upper_bound")
    return IncomeTaxBracket(
        upper_bound=parse_decimal(upper) if upper is not None else None,
        base_tax=parse_decimal(data.get("base_tax", 0)),
        rate=parse_decimal(data["rate"]),
        threshold=parse_decimal(data.get("threshold", 0)),
    )


def parse_insurance(data: dict[str, Any]) -> InsuranceRates:
    """Parse insurance rates; omitted keys keep their defaults."""
    defaults = InsuranceRates()
    return InsuranceRates(
        national_pension=parse_decimal(data.get("national_pension", defaults.national_pension)),
        health=parse_decimal(data.get("health", defaults.health)),
        long_term_care=parse_decimal(data.get("long_term_care", defaults.long_term_care)),
        employment=parse_decimal(data.get("employment", defaults.employment)),
    )


def parse_weekly_holiday(data: dict[str, Any]) -> WeeklyHolidayRules:
    """Parse weekly-holiday thresholds; omitted keys keep their defaults."""
    defaults = WeeklyHolidayRules()
    return WeeklyHolidayRules(
        min_weekly_hours=parse_decimal(data.get("min_weekly_hours", defaults.min_weekly_hours)),
        workdays_per_week=parse_decimal(data.get("workdays_per_week", defaults.workdays_per_week)),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def parse_rule_set(data: dict[str, Any]) -> PayrollRuleSet:
    """
    Parse a ``PayrollRuleSet`` from a dict.

    Preconditions:
        - ``data`` contains ``rule_set_id`` and ``effective_from``.
    Raises:
        KeyError: if required keys are missing.
        RuleSetValidationError: if values are out of range.
    """
    brackets_raw = data.get("income_tax_brackets")
    brackets = (
        tuple(parse_bracket(b) for b in brackets_raw)
        if brackets_raw
        else DEFAULT_INCOME_TAX_BRACKETS
    )
    defaults = PayrollRuleSet(rule_set_id="", effective_from=date.min)

    rules = PayrollRuleSet(
        rule_set_id=data["rule_set_id"],
        effective_from=parse_date(data["effective_from"]),
        effective_to=parse_date(data["effective_to"]) if data.get("effective_to") else None,
        currency=data.get("currency", defaults.currency),
        probation_pay_rate=parse_decimal(
            data.get("probation_pay_rate", defaults.probation_pay_rate)
        ),
        weekly_holiday=parse_weekly_holiday(data.get("weekly_holiday") or {}),
        insurance=parse_insurance(data.get("insurance") or {}),
        income_tax_brackets=brackets,
        local_income_tax_rate=parse_decimal(
            data.get("local_income_tax_rate", defaults.local_income_tax_rate)
        ),
        business_withholding_rate=parse_decimal(
            data.get("business_withholding_rate", defaults.business_withholding_rate)
        ),
        checksum=compute_checksum(data),
    )

    errors = validate_rule_set(rules)
    if errors:
        logger.warning(
            "rule_set_invalid",
            extra={"rule_set_id": rules.rule_set_id, "errors": errors},
        )
        raise RuleSetValidationError(rules.rule_set_id, errors)
    return rules


def load_rule_set(path: Path) -> PayrollRuleSet:
    """Load and parse a single rule-set YAML file."""
    return parse_rule_set(load_yaml_file(path))
