"""
payroll_config -- single public entrypoint for payroll rule sets.

Responsibility:
    Provides the runtime way to obtain statutory payroll parameters through
    ``get_active_rules()``.  Rule sets are authored as YAML under
    ``payroll_config/sets/<rule_set_id>/rules.yaml``, each with an effective
    date range.

Architecture position:
    Configuration -- sits above ``payroll_kernel`` and beside
    ``payroll_engines``.  Engines never read files; they receive a
    ``PayrollRuleSet`` argument (defaulting to ``DEFAULT_RULES``).

Failure modes:
    - ``RuleSetNotFoundError`` -- no rule set covers the requested date.
    - ``RuleSetValidationError`` -- a matching set holds invalid values.
    - ``yaml.YAMLError`` -- malformed YAML.

Audit relevance:
    Every successful ``get_active_rules()`` call emits a
    ``PAYROLL_CONFIG_TRACE`` log entry with the rule set id and checksum,
    tying each computed pay result to the parameters that produced it.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

from payroll_config.loader import RULES_FILE_NAME, load_rule_set
from payroll_config.schema import (
    DEFAULT_RULES,
    IncomeTaxBracket,
    InsuranceRates,
    PayrollRuleSet,
    WeeklyHolidayRules,
)
from payroll_kernel.exceptions import RuleSetNotFoundError
from payroll_kernel.logging_config import get_logger

_logger = get_logger("config")

_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"

__all__ = [
    "DEFAULT_RULES",
    "IncomeTaxBracket",
    "InsuranceRates",
    "PayrollRuleSet",
    "WeeklyHolidayRules",
    "get_active_rules",
]


def get_active_rules(
    as_of_date: date,
    config_dir: Path | None = None,
) -> PayrollRuleSet:
    """Return the rule set effective on ``as_of_date``.

    Scans every ``<config_dir>/<set>/rules.yaml``.  When several sets cover
    the date, the one with the latest ``effective_from`` wins.

    Args:
        as_of_date: Date the pay period is evaluated on.
        config_dir: Override path to the rule sets directory.
            Defaults to payroll_config/sets/.

    Raises:
        RuleSetNotFoundError: If no rule set covers ``as_of_date``.
        RuleSetValidationError: If a rule set file holds invalid values.
    """
    sets_dir = config_dir or _DEFAULT_CONFIG_DIR
    candidates: list[PayrollRuleSet] = []

    if sets_dir.is_dir():
        for subdir in sorted(sets_dir.iterdir()):
            rules_file = subdir / RULES_FILE_NAME
            if not subdir.is_dir() or not rules_file.exists():
                continue
            rules = load_rule_set(rules_file)
            if rules.covers(as_of_date):
                candidates.append(rules)

    if not candidates:
        raise RuleSetNotFoundError(as_of_date, str(sets_dir))

    active = max(candidates, key=lambda r: r.effective_from)

    _logger.info(
        "PAYROLL_CONFIG_TRACE",
        extra={
            "trace_type": "PAYROLL_CONFIG_TRACE",
            "rule_set_id": active.rule_set_id,
            "checksum": active.checksum,
            "as_of_date": as_of_date.isoformat(),
            "candidate_count": len(candidates),
        },
    )
    return active
