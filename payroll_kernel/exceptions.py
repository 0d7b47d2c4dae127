"""
Typed Exception Hierarchy for the Payroll Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Payroll callers must react to errors by type, never by parsing messages.
Every error has:
  1. A TYPED exception class (catch by type, not message)
  2. A CODE class attribute (machine-readable, API-safe)
  3. Structured DATA stored as attributes (not just a message string)

Example:
    try:
        shift = Shift.from_document(doc_id, doc)
    except InvalidShiftHoursError as e:
        log.warning("bad shift", extra={"shift_id": e.shift_id})
        api_response(code=e.code, hours=str(e.hours))

Business-rule outcomes are NOT exceptions.  An ineligible week, a deferred
weekly-holiday allowance, a missing contract or an unknown employment
classification all produce values in the ``PayResult``.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    PayrollKernelError (base)
    |
    +-- PayrollInputError
    |   +-- InvalidShiftHoursError
    |   +-- InvalidContractError
    |   +-- InvalidPeriodError
    |
    +-- ConfigurationError
    |   +-- RuleSetNotFoundError
    |   +-- RuleSetValidationError
    |
    +-- StoreError
        +-- DocumentNotFoundError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Input           | INVALID_SHIFT_HOURS         | Worked hours negative or not numeric
                | INVALID_CONTRACT            | Negative salary amount / weekly hours
                | INVALID_PERIOD              | Month outside 1..12
----------------|-----------------------------|-----------------------------------------
Configuration   | RULE_SET_NOT_FOUND          | No rule set covers the requested date
                | RULE_SET_INVALID            | Rule values out of range
----------------|-----------------------------|-----------------------------------------
Store           | DOCUMENT_NOT_FOUND          | Collection has no document with that id
"""

from __future__ import annotations

from datetime import date
from typing import Any


class PayrollKernelError(Exception):
    """
    Base exception for all payroll kernel errors.

    All subclasses must have a ``code`` class attribute for
    machine-readable error identification.
    """

    code: str = "PAYROLL_KERNEL_ERROR"


# Input validation


class PayrollInputError(PayrollKernelError):
    """Base exception for malformed engine inputs."""

    code: str = "PAYROLL_INPUT_ERROR"


class InvalidShiftHoursError(PayrollInputError):
    """Shift worked hours are negative or cannot be read as a number."""

    code: str = "INVALID_SHIFT_HOURS"

    def __init__(self, hours: Any, shift_id: str | None = None, work_date: date | None = None):
        self.hours = hours
        self.shift_id = shift_id
        self.work_date = work_date
        where = f" (shift {shift_id})" if shift_id else ""
        super().__init__(f"Invalid worked hours {hours!r}{where}: must be a number >= 0")


class InvalidContractError(PayrollInputError):
    """Contract carries a value the engine cannot compute with."""

    code: str = "INVALID_CONTRACT"

    def __init__(self, field: str, value: Any, contract_id: str | None = None):
        self.field = field
        self.value = value
        self.contract_id = contract_id
        super().__init__(f"Invalid contract {field}: {value!r}")


class InvalidPeriodError(PayrollInputError):
    """Pay period does not name a real calendar month."""

    code: str = "INVALID_PERIOD"

    def __init__(self, year: int, month: int):
        self.year = year
        self.month = month
        super().__init__(f"Invalid pay period {year}-{month:02d}")


# Configuration


class ConfigurationError(PayrollKernelError):
    """Base exception for rule-set configuration errors."""

    code: str = "CONFIGURATION_ERROR"


class RuleSetNotFoundError(ConfigurationError):
    """No configured rule set is effective on the requested date."""

    code: str = "RULE_SET_NOT_FOUND"

    def __init__(self, as_of_date: date, config_dir: str):
        self.as_of_date = as_of_date
        self.config_dir = config_dir
        super().__init__(f"No payroll rule set effective on {as_of_date} in {config_dir}")


class RuleSetValidationError(ConfigurationError):
    """A rule set parsed correctly but holds out-of-range values."""

    code: str = "RULE_SET_INVALID"

    def __init__(self, rule_set_id: str, errors: list[str]):
        self.rule_set_id = rule_set_id
        self.errors = errors
        super().__init__(
            f"Rule set {rule_set_id} failed validation: {len(errors)} error(s)"
        )


# Document store


class StoreError(PayrollKernelError):
    """Base exception for document store collaborator errors."""

    code: str = "STORE_ERROR"


class DocumentNotFoundError(StoreError):
    """Collection has no document with the given id."""

    code: str = "DOCUMENT_NOT_FOUND"

    def __init__(self, collection: str, doc_id: str):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"Document not found: {collection}/{doc_id}")
