"""
Pure domain layer.

Value helpers, classification enumerations and the clock abstraction.
Nothing in this package performs I/O; everything is deterministic.
"""

from payroll_kernel.domain.classification import (
    EmploymentType,
    PayBasis,
    classify_employment,
    classify_pay_basis,
)
from payroll_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from payroll_kernel.domain.values import (
    ZERO,
    round_won,
    round_won_two_stage,
    to_decimal,
)

__all__ = [
    "Clock",
    "DeterministicClock",
    "EmploymentType",
    "PayBasis",
    "SystemClock",
    "ZERO",
    "classify_employment",
    "classify_pay_basis",
    "round_won",
    "round_won_two_stage",
    "to_decimal",
]
