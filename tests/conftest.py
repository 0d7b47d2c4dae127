"""
Pytest fixtures for the payroll test suite.

Provides:
- A clean logging state per test
- A deterministic clock
- Builders for employees, contracts and shifts
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from payroll_config import DEFAULT_RULES
from payroll_engines import PayrollCalculator
from payroll_kernel.domain.clock import DeterministicClock
from payroll_kernel.logging_config import LogContext, reset_logging
from payroll_modules.workforce import Contract, Employee, PayPeriod, Shift


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def deterministic_clock() -> DeterministicClock:
    return DeterministicClock(datetime(2025, 3, 12, 9, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def calculator() -> PayrollCalculator:
    return PayrollCalculator(DEFAULT_RULES)


@pytest.fixture
def march() -> PayPeriod:
    # 2025-03-01 is a Saturday; 2025-03-31 is a Monday.
    return PayPeriod(2025, 3)


@pytest.fixture
def make_employee():
    def _make(
        employee_id: str = "emp-1",
        name: str = "김민지",
        probation: tuple[date, date] | None = None,
        includes_weekly_holiday_in_wage: bool = False,
    ) -> Employee:
        start, end = probation if probation else (None, None)
        return Employee(
            id=employee_id,
            name=name,
            probation_start=start,
            probation_end=end,
            includes_weekly_holiday_in_wage=includes_weekly_holiday_in_wage,
        )

    return _make


@pytest.fixture
def make_contract():
    def _make(
        employment_type: str | None = "근로소득",
        salary_type: str | None = "hourly",
        amount: str | int = "10000",
        includes_holiday_allowance: bool = False,
        start_date: date | None = None,
        contract_id: str | None = None,
    ) -> Contract:
        return Contract(
            employment_type=employment_type,
            salary_type=salary_type,
            salary_amount=Decimal(str(amount)),
            includes_holiday_allowance=includes_holiday_allowance,
            start_date=start_date,
            id=contract_id,
        )

    return _make


@pytest.fixture
def make_shift():
    def _make(
        work_date: date,
        hours: str | int = "8",
        branch_id: str = "b-main",
        branch_name: str = "본점",
    ) -> Shift:
        return Shift(
            work_date=work_date,
            hours=Decimal(str(hours)),
            branch_id=branch_id,
            branch_name=branch_name,
        )

    return _make
