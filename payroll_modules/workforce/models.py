"""
Workforce Domain Models (``payroll_modules.workforce.models``).

Responsibility
--------------
Frozen dataclass value objects for the inputs of a payroll computation:
employees, employment contracts, worked shifts and the monthly pay period.
Each input model has a ``from_document`` adapter that reads the
camelCase fields the scheduling application stores.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Consumed by
``payroll_engines`` and ``payroll_services``.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All hour/monetary fields are ``Decimal`` -- NEVER ``float``.  Numbers
  passed in any other numeric form are converted on construction.
* Shift worked hours are >= 0.
* Contract salary amount and weekly hours are >= 0.

Failure modes
-------------
* Negative or non-numeric worked hours raise ``InvalidShiftHoursError``.
* Negative salary amount raises ``InvalidContractError``.
* Month outside 1..12 raises ``InvalidPeriodError``.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping

from payroll_kernel.domain.values import ZERO, to_decimal
from payroll_kernel.exceptions import (
    InvalidContractError,
    InvalidPeriodError,
    InvalidShiftHoursError,
)
from payroll_kernel.logging_config import get_logger

logger = get_logger("modules.workforce.models")

DEFAULT_WEEKLY_HOURS = Decimal("40")
DEFAULT_BRANCH_ID = "N/A"
DEFAULT_BRANCH_NAME = "합산"

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


# ---------------------------------------------------------------------------
# Document helpers
# ---------------------------------------------------------------------------


def parse_document_date(value: Any) -> date | None:
    """
    Read a calendar date from a stored value.

    Accepts ``date``/``datetime`` objects, ISO strings and timestamp objects
    exposing ``to_datetime()`` or ``ToDatetime()``.  The time of day is
    dropped.  Returns None for missing or unreadable values.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            return None
    for attr in ("to_datetime", "ToDatetime"):
        converter = getattr(value, attr, None)
        if callable(converter):
            return converter().date()
    return None


def _clock_hours(text: Any) -> Decimal | None:
    if not isinstance(text, str):
        return None
    match = _TIME_PATTERN.match(text.strip())
    if match is None:
        return None
    return Decimal(match.group(1)) + Decimal(match.group(2)) / Decimal("60")


def hours_from_times(start: Any, end: Any, break_hours: Any = None) -> Decimal | None:
    """
    Worked hours from ``"HH:MM"`` start/end strings minus break hours.

    Returns None when either time is unreadable; a negative span is
    clamped to zero.
    """
    s = _clock_hours(start)
    e = _clock_hours(end)
    if s is None or e is None:
        return None
    diff = e - s - to_decimal(break_hours, default=ZERO)
    return diff if diff >= 0 else ZERO


def _calendar_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


# ---------------------------------------------------------------------------
# Pay period
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class PayPeriod:
    """A calendar month being evaluated."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12 or self.year < 1:
            raise InvalidPeriodError(self.year, self.month)

    @classmethod
    def of(cls, day: date) -> PayPeriod:
        """The month containing ``day``."""
        return cls(day.year, day.month)

    @classmethod
    def parse(cls, key: str) -> PayPeriod:
        """Parse a ``"YYYY-MM"`` key."""
        year, _, month = key.strip().partition("-")
        return cls(int(year), int(month))

    @property
    def start(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def end(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def contains(self, day: date | datetime) -> bool:
        return self.start <= _calendar_date(day) <= self.end

    def __str__(self) -> str:
        return self.key


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Employee:
    """A worker as the payroll engine sees it."""

    id: str
    name: str
    employment_type: str | None = None
    probation_start: date | None = None
    probation_end: date | None = None
    includes_weekly_holiday_in_wage: bool = False
    weekly_work_hours: Decimal = DEFAULT_WEEKLY_HOURS

    def __post_init__(self) -> None:
        if not isinstance(self.weekly_work_hours, Decimal):
            object.__setattr__(
                self,
                "weekly_work_hours",
                to_decimal(self.weekly_work_hours, default=DEFAULT_WEEKLY_HOURS),
            )

    @classmethod
    def from_document(cls, doc_id: str, doc: Mapping[str, Any]) -> Employee:
        return cls(
            id=doc_id,
            name=str(doc.get("name") or ""),
            employment_type=doc.get("employmentType"),
            probation_start=parse_document_date(doc.get("probationStartDate")),
            probation_end=parse_document_date(doc.get("probationEndDate")),
            includes_weekly_holiday_in_wage=bool(doc.get("includesWeeklyHolidayInWage", False)),
            weekly_work_hours=to_decimal(doc.get("weeklyWorkHours"), default=DEFAULT_WEEKLY_HOURS),
        )


@dataclass(frozen=True)
class Contract:
    """Employment contract terms in effect for a computation.

    ``employment_type`` and ``salary_type`` keep the raw stored strings;
    the engine classifies them.
    """

    employment_type: str | None
    salary_type: str | None
    salary_amount: Decimal
    weekly_work_hours: Decimal = DEFAULT_WEEKLY_HOURS
    includes_holiday_allowance: bool = False
    start_date: date | None = None
    employee_id: str | None = None
    id: str | None = None

    def __post_init__(self) -> None:
        for name, default in (("salary_amount", None), ("weekly_work_hours", DEFAULT_WEEKLY_HOURS)):
            value = getattr(self, name)
            if not isinstance(value, Decimal):
                try:
                    value = to_decimal(value, default=default)
                except ValueError as exc:
                    raise InvalidContractError(name, value, self.id) from exc
                object.__setattr__(self, name, value)
            if value < 0:
                logger.warning(
                    "contract_negative_value",
                    extra={"contract_id": self.id, "field": name, "value": str(value)},
                )
                raise InvalidContractError(name, value, self.id)

    @classmethod
    def from_document(cls, doc_id: str, doc: Mapping[str, Any]) -> Contract:
        return cls(
            id=doc_id,
            employee_id=doc.get("employeeId"),
            employment_type=doc.get("employmentType"),
            salary_type=doc.get("salaryType"),
            salary_amount=to_decimal(doc.get("salaryAmount"), default=ZERO),
            weekly_work_hours=to_decimal(doc.get("weeklyWorkHours"), default=DEFAULT_WEEKLY_HOURS),
            includes_holiday_allowance=bool(doc.get("includeHolidayAllowance", False)),
            start_date=parse_document_date(doc.get("startDate")),
        )


@dataclass(frozen=True)
class Shift:
    """One worked interval; ``hours`` are already net of break time."""

    work_date: date
    hours: Decimal
    branch_id: str = DEFAULT_BRANCH_ID
    branch_name: str = DEFAULT_BRANCH_NAME
    employee_id: str | None = None
    id: str | None = None

    def __post_init__(self) -> None:
        hours = self.hours
        if not isinstance(hours, Decimal):
            try:
                hours = to_decimal(hours)
            except ValueError as exc:
                raise InvalidShiftHoursError(self.hours, self.id, self.work_date) from exc
            object.__setattr__(self, "hours", hours)
        if not hours.is_finite() or hours < 0:
            raise InvalidShiftHoursError(self.hours, self.id, self.work_date)

    @property
    def calendar_date(self) -> date:
        """The shift's date with any time-of-day component dropped."""
        return _calendar_date(self.work_date)

    @classmethod
    def from_document(cls, doc_id: str, doc: Mapping[str, Any]) -> Shift:
        """
        Build a shift from a schedule document.

        Worked hours come from ``totalHours`` (or ``actualWorkHours``);
        when neither is stored they are derived from ``startTime``,
        ``endTime`` and ``breakTime``, and default to zero.
        """
        work_date = parse_document_date(doc.get("date"))
        if work_date is None:
            raise ValueError(f"Schedule {doc_id} has no readable date")

        raw_hours = doc.get("totalHours")
        if raw_hours is None:
            raw_hours = doc.get("actualWorkHours")
        if raw_hours is None:
            raw_hours = hours_from_times(doc.get("startTime"), doc.get("endTime"), doc.get("breakTime"))
        if raw_hours is None:
            raw_hours = ZERO

        return cls(
            id=doc_id,
            employee_id=doc.get("employeeId"),
            work_date=work_date,
            hours=raw_hours,
            branch_id=doc.get("branchId") or DEFAULT_BRANCH_ID,
            branch_name=doc.get("branchName") or DEFAULT_BRANCH_NAME,
        )
