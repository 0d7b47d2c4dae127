"""
Classification -- closed enumerations for employment type and pay basis.

Responsibility:
    Maps every external spelling of an employment classification or a pay
    basis onto a closed enumeration.  Contracts and employee documents carry
    free-form strings (Korean labels, older "...자" variants, English
    synonyms); the engine dispatches only on the enum values below.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - ``classify_employment`` and ``classify_pay_basis`` are total: they
      return a member for every input, including ``None``.
    - Unrecognized classifications map to ``EmploymentType.UNSPECIFIED``;
      the dispatcher decides what that means for pay.
"""

from __future__ import annotations

from enum import Enum


class EmploymentType(str, Enum):
    """Employment-tax category of a worker."""

    WAGE_EARNER = "wage_earner"  # 근로소득
    CONTRACTOR = "contractor"  # 사업소득
    FOREIGN_WORKER = "foreign_worker"  # 외국인
    DAILY_WORKER = "daily_worker"  # 일용직
    UNSPECIFIED = "unspecified"  # 미입력 or unknown

    @property
    def label(self) -> str:
        """Canonical display label stored on pay results."""
        return _EMPLOYMENT_LABELS[self]

    @property
    def receives_weekly_holiday(self) -> bool:
        return self in (
            EmploymentType.WAGE_EARNER,
            EmploymentType.CONTRACTOR,
            EmploymentType.FOREIGN_WORKER,
        )


class PayBasis(str, Enum):
    """Whether pay is per hour worked or a fixed monthly amount."""

    HOURLY = "hourly"
    MONTHLY = "monthly"


_EMPLOYMENT_LABELS = {
    EmploymentType.WAGE_EARNER: "근로소득",
    EmploymentType.CONTRACTOR: "사업소득",
    EmploymentType.FOREIGN_WORKER: "외국인",
    EmploymentType.DAILY_WORKER: "일용직",
    EmploymentType.UNSPECIFIED: "unspecified",
}

_EMPLOYMENT_SPELLINGS: dict[str, EmploymentType] = {
    "근로소득": EmploymentType.WAGE_EARNER,
    "근로소득자": EmploymentType.WAGE_EARNER,
    "wage_earner": EmploymentType.WAGE_EARNER,
    "labor_income": EmploymentType.WAGE_EARNER,
    "employee": EmploymentType.WAGE_EARNER,
    "사업소득": EmploymentType.CONTRACTOR,
    "사업소득자": EmploymentType.CONTRACTOR,
    "contractor": EmploymentType.CONTRACTOR,
    "business_income": EmploymentType.CONTRACTOR,
    "freelancer": EmploymentType.CONTRACTOR,
    "외국인": EmploymentType.FOREIGN_WORKER,
    "foreign_worker": EmploymentType.FOREIGN_WORKER,
    "foreigner": EmploymentType.FOREIGN_WORKER,
    "일용직": EmploymentType.DAILY_WORKER,
    "daily_worker": EmploymentType.DAILY_WORKER,
    "daily": EmploymentType.DAILY_WORKER,
    "미입력": EmploymentType.UNSPECIFIED,
    "unspecified": EmploymentType.UNSPECIFIED,
}

_PAY_BASIS_SPELLINGS: dict[str, PayBasis] = {
    "hourly": PayBasis.HOURLY,
    "시급": PayBasis.HOURLY,
    "monthly": PayBasis.MONTHLY,
    "월급": PayBasis.MONTHLY,
}


def _normalize(raw: str) -> str:
    return raw.strip().lower().replace("-", "_").replace(" ", "_")


def is_known_employment_spelling(raw: str | None) -> bool:
    """True when ``raw`` is blank or one of the accepted spellings."""
    if raw is None or not raw.strip():
        return True
    return _normalize(raw) in _EMPLOYMENT_SPELLINGS


def classify_employment(raw: str | EmploymentType | None) -> EmploymentType:
    """
    Map an external employment classification onto ``EmploymentType``.

    Blank and unrecognized values map to ``UNSPECIFIED``.
    """
    if isinstance(raw, EmploymentType):
        return raw
    if raw is None or not raw.strip():
        return EmploymentType.UNSPECIFIED
    return _EMPLOYMENT_SPELLINGS.get(_normalize(raw), EmploymentType.UNSPECIFIED)


def classify_pay_basis(raw: str | PayBasis | None) -> PayBasis:
    """
    Map an external pay-basis spelling onto ``PayBasis``.

    A missing value defaults to HOURLY, the form's default.  Any other
    value that is not an hourly spelling is treated as MONTHLY, since
    only the hourly spellings select per-hour pay.
    """
    if isinstance(raw, PayBasis):
        return raw
    if raw is None or not raw.strip():
        return PayBasis.HOURLY
    return _PAY_BASIS_SPELLINGS.get(_normalize(raw), PayBasis.MONTHLY)
