"""
payroll_services.payroll_service -- Monthly payroll runs over the document store.

Responsibility:
    Load employees, contracts and schedules from a ``DocumentStore``,
    select each employee's effective contract, hand the models to the
    pure ``PayrollCalculator`` and collect the results into a
    ``PayrollRun`` with totals per employment classification.

Architecture position:
    Services -- orchestration over engines + kernel.  Owns the only I/O
    (store reads) and the only clock read (the cut-off date of an
    expected-pay run).  The engines stay pure.

Invariants enforced:
    - Exactly one contract per employee per computation: the one with the
      latest ``start_date`` not after the evaluation date.  Undated
      contracts are used only when no dated contract qualifies.
    - Results of a run are ordered by employee name, then id.
    - An expected-pay run only counts shifts dated on or before the
      cut-off date, and prices them with the contract in effect on
      that date.

Failure modes:
    - DocumentNotFoundError for an unknown employee id.
    - Schedule documents without a readable date are skipped with a
      ``schedule_skipped`` warning.
    - InvalidShiftHoursError / InvalidContractError propagate from the
      model adapters.

Usage:
    store = InMemoryDocumentStore()
    service = PayrollService(store, clock=DeterministicClock())
    run = service.calculate_month(PayPeriod(2025, 3))
    for result in run.results:
        print(result.employee_name, result.net_pay)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import TypeVar

from payroll_engines.payroll_calculator import PayrollCalculator
from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_kernel.domain.values import ZERO
from payroll_kernel.logging_config import LogContext, get_logger
from payroll_modules.workforce.models import (
    Contract,
    Employee,
    PayPeriod,
    Shift,
    parse_document_date,
)
from payroll_modules.workforce.results import PayResult
from payroll_services.query_cache import CacheKeys, QueryCache
from payroll_services.store import CONTRACTS, EMPLOYEES, SCHEDULES, DocumentStore

logger = get_logger("services.payroll")

T = TypeVar("T")


def select_effective_contract(
    contracts: Iterable[Contract],
    as_of: date,
) -> Contract | None:
    """
    The contract in effect on ``as_of``.

    Picks the latest ``start_date`` on or before ``as_of``.  When no dated
    contract qualifies, the first undated one is used; otherwise None.
    """
    dated: list[Contract] = []
    undated: list[Contract] = []
    for contract in contracts:
        if contract.start_date is None:
            undated.append(contract)
        elif contract.start_date <= as_of:
            dated.append(contract)

    if dated:
        return max(dated, key=lambda c: c.start_date)
    if undated:
        return undated[0]
    return None


@dataclass(frozen=True)
class ClassificationTotals:
    """Sums over the results sharing one employment classification."""

    headcount: int = 0
    gross_pay: Decimal = ZERO
    deductions: Decimal = ZERO
    net_pay: Decimal = ZERO

    def add(self, result: PayResult) -> ClassificationTotals:
        return ClassificationTotals(
            headcount=self.headcount + 1,
            gross_pay=self.gross_pay + result.gross_pay,
            deductions=self.deductions + result.deductions.total,
            net_pay=self.net_pay + result.net_pay,
        )


@dataclass(frozen=True)
class PayrollRun:
    """Results of one payroll computation over many employees."""

    period: PayPeriod
    results: tuple[PayResult, ...]
    cutoff: date | None = None
    totals: dict[str, ClassificationTotals] = field(default_factory=dict)

    @property
    def gross_pay(self) -> Decimal:
        return sum((r.gross_pay for r in self.results), ZERO)

    @property
    def net_pay(self) -> Decimal:
        return sum((r.net_pay for r in self.results), ZERO)


def totals_by_classification(results: Iterable[PayResult]) -> dict[str, ClassificationTotals]:
    totals: dict[str, ClassificationTotals] = {}
    for result in results:
        key = result.classification.value
        totals[key] = totals.get(key, ClassificationTotals()).add(result)
    return totals


class PayrollService:
    """
    Computes payroll for employees held in a document store.

    Contract:
        Receives the store, and optionally the calculator, query cache and
        clock, via constructor injection.
    """

    def __init__(
        self,
        store: DocumentStore,
        calculator: PayrollCalculator | None = None,
        cache: QueryCache | None = None,
        clock: Clock | None = None,
    ):
        self._store = store
        self._calculator = calculator or PayrollCalculator()
        self._cache = cache
        self._clock = clock or SystemClock()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _cached(self, key: str, query: Callable[[], T]) -> T:
        if self._cache is None:
            return query()
        return self._cache.cached_query(key, query)

    def load_employee(self, employee_id: str) -> Employee:
        return self._cached(
            CacheKeys.employee(employee_id),
            lambda: Employee.from_document(employee_id, self._store.get(EMPLOYEES, employee_id)),
        )

    def load_employees(self) -> list[Employee]:
        return self._cached(
            CacheKeys.employees(),
            lambda: [Employee.from_document(i, d) for i, d in self._store.query(EMPLOYEES)],
        )

    def load_contracts(self, employee_id: str) -> list[Contract]:
        return self._cached(
            CacheKeys.contracts(employee_id),
            lambda: [
                Contract.from_document(i, d)
                for i, d in self._store.query(CONTRACTS, [("employeeId", "==", employee_id)])
            ],
        )

    def load_shifts(self, employee_id: str, period: PayPeriod) -> list[Shift]:
        """Shifts of ``employee_id`` dated inside ``period``, in date order."""
        return self._cached(
            CacheKeys.schedules(employee_id, period.key),
            lambda: self._read_shifts(employee_id, period),
        )

    def _read_shifts(self, employee_id: str, period: PayPeriod) -> list[Shift]:
        shifts: list[Shift] = []
        for doc_id, doc in self._store.query(SCHEDULES, [("employeeId", "==", employee_id)]):
            work_date = parse_document_date(doc.get("date"))
            if work_date is None:
                logger.warning(
                    "schedule_skipped",
                    extra={"doc_id": doc_id, "employee_id": employee_id, "reason": "no readable date"},
                )
                continue
            if period.contains(work_date):
                shifts.append(Shift.from_document(doc_id, doc))
        shifts.sort(key=lambda s: s.calendar_date)
        return shifts

    # ------------------------------------------------------------------
    # Calculation
    # ------------------------------------------------------------------

    def calculate_employee(
        self,
        employee_id: str,
        period: PayPeriod,
        cutoff: date | None = None,
    ) -> PayResult:
        """
        Pay for one employee over ``period``.

        Args:
            employee_id: Store id of the employee.
            period: Month to compute.
            cutoff: When given, only shifts on or before this date count,
                and the contract is the one in effect on this date.
        """
        employee = self.load_employee(employee_id)
        return self._calculate(employee, period, cutoff)

    def _calculate(self, employee: Employee, period: PayPeriod, cutoff: date | None) -> PayResult:
        with LogContext.bind(employee_id=employee.id, period=period.key):
            as_of = cutoff or period.end
            contract = select_effective_contract(self.load_contracts(employee.id), as_of)
            shifts: Sequence[Shift] = self.load_shifts(employee.id, period)
            if cutoff is not None:
                shifts = [s for s in shifts if s.calendar_date <= cutoff]
            return self._calculator.calculate(employee, contract, shifts, period)

    def calculate_month(self, period: PayPeriod, cutoff: date | None = None) -> PayrollRun:
        """Pay for every employee in the store, ordered by name."""
        employees = sorted(self.load_employees(), key=lambda e: (e.name, e.id))
        results = tuple(self._calculate(e, period, cutoff) for e in employees)
        run = PayrollRun(
            period=period,
            results=results,
            cutoff=cutoff,
            totals=totals_by_classification(results),
        )
        logger.info(
            "payroll_run_completed",
            extra={
                "period": period.key,
                "employees": len(results),
                "cutoff": cutoff,
                "gross_pay": str(run.gross_pay),
                "net_pay": str(run.net_pay),
            },
        )
        return run

    def calculate_expected_to_date(self, as_of: date | None = None) -> PayrollRun:
        """
        Expected pay for the month containing ``as_of`` (default: today),
        counting only shifts worked up to and including that day.
        """
        cutoff = as_of or self._clock.today()
        return self.calculate_month(PayPeriod.of(cutoff), cutoff=cutoff)
