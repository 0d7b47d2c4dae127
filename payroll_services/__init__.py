"""
payroll_services -- caller layer around the pure payroll engines.

Document-store access, query caching, effective-contract selection and
monthly payroll runs.
"""

from payroll_services.payroll_service import (
    ClassificationTotals,
    PayrollRun,
    PayrollService,
    select_effective_contract,
    totals_by_classification,
)
from payroll_services.query_cache import (
    CacheKeys,
    CacheStats,
    QueryCache,
    invalidate_employee,
    invalidate_schedules,
)
from payroll_services.store import (
    CONTRACTS,
    EMPLOYEES,
    SCHEDULES,
    DocumentStore,
    InMemoryDocumentStore,
)

__all__ = [
    "CONTRACTS",
    "EMPLOYEES",
    "SCHEDULES",
    "CacheKeys",
    "CacheStats",
    "ClassificationTotals",
    "DocumentStore",
    "InMemoryDocumentStore",
    "PayrollRun",
    "PayrollService",
    "QueryCache",
    "invalidate_employee",
    "invalidate_schedules",
    "select_effective_contract",
    "totals_by_classification",
]
