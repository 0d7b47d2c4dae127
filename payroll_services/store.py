"""
Document store port and in-memory implementation.

Contract:
    DocumentStore holds camelCase documents keyed by id inside named
    collections (``employees``, ``contracts``, ``schedules``).  ``query``
    takes (field, op, value) filters combined with AND and returns
    ``(doc_id, document)`` pairs in insertion order.

Architecture: payroll_services.  The hosted database is an external
collaborator; only this port is modelled here.  InMemoryDocumentStore backs
tests and the demo command.
"""

from __future__ import annotations

import copy
import operator
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable
from uuid import uuid4

from payroll_kernel.exceptions import DocumentNotFoundError
from payroll_kernel.logging_config import get_logger

logger = get_logger("services.store")

EMPLOYEES = "employees"
CONTRACTS = "contracts"
SCHEDULES = "schedules"

Filter = tuple[str, str, Any]

_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "in": lambda value, options: value in options,
}


@runtime_checkable
class DocumentStore(Protocol):
    """Protocol for the document database the payroll service reads."""

    def create(self, collection: str, document: Mapping[str, Any], doc_id: str | None = None) -> str:
        """Store a new document; return its id."""
        ...

    def get(self, collection: str, doc_id: str) -> dict[str, Any]:
        """Return the document or raise DocumentNotFoundError."""
        ...

    def update(self, collection: str, doc_id: str, changes: Mapping[str, Any]) -> None:
        """Merge ``changes`` into an existing document."""
        ...

    def delete(self, collection: str, doc_id: str) -> None:
        """Remove a document; raise DocumentNotFoundError when absent."""
        ...

    def query(
        self, collection: str, filters: Sequence[Filter] = ()
    ) -> list[tuple[str, dict[str, Any]]]:
        """Documents matching every filter."""
        ...


def _matches(document: Mapping[str, Any], filters: Sequence[Filter]) -> bool:
    for field, op, expected in filters:
        compare = _OPERATORS.get(op)
        if compare is None:
            raise ValueError(f"Unsupported filter operator: {op!r}")
        if field not in document:
            return False
        actual = document[field]
        try:
            if not compare(actual, expected):
                return False
        except TypeError:
            return False
    return True


class InMemoryDocumentStore:
    """Dict-backed DocumentStore.  Documents are copied in and out."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}

    def create(self, collection: str, document: Mapping[str, Any], doc_id: str | None = None) -> str:
        doc_id = doc_id or uuid4().hex
        self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(dict(document))
        logger.debug("document_created", extra={"collection": collection, "doc_id": doc_id})
        return doc_id

    def get(self, collection: str, doc_id: str) -> dict[str, Any]:
        try:
            return copy.deepcopy(self._collections[collection][doc_id])
        except KeyError:
            raise DocumentNotFoundError(collection, doc_id) from None

    def update(self, collection: str, doc_id: str, changes: Mapping[str, Any]) -> None:
        docs = self._collections.get(collection, {})
        if doc_id not in docs:
            raise DocumentNotFoundError(collection, doc_id)
        docs[doc_id].update(copy.deepcopy(dict(changes)))

    def delete(self, collection: str, doc_id: str) -> None:
        docs = self._collections.get(collection, {})
        if doc_id not in docs:
            raise DocumentNotFoundError(collection, doc_id)
        del docs[doc_id]

    def query(
        self, collection: str, filters: Sequence[Filter] = ()
    ) -> list[tuple[str, dict[str, Any]]]:
        docs = self._collections.get(collection, {})
        return [
            (doc_id, copy.deepcopy(doc))
            for doc_id, doc in docs.items()
            if _matches(doc, filters)
        ]
