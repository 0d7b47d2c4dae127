#!/usr/bin/env python3
"""
Compute a month of payroll from a YAML fixture and print the results as JSON.

The fixture holds three lists mirroring the store collections
(``employees``, ``contracts``, ``schedules``); each item is a document with
an ``id`` plus the camelCase fields the scheduling application stores.

Usage:
    python3 scripts/demo_payroll.py
    python3 scripts/demo_payroll.py --period 2025-03
    python3 scripts/demo_payroll.py --expected-to 2025-03-18   # pay so far
    python3 scripts/demo_payroll.py --summary                  # totals only
"""

import argparse
import dataclasses
import json
import logging
import sys
from datetime import date
from decimal import Decimal
from enum import Enum
from pathlib import Path

import yaml

# ---------------------------------------------------------------------------
# Project root on sys.path
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

DEFAULT_FIXTURE = Path(__file__).resolve().parent / "fixtures" / "sample_month.yaml"


def _jsonable(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Not JSON serializable: {type(value).__name__}")


def load_fixture(path: Path):
    """Fill an in-memory store from the fixture file."""
    from payroll_services.store import CONTRACTS, EMPLOYEES, SCHEDULES, InMemoryDocumentStore

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    store = InMemoryDocumentStore()
    for collection in (EMPLOYEES, CONTRACTS, SCHEDULES):
        for doc in data.get(collection) or []:
            doc = dict(doc)
            store.create(collection, doc, doc_id=str(doc.pop("id")))
    return store, data.get("period")


def main() -> int:
    parser = argparse.ArgumentParser(description="Monthly payroll demo")
    parser.add_argument("--fixture", type=Path, default=DEFAULT_FIXTURE)
    parser.add_argument("--period", help="Month to compute, YYYY-MM (default: fixture period)")
    parser.add_argument(
        "--expected-to",
        type=date.fromisoformat,
        help="Only count shifts up to this date (YYYY-MM-DD)",
    )
    parser.add_argument("--rules-dir", type=Path, help="Override rule set directory")
    parser.add_argument("--summary", action="store_true", help="Print totals only")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    from payroll_config import get_active_rules
    from payroll_engines import PayrollCalculator
    from payroll_kernel.exceptions import PayrollKernelError
    from payroll_kernel.logging_config import configure_logging
    from payroll_modules.workforce import PayPeriod
    from payroll_services import PayrollService

    configure_logging(level=getattr(logging, args.log_level.upper(), logging.WARNING), stream=sys.stderr)

    if not args.fixture.exists():
        print(f"  Fixture not found: {args.fixture}", file=sys.stderr)
        return 1

    store, fixture_period = load_fixture(args.fixture)

    try:
        if args.expected_to:
            period = PayPeriod.of(args.expected_to)
        else:
            period = PayPeriod.parse(args.period or str(fixture_period))
        rules = get_active_rules(period.end, args.rules_dir)
    except (PayrollKernelError, ValueError) as exc:
        print(f"  {exc}", file=sys.stderr)
        return 1

    service = PayrollService(store, calculator=PayrollCalculator(rules))
    if args.expected_to:
        run = service.calculate_expected_to_date(args.expected_to)
    else:
        run = service.calculate_month(period)

    if args.summary:
        payload = {
            "period": run.period.key,
            "cutoff": run.cutoff,
            "rule_set_id": rules.rule_set_id,
            "gross_pay": run.gross_pay,
            "net_pay": run.net_pay,
            "totals": {k: dataclasses.asdict(v) for k, v in run.totals.items()},
        }
    else:
        payload = {
            "period": run.period.key,
            "cutoff": run.cutoff,
            "rule_set_id": rules.rule_set_id,
            "results": [dataclasses.asdict(r) for r in run.results],
        }

    print(json.dumps(payload, ensure_ascii=False, indent=2, default=_jsonable))
    return 0


if __name__ == "__main__":
    sys.exit(main())
