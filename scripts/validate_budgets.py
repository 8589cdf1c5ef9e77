#!/usr/bin/env python3
"""Lightweight validator for exported budget documents.

Reports the data problems that the engine tolerates silently: inverted
periods, items without an allocation, items with both allocation modes
filled in, and consumption plans that cannot be projected.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from budget_dashboard.allocation import allocation_mode
from budget_dashboard.config import BUDGETS_DIR
from budget_dashboard.models import Budget
from budget_dashboard.periods import day_span
from budget_dashboard.projection import is_projectable
from budget_dashboard.storage import BudgetDocumentError, load_budget_document


def validate_budget(budget: Budget) -> List[str]:
    errors = []

    period = budget.period
    if not period.is_complete:
        errors.append("period is missing a start or end date")
    elif day_span(period.start_date, period.end_date) < 0:
        errors.append("period ends before it starts")

    for item in budget.budget_items:
        if allocation_mode(item) is None:
            errors.append(f"item '{item.label}' has no allocation")
        elif item.manual_allocated_amount and (item.allocated_quantity or item.price_per_unit):
            errors.append(f"item '{item.label}' has both a manual amount and quantity/price")
        if item.consumption_plan is not None and not is_projectable(item):
            errors.append(f"item '{item.label}' has a consumption plan that cannot be projected")

    return errors


def main(directory: Path) -> int:
    if not directory.exists():
        print(f"Budget directory not found: {directory}")
        return 1

    issues = []
    for path in sorted(directory.glob('*.json')):
        try:
            budget = load_budget_document(path)
        except BudgetDocumentError as exc:
            issues.append((path.name, str(exc)))
            continue
        for message in validate_budget(budget):
            issues.append((path.name, message))

    if issues:
        print("Budget validation failed:")
        for filename, message in issues:
            print(f"  - {filename}: {message}")
        return 1

    print("All budgets validated successfully.")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='Validate exported budget documents.')
    parser.add_argument('--dir', type=Path, default=BUDGETS_DIR, help='Directory of budget JSON files')
    args = parser.parse_args()
    raise SystemExit(main(args.dir))
