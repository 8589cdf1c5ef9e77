#!/usr/bin/env python3
"""Show budget items projected to run out within the low-stock window."""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from budget_dashboard import reports
from budget_dashboard.formatting import STOCK_LOW, format_amount
from budget_dashboard.projection import LOW_STOCK_THRESHOLD_DAYS
from budget_dashboard.storage import BudgetStorage


def main(directory: Path, as_of: date) -> None:
    budgets = BudgetStorage(directory).load_all()
    if not budgets:
        print(f"No budgets found in {directory}")
        return

    print(f"Items with {LOW_STOCK_THRESHOLD_DAYS} or fewer days of supply on {as_of.isoformat()}:")
    found = False
    for name, budget in budgets.items():
        balances = reports.item_balance_frame(budget, as_of)
        if balances.empty:
            continue
        low = balances[balances['Stock'] == STOCK_LOW]
        for _, row in low.iterrows():
            found = True
            print(
                f"  {budget.label} ({name}): {row['Item']} - "
                f"{format_amount(row['Remaining Qty'])} left, {int(row['Days Left'])} days"
            )

    if not found:
        print("  none 🎉")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Show items running low on projected stock.')
    parser.add_argument('--dir', type=Path, default=None, help='Directory of budget JSON files')
    parser.add_argument('--date', type=date.fromisoformat, default=None, help='Reference date (YYYY-MM-DD)')
    args = parser.parse_args()
    storage_dir = args.dir or BudgetStorage().budgets_dir
    main(storage_dir, args.date or date.today())
