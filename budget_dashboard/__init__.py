"""Top‑level package for the Budget Dashboard.

This file makes the directory a Python package and exposes the
projection and aggregation engine.  The primary modules are:

* ``periods`` – inclusive day counting for budget and plan timelines
* ``projection`` – linear consumption projection of item stock
* ``allocation`` / ``rollup`` – item allocations and budget totals
* ``formatting`` – display rounding and stock classification
* ``dashboard`` – a Streamlit app that ties everything together

To run the dashboard from the command line you can execute:

```bash
streamlit run budget_dashboard/dashboard.py
```

The Streamlit app is not imported here, so the engine can be used
without Streamlit being loaded.
"""

from .allocation import allocation_mode, resolve_allocated_amount
from .formatting import classify_stock, format_amount
from .models import Budget, BudgetItem, Category, ConsumptionPlan, Period, Subcategory
from .periods import PeriodProgress, compute_period_progress
from .projection import LOW_STOCK_THRESHOLD_DAYS, DynamicBalance, project_balance
from .rollup import BudgetTotals, rollup_budget

__all__ = [
    "Budget",
    "BudgetItem",
    "BudgetTotals",
    "Category",
    "ConsumptionPlan",
    "DynamicBalance",
    "LOW_STOCK_THRESHOLD_DAYS",
    "Period",
    "PeriodProgress",
    "Subcategory",
    "allocation_mode",
    "classify_stock",
    "compute_period_progress",
    "format_amount",
    "project_balance",
    "resolve_allocated_amount",
    "rollup_budget",
]
