"""Report dataframes for a single budget.

These functions shape a :class:`~budget_dashboard.models.Budget` into the
tables behind the budget report charts and the item balance table.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Union

import pandas as pd

from .allocation import allocation_mode, resolve_allocated_amount
from .formatting import STOCK_LOW, classify_stock
from .models import Budget
from .projection import project_balance
from .rollup import rollup_budget

OVERALL_COLUMNS = ['Metric', 'Amount']
CATEGORY_COLUMNS = [
    'Category ID', 'Category', 'Allocated', 'Utilized', 'Item Allocated', 'Unassigned', 'Subcategories',
]
ITEM_COLUMNS = ['Item', 'Category ID', 'Mode', 'Allocated', 'Utilized', 'Remaining']
BALANCE_COLUMNS = [
    'Item', 'Unit', 'Remaining Qty', 'Remaining Amount', 'Price', 'Days Passed', 'Days Left',
    'Total Days', 'Progress %', 'Balance %', 'Stock',
]


def overall_breakdown(budget: Budget) -> pd.DataFrame:
    """Allocated, utilized and unallocated money for the overview chart.

    Non-positive rows are dropped, so an over-allocated budget shows no
    "Remaining to Allocate" slice.
    """
    totals = rollup_budget(budget)
    frame = pd.DataFrame([
        {'Metric': 'Allocated', 'Amount': totals.overall_allocated_amount},
        {'Metric': 'Utilized', 'Amount': totals.overall_utilized_amount},
        {'Metric': 'Remaining to Allocate', 'Amount': totals.remaining_to_allocate},
    ], columns=OVERALL_COLUMNS)
    return frame[frame['Amount'] > 0].reset_index(drop=True)


def category_allocation_frame(budget: Budget) -> pd.DataFrame:
    """Entered category allocations next to what their items add up to.

    ``Allocated`` is the figure typed in for the category; ``Item Allocated``
    is the sum of resolved allocations of items filed under it.  The two
    are independent and are not reconciled here.

    Returns:
        DataFrame with columns: Category ID, Category, Allocated, Utilized,
        Item Allocated, Unassigned, Subcategories.  ``Unassigned`` is
        Allocated minus Item Allocated.
    """
    item_sums: Dict[str, float] = {}
    for item in budget.budget_items:
        if item.category_id is None:
            continue
        item_sums[item.category_id] = item_sums.get(item.category_id, 0.0) + resolve_allocated_amount(item)

    rows: List[Dict[str, object]] = []
    for category in budget.categories:
        allocated = category.allocated_amount or 0.0
        item_allocated = item_sums.get(category.id, 0.0) if category.id else 0.0
        rows.append({
            'Category ID': category.id,
            'Category': category.name or category.id or 'Uncategorized',
            'Allocated': allocated,
            'Utilized': category.utilized_amount or 0.0,
            'Item Allocated': item_allocated,
            'Unassigned': allocated - item_allocated,
            'Subcategories': len(category.subcategories),
        })
    return pd.DataFrame(rows, columns=CATEGORY_COLUMNS)


def item_allocation_frame(budget: Budget) -> pd.DataFrame:
    """Allocated vs utilized per item, skipping items with no activity."""
    rows = []
    for item in budget.budget_items:
        allocated = resolve_allocated_amount(item)
        utilized = item.utilized_amount or 0.0
        if allocated <= 0 and utilized <= 0:
            continue
        rows.append({
            'Item': item.label,
            'Category ID': item.category_id,
            'Mode': allocation_mode(item),
            'Allocated': allocated,
            'Utilized': utilized,
            'Remaining': allocated - utilized,
        })
    return pd.DataFrame(rows, columns=ITEM_COLUMNS)


def item_balance_frame(budget: Budget, now: Union[date, datetime, str]) -> pd.DataFrame:
    """Projected balance of every item that has a consumption plan.

    Args:
        budget: Budget document
        now: Reference moment, sampled once by the caller for the whole table

    Returns:
        DataFrame with one row per projectable item, low-stock items first
    """
    rows = []
    for item in budget.budget_items:
        balance = project_balance(item, now)
        if balance is None:
            continue
        unit = item.consumption_plan.unit or item.unit
        rows.append({
            'Item': item.label,
            'Unit': unit,
            'Remaining Qty': balance.quantity,
            'Remaining Amount': balance.amount,
            'Price': balance.price,
            'Days Passed': balance.days_passed,
            'Days Left': balance.days_left,
            'Total Days': balance.total_days,
            'Progress %': balance.consumption_progress,
            'Balance %': balance.balance_percentage,
            'Stock': classify_stock(balance.days_left),
        })

    frame = pd.DataFrame(rows, columns=BALANCE_COLUMNS)
    if frame.empty:
        return frame
    frame['_low'] = frame['Stock'] != STOCK_LOW
    frame = frame.sort_values(['_low', 'Days Left'], kind='stable').drop(columns='_low')
    return frame.reset_index(drop=True)
