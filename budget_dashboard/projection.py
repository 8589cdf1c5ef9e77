"""Linear consumption projection for budget items.

An item with a consumption plan is assumed to be used up at a constant
``daily_quantity`` from the plan's first day.  The projection estimates
what is left on a given day; it does not look at recorded transactions.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional, Union

import numpy as np
import pandas as pd

from .allocation import resolve_allocated_amount
from .models import BudgetItem
from .periods import compute_period_progress

logger = logging.getLogger(__name__)

# Days of supply at or below which an item is flagged as running low.
LOW_STOCK_THRESHOLD_DAYS = 3

SCHEDULE_COLUMNS = ['date', 'day', 'consumed', 'remaining_quantity', 'remaining_amount']


def round2(value: float) -> float:
    """Round half up to two decimals (``0.125 -> 0.13``, ``-0.004 -> 0.0``)."""
    return math.floor(value * 100 + 0.5) / 100


def is_low_stock(days_left: Optional[int]) -> bool:
    return days_left is not None and days_left <= LOW_STOCK_THRESHOLD_DAYS


@dataclass(frozen=True)
class DynamicBalance:
    quantity: float
    amount: float
    price: float
    days_passed: int
    days_left: Optional[int]
    low_stock_warning: bool
    total_days: int
    consumption_progress: float
    balance_percentage: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def effective_daily_quantity(item: BudgetItem) -> float:
    """Daily draw-down rate of an item that has a consumption plan."""
    daily = item.consumption_plan.daily_quantity
    # A missing or zero rate falls back to one unit per day.
    return daily if daily else 1.0


def is_projectable(item: BudgetItem) -> bool:
    """Whether an item has enough data for :func:`project_balance`."""
    plan = item.consumption_plan
    if plan is None or plan.start_date is None or plan.end_date is None:
        return False
    return bool(item.allocated_quantity)


def project_balance(item: BudgetItem, now: Union[date, datetime, str]) -> Optional[DynamicBalance]:
    """Estimate the remaining stock of an item at ``now``.

    Args:
        item: Budget item with a consumption plan and an allocated quantity
        now: Reference moment supplied by the caller

    Returns:
        DynamicBalance, or None when the item has no plan, no plan dates or
        no allocated quantity (manual-amount items cannot be projected)

    Example:
        30 units at 2.00, one unit a day from day 0 to day 29, checked on
        day 9: ten days have passed, leaving 20 units worth 40.00 and 20
        days of supply.
    """
    if not is_projectable(item):
        return None

    plan = item.consumption_plan
    progress = compute_period_progress(plan.start_date, plan.end_date, now)
    total_days = progress.total_days
    passed = max(0, min(progress.current_day, total_days))

    daily_qty = effective_daily_quantity(item)
    consumed = daily_qty * passed
    remaining_qty = round2(max(0.0, item.allocated_quantity - consumed))

    price = item.price_per_unit or 0.0
    remaining_amount = round2(remaining_qty * price)

    days_left = math.floor(remaining_qty / daily_qty) if daily_qty > 0 else None

    consumption_progress = min(100.0, passed / total_days * 100) if total_days > 0 else 0.0
    allocated = resolve_allocated_amount(item)
    balance_percentage = min(100.0, remaining_amount / allocated * 100) if allocated > 0 else 0.0

    return DynamicBalance(
        quantity=remaining_qty,
        amount=remaining_amount,
        price=price,
        days_passed=passed,
        days_left=days_left,
        low_stock_warning=is_low_stock(days_left),
        total_days=total_days,
        consumption_progress=consumption_progress,
        balance_percentage=balance_percentage,
    )


def depletion_schedule(item: BudgetItem) -> pd.DataFrame:
    """Day-by-day remaining stock over the whole consumption plan.

    Row ``n`` is the state at the end of plan day ``n`` and matches what
    :func:`project_balance` reports when ``now`` falls on that day.

    Returns:
        DataFrame with columns: date, day, consumed, remaining_quantity,
        remaining_amount.  Empty when the item cannot be projected or the
        plan covers no days.
    """
    if not is_projectable(item):
        return pd.DataFrame(columns=SCHEDULE_COLUMNS)

    plan = item.consumption_plan
    total_days = compute_period_progress(plan.start_date, plan.end_date, plan.start_date).total_days
    if total_days <= 0:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS)

    daily_qty = effective_daily_quantity(item)
    price = item.price_per_unit or 0.0

    days = np.arange(1, total_days + 1)
    consumed = daily_qty * days
    remaining = np.floor(np.maximum(0.0, item.allocated_quantity - consumed) * 100 + 0.5) / 100
    amount = np.floor(remaining * price * 100 + 0.5) / 100

    return pd.DataFrame({
        'date': pd.date_range(pd.Timestamp(plan.start_date), periods=total_days, freq='D'),
        'day': days,
        'consumed': consumed,
        'remaining_quantity': remaining,
        'remaining_amount': amount,
    })
