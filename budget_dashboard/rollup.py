"""Budget-level financial totals.

The allocated total is the sum of resolved item allocations.  Category
``allocated_amount`` figures are entered separately by the user and are
left out of it; see :mod:`budget_dashboard.reports` for a side-by-side view.
Negative remainders are kept as they are: they are how over-allocation and
overspending show up.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional, Union

from .allocation import resolve_allocated_amount
from .models import Budget
from .periods import PeriodProgress, compute_period_progress

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BudgetTotals:
    overall_budget_amount: float
    overall_allocated_amount: float
    overall_utilized_amount: float
    remaining_to_allocate: float
    remaining_to_utilize: float
    burn_rate_per_day: float
    total_days: Optional[int] = None
    progress: Optional[PeriodProgress] = None

    @property
    def is_over_allocated(self) -> bool:
        return self.remaining_to_allocate < 0

    @property
    def is_overspent(self) -> bool:
        return self.remaining_to_utilize < 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def period_total_days(budget: Budget) -> Optional[int]:
    """Inclusive day count of the budget period, or None if a date is missing."""
    period = budget.period
    if not period.is_complete:
        return None
    return compute_period_progress(period.start_date, period.end_date, period.start_date).total_days


def rollup_budget(budget: Budget, now: Optional[Union[date, datetime, str]] = None) -> BudgetTotals:
    """Roll item allocations up to budget totals.

    Args:
        budget: Budget document
        now: Optional reference moment; when given together with a complete
            period, the budget timeline is attached as ``progress``

    Returns:
        BudgetTotals with allocated/utilized totals, remainders and the
        daily burn rate over the whole period

    Example:
        >>> budget = Budget.from_dict({
        ...     'overallBudgetAmount': 1000,
        ...     'budgetItems': [{'manual_allocated_amount': 300},
        ...                     {'allocated_quantity': 9, 'price_per_unit': 50}],
        ... })
        >>> rollup_budget(budget).remaining_to_allocate
        250.0
    """
    overall_budget = budget.overall_budget_amount or 0.0
    allocated = float(sum(resolve_allocated_amount(item) for item in budget.budget_items))
    utilized = budget.overall_utilized_amount or 0.0

    total_days = period_total_days(budget)
    burn_rate = utilized / max(total_days if total_days is not None else 1, 1)

    progress = None
    if now is not None and budget.period.is_complete:
        progress = compute_period_progress(budget.period.start_date, budget.period.end_date, now)

    if budget.overall_allocated_amount is not None and abs(budget.overall_allocated_amount - allocated) > 0.005:
        logger.debug(
            "Budget %s stores allocated %.2f but items resolve to %.2f",
            budget.label,
            budget.overall_allocated_amount,
            allocated,
        )

    return BudgetTotals(
        overall_budget_amount=overall_budget,
        overall_allocated_amount=allocated,
        overall_utilized_amount=utilized,
        remaining_to_allocate=overall_budget - allocated,
        remaining_to_utilize=allocated - utilized,
        burn_rate_per_day=burn_rate,
        total_days=total_days,
        progress=progress,
    )
