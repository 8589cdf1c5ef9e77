"""Budget document model.

Dataclasses mirroring the budget JSON returned by ``GET /api/budgets/:id``.
Every ``from_dict`` constructor is tolerant: documents that are half
filled in while the user is still editing must load without raising, so
missing or malformed values become ``None`` (or an empty list) instead.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from .periods import coerce_moment

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


def to_float(value: Any) -> Optional[float]:
    """Read a numeric field that may arrive as a number, a string or nothing."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        logger.debug("Ignoring non-numeric value %r", value)
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _to_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _first(data: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _records(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, dict)]


@dataclass
class Period:
    start_date: Optional[DateLike] = None
    end_date: Optional[DateLike] = None

    @property
    def is_complete(self) -> bool:
        return self.start_date is not None and self.end_date is not None

    @classmethod
    def from_dict(cls, data: Any) -> "Period":
        if not isinstance(data, dict):
            return cls()
        return cls(
            start_date=coerce_moment(_first(data, 'startDate', 'start_date')),
            end_date=coerce_moment(_first(data, 'endDate', 'end_date')),
        )


@dataclass
class ConsumptionPlan:
    """Planned daily draw-down of an item over an inclusive date range."""

    start_date: Optional[DateLike] = None
    end_date: Optional[DateLike] = None
    daily_quantity: Optional[float] = None
    unit: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["ConsumptionPlan"]:
        if not isinstance(data, dict):
            return None
        return cls(
            start_date=coerce_moment(_first(data, 'startDate', 'start_date')),
            end_date=coerce_moment(_first(data, 'endDate', 'end_date')),
            daily_quantity=to_float(data.get('daily_quantity')),
            unit=_to_text(data.get('unit')),
        )


@dataclass
class Subcategory:
    id: Optional[str] = None
    name: Optional[str] = None
    allocated_amount: Optional[float] = None
    utilized_amount: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Subcategory":
        return cls(
            id=_to_text(_first(data, 'id', '_id')),
            name=_to_text(data.get('name')),
            allocated_amount=to_float(_first(data, 'allocatedAmount', 'allocated_amount')),
            utilized_amount=to_float(_first(data, 'utilizedAmount', 'utilized_amount')),
        )


@dataclass
class Category(Subcategory):
    """Top-level category.

    ``allocated_amount`` is entered by the user independently of the items
    filed under the category; it is not derived from them.
    """

    subcategories: List[Subcategory] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        base = Subcategory.from_dict(data)
        return cls(
            id=base.id,
            name=base.name,
            allocated_amount=base.allocated_amount,
            utilized_amount=base.utilized_amount,
            subcategories=[Subcategory.from_dict(sub) for sub in _records(data.get('subcategories'))],
        )


@dataclass
class BudgetItem:
    """A product allocated into a budget.

    Exactly one allocation mode is expected to be filled in: either
    ``allocated_quantity`` and ``price_per_unit``, or
    ``manual_allocated_amount``.  Stale documents may carry both.
    """

    budget_item_id: Optional[str] = None
    product_id: Optional[str] = None
    item_name: Optional[str] = None
    unit: Optional[str] = None
    notes: Optional[str] = None
    category_id: Optional[str] = None
    subcategory_id: Optional[str] = None
    allocated_quantity: Optional[float] = None
    price_per_unit: Optional[float] = None
    manual_allocated_amount: Optional[float] = None
    allocated_amount: Optional[float] = None
    utilized_amount: Optional[float] = None
    consumption_plan: Optional[ConsumptionPlan] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BudgetItem":
        return cls(
            budget_item_id=_to_text(_first(data, 'budgetItemId', '_id', 'id')),
            product_id=_to_text(data.get('product_id')),
            item_name=_to_text(data.get('item_name')),
            unit=_to_text(data.get('unit')),
            notes=_to_text(data.get('notes')),
            category_id=_to_text(data.get('category_id')),
            subcategory_id=_to_text(data.get('subcategory_id')),
            allocated_quantity=to_float(data.get('allocated_quantity')),
            price_per_unit=to_float(data.get('price_per_unit')),
            manual_allocated_amount=to_float(data.get('manual_allocated_amount')),
            allocated_amount=to_float(data.get('allocated_amount')),
            utilized_amount=to_float(_first(data, 'utilizedAmount', 'utilized_amount')),
            consumption_plan=ConsumptionPlan.from_dict(data.get('consumption_plan')),
        )

    @property
    def label(self) -> str:
        return self.item_name or self.product_id or self.budget_item_id or 'Unnamed item'


@dataclass
class Budget:
    budget_id: Optional[str] = None
    budget_name: Optional[str] = None
    overall_budget_amount: Optional[float] = None
    overall_allocated_amount: Optional[float] = None
    overall_utilized_amount: Optional[float] = None
    period: Period = field(default_factory=Period)
    categories: List[Category] = field(default_factory=list)
    budget_items: List[BudgetItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Budget":
        """Build a budget from the API document.

        Args:
            data: Decoded JSON object.  Non-dict input gives an empty budget.

        Returns:
            Budget with nested categories, items and consumption plans

        Example:
            >>> budget = Budget.from_dict({'overallBudgetAmount': '1000', 'budgetItems': []})
            >>> budget.overall_budget_amount
            1000.0
        """
        if not isinstance(data, dict):
            logger.debug("Budget document is %s, not an object", type(data).__name__)
            return cls()
        return cls(
            budget_id=_to_text(_first(data, '_id', 'id', 'budgetId')),
            budget_name=_to_text(_first(data, 'budgetName', 'name')),
            overall_budget_amount=to_float(data.get('overallBudgetAmount')),
            overall_allocated_amount=to_float(data.get('overallAllocatedAmount')),
            overall_utilized_amount=to_float(data.get('overallUtilizedAmount')),
            period=Period.from_dict(data.get('period')),
            categories=[Category.from_dict(entry) for entry in _records(data.get('categories'))],
            budget_items=[BudgetItem.from_dict(entry) for entry in _records(data.get('budgetItems'))],
        )

    @property
    def label(self) -> str:
        return self.budget_name or self.budget_id or 'Untitled budget'
