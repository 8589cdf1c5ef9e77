"""Allocated amount of a budget item.

An item is allocated in one of two ways: a quantity at a unit price, or a
fixed manual amount.  When a stale document has both filled in, the manual
amount wins.  Items with neither resolve to ``0.0`` so that rollups keep
working while a budget is half edited.
"""

from __future__ import annotations

import logging
from typing import Optional

from .models import BudgetItem

logger = logging.getLogger(__name__)

MANUAL_MODE = 'manual'
QUANTITY_MODE = 'quantity'


def _positive(value: Optional[float]) -> bool:
    return value is not None and value > 0


def allocation_mode(item: BudgetItem) -> Optional[str]:
    """Return ``'manual'``, ``'quantity'`` or ``None`` for an item."""
    if _positive(item.manual_allocated_amount):
        return MANUAL_MODE
    if _positive(item.allocated_quantity) and _positive(item.price_per_unit):
        return QUANTITY_MODE
    return None


def resolve_allocated_amount(item: BudgetItem) -> float:
    """Resolve the money allocated to an item.

    Args:
        item: Budget item in either allocation mode

    Returns:
        The manual amount when set, otherwise quantity * price, otherwise 0.0
    """
    mode = allocation_mode(item)
    if mode == MANUAL_MODE:
        if item.allocated_quantity is not None or item.price_per_unit is not None:
            logger.debug(
                "Item %s has both a manual amount and quantity/price; using the manual amount",
                item.label,
            )
        return float(item.manual_allocated_amount)
    if mode == QUANTITY_MODE:
        return float(item.allocated_quantity * item.price_per_unit)

    logger.debug("Item %s has no valid allocation; counting it as 0", item.label)
    return 0.0
