"""Shared pytest fixtures for the budget dashboard tests."""
from __future__ import annotations

import sys
from datetime import date, timedelta
from pathlib import Path

import pytest

# Ensure the repository root (which contains ``budget_dashboard``) is importable.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

DAY0 = date(2024, 3, 1)


def day(n: int) -> date:
    return DAY0 + timedelta(days=n)


@pytest.fixture
def budget_document():
    """A budget as returned by ``GET /api/budgets/:id``."""
    return {
        '_id': 'b-1',
        'budgetName': 'March groceries',
        'overallBudgetAmount': 1000,
        'overallAllocatedAmount': 510,
        'overallUtilizedAmount': 310,
        'period': {'startDate': '2024-03-01T00:00:00.000Z', 'endDate': '2024-03-31T00:00:00.000Z'},
        'categories': [
            {
                'id': 'c-food',
                'name': 'Food',
                'allocatedAmount': 500,
                'utilizedAmount': 200,
                'subcategories': [
                    {'id': 's-dairy', 'name': 'Dairy', 'allocatedAmount': 100, 'utilizedAmount': 40},
                ],
            },
            {'id': 'c-home', 'name': 'Home', 'allocatedAmount': 0, 'utilizedAmount': 0},
        ],
        'budgetItems': [
            {
                'budgetItemId': 'i-rice',
                'product_id': 'p-rice',
                'item_name': 'Rice',
                'unit': 'kg',
                'category_id': 'c-food',
                'allocated_quantity': 30,
                'price_per_unit': 2,
                'manual_allocated_amount': None,
                'utilizedAmount': 60,
                'consumption_plan': {
                    'startDate': '2024-03-01',
                    'endDate': '2024-03-30',
                    'daily_quantity': 1,
                    'unit': 'kg',
                },
            },
            {
                'budgetItemId': 'i-milk',
                'product_id': 'p-milk',
                'item_name': 'Milk',
                'unit': 'l',
                'category_id': 'c-food',
                'subcategory_id': 's-dairy',
                'allocated_quantity': 20,
                'price_per_unit': 1.5,
                'utilizedAmount': 30,
                'consumption_plan': {
                    'startDate': '2024-03-01',
                    'endDate': '2024-03-20',
                    'daily_quantity': 2,
                    'unit': 'l',
                },
            },
            {
                'budgetItemId': 'i-cleaning',
                'product_id': 'p-cleaning',
                'item_name': 'Cleaning supplies',
                'category_id': 'c-home',
                'manual_allocated_amount': 420,
                'utilizedAmount': 220,
            },
        ],
    }
