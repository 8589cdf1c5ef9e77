"""Unit tests for budget_dashboard.projection."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pandas as pd

from budget_dashboard.models import BudgetItem, ConsumptionPlan
from budget_dashboard.projection import (
    LOW_STOCK_THRESHOLD_DAYS,
    depletion_schedule,
    is_low_stock,
    project_balance,
    round2,
)

DAY0 = date(2024, 3, 1)


def day(n: int) -> date:
    return DAY0 + timedelta(days=n)


def _rice(**overrides) -> BudgetItem:
    plan = ConsumptionPlan(start_date=day(0), end_date=day(29), daily_quantity=1, unit='kg')
    fields = dict(item_name='Rice', allocated_quantity=30, price_per_unit=2, consumption_plan=plan)
    fields.update(overrides)
    return BudgetItem(**fields)


def test_ten_days_into_a_thirty_day_plan() -> None:
    balance = project_balance(_rice(), day(9))
    assert balance.days_passed == 10
    assert balance.quantity == 20
    assert balance.amount == 40.00
    assert balance.price == 2
    assert balance.days_left == 20
    assert balance.low_stock_warning is False


def test_two_days_of_supply_left_is_low_stock() -> None:
    balance = project_balance(_rice(), day(27))
    assert balance.days_passed == 28
    assert balance.quantity == 2
    assert balance.days_left == 2
    assert balance.low_stock_warning is True


def test_no_plan_or_no_quantity_is_not_projectable() -> None:
    assert project_balance(BudgetItem(allocated_quantity=30, price_per_unit=2), day(3)) is None
    assert project_balance(_rice(allocated_quantity=None, manual_allocated_amount=60), day(3)) is None
    assert project_balance(_rice(allocated_quantity=0), day(3)) is None
    assert project_balance(_rice(consumption_plan=ConsumptionPlan(daily_quantity=1)), day(3)) is None


def test_remaining_quantity_never_increases_over_time() -> None:
    item = _rice(allocated_quantity=17.5, consumption_plan=ConsumptionPlan(
        start_date=day(0), end_date=day(20), daily_quantity=0.75,
    ))
    previous = None
    for offset in range(-5, 30):
        quantity = project_balance(item, day(offset)).quantity
        if previous is not None:
            assert quantity <= previous
        previous = quantity


def test_before_the_plan_nothing_is_consumed() -> None:
    balance = project_balance(_rice(), day(-3))
    assert balance.days_passed == 0
    assert balance.quantity == 30
    assert balance.consumption_progress == 0.0


def test_after_the_plan_consumption_stops_at_total_days() -> None:
    balance = project_balance(_rice(allocated_quantity=40), day(60))
    assert balance.days_passed == 30
    assert balance.quantity == 10
    assert balance.consumption_progress == 100.0


def test_remaining_quantity_is_floored_at_zero() -> None:
    balance = project_balance(_rice(allocated_quantity=5), day(15))
    assert balance.quantity == 0
    assert balance.amount == 0
    assert balance.days_left == 0
    assert balance.low_stock_warning is True


def test_missing_daily_quantity_defaults_to_one_per_day() -> None:
    for daily in (None, 0):
        plan = ConsumptionPlan(start_date=day(0), end_date=day(29), daily_quantity=daily)
        balance = project_balance(_rice(consumption_plan=plan), day(9))
        assert balance.quantity == 20
        assert balance.days_left == 20


def test_missing_price_values_stock_at_zero() -> None:
    balance = project_balance(_rice(price_per_unit=None), day(9))
    assert balance.price == 0
    assert balance.amount == 0
    assert balance.quantity == 20


def test_fractional_quantities_are_rounded_to_cents() -> None:
    item = _rice(allocated_quantity=10, price_per_unit=1.5, consumption_plan=ConsumptionPlan(
        start_date=day(0), end_date=day(9), daily_quantity=0.1,
    ))
    balance = project_balance(item, day(2))
    assert balance.quantity == 9.7
    assert balance.amount == 14.55
    assert balance.days_left == 96


def test_progress_and_balance_percentages() -> None:
    balance = project_balance(_rice(), day(14))
    assert balance.total_days == 30
    assert balance.consumption_progress == 50.0
    assert balance.balance_percentage == 50.0


def test_datetime_now_counts_partial_days() -> None:
    balance = project_balance(_rice(), datetime(2024, 3, 10, 8, 30))
    assert balance.days_passed == 11


def test_projection_is_repeatable() -> None:
    item = _rice()
    assert project_balance(item, day(12)) == project_balance(item, day(12))


def test_low_stock_threshold() -> None:
    assert LOW_STOCK_THRESHOLD_DAYS == 3
    assert is_low_stock(3)
    assert is_low_stock(0)
    assert not is_low_stock(4)
    assert not is_low_stock(None)


def test_round2_rounds_half_up() -> None:
    assert round2(0.125) == 0.13
    assert round2(2.5) == 2.5
    assert round2(-0.004) == 0.0
    assert round2(19.999) == 20.0


def test_depletion_schedule_matches_projection() -> None:
    item = _rice()
    schedule = depletion_schedule(item)

    assert list(schedule.columns) == ['date', 'day', 'consumed', 'remaining_quantity', 'remaining_amount']
    assert len(schedule) == 30
    assert schedule['date'].iloc[0] == pd.Timestamp(day(0))
    assert schedule['date'].iloc[-1] == pd.Timestamp(day(29))
    for offset in (0, 9, 27, 29):
        row = schedule.iloc[offset]
        balance = project_balance(item, day(offset))
        assert row['remaining_quantity'] == balance.quantity
        assert row['remaining_amount'] == balance.amount


def test_depletion_schedule_empty_when_not_projectable() -> None:
    assert depletion_schedule(BudgetItem(manual_allocated_amount=10)).empty
    inverted = ConsumptionPlan(start_date=day(5), end_date=day(1), daily_quantity=1)
    assert depletion_schedule(_rice(consumption_plan=inverted)).empty
