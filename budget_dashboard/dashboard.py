"""Streamlit app for inspecting a budget document.

The page is read-only: it loads an exported budget (from ``BUDGETS_DIR`` or
an uploaded JSON file), samples the current time once per render and shows
the financial summary, the budget timeline, projected item balances and the
report charts.

To run the dashboard from the command line::

    streamlit run budget_dashboard/dashboard.py
"""

from __future__ import annotations

import os
import sys
from datetime import datetime
from typing import Optional

import streamlit as st

# Conditional imports to support ``streamlit run budget_dashboard/dashboard.py``,
# which executes this file as a script rather than as part of the package.
if __package__:
    from . import reports
    from . import visualization as viz
    from .config import configure_logging
    from .formatting import (
        STOCK_LOW,
        STOCK_OK,
        STOCK_UNKNOWN,
        classify_stock,
        display_days,
        escape_dollar_for_markdown,
        format_currency,
        format_quantity,
        unique_labels,
    )
    from .models import Budget
    from .projection import depletion_schedule, effective_daily_quantity, project_balance
    from .rollup import rollup_budget
    from .storage import BudgetDocumentError, BudgetStorage, parse_budget_document
else:
    CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
    PARENT_DIR = os.path.dirname(CURRENT_DIR)
    if PARENT_DIR not in sys.path:
        sys.path.insert(0, PARENT_DIR)
    from budget_dashboard import reports  # type: ignore
    from budget_dashboard import visualization as viz  # type: ignore
    from budget_dashboard.config import configure_logging  # type: ignore
    from budget_dashboard.formatting import (  # type: ignore
        STOCK_LOW,
        STOCK_OK,
        STOCK_UNKNOWN,
        classify_stock,
        display_days,
        escape_dollar_for_markdown,
        format_currency,
        format_quantity,
        unique_labels,
    )
    from budget_dashboard.models import Budget  # type: ignore
    from budget_dashboard.projection import (  # type: ignore
        depletion_schedule,
        effective_daily_quantity,
        project_balance,
    )
    from budget_dashboard.rollup import rollup_budget  # type: ignore
    from budget_dashboard.storage import (  # type: ignore
        BudgetDocumentError,
        BudgetStorage,
        parse_budget_document,
    )

STOCK_BADGES = {STOCK_OK: '🟢 OK', STOCK_LOW: '🔴 Low', STOCK_UNKNOWN: '⚪ Unknown'}


def select_budget() -> Optional[Budget]:
    """Sidebar controls for choosing a budget file or uploading one."""
    st.sidebar.header("Budget")
    uploaded = st.sidebar.file_uploader("Upload a budget JSON export", type=["json"])
    if uploaded is not None:
        try:
            return parse_budget_document(uploaded.getvalue().decode("utf-8"), source=uploaded.name)
        except (BudgetDocumentError, UnicodeDecodeError) as exc:
            st.error(f"Failed to read {uploaded.name}: {exc}")
            return None

    storage = BudgetStorage()
    names = storage.list_names()
    if not names:
        st.info(f"No budget files found in {storage.budgets_dir}. Upload one from the sidebar.")
        return None
    name = st.sidebar.selectbox("Saved budgets", options=names)
    try:
        return storage.load(name)
    except BudgetDocumentError as exc:
        st.error(str(exc))
        return None


def render_summary(budget: Budget, now: datetime) -> None:
    totals = rollup_budget(budget, now)

    cols = st.columns(3)
    cols[0].metric("Overall Budget", format_currency(totals.overall_budget_amount))
    cols[1].metric("Allocated", format_currency(totals.overall_allocated_amount))
    cols[2].metric("Utilized", format_currency(totals.overall_utilized_amount))

    cols = st.columns(3)
    cols[0].metric("Remaining to Allocate", format_currency(totals.remaining_to_allocate))
    cols[1].metric("Remaining to Utilize", format_currency(totals.remaining_to_utilize))
    cols[2].metric("Budget Burn Rate (Daily)", format_currency(totals.burn_rate_per_day))

    if totals.is_over_allocated:
        st.warning(escape_dollar_for_markdown(
            f"Allocations exceed the budget by {format_currency(-totals.remaining_to_allocate)}."
        ))
    if totals.is_overspent:
        st.warning(escape_dollar_for_markdown(
            f"Spending exceeds allocations by {format_currency(-totals.remaining_to_utilize)}."
        ))

    progress = totals.progress
    if progress is not None:
        st.sidebar.markdown(
            f"**Day {display_days(progress.current_day)} of {display_days(progress.total_days)}** "
            f"({display_days(progress.remaining_days)} remaining)"
        )
        if progress.total_days > 0:
            st.sidebar.progress(min(1.0, display_days(progress.current_day) / progress.total_days))


def render_item_balances(budget: Budget, now: datetime) -> None:
    st.subheader("Item balances")
    balances = reports.item_balance_frame(budget, now)
    if balances.empty:
        st.info("No items have a consumption plan with an allocated quantity.")
        return
    display = balances.copy()
    display['Stock'] = display['Stock'].map(STOCK_BADGES)
    st.dataframe(display, hide_index=True)

    projectable = [item for item in budget.budget_items if project_balance(item, now) is not None]
    labels = unique_labels([item.label for item in projectable])
    choice = st.selectbox(
        "Depletion schedule for",
        options=range(len(projectable)),
        format_func=lambda i: labels[i],
    )
    item = projectable[choice]
    balance = project_balance(item, now)
    unit = item.consumption_plan.unit or item.unit
    st.markdown(
        f"Remaining **{format_quantity(balance.quantity, unit)}** "
        f"({escape_dollar_for_markdown(format_currency(balance.amount))}), "
        f"{display_days(balance.days_left)} days left: {STOCK_BADGES[classify_stock(balance.days_left)]}"
    )
    st.plotly_chart(viz.create_depletion_chart(depletion_schedule(item), effective_daily_quantity(item)))


def main() -> None:
    """Entry point for the Streamlit app."""
    configure_logging()
    st.set_page_config(page_title="Budget Dashboard", layout="wide", initial_sidebar_state="expanded")
    st.title("Budget Dashboard")

    budget = select_budget()
    if budget is None:
        st.stop()

    # Sampled once so every figure on the page agrees on "today".
    now = datetime.now()

    st.header(budget.label)
    render_summary(budget, now)
    render_item_balances(budget, now)

    st.subheader("Reports")
    st.plotly_chart(viz.create_overall_chart(reports.overall_breakdown(budget)))
    categories = reports.category_allocation_frame(budget)
    st.plotly_chart(viz.create_category_pie_chart(categories))
    if not categories.empty:
        st.dataframe(categories, hide_index=True)
    st.plotly_chart(viz.create_item_allocation_chart(reports.item_allocation_frame(budget)))


if __name__ == "__main__":  # pragma: no cover
    main()
