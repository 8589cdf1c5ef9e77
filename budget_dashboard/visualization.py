"""Plotly visualisation helpers for the budget dashboard.

Each function accepts one of the DataFrames produced by
:mod:`budget_dashboard.reports` (or :func:`~budget_dashboard.projection.depletion_schedule`)
and returns a `plotly.graph_objects.Figure` that Streamlit can render via
``st.plotly_chart``.  Empty input gives an empty figure titled
"No data to display" rather than an error.
"""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .projection import LOW_STOCK_THRESHOLD_DAYS

OVERALL_COLORS = {
    "Allocated": "#4CAF50",
    "Utilized": "#F44336",
    "Remaining to Allocate": "#2196F3",
}


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_overall_chart(overall: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Bar chart of allocated, utilized and unallocated money.

    Parameters
    ----------
    overall : pandas.DataFrame
        Output of :func:`budget_dashboard.reports.overall_breakdown`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Bar chart with one bar per metric.
    """
    if overall.empty:
        return _empty_figure()
    fig = px.bar(
        overall,
        x="Metric",
        y="Amount",
        color="Metric",
        color_discrete_map=OVERALL_COLORS,
    )
    fig.update_layout(
        title=title or "Overall budget",
        xaxis_title="",
        yaxis_title="Amount",
        yaxis_tickformat=",.2f",
        showlegend=False,
    )
    return fig


def create_category_pie_chart(categories: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Pie chart of the allocation entered for each category.

    Categories with no positive allocation are left out of the pie.

    Parameters
    ----------
    categories : pandas.DataFrame
        Output of :func:`budget_dashboard.reports.category_allocation_frame`.
    title : str, optional
        Chart title.
    """
    if categories.empty:
        return _empty_figure()
    df = categories[categories["Allocated"] > 0]
    if df.empty:
        return _empty_figure()
    fig = px.pie(df, names="Category", values="Allocated")
    fig.update_traces(texttemplate="%{label}<br>%{percent:.2%}")
    fig.update_layout(title=title or "Category allocation")
    return fig


def create_item_allocation_chart(items: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Horizontal grouped bars of allocated vs utilized per item."""
    if items.empty:
        return _empty_figure()
    long_df = items.melt(
        id_vars=["Item"],
        value_vars=["Allocated", "Utilized"],
        var_name="Measure",
        value_name="Amount",
    )
    fig = px.bar(
        long_df,
        x="Amount",
        y="Item",
        color="Measure",
        orientation="h",
        barmode="group",
        color_discrete_map={"Allocated": OVERALL_COLORS["Allocated"], "Utilized": OVERALL_COLORS["Utilized"]},
    )
    fig.update_layout(
        title=title or "Item allocation vs utilization",
        xaxis_title="Amount",
        yaxis_title="",
        xaxis_tickformat=",.2f",
        height=max(300, len(items) * 50),
    )
    return fig


def create_depletion_chart(
    schedule: pd.DataFrame,
    daily_quantity: float | None = None,
    title: str | None = None,
) -> go.Figure:
    """Line chart of projected remaining quantity over a consumption plan.

    Parameters
    ----------
    schedule : pandas.DataFrame
        Output of :func:`budget_dashboard.projection.depletion_schedule`.
    daily_quantity : float, optional
        When given, a dashed line marks the low-stock level
        (stock under it lasts at most ``LOW_STOCK_THRESHOLD_DAYS`` whole
        days).
    title : str, optional
        Chart title.
    """
    if schedule.empty:
        return _empty_figure()
    fig = px.line(schedule, x="date", y="remaining_quantity", markers=len(schedule) <= 60)
    if daily_quantity:
        fig.add_hline(
            y=daily_quantity * (LOW_STOCK_THRESHOLD_DAYS + 1),
            line_dash="dash",
            line_color="#F44336",
            annotation_text="Low stock",
        )
    fig.update_layout(
        title=title or "Projected remaining quantity",
        xaxis_title="Date",
        yaxis_title="Remaining quantity",
    )
    return fig
