"""Statistics for the reporting screens."""

from cosplay_planner.reports.aggregator import (
    CHART_CATEGORIES,
    MONTH_WINDOW,
    average_monthly,
    budget_change_text,
    category_shares,
    category_totals,
    chart_axis_max,
    general_statistics,
    monthly_totals,
    peak_month,
    project_statistics,
    total_budget,
    total_spend,
)

__all__ = [
    "CHART_CATEGORIES",
    "MONTH_WINDOW",
    "average_monthly",
    "budget_change_text",
    "category_shares",
    "category_totals",
    "chart_axis_max",
    "general_statistics",
    "monthly_totals",
    "peak_month",
    "project_statistics",
    "total_budget",
    "total_spend",
]
