"""
Statistics Aggregator

DESIGN DECISION: Every statistic is a pure function of a project list
and "now". Nothing here reads storage or the system clock, so the
screens can recompute on every read and tests can pin exact month
boundaries.

Numbers shown:
- Category totals (Fabric / Wigs / Design; "Other" is only in total spend)
- Monthly totals over a trailing 6-month window, zero-filled
- Peak month and average monthly spend (always over 6 months)
- Budget change of this month's events vs last month's
"""

import calendar
import math
from collections.abc import Iterable, Sequence
from datetime import datetime
from decimal import Decimal
from typing import Optional

from cosplay_planner.models.project import ExpenseCategory, Project
from cosplay_planner.models.statistics import (
    CategoryShare,
    CategoryTotal,
    GeneralStatistics,
    MonthlyTotal,
    ProjectStatsRow,
)


MONTH_WINDOW = 6

# Legend order of the category chart
CHART_CATEGORIES: tuple[tuple[ExpenseCategory, str], ...] = (
    (ExpenseCategory.FABRIC_OUTFIT, "Fabric"),
    (ExpenseCategory.WIG_HAIR, "Wigs"),
    (ExpenseCategory.DESIGN_PAINT, "Design"),
)

_ZERO = Decimal("0")


# =============================================================================
# TOTALS
# =============================================================================

def total_spend(projects: Iterable[Project]) -> Decimal:
    return sum((p.total_spent for p in projects), _ZERO)


def total_budget(projects: Iterable[Project]) -> Decimal:
    """Sum of parsed budgets; unparseable budgets count as zero."""
    return sum((p.total_budget for p in projects), _ZERO)


def category_totals(projects: Iterable[Project]) -> list[CategoryTotal]:
    sums = {category: _ZERO for category, _ in CHART_CATEGORIES}
    for project in projects:
        for expense in project.expenses:
            if expense.category in sums:
                sums[expense.category] += expense.amount

    return [
        CategoryTotal(category=category, label=label, amount=sums[category])
        for category, label in CHART_CATEGORIES
    ]


def category_shares(totals: Sequence[CategoryTotal]) -> list[CategoryShare]:
    """
    Donut slices as cumulative fractions of the charted total.

    Empty categories get no slice; an all-zero chart has none at all.
    """
    overall = sum((t.amount for t in totals), _ZERO)
    if overall <= 0:
        return []

    shares = []
    running = _ZERO
    for total in totals:
        start = running / overall
        running += total.amount
        if total.amount > 0:
            shares.append(
                CategoryShare(
                    category=total.category,
                    start=float(start),
                    end=float(running / overall),
                )
            )
    return shares


# =============================================================================
# MONTHLY
# =============================================================================

def _shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def month_label(month: int) -> str:
    return calendar.month_abbr[month].upper()


def monthly_totals(projects: Iterable[Project], now: datetime) -> list[MonthlyTotal]:
    """
    Spend per month for the 6 months ending with the current one.

    Expenses are bucketed by their own date, not the event date.
    Ordered oldest to newest.
    """
    buckets: dict[int, Decimal] = {}
    months: list[tuple[int, int]] = []
    for offset in range(-(MONTH_WINDOW - 1), 1):
        year, month = _shift_month(now.year, now.month, offset)
        months.append((year, month))
        buckets[year * 100 + month] = _ZERO

    for project in projects:
        for expense in project.expenses:
            key = expense.date.year * 100 + expense.date.month
            if key in buckets:
                buckets[key] += expense.amount

    return [
        MonthlyTotal(
            year=year,
            month=month,
            label=month_label(month),
            amount=buckets[year * 100 + month],
        )
        for year, month in months
    ]


def peak_month(monthly: Sequence[MonthlyTotal]) -> Optional[MonthlyTotal]:
    """Month with the highest spend; the earliest one wins a tie."""
    peak = None
    for entry in monthly:
        if peak is None or entry.amount > peak.amount:
            peak = entry
    return peak


def average_monthly(monthly: Sequence[MonthlyTotal]) -> Decimal:
    if not monthly:
        return _ZERO
    return sum((m.amount for m in monthly), _ZERO) / len(monthly)


def chart_axis_max(monthly: Sequence[MonthlyTotal]) -> Decimal:
    """Top of the bar chart axis: the peak rounded up to the next 100."""
    highest = max((m.amount for m in monthly), default=_ZERO)
    return Decimal(math.ceil(highest / 100) * 100)


# =============================================================================
# BUDGET CHANGE
# =============================================================================

def _budget_for_month(projects: Iterable[Project], year: int, month: int) -> Decimal:
    return sum(
        (
            p.total_budget
            for p in projects
            if p.event_date.year == year and p.event_date.month == month
        ),
        _ZERO,
    )


def budget_change_text(projects: Sequence[Project], now: datetime) -> str:
    """
    Budget of events this month compared with last month.

    "+100% vs last month" when last month had nothing but this month
    does, "No change" when both are empty.
    """
    current = _budget_for_month(projects, now.year, now.month)
    prev_year, prev_month = _shift_month(now.year, now.month, -1)
    previous = _budget_for_month(projects, prev_year, prev_month)

    if previous == 0:
        return "+100% vs last month" if current > 0 else "No change"

    change = (current - previous) / previous * 100
    sign = "+" if change >= 0 else ""
    return f"{sign}{change:.0f}% vs last month"


# =============================================================================
# SCREENS
# =============================================================================

def general_statistics(projects: Sequence[Project], now: datetime) -> GeneralStatistics:
    monthly = monthly_totals(projects, now)
    return GeneralStatistics(
        project_count=len(projects),
        total_spend=total_spend(projects),
        total_budget=total_budget(projects),
        budget_change_text=budget_change_text(projects, now),
        categories=category_totals(projects),
        monthly=monthly,
        peak_month=peak_month(monthly),
        average_monthly=average_monthly(monthly),
    )


def project_statistics(
    active: Iterable[Project],
    archived: Iterable[Project] = (),
) -> list[ProjectStatsRow]:
    """One row per project, active ones first."""
    rows = []
    for is_archived, projects in ((False, active), (True, archived)):
        for project in projects:
            rows.append(
                ProjectStatsRow(
                    project_id=project.id,
                    project_name=project.project_name,
                    event_name=project.event_name,
                    budget=project.budget,
                    spent=project.total_spent,
                    progress=int(project.completion_percentage),
                    status=project.status,
                    is_archived=is_archived,
                )
            )
    return rows
