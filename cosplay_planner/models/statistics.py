"""Result models for the statistics screens."""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from cosplay_planner.models.project import ExpenseCategory, ProjectStatus


class CategoryTotal(BaseModel):
    """One slice of the category distribution chart."""

    category: ExpenseCategory
    label: str
    amount: Decimal = Decimal("0")


class CategoryShare(BaseModel):
    """Start and end fractions (0-1) of a donut slice."""

    category: ExpenseCategory
    start: float
    end: float


class MonthlyTotal(BaseModel):
    """Spend for one calendar month."""

    year: int
    month: int = Field(ge=1, le=12)
    label: str
    amount: Decimal = Decimal("0")

    @property
    def sort_key(self) -> int:
        return self.year * 100 + self.month


class GeneralStatistics(BaseModel):
    """Everything the "General" statistics tab shows."""

    project_count: int
    total_spend: Decimal
    total_budget: Decimal
    budget_change_text: str
    categories: list[CategoryTotal]
    monthly: list[MonthlyTotal]
    peak_month: MonthlyTotal
    average_monthly: Decimal


class ProjectStatsRow(BaseModel):
    """One card of the "Projects" statistics tab."""

    project_id: UUID
    project_name: str
    event_name: str
    budget: str
    spent: Decimal
    progress: int = Field(ge=0, le=100)
    status: ProjectStatus
    is_archived: bool = False
